"""
Pull request parameters out of a Lambda event.

The same function is invoked directly (test events, SDK calls) and behind
API Gateway, where parameters may arrive as query string, headers, or a
JSON body.
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Mapping

logger = logging.getLogger(__name__)

PARAM_NAMES = ("ticker_symbol", "api_key", "limit", "days_forward", "contract_type")


def _scalar(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def extract_parameters(source: Mapping[str, Any], *, fuzzy_keys: bool = False) -> dict[str, str]:
    """
    Pick the recognized parameters out of a mapping.

    With fuzzy_keys, names match case-insensitively and '-' stands for '_'
    (HTTP headers).
    """
    if fuzzy_keys:
        source = {str(k).lower().replace("-", "_"): v for k, v in source.items()}
    params: dict[str, str] = {}
    for name in PARAM_NAMES:
        value = _scalar(source.get(name))
        if value is not None:
            params[name] = value
    return params


def _decode_body(event: Mapping[str, Any]) -> dict[str, Any]:
    body = event.get("body")
    if isinstance(body, dict):
        return body
    if not isinstance(body, str) or not body.strip():
        return {}
    if event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            logger.warning("Could not base64-decode request body")
            return {}
    try:
        parsed = json.loads(body)
    except ValueError:
        logger.warning("Request body is not valid JSON, using defaults")
        return {}
    return parsed if isinstance(parsed, dict) else {}


def request_id_of(event: Mapping[str, Any], context: Any) -> str:
    ctx = event.get("requestContext")
    if isinstance(ctx, dict) and isinstance(ctx.get("requestId"), str):
        return ctx["requestId"]
    rid = getattr(context, "aws_request_id", None)
    return rid if isinstance(rid, str) and rid else "local"


def extract_request(event: Any, context: Any = None) -> tuple[dict[str, str], str]:
    """
    Return (parameters, request_id) for an invocation.

    Sources in order: queryStringParameters, headers, body, then the event
    itself. The first source carrying any recognized parameter wins.
    """
    if not isinstance(event, dict):
        return {}, request_id_of({}, context)

    request_id = request_id_of(event, context)

    query = event.get("queryStringParameters")
    if isinstance(query, dict):
        params = extract_parameters(query)
        if params:
            logger.debug("Parameters taken from query string")
            return params, request_id

    headers = event.get("headers")
    if isinstance(headers, dict):
        params = extract_parameters(headers, fuzzy_keys=True)
        if params:
            logger.debug("Parameters taken from headers")
            return params, request_id

    if "body" in event:
        params = extract_parameters(_decode_body(event))
        if params:
            logger.debug("Parameters taken from body")
            return params, request_id

    return extract_parameters(event), request_id
