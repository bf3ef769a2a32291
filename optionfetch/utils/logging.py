from __future__ import annotations

import json
import logging
from datetime import date, datetime
from typing import Any

from rich.console import Console

console = Console()
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Set the root log level.

    The Lambda runtime installs its own root handler, so basicConfig is a
    no-op there and only the level is applied.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())


def mask_secret(value: str | None, visible: int = 4) -> str:
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]


def _to_jsonable(x: Any) -> Any:
    if isinstance(x, (datetime, date)):
        return x.isoformat()
    return x


def log_event(event: str, payload: dict[str, Any], level: int = logging.INFO) -> None:
    """Render a structured event, unless `level` is below the configured log level."""
    if not logger.isEnabledFor(level):
        return
    console.print(f"[bold]{event}[/bold]")
    console.print_json(json.dumps({k: _to_jsonable(v) for k, v in payload.items()}, default=str))
