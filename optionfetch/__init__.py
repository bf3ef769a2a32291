"""optionfetch: filtered option contract lookups over the Polygon.io API."""

__version__ = "0.1.0"
