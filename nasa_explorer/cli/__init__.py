"""Command line interface for nasa-explorer."""

from . import apod, eonet, media, neo, stats, techtransfer, tle

__all__ = ["apod", "eonet", "media", "neo", "stats", "techtransfer", "tle"]
