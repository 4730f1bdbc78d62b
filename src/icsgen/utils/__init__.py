"""Utility functions for icsgen."""

from icsgen.utils.date_parsing import resolve_date_expression, utc_now
from icsgen.utils.paths import get_zoneinfo_path, resolve_output_path

__all__ = [
    "resolve_date_expression",
    "utc_now",
    "get_zoneinfo_path",
    "resolve_output_path",
]
