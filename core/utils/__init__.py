"""
Core Utilities Package

This package contains utility functions and helpers used throughout the application.

Modules:
    - time: Timestamp generation and conversion utilities
    - fields: Typed extraction of fields from raw exchange JSON
"""

from core.utils.time import current_utc_timestamp, to_utc_datetime
from core.utils.fields import extract_array, extract_float, extract_str, parse_float

__all__ = [
    "current_utc_timestamp",
    "to_utc_datetime",
    "extract_array",
    "extract_float",
    "extract_str",
    "parse_float",
]
