"""
Field Extraction Utilities

Exchanges transmit prices and volumes as JSON strings ("100.50") to avoid
floating point loss on the wire. These helpers pull a named field out of a
decoded JSON payload and commit it to a Python type, failing with a
descriptive InvalidFieldFormat instead of letting a KeyError or ValueError
leak out.

Only numeric *strings* are accepted. Native JSON numbers are rejected so a
change in the exchange's wire format is noticed instead of silently absorbed.

Usage:
    from core.utils.fields import extract_float, extract_array

    last = extract_float(payload, "last")
    asks = extract_array(payload, "asks")
"""

import math
import re
from typing import Any, List, Mapping, Tuple

from core.errors import InvalidFieldFormat, MissingField


# Plain decimal notation: sign, digits, optional fraction, optional exponent.
# float() alone would also accept "1_000", " 1.5 ", "nan", "inf" and non-ASCII
# digits such as "١٠٠" or "１２"; \d would match those too.
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_float(raw: Any, field_name: str) -> float:
    """
    Convert a numeric JSON string into a float.

    Args:
        raw: Raw JSON value (must be a str)
        field_name: Logical field name, used in the error message

    Returns:
        float: The parsed value

    Raises:
        InvalidFieldFormat: If raw is not a string or not a plain decimal number

    Example:
        >>> parse_float("100.5", "price")
        100.5
        >>> parse_float(100.5, "price")
        Traceback (most recent call last):
        ...
        core.errors.InvalidFieldFormat: Invalid format for field 'price': 100.5
    """
    if not isinstance(raw, str) or not _DECIMAL_RE.fullmatch(raw):
        raise InvalidFieldFormat(raw, field_name)

    try:
        value = float(raw)
    except ValueError as e:
        raise InvalidFieldFormat(raw, field_name) from e

    # Exponents beyond double range overflow to inf
    if not math.isfinite(value):
        raise InvalidFieldFormat(raw, field_name)

    return value


def extract_float(payload: Any, field_name: str) -> float:
    """
    Look up ``field_name`` in a JSON object and parse it as a float.

    An absent field is reported as InvalidFieldFormat with raw value None,
    the same way a null field would be.
    """
    raw = payload.get(field_name) if isinstance(payload, Mapping) else None
    return parse_float(raw, field_name)


def extract_array(payload: Any, field_name: str) -> List[Any]:
    """
    Look up ``field_name`` in a JSON object and require a JSON array.

    Raises:
        InvalidFieldFormat: If the field is absent or not an array
    """
    raw = payload.get(field_name) if isinstance(payload, Mapping) else None
    if not isinstance(raw, list):
        raise InvalidFieldFormat(raw, field_name)
    return raw


def extract_str(payload: Any, field_name: str) -> str:
    """
    Look up a required string field (identifiers, not numbers).

    Raises:
        MissingField: If the field is absent, null or not a string
    """
    raw = payload.get(field_name) if isinstance(payload, Mapping) else None
    if not isinstance(raw, str):
        raise MissingField(field_name)
    return raw


def parse_price_volume(entry: Any, field_name: str) -> Tuple[float, float]:
    """
    Parse one order book level of the form ["price", "volume"].

    Raises:
        InvalidFieldFormat: If entry is not a 2-element array or either
            element is not a numeric string
    """
    if not isinstance(entry, list) or len(entry) != 2:
        raise InvalidFieldFormat(entry, field_name)

    return parse_float(entry[0], field_name), parse_float(entry[1], field_name)
