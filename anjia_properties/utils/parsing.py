# anjia_properties/utils/parsing.py

"""Lenient scalar parsing shared by the normalizer and the filters."""

import re
from typing import Any

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_int_prefix(value: Any) -> int | None:
    """Parse the leading integer of *value*, like JavaScript ``parseInt``.

    ``"600-850"`` gives 600, ``" 12abc"`` gives 12, and ``"Contact agent"``
    or ``None`` give ``None``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if not isinstance(value, str):
        return None
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else None


def parse_int_or_zero(value: Any) -> int:
    """Like :func:`parse_int_prefix` but unparseable input becomes 0."""
    parsed = parse_int_prefix(value)
    return parsed if parsed is not None else 0


def as_text(value: Any) -> str:
    """Render a scalar field value as a trimmed string.

    Whole floats lose their ``.0`` so CMS numbers such as ``3.0`` read
    as ``"3"``.  Containers and ``None`` render as an empty string.
    """
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    if isinstance(value, bool):
        return "true" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def is_truthy(value: Any) -> bool:
    """Interpret CMS checkbox values (``1``, ``"yes"``, ``True``) as booleans."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False
