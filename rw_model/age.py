"""Elapsed-age parsing and formatting for time columns."""

from __future__ import annotations

import re

UNKNOWN_AGE = -1.0
NA = "n/a"

_UNITS = (
    ("y", 365 * 24 * 3600),
    ("d", 24 * 3600),
    ("h", 3600),
    ("m", 60),
    ("s", 1),
)
_UNIT_SECONDS = dict(_UNITS)
_AGE_RX = re.compile(r"(?:\d+[ydhms])+")
_PART_RX = re.compile(r"(\d+)([ydhms])")


def parse_age(text: str) -> float:
    """Convert an age such as ``3y125d``, ``19h`` or ``10s`` to seconds.

    Blank, ``-``, ``<unknown>`` and malformed values map to UNKNOWN_AGE so
    they order before every real age.
    """
    value = text.strip()
    if not _AGE_RX.fullmatch(value):
        return UNKNOWN_AGE
    return float(
        sum(int(amount) * _UNIT_SECONDS[unit] for amount, unit in _PART_RX.findall(value))
    )


def to_age(seconds: float) -> str:
    """Render seconds using at most the two largest non-zero units."""
    if seconds < 0:
        return NA
    remaining = int(seconds)
    parts: list[str] = []
    for unit, size in _UNITS:
        amount, remaining = divmod(remaining, size)
        if amount:
            parts.append(f"{amount}{unit}")
        elif parts:
            break
        if len(parts) == 2:
            break
    return "".join(parts) or "0s"


def age_decorator(text: str) -> str:
    """Display transform for time columns."""
    if parse_age(text) == UNKNOWN_AGE:
        return NA
    return text
