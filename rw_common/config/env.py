"""Environment variable parsing utilities."""

from __future__ import annotations


def parse_bool_env(value: str | None) -> bool | None:
    """Parse a boolean from an environment variable string.

    Returns True for "1", "true", "yes", "on" (case-insensitive).
    Returns None if value is None.
    """
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_float_env(value: str | None) -> float | None:
    """Parse a float from an environment variable string.

    Returns None if value is None or cannot be parsed.
    """
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_duration_env(value: str | None) -> float | None:
    """Parse a duration in seconds, accepting an optional ``ms``/``s``/``m`` suffix.

    Example: "500ms" -> 0.5, "2s" -> 2.0, "1m" -> 60.0, "3" -> 3.0
    Returns None if value is None or cannot be parsed.
    """
    if value is None:
        return None
    text = value.strip().lower()
    if text.endswith("ms"):
        parsed = parse_float_env(text[:-2])
        return None if parsed is None else parsed / 1000.0
    scale = 1.0
    if text.endswith("s"):
        text = text[:-1]
    elif text.endswith("m"):
        text, scale = text[:-1], 60.0
    parsed = parse_float_env(text)
    if parsed is None:
        return None
    return parsed * scale
