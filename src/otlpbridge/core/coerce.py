"""Value, timestamp and unit helpers shared by the vendor mappers.

Raw records are decoded JSON, so field values arrive as str, int, float, bool,
None, list or dict. These helpers read them the way a lenient JSON tree reader
does: numeric strings count as numbers and scalars have a text form.
"""

import math
import re
import time
from calendar import timegm
from collections.abc import Callable
from datetime import datetime
from typing import Any

NANOS_PER_SECOND = 1_000_000_000

# e.g. "2025-09-09 18:05:00.000000 UTC"
_CALENDAR_TIMESTAMP = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\.(?P<fraction>\d{1,6}) UTC"
)

# Checked in order; the first hit wins.
_UNIT_RULES: tuple[tuple[str, Callable[[str], bool]], ...] = (
    ("bytes", lambda n: n.endswith("_bytes_count") or "bytes" in n),
    ("packets", lambda n: n.endswith("_packets_count")),
    ("kbps", lambda n: n.endswith("_kbps")),
    ("ms", lambda n: n.endswith("_millis")),
    ("us", lambda n: n.endswith("_usec") or "_rtt_" in n),
    ("count", lambda n: n.endswith("_count")),
)


def now_nanos() -> int:
    """Return the current wall-clock time in nanoseconds since the epoch."""
    return time.time_ns()


def is_number(value: Any) -> bool:
    """Return True for JSON numbers (booleans are not numbers)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def text_of(value: Any) -> str | None:
    """Return the text form of a scalar JSON value.

    Args:
        value: Decoded JSON value.

    Returns:
        Strings unchanged, booleans as "true"/"false", numbers via str().
        None for null, lists and objects.
    """
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return value if isinstance(value, str) else str(value)


def as_int(value: Any, default: int) -> int:
    """Read an integer, accepting numeric strings and truncating floats.

    Args:
        value: Decoded JSON value.
        default: Returned when the value is missing or not numeric.

    Returns:
        The integer value, or default.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        try:
            return int(value)
        except ValueError:
            try:
                value = float(value)
            except ValueError:
                return default
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    return default


def as_float(value: Any) -> float:
    """Read a double from a JSON number or numeric string.

    Raises:
        ValueError: If the value is neither a number nor a numeric string.
    """
    if not is_number(value) and not isinstance(value, str):
        raise ValueError(f"not a number: {value!r}")
    try:
        return float(value)
    except OverflowError:
        raise ValueError(f"number out of double range: {value!r}") from None


def saturating_float(value: int | float) -> float:
    """Convert a JSON number to a double, mapping out-of-range integers to +-inf."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def calendar_nanos(text: str | None) -> int | None:
    """Parse a "YYYY-MM-DD HH:MM:SS.ffffff UTC" timestamp into nanoseconds.

    The fraction may have one to six digits.

    Returns:
        Nanoseconds since the epoch, or None if the text does not parse.
    """
    if not text:
        return None
    match = _CALENDAR_TIMESTAMP.fullmatch(text.strip())
    if match is None:
        return None
    try:
        moment = datetime.strptime(match.group("date"), "%Y-%m-%d %H:%M:%S")
    except ValueError:
        return None
    micros = int(match.group("fraction").ljust(6, "0"))
    return timegm(moment.timetuple()) * NANOS_PER_SECOND + micros * 1_000


def infer_unit(field_name: str) -> str | None:
    """Guess a unit from a metric field name's suffix.

    Returns:
        The unit string, or None when nothing matches.
    """
    for unit, matches in _UNIT_RULES:
        if matches(field_name):
            return unit
    return None
