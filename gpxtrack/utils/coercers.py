"""String to number/timestamp conversions for GPX field text."""

import math
import re
from datetime import datetime, timezone

from gpxtrack.utils.errors import CoercionError


TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
LEGACY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

_TIMESTAMP_FORMATS = [
    TIMESTAMP_FORMAT,
    TIMESTAMP_FORMAT + ".%f",
    TIMESTAMP_FORMAT + "%z",
    TIMESTAMP_FORMAT + ".%f%z",
    LEGACY_TIMESTAMP_FORMAT,
]

# strptime and float() both accept non-ASCII digits; GPX text must not.
_DECIMAL = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)
_TIMESTAMP = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(T\d{2}:\d{2}:\d{2}(\.\d{1,6})?(Z|[+-]\d{2}:?\d{2})?| \d{2}:\d{2})",
    re.ASCII,
)


def parse_float(text):
    """Parse a decimal number, raising CoercionError on anything else."""
    if text is None:
        raise CoercionError("expected a number, got nothing")
    value = text.strip()
    if not _DECIMAL.fullmatch(value):
        raise CoercionError(f"malformed number '{text}'")
    number = float(value)
    if not math.isfinite(number):
        raise CoercionError(f"non-finite number '{text}'")
    return number


def to_float(text):
    """Lenient variant of parse_float: unparseable text becomes 0.0."""
    try:
        return parse_float(text)
    except CoercionError:
        return 0.0


def parse_timestamp(text):
    """
    Parse a GPX timestamp.

    Accepts ``YYYY-MM-DDTHH:MM:SS`` with optional fractional seconds (up to
    microseconds) and an optional ``Z`` / ``+HH:MM`` offset, plus the older
    ``YYYY-MM-DD HH:MM`` form. Offsets are normalised to UTC; inputs without
    one stay naive.
    """
    if text is None:
        raise CoercionError("expected a timestamp, got nothing")
    value = text.strip()
    if not _TIMESTAMP.fullmatch(value):
        raise CoercionError(f"malformed timestamp '{text}'")

    for fmt in _TIMESTAMP_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is not None:
            return parsed.astimezone(timezone.utc)
        return parsed
    raise CoercionError(f"malformed timestamp '{text}'")
