"""
Filename convention for gallery images.

Gallery images are named ``YYYY-MM-DD-HHMMSS.jpg`` where the digits are the
wall-clock time the photo was taken. Anything else in the bucket is not part
of the gallery and is rejected by returning ``None``.
"""

import re
from datetime import datetime

_FILENAME_PATTERN = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})-([0-9]{2})([0-9]{2})([0-9]{2})\.jpg"
)


def split_filename(key: str) -> str:
    """Return the final path segment of an object key."""
    return key.rsplit("/", 1)[-1]


def parse_timestamp(filename: str) -> datetime | None:
    """
    Decode a gallery filename into a naive local timestamp.

    Returns None for any filename that does not match the convention exactly,
    including out-of-range fields such as month 13 or hour 24.
    """
    match = _FILENAME_PATTERN.fullmatch(filename)
    if match is None:
        return None
    year, month, day, hour, minute, second = (int(g) for g in match.groups())
    try:
        return datetime(year, month, day, hour, minute, second)  # noqa: DTZ001
    except ValueError:
        return None


def format_filename(timestamp: datetime) -> str:
    return (
        f"{timestamp.year:04d}-{timestamp.month:02d}-{timestamp.day:02d}-"
        f"{timestamp.hour:02d}{timestamp.minute:02d}{timestamp.second:02d}.jpg"
    )
