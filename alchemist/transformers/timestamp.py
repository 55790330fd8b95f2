"""
Timestamp Transformer

Turns Unix epoch values into human-readable dates: local, UTC, ISO 8601 and
a coarse "time ago" phrase.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional

from ..models import DetectedType


@dataclass(frozen=True)
class TimestampFormats:
    local: str
    utc: str
    iso: str
    relative: str
    unix: int
    unix_ms: int


class TimestampTransformer:
    """Renders an epoch timestamp in several readable forms."""

    @staticmethod
    def can_handle(detected_type: DetectedType) -> bool:
        return detected_type is DetectedType.TIMESTAMP

    @staticmethod
    def convert(raw: str, now_ms: Optional[float] = None) -> Optional[TimestampFormats]:
        return TimestampTransformer.epoch_to_human(raw, now_ms)

    @staticmethod
    def to_millis(value) -> Optional[int]:
        """
        Normalize an epoch value to milliseconds.

        A value written with exactly 10 digits is taken as seconds; anything
        else is assumed to already be milliseconds.
        """
        if isinstance(value, str):
            try:
                value = int(value.strip(), 10)
            except ValueError:
                return None
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value * 1000 if len(str(value)) == 10 else value

    @staticmethod
    def epoch_to_human(value, now_ms: Optional[float] = None) -> Optional[TimestampFormats]:
        """
        Convert an epoch timestamp to readable formats.

        Args:
            value: Epoch seconds (10 digits) or milliseconds, as ``int`` or text.
            now_ms: Reference time for the relative phrase. Defaults to the
                current wall clock.

        Returns:
            The formats bundle, or ``None`` if the value is not an integer or
            falls outside the representable date range.
        """
        ms = TimestampTransformer.to_millis(value)
        if ms is None:
            return None

        try:
            moment = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
            local = moment.astimezone()
        except (OverflowError, OSError, ValueError):
            return None

        if now_ms is None:
            now_ms = time.time() * 1000

        return TimestampFormats(
            local=_locale_datetime(local),
            utc=format_datetime(moment, usegmt=True),
            iso=(
                f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
                f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
                f".{ms % 1000:03d}Z"
            ),
            relative=TimestampTransformer.relative(ms, now_ms, local),
            unix=ms // 1000,
            unix_ms=ms,
        )

    @staticmethod
    def relative(ms: int, now_ms: float, local: Optional[datetime] = None) -> str:
        """
        Describe how long ago ``ms`` was relative to ``now_ms``.

        Anything later than ``now_ms`` is "in the future"; anything 30 days or
        older falls back to the plain local date.
        """
        diff = now_ms - ms
        if diff < 0:
            return "in the future"

        seconds = int(diff // 1000)
        minutes = seconds // 60
        hours = minutes // 60
        days = hours // 24

        if seconds < 60:
            return f"{seconds} seconds ago"
        if minutes < 60:
            return f"{minutes} minute{'s' if minutes > 1 else ''} ago"
        if hours < 24:
            return f"{hours} hour{'s' if hours > 1 else ''} ago"
        if days < 30:
            return f"{days} day{'s' if days > 1 else ''} ago"

        if local is None:
            local = datetime.fromtimestamp(ms / 1000, tz=timezone.utc).astimezone()
        return _locale_date(local)


def _locale_date(moment: datetime) -> str:
    return f"{moment.month}/{moment.day}/{moment.year}"


def _locale_datetime(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{_locale_date(moment)}, {hour}:{moment:%M:%S} {meridiem}"
