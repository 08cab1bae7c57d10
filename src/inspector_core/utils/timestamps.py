"""
inspector_core.utils.timestamps

Timestamp helpers for log events.

Responsibilities:
- Provide the canonical "now" (UTC, millisecond precision).
- Format/parse ISO-8601 for the JSON envelope.
- Render durations and relative times for display surfaces.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta


class TimestampHelper:
    @staticmethod
    def now() -> datetime:
        return TimestampHelper.normalize(datetime.now(tz=UTC))

    @staticmethod
    def normalize(timestamp: datetime) -> datetime:
        """
        Convert to aware UTC and truncate to milliseconds.

        The wire format carries milliseconds only, so events hold exactly what survives
        a JSON round trip. Naive datetimes are taken to be UTC already.
        """

        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        else:
            timestamp = timestamp.astimezone(UTC)
        return timestamp.replace(microsecond=(timestamp.microsecond // 1000) * 1000)

    @staticmethod
    def normalize_duration(duration: timedelta) -> timedelta:
        return timedelta(milliseconds=TimestampHelper.to_millis(duration))

    @staticmethod
    def to_millis(duration: timedelta) -> int:
        return duration // timedelta(milliseconds=1)

    @staticmethod
    def format(timestamp: datetime) -> str:
        # "2024-01-15 14:30:25.123"
        return timestamp.strftime("%Y-%m-%d %H:%M:%S.") + f"{timestamp.microsecond // 1000:03d}"

    @staticmethod
    def format_time(timestamp: datetime) -> str:
        # "14:30:25.123"
        return timestamp.strftime("%H:%M:%S.") + f"{timestamp.microsecond // 1000:03d}"

    @staticmethod
    def format_iso(timestamp: datetime) -> str:
        # "2024-01-15T14:30:25.123Z"
        utc = TimestampHelper.normalize(timestamp)
        return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    @staticmethod
    def parse_iso(value: object) -> datetime | None:
        if not isinstance(value, str) or not value:
            return None
        try:
            return TimestampHelper.normalize(datetime.fromisoformat(value))
        except ValueError:
            return None

    @staticmethod
    def format_duration(start: datetime, end: datetime) -> str:
        return TimestampHelper.format_elapsed(end - start)

    @staticmethod
    def format_elapsed(duration: timedelta) -> str:
        # "123ms" below one second, "1.234s" above.
        millis = TimestampHelper.to_millis(duration)
        if millis < 1000:
            return f"{millis}ms"
        return f"{millis / 1000.0:.3f}s"

    @staticmethod
    def format_relative(timestamp: datetime, *, now: datetime | None = None) -> str:
        current = now or TimestampHelper.now()
        delta = current - TimestampHelper.normalize(timestamp)
        seconds = int(delta.total_seconds())

        if seconds < 60:
            return "just now"
        if seconds < 3600:
            return _plural(seconds // 60, "minute")
        if seconds < 86400:
            return _plural(seconds // 3600, "hour")
        return _plural(seconds // 86400, "day")


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


# --- Module Notes -----------------------------------------------------------
# Every timestamp stored on an event passes through `normalize`; comparing a parsed
# timestamp with the original is therefore exact.
