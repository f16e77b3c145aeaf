"""Password change tracking used to invalidate stale sessions."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Final

DEFAULT_BACKDATE_SECONDS: Final[int] = 1


def record_password_change(
    *,
    is_new_record: bool,
    now: datetime | None = None,
    backdate_seconds: int = DEFAULT_BACKDATE_SECONDS,
) -> datetime | None:
    """Return the change timestamp to persist, or None for a freshly created record.

    The timestamp is pushed into the past so a session token issued in the same
    second as the change still counts as issued before it.
    """

    if backdate_seconds < 1:
        raise ValueError("backdate_seconds must be at least 1")
    if is_new_record:
        return None

    current = _as_utc(now) if now is not None else datetime.now(tz=UTC)
    return current - timedelta(seconds=backdate_seconds)


def next_password_changed_at(
    *,
    previous: datetime | None,
    candidate: datetime | None,
) -> datetime | None:
    """Merge a new change timestamp without ever moving it backwards."""

    if candidate is None:
        return previous
    if previous is None:
        return _as_utc(candidate)
    return max(_as_utc(previous), _as_utc(candidate))


def was_changed_after(
    changed_at: datetime | None,
    reference_timestamp: int | float | datetime,
) -> bool:
    """Return whether reference_timestamp predates the recorded password change.

    Both sides are compared in whole epoch seconds, the granularity of JWT `iat`.
    """

    if changed_at is None:
        return False
    return _epoch_seconds(reference_timestamp) < _epoch_seconds(changed_at)


def _epoch_seconds(value: int | float | datetime) -> int:
    if isinstance(value, datetime):
        return int(_as_utc(value).timestamp())
    return int(value)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
