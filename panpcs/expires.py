"""Expiry markers and values that carry an expiry time."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Expires:
    """A point in time after which something is no longer valid."""

    at: datetime
    abort: bool = False

    def is_expired(self) -> bool:
        """True once the deadline has passed or expiry was forced."""
        return self.abort or _now() > self.at

    def set_expired(self, abort: bool) -> None:
        """Force (or stop forcing) the expired state."""
        self.abort = abort

    def __str__(self) -> str:
        return f"expires at: {self.at}, abort: {'true' if self.abort else 'false'}"


@dataclass
class DataExpires(Expires):
    """A value paired with its expiry time."""

    data: Any = None


def expires_in(seconds: float) -> Expires:
    """Return an expiry marker `seconds` from now."""
    return Expires(at=_now() + timedelta(seconds=seconds))


def expires_at(when: datetime) -> Expires:
    """Return an expiry marker at `when`; naive times are taken as local time."""
    if when.tzinfo is None:
        when = when.astimezone()
    return Expires(at=when)


def data_expires(data: Any, seconds: float) -> DataExpires:
    """Wrap `data` so that it expires `seconds` from now."""
    return DataExpires(at=_now() + timedelta(seconds=seconds), data=data)