from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class PersianFields:
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    def with_time(self, hour: int, minute: int, second: int) -> PersianFields:
        return PersianFields(self.year, self.month, self.day, hour, minute, second)


@dataclass(frozen=True)
class ZonedFields:
    """Gregorian wall-clock fields as read in `zone` (an IANA key)."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    zone: str | None = None

    @classmethod
    def from_local(cls, value: date | datetime, zone: str | None = None) -> ZonedFields:
        if isinstance(value, datetime):
            return cls(value.year, value.month, value.day, value.hour, value.minute, value.second, zone)
        return cls(value.year, value.month, value.day, zone=zone)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def to_naive(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute, self.second)
