from __future__ import annotations

import enum
from datetime import date, datetime, timedelta, timezone


class DurationUnit(str, enum.Enum):
    MICROS = "MICROS"
    MILLIS = "MILLIS"
    SECONDS = "SECONDS"
    MINUTES = "MINUTES"
    HOURS = "HOURS"
    HALF_DAYS = "HALF_DAYS"
    DAYS = "DAYS"
    WEEKS = "WEEKS"
    MONTHS = "MONTHS"
    YEARS = "YEARS"
    DECADES = "DECADES"
    CENTURIES = "CENTURIES"
    MILLENNIA = "MILLENNIA"

    @property
    def is_time_based(self) -> bool:
        return self in _TIME_UNIT_MICROS


_TIME_UNIT_MICROS = {
    DurationUnit.MICROS: 1,
    DurationUnit.MILLIS: 1_000,
    DurationUnit.SECONDS: 1_000_000,
    DurationUnit.MINUTES: 60_000_000,
    DurationUnit.HOURS: 3_600_000_000,
    DurationUnit.HALF_DAYS: 43_200_000_000,
}

_MONTHS_PER_UNIT = {
    DurationUnit.MONTHS: 1,
    DurationUnit.YEARS: 12,
    DurationUnit.DECADES: 120,
    DurationUnit.CENTURIES: 1200,
    DurationUnit.MILLENNIA: 12000,
}


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // b
    return q if a >= 0 else -q


def _months_until(start: date, end: date) -> int:
    packed1 = (start.year * 12 + start.month - 1) * 32 + start.day
    packed2 = (end.year * 12 + end.month - 1) * 32 + end.day
    return _trunc_div(packed2 - packed1, 32)


def date_until(start: date, end: date, unit: DurationUnit) -> int:
    """Whole `unit`s from `start` to `end` on the Gregorian calendar, truncated toward zero."""
    if unit == DurationUnit.DAYS:
        return end.toordinal() - start.toordinal()
    if unit == DurationUnit.WEEKS:
        return _trunc_div(end.toordinal() - start.toordinal(), 7)
    if unit in _MONTHS_PER_UNIT:
        return _trunc_div(_months_until(start, end), _MONTHS_PER_UNIT[unit])
    raise ValueError(f"Unsupported date unit: {unit}")


def local_until(start: datetime, end: datetime, unit: DurationUnit) -> int:
    """
    Date-based units between two wall-clock date-times. The end date is pulled
    one day toward the start when its time of day has not yet reached the
    start's, so only complete units count.
    """
    end_date = end.date()
    if end_date > start.date() and end.time() < start.time():
        end_date -= timedelta(days=1)
    elif end_date < start.date() and end.time() > start.time():
        end_date += timedelta(days=1)
    return date_until(start.date(), end_date, unit)


def instant_until(start: datetime, end: datetime, unit: DurationUnit) -> int:
    # same-tzinfo subtraction would ignore offsets
    elapsed = end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
    micros = elapsed // timedelta(microseconds=1)
    return _trunc_div(micros, _TIME_UNIT_MICROS[unit])


def between(start: datetime, end: datetime, unit: DurationUnit | str) -> int:
    """
    Amount of `unit` between two aware datetimes. Time-based units measure the
    instant timeline; date-based units compare the wall clock of each value in
    its own zone.
    """
    if not isinstance(unit, DurationUnit):
        unit = DurationUnit(str(unit).upper())
    if unit.is_time_based:
        return instant_until(start, end, unit)
    return local_until(start.replace(tzinfo=None), end.replace(tzinfo=None), unit)
