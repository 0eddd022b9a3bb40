"""
Jalali (Solar Hijri / Shamsi) <-> Gregorian day conversion.

Day numbers are proleptic Gregorian ordinals as returned by
``datetime.date.toordinal()`` (0001-01-01 is day 1), so they interchange
directly with the standard library.

Leap years follow the 33-year arithmetic cycle used by the ICU Persian
calendar: year ``y`` is leap when ``(25*y + 11) mod 33 < 8``.

    1402/01/01  <->  2023-03-21
    1403/12/30  <->  2025-03-20   (1403 is a leap year)
"""
from __future__ import annotations

from datetime import date

from persiancalendar.core.errors import FieldRangeError, InvalidFieldError
from persiancalendar.schemas.fields import PersianFields

# Ordinal of 1 Farvardin 1 AP under the arithmetic cycle.
PERSIAN_EPOCH = 226895

_MONTH_START = (0, 31, 62, 93, 124, 155, 186, 216, 246, 276, 306, 336)

_PERSIAN_DIGITS = str.maketrans("۰۱۲۳۴۵۶۷۸۹٠١٢٣٤٥٦٧٨٩", "01234567890123456789")


def to_ascii_digits(text: str) -> str:
    return text.translate(_PERSIAN_DIGITS)


def is_leap_year(year: int) -> bool:
    return (25 * year + 11) % 33 < 8


def days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise FieldRangeError(f"Persian month out of range: {month}")
    if month <= 6:
        return 31
    if month <= 11:
        return 30
    return 30 if is_leap_year(year) else 29


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def _year_start(year: int) -> int:
    # days from the epoch to 1 Farvardin of `year`
    return 365 * (year - 1) + (8 * year + 21) // 33


def to_persian(day_number: int) -> PersianFields:
    """Persian (year, month, day) for a proleptic Gregorian ordinal. Total over all integers."""
    days = day_number - PERSIAN_EPOCH
    year = 1 + (33 * days + 3) // 12053
    day_of_year = days - _year_start(year)
    if day_of_year < 186:
        month = day_of_year // 31
    else:
        month = 6 + (day_of_year - 186) // 30
    return PersianFields(year, month + 1, day_of_year - _MONTH_START[month] + 1)


def validate_fields(fields: PersianFields) -> PersianFields:
    """
    Check the calendar invariant of `fields` and return them unchanged.
    FieldRangeError for values outside any plausible bound (month 13, hour 24),
    InvalidFieldError for a day the given month does not have in that year.
    """
    length = days_in_month(fields.year, fields.month)
    if not 1 <= fields.day <= length:
        raise InvalidFieldError(
            f"Invalid Persian date: {fields.year}/{fields.month:02d}/{fields.day:02d} "
            f"(month has {length} days)"
        )
    if not 0 <= fields.hour <= 23:
        raise FieldRangeError(f"Hour out of range: {fields.hour}")
    if not 0 <= fields.minute <= 59:
        raise FieldRangeError(f"Minute out of range: {fields.minute}")
    if not 0 <= fields.second <= 59:
        raise FieldRangeError(f"Second out of range: {fields.second}")
    return fields


def to_gregorian_day_number(fields: PersianFields) -> int:
    validate_fields(fields)
    return PERSIAN_EPOCH + _year_start(fields.year) + _MONTH_START[fields.month - 1] + fields.day - 1


def jalali_to_gregorian(year: int, month: int, day: int) -> date:
    """Convert a Jalali date to Gregorian. Raises InvalidFieldError (a ValueError) on invalid input."""
    return date.fromordinal(to_gregorian_day_number(PersianFields(year, month, day)))


def gregorian_to_jalali(d: date) -> tuple[int, int, int]:
    """Convert a Gregorian date to (jalali_year, jalali_month, jalali_day)."""
    f = to_persian(d.toordinal())
    return f.year, f.month, f.day

