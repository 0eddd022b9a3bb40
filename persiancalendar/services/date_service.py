"""
DateService: Persian <-> Gregorian conversion facade.

Holds an immutable DateServiceConfig and the three compiled patterns (date,
date-time, find/lookup). Every call works on local values only, so one
instance can be shared between threads without locking.

Instants are timezone-aware datetimes. Naive dates and datetimes are read as
wall-clock values of the configured reference zone (Asia/Tehran by default).
Day arithmetic and durations are computed on Gregorian instants and wall-clock
readings, never on Persian fields.
"""
from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable

from persiancalendar.core.config import DateServiceConfig
from persiancalendar.core.constants import (
    ERROR_PARSING_INPUT_DATE,
    INPUT_DATE_NOT_EMPTY,
    INSTANT_MUST_NOT_BE_NONE,
    LOCAL_DATE_MUST_NOT_BE_NONE,
    LOCAL_DATE_TIME_MUST_NOT_BE_NONE,
    NOT_PARSABLE,
    ZONE_MUST_NOT_BE_NONE,
)
from persiancalendar.core.errors import DateOutOfRangeError, InvalidFieldError, NullOrEmptyInputError, ParseError
from persiancalendar.schemas.fields import PersianFields, ZonedFields
from persiancalendar.services.durations import DurationUnit, between, local_until
from persiancalendar.utils.jalali import to_gregorian_day_number, to_persian
from persiancalendar.utils.patterns import CalendarPattern, compile_pattern
from persiancalendar.utils.zones import from_local, from_zoned_fields, resolve_zone, to_zoned_fields, zone_name

logger = logging.getLogger("persiancalendar.service")

_ISO_LOCAL_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
_ISO_LOCAL_DATE_TIME = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2})(?::(\d{2})(?:\.\d{1,9})?)?",
    re.ASCII,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _require(value, message: str) -> None:
    if value is None:
        raise NullOrEmptyInputError(message)


def _require_text(text: str | None) -> str:
    if text is None or not str(text).strip():
        raise NullOrEmptyInputError(INPUT_DATE_NOT_EMPTY)
    return str(text)


def parse_iso_date(text: str | None) -> date:
    """Strict ``YYYY-MM-DD``. Single-digit month or day is rejected."""
    text = _require_text(text)
    m = _ISO_LOCAL_DATE.fullmatch(text.strip())
    if m is None:
        logger.warning("iso_date_parse_failed text=%r", text)
        raise ParseError(ERROR_PARSING_INPUT_DATE + text, text=text, pattern="yyyy-MM-dd")
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError as exc:
        logger.warning("iso_date_parse_failed text=%r", text)
        raise ParseError(ERROR_PARSING_INPUT_DATE + text, text=text, pattern="yyyy-MM-dd") from exc


def parse_iso_date_time(text: str | None) -> datetime:
    """Strict ``YYYY-MM-DDTHH:mm[:ss[.fraction]]``; the fraction is dropped."""
    text = _require_text(text)
    m = _ISO_LOCAL_DATE_TIME.fullmatch(text.strip())
    if m is None:
        logger.warning("iso_date_time_parse_failed text=%r", text)
        raise ParseError(ERROR_PARSING_INPUT_DATE + text, text=text, pattern="yyyy-MM-dd'T'HH:mm:ss")
    try:
        return datetime(
            int(m.group(1)),
            int(m.group(2)),
            int(m.group(3)),
            int(m.group(4)),
            int(m.group(5)),
            int(m.group(6) or 0),
        )
    except ValueError as exc:
        logger.warning("iso_date_time_parse_failed text=%r", text)
        raise ParseError(ERROR_PARSING_INPUT_DATE + text, text=text, pattern="yyyy-MM-dd'T'HH:mm:ss") from exc


class DateService:
    def __init__(self, config: DateServiceConfig | None = None, *, clock: Callable[[], datetime] | None = None):
        self.config = config or DateServiceConfig()
        self._date_pattern = compile_pattern(self.config.date_format)
        self._datetime_pattern = compile_pattern(self.config.datetime_format)
        self._find_pattern = compile_pattern(self.config.find_date_format)
        self._zone = resolve_zone(self.config.zone)
        self._policy = self.config.local_time_policy
        self._clock = clock or _utc_now
        logger.debug("date_service_init config=%r", self.config)

    @property
    def zone(self) -> tzinfo:
        return self._zone

    # --- building blocks -------------------------------------------------

    def _to_persian_fields(self, instant: datetime, zone: tzinfo) -> PersianFields:
        zf = to_zoned_fields(instant, zone)
        return to_persian(zf.to_date().toordinal()).with_time(zf.hour, zf.minute, zf.second)

    def _format_instant(self, instant: datetime, pattern: CalendarPattern, zone: tzinfo) -> str:
        return pattern.format(self._to_persian_fields(instant, zone))

    def _format_local(self, value: date | datetime, pattern: CalendarPattern) -> str:
        instant = from_local(value, self._zone, self._policy)
        return self._format_instant(instant, pattern, self._zone)

    def _parse_local(self, text: str | None, pattern: CalendarPattern) -> datetime:
        """Gregorian wall clock (naive) of a Persian string read in `pattern`."""
        text = _require_text(text)
        try:
            persian = pattern.parse(text)
            gregorian = date.fromordinal(to_gregorian_day_number(persian))
        except ParseError:
            logger.warning("persian_parse_failed text=%r pattern=%r", text, pattern.source)
            raise
        except (InvalidFieldError, ValueError, OverflowError) as exc:
            logger.warning("persian_parse_failed text=%r pattern=%r error=%s", text, pattern.source, exc)
            raise ParseError(NOT_PARSABLE + text, text=text, pattern=pattern.source) from exc
        return datetime(gregorian.year, gregorian.month, gregorian.day, persian.hour, persian.minute, persian.second)

    def _resolve(self, local: datetime) -> datetime:
        return from_zoned_fields(ZonedFields.from_local(local, zone_name(self._zone)), self._zone, self._policy)

    def _parse_to_instant(self, text: str | None, pattern: CalendarPattern) -> datetime:
        return self._resolve(self._parse_local(text, pattern))

    def _duration(self, start: datetime, end: datetime, unit: DurationUnit | str) -> int:
        if not isinstance(unit, DurationUnit):
            unit = DurationUnit(str(unit).upper())
        if unit.is_time_based:
            return between(self._resolve(start), self._resolve(end), unit)
        # date units read the parsed wall clock, unaffected by DST gap shifts
        return local_until(start, end, unit)

    # --- current time ----------------------------------------------------

    def current_date_time(self) -> str:
        return self._format_instant(self._clock(), self._datetime_pattern, self._zone)

    def current_date(self) -> str:
        return self._format_instant(self._clock(), self._date_pattern, self._zone)

    # --- instants --------------------------------------------------------

    def to_persian_date(self, instant: datetime) -> str:
        """Persian date of `instant` read at UTC, in the date pattern."""
        _require(instant, INSTANT_MUST_NOT_BE_NONE)
        return self._format_instant(instant, self._date_pattern, timezone.utc)

    def to_persian_date_time(self, instant: datetime) -> str:
        """Persian date-time of `instant` read at UTC, in the date-time pattern."""
        _require(instant, INSTANT_MUST_NOT_BE_NONE)
        return self._format_instant(instant, self._datetime_pattern, timezone.utc)

    def to_persian_date_time_with_zone(self, instant: datetime) -> str:
        """
        Persian date-time of `instant` read on the reference zone's wall clock.
        2023-03-21T00:00:00Z gives 1402/01/01T03:30:00 for Asia/Tehran.
        """
        _require(instant, INSTANT_MUST_NOT_BE_NONE)
        return self._format_instant(instant, self._datetime_pattern, self._zone)

    # --- local values ----------------------------------------------------

    def to_persian_local_date(self, local_date: date | datetime) -> str:
        _require(local_date, LOCAL_DATE_MUST_NOT_BE_NONE)
        return self._format_local(local_date, self._date_pattern)

    def to_persian_local_date_time(self, local_date_time: date | datetime) -> str:
        """A date without a time starts at midnight: 2023-03-21 gives 1402/01/01T00:00:00."""
        _require(local_date_time, LOCAL_DATE_TIME_MUST_NOT_BE_NONE)
        return self._format_local(local_date_time, self._datetime_pattern)

    def to_persian_date_time_no_zone(self, local_date_time: datetime) -> str:
        _require(local_date_time, LOCAL_DATE_TIME_MUST_NOT_BE_NONE)
        if not isinstance(local_date_time, datetime):
            raise TypeError("local_date_time must be a datetime")
        return self._format_local(local_date_time, self._datetime_pattern)

    # --- Gregorian ISO strings -------------------------------------------

    def to_persian_date_from_iso(self, gregorian_date: str) -> str:
        """``2024-03-20`` gives ``1403/01/01``."""
        return self._format_local(parse_iso_date(gregorian_date), self._date_pattern)

    def to_persian_date_time_from_iso(self, gregorian_date_time: str) -> str:
        """``2024-03-20T00:00:00`` gives ``1403/01/01T00:00:00``."""
        return self._format_local(parse_iso_date_time(gregorian_date_time), self._datetime_pattern)

    def to_persian_date_time_start_of_day(self, gregorian_date: str) -> str:
        return self._format_local(parse_iso_date(gregorian_date), self._datetime_pattern)

    # --- lookup keys -----------------------------------------------------

    def to_persian_find_date(self, value: date | datetime) -> str:
        """
        Lookup key for `value` in the find pattern (``yyyyMMdd`` by default).
        Aware datetimes are read at the reference zone, naive values are
        taken as its wall clock.
        """
        _require(value, LOCAL_DATE_MUST_NOT_BE_NONE)
        if isinstance(value, datetime) and value.tzinfo is not None:
            return self._format_instant(value, self._find_pattern, self._zone)
        return self._format_local(value, self._find_pattern)

    def from_find_date(self, find_date: str, zone: tzinfo | str) -> date:
        _require(zone, ZONE_MUST_NOT_BE_NONE)
        target = resolve_zone(zone)
        return self._parse_to_instant(find_date, self._find_pattern).astimezone(target).date()

    # --- arithmetic ------------------------------------------------------

    def plus_days(self, persian_date: str, days: int) -> str:
        # wall-clock shift in the reference zone, then resolve back to an instant
        local = self._parse_local(persian_date, self._date_pattern)
        try:
            local += timedelta(days=days)
        except OverflowError as exc:
            raise DateOutOfRangeError(f"{persian_date} plus {days} days is out of range") from exc
        return self._format_instant(self._resolve(local), self._date_pattern, self._zone)

    def minus_days(self, persian_date: str, days: int) -> str:
        """``1403/01/01`` minus 1 gives ``1402/12/29``."""
        return self.plus_days(persian_date, -days)

    def local_date_duration(self, start_persian_date: str, end_persian_date: str, unit: DurationUnit | str) -> int:
        start = self._parse_local(start_persian_date, self._date_pattern)
        end = self._parse_local(end_persian_date, self._date_pattern)
        return self._duration(start, end, unit)

    def local_date_time_duration(
        self, start_persian_date_time: str, end_persian_date_time: str, unit: DurationUnit | str
    ) -> int:
        start = self._parse_local(start_persian_date_time, self._datetime_pattern)
        end = self._parse_local(end_persian_date_time, self._datetime_pattern)
        return self._duration(start, end, unit)

    # --- back to Gregorian -----------------------------------------------

    def to_gregorian_date(self, persian_date: str, zone: tzinfo | str) -> date:
        """``1403/01/01`` in Asia/Tehran gives ``date(2024, 3, 20)``."""
        _require(zone, ZONE_MUST_NOT_BE_NONE)
        target = resolve_zone(zone)
        result = self._parse_to_instant(persian_date, self._date_pattern).astimezone(target).date()
        logger.debug("to_gregorian_date persian=%s zone=%s result=%s", persian_date, zone_name(target), result)
        return result

    def to_gregorian_date_time(self, persian_date_time: str, zone: tzinfo | str) -> datetime:
        _require(zone, ZONE_MUST_NOT_BE_NONE)
        target = resolve_zone(zone)
        instant = self._parse_to_instant(persian_date_time, self._datetime_pattern)
        return instant.astimezone(target).replace(tzinfo=None)
