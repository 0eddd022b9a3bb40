"""Persian (Solar Hijri / Jalali) <-> Gregorian conversion, formatting and parsing."""
from persiancalendar.core.config import DateServiceConfig, DateServiceConfigBuilder, Settings
from persiancalendar.core.errors import (
    AmbiguousOrInvalidLocalTimeError,
    DateOutOfRangeError,
    FieldRangeError,
    InvalidFieldError,
    InvalidPatternError,
    NullOrEmptyInputError,
    ParseError,
    PatternMismatchError,
    PersianCalendarError,
)
from persiancalendar.schemas.fields import PersianFields, ZonedFields
from persiancalendar.services import CalendarPattern, DateService, DurationUnit, compile_pattern
from persiancalendar.utils.patterns import format_fields, parse_fields

__version__ = "1.0.0"

__all__ = [
    "AmbiguousOrInvalidLocalTimeError",
    "CalendarPattern",
    "DateService",
    "DateOutOfRangeError",
    "DateServiceConfig",
    "DateServiceConfigBuilder",
    "DurationUnit",
    "FieldRangeError",
    "InvalidFieldError",
    "InvalidPatternError",
    "NullOrEmptyInputError",
    "ParseError",
    "PatternMismatchError",
    "PersianCalendarError",
    "PersianFields",
    "Settings",
    "ZonedFields",
    "compile_pattern",
    "format_fields",
    "parse_fields",
]
