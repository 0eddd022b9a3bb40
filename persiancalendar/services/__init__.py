from persiancalendar.services.date_service import DateService
from persiancalendar.services.durations import DurationUnit
from persiancalendar.utils.patterns import CalendarPattern, compile_pattern

__all__ = [
    "CalendarPattern",
    "DateService",
    "DurationUnit",
    "compile_pattern",
]
