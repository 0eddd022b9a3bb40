from __future__ import annotations


class PersianCalendarError(ValueError):
    """Base class for every error raised by persiancalendar."""


class NullOrEmptyInputError(PersianCalendarError):
    pass


class InvalidPatternError(PersianCalendarError):
    pass


class ParseError(PersianCalendarError):
    """
    Input text could not be read as a date.
    Keeps the offending text, the pattern it was read against and the
    character position where matching stopped (None when unknown).
    """

    def __init__(self, message: str, *, text: str | None = None, pattern: str | None = None, position: int | None = None):
        super().__init__(message)
        self.text = text
        self.pattern = pattern
        self.position = position


class PatternMismatchError(ParseError):
    pass


class InvalidFieldError(PersianCalendarError):
    pass


class FieldRangeError(InvalidFieldError):
    pass


class AmbiguousOrInvalidLocalTimeError(PersianCalendarError):
    def __init__(self, message: str, *, zone: str | None = None, kind: str | None = None):
        super().__init__(message)
        self.zone = zone
        # "gap" or "overlap"
        self.kind = kind


class DateOutOfRangeError(PersianCalendarError):
    """The value falls outside what ``datetime`` can represent (UTC years 1 to 9999)."""
