"""
Pattern based formatting and parsing of Persian field sets.

Patterns use the familiar SimpleDateFormat letters:

    y  year      M  month     d  day
    H  hour      m  minute    s  second

The run length of a letter is its width (``yyyy``, ``MM``). Text inside single
quotes is literal (``'T'``), ``''`` is a quote character, and any non-letter
character is literal as-is.

    >>> p = compile_pattern("yyyy/MM/dd'T'HH:mm:ss")
    >>> p.format(PersianFields(1402, 1, 1, 3, 30, 0))
    '1402/01/01T03:30:00'
    >>> p.parse("1402/01/01T03:30:00")
    PersianFields(year=1402, month=1, day=1, hour=3, minute=30, second=0)
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache

from persiancalendar.core.errors import InvalidPatternError, PatternMismatchError
from persiancalendar.schemas.fields import PersianFields
from persiancalendar.utils.jalali import to_ascii_digits, validate_fields

FIELD_LETTERS: dict[str, str] = {
    "y": "year",
    "M": "month",
    "d": "day",
    "H": "hour",
    "m": "minute",
    "s": "second",
}

# Fields a pattern does not mention.
_PARSE_DEFAULTS = {"year": 1, "month": 1, "day": 1, "hour": 0, "minute": 0, "second": 0}


@dataclass(frozen=True)
class PatternToken:
    name: str | None
    text: str = ""
    width: int = 0
    regex: re.Pattern[str] | None = field(default=None, compare=False, repr=False)

    @property
    def is_literal(self) -> bool:
        return self.name is None


@dataclass(frozen=True)
class CalendarPattern:
    source: str
    tokens: tuple[PatternToken, ...]

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(t.name for t in self.tokens if t.name is not None)

    def format(self, fields: PersianFields) -> str:
        out: list[str] = []
        for tok in self.tokens:
            if tok.name is None:
                out.append(tok.text)
            else:
                out.append(f"{getattr(fields, tok.name):0{tok.width}d}")
        return "".join(out)

    def parse(self, text: str) -> PersianFields:
        """
        Read `text` back into fields. Literals must match exactly. Raises
        PatternMismatchError on structure, FieldRangeError/InvalidFieldError
        on calendar-invalid values. A repeated field keeps its last value.
        """
        if not isinstance(text, str):
            raise PatternMismatchError(
                f"Expected a string, got {type(text).__name__}", text=None, pattern=self.source, position=0
            )
        source = to_ascii_digits(text)
        values = dict(_PARSE_DEFAULTS)
        pos = 0
        for tok in self.tokens:
            m = tok.regex.match(source, pos)
            if m is None:
                expected = repr(tok.text) if tok.is_literal else f"{tok.name} ({tok.width} digits)"
                raise PatternMismatchError(
                    f"Unparseable date {text!r} for pattern {self.source!r}: expected {expected} at position {pos}",
                    text=text,
                    pattern=self.source,
                    position=pos,
                )
            if tok.name is not None:
                values[tok.name] = int(m.group())
            pos = m.end()
        if pos != len(source):
            raise PatternMismatchError(
                f"Unparseable date {text!r} for pattern {self.source!r}: unexpected text at position {pos}",
                text=text,
                pattern=self.source,
                position=pos,
            )
        return validate_fields(PersianFields(**values))


def _tokenize(pattern: str) -> list[tuple[str | None, str, int]]:
    raw: list[tuple[str | None, str, int]] = []
    literal: list[str] = []

    def flush() -> None:
        if literal:
            raw.append((None, "".join(literal), 0))
            literal.clear()

    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue
            j = i + 1
            while True:
                if j >= n:
                    raise InvalidPatternError(f"Unterminated quote in pattern {pattern!r}")
                if pattern[j] == "'":
                    if j + 1 < n and pattern[j + 1] == "'":
                        literal.append("'")
                        j += 2
                        continue
                    break
                literal.append(pattern[j])
                j += 1
            i = j + 1
        elif c in FIELD_LETTERS:
            j = i
            while j < n and pattern[j] == c:
                j += 1
            flush()
            raw.append((FIELD_LETTERS[c], c, j - i))
            i = j
        elif c.isascii() and c.isalpha():
            raise InvalidPatternError(f"Unsupported pattern letter {c!r} in {pattern!r}")
        else:
            literal.append(c)
            i += 1
    flush()
    return raw


def _field_regex(name: str, width: int, abutting: bool) -> str:
    # years before 1 AP format with a leading minus inside the field width
    if name == "year":
        if abutting:
            return rf"-\d{{{max(width - 1, 1)}}}|\d{{{width}}}"
        return r"-?\d+"
    if abutting:
        return rf"\d{{{width}}}"
    if width == 1:
        return r"\d{1,2}"
    return rf"\d{{{width}}}"


@lru_cache(maxsize=128)
def compile_pattern(pattern: str) -> CalendarPattern:
    if not pattern:
        raise InvalidPatternError("Pattern must not be empty")
    raw = _tokenize(pattern)
    tokens: list[PatternToken] = []
    for idx, (name, text, width) in enumerate(raw):
        if name is None:
            tokens.append(PatternToken(None, text, 0, re.compile(re.escape(text))))
            continue
        abutting = idx + 1 < len(raw) and raw[idx + 1][0] is not None
        regex = re.compile(_field_regex(name, width, abutting), re.ASCII)
        tokens.append(PatternToken(name, text, width, regex))
    return CalendarPattern(pattern, tuple(tokens))


def format_fields(fields: PersianFields, pattern: CalendarPattern | str) -> str:
    if isinstance(pattern, str):
        pattern = compile_pattern(pattern)
    return pattern.format(fields)


def parse_fields(text: str, pattern: CalendarPattern | str) -> PersianFields:
    if isinstance(pattern, str):
        pattern = compile_pattern(pattern)
    return pattern.parse(text)
