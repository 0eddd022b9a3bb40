"""
Instant <-> zoned wall-clock translation.

An instant is a timezone-aware ``datetime``. Wall-clock readings are
``ZonedFields`` (Gregorian). Zones are ``zoneinfo.ZoneInfo`` objects or
IANA keys such as ``Asia/Tehran``.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from persiancalendar.core.constants import DEFAULT_LOCAL_TIME_POLICY, LOCAL_TIME_POLICIES, ZONE_MUST_NOT_BE_NONE
from persiancalendar.core.errors import AmbiguousOrInvalidLocalTimeError, DateOutOfRangeError, NullOrEmptyInputError
from persiancalendar.schemas.fields import ZonedFields

logger = logging.getLogger("persiancalendar.zones")


def resolve_zone(zone: tzinfo | str | None) -> tzinfo:
    if zone is None:
        raise NullOrEmptyInputError(ZONE_MUST_NOT_BE_NONE)
    if isinstance(zone, tzinfo):
        return zone
    key = str(zone).strip()
    if not key:
        raise NullOrEmptyInputError(ZONE_MUST_NOT_BE_NONE)
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone: {key}") from exc


def zone_name(tz: tzinfo) -> str:
    key = getattr(tz, "key", None)
    return key if key else str(tz)


def to_zoned_fields(instant: datetime, zone: tzinfo | str) -> ZonedFields:
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValueError("instant must be a timezone-aware datetime")
    tz = resolve_zone(zone)
    try:
        local = instant.astimezone(tz)
    except OverflowError as exc:
        raise DateOutOfRangeError(f"{instant.isoformat()} is out of range in zone {zone_name(tz)}") from exc
    return ZonedFields(local.year, local.month, local.day, local.hour, local.minute, local.second, zone_name(tz))


def from_zoned_fields(fields: ZonedFields, zone: tzinfo | str, policy: str = DEFAULT_LOCAL_TIME_POLICY) -> datetime:
    """
    Instant (aware, UTC) for wall-clock `fields` read in `zone`.

    policy="compatible": a gap is pushed forward by its length and an overlap
    takes the earlier offset, so a midnight that falls in a DST gap becomes
    the first instant of that day.
    policy="raise": a reading inside a DST gap or overlap raises
    AmbiguousOrInvalidLocalTimeError.

    Readings whose instant would fall before 0001-01-01 UTC or after
    9999-12-31 UTC raise DateOutOfRangeError.
    """
    if policy not in LOCAL_TIME_POLICIES:
        raise ValueError(f"Unknown local time policy: {policy}")
    tz = resolve_zone(zone)
    naive = fields.to_naive()
    earlier = naive.replace(tzinfo=tz, fold=0)
    later = naive.replace(tzinfo=tz, fold=1)
    try:
        instant = earlier.astimezone(timezone.utc)
        if earlier.utcoffset() == later.utcoffset():
            return instant
        round_trip = instant.astimezone(tz).replace(tzinfo=None)
    except OverflowError as exc:
        raise DateOutOfRangeError(f"Local time {naive.isoformat()} is out of range in zone {zone_name(tz)}") from exc

    kind = "gap" if round_trip != naive else "overlap"
    if policy == "raise":
        raise AmbiguousOrInvalidLocalTimeError(
            f"Local time {naive.isoformat()} falls in a {kind} of zone {zone_name(tz)}",
            zone=zone_name(tz),
            kind=kind,
        )
    logger.debug("local_time_resolved kind=%s local=%s zone=%s", kind, naive.isoformat(), zone_name(tz))
    return instant


def from_local(value: date | datetime, zone: tzinfo | str, policy: str = DEFAULT_LOCAL_TIME_POLICY) -> datetime:
    """A local date or date-time is the wall clock of `zone`; dates start at midnight."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        raise ValueError("local value must be a naive date or datetime")
    return from_zoned_fields(ZonedFields.from_local(value), zone, policy)
