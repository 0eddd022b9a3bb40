from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from persiancalendar.core.constants import (
    ASIA_TEHRAN_ZONE,
    DEFAULT_PERSIAN_DATE_FORMAT,
    DEFAULT_PERSIAN_DATE_TIME_FORMAT,
    DEFAULT_LOCAL_TIME_POLICY,
    DEFAULT_PERSIAN_FIND_DATE_FORMAT,
)
from persiancalendar.utils.patterns import compile_pattern
from persiancalendar.utils.zones import resolve_zone

LocalTimePolicy = Literal["raise", "compatible"]


class Settings(BaseSettings):
    """Environment overrides. Only read when a caller builds one explicitly."""

    model_config = SettingsConfigDict(env_prefix="PERSIAN_CALENDAR_", env_file=".env", extra="ignore")

    date_format: str = DEFAULT_PERSIAN_DATE_FORMAT
    datetime_format: str = DEFAULT_PERSIAN_DATE_TIME_FORMAT
    find_date_format: str = DEFAULT_PERSIAN_FIND_DATE_FORMAT
    zone: str = ASIA_TEHRAN_ZONE
    local_time_policy: LocalTimePolicy = DEFAULT_LOCAL_TIME_POLICY


class DateServiceConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    date_format: str = DEFAULT_PERSIAN_DATE_FORMAT
    datetime_format: str = DEFAULT_PERSIAN_DATE_TIME_FORMAT
    # lookup / index keys
    find_date_format: str = DEFAULT_PERSIAN_FIND_DATE_FORMAT
    # reference zone for local values and zone-aware output
    zone: str = ASIA_TEHRAN_ZONE
    local_time_policy: LocalTimePolicy = DEFAULT_LOCAL_TIME_POLICY

    @field_validator("date_format", "datetime_format", "find_date_format")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        compile_pattern(value)
        return value

    @field_validator("zone")
    @classmethod
    def _check_zone(cls, value: str) -> str:
        resolve_zone(value)
        return value

    @classmethod
    def builder(cls) -> DateServiceConfigBuilder:
        return DateServiceConfigBuilder()

    @classmethod
    def from_settings(cls, settings: Settings) -> DateServiceConfig:
        return cls(**settings.model_dump())


class DateServiceConfigBuilder:
    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def with_date_format(self, pattern: str) -> DateServiceConfigBuilder:
        self._values["date_format"] = pattern
        return self

    def with_date_time_format(self, pattern: str) -> DateServiceConfigBuilder:
        self._values["datetime_format"] = pattern
        return self

    def with_find_date_format(self, pattern: str) -> DateServiceConfigBuilder:
        self._values["find_date_format"] = pattern
        return self

    def with_zone(self, zone: str) -> DateServiceConfigBuilder:
        self._values["zone"] = zone
        return self

    def with_local_time_policy(self, policy: LocalTimePolicy) -> DateServiceConfigBuilder:
        self._values["local_time_policy"] = policy
        return self

    def build(self) -> DateServiceConfig:
        return DateServiceConfig(**self._values)
