"""Alarm and user preference schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import Field

from .base import CamelModel

Weekday = Annotated[int, Field(ge=0, le=6)]
VoiceStyle = Literal["friendly", "professional", "energetic", "calm"]

_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class Alarm(CamelModel):
    """A wake-up alarm. ``days`` uses 0 for Sunday through 6 for Saturday."""

    id: str
    user_id: str
    time: str = Field(pattern=_TIME_PATTERN)
    days: list[Weekday] = Field(default_factory=list)
    enabled: bool = True
    label: str = "Wake up"
    snooze_enabled: bool = True
    snooze_duration: int = Field(default=10, ge=1, le=60)
    created_at: datetime
    updated_at: datetime


class AlarmCreate(CamelModel):
    time: str = Field(pattern=_TIME_PATTERN)
    days: list[Weekday] = Field(default_factory=lambda: [1, 2, 3, 4, 5])
    enabled: bool = True
    label: str = "Wake up"
    snooze_enabled: bool = True
    snooze_duration: int = Field(default=10, ge=1, le=60)


class AlarmUpdate(CamelModel):
    time: str | None = Field(default=None, pattern=_TIME_PATTERN)
    days: list[Weekday] | None = None
    enabled: bool | None = None
    label: str | None = None
    snooze_enabled: bool | None = None
    snooze_duration: int | None = Field(default=None, ge=1, le=60)


class Location(CamelModel):
    city: str
    country: str
    lat: float | None = None
    lon: float | None = None


class UserPreferences(CamelModel):
    user_id: str
    name: str = "User"
    location: Location = Field(default_factory=lambda: Location(city="New York", country="US"))
    voice_style: VoiceStyle = "friendly"
    include_weather: bool = True
    include_news: bool = False
    news_topics: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PreferencesUpdate(CamelModel):
    name: str | None = None
    location: Location | None = None
    voice_style: VoiceStyle | None = None
    include_weather: bool | None = None
    include_news: bool | None = None
    news_topics: list[str] | None = None


__all__ = [
    "Alarm",
    "AlarmCreate",
    "AlarmUpdate",
    "Location",
    "PreferencesUpdate",
    "UserPreferences",
    "VoiceStyle",
    "Weekday",
]
