"""Pydantic models for pattern analysis inputs and results.

Attributes are snake_case in Python and serialize with camelCase aliases
(``model_dump(by_alias=True)``), which is the JSON shape dashboard consumers
read. Either spelling is accepted on input.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .timestamps import parse_iso_timestamp


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConversationInsight(_CamelModel):
    """A single stored conversational message; the raw unit of input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    message: str = ""
    created_at: datetime

    @field_validator("message", mode="before")
    @classmethod
    def _coerce_message(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value: Any) -> datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            parsed = parse_iso_timestamp(value)
            if parsed is None:
                raise ValueError(f"Unparseable created_at timestamp: {value!r}")
            return parsed
        msg = f"Unsupported created_at value: {value!r}"
        raise ValueError(msg)


class ConversationPattern(_CamelModel):
    pattern: str
    frequency: int = 1
    first_seen: datetime
    last_seen: datetime
    examples: list[str] = Field(default_factory=list)
    confidence: float = 0.5


class TopicPreference(_CamelModel):
    topic: str
    interest_level: float = 5.0
    frequency: int = 1
    last_discussed: datetime
    related_topics: list[str] = Field(default_factory=list)


class LanguagePattern(_CamelModel):
    pattern: str
    type: Literal["phrase", "word", "structure"] = "structure"
    frequency: int = 1
    context: list[str] = Field(default_factory=list)


class ActivityPattern(_CamelModel):
    activity: str
    frequency: int = 1
    preferred_times: list[str] = Field(default_factory=list)
    context: list[str] = Field(default_factory=list)
    last_mentioned: datetime


class MoodPattern(_CamelModel):
    mood: str
    frequency: int = 1
    triggers: list[str] = Field(default_factory=list)
    time_of_day: list[str] = Field(default_factory=list)
    last_mentioned: datetime


class SleepPattern(_CamelModel):
    sleep_quality: int = 5
    sleep_duration: float = 7.0
    sleep_time: str = "Unknown"
    wake_time: str = "Unknown"
    factors: list[str] = Field(default_factory=list)
    last_mentioned: datetime


class UserPatterns(_CamelModel):
    """Composite result of one analysis run."""

    user_id: str
    conversation_patterns: list[ConversationPattern] = Field(default_factory=list)
    topic_preferences: list[TopicPreference] = Field(default_factory=list)
    language_patterns: list[LanguagePattern] = Field(default_factory=list)
    activity_patterns: list[ActivityPattern] = Field(default_factory=list)
    mood_patterns: list[MoodPattern] = Field(default_factory=list)
    sleep_patterns: list[SleepPattern] = Field(default_factory=list)
    last_updated: datetime

    @classmethod
    def empty(cls, user_id: str, now: datetime) -> "UserPatterns":
        return cls(user_id=user_id, last_updated=now)

    def is_empty(self) -> bool:
        """True when no category produced anything ("not enough data yet")."""
        return not (
            self.conversation_patterns
            or self.topic_preferences
            or self.language_patterns
            or self.activity_patterns
            or self.mood_patterns
            or self.sleep_patterns
        )


class PatternAnalysisReport(_CamelModel):
    """Envelope returned to callers that want analysis metadata alongside the result."""

    success: bool = True
    patterns: UserPatterns
    analysis_date: datetime
    analysis_period: str
