from __future__ import annotations

from datetime import tzinfo
from typing import Iterable

from constants import MAX_MOOD_PATTERNS

from .config import MOOD_TAXONOMY
from .models import ConversationInsight, MoodPattern
from .text import first_sentence_with, time_of_day
from .types import CategoryDefinition, Taxonomy

GENERAL_TRIGGER = "general"


def extract_trigger(message: str, definition: CategoryDefinition) -> str:
    """First sentence of ``message`` mentioning one of the category keywords."""
    matched = definition.matched_keywords(message)
    return first_sentence_with(message, matched) or GENERAL_TRIGGER


def analyze_mood_patterns(
    insights: Iterable[ConversationInsight],
    taxonomy: Taxonomy = MOOD_TAXONOMY,
    *,
    local_timezone: tzinfo | None = None,
) -> list[MoodPattern]:
    moods: dict[str, MoodPattern] = {}

    for insight in insights:
        message = insight.message.lower()
        bucket = time_of_day(insight.created_at, local_timezone).value
        for definition in taxonomy:
            if not definition.matches(message):
                continue
            trigger = extract_trigger(message, definition)
            existing = moods.get(definition.name)
            if existing is None:
                moods[definition.name] = MoodPattern(
                    mood=definition.name,
                    frequency=1,
                    triggers=[trigger],
                    time_of_day=[bucket],
                    last_mentioned=insight.created_at,
                )
                continue
            existing.frequency += 1
            existing.last_mentioned = insight.created_at
            if bucket not in existing.time_of_day:
                existing.time_of_day.append(bucket)
            if trigger not in existing.triggers:
                existing.triggers.append(trigger)

    ranked = sorted(moods.values(), key=lambda mood: mood.frequency, reverse=True)
    return ranked[:MAX_MOOD_PATTERNS]
