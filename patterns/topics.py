from __future__ import annotations

from typing import Iterable

from constants import MAX_TOPIC_PREFERENCES

from .config import TOPIC_TAXONOMY
from .models import ConversationInsight, TopicPreference
from .types import Taxonomy

BASE_INTEREST = 5.0
INTEREST_STEP = 0.5
MAX_INTEREST = 10.0


def analyze_topic_preferences(
    insights: Iterable[ConversationInsight],
    taxonomy: Taxonomy = TOPIC_TAXONOMY,
) -> list[TopicPreference]:
    topics: dict[str, TopicPreference] = {}

    for insight in insights:
        message = insight.message.lower()
        for definition in taxonomy:
            if not definition.matches(message):
                continue
            existing = topics.get(definition.name)
            if existing is None:
                topics[definition.name] = TopicPreference(
                    topic=definition.name,
                    interest_level=BASE_INTEREST,
                    frequency=1,
                    last_discussed=insight.created_at,
                )
                continue
            existing.frequency += 1
            existing.last_discussed = insight.created_at
            existing.interest_level = min(MAX_INTEREST, existing.interest_level + INTEREST_STEP)

    ranked = sorted(topics.values(), key=lambda topic: topic.frequency, reverse=True)
    return ranked[:MAX_TOPIC_PREFERENCES]
