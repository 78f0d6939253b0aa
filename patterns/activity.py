from __future__ import annotations

from datetime import tzinfo
from typing import Iterable

from constants import MAX_ACTIVITY_PATTERNS

from .config import ACTIVITY_TAXONOMY
from .models import ActivityPattern, ConversationInsight
from .text import snippet, time_of_day
from .types import Taxonomy


def analyze_activity_patterns(
    insights: Iterable[ConversationInsight],
    taxonomy: Taxonomy = ACTIVITY_TAXONOMY,
    *,
    local_timezone: tzinfo | None = None,
) -> list[ActivityPattern]:
    activities: dict[str, ActivityPattern] = {}

    for insight in insights:
        message = insight.message.lower()
        bucket = time_of_day(insight.created_at, local_timezone).value
        for definition in taxonomy:
            if not definition.matches(message):
                continue
            existing = activities.get(definition.name)
            if existing is None:
                # context is seeded from the first matching message only
                activities[definition.name] = ActivityPattern(
                    activity=definition.name,
                    frequency=1,
                    preferred_times=[bucket],
                    context=[snippet(insight.message)],
                    last_mentioned=insight.created_at,
                )
                continue
            existing.frequency += 1
            existing.last_mentioned = insight.created_at
            if bucket not in existing.preferred_times:
                existing.preferred_times.append(bucket)

    ranked = sorted(activities.values(), key=lambda activity: activity.frequency, reverse=True)
    return ranked[:MAX_ACTIVITY_PATTERNS]
