from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Callable, Sequence

from constants import DEFAULT_DAYS_BACK

from .activity import analyze_activity_patterns
from .config import PatternConfig
from .language import analyze_language_patterns
from .models import ConversationInsight, PatternAnalysisReport, UserPatterns
from .mood import analyze_mood_patterns
from .phrases import analyze_conversation_patterns
from .sleep import analyze_sleep_patterns
from .source import InsightSource, InsightSourceError
from .topics import analyze_topic_preferences

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class PatternAggregator:
    """Runs every classifier over one fetch of a user's insights.

    Each call builds fresh local state, so a single aggregator can serve
    concurrent requests. Source failures and empty windows both produce
    :meth:`UserPatterns.empty`; callers never receive ``None``.
    """

    def __init__(
        self,
        source: InsightSource,
        config: PatternConfig | None = None,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self.source = source
        self.config = (config or PatternConfig()).validate()
        self.clock = clock

    def analyze_user_patterns(self, user_id: str, days_back: int = DEFAULT_DAYS_BACK) -> UserPatterns:
        if isinstance(days_back, bool) or not isinstance(days_back, int) or days_back < 1:
            raise ValueError(f"days_back must be a positive integer, got {days_back!r}")

        now = self.clock()
        since = now - timedelta(days=days_back)
        logger.info("Analyzing patterns for user %s over last %d days", user_id, days_back)

        insights = self._fetch(user_id, since)
        if not insights:
            logger.info("No conversation insights found for user %s; returning empty patterns", user_id)
            return UserPatterns.empty(user_id, now)

        logger.info("Found %d conversation insights to analyze for user %s", len(insights), user_id)
        try:
            patterns = self._analyze(user_id, insights, now)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Pattern analysis failed for user %s: %s", user_id, exc)
            return UserPatterns.empty(user_id, now)

        logger.info(
            "Pattern analysis complete for user %s: conversation=%d topics=%d language=%d"
            " activities=%d moods=%d sleep=%d",
            user_id,
            len(patterns.conversation_patterns),
            len(patterns.topic_preferences),
            len(patterns.language_patterns),
            len(patterns.activity_patterns),
            len(patterns.mood_patterns),
            len(patterns.sleep_patterns),
        )
        return patterns

    def recent_insights(self, user_id: str, limit: int) -> list[ConversationInsight]:
        """Newest insights for a quick look; source failures yield an empty list."""
        try:
            return self.source.fetch_recent(user_id, limit)
        except InsightSourceError as exc:
            logger.warning("Failed to fetch recent insights for user %s: %s", user_id, exc)
            return []

    def _fetch(self, user_id: str, since: datetime) -> list[ConversationInsight]:
        try:
            return list(self.source.fetch_insights(user_id, since) or [])
        except InsightSourceError as exc:
            logger.warning("Error fetching conversation insights for user %s: %s", user_id, exc)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error fetching insights for user %s: %s", user_id, exc)
        return []

    def _analyze(self, user_id: str, insights: Sequence[ConversationInsight], now: datetime) -> UserPatterns:
        config = self.config
        return UserPatterns(
            user_id=user_id,
            conversation_patterns=analyze_conversation_patterns(insights),
            topic_preferences=analyze_topic_preferences(insights, config.topics),
            language_patterns=analyze_language_patterns(insights),
            activity_patterns=analyze_activity_patterns(
                insights, config.activities, local_timezone=config.local_timezone
            ),
            mood_patterns=analyze_mood_patterns(insights, config.moods, local_timezone=config.local_timezone),
            sleep_patterns=analyze_sleep_patterns(insights, config.sleep_factors),
            last_updated=now,
        )


def analyze_user_patterns(
    source: InsightSource,
    user_id: str,
    days_back: int = DEFAULT_DAYS_BACK,
    *,
    config: PatternConfig | None = None,
    clock: Clock = utc_now,
) -> UserPatterns:
    return PatternAggregator(source, config, clock=clock).analyze_user_patterns(user_id, days_back)


def build_report(patterns: UserPatterns, days_back: int, now: datetime | None = None) -> PatternAnalysisReport:
    return PatternAnalysisReport(
        success=True,
        patterns=patterns,
        analysis_date=now or utc_now(),
        analysis_period=f"{days_back} days",
    )
