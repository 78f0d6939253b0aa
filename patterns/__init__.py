"""Lexical behavioral pattern recognition over conversation insights."""

from .activity import analyze_activity_patterns
from .aggregator import PatternAggregator, analyze_user_patterns, build_report
from .config import (
    ACTIVITY_TAXONOMY,
    MOOD_TAXONOMY,
    SLEEP_FACTOR_TAXONOMY,
    TOPIC_TAXONOMY,
    PatternConfig,
)
from .language import analyze_language_patterns
from .models import (
    ActivityPattern,
    ConversationInsight,
    ConversationPattern,
    LanguagePattern,
    MoodPattern,
    PatternAnalysisReport,
    SleepPattern,
    TopicPreference,
    UserPatterns,
)
from .mood import analyze_mood_patterns
from .phrases import analyze_conversation_patterns, extract_phrases
from .sleep import analyze_sleep_patterns
from .source import (
    InsightSource,
    InsightSourceError,
    RestInsightSource,
    RestSourceConfig,
    SQLiteInsightSource,
    StaticInsightSource,
    StoredInsight,
)
from .topics import analyze_topic_preferences
from .types import CategoryDefinition, LanguageFeature, TimeOfDay

__all__ = [
    "PatternAggregator",
    "analyze_user_patterns",
    "build_report",
    "PatternConfig",
    "TOPIC_TAXONOMY",
    "ACTIVITY_TAXONOMY",
    "MOOD_TAXONOMY",
    "SLEEP_FACTOR_TAXONOMY",
    "CategoryDefinition",
    "LanguageFeature",
    "TimeOfDay",
    "ConversationInsight",
    "ConversationPattern",
    "TopicPreference",
    "LanguagePattern",
    "ActivityPattern",
    "MoodPattern",
    "SleepPattern",
    "UserPatterns",
    "PatternAnalysisReport",
    "InsightSource",
    "InsightSourceError",
    "SQLiteInsightSource",
    "RestInsightSource",
    "RestSourceConfig",
    "StaticInsightSource",
    "StoredInsight",
    "analyze_conversation_patterns",
    "extract_phrases",
    "analyze_topic_preferences",
    "analyze_language_patterns",
    "analyze_activity_patterns",
    "analyze_mood_patterns",
    "analyze_sleep_patterns",
]
