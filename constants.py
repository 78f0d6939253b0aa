"""Shared constants used across the pattern recognition engine."""

# Default trailing window (days) for an analysis run
DEFAULT_DAYS_BACK = 30

# Result caps per pattern category; fixed, not configurable per call
MAX_CONVERSATION_PATTERNS = 20
MAX_TOPIC_PREFERENCES = 15
MAX_LANGUAGE_PATTERNS = 10
MAX_ACTIVITY_PATTERNS = 10
MAX_MOOD_PATTERNS = 8
MAX_SLEEP_PATTERNS = 5

# Evidence snippets (examples, activity context) are cut to this many characters
EXAMPLE_SNIPPET_LENGTH = 100

# Number of newest insights returned by a quick "recent insights" lookup
DEFAULT_RECENT_INSIGHTS = 10
