from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo

from .types import CategoryDefinition, Taxonomy, build_taxonomy_index


TOPIC_TAXONOMY: Taxonomy = (
    CategoryDefinition(
        "health",
        ("health", "wellness", "fitness", "workout", "exercise", "nutrition", "diet"),
    ),
    CategoryDefinition("sleep", ("sleep", "rest", "bed", "tired", "energy", "recovery")),
    CategoryDefinition(
        "mood",
        ("mood", "feeling", "happy", "sad", "stressed", "anxious", "excited"),
    ),
    CategoryDefinition("work", ("work", "job", "career", "meeting", "project", "deadline")),
    CategoryDefinition(
        "relationships",
        ("family", "friend", "partner", "relationship", "social"),
    ),
    CategoryDefinition(
        "travel",
        ("travel", "trip", "vacation", "hotel", "resort", "destination"),
    ),
    CategoryDefinition(
        "hobbies",
        ("hobby", "interest", "passion", "creative", "art", "music", "reading"),
    ),
    CategoryDefinition("weather", ("weather", "temperature", "sunny", "rainy", "cold", "hot")),
)

ACTIVITY_TAXONOMY: Taxonomy = (
    CategoryDefinition(
        "exercise",
        ("workout", "exercise", "gym", "run", "jog", "walk", "hike", "swim"),
    ),
    CategoryDefinition("social", ("meet", "party", "dinner", "lunch", "coffee", "drink")),
    CategoryDefinition("creative", ("write", "paint", "draw", "create", "design", "build")),
    CategoryDefinition("relaxation", ("relax", "chill", "rest", "meditate", "yoga", "massage")),
    CategoryDefinition("outdoor", ("outdoor", "nature", "park", "beach", "mountain", "trail")),
    CategoryDefinition("indoor", ("indoor", "home", "room", "office", "kitchen")),
)

MOOD_TAXONOMY: Taxonomy = (
    CategoryDefinition(
        "positive",
        ("happy", "excited", "great", "wonderful", "amazing", "love", "enjoy"),
    ),
    CategoryDefinition(
        "negative",
        ("sad", "angry", "frustrated", "tired", "stressed", "worried", "anxious"),
    ),
    CategoryDefinition("neutral", ("okay", "fine", "alright", "normal", "usual", "typical")),
    CategoryDefinition(
        "energetic",
        ("energetic", "motivated", "inspired", "pumped", "ready", "focused"),
    ),
    CategoryDefinition("calm", ("calm", "peaceful", "relaxed", "chill", "serene", "tranquil")),
)

SLEEP_FACTOR_TAXONOMY: Taxonomy = (
    CategoryDefinition("stress", ("stress", "anxious")),
    CategoryDefinition("caffeine", ("caffeine", "coffee")),
    CategoryDefinition("exercise", ("exercise", "workout")),
    CategoryDefinition("noise", ("noise", "loud")),
    CategoryDefinition("temperature", ("temperature", "hot", "cold")),
    CategoryDefinition("screen_time", ("screen", "phone", "tv")),
)

# Checked top to bottom; the first rung with a matching word wins.
SLEEP_QUALITY_LADDER: tuple[tuple[int, tuple[str, ...]], ...] = (
    (9, ("great", "amazing", "wonderful")),
    (7, ("good", "nice", "decent")),
    (5, ("okay", "fine", "alright")),
    (3, ("bad", "poor", "terrible")),
)

SLEEP_KEYWORDS: tuple[str, ...] = ("sleep", "rest", "bed")

DEFAULT_SLEEP_QUALITY = 5
DEFAULT_SLEEP_DURATION = 7.0
UNKNOWN_TIME = "Unknown"


def _validate_taxonomy(label: str, taxonomy: Taxonomy) -> None:
    try:
        build_taxonomy_index(taxonomy)
    except ValueError as exc:
        raise ValueError(f"{label} taxonomy has duplicate category names") from exc
    empty = [definition.name for definition in taxonomy if not definition.keywords]
    if empty:
        raise ValueError(f"{label} taxonomy categories without keywords: {empty}")
    uppercase = [
        definition.name
        for definition in taxonomy
        if any(keyword != keyword.lower() for keyword in definition.keywords)
    ]
    if uppercase:
        raise ValueError(f"{label} taxonomy keywords must be lower-case: {uppercase}")


@dataclass(slots=True)
class PatternConfig:
    topics: Taxonomy = TOPIC_TAXONOMY
    activities: Taxonomy = ACTIVITY_TAXONOMY
    moods: Taxonomy = MOOD_TAXONOMY
    sleep_factors: Taxonomy = SLEEP_FACTOR_TAXONOMY
    local_timezone: tzinfo | None = None

    def validate(self) -> "PatternConfig":
        _validate_taxonomy("topic", self.topics)
        _validate_taxonomy("activity", self.activities)
        _validate_taxonomy("mood", self.moods)
        _validate_taxonomy("sleep factor", self.sleep_factors)
        return self
