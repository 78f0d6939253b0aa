from __future__ import annotations

from typing import Iterable, Iterator

from constants import MAX_CONVERSATION_PATTERNS

from .models import ConversationInsight, ConversationPattern
from .text import snippet

MIN_PHRASE_TOKENS = 3
MAX_PHRASE_TOKENS = 5
MIN_PHRASE_CHARS = 10


def extract_phrases(message: str) -> Iterator[str]:
    """Yield every 3-5 token span of ``message`` longer than 10 characters.

    Spans start at each token index that leaves room for at least three
    tokens, so a message of N tokens yields spans for ``i`` in ``[0, N-3]``.
    """
    words = message.lower().split()
    for start in range(len(words) - MIN_PHRASE_TOKENS + 1):
        longest = min(MAX_PHRASE_TOKENS, len(words) - start)
        for length in range(MIN_PHRASE_TOKENS, longest + 1):
            phrase = " ".join(words[start : start + length])
            if len(phrase) > MIN_PHRASE_CHARS:
                yield phrase


def phrase_confidence(frequency: int) -> float:
    return min(0.9, 0.5 + frequency * 0.1)


def analyze_conversation_patterns(insights: Iterable[ConversationInsight]) -> list[ConversationPattern]:
    patterns: dict[str, ConversationPattern] = {}

    for insight in insights:
        example = snippet(insight.message)
        for phrase in extract_phrases(insight.message):
            existing = patterns.get(phrase)
            if existing is None:
                patterns[phrase] = ConversationPattern(
                    pattern=phrase,
                    frequency=1,
                    first_seen=insight.created_at,
                    last_seen=insight.created_at,
                    examples=[example],
                    confidence=0.5,
                )
                continue
            existing.frequency += 1
            existing.last_seen = insight.created_at
            existing.examples.append(example)

    recurring = [pattern for pattern in patterns.values() if pattern.frequency > 1]
    for pattern in recurring:
        pattern.confidence = phrase_confidence(pattern.frequency)
    recurring.sort(key=lambda pattern: pattern.frequency, reverse=True)
    return recurring[:MAX_CONVERSATION_PATTERNS]
