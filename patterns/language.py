from __future__ import annotations

from typing import Iterable

from constants import MAX_LANGUAGE_PATTERNS

from .models import ConversationInsight, LanguagePattern
from .text import iter_terminated_sentences
from .types import LANGUAGE_FEATURE_CONTEXT, LanguageFeature

LONG_SENTENCE_WORDS = 15
SHORT_SENTENCE_WORDS = 5


def classify_sentence(body: str, terminator: str) -> list[LanguageFeature]:
    """Return every structural feature a single sentence exhibits."""
    features: list[LanguageFeature] = []
    word_count = len(body.split())
    if word_count > LONG_SENTENCE_WORDS:
        features.append(LanguageFeature.LONG_SENTENCES)
    elif word_count < SHORT_SENTENCE_WORDS:
        features.append(LanguageFeature.SHORT_SENTENCES)
    if "?" in terminator:
        features.append(LanguageFeature.QUESTIONS)
    if "!" in terminator:
        features.append(LanguageFeature.EXCLAMATIONS)
    return features


def _record(patterns: dict[LanguageFeature, LanguagePattern], feature: LanguageFeature) -> None:
    description = LANGUAGE_FEATURE_CONTEXT[feature]
    existing = patterns.get(feature)
    if existing is None:
        patterns[feature] = LanguagePattern(
            pattern=feature.value,
            type="structure",
            frequency=1,
            context=[description],
        )
        return
    existing.frequency += 1
    # one entry per detection, never deduplicated
    existing.context.append(description)


def analyze_language_patterns(insights: Iterable[ConversationInsight]) -> list[LanguagePattern]:
    patterns: dict[LanguageFeature, LanguagePattern] = {}

    for insight in insights:
        for body, terminator in iter_terminated_sentences(insight.message):
            for feature in classify_sentence(body, terminator):
                _record(patterns, feature)

    ranked = sorted(patterns.values(), key=lambda pattern: pattern.frequency, reverse=True)
    return ranked[:MAX_LANGUAGE_PATTERNS]
