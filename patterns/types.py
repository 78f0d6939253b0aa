from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


class LanguageFeature(str, Enum):
    LONG_SENTENCES = "long_sentences"
    SHORT_SENTENCES = "short_sentences"
    QUESTIONS = "questions"
    EXCLAMATIONS = "exclamations"


LANGUAGE_FEATURE_CONTEXT: Mapping[LanguageFeature, str] = {
    LanguageFeature.LONG_SENTENCES: "Long, detailed sentences",
    LanguageFeature.SHORT_SENTENCES: "Short, concise sentences",
    LanguageFeature.QUESTIONS: "Asking questions",
    LanguageFeature.EXCLAMATIONS: "Expressive language",
}


@dataclass(frozen=True, slots=True)
class CategoryDefinition:
    """A taxonomy entry: category name plus the keywords that trigger it."""

    name: str
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        """Substring membership test; ``text`` is expected to be lower-cased."""
        return any(keyword in text for keyword in self.keywords)

    def matched_keywords(self, text: str) -> tuple[str, ...]:
        return tuple(keyword for keyword in self.keywords if keyword in text)


Taxonomy = tuple[CategoryDefinition, ...]


def build_taxonomy_index(definitions: Iterable[CategoryDefinition]) -> Mapping[str, CategoryDefinition]:
    definition_list = tuple(definitions)
    index = {definition.name: definition for definition in definition_list}
    if len(index) != len(definition_list):
        raise ValueError("Duplicate category definitions detected")
    return index
