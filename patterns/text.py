"""Small text and time helpers shared by the classifiers."""

from __future__ import annotations

import re
from datetime import datetime, tzinfo
from typing import Iterator

from constants import EXAMPLE_SNIPPET_LENGTH

from .types import TimeOfDay

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
# A sentence body followed by its terminating punctuation run, if any.
_SENTENCE_WITH_TERMINATOR = re.compile(r"([^.!?]*)([.!?]*)")


def split_sentences(text: str) -> list[str]:
    """Split on runs of ``.``, ``!`` and ``?``; fragments are returned untrimmed."""
    return _SENTENCE_SPLIT.split(text)


def iter_terminated_sentences(text: str) -> Iterator[tuple[str, str]]:
    """Yield ``(body, terminator)`` pairs for each non-empty sentence.

    Unlike :func:`split_sentences` the punctuation run that ended the sentence
    is preserved, so callers can tell questions and exclamations apart.
    """
    for match in _SENTENCE_WITH_TERMINATOR.finditer(text):
        body, terminator = match.group(1).strip(), match.group(2)
        if body:
            yield body, terminator


def first_sentence_with(text: str, keywords: tuple[str, ...]) -> str | None:
    for sentence in split_sentences(text):
        if any(keyword in sentence for keyword in keywords):
            return sentence.strip()
    return None


def snippet(text: str, length: int = EXAMPLE_SNIPPET_LENGTH) -> str:
    return text[:length]


def local_hour(moment: datetime, local_timezone: tzinfo | None = None) -> int:
    """Wall-clock hour of ``moment`` in ``local_timezone``.

    Without a zone, aware values are read in the process-local zone so the
    bucket does not depend on the offset a source happened to attach.
    Naive values are taken as already local.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(local_timezone)
    return moment.hour


def time_of_day(moment: datetime, local_timezone: tzinfo | None = None) -> TimeOfDay:
    hour = local_hour(moment, local_timezone)
    if hour < 12:
        return TimeOfDay.MORNING
    if hour < 17:
        return TimeOfDay.AFTERNOON
    if hour < 21:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT
