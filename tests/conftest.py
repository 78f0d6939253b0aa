from __future__ import annotations

import time
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def process_zone(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Pin the process-local zone to UTC; tests may switch it via ``TZ``."""
    monkeypatch.setenv("TZ", "UTC0")
    time.tzset()
    yield monkeypatch
    monkeypatch.undo()
    time.tzset()
