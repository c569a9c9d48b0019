from __future__ import annotations

import pytest

from typed_prefs import metrics
from typed_prefs.preferences import Preferences
from typed_prefs.store.memory import MemoryStore


@pytest.fixture
def prefs() -> Preferences:
    return Preferences(MemoryStore("user"))


@pytest.fixture(autouse=True)
def reset_metrics():
    for counter in (
        metrics.reads_total,
        metrics.writes_total,
        metrics.misses_total,
        metrics.decode_errors_total,
    ):
        counter.value = 0
    yield
