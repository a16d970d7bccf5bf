import datetime

import pytest

from skin_journal.services.ingredient_db import load_ingredient_database
from skin_journal.services.models import JournalEntry


@pytest.fixture(scope="session")
def db():
    return load_ingredient_database()


@pytest.fixture
def make_entry():
    base = datetime.datetime(2024, 5, 1, 9, 0)

    def _make(day_offset, label, confidence, **kwargs):
        return JournalEntry(
            timestamp=base + datetime.timedelta(days=day_offset),
            label=label,
            confidence=confidence,
            **kwargs
        )

    return _make
