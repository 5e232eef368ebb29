from datetime import date

import pytest

from db import SettingsStore
from periods import FixedClock


@pytest.fixture
def store(tmp_path):
    return SettingsStore(tmp_path / "society.db")


@pytest.fixture
def clock_on():
    """Build a FixedClock for a given year, month, day."""
    def _make(year, month, day):
        return FixedClock(date(year, month, day))
    return _make
