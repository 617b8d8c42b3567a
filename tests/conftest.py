import pathlib
import sys
from datetime import date

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))


# A Monday. Used wherever a test needs a fixed "today".
ENTRY_DATE = date(2024, 6, 10)


@pytest.fixture
def entry_date():
    return ENTRY_DATE
