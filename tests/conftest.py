# tests/conftest.py
import sys
from pathlib import Path
import pytest

# Make "src" importable
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from counter import Engine
from keymap import Keymap


class FixedClock:
    """Always returns the same label; counts calls."""

    def __init__(self, label="T"):
        self.label = label
        self.calls = 0

    def now(self):
        self.calls += 1
        return self.label


class BrokenClock:
    def now(self):
        raise OSError("clock unavailable")


@pytest.fixture
def clock():
    return FixedClock("T")

@pytest.fixture
def engine(clock):
    # Fresh engine per test, no event loop bound
    eng = Engine(clock=clock)
    yield eng
    eng.close()

@pytest.fixture(scope="session")
def keymap():
    return Keymap()
