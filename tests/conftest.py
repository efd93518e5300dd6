import os
import tempfile

# Must be set before db.py is imported anywhere
_TMP_DIR = tempfile.mkdtemp(prefix="trivia-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ.pop("TRIVIA_BOARD_PATH", None)

import pytest  # noqa: E402

from bank import BoardBank  # noqa: E402
from db import init_db  # noqa: E402
from game import store  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _tables():
    init_db()
    yield


@pytest.fixture(autouse=True)
def _fresh_state(monkeypatch):
    monkeypatch.delenv("TRIVIA_BOARD_PATH", raising=False)
    # board is reloaded lazily with this test's environment
    BoardBank._loaded = False
    BoardBank._categories = None
    store.clear()
    yield
    store.clear()


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()
