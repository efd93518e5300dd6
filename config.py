import os

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
# Seconds a player has to answer an opened tile
ANSWER_SECONDS = float(os.environ.get("ANSWER_SECONDS", "30"))


def board_path() -> str:
    """JSON board file; empty means use the embedded board."""
    return os.environ.get("TRIVIA_BOARD_PATH", "")
