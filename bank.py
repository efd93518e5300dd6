# Board loading: embedded literal or a JSON board file.

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from pydantic import TypeAdapter, ValidationError

import config
from questions import CATEGORIES
from schemas.board import CategoryModel

logger = logging.getLogger("trivia-board.bank")

_BOARD_ADAPTER = TypeAdapter(List[CategoryModel])


class BoardLoadError(Exception):
    pass


def _read_json(p: Path) -> Any:
    try:
        with p.open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise BoardLoadError(f"cannot read board file {p}: {e}") from e
    except json.JSONDecodeError as e:
        raise BoardLoadError(f"board file {p} is not valid JSON: {e}") from e


def parse_board(raw: Any) -> List[CategoryModel]:
    try:
        categories = _BOARD_ADAPTER.validate_python(raw)
    except ValidationError as e:
        raise BoardLoadError(f"invalid board: {e.error_count()} validation error(s)") from e
    if not categories:
        raise BoardLoadError("board has no categories")
    return categories


def row_count(categories: List[CategoryModel]) -> int:
    return max((len(c.questions) for c in categories), default=0)


class BoardBank:
    # None means the board is unbuilt (never loaded, or the last load failed)
    _categories: Optional[List[CategoryModel]] = None
    _loaded: bool = False

    @classmethod
    def load(cls) -> Optional[List[CategoryModel]]:
        if not cls._loaded:
            cls.reload()
        return cls._categories

    @classmethod
    def reload(cls) -> int:
        """Load the board; returns the number of questions, 0 when unbuilt."""
        cls._loaded = True
        path = config.board_path()
        try:
            if path:
                categories = parse_board(_read_json(Path(path)))
            else:
                categories = parse_board(CATEGORIES)
        except BoardLoadError as e:
            # No retry and no fallback: the board stays unbuilt
            logger.error("board load failed: %s", e)
            cls._categories = None
            return 0

        cls._categories = categories
        n = sum(len(c.questions) for c in categories)
        logger.info(
            "board loaded from %s: %d categories, %d questions",
            path or "embedded",
            len(categories),
            n,
        )
        return n


# Public API
def get_board() -> Optional[List[CategoryModel]]:
    return BoardBank.load()


def reload_bank() -> int:
    return BoardBank.reload()
