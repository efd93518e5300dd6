# Game sessions: players, scores, used tiles and the per-question countdown.
#
# A session owns all mutable game state. Grading itself lives in grading.py
# and never sees any of this.

from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Any, Callable, Dict, List, Optional, Tuple

from grading import grade_answer
from schemas.board import CategoryModel, QuestionModel

logger = logging.getLogger("trivia-board.game")

Clock = Callable[[], float]


class SessionError(ValueError):
    """An action that the current session state does not allow."""


class TileNotFound(LookupError):
    pass


class SessionNotFound(LookupError):
    pass


class Countdown:
    """
    Deadline-based countdown with a single expiry event.

    Nothing runs in the background: the owner calls poll() whenever it
    handles a request, and the expiry callback fires at most once. cancel()
    stops it without firing.
    """

    def __init__(self, seconds: float, on_expire: Callable[[], None], clock: Clock = time.monotonic):
        self.seconds = seconds
        self._on_expire = on_expire
        self._clock = clock
        self._deadline: Optional[float] = None
        self.state = "idle"  # idle | running | cancelled | expired

    @property
    def running(self) -> bool:
        return self.state == "running"

    def start(self) -> None:
        if self.state != "idle":
            raise SessionError(f"countdown already {self.state}")
        self._deadline = self._clock() + self.seconds
        self.state = "running"

    def remaining(self) -> float:
        if not self.running or self._deadline is None:
            return 0.0
        return max(0.0, self._deadline - self._clock())

    def cancel(self) -> bool:
        if not self.running:
            return False
        self.state = "cancelled"
        return True

    def poll(self) -> bool:
        """Fire the expiry callback if the deadline has passed."""
        if self.running and self._deadline is not None and self._clock() >= self._deadline:
            return self.expire_now()
        return False

    def expire_now(self) -> bool:
        if not self.running:
            return False
        self.state = "expired"
        self._on_expire()
        return True


class OpenQuestion:
    def __init__(self, category: int, row: int, title: str, question: QuestionModel, countdown: Countdown):
        self.category = category
        self.row = row
        self.title = title
        self.question = question
        self.countdown = countdown
        self.buzzed: Optional[str] = None


class GameSession:
    def __init__(
        self,
        session_id: str,
        categories: List[CategoryModel],
        players: List[str],
        answer_seconds: float,
        clock: Clock = time.monotonic,
    ):
        names = [(p or "").strip() for p in players]
        if not names or any(not n for n in names):
            raise SessionError("player names must be non-empty")
        if len(set(names)) != len(names):
            raise SessionError("player names must be unique")

        self.id = session_id
        self.categories = categories
        self.players = names
        self.scores: Dict[str, int] = {n: 0 for n in names}
        self.answer_seconds = answer_seconds
        self._clock = clock
        self.used: List[Tuple[int, int]] = []
        self.current: Optional[OpenQuestion] = None
        self.last_outcome: Optional[Dict[str, Any]] = None
        self.history: List[Dict[str, Any]] = []
        self._unrecorded: List[Dict[str, Any]] = []

    @property
    def multiplayer(self) -> bool:
        return len(self.players) > 1

    # --- countdown ----------------------------------------------------------------

    def tick(self) -> bool:
        """Poll the open question's countdown; True if it just expired."""
        if self.current is None:
            return False
        return self.current.countdown.poll()

    def _on_expire(self) -> None:
        q = self.current
        if q is None:
            return
        player = q.buzzed
        delta = -q.question.value if player else 0
        self._resolve(player, None, delta, timed_out=True, answer=None)

    # --- actions ------------------------------------------------------------------

    def open_tile(self, category: int, row: int) -> OpenQuestion:
        expired = self.tick()
        if self.current is not None:
            raise SessionError("a question is already open")
        if category >= len(self.categories):
            raise TileNotFound(f"no category {category}")
        cat = self.categories[category]
        if row >= len(cat.questions):
            raise TileNotFound(f"no tile at category {category} row {row}")
        if (category, row) in self.used:
            raise SessionError("tile already used")

        self.used.append((category, row))
        countdown = Countdown(self.answer_seconds, self._on_expire, clock=self._clock)
        q = OpenQuestion(category, row, cat.title, cat.questions[row], countdown)
        if not self.multiplayer:
            q.buzzed = self.players[0]
        self.current = q
        if not expired:
            self.last_outcome = None
        countdown.start()
        logger.info(
            "session=%s opened %s/%d value=%d", self.id, cat.title, row, q.question.value
        )
        return q

    def buzz(self, player: str) -> OpenQuestion:
        if self.tick():
            raise SessionError("time is up")
        q = self._require_open()
        self._require_player(player)
        if q.buzzed is not None and q.buzzed != player:
            raise SessionError(f"{q.buzzed} buzzed in first")
        q.buzzed = player
        return q

    def submit(self, player: Optional[str], answer: str) -> Dict[str, Any]:
        # An answer that arrives after the deadline loses to the timeout
        if self.tick():
            return self.last_outcome
        q = self._require_open()
        responder = self._responder(q, player)

        q.countdown.cancel()
        verdict = grade_answer(answer, q.question.answer)
        value = q.question.value
        delta = value if verdict.accepted else -value
        return self._resolve(responder, verdict, delta, timed_out=False, answer=answer)

    def expire(self) -> Dict[str, Any]:
        if self.tick():
            return self.last_outcome
        q = self._require_open()
        q.countdown.expire_now()
        return self.last_outcome

    def close(self) -> None:
        """Dismiss the open question without scoring; the tile stays used."""
        if self.tick():
            return
        q = self._require_open()
        q.countdown.cancel()
        self.current = None

    # --- helpers ------------------------------------------------------------------

    def _require_open(self) -> OpenQuestion:
        if self.current is None:
            raise SessionError("no question is open")
        return self.current

    def _require_player(self, player: Optional[str]) -> str:
        if player not in self.scores:
            raise SessionError(f"unknown player {player!r}")
        return player

    def _responder(self, q: OpenQuestion, player: Optional[str]) -> str:
        if not self.multiplayer:
            if player is not None:
                self._require_player(player)
            return self.players[0]
        self._require_player(player)
        if q.buzzed is None:
            raise SessionError("buzz in before answering")
        if q.buzzed != player:
            raise SessionError(f"{q.buzzed} has the question")
        return player

    def _resolve(self, player, verdict, delta: int, timed_out: bool, answer: Optional[str]) -> Dict[str, Any]:
        q = self._require_open()
        if player is not None:
            self.scores[player] += delta

        outcome = {
            "ok": True,
            "player": player,
            "accepted": bool(verdict and verdict.accepted),
            "timed_out": timed_out,
            "delta": delta,
            "correct_answer": q.question.answer,
            "verdict": verdict,
            "scores": dict(self.scores),
            "record_id": None,
            # carried for the answer log
            "category": q.title,
            "prompt": q.question.question,
            "value": q.question.value,
            "answer": answer,
        }
        self.current = None
        self.last_outcome = outcome
        self.history.append(outcome)
        self._unrecorded.append(outcome)
        logger.info(
            "session=%s player=%s %s delta=%+d",
            self.id,
            player,
            "timeout" if timed_out else ("correct" if outcome["accepted"] else "incorrect"),
            delta,
        )
        return outcome

    def drain_unrecorded(self) -> List[Dict[str, Any]]:
        out, self._unrecorded = self._unrecorded, []
        return out

    def snapshot(self) -> Dict[str, Any]:
        current = None
        q = self.current
        if q is not None:
            current = {
                "category": q.category,
                "category_title": q.title,
                "row": q.row,
                "prompt": q.question.question,
                "value": q.question.value,
                "buzzed": q.buzzed,
                "seconds_left": q.countdown.remaining(),
            }
        return {
            "id": self.id,
            "players": list(self.players),
            "scores": dict(self.scores),
            "used": [[c, r] for c, r in self.used],
            "current": current,
            "last_outcome": self.last_outcome,
        }


class SessionStore:
    """In-process sessions. Hold `lock` while touching a session."""

    def __init__(self):
        self._sessions: Dict[str, GameSession] = {}
        self.lock = threading.Lock()

    def create(
        self,
        categories: List[CategoryModel],
        players: List[str],
        answer_seconds: float,
        clock: Clock = time.monotonic,
    ) -> GameSession:
        sid = uuid.uuid4().hex[:12]
        session = GameSession(sid, categories, players, answer_seconds, clock=clock)
        self._sessions[sid] = session
        return session

    def get(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def clear(self) -> None:
        self._sessions.clear()


store = SessionStore()
