# Free-text trivia answer grading.
#
# Pure functions only: no timers, no scores. The session layer decides what
# to do with the verdict.

from __future__ import annotations

import logging
import re
from typing import List

from schemas.grading import GradingVerdict

logger = logging.getLogger("trivia-board.grading")

PHRASES = ("what is", "what are", "who is", "who are", "what's", "who's")

_PHRASE_RE = re.compile(r"^(what is|what are|who is|who are|what's|who's)")
_STRIP_RE = re.compile(r"[^a-z0-9 ]")
_INT_RE = re.compile(r"^[0-9]+$")

_ONES = ["zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine"]
_TEENS = [
    "ten",
    "eleven",
    "twelve",
    "thirteen",
    "fourteen",
    "fifteen",
    "sixteen",
    "seventeen",
    "eighteen",
    "nineteen",
]
_TENS = ["", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety"]

SHORT_ANSWER_LEN = 4


def has_valid_phrase(raw: str) -> bool:
    """True if the answer is phrased as a question ("what is ...", "who's ...")."""
    s = (raw or "").lower().strip()
    return any(s.startswith(p) for p in PHRASES)


def normalize(text: str, strip_phrase: bool = False) -> str:
    s = (text or "").lower().strip()
    if strip_phrase:
        s = _PHRASE_RE.sub("", s, count=1)
    return _STRIP_RE.sub("", s).strip()


def levenshtein(a: str, b: str) -> int:
    rows = len(a) + 1
    cols = len(b) + 1
    table: List[List[int]] = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if a[i - 1] == b[j - 1]:
                table[i][j] = table[i - 1][j - 1]
            else:
                table[i][j] = 1 + min(
                    table[i - 1][j],
                    table[i][j - 1],
                    table[i - 1][j - 1],
                )
    return table[rows - 1][cols - 1]


def similarity(a: str, b: str) -> float:
    """Similarity in [0, 1]; two empty strings are identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - levenshtein(a, b) / longest


def number_to_words(num: int) -> str:
    """
    English words for 0..99. Anything else comes back as its digit string,
    so "one hundred forty five" never matches 145.
    """
    if 0 <= num < 10:
        return _ONES[num]
    if 10 <= num < 20:
        return _TEENS[num - 10]
    if 20 <= num < 100:
        word = _TENS[num // 10]
        if num % 10:
            word += " " + _ONES[num % 10]
        return word
    return str(num)


def allowed_distance(normalized_correct: str) -> int:
    return 1 if len(normalized_correct) <= SHORT_ANSWER_LEN else 2


def numeric_match(normalized_user: str, normalized_correct: str) -> bool:
    if not _INT_RE.match(normalized_correct):
        return False
    digits = normalized_correct.lstrip("0") or "0"
    # words only exist below 100; never int() an arbitrarily long digit string
    word_form = number_to_words(int(digits)) if len(digits) <= 2 else digits
    return normalized_user in (normalized_correct, word_form)


def grade_answer(raw_answer: str, correct_answer: str) -> GradingVerdict:
    """
    Grade a free-text answer against the reference answer.

    Acceptance, gated on question phrasing:
      - numeric: digits or English words (0-99) for an integer answer
      - substring: either normalized answer contains the other
      - fuzzy: edit distance within 1 (answers up to 4 chars) or 2
    """
    raw_answer = raw_answer or ""
    correct_answer = correct_answer or ""

    phrase_ok = has_valid_phrase(raw_answer)
    user = normalize(raw_answer, strip_phrase=True)
    correct = normalize(correct_answer)
    dist = levenshtein(user, correct)
    allowed = allowed_distance(correct)

    logger.debug(
        "grading raw=%r user=%r correct=%r valid_form=%s",
        raw_answer,
        user,
        correct,
        phrase_ok,
    )

    matched_by = "none"
    # an empty string is a substring of everything, so neither side may be empty
    if phrase_ok and user and correct:
        if numeric_match(user, correct):
            matched_by = "numeric"
        elif correct in user or user in correct:
            matched_by = "substring"
        elif dist <= allowed:
            matched_by = "fuzzy"

    logger.debug("distance=%d allowed=%d matched_by=%s", dist, allowed, matched_by)

    return GradingVerdict(
        accepted=matched_by != "none",
        normalized_user=user,
        normalized_correct=correct,
        edit_distance=dist,
        matched_by=matched_by,
        phrase_valid=phrase_ok,
        allowed_distance=allowed,
        similarity=similarity(user, correct),
    )
