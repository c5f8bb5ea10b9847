from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Sequence

from quickfind.models import Candidate, ScoredCandidate

log = logging.getLogger(__name__)


SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1

BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL_123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

_NON_WORD, _LOWER, _UPPER, _NUMBER = range(4)


def _char_class(ch: str) -> int:
    if ch.isupper():
        return _UPPER
    if ch.isdigit():
        return _NUMBER
    if ch.isalpha():
        return _LOWER
    return _NON_WORD


def _bonus(prev: int, cur: int) -> int:
    if prev == _NON_WORD and cur != _NON_WORD:
        return BONUS_BOUNDARY
    if (prev == _LOWER and cur == _UPPER) or (prev != _NUMBER and cur == _NUMBER):
        return BONUS_CAMEL_123
    if cur == _NON_WORD:
        return BONUS_NON_WORD
    return 0


def _position_bonuses(text: str) -> list[int]:
    out: list[int] = []
    prev = _NON_WORD  # start of string counts as a word boundary
    for ch in text:
        cur = _char_class(ch)
        out.append(_bonus(prev, cur))
        prev = cur
    return out


def _is_subsequence(pattern: str, text: str) -> bool:
    pos = 0
    for ch in pattern:
        pos = text.find(ch, pos)
        if pos < 0:
            return False
        pos += 1
    return True


def _max(a: Optional[int], b: Optional[int]) -> Optional[int]:
    if a is None:
        return b
    if b is None:
        return a
    return a if a >= b else b


def fuzzy_score(query: str, text: str) -> Optional[int]:
    """Score ``text`` against ``query`` as a case-insensitive subsequence match.

    Returns None when the query characters do not all appear in order. The
    best alignment is found by dynamic programming: every matched character
    earns ``SCORE_MATCH`` plus a positional bonus (start of string, after a
    separator, camelCase or digit transition), runs of adjacent matches keep
    the bonus of the run's first character, and skipped characters between
    two matches cost ``SCORE_GAP_START`` then ``SCORE_GAP_EXTENSION`` each.
    Leading and trailing unmatched characters are free.
    """

    pattern = query.lower()
    if not pattern:
        return 0
    lowered = text.lower()
    if len(lowered) != len(text):
        # case folding changed the length (e.g. "İ"); compare per character
        lowered = "".join(ch.lower()[:1] or ch for ch in text)
    if not _is_subsequence(pattern, lowered):
        return None

    m = len(text)
    bonuses = _position_bonuses(text)

    prev_row: list[Optional[int]] = [None] * m
    prev_first: list[int] = [0] * m
    for i, pc in enumerate(pattern):
        row: list[Optional[int]] = [None] * m
        first: list[int] = [0] * m
        gap_best: Optional[int] = None
        for j in range(m):
            if i > 0 and j >= 2:
                extended = gap_best + SCORE_GAP_EXTENSION if gap_best is not None else None
                opened = prev_row[j - 2] + SCORE_GAP_START if prev_row[j - 2] is not None else None
                gap_best = _max(extended, opened)

            if lowered[j] != pc:
                continue

            b = bonuses[j]
            if i == 0:
                row[j] = SCORE_MATCH + b * BONUS_FIRST_CHAR_MULTIPLIER
                first[j] = b
                continue

            best: Optional[int] = None
            best_first = b
            diag = prev_row[j - 1] if j >= 1 else None
            if diag is not None:
                chunk = prev_first[j - 1]
                best = diag + SCORE_MATCH + max(b, chunk, BONUS_CONSECUTIVE)
                best_first = b if (b >= BONUS_BOUNDARY and b > chunk) else chunk
            if gap_best is not None:
                gapped = gap_best + SCORE_MATCH + b
                if best is None or gapped > best:
                    best = gapped
                    best_first = b
            row[j] = best
            first[j] = best_first
        prev_row, prev_first = row, first

    result: Optional[int] = None
    for s in prev_row:
        result = _max(result, s)
    return result


def _score_chunk(query: str, chunk: Sequence[Candidate]) -> list[ScoredCandidate]:
    out: list[ScoredCandidate] = []
    for c in chunk:
        s = fuzzy_score(query, c.name)
        if s is not None:
            out.append(ScoredCandidate(name=c.name, path=c.path, score=s))
    return out


def rank(
    query: str,
    candidates: Iterable[Candidate],
    cap: int,
    *,
    workers: int = 4,
    chunk_size: int = 256,
) -> list[ScoredCandidate]:
    """Score candidates by name and return the best ``cap`` in descending order.

    Candidates that do not match are dropped. Chunks are scored on a thread
    pool; results keep input order within equal scores.
    """

    q = (query or "").strip()
    if not q or cap <= 0:
        return []

    items = list(candidates)
    chunk_size = max(1, chunk_size)
    chunks = [items[i : i + chunk_size] for i in range(0, len(items), chunk_size)]

    if workers <= 1 or len(chunks) <= 1:
        parts = [_score_chunk(q, chunk) for chunk in chunks]
    else:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="quickfind-rank") as pool:
            parts = list(pool.map(lambda chunk: _score_chunk(q, chunk), chunks))

    merged = [sc for part in parts for sc in part]
    merged.sort(key=lambda sc: sc.score, reverse=True)
    log.debug("rank %r: %d/%d matched", q, len(merged), len(items))
    return merged[:cap]
