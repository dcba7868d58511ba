"""Fuzzy port search: pure functions over the static directory.

Each port is scored on name, code and country; the best field wins.
"""

from collections.abc import Iterable

from lcl_quote.ports.directory import Port

MAX_RESULTS = 10
MIN_SCORE = 10  # scores at or below this are noise (one stray letter)

EXACT_SCORE = 100
PREFIX_SCORE = 90
SUBSTRING_SCORE = 80
SUBSEQUENCE_CHAR_SCORE = 10
SUBSEQUENCE_COMPLETE_BONUS = 20


def score_field(query: str, value: str) -> int:
    """Score one field against an already lower-cased, stripped query."""
    text = value.lower()
    if text == query:
        return EXACT_SCORE
    if text.startswith(query):
        return PREFIX_SCORE
    if query in text:
        return SUBSTRING_SCORE

    # Credit query characters found in order
    matched = 0
    for ch in text:
        if matched < len(query) and ch == query[matched]:
            matched += 1
    score = matched * SUBSEQUENCE_CHAR_SCORE
    if matched == len(query):
        score += SUBSEQUENCE_COMPLETE_BONUS
    return score


def score_port(query: str, port: Port) -> int:
    return max(score_field(query, port.name), score_field(query, port.code), score_field(query, port.country))


def search(query: str, directory: Iterable[Port], limit: int = MAX_RESULTS) -> list[Port]:
    """Return up to `limit` (at most 10) ports ranked by score.

    An empty query returns nothing rather than a default listing. Ties keep
    directory order.
    """
    q = (query or "").strip().lower()
    if not q:
        return []

    scored = [(score_port(q, port), port) for port in directory]
    survivors = [(score, port) for score, port in scored if score > MIN_SCORE]
    # sorted() is stable, so equal scores stay in directory order
    survivors = sorted(survivors, key=lambda pair: pair[0], reverse=True)
    return [port for _, port in survivors[: min(limit, MAX_RESULTS)]]
