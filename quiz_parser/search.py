"""
Question Search
===============
Case-insensitive substring search over question text and option text.

An empty query returns no results rather than everything.
"""

from __future__ import annotations

import logging

from .models import Question

logger = logging.getLogger(__name__)


def matches(question: Question, query: str) -> bool:
    """True if the question text or any option contains ``query`` (any case)."""
    needle = query.lower()
    if needle in question.text.lower():
        return True
    return any(needle in opt.lower() for opt in question.options.values())


def search(questions: list[Question], query: str) -> list[Question]:
    """Filter ``questions`` to those matching ``query``, preserving order."""
    if not query:
        return []
    return [q for q in questions if matches(q, query)]


class SearchIndex:
    """
    Question list primed for repeated searches.

    Lower-cased text blobs are built once so that a search box can
    re-query on every keystroke. Results are identical to ``search``.

    Example:
        >>> index = SearchIndex()
        >>> index.prime(questions)
        >>> index.search("lambda")
    """

    def __init__(self) -> None:
        self._entries: list[tuple[Question, str, list[str]]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def prime(self, questions: list[Question]) -> None:
        """Replace the indexed questions."""
        self._entries = [
            (q, q.text.lower(), [opt.lower() for opt in q.options.values()])
            for q in questions
        ]
        logger.info(f"Indexed {len(self._entries)} questions for search")

    def search(self, query: str) -> list[Question]:
        if not query:
            return []
        needle = query.lower()
        return [
            q for q, text, options in self._entries
            if needle in text or any(needle in opt for opt in options)
        ]
