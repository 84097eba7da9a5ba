"""
State Machine Parser
====================
Single-pass, line-oriented state machine that rebuilds quiz questions from
pipe-delimited table rows (question header, options, answer, marks).

Rows look like::

    | 1 | What is 2+2? |
    | A. | 3 |
    | B. | 4 |
    | Answer | optionb |
    | Marks: | 2 |

Malformed or unrecognized lines are skipped, never raised.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Optional

from .models import Question, RowKind

logger = logging.getLogger(__name__)

# Largest number accepted in a digit cell (signed 64-bit)
MAX_CELL_INT = 2**63 - 1

# ─── Row Patterns ─────────────────────────────────────────────────────────────

# "| 1 | Question text |"
QUESTION_PATTERN = re.compile(
    r"^\|\s*([0-9]+)\s*\|\s*(.+?)\s*\|\s*$"
)

# "| A. | Option text |", "| b | Option text |"
OPTION_PATTERN = re.compile(
    r"^\|\s*([A-D])\.?\s*\|\s*(.+?)\s*\|\s*$", re.IGNORECASE
)

# "| Answer | optionb |"
ANSWER_PATTERN = re.compile(
    r"^\|\s*Answer\s*\|\s*option([a-dA-D])\s*\|\s*$"
)

# "| Marks: | 1 |"
MARKS_PATTERN = re.compile(
    r"^\|\s*Marks:\s*\|\s*([0-9]+)\s*\|\s*$"
)

# Match priority: first hit wins. Marks must stay last.
ROW_PATTERNS: list[tuple[RowKind, re.Pattern]] = [
    (RowKind.QUESTION, QUESTION_PATTERN),
    (RowKind.OPTION, OPTION_PATTERN),
    (RowKind.ANSWER, ANSWER_PATTERN),
    (RowKind.MARKS, MARKS_PATTERN),
]


def classify_row(line: str) -> Optional[tuple[RowKind, re.Match]]:
    """Return the first row kind whose pattern matches a trimmed line."""
    for kind, pattern in ROW_PATTERNS:
        match = pattern.match(line)
        if match:
            return kind, match
    return None


def _parse_cell_int(digits: str) -> Optional[int]:
    # Reject before int() so huge cells never hit the str-to-int digit limit
    digits = digits.lstrip("0") or "0"
    if len(digits) > len(str(MAX_CELL_INT)):
        return None
    value = int(digits)
    if value > MAX_CELL_INT:
        return None
    return value


class ParserState(Enum):
    """Whether a question is currently open."""
    SEEKING_QUESTION = "SEEKING_QUESTION"
    IN_QUESTION = "IN_QUESTION"


class StateMachineParser:
    """
    Transforms document text into an ordered list of Question records.

    The open question is the only mutable state; it is appended to the
    output when the next header row arrives or the input ends.
    """

    def __init__(self):
        self.state = ParserState.SEEKING_QUESTION
        self.current_question: Optional[Question] = None
        self.questions: list[Question] = []

    def reset(self):
        """Reset the state machine for a fresh parsing run."""
        self.state = ParserState.SEEKING_QUESTION
        self.current_question = None
        self.questions = []

    def finalize(self):
        """Seal any open question at end of input."""
        if self.current_question is not None:
            self._seal_question()

    def parse(self, full_text: str) -> list[Question]:
        """Parse document text into structured questions."""
        self.reset()

        for line in full_text.split("\n"):
            self._process_line(line.strip())

        self.finalize()

        logger.info(f"Extracted {len(self.questions)} questions")
        return self.questions

    def _process_line(self, line: str):
        if not line:
            return

        classified = classify_row(line)
        if classified is None:
            return

        kind, match = classified

        if kind == RowKind.QUESTION:
            number = _parse_cell_int(match.group(1))
            if number is None:
                logger.debug(f"Ignoring question row with oversized number: {line[:40]}")
                return
            self._start_new_question(number, match.group(2).strip())
            return

        q = self.current_question
        if q is None:
            logger.debug(f"Skipping orphan {kind.value} row before any question")
            return

        if kind == RowKind.OPTION:
            q.options[match.group(1).upper()] = match.group(2).strip()

        elif kind == RowKind.ANSWER:
            q.answer = match.group(1).upper()

        elif kind == RowKind.MARKS:
            marks = _parse_cell_int(match.group(1))
            if marks is None:
                logger.debug(f"[Q{q.number}] Ignoring oversized marks value")
                return
            q.marks = marks

    def _start_new_question(self, number: int, text: str):
        """Seal the previous question and open a fresh one."""
        if self.current_question is not None:
            self._seal_question()

        logger.debug(f"Detected Question {number}")

        self.current_question = Question(number=number, text=text)
        self.state = ParserState.IN_QUESTION

    def _seal_question(self):
        self.questions.append(self.current_question)
        self.current_question = None
        self.state = ParserState.SEEKING_QUESTION


def extract(full_text: str) -> list[Question]:
    """Extract all questions from ``full_text`` in document order."""
    return StateMachineParser().parse(full_text)
