"""
Quiz Table Parser
=================
Extracts quiz questions from pipe-delimited table text and searches them.

Architecture:
    - Text Sources: Produce the full text of a document (text file or PDF)
    - State Machine: Rebuilds questions from question/option/answer/marks rows
    - Search: Case-insensitive substring matching over questions and options
    - Validator: Reports gaps, duplicates and incomplete questions

Version: 1.0.0
"""

__version__ = "1.0.0"

from .search import search  # noqa: E402
from .state_machine import extract  # noqa: E402

__all__ = ["extract", "search", "__version__"]
