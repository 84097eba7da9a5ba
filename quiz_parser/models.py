"""
Data Models
===========
Pydantic models for extracted quiz questions and parse results.
All models serialize to JSON via ``model_dump()``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


# ─── Enums ────────────────────────────────────────────────────────────────────


class RowKind(str, Enum):
    """Kinds of table rows recognized by the extractor, in match priority."""
    QUESTION = "question"
    OPTION = "option"
    ANSWER = "answer"
    MARKS = "marks"


class SourceType(str, Enum):
    """Where the document text came from."""
    TEXT = "text"
    PDF = "pdf"


# ─── Question Model ──────────────────────────────────────────────────────────


class Question(BaseModel):
    """
    A single quiz question reconstructed from table rows.

    ``number`` and ``text`` are fixed when the header row is seen;
    ``options``, ``answer`` and ``marks`` are filled in by later rows
    until the question is sealed.
    """
    number: int = Field(ge=0)
    text: str
    options: dict[str, str] = Field(default_factory=dict)
    answer: str = ""
    marks: int = Field(default=0, ge=0)

    @computed_field
    @property
    def has_answer(self) -> bool:
        return bool(self.answer)

    @computed_field
    @property
    def has_options(self) -> bool:
        return bool(self.options)

    @computed_field
    @property
    def correct_option(self) -> Optional[str]:
        """Text of the option the answer points to, if any."""
        if not self.answer:
            return None
        return self.options.get(self.answer)


# ─── Parse Result Models ─────────────────────────────────────────────────────


class DocumentMetadata(BaseModel):
    """Metadata about the source document."""
    name: str = ""
    source_path: str = ""
    source_type: SourceType = SourceType.TEXT
    file_hash: str = ""
    file_size_bytes: int = 0
    line_count: int = 0


class ParseVersion(BaseModel):
    """Version tracking for a parse run."""
    parser_version: str = "1.0.0"
    parse_timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    question_count: int = 0


class ValidationReport(BaseModel):
    """Post-extraction structural report."""
    total_questions: int = 0
    duplicate_question_numbers: list[int] = Field(default_factory=list)
    missing_number_ranges: list[tuple[int, int]] = Field(default_factory=list)
    missing_number_count: int = 0
    questions_missing_answer: list[int] = Field(default_factory=list)
    questions_missing_options: list[int] = Field(default_factory=list)
    questions_with_unknown_answer: list[int] = Field(default_factory=list)
    complete_questions: int = 0
    total_marks: int = 0

    @computed_field
    @property
    def complete_rate(self) -> float:
        if self.total_questions == 0:
            return 0.0
        return round(self.complete_questions / self.total_questions * 100, 2)


class ParseResult(BaseModel):
    """
    Complete output of a parse run.
    Held in memory only; callers decide what to do with it.
    """
    document: DocumentMetadata
    parse_version: ParseVersion
    questions: list[Question] = Field(default_factory=list)
    validation: ValidationReport = Field(default_factory=ValidationReport)
