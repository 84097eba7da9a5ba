"""
Validation Engine
=================
Post-extraction structural report.

For each extracted document it reports:
    - Total Questions
    - Duplicate Question Numbers
    - Missing Question Numbers (gaps in sequence, as inclusive ranges)
    - Questions Missing Answer
    - Questions Missing Options
    - Questions whose answer letter has no matching option
    - Total Marks

Reporting only: incomplete questions are never dropped.
"""

from __future__ import annotations

import logging
from collections import Counter

from .models import Question, ValidationReport

logger = logging.getLogger(__name__)


class ValidationEngine:
    """
    Validates extracted questions and produces a report.
    """

    def validate(self, questions: list[Question]) -> ValidationReport:
        """
        Run validation on extracted questions.

        Args:
            questions: Questions in document order.

        Returns:
            ValidationReport with all detected issues.
        """
        report = ValidationReport()

        if not questions:
            logger.warning("No questions to validate")
            return report

        report.total_questions = len(questions)

        numbers = [q.number for q in questions]
        number_counts = Counter(numbers)

        report.duplicate_question_numbers = sorted(
            num for num, count in number_counts.items() if count > 1
        )

        report.missing_number_ranges = _find_gaps(numbers)
        report.missing_number_count = sum(
            end - start + 1 for start, end in report.missing_number_ranges
        )

        complete = 0
        for q in questions:
            if not q.has_answer:
                report.questions_missing_answer.append(q.number)

            if not q.has_options:
                report.questions_missing_options.append(q.number)

            if q.has_answer and q.has_options and q.correct_option is None:
                report.questions_with_unknown_answer.append(q.number)

            if q.correct_option is not None:
                complete += 1

            report.total_marks += q.marks

        report.complete_questions = complete

        logger.info("=" * 60)
        logger.info("VALIDATION REPORT")
        logger.info("=" * 60)
        logger.info(f"Total Questions: {report.total_questions}")
        logger.info(
            f"Complete Questions: {report.complete_questions} "
            f"({report.complete_rate}%)"
        )
        logger.info(
            f"Duplicate Question Numbers: "
            f"{len(report.duplicate_question_numbers)}"
        )
        logger.info(
            f"Missing Question Numbers: {report.missing_number_count}"
        )
        logger.info(
            f"Questions Missing Answer: {len(report.questions_missing_answer)}"
        )
        logger.info(
            f"Questions Missing Options: {len(report.questions_missing_options)}"
        )
        logger.info(
            f"Answers Without Matching Option: "
            f"{len(report.questions_with_unknown_answer)}"
        )
        logger.info(f"Total Marks: {report.total_marks}")
        logger.info("=" * 60)

        return report


def _find_gaps(numbers: list[int]) -> list[tuple[int, int]]:
    """Inclusive (start, end) ranges missing between consecutive numbers."""
    unique = sorted(set(numbers))
    return [
        (prev + 1, curr - 1)
        for prev, curr in zip(unique, unique[1:])
        if curr - prev > 1
    ]
