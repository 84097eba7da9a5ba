"""
Quiz Parser Engine
==================
Orchestrator that combines text loading, question extraction and
validation into one parse run.

Usage:
    engine = ParserEngine(config)
    result = engine.parse("path/to/quiz.pdf")
    hits = engine.search(result, "lambda")

Architecture:
    Document → DocumentTextSource → text → StateMachineParser →
    Questions → ValidationEngine → ParseResult
"""

from __future__ import annotations

import hashlib
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import __version__
from .models import (
    DocumentMetadata,
    ParseResult,
    ParseVersion,
    Question,
    SourceType,
)
from .search import search
from .sources import open_source
from .state_machine import StateMachineParser
from .validator import ValidationEngine

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass
class ParserConfig:
    """Configuration for the parser engine."""

    # Source settings
    encoding: str = "utf-8"
    page_range: Optional[tuple[int, int]] = None

    # Document metadata
    document_name: str = ""

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None


class ParserEngine:
    """
    Main quiz parsing engine.

    Orchestrates the pipeline:
        1. Text loading (plain text or PDF text layer)
        2. State machine extraction
        3. Validation

    A failure while loading text aborts the run; nothing partial is returned.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging based on config."""
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        package_logger = logging.getLogger("quiz_parser")
        package_logger.setLevel(log_level)

        # Console handler
        if not package_logger.handlers:
            console = logging.StreamHandler()
            console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
            package_logger.addHandler(console)

        # File handler
        if self.config.log_file:
            log_path = Path(self.config.log_file)
            already_attached = any(
                isinstance(h, logging.FileHandler)
                and Path(h.baseFilename) == log_path.absolute()
                for h in package_logger.handlers
            )
            if not already_attached:
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_path, encoding="utf-8")
                file_handler.setFormatter(
                    logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
                )
                package_logger.addHandler(file_handler)

    def parse(self, path: str) -> ParseResult:
        """
        Load a document and extract its questions.

        Args:
            path: Path to a text file or PDF.

        Returns:
            ParseResult containing questions, metadata and validation.

        Raises:
            SourceUnavailable: If the document cannot be read as text.
        """
        path = os.path.abspath(path)
        start_time = time.time()
        logger.info(f"Starting parse of: {path}")

        source = open_source(
            path,
            encoding=self.config.encoding,
            page_range=self.config.page_range,
        )
        text = source.read_text()

        document = DocumentMetadata(
            name=self.config.document_name or Path(path).stem,
            source_path=path,
            source_type=source.source_type,
            file_hash=self._compute_file_hash(path),
            file_size_bytes=os.path.getsize(path),
        )

        result = self._build_result(text, document)

        elapsed = time.time() - start_time
        logger.info(
            f"Parse complete in {elapsed:.2f}s, "
            f"{len(result.questions)} questions extracted"
        )
        return result

    def parse_text(self, text: str, name: str = "<text>") -> ParseResult:
        """Extract questions from text that is already in memory."""
        document = DocumentMetadata(
            name=self.config.document_name or name,
            source_type=SourceType.TEXT,
            file_hash=hashlib.sha256(text.encode("utf-8")).hexdigest(),
            file_size_bytes=len(text.encode("utf-8")),
        )
        return self._build_result(text, document)

    def search(self, result: ParseResult, query: str) -> list[Question]:
        """Search the questions of a previous parse run."""
        hits = search(result.questions, query)
        logger.debug(f"Query {query!r} matched {len(hits)} questions")
        return hits

    def _build_result(self, text: str, document: DocumentMetadata) -> ParseResult:
        document.line_count = len(text.split("\n")) if text else 0

        logger.info("Phase 1: Question extraction")
        questions = StateMachineParser().parse(text)

        logger.info("Phase 2: Validation")
        validation = ValidationEngine().validate(questions)

        return ParseResult(
            document=document,
            parse_version=ParseVersion(
                parser_version=__version__,
                question_count=len(questions),
            ),
            questions=questions,
            validation=validation,
        )

    def _compute_file_hash(self, filepath: str) -> str:
        """Compute SHA-256 hash of a file."""
        sha256 = hashlib.sha256()
        with open(filepath, "rb") as f:
            for chunk in iter(lambda: f.read(8192), b""):
                sha256.update(chunk)
        return sha256.hexdigest()
