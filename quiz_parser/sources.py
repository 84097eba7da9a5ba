"""
Document Text Sources
=====================
Loaders that turn a document on disk into its full text.

    - PlainTextSource: reads a text file
    - PdfTextSource: embedded-text extraction with PyMuPDF (fitz)

Any failure to produce text is raised as ``SourceUnavailable``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import fitz  # PyMuPDF

from .models import SourceType

logger = logging.getLogger(__name__)


class SourceUnavailable(RuntimeError):
    """The document could not be read or decoded into text."""


class DocumentTextSource(ABC):
    """Base class: something that can produce the full text of a document."""

    source_type: SourceType = SourceType.TEXT

    def __init__(self, path: str):
        self.path = Path(path)

    @abstractmethod
    def read_text(self) -> str:
        """Return the full document text or raise SourceUnavailable."""

    def _check_exists(self):
        if not self.path.is_file():
            raise SourceUnavailable(f"Document not found: {self.path}")


class PlainTextSource(DocumentTextSource):
    """Reads an already-extracted text file."""

    source_type = SourceType.TEXT

    def __init__(self, path: str, encoding: str = "utf-8"):
        super().__init__(path)
        self.encoding = encoding

    def read_text(self) -> str:
        self._check_exists()
        try:
            text = self.path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise SourceUnavailable(f"Failed to read {self.path}: {e}") from e

        logger.info(f"Read {len(text)} characters from {self.path.name}")
        return text


class PdfTextSource(DocumentTextSource):
    """
    Pulls the embedded text layer out of a PDF.

    Pages are joined with a newline so rows never run across page breaks.
    """

    source_type = SourceType.PDF

    def __init__(
        self,
        path: str,
        page_range: Optional[tuple[int, int]] = None,
    ):
        super().__init__(path)
        self.page_range = page_range

    def get_page_count(self) -> int:
        self._check_exists()
        try:
            with fitz.open(str(self.path)) as doc:
                return doc.page_count
        except Exception as e:
            raise SourceUnavailable(f"Failed to load PDF: {e}") from e

    def read_text(self) -> str:
        self._check_exists()
        try:
            with fitz.open(str(self.path)) as doc:
                total_pages = doc.page_count

                # Determine page range (1-indexed)
                start_page = 1
                end_page = total_pages
                if self.page_range:
                    start_page = max(1, self.page_range[0])
                    end_page = min(total_pages, self.page_range[1])

                logger.info(
                    f"Extracting text from {self.path.name} "
                    f"(pages {start_page} to {end_page})"
                )

                pages = [
                    doc[page_idx].get_text("text")
                    for page_idx in range(start_page - 1, end_page)
                ]
        except Exception as e:
            raise SourceUnavailable(f"Failed to load PDF: {e}") from e

        return "\n".join(pages)


def open_source(
    path: str,
    encoding: str = "utf-8",
    page_range: Optional[tuple[int, int]] = None,
) -> DocumentTextSource:
    """Pick a text source for ``path`` based on its extension."""
    if Path(path).suffix.lower() == ".pdf":
        return PdfTextSource(path, page_range=page_range)
    return PlainTextSource(path, encoding=encoding)
