"""
Text extraction service for shipment instruction PDFs.

Turns a PDF into layout-preserving text. Layout matters: the parser reads
labels from line starts and column boundaries from runs of spaces.

Backends:
- pdftotext (poppler-utils) in -layout mode, the default
- pdfplumber layout mode, for hosts without poppler
"""

import os
import subprocess
from dataclasses import dataclass
from typing import Optional

import pdfplumber
import structlog

from config import Settings, get_settings
from exceptions import DocumentNotFoundError, TextExtractionError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExtractedText:
    """
    Text of one document.

    `complete` is False when the extractor failed part-way but still
    produced text; parsing proceeds on what was captured.
    """
    text: str
    backend: str
    complete: bool = True


class TextExtractionService:
    """Extract layout-preserving text from PDF files."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _extract_with_pdftotext(self, path: str) -> ExtractedText:
        """
        Run `pdftotext -layout <path> -` and capture stdout.

        A non-zero exit with output is tolerated and marked incomplete.
        """
        command = [self.settings.pdftotext_path, "-layout", path, "-"]
        try:
            result = subprocess.run(command, capture_output=True, check=False)
        except OSError as e:
            logger.error("pdftotext_failed_to_start", path=path, error=str(e))
            raise TextExtractionError(
                message=f"Could not run {self.settings.pdftotext_path}: {e}",
                details={"path": path, "backend": "pdftotext"}
            )

        text = result.stdout.decode("utf-8", errors="replace")
        complete = result.returncode == 0
        if not complete:
            logger.warning(
                "pdftotext_nonzero_exit",
                path=path,
                returncode=result.returncode,
                stderr=result.stderr.decode("utf-8", errors="replace").strip()[:200],
                text_length=len(text),
            )

        return ExtractedText(text=text, backend="pdftotext", complete=complete)

    def _extract_with_pdfplumber(self, path: str) -> ExtractedText:
        """
        Extract text page by page with pdfplumber in layout mode.

        A page that fails is skipped and the result marked incomplete.
        """
        pages = []
        complete = True
        try:
            with pdfplumber.open(path) as pdf:
                for page_num, page in enumerate(pdf.pages, start=1):
                    try:
                        page_text = page.extract_text(layout=True)
                    except Exception as page_err:
                        logger.warning("pdfplumber_page_failed", page=page_num, error=str(page_err))
                        complete = False
                        continue
                    if page_text:
                        pages.append(page_text)
        except Exception as e:
            logger.error("pdfplumber_failed", path=path, error=str(e))
            raise TextExtractionError(
                message=f"Failed to read PDF: {e}",
                details={"path": path, "backend": "pdfplumber"}
            )

        return ExtractedText(text="\n".join(pages), backend="pdfplumber", complete=complete)

    def extract_text(self, path: str) -> ExtractedText:
        """
        Extract the text of a PDF document.

        Args:
            path: File system path of the PDF

        Returns:
            ExtractedText

        Raises:
            DocumentNotFoundError: If the file does not exist
            TextExtractionError: If no usable text was produced
        """
        if not os.path.isfile(path):
            raise DocumentNotFoundError(path)

        if self.settings.text_extractor == "pdfplumber":
            extracted = self._extract_with_pdfplumber(path)
        else:
            extracted = self._extract_with_pdftotext(path)

        if not extracted.text.strip():
            raise TextExtractionError(
                message="No text could be extracted from the document",
                details={"path": path, "backend": extracted.backend}
            )

        logger.info(
            "document_text_extracted",
            path=path,
            backend=extracted.backend,
            text_length=len(extracted.text),
            complete=extracted.complete,
        )
        return extracted


# Singleton instance
_text_extraction_service: Optional[TextExtractionService] = None


def get_text_extraction_service() -> TextExtractionService:
    """Get or create TextExtractionService instance."""
    global _text_extraction_service
    if _text_extraction_service is None:
        _text_extraction_service = TextExtractionService()
    return _text_extraction_service
