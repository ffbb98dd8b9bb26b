"""Plain-text extraction for uploaded résumés and job descriptions."""
from __future__ import annotations

import logging
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from interview_session.errors import DocumentError

logger = logging.getLogger(__name__)

WORD_EXTENSIONS = {".doc", ".docx"}


def extract_text(path: str | Path, *, min_chars: int = 50) -> str:
    """Return the text content of ``path`` or raise :class:`DocumentError`."""

    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentError(f"File does not exist: {file_path}")

    ext = file_path.suffix.lower()
    if ext in WORD_EXTENSIONS:
        raise DocumentError(
            f"Word document format ({ext}) is not supported yet. Please convert to PDF or plain text."
        )
    if ext == ".pdf":
        text = _read_pdf(file_path)
        kind = "PDF"
    else:
        text = _read_text(file_path)
        kind = "text"

    stripped = text.strip()
    if len(stripped) < min_chars:
        raise DocumentError(
            f"The {kind} file appears to be empty or contains too little text "
            f"({len(stripped)} characters). Please check the file."
        )
    logger.info("Extracted %d characters from %s file %s", len(stripped), kind, file_path.name)
    return stripped


def _read_pdf(path: Path) -> str:
    try:
        reader = PdfReader(str(path))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PdfReadError, OSError, ValueError) as exc:
        logger.warning("Failed to parse PDF %s: %s", path.name, exc)
        raise DocumentError(f"Failed to parse PDF file: {exc}") from exc
    return "\n".join(pages)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentError("Text file is not valid UTF-8") from exc
    except OSError as exc:
        raise DocumentError(f"Unable to read file: {exc}") from exc


__all__ = ["extract_text"]
