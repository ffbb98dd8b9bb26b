from __future__ import annotations  # Disk storage for résumé and job description uploads

import logging
import time
from pathlib import Path
from typing import BinaryIO, Dict, Mapping, Optional, Tuple

from interview_session.errors import UploadError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".pdf", ".doc", ".docx", ".txt")
UPLOAD_FIELDS = ("resume", "jobDescription")
_CHUNK = 64 * 1024


def save_uploads(
    files: Mapping[str, Optional[Tuple[Optional[str], BinaryIO]]],
    *,
    upload_dir: str | Path,
    max_bytes: int,
) -> Dict[str, Path]:  # Validate and store both upload fields, returning absolute paths
    missing = [field for field in UPLOAD_FIELDS if files.get(field) is None]
    if missing:
        raise UploadError("Please upload both resume and job description files")
    unexpected = sorted(set(files) - set(UPLOAD_FIELDS))
    if unexpected:
        raise UploadError(f"Unexpected upload fields: {', '.join(unexpected)}")

    for field in UPLOAD_FIELDS:
        filename, _ = files[field]  # type: ignore[misc]
        _extension(filename)

    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    saved: Dict[str, Path] = {}
    try:
        for field in UPLOAD_FIELDS:
            filename, stream = files[field]  # type: ignore[misc]
            saved[field] = _write(directory, field, _extension(filename), stream, max_bytes)
    except UploadError:
        for path in saved.values():
            path.unlink(missing_ok=True)
        raise
    logger.info("Stored uploads %s", {field: path.name for field, path in saved.items()})
    return saved


def _extension(filename: Optional[str]) -> str:
    ext = Path(filename or "").suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise UploadError(f"Only {', '.join(ALLOWED_EXTENSIONS)} files are allowed.")
    return ext


def _limit(max_bytes: int) -> str:
    megabytes = 1024 * 1024
    if max_bytes >= megabytes:
        return f"{max_bytes // megabytes}MB"
    return f"{max_bytes} byte"


def _write(directory: Path, field: str, ext: str, stream: BinaryIO, max_bytes: int) -> Path:
    target = directory / f"{field}-{int(time.time() * 1000)}{ext}"
    written = 0
    with open(target, "wb") as handle:
        while True:
            chunk = stream.read(_CHUNK)
            if not chunk:
                break
            written += len(chunk)
            if written > max_bytes:
                handle.close()
                target.unlink(missing_ok=True)
                raise UploadError(f"File too large: {field} exceeds the {_limit(max_bytes)} limit")
            handle.write(chunk)
    return target.resolve()


__all__ = ["ALLOWED_EXTENSIONS", "UPLOAD_FIELDS", "save_uploads"]
