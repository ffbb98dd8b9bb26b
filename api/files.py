"""FastAPI route for résumé and job description uploads."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile

from api.routes import http_error
from api.schemas import UploadedPaths, UploadResp
from config.settings import settings
from documents import save_uploads
from interview_session import UploadError


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/files")


@router.post("/upload", response_model=UploadResp)
def upload(
    resume: Optional[UploadFile] = File(default=None),
    jobDescription: Optional[UploadFile] = File(default=None),
) -> UploadResp:
    files = {
        "resume": (resume.filename, resume.file) if resume is not None else None,
        "jobDescription": (jobDescription.filename, jobDescription.file) if jobDescription is not None else None,
    }
    try:
        saved = save_uploads(files, upload_dir=settings.UPLOAD_DIR, max_bytes=settings.MAX_UPLOAD_BYTES)
    except UploadError as exc:
        raise http_error(exc) from exc
    except OSError as exc:
        logger.exception("Unable to store uploaded files")
        raise HTTPException(status_code=500, detail="Unable to store uploaded files") from exc
    return UploadResp(data=UploadedPaths(resume=str(saved["resume"]), jobDescription=str(saved["jobDescription"])))
