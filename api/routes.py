"""FastAPI routes for interview session control."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from api.schemas import AnswerReq, AnswerResp, EndReq, EndResp, FeedbackResp, StartReq, StartResp
from config.settings import settings
from documents import extract_text
from interview_session import DocumentError, InputError, InterviewError, InterviewOrchestrator
from services.sessions import get_orchestrator
from session_reports import generate_feedback_pdf


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/interview")


def http_error(exc: InterviewError) -> HTTPException:
    if exc.status_code >= 500:
        logger.error("Interview request failed: %s", exc)
    return HTTPException(status_code=exc.status_code, detail=exc.message)


def _read_document(path: str, label: str) -> str:
    try:
        return extract_text(path, min_chars=settings.MIN_DOCUMENT_CHARS)
    except DocumentError as exc:
        logger.warning("Unable to read %s file at %s: %s", label, path, exc)
        raise DocumentError(
            f"Unable to read {label} file: {exc.message}. Please check that the file exists and is accessible."
        ) from exc


@router.post("/start", response_model=StartResp)
def start(req: StartReq, orchestrator: InterviewOrchestrator = Depends(get_orchestrator)) -> StartResp:
    try:
        if not req.resumePath or not req.jobDescriptionPath:
            raise InputError("Resume and job description paths are required")
        resume_text = _read_document(req.resumePath, "resume")
        job_description_text = _read_document(req.jobDescriptionPath, "job description")
        result = orchestrator.start(resume_text, job_description_text)
    except InterviewError as exc:
        raise http_error(exc) from exc
    return StartResp(sessionId=result.session_id, message=result.message)


@router.post("/answer", response_model=AnswerResp)
def answer(req: AnswerReq, orchestrator: InterviewOrchestrator = Depends(get_orchestrator)) -> AnswerResp:
    try:
        if not req.sessionId or not req.answer:
            raise InputError("Session ID and answer are required")
        result = orchestrator.submit_answer(req.sessionId, req.answer)
    except InterviewError as exc:
        raise http_error(exc) from exc
    return AnswerResp(message=result.message, shouldEnd=result.should_end)


@router.post("/end", response_model=EndResp)
def end(req: EndReq, orchestrator: InterviewOrchestrator = Depends(get_orchestrator)) -> EndResp:
    try:
        if not req.sessionId:
            raise InputError("Session ID is required")
        session_id = orchestrator.conclude(req.sessionId)
    except InterviewError as exc:
        raise http_error(exc) from exc
    return EndResp(sessionId=session_id)


@router.get("/feedback/{session_id}", response_model=FeedbackResp)
def feedback(session_id: str, orchestrator: InterviewOrchestrator = Depends(get_orchestrator)) -> FeedbackResp:
    try:
        summary = orchestrator.get_feedback(session_id)
    except InterviewError as exc:
        raise http_error(exc) from exc
    return FeedbackResp(feedback=summary.feedback, duration=summary.duration, questions=summary.questions)


@router.get("/feedback/{session_id}/pdf")
def feedback_pdf(session_id: str, orchestrator: InterviewOrchestrator = Depends(get_orchestrator)) -> Response:
    try:
        report = orchestrator.get_report(session_id)
    except InterviewError as exc:
        raise http_error(exc) from exc
    payload = generate_feedback_pdf(report)
    return Response(
        content=payload,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="interview-feedback-{session_id[:8]}.pdf"'},
    )
