"""Pydantic schemas for the interview API."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class StartReq(BaseModel):
    resumePath: Optional[str] = None
    jobDescriptionPath: Optional[str] = None


class StartResp(BaseModel):
    sessionId: str
    message: str


class AnswerReq(BaseModel):
    sessionId: Optional[str] = None
    answer: Optional[str] = None


class AnswerResp(BaseModel):
    message: str
    shouldEnd: bool


class EndReq(BaseModel):
    sessionId: Optional[str] = None


class EndResp(BaseModel):
    message: str = "Interview completed successfully"
    sessionId: str


class FeedbackResp(BaseModel):
    feedback: str
    duration: int
    questions: int


class UploadedPaths(BaseModel):
    resume: str
    jobDescription: str


class UploadResp(BaseModel):
    message: str = "Files uploaded successfully"
    data: UploadedPaths
