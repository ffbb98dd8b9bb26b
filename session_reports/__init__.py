from __future__ import annotations  # Feedback report package exports

from .models import FeedbackExchange, FeedbackReport
from .pdf import generate_feedback_pdf

__all__ = ["FeedbackExchange", "FeedbackReport", "generate_feedback_pdf"]
