"""Document ingestion: upload storage and text extraction."""
from .extract import extract_text
from .uploads import ALLOWED_EXTENSIONS, UPLOAD_FIELDS, save_uploads

__all__ = ["ALLOWED_EXTENSIONS", "UPLOAD_FIELDS", "extract_text", "save_uploads"]
