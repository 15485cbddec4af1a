"""
GDPR Document Scanner — Document Parser

Turns an uploaded payload into plain text for the compliance scanner.
Text formats are decoded directly; PDF and Word uploads are decoded as
UTF-8 as well, since binary text extraction is not supported.
"""
import logging
import os

from .errors import DocumentParseError, ValidationError

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = int(os.environ.get("GDPR_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

SUPPORTED_MIME_TYPES = (
    "text/plain",
    "text/markdown",
    "text/html",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)


def is_binary_document(mime_type: str) -> bool:
    """True for PDF / Word uploads whose text is not extracted properly."""
    return mime_type == "application/pdf" or "document" in mime_type or mime_type == "application/msword"


def check_upload_size(size: int) -> None:
    if size <= 0:
        raise ValidationError("No file uploaded")
    if size > MAX_UPLOAD_BYTES:
        raise ValidationError(
            f"File too large: {size} bytes (limit {MAX_UPLOAD_BYTES} bytes)"
        )


def parse_document(data: bytes, mime_type: str, filename: str) -> str:
    """
    Extract text from an uploaded document.

    Args:
        data: Raw upload bytes.
        mime_type: Declared MIME type, e.g. ``text/plain``.
        filename: Original filename, used for logging only.

    Returns:
        The document text.

    Raises:
        DocumentParseError: If ``data`` is not a bytes-like payload.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DocumentParseError(
            f"Failed to parse document: expected bytes, got {type(data).__name__}"
        )
    mime_type = (mime_type or "").lower()
    if not mime_type.startswith("text/") and is_binary_document(mime_type):
        logger.warning(
            "No text extractor for %s (%s); decoding raw bytes as UTF-8", filename, mime_type
        )
    elif mime_type not in SUPPORTED_MIME_TYPES and not mime_type.startswith("text/"):
        logger.info("Unrecognised MIME type %s for %s; decoding as UTF-8", mime_type, filename)
    return bytes(data).decode("utf-8", errors="replace")
