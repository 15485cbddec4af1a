"""
GDPR Document Scanner — Document Tools

Upload documents for analysis and look them up again by id.
"""
import base64
import binascii
import logging

from .. import service
from ..errors import GDPRScannerError, ValidationError
from .report import format_document, format_error, to_json

logger = logging.getLogger(__name__)

ENCODINGS = ("text", "base64")


def _decode_content(content: str, encoding: str) -> bytes:
    if encoding == "base64":
        try:
            return base64.b64decode(content, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(f"Invalid base64 content: {e}") from e
    return content.encode("utf-8")


async def upload_document_impl(
    content: str, filename: str, mime_type: str, encoding: str, storage
) -> str:
    """Store an uploaded document and report its id."""
    if encoding not in ENCODINGS:
        return format_error(
            f"Unknown encoding '{encoding}'. Use one of: {', '.join(ENCODINGS)}"
        )
    try:
        data = _decode_content(content or "", encoding)
        document = service.upload_document(storage, data, mime_type, filename)
    except GDPRScannerError as e:
        return format_error(str(e))
    except Exception:
        logger.exception("Upload of %s failed", filename)
        return format_error("Unknown error")

    result = "# Document Uploaded\n\n"
    result += f"- **Document ID:** {document.id}\n"
    result += f"- **Filename:** {document.original_name}\n"
    result += f"- **MIME type:** {document.mime_type}\n"
    result += f"- **Size:** {document.size} bytes\n\n"
    result += (
        f"Run `analyze_document` with document_id={document.id} and the data subject, "
        "controller and processor to produce a GDPR compliance report.\n"
    )
    return result


async def get_document_impl(document_id: int, output_format: str, storage) -> str:
    try:
        document = service.get_document(storage, document_id)
    except GDPRScannerError as e:
        return format_error(str(e))
    if output_format == "json":
        return to_json(document.to_dict())
    return format_document(document)
