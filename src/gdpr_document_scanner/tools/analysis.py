"""
GDPR Document Scanner — Compliance Analysis Tools

Run the rule-based GDPR scanner on stored documents (or on inline text)
and retrieve stored analyses.
"""
import logging

from .. import scanner, service
from ..errors import GDPRScannerError, NotFoundError
from ..models import EntityRoles
from .report import OUTPUT_FORMATS, format_analysis, format_error, format_report, to_json

logger = logging.getLogger(__name__)


def _check_format(output_format: str):
    if output_format not in OUTPUT_FORMATS:
        return format_error(
            f"Unknown output format '{output_format}'. Use one of: {', '.join(OUTPUT_FORMATS)}"
        )
    return None


async def analyze_document_impl(
    document_id: int,
    data_subject: str,
    data_controller: str,
    data_processor: str,
    output_format: str,
    storage,
) -> str:
    """Analyze a stored document for the given entity roles."""
    error = _check_format(output_format)
    if error:
        return error
    roles = EntityRoles(data_subject, data_controller, data_processor)
    try:
        analysis = service.analyze_document(storage, document_id, roles)
    except GDPRScannerError as e:
        return format_error(str(e))
    except Exception:
        logger.exception("Analysis of document %s failed", document_id)
        return format_error("Unknown error")
    return format_analysis(analysis, output_format)


async def get_analysis_impl(analysis_id: int, output_format: str, storage) -> str:
    error = _check_format(output_format)
    if error:
        return error
    try:
        analysis = service.get_analysis(storage, analysis_id)
    except NotFoundError as e:
        return format_error(str(e))
    return format_analysis(analysis, output_format)


async def get_document_analysis_impl(document_id: int, output_format: str, storage) -> str:
    error = _check_format(output_format)
    if error:
        return error
    try:
        analysis = service.get_analysis_for_document(storage, document_id)
    except NotFoundError as e:
        return format_error(str(e))
    return format_analysis(analysis, output_format)


async def scan_text_impl(
    text: str,
    data_subject: str,
    data_controller: str,
    data_processor: str,
    output_format: str,
) -> str:
    """
    Scan inline text without storing anything.

    Data subject and controller are required; an empty processor skips
    the processor-agreement check.
    """
    error = _check_format(output_format)
    if error:
        return error
    subject, controller = (data_subject or "").strip(), (data_controller or "").strip()
    missing = []
    if not subject:
        missing.append("Data subject is required")
    if not controller:
        missing.append("Data controller is required")
    if missing:
        return format_error("; ".join(missing))

    roles = EntityRoles(subject, controller, (data_processor or "").strip())
    report = scanner.scan(text, roles)
    if output_format == "json":
        return to_json(report.to_dict())
    return format_report(report)
