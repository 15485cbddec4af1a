"""
GDPR Document Scanner — Analysis Service

Upload and analysis workflows: validates input, parses the upload, runs
the compliance scanner and persists the results. Raises the error types
from :mod:`.errors`; callers turn those into user-facing messages.
"""
import logging
from typing import Any, Mapping, Union

from . import scanner
from .document_parser import check_upload_size, parse_document
from .errors import AnalysisNotFoundError, DocumentNotFoundError
from .models import EntityRoles
from .storage import Analysis, Document, MemStorage

logger = logging.getLogger(__name__)


def upload_document(storage: MemStorage, data: bytes, mime_type: str, filename: str) -> Document:
    """Parse and store an uploaded document."""
    check_upload_size(len(data))
    content = parse_document(data, mime_type, filename)
    return storage.create_document(
        filename=filename,
        original_name=filename,
        mime_type=mime_type,
        size=len(data),
        content=content,
    )


def analyze_document(
    storage: MemStorage,
    document_id: int,
    roles: Union[EntityRoles, Mapping[str, Any]],
) -> Analysis:
    """
    Run the compliance scan for a stored document.

    A document is analysed once: if an analysis already exists for it, that
    analysis is returned unchanged.

    Raises:
        ValidationError: If any entity role is empty.
        DocumentNotFoundError: If ``document_id`` is unknown.
    """
    if not isinstance(roles, EntityRoles):
        roles = EntityRoles.from_dict(roles)
    roles = roles.validate()

    document = storage.get_document(document_id)
    if document is None:
        raise DocumentNotFoundError(document_id)

    existing = storage.get_analysis_by_document_id(document_id)
    if existing is not None:
        logger.info("Document %d already analysed (analysis %d)", document_id, existing.id)
        return existing

    report = scanner.scan(document.content, roles)
    logger.info(
        "Analysed document %d: %d critical, %d warnings, score %d",
        document_id,
        report.summary.critical_count,
        report.summary.warning_count,
        report.compliance_score,
    )
    return storage.create_analysis(
        document_id=document_id,
        data_subject=roles.data_subject,
        data_controller=roles.data_controller,
        data_processor=roles.data_processor,
        analysis_results=report,
    )


def get_document(storage: MemStorage, document_id: int) -> Document:
    document = storage.get_document(document_id)
    if document is None:
        raise DocumentNotFoundError(document_id)
    return document


def get_analysis(storage: MemStorage, analysis_id: int) -> Analysis:
    analysis = storage.get_analysis(analysis_id)
    if analysis is None:
        raise AnalysisNotFoundError(analysis_id)
    return analysis


def get_analysis_for_document(storage: MemStorage, document_id: int) -> Analysis:
    analysis = storage.get_analysis_by_document_id(document_id)
    if analysis is None:
        raise AnalysisNotFoundError(document_id)
    return analysis
