"""
GDPR Document Scanner — In-Memory Storage

Ephemeral store for uploaded documents and their compliance analyses,
keyed by auto-incrementing integer ids. Nothing survives a restart.
"""
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .models import Report

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Document:
    id: int
    filename: str
    original_name: str
    mime_type: str
    size: int
    content: str
    uploaded_at: datetime = field(default_factory=_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "filename": self.filename,
            "originalName": self.original_name,
            "mimeType": self.mime_type,
            "size": self.size,
            "content": self.content,
            "uploadedAt": self.uploaded_at.isoformat(),
        }


@dataclass(frozen=True)
class Analysis:
    id: int
    document_id: int
    data_subject: str
    data_controller: str
    data_processor: str
    analysis_results: Report
    compliance_score: int
    created_at: datetime = field(default_factory=_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "documentId": self.document_id,
            "dataSubject": self.data_subject,
            "dataController": self.data_controller,
            "dataProcessor": self.data_processor,
            "analysisResults": self.analysis_results.to_dict(),
            "complianceScore": self.compliance_score,
            "createdAt": self.created_at.isoformat(),
        }


# ─── Singleton ──────────────────────────────────────────────────────────────

_storage: Optional["MemStorage"] = None


def get_storage() -> "MemStorage":
    """Return the process-wide store."""
    global _storage
    if _storage is None:
        _storage = MemStorage()
    return _storage


# ─── Store ──────────────────────────────────────────────────────────────────


class MemStorage:
    """Dict-backed store; ids start at 1 and are allocated per record kind."""

    def __init__(self):
        self._documents: Dict[int, Document] = {}
        self._analyses: Dict[int, Analysis] = {}
        self._next_document_id = 1
        self._next_analysis_id = 1
        self._lock = threading.Lock()

    # ── Documents ───────────────────────────────────────────────────────

    def create_document(
        self,
        filename: str,
        original_name: str,
        mime_type: str,
        size: int,
        content: str,
    ) -> Document:
        with self._lock:
            doc_id = self._next_document_id
            self._next_document_id += 1
            document = Document(
                id=doc_id,
                filename=filename,
                original_name=original_name,
                mime_type=mime_type,
                size=size,
                content=content,
            )
            self._documents[doc_id] = document
        logger.info("Stored document %d (%s, %d bytes)", doc_id, original_name, size)
        return document

    def get_document(self, document_id: int) -> Optional[Document]:
        return self._documents.get(document_id)

    # ── Analyses ────────────────────────────────────────────────────────

    def create_analysis(
        self,
        document_id: int,
        data_subject: str,
        data_controller: str,
        data_processor: str,
        analysis_results: Report,
    ) -> Analysis:
        with self._lock:
            analysis_id = self._next_analysis_id
            self._next_analysis_id += 1
            analysis = Analysis(
                id=analysis_id,
                document_id=document_id,
                data_subject=data_subject,
                data_controller=data_controller,
                data_processor=data_processor,
                analysis_results=analysis_results,
                compliance_score=analysis_results.compliance_score,
            )
            self._analyses[analysis_id] = analysis
        logger.info(
            "Stored analysis %d for document %d (score %d)",
            analysis_id,
            document_id,
            analysis.compliance_score,
        )
        return analysis

    def get_analysis(self, analysis_id: int) -> Optional[Analysis]:
        return self._analyses.get(analysis_id)

    def get_analysis_by_document_id(self, document_id: int) -> Optional[Analysis]:
        """First analysis recorded for ``document_id``, if any."""
        for analysis in self._analyses.values():
            if analysis.document_id == document_id:
                return analysis
        return None
