"""
GDPR Document Scanner — Report Data Model

Typed records for entity roles and the GDPR compliance report produced by
the scanner. ``to_dict()`` on every record yields the camelCase wire shape
consumed by the MCP tools and the JSON output format.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .errors import ValidationError


class Severity(str, Enum):
    """Severity shared by issues and warnings."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    WARNING = "WARNING"
    INFO = "INFO"

    @property
    def is_issue(self) -> bool:
        return self in _ISSUE_SEVERITIES


_ISSUE_SEVERITIES = frozenset(
    {Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW}
)


class ComplianceStatus(str, Enum):
    COMPLIANT = "COMPLIANT"
    PARTIAL = "PARTIAL"
    NON_COMPLIANT = "NON_COMPLIANT"


# ─── Entity roles ───────────────────────────────────────────────────────────

_ROLE_FIELDS = (
    ("data_subject", "dataSubject", "Data subject is required"),
    ("data_controller", "dataController", "Data controller is required"),
    ("data_processor", "dataProcessor", "Data processor is required"),
)


@dataclass(frozen=True)
class EntityRoles:
    """The three GDPR parties a document is analysed against."""

    data_subject: str
    data_controller: str
    data_processor: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "EntityRoles":
        """Build roles from camelCase (``dataSubject``) or snake_case keys."""
        values = {}
        for attr, camel, _message in _ROLE_FIELDS:
            value = payload.get(camel, payload.get(attr, ""))
            values[attr] = "" if value is None else str(value)
        return cls(**values)

    def validate(self) -> "EntityRoles":
        """Return a trimmed copy, or raise ``ValidationError`` if any role is empty."""
        trimmed = {attr: (getattr(self, attr) or "").strip() for attr, _, _ in _ROLE_FIELDS}
        missing = [message for attr, _, message in _ROLE_FIELDS if not trimmed[attr]]
        if missing:
            raise ValidationError("; ".join(missing))
        return EntityRoles(**trimmed)

    @property
    def has_processor(self) -> bool:
        return bool(self.data_processor and self.data_processor.strip())

    def to_dict(self) -> Dict[str, str]:
        return {camel: getattr(self, attr) for attr, camel, _ in _ROLE_FIELDS}


# ─── Report records ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Finding:
    """A critical issue or a warning; which list it lands in follows ``severity``."""

    title: str
    description: str
    gdpr_articles: Tuple[str, ...]
    document_lines: str
    severity: Severity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "gdprArticles": list(self.gdpr_articles),
            "documentLines": self.document_lines,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class ClauseMapping:
    document_section: str
    gdpr_articles: Tuple[str, ...]
    compliance_status: ComplianceStatus
    lines: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "documentSection": self.document_section,
            "gdprArticles": list(self.gdpr_articles),
            "complianceStatus": self.compliance_status.value,
            "lines": self.lines,
        }


@dataclass(frozen=True)
class Recommendation:
    title: str
    description: str
    priority: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
        }


@dataclass(frozen=True)
class Summary:
    critical_count: int
    warning_count: int
    gdpr_clause_count: int
    compliance_score: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "criticalCount": self.critical_count,
            "warningCount": self.warning_count,
            "gdprClauseCount": self.gdpr_clause_count,
            "complianceScore": self.compliance_score,
        }


@dataclass(frozen=True)
class Report:
    """
    GDPR compliance report for one document.

    Use :meth:`build` rather than the constructor: it derives the summary
    counts from the collections so they can never drift apart.
    """

    critical_issues: Tuple[Finding, ...]
    warnings: Tuple[Finding, ...]
    clause_mapping: Tuple[ClauseMapping, ...]
    recommendations: Tuple[Recommendation, ...]
    summary: Summary

    @classmethod
    def build(
        cls,
        critical_issues: Sequence[Finding],
        warnings: Sequence[Finding],
        clause_mapping: Sequence[ClauseMapping],
        recommendations: Sequence[Recommendation],
        compliance_score: int,
    ) -> "Report":
        return cls(
            critical_issues=tuple(critical_issues),
            warnings=tuple(warnings),
            clause_mapping=tuple(clause_mapping),
            recommendations=tuple(recommendations),
            summary=Summary(
                critical_count=len(critical_issues),
                warning_count=len(warnings),
                gdpr_clause_count=len(clause_mapping),
                compliance_score=compliance_score,
            ),
        )

    @property
    def compliance_score(self) -> int:
        return self.summary.compliance_score

    def find(self, title: str) -> Optional[Finding]:
        """Look up an issue or warning by title."""
        for finding in self.critical_issues + self.warnings:
            if finding.title == title:
                return finding
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "criticalIssues": [f.to_dict() for f in self.critical_issues],
            "warnings": [f.to_dict() for f in self.warnings],
            "clauseMapping": [c.to_dict() for c in self.clause_mapping],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "summary": self.summary.to_dict(),
        }
