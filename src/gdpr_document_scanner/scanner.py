"""
GDPR Document Scanner — Rule-Based Compliance Scanner

Deterministic lexical analysis of a document against GDPR: consent, data
subject rights, DPO, retention, third-party sharing, legal basis and
processor agreements. No network calls, no randomness; identical inputs
always produce identical reports.

Each check is a ``ComplianceRule`` evaluated in the fixed order of
``COMPLIANCE_RULES``; a rule emits at most one artifact (an issue, a
warning or a clause mapping).
"""
import logging
import os
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .models import (
    ClauseMapping,
    ComplianceStatus,
    EntityRoles,
    Finding,
    Recommendation,
    Report,
    Severity,
)

logger = logging.getLogger(__name__)

# ─── Constants ──────────────────────────────────────────────────────────────

TOTAL_CHECKS = 6

# 0 disables truncation
MAX_CONTENT_CHARS = int(os.environ.get("GDPR_SCANNER_MAX_CHARS", "0"))
TRUNCATION_MARKER = "... [document truncated]"

CONSENT_TERMS = ("consent", "agree", "accept")
DATA_SUBJECT_RIGHTS = ("access", "rectification", "erasure", "portability", "restriction")
DPO_TERMS = ("data protection officer", "dpo")
RETENTION_TERMS = ("retention", "delete", "storage period")
SHARING_TERMS = ("third party", "share", "transfer")
LEGAL_BASIS_TERMS = (
    "legitimate interest",
    "contract",
    "legal obligation",
    "vital interest",
    "public task",
)
PROCESSOR_TERMS = ("processor", "processing agreement")

MIN_RIGHTS_FOUND = 3

Artifact = Union[Finding, ClauseMapping]


def _articles(*numbers: int) -> Tuple[str, ...]:
    return tuple(f"Article {n}" for n in numbers)


# ─── Scan context ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ScanContext:
    """Preprocessed view of one document, shared by every rule."""

    lines: Tuple[str, ...]
    text_lower: str
    roles: EntityRoles

    @classmethod
    def from_text(cls, document_text: str, roles: EntityRoles) -> "ScanContext":
        lines = tuple(line.strip() for line in document_text.split("\n") if line.strip())
        return cls(lines=lines, text_lower=document_text.lower(), roles=roles)

    def lines_containing(self, terms: Sequence[str]) -> List[str]:
        """Lines mentioning any of ``terms`` (case-insensitive), in document order."""
        return [line for line in self.lines if any(t in line.lower() for t in terms)]

    def mentions(self, term: str) -> bool:
        return term in self.text_lower


# ─── Rules ──────────────────────────────────────────────────────────────────

Handler = Callable[[ScanContext, List[str]], Optional[Artifact]]


def _any_line(ctx: ScanContext, lines: List[str]) -> bool:
    return bool(lines)


def _always(roles: EntityRoles) -> bool:
    return True


@dataclass(frozen=True)
class ComplianceRule:
    """
    One keyword check.

    ``trigger`` decides between ``on_match`` and ``on_no_match`` given the
    lines that mention any of ``keywords``; either handler may be ``None``
    when that branch emits nothing. ``applies`` can skip the rule entirely
    based on the entity roles.
    """

    rule_id: str
    keywords: Tuple[str, ...]
    on_match: Optional[Handler]
    on_no_match: Optional[Handler]
    trigger: Callable[[ScanContext, List[str]], bool] = _any_line
    applies: Callable[[EntityRoles], bool] = _always

    def evaluate(self, ctx: ScanContext) -> Optional[Artifact]:
        if not self.applies(ctx.roles):
            return None
        lines = ctx.lines_containing(self.keywords)
        handler = self.on_match if self.trigger(ctx, lines) else self.on_no_match
        if handler is None:
            return None
        return handler(ctx, lines)


# 1. Consent


def _consent_missing(ctx: ScanContext, lines: List[str]) -> Finding:
    r = ctx.roles
    return Finding(
        title="Missing Consent Mechanism",
        description=(
            f"No clear consent mechanism found for processing {r.data_subject} data "
            f"by {r.data_controller}. GDPR requires explicit consent."
        ),
        gdpr_articles=_articles(6, 7),
        document_lines="No consent references found in document",
        severity=Severity.CRITICAL,
    )


def _consent_found(ctx: ScanContext, lines: List[str]) -> ClauseMapping:
    return ClauseMapping(
        document_section="Consent Section",
        gdpr_articles=_articles(6, 7),
        compliance_status=ComplianceStatus.COMPLIANT if len(lines) >= 2 else ComplianceStatus.PARTIAL,
        lines=f"Consent mentioned in {len(lines)} lines",
    )


# 2. Data subject rights


def _found_rights(ctx: ScanContext) -> List[str]:
    return [right for right in DATA_SUBJECT_RIGHTS if ctx.mentions(right)]


def _enough_rights(ctx: ScanContext, lines: List[str]) -> bool:
    return len(_found_rights(ctx)) >= MIN_RIGHTS_FOUND


def _rights_incomplete(ctx: ScanContext, lines: List[str]) -> Finding:
    found = _found_rights(ctx)
    missing = [right for right in DATA_SUBJECT_RIGHTS if right not in found]
    return Finding(
        title="Incomplete Data Subject Rights",
        description=(
            f"Only {len(found)} of {len(DATA_SUBJECT_RIGHTS)} data subject rights found for "
            f"{ctx.roles.data_subject}. Missing: {', '.join(missing)}"
        ),
        gdpr_articles=_articles(15, 16, 17, 18, 20),
        document_lines=(
            f"Rights mentioned in {len(lines)} lines" if lines else "No rights references found"
        ),
        severity=Severity.HIGH,
    )


def _rights_covered(ctx: ScanContext, lines: List[str]) -> ClauseMapping:
    return ClauseMapping(
        document_section="Data Subject Rights Section",
        gdpr_articles=_articles(15, 16, 17, 18, 20),
        compliance_status=ComplianceStatus.COMPLIANT,
        lines=f"Rights mentioned in {len(lines)} lines",
    )


# 3. Data protection officer


def _dpo_missing(ctx: ScanContext, lines: List[str]) -> Finding:
    return Finding(
        title="No Data Protection Officer Mentioned",
        description=(
            f"No DPO contact information found for {ctx.roles.data_controller}. "
            "This may be required for certain organizations."
        ),
        gdpr_articles=_articles(37, 38, 39),
        document_lines="No DPO references found",
        severity=Severity.WARNING,
    )


# 4. Retention


def _retention_missing(ctx: ScanContext, lines: List[str]) -> Finding:
    r = ctx.roles
    return Finding(
        title="No Data Retention Policy",
        description=(
            f"No clear data retention policy found for {r.data_subject} data held by "
            f"{r.data_controller}. GDPR requires limiting data storage periods."
        ),
        gdpr_articles=_articles(5),
        document_lines="No retention policy found",
        severity=Severity.HIGH,
    )


def _retention_found(ctx: ScanContext, lines: List[str]) -> ClauseMapping:
    return ClauseMapping(
        document_section="Data Retention Section",
        gdpr_articles=_articles(5),
        compliance_status=ComplianceStatus.COMPLIANT,
        lines=f"Retention mentioned in {len(lines)} lines",
    )


# 5. Third-party sharing (never COMPLIANT: transfer mechanisms need manual review)


def _sharing_found(ctx: ScanContext, lines: List[str]) -> ClauseMapping:
    return ClauseMapping(
        document_section="Data Sharing/Transfer Section",
        gdpr_articles=_articles(44, 45, 46),
        compliance_status=ComplianceStatus.PARTIAL,
        lines=f"Data sharing mentioned in {len(lines)} lines",
    )


# 6. Legal basis (consent counts as a basis)


def _has_legal_basis(ctx: ScanContext, lines: List[str]) -> bool:
    return any(ctx.mentions(term) for term in LEGAL_BASIS_TERMS) or ctx.mentions("consent")


def _legal_basis_missing(ctx: ScanContext, lines: List[str]) -> Finding:
    r = ctx.roles
    return Finding(
        title="No Legal Basis Specified",
        description=(
            f"No clear legal basis for processing {r.data_subject} data by "
            f"{r.data_controller} found."
        ),
        gdpr_articles=_articles(6),
        document_lines="No legal basis references found",
        severity=Severity.CRITICAL,
    )


def _legal_basis_found(ctx: ScanContext, lines: List[str]) -> Optional[ClauseMapping]:
    if not lines:
        return None
    return ClauseMapping(
        document_section="Legal Basis Section",
        gdpr_articles=_articles(6),
        compliance_status=ComplianceStatus.COMPLIANT,
        lines=f"Legal basis mentioned in {len(lines)} lines",
    )


# 7. Processor agreement


def _has_processor(roles: EntityRoles) -> bool:
    return roles.has_processor


def _processor_agreement_missing(ctx: ScanContext, lines: List[str]) -> Finding:
    return Finding(
        title="No Processor Agreement Found",
        description=(
            f"No processor agreement found for {ctx.roles.data_processor}. "
            "Article 28 requires written agreements."
        ),
        gdpr_articles=_articles(28),
        document_lines="No processor agreement found",
        severity=Severity.WARNING,
    )


def _processor_agreement_found(ctx: ScanContext, lines: List[str]) -> ClauseMapping:
    return ClauseMapping(
        document_section="Processor Agreement Section",
        gdpr_articles=_articles(28),
        compliance_status=ComplianceStatus.COMPLIANT,
        lines=f"Processor mentioned in {len(lines)} lines",
    )


COMPLIANCE_RULES: Tuple[ComplianceRule, ...] = (
    ComplianceRule("consent", CONSENT_TERMS, _consent_found, _consent_missing),
    ComplianceRule(
        "data_subject_rights",
        DATA_SUBJECT_RIGHTS,
        _rights_covered,
        _rights_incomplete,
        trigger=_enough_rights,
    ),
    ComplianceRule("dpo", DPO_TERMS, None, _dpo_missing),
    ComplianceRule("retention", RETENTION_TERMS, _retention_found, _retention_missing),
    ComplianceRule("third_party_sharing", SHARING_TERMS, _sharing_found, None),
    ComplianceRule(
        "legal_basis",
        LEGAL_BASIS_TERMS + ("consent",),
        _legal_basis_found,
        _legal_basis_missing,
        trigger=_has_legal_basis,
    ),
    ComplianceRule(
        "processor_agreement",
        PROCESSOR_TERMS,
        _processor_agreement_found,
        _processor_agreement_missing,
        applies=_has_processor,
    ),
)


# ─── Recommendations, scoring, fallback ─────────────────────────────────────


def build_recommendations(roles: EntityRoles) -> List[Recommendation]:
    """The three standing recommendations, emitted regardless of findings."""
    controller, subject = roles.data_controller, roles.data_subject
    return [
        Recommendation(
            title="Implement Privacy by Design",
            description=(
                f"Ensure {controller} builds data protection measures into systems "
                f"from the ground up for {subject} data."
            ),
            priority=1,
        ),
        Recommendation(
            title="Regular Compliance Audits",
            description=(
                f"Conduct regular GDPR compliance audits for {controller} "
                "and update policies accordingly."
            ),
            priority=2,
        ),
        Recommendation(
            title="Staff Training",
            description=(
                f"Provide regular GDPR training for all {controller} staff "
                f"handling {subject} data."
            ),
            priority=3,
        ),
    ]


def compute_compliance_score(critical_count: int, warning_count: int) -> int:
    """
    Score out of 100 over ``TOTAL_CHECKS`` checks.

    Every issue fails one check and every two warnings fail one more;
    the result is clamped to [0, 100].
    """
    passed = max(0, TOTAL_CHECKS - critical_count - warning_count // 2)
    score = round(passed / TOTAL_CHECKS * 100)
    return min(100, max(0, score))


def fallback_report(roles: Optional[EntityRoles]) -> Report:
    """Constant degraded report used when the rule-based scan cannot complete."""
    subject = getattr(roles, "data_subject", "")
    controller = getattr(roles, "data_controller", "")
    processor = getattr(roles, "data_processor", "")
    return Report.build(
        critical_issues=[
            Finding(
                title="Document Analysis Required",
                description=(
                    "This document requires manual review for GDPR compliance. "
                    "Please consult with a data protection expert."
                ),
                gdpr_articles=_articles(5, 6),
                document_lines="Full document",
                severity=Severity.MEDIUM,
            )
        ],
        warnings=[
            Finding(
                title="Automated Analysis Limitation",
                description=(
                    "This analysis was performed using rule-based checking. "
                    "A comprehensive legal review is recommended."
                ),
                gdpr_articles=("All Articles",),
                document_lines="N/A",
                severity=Severity.INFO,
            )
        ],
        clause_mapping=[
            ClauseMapping(
                document_section="Entity Information",
                gdpr_articles=_articles(4),
                compliance_status=ComplianceStatus.PARTIAL,
                lines=(
                    f"Data Subject: {subject}, Controller: {controller}, "
                    f"Processor: {processor}"
                ),
            )
        ],
        recommendations=[
            Recommendation(
                title="Professional Legal Review",
                description=(
                    "Consult with a qualified data protection lawyer for "
                    "comprehensive GDPR compliance."
                ),
                priority=1,
            ),
            Recommendation(
                title="GDPR Compliance Checklist",
                description=(
                    "Use official GDPR compliance checklists from data "
                    "protection authorities."
                ),
                priority=2,
            ),
        ],
        compliance_score=60,
    )


# ─── Scanner ────────────────────────────────────────────────────────────────


def truncate_content(document_text: str, max_chars: int) -> str:
    if max_chars > 0 and len(document_text) > max_chars:
        return document_text[:max_chars] + TRUNCATION_MARKER
    return document_text


class ComplianceScanner:
    """
    Runs the compliance rules over a document and assembles the report.

    ``scan`` never raises: any failure while preprocessing or evaluating the
    rules yields :func:`fallback_report` instead.
    """

    def __init__(
        self,
        rules: Sequence[ComplianceRule] = COMPLIANCE_RULES,
        max_chars: int = MAX_CONTENT_CHARS,
    ):
        self.rules = tuple(rules)
        self.max_chars = max_chars

    def scan(self, document_text: str, roles: EntityRoles) -> Report:
        try:
            return self._scan(document_text, roles)
        except Exception:
            logger.exception("Rule-based GDPR scan failed; returning fallback report")
            return fallback_report(roles)

    def _scan(self, document_text: str, roles: EntityRoles) -> Report:
        ctx = ScanContext.from_text(truncate_content(document_text, self.max_chars), roles)

        critical_issues: List[Finding] = []
        warnings: List[Finding] = []
        clause_mapping: List[ClauseMapping] = []

        for rule in self.rules:
            artifact = rule.evaluate(ctx)
            if artifact is None:
                continue
            if isinstance(artifact, ClauseMapping):
                clause_mapping.append(artifact)
            elif artifact.severity.is_issue:
                critical_issues.append(artifact)
            else:
                warnings.append(artifact)

        score = compute_compliance_score(len(critical_issues), len(warnings))
        logger.debug(
            "Scanned %d lines: %d issues, %d warnings, %d clauses, score %d",
            len(ctx.lines),
            len(critical_issues),
            len(warnings),
            len(clause_mapping),
            score,
        )
        return Report.build(
            critical_issues=critical_issues,
            warnings=warnings,
            clause_mapping=clause_mapping,
            recommendations=build_recommendations(roles),
            compliance_score=score,
        )


_default_scanner = ComplianceScanner()


def scan(document_text: str, roles: EntityRoles) -> Report:
    """Scan ``document_text`` with the default rule set."""
    return _default_scanner.scan(document_text, roles)
