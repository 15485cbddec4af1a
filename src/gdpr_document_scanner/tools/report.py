"""
GDPR Document Scanner — Report Rendering

Markdown and JSON views of compliance reports and stored analyses.
"""
import json
from typing import Any, Dict, Optional

from ..disclaimer import append_disclaimer
from ..models import Finding, Report
from ..storage import Analysis, Document

OUTPUT_FORMATS = ("markdown", "json")

SEVERITY_ICONS = {
    "CRITICAL": "🔴",
    "HIGH": "🟠",
    "MEDIUM": "🟡",
    "LOW": "🟢",
    "WARNING": "⚠️",
    "INFO": "ℹ️",
}

STATUS_ICONS = {
    "COMPLIANT": "✅",
    "PARTIAL": "🟡",
    "NON_COMPLIANT": "❌",
}


def to_json(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def format_error(message: str) -> str:
    return f"❌ **Error:** {message}\n"


def _format_finding(finding: Finding) -> str:
    icon = SEVERITY_ICONS.get(finding.severity.value, "⚪")
    out = f"### {icon} {finding.title} ({finding.severity.value})\n\n"
    out += f"**GDPR Reference:** {', '.join(finding.gdpr_articles)}\n\n"
    out += f"**Issue:** {finding.description}\n\n"
    out += f"**Location:** {finding.document_lines}\n\n"
    return out


def format_report(
    report: Report,
    heading: str = "GDPR Document Compliance Report",
    intro: str = "",
) -> str:
    """Render a report as markdown with the legal disclaimer."""
    s = report.summary
    result = f"# {heading}\n\n"
    if intro:
        result += f"{intro}\n\n"
    result += "## Summary\n\n"
    result += f"- **Compliance score: {s.compliance_score}/100**\n"
    result += f"- 🔴 Critical issues: {s.critical_count}\n"
    result += f"- ⚠️ Warnings: {s.warning_count}\n"
    result += f"- 📄 GDPR clauses mapped: {s.gdpr_clause_count}\n\n"

    if report.critical_issues:
        result += "## Critical Issues\n\n"
        for finding in report.critical_issues:
            result += _format_finding(finding)

    if report.warnings:
        result += "## Warnings\n\n"
        for finding in report.warnings:
            result += _format_finding(finding)

    if report.clause_mapping:
        result += "## Clause Mapping\n\n"
        result += "| Document Section | GDPR Articles | Status | Lines |\n"
        result += "|---|---|---|---|\n"
        for clause in report.clause_mapping:
            status = clause.compliance_status.value
            result += (
                f"| {clause.document_section} | {', '.join(clause.gdpr_articles)} "
                f"| {STATUS_ICONS.get(status, '')} {status} | {clause.lines} |\n"
            )
        result += "\n"

    result += "## Recommendations\n\n"
    for rec in sorted(report.recommendations, key=lambda r: r.priority):
        result += f"{rec.priority}. **{rec.title}** — {rec.description}\n"

    return append_disclaimer(result)


def format_analysis(analysis: Analysis, output_format: str = "markdown") -> str:
    if output_format == "json":
        return to_json(analysis.to_dict())
    heading = f"GDPR Compliance Analysis #{analysis.id} (document {analysis.document_id})"
    intro = (
        f"**Data subject:** {analysis.data_subject} · "
        f"**Controller:** {analysis.data_controller} · "
        f"**Processor:** {analysis.data_processor}"
    )
    return format_report(analysis.analysis_results, heading=heading, intro=intro)


def format_document(document: Document, preview_chars: Optional[int] = 500) -> str:
    result = f"# Document #{document.id}\n\n"
    result += f"- **Filename:** {document.original_name}\n"
    result += f"- **MIME type:** {document.mime_type}\n"
    result += f"- **Size:** {document.size} bytes\n"
    result += f"- **Uploaded:** {document.uploaded_at.isoformat()}\n\n"
    content = document.content
    if preview_chars is not None and len(content) > preview_chars:
        content = content[:preview_chars] + "…"
    result += "## Content preview\n\n```\n" + content + "\n```\n"
    return result
