"""
GDPR Document Scanner — Legal Disclaimer

Appended to every human-readable report so automated findings are never
mistaken for legal advice.
"""

LEGAL_DISCLAIMER = (
    "⚖️ **Disclaimer:** This report is generated by automated keyword analysis "
    "and does not constitute legal advice. GDPR compliance depends on context "
    "that a lexical scan cannot see; consult a qualified data protection "
    "professional before relying on these results."
)


def append_disclaimer(text: str) -> str:
    """Return ``text`` followed by the legal disclaimer."""
    return f"{text.rstrip()}\n\n---\n\n{LEGAL_DISCLAIMER}\n"
