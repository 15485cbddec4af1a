"""
GDPR Document Scanner — Error Types

Errors raised by the collaborators around the compliance scanner (upload
validation, document lookup, parsing). The scanner itself never raises.
"""


class GDPRScannerError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(GDPRScannerError):
    """Invalid input, e.g. an empty entity role or an oversized upload."""


class NotFoundError(GDPRScannerError):
    """A requested record does not exist in the store."""


class DocumentNotFoundError(NotFoundError):
    def __init__(self, document_id: int):
        super().__init__("Document not found")
        self.document_id = document_id


class AnalysisNotFoundError(NotFoundError):
    def __init__(self, key: int):
        super().__init__("Analysis not found")
        self.key = key


class DocumentParseError(GDPRScannerError):
    """The uploaded payload could not be turned into text."""
