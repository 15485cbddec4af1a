"""
Tests for the document parser and upload size checks.
"""
import logging

import pytest

from gdpr_document_scanner.document_parser import (
    MAX_UPLOAD_BYTES,
    check_upload_size,
    parse_document,
)
from gdpr_document_scanner.errors import DocumentParseError, ValidationError


class TestParseDocument:

    def test_plain_text_decoded(self):
        assert parse_document(b"We ask for consent.", "text/plain", "policy.txt") == "We ask for consent."

    def test_utf8_decoded(self):
        text = "Données personnelles — Datenschutz"
        assert parse_document(text.encode("utf-8"), "text/markdown", "policy.md") == text

    def test_invalid_bytes_replaced(self):
        result = parse_document(b"consent \xff\xfe", "text/plain", "bad.txt")
        assert result.startswith("consent ")
        assert "�" in result

    @pytest.mark.parametrize("mime_type", [
        "application/pdf",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ])
    def test_binary_documents_decoded_with_warning(self, mime_type, caplog):
        with caplog.at_level(logging.WARNING, logger="gdpr_document_scanner.document_parser"):
            result = parse_document(b"retention policy", mime_type, "policy.bin")
        assert result == "retention policy"
        assert "No text extractor" in caplog.text

    def test_unknown_mime_type_still_decoded(self):
        assert parse_document(b"hello", "application/octet-stream", "x.bin") == "hello"

    def test_non_bytes_payload_rejected(self):
        with pytest.raises(DocumentParseError, match="Failed to parse document"):
            parse_document("not bytes", "text/plain", "policy.txt")


class TestUploadSize:

    def test_empty_upload_rejected(self):
        with pytest.raises(ValidationError, match="No file uploaded"):
            check_upload_size(0)

    def test_oversized_upload_rejected(self):
        with pytest.raises(ValidationError, match="File too large"):
            check_upload_size(MAX_UPLOAD_BYTES + 1)

    def test_limit_is_inclusive(self):
        check_upload_size(MAX_UPLOAD_BYTES)
