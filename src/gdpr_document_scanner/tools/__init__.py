"""
GDPR Document Scanner — Tools Module

MCP tool functions grouped by concern: document upload/lookup and
compliance analysis. Each submodule holds the ``*_impl`` coroutines;
this module registers them with the MCP server.
"""
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP
    from ..storage import MemStorage

logger = logging.getLogger(__name__)


def register_tools(mcp: "FastMCP", storage: "MemStorage"):
    """
    Register all tool functions with the MCP server.

    Args:
        mcp: The FastMCP server instance
        storage: The store holding uploaded documents and analyses
    """
    from . import analysis, documents

    # ── Documents ───────────────────────────────────────────────────────

    @mcp.tool()
    async def upload_document(
        content: str,
        filename: str,
        mime_type: str = "text/plain",
        encoding: str = "text",
    ) -> str:
        """
        Upload a document (privacy policy, DPA, terms) for GDPR analysis.

        Args:
            content: Document content, plain text or base64
            filename: Original filename
            mime_type: MIME type, e.g. 'text/plain', 'application/pdf'
            encoding: 'text' or 'base64'
        """
        return await documents.upload_document_impl(
            content, filename, mime_type, encoding, storage
        )

    @mcp.tool()
    async def get_document(document_id: int, output_format: str = "markdown") -> str:
        """Get an uploaded document by id ('markdown' or 'json')."""
        return await documents.get_document_impl(document_id, output_format, storage)

    # ── Compliance analysis ─────────────────────────────────────────────

    @mcp.tool()
    async def analyze_document(
        document_id: int,
        data_subject: str,
        data_controller: str,
        data_processor: str,
        output_format: str = "markdown",
    ) -> str:
        """
        Produce a GDPR compliance report for an uploaded document.

        Checks consent, data subject rights, DPO, retention, third-party
        sharing, legal basis and processor agreements, and computes a
        compliance score. A document is analysed once; repeat calls return
        the stored analysis.

        Args:
            document_id: Id returned by upload_document
            data_subject: Whose data is processed (e.g. 'customers')
            data_controller: Who determines the purposes (e.g. 'Acme Inc')
            data_processor: Who processes on the controller's behalf
            output_format: 'markdown' or 'json'
        """
        return await analysis.analyze_document_impl(
            document_id, data_subject, data_controller, data_processor, output_format, storage
        )

    @mcp.tool()
    async def get_analysis(analysis_id: int, output_format: str = "markdown") -> str:
        """Get a stored compliance analysis by its id."""
        return await analysis.get_analysis_impl(analysis_id, output_format, storage)

    @mcp.tool()
    async def get_document_analysis(document_id: int, output_format: str = "markdown") -> str:
        """Get the compliance analysis stored for a document."""
        return await analysis.get_document_analysis_impl(document_id, output_format, storage)

    @mcp.tool()
    async def scan_text(
        text: str,
        data_subject: str,
        data_controller: str,
        data_processor: str = "",
        output_format: str = "markdown",
    ) -> str:
        """
        Scan inline document text for GDPR compliance without storing it.

        Args:
            text: Document text
            data_subject: Whose data is processed
            data_controller: Who determines the purposes
            data_processor: Optional processor; empty skips the Art. 28 check
            output_format: 'markdown' or 'json'
        """
        return await analysis.scan_text_impl(
            text, data_subject, data_controller, data_processor, output_format
        )

    logger.info("Registered 6 GDPR document tools across 2 modules")
