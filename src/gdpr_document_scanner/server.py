"""
GDPR Document Scanner Server

This module implements an MCP server that accepts documents, scans them
for GDPR compliance against a data subject / controller / processor
description, and serves the resulting reports.
"""

import logging
import os
import sys

from mcp.server.fastmcp import FastMCP

from .storage import get_storage
from .tools import register_tools

LOG_LEVEL = os.environ.get("GDPR_SCANNER_LOG_LEVEL", "INFO").upper()

# Configure logging to stderr only (MCP requirement)
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("GDPR Document Compliance Server")

# Initialize storage
storage = get_storage()

# Register all tools
register_tools(mcp, storage)


# ─── Prompts ────────────────────────────────────────────────────────────────

@mcp.prompt()
async def document_review() -> str:
    """
    Review a privacy policy or agreement for GDPR compliance: upload it,
    identify the data subject, controller and processor, and interpret the
    compliance report.
    """
    from .prompts import load_prompt
    return load_prompt("document_review")


@mcp.prompt()
async def processor_agreement_review() -> str:
    """
    Check a controller/processor agreement against GDPR Art. 28 and the
    transfer rules of Chapter V.
    """
    from .prompts import load_prompt
    return load_prompt("processor_agreement_review")


def main():
    """Run the GDPR Document Scanner MCP server."""
    logger.info("Starting GDPR Document Compliance Server")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
