"""
GDPR Document Scanner

An MCP (Model Context Protocol) server that scans uploaded documents for
GDPR compliance against a data subject / controller / processor
description and produces structured compliance reports.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .models import EntityRoles, Report
from .scanner import ComplianceScanner, scan

__all__ = ["ComplianceScanner", "EntityRoles", "Report", "scan"]
