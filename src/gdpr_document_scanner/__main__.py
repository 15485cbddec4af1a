"""
Entry point for running the GDPR Document Scanner server as a module.

Usage:
    python -m gdpr_document_scanner
    gdpr-document-scanner
"""

from .server import main

if __name__ == "__main__":
    main()
