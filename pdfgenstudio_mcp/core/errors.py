"""
API Client Errors
=================

Exceptions raised while talking to the PDF Gen Studio API. The message of each
exception is what the MCP caller sees, so it is kept human-readable.
"""

from typing import Optional


class PDFGenStudioError(Exception):
    """Base exception for PDF Gen Studio API failures."""

    pass


class MissingCredentialError(PDFGenStudioError):
    """No API key could be resolved for an outbound call."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message
            or "API key is required. Set PDFGENSTUDIO_API_KEY environment variable "
            "or pass apiKey parameter."
        )


class RemoteHttpError(PDFGenStudioError):
    """The API answered with a non-2xx status."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


class NetworkFailureError(PDFGenStudioError):
    """The request never produced an HTTP response (DNS, connection, TLS...)."""

    pass
