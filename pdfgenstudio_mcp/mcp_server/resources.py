"""
MCP Server Resources
====================

Read-only resources: the template list, a single template, static API
documentation and the configuration status.

API failures never escape a resource read; they come back as an ``error``
field in the JSON payload.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List

from mcp.types import Resource, ResourceTemplate

from pdfgenstudio_mcp.config.logging import get_logger
from pdfgenstudio_mcp.core.api_client import PDFGenStudioClient
from pdfgenstudio_mcp.core.errors import PDFGenStudioError
from pdfgenstudio_mcp.mcp_server.tools.management import summarize_template

logger = get_logger(__name__)

TEMPLATES_URI = "pdfgenstudio://templates"
TEMPLATE_URI_TEMPLATE = "pdfgenstudio://templates/{templateId}"
DOCS_URI = "pdfgenstudio://docs/api"
CONFIG_URI = "pdfgenstudio://config"

_TEMPLATE_URI_PATTERN = re.compile(r"^pdfgenstudio://templates/(?P<template_id>[^/?#]+)$")

API_KEY_NOT_CONFIGURED = "API key not configured. Set PDFGENSTUDIO_API_KEY environment variable."

API_DOCUMENTATION = """# PDF Gen Studio API Documentation

## Overview
PDF Gen Studio provides a powerful API for generating PDFs and images from various sources.

## Authentication
All API requests require an API key passed in the `X-API-Key` header.

## Endpoints

### Templates
- `GET /api/v1/templates` - List all templates
- `GET /api/v1/templates/{id}` - Get template details
- `POST /api/v1/renderer/templates/{id}` - Render a template

### JSON Rendering
- `POST /api/v1/renderer/json` - Render JSON document

### HTML Rendering
- `POST /api/v1/renderer/html` - Render HTML to PDF/image

### URL Rendering
- `POST /api/v1/renderer/url` - Screenshot URL to PDF/image

## Output Formats
- `pdf` - PDF document
- `png` - PNG image
- `jpg` - JPEG image

## Response Types
- `base64` - Base64 encoded string
- `binary` - Raw binary data

For more information, visit https://docs.pdfgenstudio.com
"""


@dataclass(frozen=True)
class ResourceContent:
    """Text of a resource read and its MIME type."""

    text: str
    mime_type: str


class ResourceRegistry:
    """Resolves resource URIs against the PDF Gen Studio API."""

    def __init__(self, client: PDFGenStudioClient) -> None:
        self.client = client
        self.settings = client.settings
        self.logger: Any = logger.bind(component="resources")  # structlog.BoundLoggerBase

    def list_resources(self) -> List[Resource]:
        return [
            Resource(
                uri=TEMPLATES_URI,  # type: ignore[arg-type]
                name="PDF Gen Studio Templates",
                description="List of all templates in your PDF Gen Studio account",
                mimeType="application/json",
            ),
            Resource(
                uri=DOCS_URI,  # type: ignore[arg-type]
                name="PDF Gen Studio API Documentation",
                description="API documentation for PDF Gen Studio",
                mimeType="text/markdown",
            ),
            Resource(
                uri=CONFIG_URI,  # type: ignore[arg-type]
                name="PDF Gen Studio Configuration",
                description="Current MCP server configuration status",
                mimeType="application/json",
            ),
        ]

    def list_resource_templates(self) -> List[ResourceTemplate]:
        return [
            ResourceTemplate(
                uriTemplate=TEMPLATE_URI_TEMPLATE,
                name="PDF Gen Studio Template",
                description="Detailed information about a specific template",
                mimeType="application/json",
            )
        ]

    async def read(self, uri: str) -> ResourceContent:
        """
        Read a resource by URI.

        Raises:
            ValueError: if the URI is not a known resource
        """
        uri = str(uri).rstrip("/")

        if uri == TEMPLATES_URI:
            return _json(await self._read_templates())
        if uri == DOCS_URI:
            return ResourceContent(text=API_DOCUMENTATION, mime_type="text/markdown")
        if uri == CONFIG_URI:
            return _json(self._read_config())

        match = _TEMPLATE_URI_PATTERN.match(uri)
        if match:
            return _json(await self._read_template(match.group("template_id")))

        raise ValueError(f"Unknown resource URI: {uri}")

    async def _read_templates(self) -> Dict[str, Any]:
        if not self.settings.has_api_key:
            return {"error": API_KEY_NOT_CONFIGURED}

        try:
            response = await self.client.list_templates()
        except PDFGenStudioError as e:
            self.logger.error("Templates resource read failed", error=str(e))
            return {"error": str(e)}

        templates = response.get("data")
        if not response.get("success") or not isinstance(templates, list):
            return {"success": False, "templates": []}

        formatted = [summarize_template(t) for t in templates if isinstance(t, dict)]
        return {"success": True, "count": len(formatted), "templates": formatted}

    async def _read_template(self, template_id: str) -> Dict[str, Any]:
        if not self.settings.has_api_key:
            return {"error": API_KEY_NOT_CONFIGURED}

        try:
            response = await self.client.get_template(template_id)
        except PDFGenStudioError as e:
            self.logger.error("Template resource read failed", template_id=template_id, error=str(e))
            return {"error": str(e)}

        template = response.get("data")
        if not response.get("success") or not isinstance(template, dict):
            return {"success": False, "message": f"Template not found: {template_id}"}

        return {"success": True, **template}

    def _read_config(self) -> Dict[str, Any]:
        return {
            "configured": self.settings.has_api_key,
            "baseUrl": self.settings.base_url,
            "apiKeySet": (
                "Yes (hidden)"
                if self.settings.has_api_key
                else "No - Set PDFGENSTUDIO_API_KEY environment variable"
            ),
        }


def _json(payload: Dict[str, Any]) -> ResourceContent:
    return ResourceContent(text=json.dumps(payload, indent=2), mime_type="application/json")
