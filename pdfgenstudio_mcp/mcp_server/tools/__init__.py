"""
MCP Server Tools
================

Tool registries, one module per capability:
- templates: render_template, render_template_image
- json_documents: render_json, render_json_image
- html: render_html, render_html_image
- url: render_url, render_url_image
- management: list_templates, get_template, get_template_schema
"""

from typing import Dict, List, Type

from pdfgenstudio_mcp.core.api_client import PDFGenStudioClient
from pdfgenstudio_mcp.mcp_server.tools import html, json_documents, management, templates, url
from pdfgenstudio_mcp.mcp_server.tools.base import BaseTool

TOOL_CLASSES: List[Type[BaseTool]] = [
    *templates.TOOLS,
    *json_documents.TOOLS,
    *html.TOOLS,
    *url.TOOLS,
    *management.TOOLS,
]


def create_tools(client: PDFGenStudioClient) -> Dict[str, BaseTool]:
    """Instantiate every tool against ``client``, keyed by tool name."""
    return {tool_class.name: tool_class(client) for tool_class in TOOL_CLASSES}
