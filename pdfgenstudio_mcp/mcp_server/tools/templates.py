"""
Template Rendering Tools
========================

Render saved templates to PDF or images, optionally injecting data.
"""

from typing import Any, Dict, List, Optional

from pdfgenstudio_mcp.config.logging import get_logger
from pdfgenstudio_mcp.core.api_client import PDFGenStudioClient, describe_query
from pdfgenstudio_mcp.core.errors import PDFGenStudioError
from pdfgenstudio_mcp.core.query_mapping import PASSTHROUGH
from pdfgenstudio_mcp.mcp_server.tools.base import (
    BINARY_RESPONSE,
    STRUCTURED_RESPONSE,
    BaseTool,
    ToolContent,
    build_query,
    image_result,
    json_result,
    with_warnings,
)
from pdfgenstudio_mcp.models.schemas import (
    RenderTemplateArguments,
    RenderTemplateImageArguments,
)

logger = get_logger(__name__)

EMPTY_TEMPLATE_DATA: Dict[str, Any] = {"elements": []}


def render_endpoint(template_id: str) -> str:
    return f"/api/v1/renderer/templates/{template_id}"


async def resolve_template_data(
    client: PDFGenStudioClient,
    template_id: str,
    data: Optional[Dict[str, Any]],
    api_key: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Data to inject when rendering a template.

    Explicit data wins. Otherwise the template's stored JSON structure is read
    back; if that read fails or has no structure, an empty element list is used
    so the render can still go ahead.
    """
    if data:
        return data

    try:
        response = await client.get_template(template_id, api_key=api_key)
    except PDFGenStudioError as e:
        logger.warning(
            "Template read failed, rendering with empty elements",
            template_id=template_id,
            error=str(e),
        )
        return dict(EMPTY_TEMPLATE_DATA)

    template = response.get("data") if response.get("success") else None
    stored = template.get("json") if isinstance(template, dict) else None
    if isinstance(stored, dict) and stored:
        return stored
    return dict(EMPTY_TEMPLATE_DATA)


class RenderTemplateTool(BaseTool):
    """Render a template through the structured (JSON envelope) endpoint."""

    name = "render_template"
    title = "Render Template"
    description = """Render a saved template to PDF or image with optional dynamic data injection.

Use this tool to:
- Generate PDFs from your saved templates
- Create images (PNG/JPG) from templates
- Inject dynamic data into template placeholders

The template ID can be obtained from the list_templates tool."""
    arguments_model = RenderTemplateArguments

    async def run(self, args: RenderTemplateArguments) -> List[ToolContent]:
        options = args.options.as_options() if args.options else {}
        query, warnings = build_query(
            args.format, STRUCTURED_RESPONSE, PASSTHROUGH.apply(options)
        )
        template_data = await resolve_template_data(
            self.client, args.template_id, args.data, args.api_key
        )

        self.logger.info(
            "Rendering template", template_id=args.template_id, query=describe_query(query)
        )
        result = await self.client.request(
            render_endpoint(args.template_id),
            method="POST",
            body={"data": template_data},
            query=query,
            api_key=args.api_key,
        )

        return json_result(
            with_warnings(
                {
                    "success": True,
                    "format": args.format,
                    "templateId": args.template_id,
                    "message": f"Template rendered successfully as {args.format.upper()}",
                    "data": result.get("data"),
                },
                warnings,
            )
        )


class RenderTemplateImageTool(BaseTool):
    """Render a template and hand the image back as MCP image content."""

    name = "render_template_image"
    title = "Render Template as Image"
    description = """Render a template to an image and return it as viewable image content.

This tool returns the actual image data that can be displayed directly.
Use this when you want to show the rendered template as an image in the chat."""
    arguments_model = RenderTemplateImageArguments

    async def run(self, args: RenderTemplateImageArguments) -> List[ToolContent]:
        query, _ = build_query(args.format, BINARY_RESPONSE)
        template_data = await resolve_template_data(
            self.client, args.template_id, args.data, args.api_key
        )

        image = await self.client.request_binary(
            render_endpoint(args.template_id),
            method="POST",
            body={"data": template_data},
            query=query,
            api_key=args.api_key,
        )
        return image_result(
            f"Template {args.template_id} rendered as {args.format.upper()}", image, args.format
        )


TOOLS = [RenderTemplateTool, RenderTemplateImageTool]
