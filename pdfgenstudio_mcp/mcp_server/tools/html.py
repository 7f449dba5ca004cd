"""
HTML Rendering Tools
====================

Convert HTML/CSS content to PDF or images.
"""

from typing import List

from pdfgenstudio_mcp.core.api_client import describe_query
from pdfgenstudio_mcp.core.query_mapping import PASSTHROUGH, PDF_OPTIONS
from pdfgenstudio_mcp.mcp_server.tools.base import (
    BINARY_RESPONSE,
    STRUCTURED_RESPONSE,
    BaseTool,
    ToolContent,
    build_query,
    image_result,
    json_result,
    payload_with_options,
    with_warnings,
)
from pdfgenstudio_mcp.models.schemas import RenderHtmlArguments, RenderHtmlImageArguments

RENDER_HTML_ENDPOINT = "/api/v1/renderer/html"


class RenderHtmlTool(BaseTool):
    name = "render_html"
    title = "Render HTML to PDF/Image"
    description = """Convert HTML/CSS content to PDF or image.

Use this tool to:
- Generate PDFs from HTML content
- Create images from HTML/CSS
- Convert web content to downloadable documents

Supports full HTML5, CSS3, and inline styles."""
    arguments_model = RenderHtmlArguments

    async def run(self, args: RenderHtmlArguments) -> List[ToolContent]:
        # Only the option group matching the output format is used.
        if args.format == "pdf":
            group = args.pdf_options
            mapping = PDF_OPTIONS
        else:
            group = args.image_options
            mapping = PASSTHROUGH
        options = group.as_options() if group else None

        query, warnings = build_query(args.format, STRUCTURED_RESPONSE, mapping.apply(options))

        self.logger.info("Rendering HTML", html_length=len(args.html), query=describe_query(query))
        result = await self.client.request(
            RENDER_HTML_ENDPOINT,
            method="POST",
            body=payload_with_options({"html": args.html}, options),
            query=query,
            api_key=args.api_key,
        )

        return json_result(
            with_warnings(
                {
                    "success": True,
                    "format": args.format,
                    "message": f"HTML rendered successfully as {args.format.upper()}",
                    "data": result.get("data"),
                },
                warnings,
            )
        )


class RenderHtmlImageTool(BaseTool):
    name = "render_html_image"
    title = "Render HTML as Image"
    description = """Render HTML content to an image and return it as viewable image content.

This tool returns the actual image data that can be displayed directly in chat."""
    arguments_model = RenderHtmlImageArguments

    async def run(self, args: RenderHtmlImageArguments) -> List[ToolContent]:
        query, _ = build_query(
            args.format,
            BINARY_RESPONSE,
            PASSTHROUGH.apply({"width": args.width or None, "height": args.height or None}),
        )
        image = await self.client.request_binary(
            RENDER_HTML_ENDPOINT,
            method="POST",
            body={"html": args.html},
            query=query,
            api_key=args.api_key,
        )
        return image_result(f"HTML rendered as {args.format.upper()}", image, args.format)


TOOLS = [RenderHtmlTool, RenderHtmlImageTool]
