"""
URL Rendering Tools
===================

Capture webpages as PDF or images.
"""

from typing import Any, Dict, List

from pdfgenstudio_mcp.core.api_client import describe_query
from pdfgenstudio_mcp.core.query_mapping import PASSTHROUGH, PDF_OPTIONS, merge_query
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
from pdfgenstudio_mcp.models.schemas import RenderUrlArguments, RenderUrlImageArguments

RENDER_URL_ENDPOINT = "/api/v1/renderer/url"


def combined_options(args: RenderUrlArguments) -> Dict[str, Any]:
    """Format-specific, viewport and navigation options merged into one flat map."""
    if args.format == "pdf" and args.pdf_options:
        format_options = PDF_OPTIONS.apply(args.pdf_options.as_options())
    elif args.image_options:
        format_options = PASSTHROUGH.apply(args.image_options.as_options())
    else:
        format_options = {}

    viewport = args.viewport_options.as_options() if args.viewport_options else None
    navigation = args.navigation_options.as_options() if args.navigation_options else None
    return merge_query(format_options, PASSTHROUGH.apply(viewport), PASSTHROUGH.apply(navigation))


class RenderUrlTool(BaseTool):
    name = "render_url"
    title = "Render URL to PDF/Image"
    description = """Screenshot any website URL and convert to PDF or image.

Use this tool to:
- Capture webpage screenshots as images
- Convert webpages to PDF documents
- Archive web content as documents

Supports full JavaScript rendering and responsive layouts."""
    arguments_model = RenderUrlArguments

    async def run(self, args: RenderUrlArguments) -> List[ToolContent]:
        options = combined_options(args)
        query, warnings = build_query(args.format, STRUCTURED_RESPONSE, options)

        self.logger.info("Rendering URL", url=args.url, query=describe_query(query))
        result = await self.client.request(
            RENDER_URL_ENDPOINT,
            method="POST",
            body={"url": args.url, "options": options},
            query=query,
            api_key=args.api_key,
        )

        return json_result(
            with_warnings(
                {
                    "success": True,
                    "format": args.format,
                    "sourceUrl": args.url,
                    "message": f"URL captured successfully as {args.format.upper()}",
                    "data": result.get("data"),
                },
                warnings,
            )
        )


class RenderUrlImageTool(BaseTool):
    name = "render_url_image"
    title = "Screenshot URL as Image"
    description = """Screenshot a webpage and return it as viewable image content.

This tool captures a webpage screenshot and returns the actual image data
that can be displayed directly in chat."""
    arguments_model = RenderUrlImageArguments

    async def run(self, args: RenderUrlImageArguments) -> List[ToolContent]:
        query, _ = build_query(
            args.format,
            BINARY_RESPONSE,
            PASSTHROUGH.apply(
                {
                    "fullPage": args.full_page,
                    "width": args.width or None,
                    "height": args.height or None,
                }
            ),
        )
        image = await self.client.request_binary(
            RENDER_URL_ENDPOINT,
            method="POST",
            body={"url": args.url},
            query=query,
            api_key=args.api_key,
        )
        return image_result(
            f"Screenshot of {args.url} captured as {args.format.upper()}", image, args.format
        )


TOOLS = [RenderUrlTool, RenderUrlImageTool]
