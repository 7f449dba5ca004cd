"""
JSON Document Rendering Tools
=============================

Render (or just validate) JSON design documents.
"""

from typing import List

from pdfgenstudio_mcp.core.api_client import describe_query
from pdfgenstudio_mcp.core.query_mapping import PASSTHROUGH
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
from pdfgenstudio_mcp.models.schemas import RenderJsonArguments, RenderJsonImageArguments

RENDER_JSON_ENDPOINT = "/api/v1/renderer/json"


class RenderJsonTool(BaseTool):
    name = "render_json"
    title = "Render JSON Document"
    description = """Convert a JSON design document to PDF or image.

Use this tool to:
- Render JSON design documents (following PDF Gen Studio schema)
- Generate PDFs from programmatically created designs
- Create images from JSON definitions

The JSON document should follow the PDF Gen Studio document schema with pages, elements, and styling."""
    arguments_model = RenderJsonArguments

    async def run(self, args: RenderJsonArguments) -> List[ToolContent]:
        options = args.options.as_options() if args.options else None
        flags = {"validate": "true"} if args.validate_only else {}
        query, warnings = build_query(
            args.format, STRUCTURED_RESPONSE, flags, PASSTHROUGH.apply(options)
        )

        self.logger.info(
            "Rendering JSON document",
            validate_only=args.validate_only,
            query=describe_query(query),
        )
        result = await self.client.request(
            RENDER_JSON_ENDPOINT,
            method="POST",
            body=payload_with_options({"document": args.document}, options),
            query=query,
            api_key=args.api_key,
        )

        # Validation and rendering answer with mutually exclusive fields.
        if args.validate_only:
            payload = {
                "success": True,
                "message": "Document validation completed",
                "validation": result.get("data"),
            }
        else:
            payload = {
                "success": True,
                "format": args.format,
                "message": f"JSON document rendered successfully as {args.format.upper()}",
                "data": result.get("data"),
            }
        return json_result(with_warnings(payload, warnings))


class RenderJsonImageTool(BaseTool):
    name = "render_json_image"
    title = "Render JSON as Image"
    description = """Render a JSON document to an image and return it as viewable image content.

This tool returns the actual image data that can be displayed directly."""
    arguments_model = RenderJsonImageArguments

    async def run(self, args: RenderJsonImageArguments) -> List[ToolContent]:
        query, _ = build_query(args.format, BINARY_RESPONSE)
        image = await self.client.request_binary(
            RENDER_JSON_ENDPOINT,
            method="POST",
            body={"document": args.document},
            query=query,
            api_key=args.api_key,
        )
        return image_result(f"JSON document rendered as {args.format.upper()}", image, args.format)


TOOLS = [RenderJsonTool, RenderJsonImageTool]
