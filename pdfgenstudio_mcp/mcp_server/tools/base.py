"""
Tool Base Classes
=================

Shared plumbing for MCP tools: argument validation, MCP tool definitions and
the query/result helpers every rendering tool uses.
"""

import json
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple, Type, Union

from mcp.types import ImageContent, TextContent, Tool, ToolAnnotations
from pydantic import BaseModel

from pdfgenstudio_mcp.config.logging import get_logger
from pdfgenstudio_mcp.core.api_client import PDFGenStudioClient
from pdfgenstudio_mcp.core.query_mapping import merge_query
from pdfgenstudio_mcp.models.schemas import mime_type_for

logger = get_logger(__name__)

ToolContent = Union[TextContent, ImageContent]

# Structured tools ask the API for a JSON envelope with base64 data; image
# tools ask for the raw bytes and encode them locally.
STRUCTURED_RESPONSE = "base64"
BINARY_RESPONSE = "binary"


class BaseTool:
    """Base class for MCP tools."""

    name: ClassVar[str]
    title: ClassVar[str]
    description: ClassVar[str]
    arguments_model: ClassVar[Type[BaseModel]]

    def __init__(self, client: PDFGenStudioClient) -> None:
        self.client = client
        self.logger: Any = logger.bind(tool=self.name)  # structlog.BoundLoggerBase

    def definition(self) -> Tool:
        """MCP tool definition, with the input schema generated from the argument model."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.arguments_model.model_json_schema(by_alias=True),
            annotations=ToolAnnotations(title=self.title, readOnlyHint=True, openWorldHint=True),
        )

    async def execute(self, arguments: Optional[Dict[str, Any]]) -> List[ToolContent]:
        """
        Validate arguments and run the tool.

        Raises:
            pydantic.ValidationError: if the arguments do not match the schema
            PDFGenStudioError: if the API call fails
        """
        args = self.arguments_model.model_validate(arguments or {})
        return await self.run(args)

    async def run(self, args: Any) -> List[ToolContent]:
        raise NotImplementedError


def build_query(
    output_format: str, response: str, *groups: Mapping[str, Any]
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Combine the output format, response type and option groups into one query map.

    Returns:
        The query map and a list of warnings about option keys that replaced the
        output format.
    """
    query = merge_query({"format": output_format, "response": response}, *groups)
    warnings: List[str] = []
    if query["format"] != output_format:
        warnings.append(
            f"Page format '{query['format']}' was sent as the 'format' query parameter, "
            f"replacing output format '{output_format}'"
        )
        logger.warning("Query parameter collision", key="format", detail=warnings[-1])
    return query, warnings


def json_result(payload: Dict[str, Any]) -> List[ToolContent]:
    return [TextContent(type="text", text=json.dumps(payload, indent=2))]


def image_result(caption: str, base64_data: str, image_format: str) -> List[ToolContent]:
    return [
        TextContent(type="text", text=caption),
        ImageContent(type="image", data=base64_data, mimeType=mime_type_for(image_format)),
    ]


def with_warnings(payload: Dict[str, Any], warnings: Sequence[str]) -> Dict[str, Any]:
    if warnings:
        payload["warnings"] = list(warnings)
    return payload


def payload_with_options(
    payload: Dict[str, Any], options: Optional[Dict[str, Any]]
) -> Dict[str, Any]:
    """Request body with ``options`` attached only when given."""
    if options is not None:
        payload["options"] = options
    return payload
