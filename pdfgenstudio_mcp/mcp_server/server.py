"""
MCP Server Implementation
========================

Model Context Protocol server exposing the PDF Gen Studio API as tools,
resources and prompts, over stdio or streamable HTTP.
"""

import contextlib
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import (
    GetPromptResult,
    LoggingLevel,
    Prompt,
    Resource,
    ResourceTemplate,
    Tool,
)

from pdfgenstudio_mcp.config.logging import get_logger
from pdfgenstudio_mcp.config.settings import Settings, get_settings
from pdfgenstudio_mcp.core.api_client import PDFGenStudioClient
from pdfgenstudio_mcp.mcp_server.prompts import get_prompts
from pdfgenstudio_mcp.mcp_server.resources import ResourceRegistry
from pdfgenstudio_mcp.mcp_server.tools import create_tools
from pdfgenstudio_mcp.mcp_server.tools.base import ToolContent

logger = get_logger(__name__)

SERVER_INSTRUCTIONS = """PDF Gen Studio MCP Server - Generate PDFs and images from templates, JSON, HTML, or URLs.

Available capabilities:
1. **Template Rendering**: Render saved templates with dynamic data injection
2. **JSON Rendering**: Convert JSON design documents to PDF/images
3. **HTML Rendering**: Convert HTML/CSS content to PDF/images
4. **URL Rendering**: Screenshot any website URL as PDF/images
5. **Template Management**: List and retrieve your saved templates

Authentication:
- Provide your API key via the PDFGENSTUDIO_API_KEY environment variable
- Or pass it directly in tool parameters

Output Formats:
- PDF: Generate PDF documents
- PNG: Generate PNG images
- JPG: Generate JPG images

Response Types:
- base64: Get the output as a base64 encoded string
- binary: Get raw binary data (for file operations)

For more information, visit https://docs.pdfgenstudio.com"""


def redact_arguments(arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Tool arguments safe to log: no API key, no large payloads."""
    redacted: Dict[str, Any] = {}
    for key, value in (arguments or {}).items():
        if key == "apiKey":
            redacted[key] = "***"
        elif isinstance(value, str) and len(value) > 200:
            redacted[key] = f"<{len(value)} chars>"
        elif isinstance(value, dict) and key in {"document", "data"}:
            redacted[key] = f"<object with {len(value)} keys>"
        else:
            redacted[key] = value
    return redacted


class PDFGenStudioMCPServer:
    """MCP Server for the PDF Gen Studio API."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[PDFGenStudioClient] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(component="mcp_server")  # structlog.BoundLoggerBase
        self.client = client or PDFGenStudioClient(self.settings)
        self.tools = create_tools(self.client)
        self.resources = ResourceRegistry(self.client)
        self.prompts = get_prompts()
        self.server: Server = Server(
            self.settings.app_name,
            version=self.settings.app_version,
            instructions=SERVER_INSTRUCTIONS,
        )
        self._setup_tools()
        self._setup_resources()
        self._setup_prompts()
        self._setup_handlers()

    def _setup_tools(self) -> None:
        """Setup MCP tools."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[Tool]:
            return await self.get_tools()

        @self.server.call_tool()
        async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[ToolContent]:
            # Errors propagate so the MCP layer reports them as isError results.
            return await self.call_tool(name, arguments)

    def _setup_resources(self) -> None:
        """Setup MCP resources."""

        @self.server.list_resources()
        async def handle_list_resources() -> List[Resource]:
            return self.resources.list_resources()

        @self.server.list_resource_templates()
        async def handle_list_resource_templates() -> List[ResourceTemplate]:
            return self.resources.list_resource_templates()

        @self.server.read_resource()
        async def handle_read_resource(uri: Any) -> Iterable[ReadResourceContents]:
            content = await self.resources.read(str(uri))
            return [ReadResourceContents(content=content.text, mime_type=content.mime_type)]

    def _setup_prompts(self) -> None:
        """Setup MCP prompts."""

        @self.server.list_prompts()
        async def handle_list_prompts() -> List[Prompt]:
            return [prompt.definition() for prompt in self.prompts.values()]

        @self.server.get_prompt()
        async def handle_get_prompt(
            name: str, arguments: Optional[Dict[str, str]]
        ) -> GetPromptResult:
            return self.get_prompt(name, arguments)

    def _setup_handlers(self) -> None:
        """Setup additional MCP handlers."""

        @self.server.set_logging_level()
        async def handle_set_logging_level(level: LoggingLevel) -> None:
            self.logger.info("Logging level changed", level=level)

    # Public API, also used directly by tests
    async def get_tools(self) -> List[Tool]:
        """Get list of available MCP tools."""
        return [tool.definition() for tool in self.tools.values()]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[ToolContent]:
        """
        Run a tool by name.

        Raises:
            ValueError: for an unknown tool name
            pydantic.ValidationError: for invalid arguments
            PDFGenStudioError: when the API call fails
        """
        tool = self.tools.get(name)
        if tool is None:
            raise ValueError(f"Unknown tool: {name}")

        self.logger.info("Tool called", tool=name, arguments=redact_arguments(arguments))
        try:
            return await tool.execute(arguments)
        except Exception as e:
            self.logger.error("Tool execution error", tool=name, error=str(e))
            raise

    async def read_resource(self, uri: str) -> str:
        """Read a resource and return its text."""
        content = await self.resources.read(uri)
        return content.text

    def get_prompt(self, name: str, arguments: Optional[Dict[str, str]] = None) -> GetPromptResult:
        prompt = self.prompts.get(name)
        if prompt is None:
            raise ValueError(f"Unknown prompt: {name}")
        return prompt.get(arguments)

    async def close(self) -> None:
        """Release the HTTP session held by the API client."""
        await self.client.close()

    async def run(self) -> None:
        """Run the MCP server with the configured transport until it is stopped."""
        if self.settings.uses_http_transport:
            await self.run_http(self.settings.host, self.settings.port)
        else:
            await self.run_stdio()

    async def run_stdio(self) -> None:
        from mcp.server.stdio import stdio_server

        async with stdio_server() as (read_stream, write_stream):
            self.logger.info("MCP server starting with stdio transport")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )

    async def run_http(self, host: str, port: int) -> None:
        import uvicorn

        app = self.create_http_app()
        self.logger.info("MCP server starting with streamable HTTP transport", host=host, port=port)
        config = uvicorn.Config(app, host=host, port=port, log_config=None)
        await uvicorn.Server(config).serve()

    def create_http_app(self) -> Any:
        """FastAPI application serving MCP at ``/mcp`` plus a ``/health`` route."""
        from fastapi import FastAPI
        from mcp.server.streamable_http_manager import StreamableHTTPSessionManager

        session_manager = StreamableHTTPSessionManager(app=self.server, event_store=None)

        @contextlib.asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncIterator[None]:
            async with session_manager.run():
                self.logger.info("StreamableHTTP session manager ready")
                yield

        app = FastAPI(title="PDF Gen Studio MCP Server", lifespan=lifespan)

        async def health_check() -> Dict[str, Any]:
            return {
                "status": "healthy",
                "server": self.settings.app_name,
                "version": self.settings.app_version,
                "configured": self.settings.has_api_key,
            }

        app.add_api_route("/health", health_check, methods=["GET"])
        app.add_route(
            "/mcp",
            StreamableHTTPEndpoint(session_manager),
            methods=["GET", "POST", "DELETE"],
        )
        return app


class StreamableHTTPEndpoint:
    """ASGI endpoint handing requests to the MCP session manager."""

    def __init__(self, session_manager: Any) -> None:
        self.session_manager = session_manager

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        await self.session_manager.handle_request(scope, receive, send)
