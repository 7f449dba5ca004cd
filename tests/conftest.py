"""
Test Configuration
==================

Pytest fixtures shared by all test types: settings pointed at a local fake of
the PDF Gen Studio API, an API client and a fully wired MCP server.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio

from pdfgenstudio_mcp.config.logging import setup_logging
from pdfgenstudio_mcp.config.settings import Settings
from pdfgenstudio_mcp.core.api_client import PDFGenStudioClient
from pdfgenstudio_mcp.mcp_server.server import PDFGenStudioMCPServer
from tests.utils.mocks import SAMPLE_TEMPLATE, FakePDFGenStudioAPI

TEST_API_KEY = "test-api-key"


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> None:
    setup_logging(Settings(environment="testing", log_level="DEBUG", api_key=""))


@pytest_asyncio.fixture
async def fake_api() -> AsyncGenerator[FakePDFGenStudioAPI, None]:
    """Running fake API, preloaded with one template."""
    api = FakePDFGenStudioAPI()
    api.respond_json(
        "GET", "/api/v1/templates", {"success": True, "data": [SAMPLE_TEMPLATE]}
    )
    api.respond_json(
        "GET",
        f"/api/v1/templates/{SAMPLE_TEMPLATE['id']}",
        {"success": True, "data": SAMPLE_TEMPLATE},
    )
    await api.start()
    yield api
    await api.close()


@pytest.fixture
def test_settings(fake_api: FakePDFGenStudioAPI) -> Settings:
    return Settings(api_key=TEST_API_KEY, base_url=fake_api.url, environment="testing")


@pytest.fixture
def keyless_settings(fake_api: FakePDFGenStudioAPI) -> Settings:
    return Settings(api_key="", base_url=fake_api.url, environment="testing")


@pytest_asyncio.fixture
async def api_client(test_settings: Settings) -> AsyncGenerator[PDFGenStudioClient, None]:
    client = PDFGenStudioClient(test_settings)
    yield client
    await client.close()


@pytest_asyncio.fixture
async def mcp_server(test_settings: Settings) -> AsyncGenerator[PDFGenStudioMCPServer, None]:
    server = PDFGenStudioMCPServer(test_settings)
    yield server
    await server.close()


@pytest_asyncio.fixture
async def keyless_server(
    keyless_settings: Settings,
) -> AsyncGenerator[PDFGenStudioMCPServer, None]:
    server = PDFGenStudioMCPServer(keyless_settings)
    yield server
    await server.close()
