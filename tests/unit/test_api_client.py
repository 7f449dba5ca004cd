"""
Unit Tests for the API Client
=============================

Request construction is tested directly; response decoding is tested against
the local fake API.
"""

import base64
import json

import pytest

from pdfgenstudio_mcp.config.settings import Settings
from pdfgenstudio_mcp.core.api_client import (
    PDFGenStudioClient,
    build_request,
    build_url,
    extract_error_message,
)
from pdfgenstudio_mcp.core.errors import (
    MissingCredentialError,
    NetworkFailureError,
    RemoteHttpError,
)
from tests.utils.mocks import FakePDFGenStudioAPI


@pytest.fixture
def settings():
    return Settings(api_key="configured-key", base_url="https://api.example.com")


class TestBuildRequest:
    """Test request descriptor construction."""

    def test_headers_and_url(self, settings):
        request = build_request(settings, "/api/v1/templates")

        assert request.method == "GET"
        assert str(request.url) == "https://api.example.com/api/v1/templates"
        assert request.headers == {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "X-API-Key": "configured-key",
        }
        assert request.body is None

    def test_per_call_key_wins(self, settings):
        request = build_request(settings, "/api/v1/templates", api_key="call-key")
        assert request.headers["X-API-Key"] == "call-key"

    def test_missing_key_raises(self):
        with pytest.raises(MissingCredentialError, match="PDFGENSTUDIO_API_KEY"):
            build_request(Settings(api_key=""), "/api/v1/templates")

    def test_query_omits_none_and_formats_values(self, settings):
        request = build_request(
            settings,
            "/api/v1/renderer/html",
            method="POST",
            query={"format": "pdf", "landscape": True, "scale": 2.0, "quality": None},
        )
        assert request.url.query_string == "format=pdf&landscape=true&scale=2"

    def test_body_serialized_for_post(self, settings):
        request = build_request(settings, "/x", method="post", body={"html": "<p>hi</p>"})
        assert request.method == "POST"
        assert json.loads(request.body) == {"html": "<p>hi</p>"}

    def test_body_dropped_for_get(self, settings):
        request = build_request(settings, "/x", method="GET", body={"ignored": True})
        assert request.body is None

    def test_binary_mode_has_no_accept_header(self, settings):
        request = build_request(settings, "/x", accept_json=False)
        assert "Accept" not in request.headers

    def test_unsupported_method(self, settings):
        with pytest.raises(ValueError, match="PATCH"):
            build_request(settings, "/x", method="PATCH")


class TestBuildUrl:
    """Test endpoint resolution against the base URL."""

    def test_absolute_endpoint_replaces_base_path(self):
        url = build_url("https://api.example.com/v2/", "/api/v1/templates")
        assert str(url) == "https://api.example.com/api/v1/templates"

    def test_empty_query_adds_nothing(self):
        url = build_url("https://api.example.com", "/api/v1/templates", {"limit": None})
        assert str(url) == "https://api.example.com/api/v1/templates"


class TestExtractErrorMessage:
    """Test error message selection for structured calls."""

    def test_message_field(self):
        assert extract_error_message('{"message": "not found"}', 404, "Not Found") == "not found"

    def test_error_field(self):
        assert extract_error_message('{"error": "Invalid document"}', 422, None) == (
            "Invalid document"
        )

    def test_nested_error_message(self):
        text = '{"error": {"message": "quota exceeded"}}'
        assert extract_error_message(text, 429, None) == "quota exceeded"

    def test_raw_text(self):
        assert extract_error_message("boom", 404, "Not Found") == "boom"

    def test_json_without_known_fields_uses_raw_text(self):
        assert extract_error_message('{"code": 7}', 400, "Bad Request") == '{"code": 7}'

    def test_empty_body(self):
        assert extract_error_message("", 500, "Internal Server Error") == (
            "HTTP 500: Internal Server Error"
        )


class TestClientRequests:
    """Test request/response handling against the fake API."""

    @pytest.mark.asyncio
    async def test_structured_success(self, api_client, fake_api):
        result = await api_client.list_templates()

        assert result["success"] is True
        request = fake_api.last_request
        assert request.method == "GET"
        assert request.path == "/api/v1/templates"
        assert request.headers["X-API-Key"] == "test-api-key"
        assert request.headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_single_request_per_call(self, api_client, fake_api):
        fake_api.respond_empty("GET", "/api/v1/templates/broken", 500)

        with pytest.raises(RemoteHttpError):
            await api_client.get_template("broken")

        assert len(fake_api.requests) == 1

    @pytest.mark.asyncio
    async def test_post_body_and_query(self, api_client, fake_api):
        fake_api.respond_json("POST", "/api/v1/renderer/html", {"success": True, "data": "abc"})

        await api_client.request(
            "/api/v1/renderer/html",
            method="POST",
            body={"html": "<h1>Hi</h1>"},
            query={"format": "pdf", "response": "base64", "landscape": False},
        )

        request = fake_api.last_request
        assert request.query_string == "format=pdf&response=base64&landscape=false"
        assert request.json() == {"html": "<h1>Hi</h1>"}
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.parametrize("body", [[], ["x"], None, "text", 3])
    @pytest.mark.asyncio
    async def test_non_object_envelope_is_empty(self, api_client, fake_api, body):
        fake_api.respond_json("GET", "/api/v1/templates/odd", body)

        assert await api_client.get_template("odd") == {}

    @pytest.mark.asyncio
    async def test_error_message_field(self, api_client, fake_api):
        fake_api.respond_json("GET", "/api/v1/templates/missing", {"message": "not found"}, 404)

        with pytest.raises(RemoteHttpError) as exc_info:
            await api_client.get_template("missing")

        assert str(exc_info.value) == "not found"
        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    async def test_error_raw_text(self, api_client, fake_api):
        fake_api.respond_text("GET", "/api/v1/templates/missing", "boom", 404)

        with pytest.raises(RemoteHttpError, match="^boom$"):
            await api_client.get_template("missing")

    @pytest.mark.asyncio
    async def test_error_empty_body(self, api_client, fake_api):
        fake_api.respond_empty("GET", "/api/v1/templates/broken", 500)

        with pytest.raises(RemoteHttpError) as exc_info:
            await api_client.get_template("broken")

        assert str(exc_info.value) == "HTTP 500: Internal Server Error"

    @pytest.mark.asyncio
    async def test_missing_credential_sends_nothing(self, keyless_settings, fake_api):
        client = PDFGenStudioClient(keyless_settings)
        try:
            with pytest.raises(MissingCredentialError):
                await client.list_templates()
        finally:
            await client.close()

        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_per_call_key_override(self, keyless_settings, fake_api):
        client = PDFGenStudioClient(keyless_settings)
        try:
            await client.list_templates(api_key="call-key")
        finally:
            await client.close()

        assert fake_api.last_request.headers["X-API-Key"] == "call-key"

    @pytest.mark.asyncio
    async def test_network_failure(self):
        api = await FakePDFGenStudioAPI().start()
        unreachable = api.url
        await api.close()

        client = PDFGenStudioClient(Settings(api_key="k", base_url=unreachable))
        try:
            with pytest.raises(NetworkFailureError, match="Network request failed"):
                await client.list_templates()
        finally:
            await client.close()


class TestClientBinaryRequests:
    """Test binary mode."""

    @pytest.mark.asyncio
    async def test_payload_is_base64_encoded(self, api_client, fake_api):
        png = b"\x89PNG\r\n\x1a\nfake-image"
        fake_api.respond_bytes("POST", "/api/v1/renderer/json", png)

        encoded = await api_client.request_binary(
            "/api/v1/renderer/json", method="POST", body={"document": {}}
        )

        assert base64.b64decode(encoded) == png
        assert fake_api.last_request.headers.get("Accept") != "application/json"

    @pytest.mark.asyncio
    async def test_error_uses_status_text(self, api_client, fake_api):
        fake_api.respond_empty("POST", "/api/v1/renderer/json", 500)

        with pytest.raises(RemoteHttpError) as exc_info:
            await api_client.request_binary("/api/v1/renderer/json", method="POST", body={})

        assert str(exc_info.value) == "API request failed: Internal Server Error"

    @pytest.mark.asyncio
    async def test_error_uses_body_text(self, api_client, fake_api):
        fake_api.respond_text("POST", "/api/v1/renderer/json", "render crashed", 502)

        with pytest.raises(RemoteHttpError, match="API request failed: render crashed"):
            await api_client.request_binary("/api/v1/renderer/json", method="POST", body={})
