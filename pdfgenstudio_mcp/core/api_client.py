"""
PDF Gen Studio API Client
=========================

HTTP client translating logical API calls into requests against the PDF Gen
Studio REST API, and decoding the responses.

Two response modes exist:
- structured: the JSON envelope ``{success, data?, error?, message?}`` is returned as-is
- binary: the raw body (image or PDF) is buffered and returned base64 encoded

Every call issues exactly one request. There are no retries.
"""

import base64
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import aiohttp
from yarl import URL

from pdfgenstudio_mcp.config.logging import get_logger
from pdfgenstudio_mcp.config.settings import Settings, get_settings
from pdfgenstudio_mcp.core.errors import (
    MissingCredentialError,
    NetworkFailureError,
    RemoteHttpError,
)
from pdfgenstudio_mcp.core.query_mapping import QueryMap, format_query_value

logger = get_logger(__name__)

API_KEY_HEADER = "X-API-Key"
JSON_MIME_TYPE = "application/json"
ALLOWED_METHODS = {"GET", "POST", "PUT", "DELETE"}


@dataclass(frozen=True)
class RequestDescriptor:
    """A fully formed outbound request."""

    method: str
    url: URL
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None


def resolve_api_key(configured: str, override: Optional[str] = None) -> str:
    """Per-call key first, then the configured one."""
    key = override or configured
    if not key:
        raise MissingCredentialError()
    return key


def build_url(base_url: str, endpoint: str, query: Optional[QueryMap] = None) -> URL:
    """Resolve ``endpoint`` against ``base_url`` and append the defined query entries."""
    url = URL(base_url).join(URL(endpoint))
    if query:
        pairs = [(k, format_query_value(v)) for k, v in query.items() if v is not None]
        if pairs:
            url = url.with_query(pairs)
    return url


def build_request(
    settings: Settings,
    endpoint: str,
    *,
    method: str = "GET",
    body: Any = None,
    query: Optional[QueryMap] = None,
    api_key: Optional[str] = None,
    accept_json: bool = True,
) -> RequestDescriptor:
    """
    Build the request descriptor for one API call.

    Raises:
        MissingCredentialError: if no API key is available
    """
    method = method.upper()
    if method not in ALLOWED_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method}")

    key = resolve_api_key(settings.api_key, api_key)

    headers = {"Content-Type": JSON_MIME_TYPE}
    if accept_json:
        headers["Accept"] = JSON_MIME_TYPE
    headers[API_KEY_HEADER] = key

    payload = None
    if body is not None and method != "GET":
        payload = json.dumps(body)

    return RequestDescriptor(
        method=method,
        url=build_url(settings.base_url, endpoint, query),
        headers=headers,
        body=payload,
    )


def extract_error_message(text: str, status: int, reason: Optional[str]) -> str:
    """Pick the most useful message out of a failed structured response."""
    try:
        payload = json.loads(text)
    except ValueError:
        return text or f"HTTP {status}: {reason or ''}".rstrip()

    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message

        error = payload.get("error")
        if isinstance(error, str) and error:
            return error
        if isinstance(error, dict):
            nested = error.get("message")
            if isinstance(nested, str) and nested:
                return nested

    return text


class PDFGenStudioClient:
    """Client for the PDF Gen Studio REST API."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(component="api_client")  # structlog.BoundLoggerBase
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def request(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        body: Any = None,
        query: Optional[QueryMap] = None,
        api_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Perform a structured (JSON) API call.

        Returns:
            The parsed JSON envelope, unvalidated; empty when the body is not
            a JSON object

        Raises:
            MissingCredentialError, RemoteHttpError, NetworkFailureError
        """
        descriptor = build_request(
            self.settings, endpoint, method=method, body=body, query=query, api_key=api_key
        )
        status, reason, content = await self._send(descriptor)

        text = content.decode("utf-8", errors="replace")
        if not 200 <= status < 300:
            message = extract_error_message(text, status, reason)
            self.logger.warning(
                "API request failed", method=descriptor.method, endpoint=endpoint, status=status
            )
            raise RemoteHttpError(status, message)

        try:
            payload = json.loads(text)
        except ValueError as e:
            raise RemoteHttpError(status, f"Invalid JSON response from API: {e}") from e

        # Anything but an object carries no envelope fields; callers see an empty one.
        if not isinstance(payload, dict):
            self.logger.warning(
                "API response is not a JSON object",
                endpoint=endpoint,
                payload_type=type(payload).__name__,
            )
            return {}
        return payload

    async def request_binary(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        body: Any = None,
        query: Optional[QueryMap] = None,
        api_key: Optional[str] = None,
    ) -> str:
        """
        Perform a binary API call and return the payload base64 encoded.

        Raises:
            MissingCredentialError, RemoteHttpError, NetworkFailureError
        """
        descriptor = build_request(
            self.settings,
            endpoint,
            method=method,
            body=body,
            query=query,
            api_key=api_key,
            accept_json=False,
        )
        status, reason, content = await self._send(descriptor)

        if not 200 <= status < 300:
            error_text = content.decode("utf-8", errors="replace")
            self.logger.warning(
                "Binary API request failed",
                method=descriptor.method,
                endpoint=endpoint,
                status=status,
            )
            raise RemoteHttpError(status, f"API request failed: {error_text or reason or status}")

        self.logger.debug("Binary payload received", endpoint=endpoint, size=len(content))
        return base64.b64encode(content).decode("ascii")

    async def _send(self, descriptor: RequestDescriptor) -> "tuple[int, Optional[str], bytes]":
        session = await self._get_session()
        self.logger.debug("API request", method=descriptor.method, url=str(descriptor.url))
        try:
            async with session.request(
                descriptor.method,
                descriptor.url,
                headers=descriptor.headers,
                data=descriptor.body,
            ) as response:
                content = await response.read()
                return response.status, response.reason, content
        except aiohttp.ClientError as e:
            self.logger.error("API request error", url=str(descriptor.url), error=str(e))
            raise NetworkFailureError(f"Network request failed: {e}") from e

    async def list_templates(self, api_key: Optional[str] = None) -> Dict[str, Any]:
        return await self.request("/api/v1/templates", api_key=api_key)

    async def get_template(self, template_id: str, api_key: Optional[str] = None) -> Dict[str, Any]:
        return await self.request(f"/api/v1/templates/{template_id}", api_key=api_key)


def describe_query(query: Mapping[str, Any]) -> Dict[str, str]:
    """Query entries as they go on the wire; used for logging."""
    return {k: format_query_value(v) for k, v in query.items() if v is not None}
