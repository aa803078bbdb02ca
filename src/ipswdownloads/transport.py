"""
HTTP transport for ipswdownloads.

The API client only depends on the ClientTransport protocol: anything that can
perform one request/response exchange. AiohttpTransport is the implementation
used by default, with lazy session creation and explicit cleanup.

Example:
    async with AiohttpTransport() as transport:
        client = IPSWDownloads(transport)
        device = await client.fetch_device("iPhone14,5", FirmwareType.IPSW)
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol

import aiohttp
from aiohttp import ClientSession, ClientTimeout, TCPConnector

from ipswdownloads.constants import (
    DEFAULT_CONNECTOR_LIMIT,
    DEFAULT_REQUEST_TIMEOUT,
    HTTP_STATUS_RETRY_THRESHOLD,
)
from ipswdownloads.exceptions import TransportError
from ipswdownloads.log_utils import logger
from ipswdownloads.utils import get_user_agent


@dataclass(frozen=True)
class HTTPRequest:
    """An outbound request, relative to the server URL."""

    method: str
    path: str
    query: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class HTTPResponse:
    """A fully received response."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""


class ClientTransport(Protocol):
    async def send(self, request: HTTPRequest, base_url: str) -> HTTPResponse:
        """Perform one exchange against `base_url` and return the response."""
        ...


def join_url(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + "/" + path.lstrip("/")


class AiohttpTransport:
    """
    ClientTransport backed by aiohttp.

    Makes exactly one attempt per send(). Network failures surface as
    TransportError; HTTP error statuses are returned as normal responses for
    the caller to interpret.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        user_agent: Optional[str] = None,
        connector_limit: int = DEFAULT_CONNECTOR_LIMIT,
    ) -> None:
        """
        Initialize the transport.

        Parameters:
            timeout (float): Total request timeout in seconds.
            user_agent (Optional[str]): User-Agent header; defaults to `ipswdownloads/<version>`.
            connector_limit (int): Maximum total connections in the pool.
        """
        self.timeout = ClientTimeout(total=timeout)
        self.user_agent = user_agent or get_user_agent()
        self.connector_limit = max(1, int(connector_limit))
        self._session: Optional[ClientSession] = None
        self._closed: bool = False

    async def __aenter__(self) -> "AiohttpTransport":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _ensure_session(self) -> ClientSession:
        """
        Ensure a session exists, creating one if needed.

        Returns:
            ClientSession: The active aiohttp session.

        Raises:
            TransportError: If the transport has been closed.
        """
        if self._closed:
            raise TransportError("Transport is closed", is_retryable=False)
        if self._session is None or self._session.closed:
            connector = TCPConnector(
                limit=self.connector_limit,
                enable_cleanup_closed=True,
            )
            self._session = ClientSession(
                connector=connector,
                timeout=self.timeout,
                headers=self._get_default_headers(),
            )
        return self._session

    def _get_default_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    async def close(self) -> None:
        """Close the client session. The transport cannot be used afterwards."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._closed = True

    async def send(self, request: HTTPRequest, base_url: str) -> HTTPResponse:
        """
        Send `request` and read the whole response body.

        Returns:
            HTTPResponse: Status, headers and raw body bytes.

        Raises:
            TransportError: On connection failures and timeouts, or after close().
        """
        session = await self._ensure_session()
        url = join_url(base_url, request.path)
        logger.debug(f"{request.method} {url} params={dict(request.query)}")

        try:
            async with session.request(
                request.method,
                url,
                params=dict(request.query),
                headers=dict(request.headers) or None,
            ) as response:
                body = await response.read()
                status = response.status
                headers = dict(response.headers)
        except aiohttp.ClientResponseError as e:
            logger.error(f"HTTP error from {url}: {e.status}")
            raise TransportError(
                f"HTTP error {e.status}: {e.message}",
                url=url,
                is_retryable=e.status >= HTTP_STATUS_RETRY_THRESHOLD,
            ) from e
        except aiohttp.ClientError as e:
            logger.error(f"Network error requesting {url}: {e}")
            raise TransportError(
                f"Network error: {e}",
                url=url,
                is_retryable=True,
            ) from e
        except asyncio.TimeoutError as e:
            logger.error(f"Request to {url} timed out")
            raise TransportError(
                "Request timed out",
                url=url,
                is_retryable=True,
            ) from e

        logger.debug(f"{request.method} {url} -> {status} ({len(body)} bytes)")
        return HTTPResponse(status=status, headers=headers, body=body)
