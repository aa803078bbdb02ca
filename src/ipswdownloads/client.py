"""
Public client for the firmware metadata service.

IPSWDownloads wraps the low-level API client and returns domain records only;
no schema or transport types leak out of fetch_device().
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Union

from ipswdownloads.api import APIProtocol, Client, FirmwaresForDeviceInput
from ipswdownloads.config import ClientConfig, load_config
from ipswdownloads.log_utils import logger, set_log_level
from ipswdownloads.mapping import to_device
from ipswdownloads.models import Device, FirmwareType
from ipswdownloads.transport import AiohttpTransport, ClientTransport
from ipswdownloads.urls import default_server_url, validate_url


class IPSWDownloads:
    """
    Async client returning validated Device records.

    Instances hold no mutable state and can be shared between concurrent
    tasks. Every fetch_device() call performs exactly one request.

    Example:
        async with open_client() as client:
            device = await client.fetch_device("iPhone14,5", FirmwareType.OTA)
    """

    __slots__ = ("_underlying_client",)

    def __init__(
        self, transport: ClientTransport, server_url: Optional[str] = None
    ) -> None:
        """
        Parameters:
            transport (ClientTransport): Performs the HTTP exchange.
            server_url (Optional[str]): Service base URL; defaults to the production server.

        Raises:
            InvalidURL: If `server_url` (or the built-in default) is not a valid absolute URL.
        """
        if server_url is None:
            server_url = default_server_url()
        else:
            server_url = validate_url(server_url)
        self._underlying_client: APIProtocol = Client(
            server_url=server_url, transport=transport
        )

    @classmethod
    def from_client(cls, underlying_client: APIProtocol) -> "IPSWDownloads":
        """Build a facade around an existing APIProtocol implementation."""
        instance = cls.__new__(cls)
        instance._underlying_client = underlying_client
        return instance

    @property
    def underlying_client(self) -> APIProtocol:
        return self._underlying_client

    async def fetch_device(
        self, identifier: str, firmware_type: Union[FirmwareType, str]
    ) -> Device:
        """
        Fetch a device and its firmwares of the given kind.

        Parameters:
            identifier (str): Device model code, e.g. "iPhone14,5". Not validated locally.
            firmware_type (FirmwareType | str): FirmwareType.IPSW / "ipsw" or FirmwareType.OTA / "ota".

        Returns:
            Device: Fully validated device record.

        Raises:
            ValueError: If `firmware_type` is not a known firmware kind.
            UnexpectedResponseError: If the service returns a non-200 status.
            ResponseDecodingError: If the response body does not match the schema.
            TransportError: If the network exchange fails.
            InvalidURL: If any firmware URL is malformed.
        """
        request_input = FirmwaresForDeviceInput(
            identifier=identifier,
            firmware_type=FirmwareType(firmware_type),
        )
        output = await self._underlying_client.firmwares_for_device(request_input)
        return to_device(output.ok)


@asynccontextmanager
async def open_client(
    config: Optional[ClientConfig] = None,
) -> AsyncIterator[IPSWDownloads]:
    """
    Provide an IPSWDownloads bound to a fresh AiohttpTransport.

    Parameters:
        config (Optional[ClientConfig]): Settings to use; loaded with load_config() when omitted.

    Returns:
        IPSWDownloads: Client whose transport is closed when the context exits.
    """
    if config is None:
        config = load_config()
    if config.log_level:
        set_log_level(config.log_level)

    server_url = config.resolved_server_url()
    transport = AiohttpTransport(timeout=config.timeout)
    logger.debug(f"Opening client for {server_url}")
    try:
        yield IPSWDownloads(transport, server_url=server_url)
    finally:
        await transport.close()
