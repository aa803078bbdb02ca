"""
ipswdownloads - typed async client for the ipsw.me firmware metadata API.
"""

from .client import IPSWDownloads, open_client
from .config import ClientConfig, load_config
from .exceptions import (
    APIError,
    ConfigFileError,
    ConfigurationError,
    InvalidURL,
    IPSWDownloadsError,
    ResponseDecodingError,
    TransportError,
    UnexpectedResponseError,
)
from .models import Board, Device, Firmware, FirmwareType
from .transport import AiohttpTransport, ClientTransport, HTTPRequest, HTTPResponse
from .urls import default_server_url, validate_url

__all__ = [
    # Client
    "IPSWDownloads",
    "open_client",
    # Domain model
    "Device",
    "Firmware",
    "Board",
    "FirmwareType",
    # Transport
    "ClientTransport",
    "AiohttpTransport",
    "HTTPRequest",
    "HTTPResponse",
    # Configuration
    "ClientConfig",
    "load_config",
    # URL validation
    "validate_url",
    "default_server_url",
    # Errors
    "IPSWDownloadsError",
    "InvalidURL",
    "APIError",
    "UnexpectedResponseError",
    "ResponseDecodingError",
    "TransportError",
    "ConfigurationError",
    "ConfigFileError",
]
