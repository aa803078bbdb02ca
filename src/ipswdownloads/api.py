"""
Low-level API client for the firmware metadata service.

Client turns operation inputs into HTTPRequest objects, hands them to a
ClientTransport and decodes the responses into schema records. It knows
nothing about the domain model.
"""

import json
from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol, Union
from urllib.parse import quote

from ipswdownloads.constants import (
    DEVICE_PATH_TEMPLATE,
    ERROR_BODY_EXCERPT_LENGTH,
    FIRMWARES_FOR_DEVICE_OPERATION,
    HTTP_STATUS_OK,
)
from ipswdownloads.exceptions import ResponseDecodingError, UnexpectedResponseError
from ipswdownloads.log_utils import logger
from ipswdownloads.models import FirmwareType
from ipswdownloads.schemas import DeviceSchema
from ipswdownloads.transport import ClientTransport, HTTPRequest


@dataclass(frozen=True)
class FirmwaresForDeviceInput:
    identifier: str
    firmware_type: FirmwareType

    def to_request(self) -> HTTPRequest:
        return HTTPRequest(
            method="GET",
            path=DEVICE_PATH_TEMPLATE.format(
                identifier=quote(self.identifier, safe=",")
            ),
            query={"type": FirmwareType(self.firmware_type).value},
        )


@dataclass(frozen=True)
class FirmwaresForDeviceOutput:
    """Outcome of one firmwaresForDevice call."""

    status: int
    body: Optional[DeviceSchema] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    raw_body: bytes = b""

    @property
    def ok(self) -> DeviceSchema:
        """
        The decoded device for a 200 response.

        Raises:
            UnexpectedResponseError: For any other status.
        """
        if self.status != HTTP_STATUS_OK or self.body is None:
            excerpt = self.raw_body[:ERROR_BODY_EXCERPT_LENGTH].decode(
                "utf-8", errors="replace"
            )
            raise UnexpectedResponseError(
                self.status,
                endpoint=FIRMWARES_FOR_DEVICE_OPERATION,
                body_excerpt=excerpt,
            )
        return self.body


class APIProtocol(Protocol):
    async def firmwares_for_device(
        self, input: FirmwaresForDeviceInput
    ) -> FirmwaresForDeviceOutput: ...


def decode_json(body: Union[bytes, str]) -> object:
    """
    Parse a JSON response body.

    Raises:
        ResponseDecodingError: If the body is not valid UTF-8 JSON.
    """
    try:
        return json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ResponseDecodingError(
            f"Response body is not valid JSON: {e}",
            endpoint=FIRMWARES_FOR_DEVICE_OPERATION,
        ) from e


class Client:
    """APIProtocol implementation that talks to `server_url` through `transport`."""

    def __init__(self, server_url: str, transport: ClientTransport) -> None:
        self.server_url = server_url
        self.transport = transport

    async def firmwares_for_device(
        self, input: FirmwaresForDeviceInput
    ) -> FirmwaresForDeviceOutput:
        """
        GET /device/{identifier}?type={ipsw|ota}.

        The body is decoded only for 200 responses. Other statuses are returned
        as-is; use `.ok` to turn them into errors.

        Raises:
            ResponseDecodingError: If a 200 body is not a valid device object.
        """
        response = await self.transport.send(input.to_request(), self.server_url)

        if response.status != HTTP_STATUS_OK:
            logger.debug(
                f"{FIRMWARES_FOR_DEVICE_OPERATION} returned status {response.status} "
                f"for {input.identifier}"
            )
            return FirmwaresForDeviceOutput(
                status=response.status,
                headers=response.headers,
                raw_body=response.body,
            )

        try:
            body = DeviceSchema.from_dict(decode_json(response.body))
        except ResponseDecodingError as e:
            e.endpoint = FIRMWARES_FOR_DEVICE_OPERATION
            logger.error(f"Could not decode device {input.identifier}: {e}")
            raise

        return FirmwaresForDeviceOutput(
            status=response.status,
            body=body,
            headers=response.headers,
            raw_body=response.body,
        )
