"""
Conversion from wire schema records to the domain model.

Sequence conversion is fail-fast: the first invalid firmware URL aborts the
whole device and later elements are never looked at.
"""

from ipswdownloads.log_utils import logger
from ipswdownloads.models import Board, Device, Firmware
from ipswdownloads.schemas import BoardSchema, DeviceSchema, FirmwareSchema
from ipswdownloads.urls import validate_url


def to_firmware(schema: FirmwareSchema) -> Firmware:
    """
    Convert a firmware schema record, validating its download URL.

    Raises:
        InvalidURL: If `schema.url` is not a valid absolute URL.
    """
    return Firmware(
        identifier=schema.identifier,
        version=schema.version,
        buildid=schema.buildid,
        sha1sum=schema.sha1sum,
        md5sum=schema.md5sum,
        filesize=schema.filesize,
        url=validate_url(schema.url),
        releasedate=schema.releasedate,
        uploaddate=schema.uploaddate,
        signed=schema.signed,
    )


def to_board(schema: BoardSchema) -> Board:
    return Board(
        boardconfig=schema.boardconfig,
        platform=schema.platform,
        cpid=schema.cpid,
        bdid=schema.bdid,
    )


def to_device(schema: DeviceSchema) -> Device:
    """
    Convert a device schema record and all of its firmwares and boards.

    Input order is preserved.

    Raises:
        InvalidURL: For the first firmware whose URL is invalid.
    """
    device = Device(
        name=schema.name,
        identifier=schema.identifier,
        firmwares=[to_firmware(firmware) for firmware in schema.firmwares],
        boards=[to_board(board) for board in schema.boards],
    )
    logger.debug(
        f"Mapped device {device.identifier}: "
        f"{len(device.firmwares)} firmwares, {len(device.boards)} boards"
    )
    return device
