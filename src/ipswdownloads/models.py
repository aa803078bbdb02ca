"""
Domain model for ipswdownloads.

These records are what callers receive. They never reference the wire schema
types in ipswdownloads.schemas; ipswdownloads.mapping converts between them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List

from ipswdownloads.urls import validate_url


class FirmwareType(str, Enum):
    """Firmware category requested from the service."""

    IPSW = "ipsw"
    """Full retail firmware image"""

    OTA = "ota"
    """Incremental over-the-air update"""


@dataclass(frozen=True)
class Firmware:
    """A single firmware build published for a device."""

    identifier: str
    """Device model code (e.g. 'iPhone14,5')"""

    version: str
    """Dotted version string (e.g. '17.0')"""

    buildid: str
    """Opaque build label (e.g. '21A329')"""

    sha1sum: str
    """SHA-1 digest of the file as reported by the service"""

    md5sum: str
    """MD5 digest of the file as reported by the service"""

    filesize: int
    """File size in bytes"""

    url: str
    """Absolute download URL"""

    releasedate: datetime
    """When the build was released"""

    uploaddate: datetime
    """When the build was uploaded"""

    signed: bool
    """Whether signing servers currently validate this build"""

    def __post_init__(self) -> None:
        validate_url(self.url)


@dataclass
class Board:
    """Hardware identification for one board variant of a device."""

    boardconfig: str
    platform: str
    cpid: int
    bdid: int


@dataclass
class Device:
    """A device with its firmwares and boards, in service order."""

    name: str
    """Human-readable name (e.g. 'iPhone 13')"""

    identifier: str
    """Stable device model code"""

    firmwares: List[Firmware] = field(default_factory=list)
    boards: List[Board] = field(default_factory=list)
