"""
Wire schema records for the firmwares-for-device operation.

These mirror the JSON returned by the service field for field. Decoding only
checks shape and primitive types; semantic validation (URLs) happens in
ipswdownloads.mapping.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Type, TypeVar

from ipswdownloads.exceptions import ResponseDecodingError

T = TypeVar("T")


def _require(data: Mapping[str, Any], key: str, expected: Type[T], path: str) -> T:
    """
    Fetch `key` from `data` and check its type.

    Booleans are rejected where an int is expected.

    Raises:
        ResponseDecodingError: If the key is missing or has the wrong type.
    """
    field_path = f"{path}.{key}"
    if key not in data:
        raise ResponseDecodingError(f"Missing field '{field_path}'", field=field_path)
    value = data[key]
    if expected is int and isinstance(value, bool):
        wrong_type = True
    else:
        wrong_type = not isinstance(value, expected)
    if wrong_type:
        raise ResponseDecodingError(
            f"Field '{field_path}' has type {type(value).__name__}, "
            f"expected {expected.__name__}",
            field=field_path,
        )
    return value


def _require_list(data: Mapping[str, Any], key: str, path: str) -> List[Any]:
    return _require(data, key, list, path)


def _require_mapping(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise ResponseDecodingError(
            f"Expected object at '{path}', got {type(value).__name__}",
            field=path,
        )
    return value


def parse_timestamp(value: str, field_path: str = "timestamp") -> datetime:
    """
    Parse an ISO 8601 date or date-time string.

    A trailing 'Z' is accepted as UTC. Values without an offset, including
    plain dates, are taken as UTC so every timestamp is timezone-aware.

    Raises:
        ResponseDecodingError: If the string is not ISO 8601.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ResponseDecodingError(
            f"Field '{field_path}' is not an ISO 8601 timestamp: {value!r}",
            field=field_path,
        ) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class FirmwareSchema:
    identifier: str
    version: str
    buildid: str
    sha1sum: str
    md5sum: str
    filesize: int
    url: str
    releasedate: datetime
    uploaddate: datetime
    signed: bool

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], path: str = "firmware"
    ) -> "FirmwareSchema":
        data = _require_mapping(data, path)
        return cls(
            identifier=_require(data, "identifier", str, path),
            version=_require(data, "version", str, path),
            buildid=_require(data, "buildid", str, path),
            sha1sum=_require(data, "sha1sum", str, path),
            md5sum=_require(data, "md5sum", str, path),
            filesize=_require(data, "filesize", int, path),
            url=_require(data, "url", str, path),
            releasedate=parse_timestamp(
                _require(data, "releasedate", str, path), f"{path}.releasedate"
            ),
            uploaddate=parse_timestamp(
                _require(data, "uploaddate", str, path), f"{path}.uploaddate"
            ),
            signed=_require(data, "signed", bool, path),
        )


@dataclass
class BoardSchema:
    boardconfig: str
    platform: str
    cpid: int
    bdid: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str = "board") -> "BoardSchema":
        data = _require_mapping(data, path)
        return cls(
            boardconfig=_require(data, "boardconfig", str, path),
            platform=_require(data, "platform", str, path),
            cpid=_require(data, "cpid", int, path),
            bdid=_require(data, "bdid", int, path),
        )


@dataclass
class DeviceSchema:
    name: str
    identifier: str
    firmwares: List[FirmwareSchema] = field(default_factory=list)
    boards: List[BoardSchema] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str = "device") -> "DeviceSchema":
        """
        Decode a device object as returned by the service.

        Raises:
            ResponseDecodingError: Naming the first field that does not match
                the expected shape.
        """
        data = _require_mapping(data, path)
        return cls(
            name=_require(data, "name", str, path),
            identifier=_require(data, "identifier", str, path),
            firmwares=[
                FirmwareSchema.from_dict(item, f"{path}.firmwares[{index}]")
                for index, item in enumerate(_require_list(data, "firmwares", path))
            ],
            boards=[
                BoardSchema.from_dict(item, f"{path}.boards[{index}]")
                for index, item in enumerate(_require_list(data, "boards", path))
            ],
        )
