"""
Tests for the domain model records.
"""

import dataclasses
from datetime import datetime, timezone

import pytest

from ipswdownloads.exceptions import InvalidURL
from ipswdownloads.models import Board, Device, Firmware, FirmwareType

pytestmark = pytest.mark.unit


def _firmware(**overrides):
    values = dict(
        identifier="iPhone14,5",
        version="17.0",
        buildid="21A329",
        sha1sum="aa" * 20,
        md5sum="bb" * 16,
        filesize=123456,
        url="https://example.com/f.ipsw",
        releasedate=datetime(2023, 9, 18, tzinfo=timezone.utc),
        uploaddate=datetime(2023, 9, 18, tzinfo=timezone.utc),
        signed=True,
    )
    values.update(overrides)
    return Firmware(**values)


class TestFirmwareType:
    def test_values_are_query_tags(self):
        assert FirmwareType.IPSW.value == "ipsw"
        assert FirmwareType.OTA.value == "ota"

    def test_lookup_by_tag(self):
        assert FirmwareType("ota") is FirmwareType.OTA

    def test_unknown_tag_rejected(self):
        with pytest.raises(ValueError):
            FirmwareType("beta")


class TestFirmware:
    def test_is_immutable(self):
        firmware = _firmware()

        with pytest.raises(dataclasses.FrozenInstanceError):
            firmware.version = "17.1"

    def test_invalid_url_rejected_on_construction(self):
        with pytest.raises(InvalidURL) as exc_info:
            _firmware(url="not a url")

        assert exc_info.value.raw == "not a url"

    def test_digests_not_validated(self):
        """Digest strings are stored as given."""
        firmware = _firmware(sha1sum="not-hex", md5sum="")

        assert firmware.sha1sum == "not-hex"
        assert firmware.md5sum == ""

    def test_equality_is_by_value(self):
        assert _firmware() == _firmware()
        assert _firmware() != _firmware(signed=False)


class TestBoardAndDevice:
    def test_board_is_mutable(self):
        board = Board(boardconfig="D27AP", platform="t8110", cpid=33056, bdid=6)
        board.bdid = 8

        assert board.bdid == 8

    def test_device_defaults_to_empty_sequences(self):
        device = Device(name="iPhone 13", identifier="iPhone14,5")

        assert device.firmwares == []
        assert device.boards == []

    def test_devices_do_not_share_default_lists(self):
        first = Device(name="a", identifier="a")
        second = Device(name="b", identifier="b")
        first.boards.append(Board("D27AP", "t8110", 33056, 6))

        assert second.boards == []
