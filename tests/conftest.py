import copy
import json
from datetime import datetime, timezone

import platformdirs
import pytest

from ipswdownloads.constants import (
    LOG_LEVEL_ENV_VAR,
    SERVER_URL_ENV_VAR,
    TIMEOUT_ENV_VAR,
)

_ASYNC_NETWORK_BLOCK_MSG = (
    "Async network access is blocked during tests. Mock aiohttp.ClientSession."
)


async def _async_block_network(*_args, **_kwargs):
    """
    Prevent async network calls during tests by raising a RuntimeError.

    Raises:
        RuntimeError: `_ASYNC_NETWORK_BLOCK_MSG`.
    """
    raise RuntimeError(_ASYNC_NETWORK_BLOCK_MSG)


def pytest_configure(config):
    """
    Register the markers used by the test suite.
    """
    config.addinivalue_line("markers", "unit: fast unit tests")
    config.addinivalue_line("markers", "network: tests around the HTTP layer")
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test (auto-detected)"
    )


def pytest_runtest_setup():
    """
    Replace aiohttp request entry points with blocking callables.
    """
    import aiohttp

    aiohttp.request = _async_block_network
    aiohttp.ClientSession.request = _async_block_network  # type: ignore[assignment]
    aiohttp.ClientSession.get = _async_block_network  # type: ignore[assignment]


@pytest.fixture(autouse=True)
def _isolate_test_environment(tmp_path_factory, monkeypatch):
    """
    Point platformdirs at a temporary config directory and clear the
    ipswdownloads environment variables.
    """
    config_dir = tmp_path_factory.mktemp("ipswdownloads") / "config"
    config_dir.mkdir(parents=True, exist_ok=True)

    monkeypatch.setattr(
        platformdirs, "user_config_dir", lambda *_args, **_kwargs: str(config_dir)
    )
    for name in (LOG_LEVEL_ENV_VAR, SERVER_URL_ENV_VAR, TIMEOUT_ENV_VAR):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Payload Fixtures
# =============================================================================


SAMPLE_DEVICE_PAYLOAD = {
    "name": "iPhone 13",
    "identifier": "iPhone14,5",
    "firmwares": [
        {
            "identifier": "iPhone14,5",
            "version": "17.0",
            "buildid": "21A329",
            "sha1sum": "aa" * 20,
            "md5sum": "bb" * 16,
            "filesize": 123456,
            "url": "https://example.com/f.ipsw",
            "releasedate": "2023-09-18",
            "uploaddate": "2023-09-18",
            "signed": True,
        }
    ],
    "boards": [
        {"boardconfig": "D27AP", "platform": "t8110", "cpid": 33056, "bdid": 6}
    ],
}


@pytest.fixture
def device_payload():
    """A fresh copy of a decoded device response body."""
    return copy.deepcopy(SAMPLE_DEVICE_PAYLOAD)


@pytest.fixture
def multi_firmware_payload(device_payload):
    """Device payload with three firmwares and two boards, in service order."""
    base = device_payload["firmwares"][0]
    device_payload["firmwares"] = [
        dict(base, version="17.0", buildid="21A329", url="https://example.com/a.ipsw"),
        dict(
            base,
            version="16.6",
            buildid="20G75",
            url="https://example.com/b.ipsw",
            releasedate="2023-07-24T17:00:00Z",
            uploaddate="2023-07-24T17:05:12Z",
            signed=False,
        ),
        dict(base, version="17.1", buildid="21B74", url="https://example.com/c.ipsw"),
    ]
    device_payload["boards"].append(
        {"boardconfig": "D28AP", "platform": "t8110", "cpid": 33056, "bdid": 8}
    )
    return device_payload


@pytest.fixture
def expected_device():
    """The domain value corresponding to SAMPLE_DEVICE_PAYLOAD."""
    from ipswdownloads.models import Board, Device, Firmware

    return Device(
        name="iPhone 13",
        identifier="iPhone14,5",
        firmwares=[
            Firmware(
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
        ],
        boards=[Board(boardconfig="D27AP", platform="t8110", cpid=33056, bdid=6)],
    )


# =============================================================================
# Transport Fixtures
# =============================================================================


class StubTransport:
    """
    ClientTransport returning a fixed response and recording every request.
    """

    def __init__(self, status=200, payload=None, body=None, headers=None):
        self.status = status
        if body is None:
            body = json.dumps(payload if payload is not None else {}).encode("utf-8")
        self.body = body
        self.headers = headers or {"Content-Type": "application/json"}
        self.requests = []

    async def send(self, request, base_url):
        from ipswdownloads.transport import HTTPResponse

        self.requests.append((request, base_url))
        return HTTPResponse(status=self.status, headers=self.headers, body=self.body)


@pytest.fixture
def stub_transport():
    """
    Factory building StubTransport instances.

    Call with `status`, `payload` (JSON-serialisable), raw `body` bytes, or `headers`.
    """
    return StubTransport
