"""Tests for hexstack.update module."""

import httpx
import pytest

from hexstack import __version__
from hexstack.config import HexstackConfig
from hexstack.update import (
    UpdateCheckError,
    UpdateInfo,
    check_for_update,
    fetch_latest_version,
)


def make_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestFetchLatestVersion:
    """Tests for fetch_latest_version()."""

    def test_reads_version(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"info": {"version": "1.2.3"}})

        config = HexstackConfig(registry_url="https://index.example/pypi/hexstack/json")
        assert fetch_latest_version(config, make_client(handler)) == "1.2.3"
        assert str(seen[0].url) == "https://index.example/pypi/hexstack/json"
        assert seen[0].headers["user-agent"] == f"hexstack/{__version__}"

    def test_http_error_status(self):
        client = make_client(lambda request: httpx.Response(503))
        with pytest.raises(UpdateCheckError, match="status 503"):
            fetch_latest_version(client=client)

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpdateCheckError, match="Failed to fetch"):
            fetch_latest_version(client=make_client(handler))

    def test_invalid_json(self):
        client = make_client(lambda request: httpx.Response(200, content=b"<html>"))
        with pytest.raises(UpdateCheckError, match="Failed to parse"):
            fetch_latest_version(client=client)

    def test_missing_version(self):
        client = make_client(lambda request: httpx.Response(200, json={"info": {}}))
        with pytest.raises(UpdateCheckError, match="Invalid package info"):
            fetch_latest_version(client=client)


class TestCheckForUpdate:
    """Tests for check_for_update()."""

    def test_update_available(self):
        client = make_client(lambda request: httpx.Response(200, json={"info": {"version": "99.0.0"}}))
        info = check_for_update(client=client)
        assert info.current == __version__
        assert info.latest == "99.0.0"
        assert info.available is True

    def test_up_to_date(self):
        client = make_client(lambda request: httpx.Response(200, json={"info": {"version": __version__}}))
        assert check_for_update(client=client).available is False


def test_update_info_available():
    assert UpdateInfo(current="0.3.0", latest="0.3.0").available is False
    assert UpdateInfo(current="0.3.0", latest="0.3.1").available is True
