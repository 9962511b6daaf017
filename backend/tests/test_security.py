import pytest
from fastapi import HTTPException
from starlette.requests import Request

from app.security import LOCALHOST_ONLY_MESSAGE, is_loopback_address, require_localhost


def _request(client):
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/internal/invoices",
        "root_path": "",
        "scheme": "http",
        "query_string": b"",
        "headers": [],
        "server": ("testserver", 80),
        "client": client,
    }
    return Request(scope)


@pytest.mark.parametrize("host", ["127.0.0.1", "::1", "127.0.0.53", "127.255.255.254", "::ffff:127.0.0.1", "[::1]"])
def test_loopback_addresses_are_recognised(host):
    assert is_loopback_address(host) is True


@pytest.mark.parametrize(
    "host",
    [None, "", "testclient", "localhost", "10.0.0.5", "192.168.1.20", "203.0.113.25", "::", "0.0.0.0",
     "fe80::1", "2001:db8::1", "::ffff:10.0.0.1", "128.0.0.1"],
)
def test_other_addresses_are_not_loopback(host):
    assert is_loopback_address(host) is False


@pytest.mark.parametrize("host", ["127.0.0.1", "::1"])
def test_require_localhost_allows_loopback(host):
    assert require_localhost(_request((host, 51234))) is None


@pytest.mark.parametrize("host", ["10.1.2.3", "2001:db8::7", "testclient"])
def test_require_localhost_forbids_remote(host):
    with pytest.raises(HTTPException) as exc_info:
        require_localhost(_request((host, 51234)))

    assert exc_info.value.status_code == 403
    assert exc_info.value.detail == LOCALHOST_ONLY_MESSAGE


def test_require_localhost_fails_closed_without_client():
    with pytest.raises(HTTPException) as exc_info:
        require_localhost(_request(None))

    assert exc_info.value.status_code == 403
