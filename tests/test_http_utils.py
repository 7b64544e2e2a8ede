from socket import error as SocketError
from unittest.mock import patch

import responses
from pytest import raises

from fedora_dists.http_utils import HttpConfig


def test_get_requests_session_retries():
    config = HttpConfig.from_str("")
    session = config.get_requests_session(backoff_factor=0)

    # Doing an actual test of successful completion would require
    # mocking out the internals of urllib3 in a complicated way -
    # so we just test that we retry on SocketError until we
    # hit the maximum.
    with raises(Exception, match="Max retries exceeded with url"):
        with patch("urllib3.connectionpool.HTTPConnectionPool._make_request",
                   side_effect=SocketError):
            session.get('http://www.example.com/')


def test_get_requests_session_default_timeout():
    config = HttpConfig.from_str("connect_timeout: 5\nread_timeout: 7")
    session = config.get_requests_session(backoff_factor=0)

    adapter = session.get_adapter("https://pdc.example.com/")
    assert adapter.default_timeout == (5, 7)

    with patch("requests.adapters.HTTPAdapter.send") as send:
        adapter.send("REQUEST")
        send.assert_called_once_with("REQUEST", timeout=(5, 7))

        send.reset_mock()
        adapter.send("REQUEST", timeout=1)
        send.assert_called_once_with("REQUEST", timeout=1)


@responses.activate
def test_get_requests_session():
    responses.add(responses.GET, "https://pdc.example.com/", json={"results": []})

    session = HttpConfig.from_str("").get_requests_session(backoff_factor=0)
    response = session.get("https://pdc.example.com/")
    assert response.json() == {"results": []}
