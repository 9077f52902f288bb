"""Tests for the beacon log HTTP client."""

from unittest import mock

import pytest
import requests

from woof_tracker.config import SourceConfig
from woof_tracker.source_client import FetchFailure, fetch_log

URL = "https://example.test/beacon_events.csv"


def _response(status_code=200, content=b""):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.content = content
    return response


def test_fetch_log_returns_decoded_text():
    session = mock.Mock()
    session.get.return_value = _response(content="timestamp\n2024-01-01T07:30:00\n".encode("utf-8"))

    text = fetch_log(SourceConfig(url=URL), session=session)

    assert text == "timestamp\n2024-01-01T07:30:00\n"


def test_fetch_log_strips_bom():
    session = mock.Mock()
    session.get.return_value = _response(content="\ufefftimestamp\n".encode("utf-8"))
    assert fetch_log(SourceConfig(url=URL), session=session) == "timestamp\n"


def test_fetch_log_cache_busting_param(frozen_clock):
    session = mock.Mock()
    session.get.return_value = _response()

    fetch_log(SourceConfig(url=URL, timeout_seconds=5), session=session)

    session.get.assert_called_once_with(URL, params={"t": "1704096000000"}, timeout=5)


def test_fetch_log_without_cache_busting():
    session = mock.Mock()
    session.get.return_value = _response()

    fetch_log(SourceConfig(url=URL, cache_bust=False), session=session)

    assert session.get.call_args.kwargs["params"] is None


def test_fetch_log_non_success_status():
    session = mock.Mock()
    session.get.return_value = _response(status_code=404)

    with pytest.raises(FetchFailure) as excinfo:
        fetch_log(SourceConfig(url=URL), session=session)

    assert excinfo.value.status_code == 404
    assert excinfo.value.url == URL
    assert "HTTP 404" in str(excinfo.value)


def test_fetch_log_transport_error():
    session = mock.Mock()
    session.get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(FetchFailure) as excinfo:
        fetch_log(SourceConfig(url=URL), session=session)

    assert excinfo.value.status_code is None
    assert "connection refused" in str(excinfo.value)


def test_fetch_log_uses_requests_by_default(monkeypatch):
    get = mock.Mock(return_value=_response(content=b"timestamp\n"))
    monkeypatch.setattr(requests, "get", get)

    assert fetch_log(SourceConfig(url=URL, cache_bust=False)) == "timestamp\n"
    get.assert_called_once()
