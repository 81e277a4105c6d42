"""Shared fixtures for the Veria client tests."""

from __future__ import annotations

import json
import socket
import threading
from contextlib import suppress
from unittest.mock import MagicMock

import pytest
import requests

from veria import VeriaClient


def make_response(status_code: int, body: object = None, raw: bytes | None = None) -> requests.Response:
    """Build a real ``requests.Response`` carrying ``body`` as JSON (or ``raw`` bytes)."""
    response = requests.Response()
    response.status_code = status_code
    if raw is not None:
        response._content = raw
    elif body is None:
        response._content = b""
    else:
        response._content = json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    response.url = "https://api.veria.cc/v1/screen"
    # nothing to stream, so closing the response does not touch ``raw``
    response._content_consumed = True
    return response


@pytest.fixture
def sample_result() -> dict:
    return {
        "score": 15,
        "risk": "low",
        "chain": "ethereum",
        "resolved": "0x742d...",
        "latency_ms": 45,
        "details": {
            "sanctions_hit": False,
            "pep_hit": False,
            "watchlist_hit": False,
            "checked_lists": ["OFAC SDN"],
            "address_type": "wallet",
        },
    }


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session: MagicMock) -> VeriaClient:
    return VeriaClient(api_key="veria_test_key", session=session)


def _read_request(conn: socket.socket) -> None:
    """Consume one HTTP request (headers and Content-Length body) from ``conn``."""
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = conn.recv(4096)
        if not chunk:
            return
        data += chunk
    head, _, body = data.partition(b"\r\n\r\n")
    length = 0
    for line in head.split(b"\r\n")[1:]:
        name, _, value = line.partition(b":")
        if name.strip().lower() == b"content-length":
            length = int(value.strip())
    while len(body) < length:
        chunk = conn.recv(4096)
        if not chunk:
            return
        body += chunk


@pytest.fixture
def scripted_server(monkeypatch):
    """Start a one-shot local HTTP server whose reply is written by ``handler(conn)``.

    Returns a factory taking the handler and returning the server's base URL.
    """
    for var in ("HTTP_PROXY", "http_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")

    listeners = []

    def start(handler) -> str:
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        listeners.append(listener)

        def serve() -> None:
            # the client may hang up mid-reply
            with suppress(OSError):
                conn, _ = listener.accept()
                with conn:
                    _read_request(conn)
                    handler(conn)

        threading.Thread(target=serve, daemon=True).start()
        host, port = listener.getsockname()
        return f"http://{host}:{port}"

    yield start
    for listener in listeners:
        listener.close()
