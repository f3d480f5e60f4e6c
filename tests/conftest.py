"""Pytest configuration and shared fixtures for safelog tests."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from safelog.config.models import ENV_CONFIG_PATH, ENV_REDACT_PATHS


class ErrorLike:
    """Error-like object in the style of verror: ``stack`` plus a ``cause()`` method."""

    def __init__(self, stack: str, message: str = "", cause: Any = None) -> None:
        self._stack = stack
        self._message = message
        self._cause = cause

    @property
    def stack(self) -> str:
        return self._stack

    @property
    def message(self) -> str:
        return self._message

    @property
    def name(self) -> str:
        return "ErrorLike"

    def cause(self) -> Any:
        return self._cause


class FakeSocket:
    """Peer information of an inbound connection."""

    def __init__(self, remote_address: str = "10.0.0.7", remote_port: int = 52311) -> None:
        self.remote_address = remote_address
        self.remote_port = remote_port


class FakeServerResponse:
    """Server response exposing headers through an accessor and a ``locals`` side-channel."""

    def __init__(self, status_code: int, headers: dict[str, str], body: Any = None) -> None:
        self.status_code = status_code
        self._headers = headers
        self.locals: dict[str, Any] = {}
        if body is not None:
            self.locals["body"] = body

    def get_headers(self) -> dict[str, str]:
        return dict(self._headers)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep user config and environment out of every test."""
    monkeypatch.delenv(ENV_REDACT_PATHS, raising=False)
    monkeypatch.setenv(ENV_CONFIG_PATH, str(tmp_path / "safelog" / "config.yaml"))


@pytest.fixture
def login_payload() -> dict[str, Any]:
    """Payload with secrets at several depths."""
    return {
        "username": "ada",
        "password": "hunter2",
        "profile": {"password": "nested", "user": {"token": "abc", "id": 7}},
        "sessions": [{"password": "in-list", "device": "phone"}, {"device": "laptop"}],
    }


@pytest.fixture
def httpx_request() -> httpx.Request:
    """Outbound request with a JSON body."""
    return httpx.Request(
        "POST",
        "https://api.example.com/v1/login",
        params={"lang": "en"},
        headers={"Authorization": "Bearer secret"},
        json={"username": "ada", "password": "hunter2"},
    )


@pytest.fixture
def httpx_response(httpx_request: httpx.Request) -> httpx.Response:
    """Outbound response carrying a token in its JSON body."""
    return httpx.Response(
        200,
        json={"user": {"token": "t-123", "id": 1}, "ok": True},
        request=httpx_request,
    )


@pytest.fixture
def server_request() -> dict[str, Any]:
    """Inbound request shaped like a parsed server request."""
    return {
        "method": "POST",
        "url": "/login?next=/home",
        "headers": {"content-type": "application/json"},
        "params": {"tenant": "acme"},
        "body": {"username": "ada", "password": "hunter2"},
        "socket": FakeSocket(),
    }


@pytest.fixture
def server_response() -> FakeServerResponse:
    return FakeServerResponse(
        201,
        {"content-type": "application/json"},
        body={"id": 3, "user": {"token": "t-456"}},
    )


@pytest.fixture
def server_response_factory() -> type[FakeServerResponse]:
    return FakeServerResponse


@pytest.fixture
def error_like() -> type[ErrorLike]:
    return ErrorLike
