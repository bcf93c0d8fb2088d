"""Test fixtures for robyn-mixedpart unit tests."""

import base64
from collections.abc import Callable
from dataclasses import dataclass, field
from unittest.mock import MagicMock

import pytest

BOUNDARY = "abc123"


# -----------------------------------------------------------------------------
# Mock classes for Robyn Request
# -----------------------------------------------------------------------------


@dataclass
class MockHeaders:
    """Mock Headers object for Robyn Request."""

    _data: dict = field(default_factory=dict)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key] = value


@dataclass
class MockRequest:
    """Mock Request object for Robyn."""

    body: bytes | str = b""
    headers: MockHeaders = field(default_factory=MockHeaders)
    method: str = "POST"
    path: str = "/"


# -----------------------------------------------------------------------------
# Multipart body builders
# -----------------------------------------------------------------------------


PartSpec = tuple[dict[str, str], bytes]


def build_multipart(
    parts: list[PartSpec],
    boundary: str = BOUNDARY,
    preamble: bytes = b"",
    epilogue: bytes = b"",
    close: bool = True,
) -> bytes:
    """Assemble a CRLF multipart body from (headers, body) pairs."""
    chunks = [preamble]
    for headers, body in parts:
        chunks.append(f"--{boundary}\r\n".encode())
        chunks.append("".join(f"{name}: {value}\r\n" for name, value in headers.items()).encode())
        chunks.append(b"\r\n")
        chunks.append(body + b"\r\n")
    if close:
        chunks.append(f"--{boundary}--\r\n".encode())
    chunks.append(epilogue)
    return b"".join(chunks)


def octet_part(filename: str, data: bytes) -> PartSpec:
    """A base64 application/octet-stream part carrying a filename."""
    headers = {
        "Content-Disposition": f'form-data; name="file"; filename="{filename}"',
        "Content-Type": "application/octet-stream",
    }
    return headers, base64.b64encode(data)


def text_part(name: str, value: bytes) -> PartSpec:
    """A plain text form field."""
    return {"Content-Disposition": f'form-data; name="{name}"', "Content-Type": "text/plain"}, value


@pytest.fixture
def make_multipart() -> Callable[..., bytes]:
    """Factory fixture to build multipart bodies."""
    return build_multipart


@pytest.fixture
def make_octet_part() -> Callable[[str, bytes], PartSpec]:
    return octet_part


@pytest.fixture
def make_text_part() -> Callable[[str, bytes], PartSpec]:
    return text_part


@pytest.fixture
def mixed_content_type() -> str:
    return f"multipart/mixed; boundary={BOUNDARY}"


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double injected into the decode pipeline."""
    return MagicMock()


@pytest.fixture
def make_mock_request() -> Callable[..., MockRequest]:
    """Factory fixture to create mock requests."""

    def _make(body: bytes | str = b"", content_type: str | None = None) -> MockRequest:
        headers = MockHeaders()
        if content_type is not None:
            headers["content-type"] = content_type
        return MockRequest(body=body, headers=headers)

    return _make
