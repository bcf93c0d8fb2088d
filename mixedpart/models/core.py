"""Core models for multipart/mixed decoding."""

import io
from collections.abc import Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import BinaryIO, NamedTuple, Protocol, runtime_checkable

from python_multipart.multipart import parse_options_header

from mixedpart.core.errors import InvalidMediaTypeError


class FailurePolicy(StrEnum):
    """What the decode pipeline does after a part fails to process."""

    ABORT = auto()
    CONTINUE = auto()

    @property
    def stops_on_failure(self) -> bool:
        return self is FailurePolicy.ABORT


# -----------------------------------------------------------------------------
# Header value parsing
# -----------------------------------------------------------------------------


def _decode_option(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def parse_header_options(header: str) -> tuple[str, dict[str, str]]:
    """Split ``value; key=val; ...`` into the value and its lower-cased options.

    Parsing is delegated to python-multipart. The header is handed over as UTF-8
    bytes so option values come back as the original octets, and RFC 2231
    ``key*=charset''...`` options are folded into ``key``.
    """
    value, options = parse_options_header(header.encode("utf-8"))
    return (
        _decode_option(value).strip(),
        {key.decode("latin-1").lower(): _decode_option(val) for key, val in options.items()},
    )


@dataclass(frozen=True, slots=True)
class MediaType:
    """A parsed ``type/subtype; name=value`` media type."""

    type: str
    subtype: str
    parameters: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, value: str) -> "MediaType":
        essence, params = parse_header_options(value)
        main, slash, sub = essence.partition("/")
        main, sub = main.strip(), sub.strip()
        if not slash or not main or not sub:
            raise InvalidMediaTypeError(f"Invalid media type: {value!r}")
        return cls(main.lower(), sub.lower(), params)

    @property
    def essence(self) -> str:
        return f"{self.type}/{self.subtype}"

    @property
    def charset(self) -> str | None:
        return self.parameters.get("charset")

    def matches(self, other: "MediaType") -> bool:
        """Compare type and subtype only, ignoring parameters."""
        return self.type == other.type and self.subtype == other.subtype

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MediaType):
            return NotImplemented
        return self.matches(other) and _fold_params(self.parameters) == _fold_params(other.parameters)

    def __hash__(self) -> int:
        return hash((self.type, self.subtype, frozenset(_fold_params(self.parameters).items())))

    def __str__(self) -> str:
        params = "".join(f"; {k}={v}" for k, v in self.parameters.items())
        return f"{self.essence}{params}"


def _fold_params(params: Mapping[str, str]) -> dict[str, str]:
    return {k.lower(): v.lower() if k.lower() == "charset" else v for k, v in params.items()}


MULTIPART_MIXED = MediaType("multipart", "mixed")
APPLICATION_OCTET_STREAM = MediaType("application", "octet-stream")


@dataclass(frozen=True, slots=True)
class ContentDisposition:
    """Parsed ``Content-Disposition`` header."""

    type: str
    parameters: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, value: str) -> "ContentDisposition":
        disposition, params = parse_header_options(value)
        return cls(disposition.lower(), params)

    @property
    def name(self) -> str | None:
        return self.parameters.get("name")

    @property
    def filename(self) -> str | None:
        return self.parameters.get("filename")


# -----------------------------------------------------------------------------
# Wire-level values
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Boundary:
    """Delimiter token separating parts of a multipart body."""

    value: bytes

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Boundary must not be empty")

    @property
    def delimiter(self) -> bytes:
        return b"--" + self.value


class RawPart(NamedTuple):
    """Header and body bytes of one part, identified by its position."""

    index: int
    headers: bytes
    body: bytes


class HeaderMap(MutableMapping[str, str]):
    """Single-valued header mapping with case-insensitive lookups.

    Setting a name that already exists replaces the value (last one wins)
    but keeps the spelling of the latest occurrence.
    """

    __slots__ = ("_data",)

    def __init__(self, items: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, tuple[str, str]] = {}
        if items:
            self.update(items)

    def __getitem__(self, name: str) -> str:
        return self._data[name.lower()][1]

    def __setitem__(self, name: str, value: str) -> None:
        self._data[name.lower()] = (name, value)

    def __delitem__(self, name: str) -> None:
        del self._data[name.lower()]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"HeaderMap({dict(self.items())})"


# -----------------------------------------------------------------------------
# Decode results
# -----------------------------------------------------------------------------


@runtime_checkable
class Resource(Protocol):
    """Named, re-readable byte source handed to downstream I/O code."""

    @property
    def filename(self) -> str: ...

    def content_length(self) -> int: ...

    def open(self) -> BinaryIO: ...


class DecodedArtifact:
    """Decoded payload of one part together with its filename."""

    __slots__ = ("_filename", "_data")

    def __init__(self, filename: str, data: bytes) -> None:
        self._filename = filename
        self._data = bytes(data)

    @property
    def filename(self) -> str:
        return self._filename

    def content_length(self) -> int:
        return len(self._data)

    def read(self) -> bytes:
        return self._data

    def open(self) -> BinaryIO:
        """Return a new stream positioned at the start of the payload."""
        return io.BytesIO(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecodedArtifact):
            return NotImplemented
        return self._filename == other._filename and self._data == other._data

    def __hash__(self) -> int:
        return hash((self._filename, self._data))

    def __repr__(self) -> str:
        return f"DecodedArtifact(filename={self._filename!r}, size={len(self._data)})"


class ResultCollection(Mapping[str, list[DecodedArtifact]]):
    """Container for artifacts decoded from a multipart/mixed body.

    A name maps to every artifact declared under it, in body order.
    """

    __slots__ = ("_artifacts",)

    def __init__(self) -> None:
        self._artifacts: dict[str, list[DecodedArtifact]] = {}

    def add(self, name: str, artifact: DecodedArtifact) -> None:
        self._artifacts.setdefault(name, []).append(artifact)

    def __getitem__(self, name: str) -> list[DecodedArtifact]:
        return list(self._artifacts[name])

    def __iter__(self) -> Iterator[str]:
        return iter(self._artifacts)

    def __len__(self) -> int:
        return len(self._artifacts)

    def __bool__(self) -> bool:
        return bool(self._artifacts)

    def first(self, name: str) -> DecodedArtifact | None:
        """Get the first artifact stored under a name."""
        artifacts = self._artifacts.get(name)
        return artifacts[0] if artifacts else None

    def artifacts(self) -> Iterator[DecodedArtifact]:
        """Iterate over all artifacts, repeated names included."""
        for artifacts in self._artifacts.values():
            yield from artifacts

    def __repr__(self) -> str:
        return f"ResultCollection({self._artifacts})"
