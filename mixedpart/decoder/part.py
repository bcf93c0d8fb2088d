"""Interpretation of a single part's headers and payload."""

import base64
import binascii
from collections.abc import Mapping

from mixedpart.core.errors import InvalidPayloadError, MissingContentDispositionError
from mixedpart.models.core import (
    APPLICATION_OCTET_STREAM,
    ContentDisposition,
    DecodedArtifact,
    MediaType,
)

CONTENT_TYPE = "Content-Type"
CONTENT_DISPOSITION = "Content-Disposition"


def parse_part_media_type(headers: Mapping[str, str]) -> MediaType | None:
    """Declared media type of a part, None when missing or empty."""
    value = headers.get(CONTENT_TYPE)
    return MediaType.parse(value) if value else None


def decode_base64_payload(body: bytes) -> bytes:
    """Decode a base64 body, ignoring line wrapping and other whitespace."""
    try:
        return base64.b64decode(b"".join(body.split()), validate=True)
    except binascii.Error as ex:
        raise InvalidPayloadError(f"Invalid base64 payload: {ex}") from ex


def decode_part(headers: Mapping[str, str], body: bytes) -> DecodedArtifact | None:
    """Decode one part into an artifact.

    Only ``application/octet-stream`` parts carrying a non-empty filename
    produce an artifact; every other part yields None.

    Raises:
        MissingContentDispositionError: if the part has no Content-Disposition.
        InvalidMediaTypeError: if the Content-Type value cannot be parsed.
        InvalidPayloadError: if the body is not valid base64.
    """
    disposition_value = headers.get(CONTENT_DISPOSITION)
    if disposition_value is None:
        raise MissingContentDispositionError("Part has no Content-Disposition header")

    disposition = ContentDisposition.parse(disposition_value)
    media_type = parse_part_media_type(headers)

    filename = disposition.filename
    if media_type != APPLICATION_OCTET_STREAM or not filename:
        return None

    return DecodedArtifact(filename, decode_base64_payload(body))
