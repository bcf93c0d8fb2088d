"""Decode pipeline turning a multipart/mixed body into named artifacts."""

import codecs
from typing import Any

from mixedpart.core.errors import MissingContentDispositionError, MultipartError
from mixedpart.core.logger import LogIcon
from mixedpart.core.logger import logger as default_logger
from mixedpart.core.settings import settings as st
from mixedpart.decoder.boundary import normalize_boundary
from mixedpart.decoder.headers import parse_headers
from mixedpart.decoder.part import decode_part
from mixedpart.decoder.splitter import split_parts
from mixedpart.models.core import Boundary, DecodedArtifact, FailurePolicy, MediaType, RawPart, ResultCollection


class DecodePipeline:
    """Runs boundary normalization, splitting, header parsing and part decoding.

    Malformed input never raises past ``decode`` except for a missing
    boundary: a failing part is logged and, depending on ``policy``, either
    ends the iteration (partial result) or is skipped.
    """

    def __init__(
        self,
        policy: FailurePolicy | None = None,
        logger: Any = None,
        strip_boundary_remnant: bool | None = None,
        default_charset: str | None = None,
    ) -> None:
        self.policy = policy or st.FAILURE_POLICY
        self.logger = logger or default_logger
        self.strip_boundary_remnant = (
            st.STRIP_BOUNDARY_REMNANT if strip_boundary_remnant is None else strip_boundary_remnant
        )
        self.default_charset = default_charset or st.DEFAULT_CHARSET

    def decode(
        self,
        media_type: MediaType | str | None,
        body: bytes | str,
        charset: str | None = None,
    ) -> ResultCollection:
        """Decode a buffered body declared with ``media_type``.

        Raises:
            MissingBoundaryError: if the media type has no boundary parameter.
            ConfigurationError: if the boundary cannot be encoded with the charset.
        """
        result = ResultCollection()
        if media_type is None:
            self.logger.info("No content type declared, nothing to decode", icon=LogIcon.SKIP)
            return result

        if isinstance(media_type, str):
            media_type = MediaType.parse(media_type)

        charset = self._resolve_charset(media_type.charset or charset)
        if isinstance(body, str):
            body = body.encode(charset)

        boundary = normalize_boundary(media_type.parameters.get("boundary"), charset)
        parts = split_parts(body, boundary)

        while True:
            try:
                raw = next(parts)
            except StopIteration:
                break
            except MultipartError as ex:
                self.logger.error("Multipart body is malformed", icon=LogIcon.ABORT, error=str(ex))
                break

            try:
                artifact = self._process(raw, boundary, charset)
            except MissingContentDispositionError:
                self.logger.error(
                    "Header doesn't contain Content-Disposition", icon=LogIcon.SKIP, part=raw.index
                )
                continue
            except Exception as ex:
                self.logger.error(
                    "Failed to process part",
                    icon=LogIcon.ERROR,
                    part=raw.index,
                    error=str(ex),
                    policy=self.policy.value,
                )
                if self.policy.stops_on_failure:
                    break
                continue

            if artifact is not None:
                result.add(artifact.filename, artifact)
                self.logger.debug(
                    "Decoded part",
                    icon=LogIcon.DECODER,
                    part=raw.index,
                    filename=artifact.filename,
                    size=artifact.content_length(),
                )

        self.logger.info("Multipart body decoded", icon=LogIcon.COMPLETE, artifacts=len(result))
        return result

    def _resolve_charset(self, declared: str | None) -> str:
        if not declared:
            return self.default_charset
        try:
            codecs.lookup(declared)
        except LookupError:
            self.logger.warning(
                "Unknown charset, using default", icon=LogIcon.WARNING, charset=declared, default=self.default_charset
            )
            return self.default_charset
        return declared

    def _process(self, raw: RawPart, boundary: Boundary, charset: str) -> DecodedArtifact | None:
        remnant = boundary.value.decode(charset) if self.strip_boundary_remnant else None
        headers = parse_headers(raw.headers.decode(charset), remnant, self.logger)
        return decode_part(headers, raw.body)


def decode_multipart_mixed(
    media_type: MediaType | str | None,
    body: bytes | str,
    charset: str | None = None,
) -> ResultCollection:
    """Decode with the configured failure policy and logger."""
    return DecodePipeline().decode(media_type, body, charset)
