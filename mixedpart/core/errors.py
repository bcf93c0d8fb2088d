"""Exceptions raised while decoding multipart/mixed bodies."""


class MultipartError(ValueError):
    """Base exception for multipart decoding issues."""


class ConfigurationError(MultipartError):
    """The declared content type cannot be used to decode the body."""


class MissingBoundaryError(ConfigurationError):
    """Content type declares no usable boundary parameter."""

    def __init__(self, message: str = "missing boundary parameter") -> None:
        super().__init__(message)


class MissingContentDispositionError(MultipartError):
    """A part has no Content-Disposition header and is skipped."""


class PartProcessingError(MultipartError):
    """A single part could not be parsed or decoded."""


class InvalidMediaTypeError(PartProcessingError):
    """A Content-Type value is not a valid media type."""


class InvalidPayloadError(PartProcessingError):
    """A part body is not valid base64."""


class TruncatedPartError(PartProcessingError):
    """The body ends inside a part, before its closing delimiter."""


class UnsupportedOperationError(MultipartError):
    """Encoding multipart/mixed output is not supported."""
