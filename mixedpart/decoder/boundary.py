"""Boundary extraction from the declared content type."""

from mixedpart.core.errors import ConfigurationError, MissingBoundaryError
from mixedpart.models.core import Boundary


def unquote_boundary(token: str) -> str:
    """Strip one pair of surrounding double quotes, if both are present."""
    if len(token) > 1 and token[0] == token[-1] == '"':
        return token[1:-1]
    return token


def normalize_boundary(token: str | None, charset: str = "utf-8") -> Boundary:
    """Turn the ``boundary`` content-type parameter into the bytes to split on.

    Raises:
        MissingBoundaryError: if the parameter is absent or empty once unquoted.
        ConfigurationError: if the token cannot be encoded with ``charset``.
    """
    if token is None:
        raise MissingBoundaryError()

    unquoted = unquote_boundary(token)
    if not unquoted:
        raise MissingBoundaryError("missing boundary parameter: empty boundary token")

    try:
        return Boundary(unquoted.encode(charset))
    except UnicodeEncodeError as ex:
        raise ConfigurationError(f"boundary {unquoted!r} cannot be encoded as {charset}") from ex
