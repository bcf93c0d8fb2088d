"""Parsing of a part's raw header block."""

from typing import Any

from mixedpart.core.logger import LogIcon
from mixedpart.core.logger import logger as default_logger
from mixedpart.models.core import HeaderMap


def strip_boundary_remnant(block: str, token: str, logger: Any = None) -> str:
    """Drop everything up to and including the first occurrence of ``token``.

    Some scanners hand over header blocks that still start with the tail of
    the delimiter line. When the token is not there the block is returned
    unchanged and the malformed boundary line is logged.
    """
    index = block.find(token)
    if index == -1:
        (logger or default_logger).error(
            "Boundary not found in header block", icon=LogIcon.DETECTION, headers=block
        )
        return block
    return block[index + len(token) :].strip()


def parse_headers(block: str, boundary: str | None = None, logger: Any = None) -> HeaderMap:
    """Parse ``Name: value`` lines into a HeaderMap.

    Lines without a colon are ignored, which also drops folded continuation
    lines. A repeated header keeps its last value.
    """
    if boundary is not None:
        block = strip_boundary_remnant(block, boundary, logger)

    headers = HeaderMap()
    for line in block.splitlines():
        name, colon, value = line.partition(":")
        if not colon:
            continue
        headers[name.strip()] = value.strip()
    return headers
