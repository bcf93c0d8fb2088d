"""Forward-scanning splitter turning a multipart body into raw parts."""

from collections.abc import Iterator
from enum import Enum, auto

from mixedpart.core.errors import TruncatedPartError
from mixedpart.models.core import Boundary, RawPart

_LWSP = b" \t"


class ScanState(Enum):
    """Position of the scanner within the multipart body."""

    PREAMBLE = auto()
    HEADERS = auto()
    BODY = auto()
    TERMINATED = auto()


def _skip_to_next_line(buffer: bytes, pos: int) -> int | None:
    """Skip transport padding after a delimiter.

    Returns the offset of the next line, the end of the buffer, or None when
    anything other than whitespace follows the delimiter on its line.
    """
    size = len(buffer)
    while pos < size and buffer[pos] in _LWSP:
        pos += 1
    if buffer.startswith(b"\r\n", pos):
        return pos + 2
    if buffer.startswith(b"\n", pos):
        return pos + 1
    return pos if pos == size else None


def find_delimiter(buffer: bytes, delimiter: bytes, start: int = 0) -> tuple[int, int, bool] | None:
    """Find the next delimiter line at or after ``start``.

    A delimiter only counts at the beginning of the buffer or of a line, and
    only when followed by ``--`` (close delimiter) or the end of its line.

    Returns:
        ``(index, next_offset, is_close)`` where ``index`` is where the
        delimiter starts and ``next_offset`` where scanning resumes, or None.
    """
    pos = start
    while (index := buffer.find(delimiter, pos)) != -1:
        pos = index + 1
        if index > 0 and buffer[index - 1 : index] != b"\n":
            continue

        after = index + len(delimiter)
        if buffer.startswith(b"--", after):
            return index, after + 2, True

        next_offset = _skip_to_next_line(buffer, after)
        if next_offset is not None:
            return index, next_offset, False
    return None


def find_blank_line(buffer: bytes, start: int) -> tuple[int, int] | None:
    """Find the end of a header block.

    Returns:
        ``(end, body_start)``: the header block is ``buffer[start:end]`` and the
        body begins at ``body_start``. None when no blank line follows.
    """
    if buffer.startswith(b"\r\n", start):
        return start, start + 2
    if buffer.startswith(b"\n", start):
        return start, start + 1

    candidates = [
        (index, index + len(marker))
        for marker in (b"\r\n\r\n", b"\n\n")
        if (index := buffer.find(marker, start)) != -1
    ]
    return min(candidates) if candidates else None


def _strip_line_break(body: bytes) -> bytes:
    if body.endswith(b"\r\n"):
        return body[:-2]
    if body.endswith(b"\n"):
        return body[:-1]
    return body


def split_parts(body: bytes, boundary: Boundary) -> Iterator[RawPart]:
    """Lazily yield the raw parts of a buffered multipart body.

    The preamble and epilogue are discarded. Scanning stops at the close
    delimiter.

    Raises:
        TruncatedPartError: if a part has no header terminator or the body
            ends before the part is closed by a delimiter.
    """
    delimiter = boundary.delimiter
    state = ScanState.PREAMBLE
    offset = 0
    index = 0
    header_block = b""

    while state is not ScanState.TERMINATED:
        match state:
            case ScanState.PREAMBLE:
                found = find_delimiter(body, delimiter)
                if found is None:
                    return
                _, offset, closed = found
                state = ScanState.TERMINATED if closed else ScanState.HEADERS

            case ScanState.HEADERS:
                found = find_blank_line(body, offset)
                if found is None:
                    raise TruncatedPartError(f"Part {index} has no end of headers")
                end, body_start = found
                header_block = body[offset:end]
                offset = body_start
                state = ScanState.BODY

            case ScanState.BODY:
                found = find_delimiter(body, delimiter, offset)
                if found is None:
                    raise TruncatedPartError(f"Part {index} is not closed by a boundary delimiter")
                start, next_offset, closed = found
                yield RawPart(index, header_block, _strip_line_break(body[offset:start]))
                index += 1
                offset = next_offset
                state = ScanState.TERMINATED if closed else ScanState.HEADERS
