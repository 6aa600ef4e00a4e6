"""
Header block parsing for a single part.

Only two headers are understood: ``Content-Disposition: form-data;`` (for the
``name`` and ``filename`` parameters) and ``Content-Type:``.  Anything else is
skipped over one byte at a time.
"""

from __future__ import annotations

import logging

from .exceptions import MissingFieldError, StructuralError
from .scanner import CR, CRLF, EQUALS, LF, QUOTE, decode_text, find_line_end, is_line_start, starts_with_prefix

# Get logger for this module.
logger = logging.getLogger(__name__)

CONTENT_DISPOSITION_PREFIX = b"Content-Disposition: form-data;"
CONTENT_TYPE_PREFIX = b"Content-Type:"

NAME_PARAM = b"name"
FILENAME_PARAM = b"filename"

DEFAULT_CONTENT_TYPE = "text/plain"


def _structural_error(msg: str, offset: int) -> StructuralError:
    logger.warning(msg)
    e = StructuralError(msg)
    e.offset = offset
    return e


def extract_param(data: bytes, offset: int, key: bytes) -> tuple[str, int] | None:
    """
    Tries to read a ``key="value"`` parameter starting exactly at ``offset``.

    Returns a ``(value, next_offset)`` tuple, where ``next_offset`` is the
    index just past the closing quote, or None if the parameter doesn't start
    here.  There is no escape handling: the value ends at the next quote.
    """
    value_start = offset + len(key) + 2
    if not starts_with_prefix(data, key, offset):
        return None
    if value_start > len(data) or data[value_start - 2] != EQUALS or data[value_start - 1] != QUOTE:
        return None

    value_end = data.find(b'"', value_start)
    if value_end == -1:
        raise _structural_error(
            "Did not find closing quote for parameter %r starting at %d" % (key, offset), offset
        )

    return decode_text(data[value_start:value_end]), value_end + 1


def read_content_disposition(data: bytes, offset: int) -> tuple[str | None, str | None, int]:
    """
    Parses the ``name`` and ``filename`` parameters of the Content-Disposition
    line that starts at ``offset``.  The parameters may come in either order.

    Returns ``(name, filename, next_offset)`` where ``next_offset`` is the
    start of the following line.
    """
    name = None
    filename = None
    length = len(data)

    # Skip the prefix and the space that follows it.
    i = offset + len(CONTENT_DISPOSITION_PREFIX) + 1
    while i < length:
        if not name:
            extracted = extract_param(data, i, NAME_PARAM)
            if extracted is not None:
                name, i = extracted
                i += 1
                continue

        if not filename:
            extracted = extract_param(data, i, FILENAME_PARAM)
            if extracted is not None:
                filename, i = extracted
                i += 1
                continue

        if data[i - 1] == CR and data[i] == LF:
            return name, filename, i + 1

        i += 1

    raise _structural_error("Content-Disposition header starting at %d is not terminated" % offset, offset)


def read_content_type(data: bytes, offset: int) -> tuple[str, int]:
    """
    Reads the value of the Content-Type line that starts at ``offset``.  The
    value begins one byte after the colon.  Returns ``(value, next_offset)``.
    """
    value_start = offset + len(CONTENT_TYPE_PREFIX)
    line_end = find_line_end(data, value_start)
    if line_end == len(data):
        raise _structural_error("Content-Type header starting at %d is not terminated" % offset, offset)

    return decode_text(data[value_start + 1 : line_end]), line_end + 2


def read_part_headers(data: bytes, offset: int) -> tuple[str, str | None, str, int]:
    """
    Scans the header block of the part starting at ``offset``.

    Recognised headers are checked at every position, and always before the
    blank line that terminates the block.  Content-Disposition is checked
    before Content-Type.  Returns ``(name, filename, content_type,
    body_offset)`` where ``body_offset`` is the first byte after the blank
    line.
    """
    name = None
    filename = None
    content_type = None
    length = len(data)

    i = offset
    while True:
        if i >= length:
            raise _structural_error("Header block starting at %d is not terminated" % offset, i)

        if not name and starts_with_prefix(data, CONTENT_DISPOSITION_PREFIX, i):
            name, filename, i = read_content_disposition(data, i)
            continue

        if not content_type and starts_with_prefix(data, CONTENT_TYPE_PREFIX, i):
            content_type, i = read_content_type(data, i)
            continue

        if starts_with_prefix(data, CRLF, i) and is_line_start(data, i, offset):
            break

        i += 1

    if not name:
        msg = "Part header block ending at %d has no name parameter" % i
        logger.warning(msg)
        e = MissingFieldError(msg)
        e.offset = i
        raise e

    if content_type is None:
        content_type = DEFAULT_CONTENT_TYPE

    logger.debug("Read headers for field %r (content type %r) ending at %d", name, content_type, i)
    return name, filename, content_type, i + 2
