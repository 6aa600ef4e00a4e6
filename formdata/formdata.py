from __future__ import annotations

import logging
from enum import IntEnum
from typing import TYPE_CHECKING

from .boundary import read_boundary
from .exceptions import ContentDecodeError, FormDataError, StructuralError
from .headers import read_part_headers
from .processors import build_registry, process_content
from .result import add_entry
from .scanner import bytes_equal, find_line_end, starts_with_prefix

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Mapping
    from typing import Protocol, Union

    from .processors import Processor
    from .result import ParseResult

    class SupportsRead(Protocol):
        def read(self, __n: int = ...) -> bytes: ...

    BytesLike = Union[bytes, bytearray, memoryview]


# Get logger for this module.
logger = logging.getLogger(__name__)

# The two bytes that follow the delimiter on the final boundary line.
CLOSE_DELIMITER_SUFFIX = b"--"


class FormDataState(IntEnum):
    """States of the parse driver."""

    PREAMBLE = 0
    PART_HEADERS = 1
    PART_BODY = 2
    DONE = 3


class FormDataParser:
    """
    A one-shot parser for complete multipart/form-data payloads.

    The parser only holds its configuration - the delimiter and the processor
    registry - so a single instance can be used for any number of payloads.
    Each call to :meth:`parse` keeps its own cursor and result.

    :param boundary: The boundary token, without the leading ``--``.

    :param processors: A mapping from content type to a function that takes
                       the raw bytes of a part body and returns the value to
                       store.  These are applied over the built-in
                       ``text/plain``, ``application/json`` and ``default``
                       processors.
    """

    def __init__(self, boundary: str | bytes, processors: Mapping[str, Processor] | None = None) -> None:
        self.logger = logging.getLogger(__name__)

        if isinstance(boundary, str):
            boundary = boundary.encode("utf-8")
        if not boundary:
            raise ValueError("boundary must not be empty")
        self.boundary = b"--" + boundary

        self.processors = build_registry(processors)

    def _error(self, msg: str, offset: int) -> StructuralError:
        self.logger.warning(msg)
        e = StructuralError(msg)
        e.offset = offset
        return e

    def _skip_preamble(self, data: bytes) -> int:
        """
        Skips every line before the first one that starts with the delimiter.
        Returns the offset of that delimiter line.
        """
        length = len(data)
        i = 0
        while i < length:
            line_end = find_line_end(data, i)
            if starts_with_prefix(data, self.boundary, i, line_end):
                if i > 0:
                    self.logger.debug("Skipped %d bytes of preamble", i)
                return i
            i = line_end + 2

        raise self._error("Did not find boundary %r in the payload" % self.boundary, length)

    def _is_close_delimiter(self, data: bytes, offset: int) -> bool:
        end = offset + len(self.boundary)
        return bytes_equal(data[end : end + 2], CLOSE_DELIMITER_SUFFIX)

    def _next_line(self, data: bytes, offset: int) -> int:
        """Returns the start of the line after the delimiter line at ``offset``."""
        line_end = find_line_end(data, offset)
        if line_end == len(data):
            raise self._error("Boundary line at %d is not terminated" % offset, offset)
        return line_end + 2

    def _find_body(self, data: bytes, offset: int) -> tuple[int, int]:
        """
        Finds the end of the body that starts at ``offset``.  The body runs up
        to the CRLF before the next line that starts with the delimiter, and
        may itself contain any bytes, CR and LF included.

        Returns ``(body_end, delimiter_offset)``.
        """
        length = len(data)
        i = offset
        while True:
            line_end = find_line_end(data, i)
            if line_end == length:
                raise self._error("Did not find a boundary after the body starting at %d" % offset, length)

            i = line_end + 2
            if starts_with_prefix(data, self.boundary, i):
                return line_end, i

    def parse(self, data: BytesLike) -> ParseResult:
        """
        Parses a complete payload and returns a dictionary mapping each field
        name to an :class:`~formdata.result.Entry`, or to a list of them when
        the name occurs more than once.  Fields appear in the order they were
        first seen.

        Any error aborts the whole parse; a partial result is never returned.
        """
        if isinstance(data, memoryview):
            data = data.tobytes()

        result: ParseResult = {}
        state = FormDataState.PREAMBLE

        i = 0
        name = filename = None
        content_type = ""

        while state != FormDataState.DONE:
            if state == FormDataState.PREAMBLE:
                i = self._skip_preamble(data)
                if self._is_close_delimiter(data, i):
                    self.logger.debug("Payload holds no parts")
                    state = FormDataState.DONE
                    continue

                i = self._next_line(data, i)
                state = FormDataState.PART_HEADERS

            elif state == FormDataState.PART_HEADERS:
                name, filename, content_type, i = read_part_headers(data, i)
                state = FormDataState.PART_BODY

            elif state == FormDataState.PART_BODY:
                body_end, delimiter = self._find_body(data, i)
                self.logger.debug("Found body of field %r at data[%d:%d]", name, i, body_end)

                try:
                    entry = process_content(self.processors, content_type, bytes(data[i:body_end]), filename)
                except ContentDecodeError as e:
                    e.offset = i
                    raise
                add_entry(result, name, entry)

                if self._is_close_delimiter(data, delimiter):
                    remaining = len(data) - delimiter - len(self.boundary) - 2
                    if remaining > 0:
                        self.logger.debug("Ignoring %d bytes after the last boundary", remaining)
                    state = FormDataState.DONE
                else:
                    i = self._next_line(data, delimiter)
                    state = FormDataState.PART_HEADERS

            else:  # pragma: no cover (error case)
                raise FormDataError("Reached an unknown state %d at %d" % (state, i))

        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(boundary={self.boundary!r})"


def parse_form_data(
    data: BytesLike, boundary: str | bytes, processors: Mapping[str, Processor] | None = None
) -> ParseResult:
    """
    Parses a multipart/form-data payload.

    .. code-block:: python

        result = parse_form_data(body, "----WebKitFormBoundary")
        result["username"].data         # "john_doe"
        result["avatar"].filename       # "image.jpg"

    :param data: The complete payload.
    :param boundary: The boundary token, as found in the Content-Type header.
    :param processors: Content processors to apply over the built-in ones.
    """
    return FormDataParser(boundary, processors).parse(data)


def parse_form(
    headers: Mapping[str, str | bytes],
    body: BytesLike | SupportsRead,
    processors: Mapping[str, Processor] | None = None,
) -> ParseResult:
    """
    Parses a request body given its headers.  The boundary is taken from the
    Content-Type header.  ``body`` may be the payload itself or an object with
    a ``read()`` method, in which case it is read completely (or up to
    Content-Length bytes, if that header is given).

    :param headers: A dictionary-like object of HTTP headers.  The only
                    required header is Content-Type.
    :param body: The payload, or a file-like object to read it from.
    :param processors: Content processors to apply over the built-in ones.
    """
    content_type = headers.get("Content-Type")
    if content_type is None:
        logger.warning("No Content-Type header given")
        raise FormDataError("No Content-Type header given!")

    if isinstance(content_type, bytes):
        content_type = content_type.decode("latin-1")

    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != "multipart/form-data":
        logger.warning("Unknown Content-Type: %r", content_type)
        raise FormDataError(f"Unknown Content-Type: {content_type}")

    boundary = read_boundary(content_type)

    if isinstance(body, (bytes, bytearray, memoryview)):
        data = body
    else:
        content_length = headers.get("Content-Length")
        if content_length is not None:
            data = body.read(int(content_length))
        else:
            data = body.read()

    return FormDataParser(boundary, processors).parse(data)
