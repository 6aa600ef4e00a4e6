"""
Byte-level helpers shared by the header parser and the parse driver.

All of these work on offsets into the caller's buffer; nothing here slices or
copies the payload.
"""

from __future__ import annotations

# Single-byte constants.  Indexing a bytes object gives an integer, so we keep
# the integer values around for comparisons against ``data[i]``.
CR = b"\r"[0]
LF = b"\n"[0]
EQUALS = b"="[0]
QUOTE = b'"'[0]

CRLF = b"\r\n"


def bytes_equal(a: bytes, b: bytes) -> bool:
    """
    Returns True if both byte strings have the same length and content.  No
    case folding or normalisation is applied.
    """
    if len(a) != len(b):
        return False
    return a == b


def starts_with_prefix(buf: bytes, prefix: bytes, offset: int = 0, end: int | None = None) -> bool:
    """
    Returns True if the bytes of ``buf`` starting at ``offset`` begin with
    ``prefix``.  When ``end`` is given, the prefix must fit before it.
    """
    if end is None:
        end = len(buf)
    return buf.startswith(prefix, offset, end)


def find_line_end(buf: bytes, offset: int) -> int:
    """
    Finds the first CRLF at or after ``offset`` and returns the index of its
    CR.  If the line is never terminated, the length of the buffer is
    returned instead, so callers must check for that.
    """
    idx = buf.find(CRLF, offset)
    if idx == -1:
        return len(buf)
    return idx


def is_line_start(buf: bytes, offset: int, block_start: int = 0) -> bool:
    """Returns True if ``offset`` is the first byte of a line."""
    return offset == block_start or buf[offset - 1] == LF


def decode_text(data: bytes) -> str:
    # Invalid sequences are replaced rather than rejected.
    return data.decode("utf-8", errors="replace")
