from __future__ import annotations

import logging
import re

from .exceptions import BoundaryError

logger = logging.getLogger(__name__)

# This is the regex for finding the boundary parameter in a Content-Type
# header value.  The outer group keeps any quotes so that we only strip them
# when they are balanced.
BOUNDARY_RE = re.compile(r'boundary\s*=\s*("?([^";]+)"?)')


def read_boundary(value: str | bytes) -> str:
    """
    Returns the boundary token from a Content-Type header value such as
    ``multipart/form-data; boundary=----WebKitFormBoundary7MA4YWxkTrZu0gW``.

    One layer of surrounding double quotes is removed if present, so
    ``boundary="abc"`` and ``boundary=abc`` both give ``abc``.  An unbalanced
    quote is kept as part of the token.
    """
    if isinstance(value, bytes):
        value = value.decode("latin-1")

    match = BOUNDARY_RE.search(value)
    if match is None:
        logger.warning("No boundary given in %r", value)
        raise BoundaryError("The boundary param is missing")

    token = match.group(1)
    if len(token) > 1 and token[0] == '"' and token[-1] == '"':
        token = token[1:-1]

    return token
