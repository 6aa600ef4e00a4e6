"""
Content processors turn the raw bytes of a part body into the value stored in
its :class:`~formdata.result.Entry`.  They are looked up by the exact content
type of the part, falling back to the ``"default"`` processor.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import orjson

from .exceptions import ContentDecodeError
from .result import Entry
from .scanner import decode_text

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Mapping
    from typing import Any, Dict

    Processor = Callable[[bytes], Any]
    Registry = Dict[str, Processor]

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"


def process_text(content: bytes) -> str:
    return decode_text(content)


def process_json(content: bytes) -> Any:
    return orjson.loads(decode_text(content))


def process_raw(content: bytes) -> bytes:
    return content


DEFAULT_PROCESSORS: Registry = {
    "text/plain": process_text,
    "application/json": process_json,
    DEFAULT_KEY: process_raw,
}


def build_registry(processors: Mapping[str, Processor] | None = None) -> Registry:
    """
    Returns a new registry made of the built-in processors with the given
    ones applied over them, key by key.  Overriding ``"default"`` changes the
    fallback for every content type without its own entry.
    """
    registry = DEFAULT_PROCESSORS.copy()
    if processors:
        registry.update(processors)
    return registry


def process_content(registry: Mapping[str, Processor], content_type: str, body: bytes, filename: str | None = None) -> Entry:
    """
    Runs the processor registered for ``content_type`` (or the default one)
    over ``body`` and wraps the result in an :class:`Entry`.

    :param registry: A mapping from content type to processor.  It must have a
                     ``"default"`` key.
    :param content_type: The part's content type, matched exactly.
    :param body: The raw part body.
    :param filename: The part's filename, if it had one.
    """
    if content_type in registry:
        processor = registry[content_type]
    else:
        logger.debug("No processor for %r, using the default one", content_type)
        processor = registry[DEFAULT_KEY]

    try:
        data = processor(body)
    except Exception as exc:
        msg = "Error processing %r content: %s" % (content_type, exc)
        logger.warning(msg)
        raise ContentDecodeError(msg) from exc

    return Entry(content_type, data, filename)
