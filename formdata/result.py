from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from typing import Any, Dict, List, Union

    ParseResult = Dict[str, Union["Entry", List["Entry"]]]


class Entry:
    """
    The decoded form of a single part: its content type, the value returned
    by the content processor, and the filename if the part carried one.
    """

    def __init__(self, content_type: str, data: Any, filename: str | None = None) -> None:
        self._content_type = content_type
        self._data = data
        self._filename = filename

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def data(self) -> Any:
        return self._data

    @property
    def filename(self) -> str | None:
        """The part's filename, or None if the Content-Disposition had none."""
        return self._filename

    def to_dict(self) -> dict[str, Any]:
        """
        Returns this entry as a plain dictionary.  The ``filename`` key is only
        present when the part carried a filename.
        """
        d: dict[str, Any] = {"content_type": self._content_type, "data": self._data}
        if self._filename is not None:
            d["filename"] = self._filename
        return d

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Entry):
            return (
                self.content_type == other.content_type
                and self.data == other.data
                and self.filename == other.filename
            )
        else:
            return NotImplemented

    def __repr__(self) -> str:
        if self._filename is None:
            return "{}(content_type={!r}, data={!r})".format(
                self.__class__.__name__, self._content_type, self._data
            )
        return "{}(content_type={!r}, data={!r}, filename={!r})".format(
            self.__class__.__name__, self._content_type, self._data, self._filename
        )


def add_entry(result: ParseResult, name: str, entry: Entry) -> None:
    """
    Adds ``entry`` to ``result`` under ``name``.  The first entry for a name is
    stored as-is; a second one turns the value into a list of both, and any
    further entries are appended to that list.
    """
    value = result.get(name)

    if value is None:
        result[name] = entry
    elif isinstance(value, list):
        value.append(entry)
    else:
        result[name] = [value, entry]
