"""Sequential access to the elements of a JSON array file."""

from __future__ import annotations

from pathlib import Path
from typing import Any, BinaryIO, Iterator

import ijson

from json_query.core.errors import MalformedJSON, NotAnArray, SourceIOError
from json_query.core.logging import get_logger

logger = get_logger(__name__)

_WHITESPACE = b" \t\r\n"
_BOM = b"\xef\xbb\xbf"
_PEEK_SIZE = 4096


class RecordStream:
    """Forward-only iterator over the top-level array elements of a file.

    The file is parsed incrementally with ijson, so only the element being
    built is held in memory. A stream cannot be restarted; open a new one per
    pass. Parse and read failures raise and close the stream.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.consumed = 0
        self._fh: BinaryIO | None = None
        self._items: Iterator[Any] | None = None
        self._exhausted = False

    @classmethod
    def open(cls, path: Path) -> "RecordStream":
        stream = cls(path)
        stream._start()
        return stream

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def _start(self) -> None:
        try:
            fh = self.path.open("rb")
        except OSError as exc:
            raise SourceIOError(f"Unable to open {self.path.name}: {exc}") from exc
        self._fh = fh
        try:
            offset = _ensure_array_root(fh, self.path)
            fh.seek(offset)
            self._items = ijson.items(fh, "item", use_float=True)
        except BaseException:
            self.close()
            raise

    def __iter__(self) -> "RecordStream":
        return self

    def __next__(self) -> Any:
        if self._exhausted or self._items is None:
            raise StopIteration
        try:
            record = next(self._items)
        except StopIteration:
            self.close()
            raise
        except ijson.JSONError as exc:
            self.close()
            raise MalformedJSON(f"Invalid JSON in {self.path.name} after {self.consumed} records: {exc}") from exc
        except OSError as exc:
            self.close()
            raise SourceIOError(f"Failed reading {self.path.name}: {exc}") from exc
        self.consumed += 1
        return record

    def close(self) -> None:
        """Stop reading; the rest of the file is never parsed."""
        self._exhausted = True
        self._items = None
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> "RecordStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_records(path: Path) -> RecordStream:
    """Open a new record stream over the JSON array stored at ``path``."""
    return RecordStream.open(path)


def _ensure_array_root(fh: BinaryIO, path: Path) -> int:
    """Check the first significant byte and return the offset parsing starts at."""
    offset = 0
    try:
        head = fh.read(_PEEK_SIZE)
        if head.startswith(_BOM):
            offset = len(_BOM)
            head = head[offset:]
        while head and not head.lstrip(_WHITESPACE):
            head = fh.read(_PEEK_SIZE)
    except OSError as exc:
        raise SourceIOError(f"Failed reading {path.name}: {exc}") from exc
    stripped = head.lstrip(_WHITESPACE)
    if not stripped:
        raise MalformedJSON(f"{path.name} is empty")
    if stripped[:1] != b"[":
        logger.warning("Root JSON value of %s is not an array", path.name)
        raise NotAnArray(f"Root JSON value of {path.name} is not an array")
    return offset


__all__ = ["RecordStream", "open_records"]
