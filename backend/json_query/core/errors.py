"""Error hierarchy shared by the query engine and the HTTP layer."""

from __future__ import annotations


class JsonQueryError(Exception):
    """Base class for errors surfaced to callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FileNotFound(JsonQueryError):
    """The requested file does not resolve to a JSON file in the data directory."""

    status_code = 404


class MalformedInput(JsonQueryError):
    """Query parameters failed basic shape checks."""

    status_code = 400


class RecordSourceError(JsonQueryError):
    """Reading records from a JSON array file failed mid-scan."""


class NotAnArray(RecordSourceError):
    """The root JSON value is not an array."""


class MalformedJSON(RecordSourceError):
    """The file is not valid JSON."""


class SourceIOError(RecordSourceError):
    """The file could not be read."""


__all__ = [
    "JsonQueryError",
    "FileNotFound",
    "MalformedInput",
    "RecordSourceError",
    "NotAnArray",
    "MalformedJSON",
    "SourceIOError",
]
