"""Data-directory file lookup."""

from __future__ import annotations

from pathlib import Path

from json_query.core.errors import FileNotFound, MalformedInput

JSON_SUFFIX = ".json"


def normalize_file_name(file_name: str) -> str:
    """Append the ``.json`` suffix when missing."""
    name = file_name.strip()
    if not name:
        raise MalformedInput("File name is required")
    return name if name.endswith(JSON_SUFFIX) else f"{name}{JSON_SUFFIX}"


class FileCatalog:
    """Resolves file names to JSON files inside a single data directory."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir.expanduser()

    def ensure_dir(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def resolve(self, file_name: str) -> tuple[str, Path]:
        """Return the normalized name and path of an existing file."""
        name = normalize_file_name(file_name)
        root = self.data_dir.resolve()
        path = (root / name).resolve()
        if path.parent != root:
            raise MalformedInput(f"Invalid file name '{file_name}'")
        if not path.is_file():
            raise FileNotFound(f"File '{name}' not found in data directory")
        return name, path

    def list_files(self) -> list[str]:
        if not self.data_dir.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.data_dir.iterdir()
            if entry.name.endswith(JSON_SUFFIX) and entry.is_file()
        )


__all__ = ["FileCatalog", "JSON_SUFFIX", "normalize_file_name"]
