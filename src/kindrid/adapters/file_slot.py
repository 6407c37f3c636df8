"""File-backed key-value slot."""

from dataclasses import dataclass
from pathlib import Path

from kindrid.services.slots import KeyValueSlot


@dataclass
class FileSlot(KeyValueSlot):
    """Stores each key as a `<key>.json` file in a directory."""

    directory: Path

    @classmethod
    def create(cls, directory: str) -> "FileSlot":
        """Create a slot rooted at a directory, creating it if needed."""
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        return cls(directory=path)

    def read(self, key: str) -> str | None:
        """Return the file contents for a key, if the file exists."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        """Replace the file for a key."""
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"
