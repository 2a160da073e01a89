"""File-backed store for the serialized drink list."""

import os
from dataclasses import dataclass
from pathlib import Path

from caffeine_tracker.services.ledger import DrinkStore, DrinkStoreError


@dataclass
class FileDrinkStore(DrinkStore):
    """Stores the drink list in a single file, replaced atomically."""

    path: Path

    def read(self) -> bytes | None:
        """Return the file contents, or None if the file does not exist."""
        try:
            return Path(self.path).read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise DrinkStoreError(f"Failed to read {self.path}") from exc

    def write(self, data: bytes) -> None:
        """Write to a temp file in the same directory, then swap it in."""
        path = Path(self.path)
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as exc:
            raise DrinkStoreError(f"Failed to write {path}") from exc
