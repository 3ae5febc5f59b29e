"""File repository for the Application Tracker.

This module reads and writes the whole collection of job application
records to a single indented JSON file.
"""

import contextlib
import json
import threading
from collections.abc import Iterable
from pathlib import Path

from src.tracker.models import JobApplication


class RepositoryError(Exception):
    """Base error for backing file operations."""


class RepositoryLoadError(RepositoryError):
    """The backing file exists but could not be read or parsed."""


class RepositorySaveError(RepositoryError):
    """The collection could not be written to the backing file."""


class JsonApplicationRepository:
    """JSON file repository for job application records.

    The file is fully parsed on load and fully rewritten on save. Each
    load or save holds the repository lock for its whole duration, and
    saves go through a temporary file that atomically replaces the
    target so a failed write never leaves a partial file behind.
    """

    def __init__(self, path: Path | str):
        """Initialize the repository.

        Args:
            path: Path to the JSON backing file.
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def exists(self) -> bool:
        """Return True if the backing file exists."""
        return self.path.exists()

    def load(self) -> list[JobApplication]:
        """Load every record from the backing file.

        Returns:
            The records in file order, or an empty list if the file is missing.

        Raises:
            RepositoryLoadError: If the file cannot be read or parsed.
        """
        with self._lock:
            if not self.path.exists():
                return []

            try:
                raw = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError, RecursionError) as e:
                raise RepositoryLoadError(
                    f"Could not read {self.path}: {e}"
                ) from e

            if not isinstance(raw, list):
                raise RepositoryLoadError(
                    f"Expected a list of applications in {self.path}, "
                    f"got {type(raw).__name__}"
                )

            records: list[JobApplication] = []
            for index, entry in enumerate(raw):
                if not isinstance(entry, dict):
                    raise RepositoryLoadError(
                        f"Entry {index} in {self.path} is not an object"
                    )
                try:
                    records.append(JobApplication.from_dict(entry))
                except (KeyError, TypeError, ValueError) as e:
                    raise RepositoryLoadError(
                        f"Entry {index} in {self.path} is invalid: {e}"
                    ) from e

            return records

    def save(self, records: Iterable[JobApplication]) -> None:
        """Rewrite the backing file with the given records.

        Args:
            records: The full collection, in the order it should be stored.

        Raises:
            RepositorySaveError: If serialization or writing fails.
        """
        with self._lock:
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            try:
                payload = json.dumps(
                    [record.to_dict() for record in records], indent=2
                )
                self.path.parent.mkdir(parents=True, exist_ok=True)
                tmp_path.write_text(payload + "\n", encoding="utf-8")
                tmp_path.replace(self.path)
            except (OSError, TypeError, ValueError) as e:
                with contextlib.suppress(OSError):
                    tmp_path.unlink(missing_ok=True)
                raise RepositorySaveError(
                    f"Could not write {self.path}: {e}"
                ) from e
