"""
History file — the single previously-active project.

Plain text, one value, no structure. Absent until the first switch
that changes the active project; overwritten (never appended) after
that. Writes go through the same atomic writer as the config store.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rancherctx.core.errors import HistoryError
from rancherctx.core.persistence.atomic import atomic_write_text

logger = logging.getLogger(__name__)


class HistoryFile:
    """Reader/writer for the history record at a fixed path."""

    def __init__(self, path: Path):
        self.path = path

    def read(self) -> str | None:
        """Return the recorded project, or None if nothing is recorded.

        Raises:
            HistoryError: On I/O errors other than the file not existing.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No history file at %s", self.path)
            return None
        except OSError as e:
            raise HistoryError(f"Cannot read history file {self.path}: {e}") from e

        value = raw.strip()
        return value or None

    def write(self, project: str) -> bool:
        """Record ``project`` as the previous project.

        Skips the write when the stored value already equals ``project``.

        Returns:
            True if the file was written, False if it was already current.

        Raises:
            HistoryError: If the file cannot be read or written.
        """
        if self.read() == project:
            logger.debug("History already holds %r — not rewriting", project)
            return False

        try:
            atomic_write_text(self.path, project + "\n", prefix=".history_")
        except OSError as e:
            raise HistoryError(f"Cannot write history file {self.path}: {e}") from e

        logger.debug("History set to %r", project)
        return True

    def __repr__(self) -> str:
        return f"<HistoryFile path={str(self.path)!r}>"
