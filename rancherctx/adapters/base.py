"""
Adapter base — the capability contracts between the core and the outside.

The core never talks HTTP or spawns processes itself. It asks a
ProjectSource for the remote listing and an InteractiveSelector for a
user's choice; production adapters and in-memory fakes implement the
same single-method interfaces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from rancherctx.core.models.project import Project
from rancherctx.core.models.server import ServerContext


class ProjectSource(ABC):
    """Fetches the raw project listing for a server."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'rancher-api', 'static')."""

    @abstractmethod
    def list(self, server: ServerContext) -> list[Project]:
        """Return every project the server reports, in API order.

        One round trip, no retry.

        Raises:
            DirectoryError: On network failure, non-2xx status, or a
                malformed response body.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class InteractiveSelector(ABC):
    """Lets the user pick one candidate."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'fzf', 'static')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the selector can run here. Fast, never raises."""

    @abstractmethod
    def select(self, candidates: Sequence[str]) -> str:
        """Return the chosen candidate.

        Raises:
            SelectionError: If nothing was chosen or the selector failed.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
