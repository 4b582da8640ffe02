"""
In-memory adapters — fakes for the project source and the selector.

Used by the test-suite, and handy for exercising the switcher against
several fake servers without a network. Both record their calls.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from rancherctx.adapters.base import InteractiveSelector, ProjectSource
from rancherctx.core.errors import DirectoryError, SelectionError
from rancherctx.core.models.project import Project
from rancherctx.core.models.server import ServerContext


class StaticProjectSource(ProjectSource):
    """ProjectSource serving fixed listings per server id.

    ``listings`` maps a server id to its projects. A server id missing
    from the mapping, or one configured with ``set_failure``, raises
    DirectoryError like an unreachable server would.
    """

    def __init__(self, listings: Mapping[str, Sequence[Project]] | None = None):
        self._listings: dict[str, list[Project]] = {
            sid: list(projects) for sid, projects in (listings or {}).items()
        }
        self._failures: dict[str, str] = {}
        self._call_log: list[str] = []

    @classmethod
    def of_ids(cls, server_id: str, ids: Sequence[str], description: str = "") -> StaticProjectSource:
        """Shortcut: one server whose projects all share ``description``."""
        return cls({server_id: [Project(id=i, description=description) for i in ids]})

    @property
    def name(self) -> str:
        return "static"

    @property
    def call_log(self) -> list[str]:
        """Server ids this source has been asked for, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_failure(self, server_id: str, error: str = "Mock failure") -> None:
        self._failures[server_id] = error

    def list(self, server: ServerContext) -> list[Project]:
        self._call_log.append(server.server_id)
        if server.server_id in self._failures:
            raise DirectoryError(self._failures[server.server_id])
        if server.server_id not in self._listings:
            raise DirectoryError(f"Unknown server '{server.server_id}'")
        return list(self._listings[server.server_id])


class StaticSelector(InteractiveSelector):
    """InteractiveSelector returning a preset choice.

    With ``choice=None`` it behaves like a cancelled selection.
    """

    def __init__(self, choice: str | None = None, available: bool = True):
        self._choice = choice
        self._available = available
        self.seen: list[list[str]] = []

    @property
    def name(self) -> str:
        return "static"

    def is_available(self) -> bool:
        return self._available

    def select(self, candidates: Sequence[str]) -> str:
        self.seen.append(list(candidates))
        if self._choice is None:
            raise SelectionError("You did not choose any of the options")
        return self._choice
