"""
Context switcher — activates a project and remembers the previous one.

A switch runs through three steps, in this order:

    1. read the active project                    (Idle → Resolving)
    2. write the new active project to the config (Resolving → Switching)
    3. record the old project in the history file (Switching → Idle)

A failure in 1 or 2 aborts with SwitchError and leaves the history
untouched (state → Failed). A failure in 3 does not undo 2: the
switch is reported as successful and the history error is carried in
the result for the caller to warn about.

Rename and delete are not implemented and fail before touching
anything.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rancherctx.core.config.store import ConfigStore
from rancherctx.core.errors import (
    ConfigError,
    HistoryError,
    NoHistoryError,
    NoMatchError,
    SwitchError,
)
from rancherctx.core.models.server import ServerContext
from rancherctx.core.models.switch import SwitchResult, SwitchState
from rancherctx.core.persistence.history_file import HistoryFile
from rancherctx.core.services.directory import ProjectDirectory

logger = logging.getLogger(__name__)


class ContextSwitcher:
    """Orchestrates config, directory and history for one invocation.

    Every operation takes the server explicitly; when omitted, the
    config's current server is resolved for that call only.
    """

    def __init__(self, store: ConfigStore, directory: ProjectDirectory, history: HistoryFile):
        self.store = store
        self.directory = directory
        self.history = history
        self.state = SwitchState.IDLE

    # ── Switching ───────────────────────────────────────────────────

    def switch_to(self, target: str, server: ServerContext | None = None) -> SwitchResult:
        """Make ``target`` the active project.

        Raises:
            SwitchError: If the current project cannot be read or the
                config cannot be written. ``__cause__`` holds the
                underlying ConfigError.
        """
        self._enter(SwitchState.RESOLVING)
        try:
            if server is None:
                server = self.store.current_server()
            previous = self.store.active_project(server)
        except ConfigError as e:
            self._enter(SwitchState.FAILED)
            raise SwitchError(f"Cannot read the active project: {e}") from e

        self._enter(SwitchState.SWITCHING)
        try:
            self.store.set_active_project(server, target)
        except ConfigError as e:
            self._enter(SwitchState.FAILED)
            raise SwitchError(f"Cannot switch to '{target}': {e}") from e

        result = SwitchResult(server_id=server.server_id, current=target, previous=previous)

        # An unset previous project leaves nothing to swap back to
        if previous and previous != target:
            try:
                result.history_written = self.history.write(previous)
            except HistoryError as e:
                logger.debug("History update failed after switching to %r", target, exc_info=True)
                result.history_error = str(e)

        self._enter(SwitchState.IDLE)
        return result

    def swap_back(self, server: ServerContext | None = None) -> SwitchResult:
        """Switch to the previously active project.

        Raises:
            NoHistoryError: If no previous project is recorded.
            HistoryError: If the history file cannot be read.
            SwitchError: As for ``switch_to``.
        """
        previous = self.history.read()
        if previous is None:
            raise NoHistoryError("No previous project recorded, nothing to swap back to")
        logger.debug("Swapping back to %r", previous)
        return self.switch_to(previous, server=server)

    # ── Resolution ──────────────────────────────────────────────────

    def resolve_target(self, user_input: str, server: ServerContext | None = None) -> str:
        """Map user input to a listed project id.

        An exact match wins; otherwise the first listed project that
        contains ``user_input`` is chosen. Ambiguous input resolves to
        the first match in listing order without complaint.

        Raises:
            NoMatchError: If no listed project contains ``user_input``.
            DirectoryError: If the listing cannot be fetched.
            ConfigError: If ``server`` is omitted and cannot be resolved.
        """
        if server is None:
            server = self.store.current_server()

        candidates = list(self.directory.list_projects(server))
        if user_input in candidates:
            return user_input

        for candidate in candidates:
            if user_input in candidate:
                logger.debug("Resolved %r to %r by substring", user_input, candidate)
                return candidate

        raise NoMatchError(f"No project matching '{user_input}' on server '{server.server_id}'")

    # ── Not implemented ─────────────────────────────────────────────

    def rename(self, new_name: str, old_name: str) -> None:
        """Rename a project. Not implemented."""
        raise NotImplementedError("Renaming projects is not implemented")

    def delete(self, names: Sequence[str]) -> None:
        """Delete projects. Not implemented."""
        raise NotImplementedError("Deleting projects is not implemented")

    # ── Internals ───────────────────────────────────────────────────

    def _enter(self, state: SwitchState) -> None:
        logger.debug("Switcher %s → %s", self.state.value, state.value)
        self.state = state
