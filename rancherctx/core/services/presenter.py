"""
Presenter — the project list with the active project flagged.

``render`` is a pure view: it reads the config and the listing and
never mutates anything. ``format_rows`` turns the rows into display
lines, highlighting the active project only when color is enabled.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import click

from rancherctx.core.config.store import ConfigStore
from rancherctx.core.models.server import ServerContext
from rancherctx.core.services.directory import ProjectDirectory

logger = logging.getLogger(__name__)

# Active project style: yellow on black
ACTIVE_STYLE = {"fg": "yellow", "bg": "black"}


def color_enabled(force: bool, no_color: bool, is_tty: bool) -> bool:
    """Decide whether to highlight.

    Precedence: explicit force flag > (terminal and no NO_COLOR) > plain.
    """
    if force:
        return True
    return is_tty and not no_color


class Presenter:
    """Builds the project list for a server."""

    def __init__(self, store: ConfigStore, directory: ProjectDirectory):
        self.store = store
        self.directory = directory

    def render(self, server: ServerContext) -> list[tuple[str, bool]]:
        """Listed projects paired with whether each is the active one.

        Raises:
            ConfigError: If the active project cannot be read.
            DirectoryError: If the listing cannot be fetched.
        """
        active = self.store.active_project(server)
        rows = [(pid, pid == active) for pid in self.directory.list_projects(server)]
        logger.debug("Rendered %d project(s), active=%r", len(rows), active)
        return rows


def format_rows(rows: Iterable[tuple[str, bool]], color: bool) -> list[str]:
    """Display lines for ``rows``; the active one is styled when ``color``."""
    lines = []
    for pid, is_active in rows:
        if is_active and color:
            lines.append(click.style(pid, **ACTIVE_STYLE))
        else:
            lines.append(pid)
    return lines
