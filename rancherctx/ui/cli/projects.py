"""
CLI handlers for project listing and switching.

Thin wrappers over ``rancherctx.core.services``: each handler wires the
components from Settings, runs one operation, and prints the outcome.
Errors propagate to the entrypoint, which maps them to exit codes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import click

from rancherctx.adapters.base import InteractiveSelector, ProjectSource
from rancherctx.adapters.fzf import FzfSelector
from rancherctx.adapters.rancher_api import RancherApiSource
from rancherctx.core.config.settings import Settings
from rancherctx.core.config.store import ConfigStore
from rancherctx.core.models.switch import SwitchResult
from rancherctx.core.persistence.history_file import HistoryFile
from rancherctx.core.services.directory import ProjectDirectory
from rancherctx.core.services.presenter import Presenter, color_enabled, format_rows
from rancherctx.core.services.switcher import ContextSwitcher

logger = logging.getLogger(__name__)


@dataclass
class Components:
    """Everything one invocation needs, built from Settings."""

    store: ConfigStore
    directory: ProjectDirectory
    history: HistoryFile
    switcher: ContextSwitcher
    presenter: Presenter


def build_components(settings: Settings, source: ProjectSource | None = None) -> Components:
    store = ConfigStore(settings.config_path)
    directory = ProjectDirectory(source or RancherApiSource(), prefix=settings.project_prefix)
    history = HistoryFile(settings.history_path)
    return Components(
        store=store,
        directory=directory,
        history=history,
        switcher=ContextSwitcher(store, directory, history),
        presenter=Presenter(store, directory),
    )


def _stdout_is_tty() -> bool:
    return click.get_text_stream("stdout").isatty()


def _report_switch(result: SwitchResult) -> None:
    click.secho(f'Active project is "{result.current}".', fg="green", err=True)
    if result.history_error:
        click.secho(
            f"warning: switched, but the previous project was not recorded: {result.history_error}",
            fg="yellow",
            err=True,
        )


# ── Handlers ────────────────────────────────────────────────────


def list_or_choose(
    settings: Settings,
    source: ProjectSource | None = None,
    selector: InteractiveSelector | None = None,
    is_tty: bool | None = None,
) -> None:
    """No-argument mode: interactive choice when possible, else the list."""
    comps = build_components(settings, source)
    selector = selector or FzfSelector()
    tty = _stdout_is_tty() if is_tty is None else is_tty

    server = comps.store.current_server()
    rows = comps.presenter.render(server)
    color = color_enabled(settings.force_color, settings.no_color, tty)

    if tty and not settings.ignore_fzf and selector.is_available():
        logger.debug("Choosing interactively with %s", selector.name)
        choice = click.unstyle(selector.select(format_rows(rows, color=color)))
        _report_switch(comps.switcher.switch_to(choice, server=server))
        return

    for line in format_rows(rows, color=color):
        click.echo(line, color=color)


def show_current(settings: Settings) -> None:
    """Print the active project (nothing if none is set)."""
    store = ConfigStore(settings.config_path)
    active = store.active_project(store.current_server())
    if active:
        click.echo(active)


def switch(settings: Settings, name: str, source: ProjectSource | None = None) -> None:
    """Resolve ``name`` against the listing and switch to it."""
    comps = build_components(settings, source)
    server = comps.store.current_server()
    target = comps.switcher.resolve_target(name, server=server)
    _report_switch(comps.switcher.switch_to(target, server=server))


def swap_back(settings: Settings) -> None:
    """Switch to the previously active project."""
    comps = build_components(settings)
    _report_switch(comps.switcher.swap_back())


def rename(settings: Settings, new_name: str, old_name: str) -> None:
    build_components(settings).switcher.rename(new_name, old_name)


def delete(settings: Settings, names: Sequence[str]) -> None:
    build_components(settings).switcher.delete(names)
