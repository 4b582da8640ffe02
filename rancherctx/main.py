"""
rancherctx — CLI entrypoint.

Usage:
    rancherctx                 : list the projects (or choose one with fzf)
    rancherctx <NAME>          : switch to project <NAME> (exact or substring)
    rancherctx -               : switch to the previous project
    rancherctx -c, --current   : show the active project
    rancherctx -d <NAME> [...] : delete project(s) (not implemented)
    rancherctx <NEW>=<OLD>     : rename project <OLD> to <NEW> (not implemented)
    rancherctx -h, --help      : show this message
"""

from __future__ import annotations

import logging
import sys

import click

from rancherctx import __version__
from rancherctx.core.config.settings import Settings
from rancherctx.core.errors import USAGE_EXIT_CODE, RancherCtxError, exit_code_for
from rancherctx.core.observability.logging_config import setup_logging_from

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class _ProjectCommand(click.Command):
    """Command whose usage errors exit with USAGE_EXIT_CODE."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = USAGE_EXIT_CODE
            raise


def _usage_error(ctx: click.Context, message: str) -> click.UsageError:
    error = click.UsageError(message, ctx=ctx)
    error.exit_code = USAGE_EXIT_CODE
    return error


def _split_rename(arg: str) -> tuple[str, str] | None:
    new_name, sep, old_name = arg.partition("=")
    if sep and new_name and old_name:
        return new_name, old_name
    return None


@click.command(cls=_ProjectCommand, context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="rancherctx")
@click.option("--current", "-c", "show_current", is_flag=True, help="Show the active project.")
@click.option("--delete", "-d", "delete", is_flag=True, help="Delete the named project(s).")
@click.option("--verbose", is_flag=True, help="Enable verbose logging.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.argument("names", nargs=-1)
@click.pass_context
def cli(
    ctx: click.Context,
    show_current: bool,
    delete: bool,
    verbose: bool,
    debug: bool,
    names: tuple[str, ...],
) -> None:
    """Switch the active Rancher project.

    \b
    NAME      switch to NAME (exact match, else first substring match)
    -         switch back to the previous project
    NEW=OLD   rename OLD to NEW (not implemented)
    """
    from rancherctx.ui.cli import projects

    settings = Settings.from_env()

    if delete:
        if show_current:
            raise _usage_error(ctx, "-d cannot be combined with -c")
        if not names:
            raise _usage_error(ctx, "-d requires at least one project name")
        handler, args = projects.delete, (settings, names)
    elif len(names) > 1:
        raise _usage_error(ctx, f"too many arguments: {' '.join(names)}")
    elif show_current:
        if names:
            raise _usage_error(ctx, "-c takes no arguments")
        handler, args = projects.show_current, (settings,)
    elif not names:
        handler, args = projects.list_or_choose, (settings,)
    elif names[0] == "-":
        handler, args = projects.swap_back, (settings,)
    elif _split_rename(names[0]) is not None:
        handler, args = projects.rename, (settings, *_split_rename(names[0]))
    else:
        handler, args = projects.switch, (settings, names[0])

    try:
        setup_logging_from(debug=debug, verbose=verbose)
        logger.debug("Config %s, history %s", settings.config_path, settings.history_path)
        handler(*args)
    except (RancherCtxError, NotImplementedError) as e:
        logger.debug("Command failed", exc_info=True)
        click.secho(f"error: {e}", fg="red", err=True)
        sys.exit(exit_code_for(e))


def main() -> None:
    cli(prog_name="rancherctx")


if __name__ == "__main__":
    main()
