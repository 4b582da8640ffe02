"""
Error taxonomy — every failure the core can report.

Each error carries the process exit code the CLI uses for it, so the
mapping lives next to the type instead of in the UI layer.

Rename and delete raise Python's built-in ``NotImplementedError``;
the CLI maps it to ``NOT_IMPLEMENTED_EXIT_CODE``.
"""

from __future__ import annotations

USAGE_EXIT_CODE = 1
NOT_IMPLEMENTED_EXIT_CODE = 8


class RancherCtxError(Exception):
    """Base class for all rancherctx failures."""

    exit_code: int = 1


class ConfigError(RancherCtxError):
    """Raised when the CLI config file is missing, invalid, or unwritable."""

    exit_code = 2


class DirectoryError(RancherCtxError):
    """Raised when the remote project listing cannot be fetched or parsed."""

    exit_code = 3


class HistoryError(RancherCtxError):
    """Raised on history file I/O failures other than "not found"."""

    exit_code = 4


class NoHistoryError(RancherCtxError):
    """Raised when swapping back with no previous project recorded."""

    exit_code = 5


class NoMatchError(RancherCtxError):
    """Raised when no listed project matches the requested name."""

    exit_code = 6


class SwitchError(RancherCtxError):
    """Raised when a switch aborts before the config was updated.

    The underlying ``ConfigError`` is available as ``__cause__``.
    """

    exit_code = 7


class SelectionError(RancherCtxError):
    """Raised when interactive selection fails or is cancelled."""

    exit_code = 9


def exit_code_for(error: BaseException) -> int:
    """Map an exception raised by the core to a process exit code."""
    if isinstance(error, RancherCtxError):
        return error.exit_code
    if isinstance(error, NotImplementedError):
        return NOT_IMPLEMENTED_EXIT_CODE
    return 1
