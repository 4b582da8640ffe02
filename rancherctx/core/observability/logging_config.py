"""
Logging for a rancherctx invocation.

Modules log through ``logging.getLogger(__name__)``; the entrypoint
calls ``setup_logging_from`` once. Console records go to stderr so
they never mix with the project list on stdout.

Console level, highest precedence first:

    --debug               DEBUG, with logger name and line number
    --verbose             INFO
    RANCHERCTX_LOG_LEVEL  any level name
    (default)             WARNING, message only

``RANCHERCTX_LOG_FILE`` adds a file handler at ``RANCHERCTX_LOG_FILE_LEVEL``
(the console level when unset).
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

from rancherctx.core.errors import ConfigError

LEVEL_ENV = "RANCHERCTX_LOG_LEVEL"
FILE_ENV = "RANCHERCTX_LOG_FILE"
FILE_LEVEL_ENV = "RANCHERCTX_LOG_FILE_LEVEL"

_DETAILED = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def resolve_level(environ: Mapping[str, str], debug: bool = False, verbose: bool = False) -> int:
    """Console level from the CLI flags, then the environment."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return level_from_name(environ.get(LEVEL_ENV))


def level_from_name(name: str | None) -> int:
    """Numeric level for ``name``; unset or unknown names mean WARNING."""
    value = logging.getLevelName(name.strip().upper()) if name else None
    return value if isinstance(value, int) else logging.WARNING


def setup_logging_from(
    environ: Mapping[str, str] | None = None,
    debug: bool = False,
    verbose: bool = False,
) -> int:
    """Configure logging from flags and ``environ``; returns the console level.

    Raises:
        ConfigError: If the log file cannot be opened.
    """
    env = os.environ if environ is None else environ
    level = resolve_level(env, debug=debug, verbose=verbose)
    file_level = level_from_name(env[FILE_LEVEL_ENV]) if env.get(FILE_LEVEL_ENV) else level
    setup_logging(level, log_file=env.get(FILE_ENV) or None, file_level=file_level)
    return level


def setup_logging(level: int, log_file: str | None = None, file_level: int | None = None) -> None:
    """Replace the root logger's handlers with a stderr console handler
    and, when ``log_file`` is given, a file handler."""
    handlers: list[logging.Handler] = [_console_handler(level)]
    if log_file:
        handlers.append(_file_handler(log_file, level if file_level is None else file_level))

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(min(h.level for h in handlers))

    # Handlers may outlive the stream they were given (CliRunner swaps stderr)
    logging.raiseExceptions = False


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if level <= logging.DEBUG:
        handler.setFormatter(logging.Formatter(_DETAILED, datefmt="%H:%M:%S"))
    elif level <= logging.INFO:
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    try:
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot open log file {path}: {e}") from e
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_DETAILED))
    return handler
