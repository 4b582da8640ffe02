"""
Settings — environment knobs resolved once per invocation.

The CLI builds a Settings from ``os.environ`` and hands it to the
components it wires up; nothing below the CLI reads the environment.

    RANCHERCTX_CONFIG          explicit config file path
    RANCHER_CONFIG_DIR         rancher CLI config dir (cli2.json inside)
    RANCHERCTX_HISTORY         explicit history file path
    XDG_CACHE_HOME             cache dir for the default history file
    _RANCHERCTX_FORCE_COLOR    force highlighted output
    NO_COLOR                   suppress highlighted output
    RANCHERCTX_IGNORE_FZF      never use interactive selection
    RANCHERCTX_PROJECT_PREFIX  description marker for listed projects
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel

CONFIG_FILE_NAME = "cli2.json"
DEFAULT_CONFIG_DIR = Path("~/.rancher")
HISTORY_FILE_NAME = "rancherctx"
DEFAULT_CACHE_DIR = Path("~/.cache")
DEFAULT_PROJECT_PREFIX = "System project"


class Settings(BaseModel):
    """Resolved runtime settings."""

    config_path: Path
    history_path: Path
    force_color: bool = False
    no_color: bool = False
    ignore_fzf: bool = False
    project_prefix: str = DEFAULT_PROJECT_PREFIX

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from an environment mapping (default: os.environ)."""
        env = os.environ if environ is None else environ
        return cls(
            config_path=_config_path(env),
            history_path=_history_path(env),
            force_color=bool(env.get("_RANCHERCTX_FORCE_COLOR")),
            no_color=bool(env.get("NO_COLOR")),
            ignore_fzf=bool(env.get("RANCHERCTX_IGNORE_FZF")),
            project_prefix=env.get("RANCHERCTX_PROJECT_PREFIX", DEFAULT_PROJECT_PREFIX),
        )


def _config_path(env: Mapping[str, str]) -> Path:
    explicit = env.get("RANCHERCTX_CONFIG")
    if explicit:
        return Path(explicit).expanduser()
    config_dir = env.get("RANCHER_CONFIG_DIR")
    if config_dir:
        return Path(config_dir).expanduser() / CONFIG_FILE_NAME
    return DEFAULT_CONFIG_DIR.expanduser() / CONFIG_FILE_NAME


def _history_path(env: Mapping[str, str]) -> Path:
    explicit = env.get("RANCHERCTX_HISTORY")
    if explicit:
        return Path(explicit).expanduser()
    cache_dir = env.get("XDG_CACHE_HOME")
    base = Path(cache_dir).expanduser() if cache_dir else DEFAULT_CACHE_DIR.expanduser()
    return base / HISTORY_FILE_NAME
