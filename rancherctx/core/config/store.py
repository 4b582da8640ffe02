"""
Config store — reads and rewrites the rancher CLI config (cli2.json).

The file is owned by the rancher CLI. This module only ever reads
three things from it (the current server id, that server's connection
details, and its active project) and writes one: the active project.

Layout:

    {
      "Servers": {
        "rancherDefault": {
          "accessKey": "token-abcde",
          "secretKey": "...",
          "tokenKey": "token-abcde:...",
          "url": "https://rancher.example.com",
          "project": "c-m-xyz:p-abc12",
          "cacert": ""
        }
      },
      "CurrentServer": "rancherDefault"
    }

Rewrites replace only the project value in the original text and go
through an atomic temp-file-then-rename.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from json.decoder import scanstring
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from rancherctx.core.errors import ConfigError
from rancherctx.core.models.server import ServerConfig, ServerContext
from rancherctx.core.persistence.atomic import atomic_write_text

logger = logging.getLogger(__name__)

SERVERS_KEY = "Servers"
CURRENT_SERVER_KEY = "CurrentServer"
PROJECT_KEY = "project"


class ConfigStore:
    """Access to a single rancher CLI config file."""

    def __init__(self, path: Path):
        self.path = path

    # ── Reads ───────────────────────────────────────────────────────

    def current_server(self) -> ServerContext:
        """Resolve the server marked current in the config.

        Raises:
            ConfigError: If the file is missing, unreadable, not valid
                JSON, or no current server is designated.
        """
        data = self._load()[0]
        server_id = data.get(CURRENT_SERVER_KEY)
        if not server_id or not isinstance(server_id, str):
            raise ConfigError(f"No current server set in {self.path}")

        server = self._server_config(data, server_id)
        logger.debug("Current server is %r (%s)", server_id, server.url)
        return ServerContext.from_config(server_id, server)

    def active_project(self, server: ServerContext) -> str | None:
        """Return the active project for ``server``, or None if unset.

        Raises:
            ConfigError: If the file cannot be loaded or the server
                entry is absent.
        """
        data = self._load()[0]
        project = self._server_config(data, server.server_id).project
        return project or None

    # ── Writes ──────────────────────────────────────────────────────

    def set_active_project(self, server: ServerContext, project: str) -> None:
        """Atomically rewrite the config with ``project`` active for ``server``.

        Raises:
            ConfigError: On any read, parse, or write failure. The
                original file is left untouched.
        """
        data, raw = self._load()
        self._raw_entry(data, server.server_id)
        content = _splice_project(raw, server.server_id, project)

        try:
            atomic_write_text(self.path, content, prefix=".cli2_")
        except OSError as e:
            raise ConfigError(f"Cannot write {self.path}: {e}") from e

        logger.info("Active project for %r set to %r", server.server_id, project)

    # ── Internals ───────────────────────────────────────────────────

    def _load(self) -> tuple[dict[str, Any], str]:
        if not self.path.is_file():
            raise ConfigError(f"Config file not found: {self.path}")

        logger.debug("Loading config from %s", self.path)

        try:
            raw = self.path.read_bytes().decode("utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read {self.path}: {e}") from e
        except UnicodeDecodeError as e:
            raise ConfigError(f"Config {self.path} is not UTF-8: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(
                f"Expected a JSON object in {self.path}, got {type(data).__name__}"
            )
        return data, raw

    def _raw_entry(self, data: dict[str, Any], server_id: str) -> dict[str, Any]:
        servers = data.get(SERVERS_KEY)
        if not isinstance(servers, dict):
            raise ConfigError(f"No '{SERVERS_KEY}' mapping in {self.path}")
        entry = servers.get(server_id)
        if not isinstance(entry, dict):
            raise ConfigError(f"Server '{server_id}' not found in {self.path}")
        return entry

    def _server_config(self, data: dict[str, Any], server_id: str) -> ServerConfig:
        entry = self._raw_entry(data, server_id)
        try:
            return ServerConfig.model_validate(entry)
        except ValidationError as e:
            raise ConfigError(f"Invalid entry for server '{server_id}': {e}") from e

    def __repr__(self) -> str:
        return f"<ConfigStore path={str(self.path)!r}>"


# ── Text splicing ───────────────────────────────────────────────────
#
# Only the project string literal of one server entry is replaced or
# inserted. The walkers assume a document json.loads has accepted.

_WHITESPACE = " \t\n\r"
_decoder = json.JSONDecoder()


@dataclass
class _Member:
    key: str
    key_start: int
    key_end: int
    value_start: int
    value_end: int


def _skip_ws(raw: str, pos: int) -> int:
    while pos < len(raw) and raw[pos] in _WHITESPACE:
        pos += 1
    return pos


def _members(raw: str, start: int) -> list[_Member]:
    """Members of the JSON object whose ``{`` is at ``raw[start]``."""
    members: list[_Member] = []
    pos = _skip_ws(raw, start + 1)
    if raw[pos] == "}":
        return members
    while True:
        key, key_end = scanstring(raw, pos + 1)
        value_start = _skip_ws(raw, _skip_ws(raw, key_end) + 1)
        _, value_end = _decoder.raw_decode(raw, value_start)
        members.append(_Member(key, pos, key_end, value_start, value_end))
        pos = _skip_ws(raw, value_end)
        if raw[pos] == "}":
            return members
        pos = _skip_ws(raw, pos + 1)


def _find(members: list[_Member], key: str) -> _Member | None:
    # json.loads keeps the last duplicate, so do the same
    found = None
    for member in members:
        if member.key == key:
            found = member
    return found


def _splice_project(raw: str, server_id: str, project: str) -> str:
    """Return ``raw`` with ``project`` set on the entry for ``server_id``."""
    literal = json.dumps(project, ensure_ascii=False)

    root = _find(_members(raw, _skip_ws(raw, 0)), SERVERS_KEY)
    entry = _find(_members(raw, root.value_start), server_id)
    fields = _members(raw, entry.value_start)

    current = _find(fields, PROJECT_KEY)
    if current is not None:
        return raw[: current.value_start] + literal + raw[current.value_end :]

    if not fields:
        at = entry.value_start + 1
        return raw[:at] + f'"{PROJECT_KEY}":{literal}' + raw[at:]

    last = fields[-1]
    colon = raw[last.key_end : last.value_start]
    comma = raw[fields[-2].value_end : last.key_start] if len(fields) > 1 else ","
    insert = f'{comma}"{PROJECT_KEY}"{colon}{literal}'
    return raw[: last.value_end] + insert + raw[last.value_end :]
