"""
Shared test fixtures and configuration.
"""

import json
from pathlib import Path

import pytest

from rancherctx.adapters.mock import StaticProjectSource
from rancherctx.core.config.store import ConfigStore
from rancherctx.core.persistence.history_file import HistoryFile
from rancherctx.core.services.directory import ProjectDirectory
from rancherctx.core.services.switcher import ContextSwitcher


@pytest.fixture
def server_id() -> str:
    """Id of the current server in the test config."""
    return "rancherDefault"


@pytest.fixture
def project_ids() -> list[str]:
    """Project ids the fake directory lists, in listing order."""
    return ["alpha-sys", "beta-sys", "alpha-test"]


@pytest.fixture
def make_config(server_id: str):
    """Factory for cli2.json documents with ``server_id`` current."""

    def _make(project: str = "alpha-sys", **overrides) -> dict:
        data = {
            "Servers": {
                server_id: {
                    "accessKey": "token-abcde",
                    "secretKey": "s3cr3t",
                    "tokenKey": "token-abcde:s3cr3t",
                    "url": "https://rancher.example.com",
                    "project": project,
                    "cacert": "",
                },
                "other": {
                    "accessKey": "token-other",
                    "secretKey": "x",
                    "tokenKey": "token-other:x",
                    "url": "https://other.example.com",
                    "project": "c-other:p-1",
                    "cacert": "",
                },
            },
            "CurrentServer": server_id,
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def config_path(tmp_path: Path, make_config) -> Path:
    """A cli2.json with 'alpha-sys' active, written compact like the rancher CLI."""
    path = tmp_path / "rancher" / "cli2.json"
    path.parent.mkdir()
    path.write_text(json.dumps(make_config(), separators=(",", ":")))
    return path


@pytest.fixture
def history_path(tmp_path: Path) -> Path:
    """Path for the history file (not created)."""
    return tmp_path / "cache" / "rancherctx"


@pytest.fixture
def store(config_path: Path) -> ConfigStore:
    return ConfigStore(config_path)


@pytest.fixture
def history(history_path: Path) -> HistoryFile:
    return HistoryFile(history_path)


@pytest.fixture
def source(server_id: str, project_ids: list[str]) -> StaticProjectSource:
    return StaticProjectSource.of_ids(server_id, project_ids, description="System project")


@pytest.fixture
def switcher(store: ConfigStore, source: StaticProjectSource, history: HistoryFile) -> ContextSwitcher:
    return ContextSwitcher(store, ProjectDirectory(source), history)


@pytest.fixture
def cli_env(monkeypatch: pytest.MonkeyPatch, config_path: Path, history_path: Path) -> None:
    """Point the CLI at the temp config and history, with env knobs cleared."""
    monkeypatch.setenv("RANCHERCTX_CONFIG", str(config_path))
    monkeypatch.setenv("RANCHERCTX_HISTORY", str(history_path))
    for name in (
        "RANCHER_CONFIG_DIR",
        "_RANCHERCTX_FORCE_COLOR",
        "NO_COLOR",
        "RANCHERCTX_IGNORE_FZF",
        "RANCHERCTX_PROJECT_PREFIX",
        "RANCHERCTX_LOG_LEVEL",
        "RANCHERCTX_LOG_FILE",
        "RANCHERCTX_LOG_FILE_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
