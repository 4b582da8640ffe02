"""
Tests for the context switcher — switching, swap-back, resolution, and
the failure ordering between config and history.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from rancherctx.adapters.mock import StaticProjectSource
from rancherctx.core.config.store import ConfigStore
from rancherctx.core.errors import (
    ConfigError,
    DirectoryError,
    HistoryError,
    NoHistoryError,
    NoMatchError,
    SwitchError,
)
from rancherctx.core.models.server import ServerContext
from rancherctx.core.models.switch import SwitchState
from rancherctx.core.persistence.history_file import HistoryFile
from rancherctx.core.services.directory import ProjectDirectory
from rancherctx.core.services.switcher import ContextSwitcher


def _active(config_path: Path) -> str:
    data = json.loads(config_path.read_text())
    return data["Servers"][data["CurrentServer"]]["project"]


class TestSwitchTo:
    """Tests for the three-step switch."""

    def test_switch_updates_config_and_history(
        self, switcher: ContextSwitcher, config_path: Path, history: HistoryFile
    ):
        result = switcher.switch_to("beta-sys")

        assert _active(config_path) == "beta-sys"
        assert history.read() == "alpha-sys"
        assert result.previous == "alpha-sys"
        assert result.current == "beta-sys"
        assert result.changed is True
        assert result.history_written is True
        assert result.history_error is None
        assert switcher.state is SwitchState.IDLE

    def test_same_target_does_not_touch_history(
        self, switcher: ContextSwitcher, history: HistoryFile, history_path: Path
    ):
        history.write("gamma-sys")
        mtime = history_path.stat().st_mtime_ns

        result = switcher.switch_to("alpha-sys")

        assert result.changed is False
        assert result.history_written is False
        assert history_path.read_text() == "gamma-sys\n"
        assert history_path.stat().st_mtime_ns == mtime

    def test_same_target_without_history_creates_nothing(
        self, switcher: ContextSwitcher, history_path: Path
    ):
        switcher.switch_to("alpha-sys")
        assert not history_path.exists()

    def test_explicit_server(self, switcher: ContextSwitcher, config_path: Path, server_id: str):
        other = ServerContext(server_id="other")
        result = switcher.switch_to("c-other:p-2", server=other)
        data = json.loads(config_path.read_text())
        assert data["Servers"]["other"]["project"] == "c-other:p-2"
        assert data["Servers"][server_id]["project"] == "alpha-sys"
        assert result.previous == "c-other:p-1"

    def test_unset_previous_is_not_recorded(
        self, tmp_path: Path, source, history: HistoryFile, make_config
    ):
        path = tmp_path / "cli2.json"
        path.write_text(json.dumps(make_config(project="")))
        switcher = ContextSwitcher(ConfigStore(path), ProjectDirectory(source), history)

        result = switcher.switch_to("beta-sys")

        assert result.previous is None
        assert history.read() is None

    def test_read_failure_aborts_without_side_effects(
        self, tmp_path: Path, source, history: HistoryFile
    ):
        switcher = ContextSwitcher(
            ConfigStore(tmp_path / "missing.json"), ProjectDirectory(source), history
        )
        with pytest.raises(SwitchError) as excinfo:
            switcher.switch_to("beta-sys")
        assert isinstance(excinfo.value.__cause__, ConfigError)
        assert history.read() is None
        assert switcher.state is SwitchState.FAILED

    def test_absent_server_is_switch_error(self, switcher: ContextSwitcher):
        with pytest.raises(SwitchError):
            switcher.switch_to("beta-sys", server=ServerContext(server_id="ghost"))

    def test_write_failure_leaves_history_untouched(
        self, switcher: ContextSwitcher, config_path: Path, history: HistoryFile
    ):
        original = config_path.read_bytes()
        with patch(
            "rancherctx.core.persistence.atomic.os.replace",
            side_effect=OSError("read-only filesystem"),
        ):
            with pytest.raises(SwitchError) as excinfo:
                switcher.switch_to("beta-sys")

        assert isinstance(excinfo.value.__cause__, ConfigError)
        assert config_path.read_bytes() == original
        assert history.read() is None
        assert switcher.state is SwitchState.FAILED

    def test_history_failure_is_best_effort(
        self, tmp_path: Path, store: ConfigStore, source, config_path: Path
    ):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        switcher = ContextSwitcher(
            store, ProjectDirectory(source), HistoryFile(blocker / "rancherctx")
        )

        result = switcher.switch_to("beta-sys")

        assert _active(config_path) == "beta-sys"
        assert result.history_written is False
        assert result.history_error
        assert switcher.state is SwitchState.IDLE

    def test_history_error_does_not_roll_back(self, switcher: ContextSwitcher, config_path: Path):
        with patch.object(HistoryFile, "write", side_effect=HistoryError("disk full")):
            result = switcher.switch_to("beta-sys")
        assert _active(config_path) == "beta-sys"
        assert result.history_error == "disk full"


class TestSwapBack:
    """Tests for returning to the previous project."""

    @pytest.mark.parametrize("a,b", [("alpha-sys", "beta-sys"), ("beta-sys", "alpha-test")])
    def test_round_trip(self, switcher: ContextSwitcher, config_path: Path, a: str, b: str):
        switcher.switch_to(a)
        switcher.switch_to(b)
        switcher.swap_back()
        assert _active(config_path) == a

    def test_swap_back_twice_toggles(self, switcher: ContextSwitcher, config_path: Path):
        switcher.switch_to("beta-sys")
        switcher.swap_back()
        assert _active(config_path) == "alpha-sys"
        switcher.swap_back()
        assert _active(config_path) == "beta-sys"

    def test_no_history(self, switcher: ContextSwitcher, config_path: Path):
        original = config_path.read_bytes()
        with pytest.raises(NoHistoryError):
            switcher.swap_back()
        assert config_path.read_bytes() == original

    def test_unreadable_history(self, tmp_path: Path, store: ConfigStore, source, config_path: Path):
        history_dir = tmp_path / "hist"
        history_dir.mkdir()
        switcher = ContextSwitcher(store, ProjectDirectory(source), HistoryFile(history_dir))
        original = config_path.read_bytes()
        with pytest.raises(HistoryError):
            switcher.swap_back()
        assert config_path.read_bytes() == original


class TestResolveTarget:
    """Tests for exact-then-substring resolution."""

    def test_exact_match(self, switcher: ContextSwitcher):
        assert switcher.resolve_target("alpha-test") == "alpha-test"

    def test_first_substring_match_wins(self, switcher: ContextSwitcher):
        assert switcher.resolve_target("alpha") == "alpha-sys"

    def test_exact_beats_earlier_substring(self, store: ConfigStore, history: HistoryFile, server_id: str):
        source = StaticProjectSource.of_ids(server_id, ["prod-eu", "prod"], description="System project")
        switcher = ContextSwitcher(store, ProjectDirectory(source), history)
        assert switcher.resolve_target("prod") == "prod"

    def test_no_match(self, switcher: ContextSwitcher):
        with pytest.raises(NoMatchError, match="zzz"):
            switcher.resolve_target("zzz")

    def test_filtered_out_projects_do_not_match(self, store: ConfigStore, history: HistoryFile, server_id: str):
        source = StaticProjectSource.of_ids(server_id, ["alpha-sys"], description="User project")
        switcher = ContextSwitcher(store, ProjectDirectory(source), history)
        with pytest.raises(NoMatchError):
            switcher.resolve_target("alpha")

    def test_directory_error_propagates(
        self, switcher: ContextSwitcher, source: StaticProjectSource, server_id: str
    ):
        source.set_failure(server_id, "HTTP 503")
        with pytest.raises(DirectoryError):
            switcher.resolve_target("alpha")

    def test_resolution_does_not_write(self, switcher: ContextSwitcher, config_path: Path):
        original = config_path.read_bytes()
        switcher.resolve_target("beta")
        assert config_path.read_bytes() == original


class TestNotImplemented:
    """Rename and delete fail before touching anything."""

    def test_rename(self, switcher: ContextSwitcher, config_path: Path, history: HistoryFile):
        original = config_path.read_bytes()
        with pytest.raises(NotImplementedError):
            switcher.rename("new", "alpha-sys")
        assert config_path.read_bytes() == original
        assert history.read() is None

    def test_delete(self, switcher: ContextSwitcher, config_path: Path, history: HistoryFile):
        original = config_path.read_bytes()
        with pytest.raises(NotImplementedError):
            switcher.delete(["alpha-sys", "beta-sys"])
        assert config_path.read_bytes() == original
        assert history.read() is None
