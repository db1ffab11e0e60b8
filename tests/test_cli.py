"""Smoke-Tests für die Kommandozeile (click CliRunner)."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from data.store import TimetableStore
from main import cli


@pytest.fixture
def runner(tmp_path: Path, monkeypatch) -> CliRunner:
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def _demo(runner: CliRunner, data: str = "store.json"):
    return runner.invoke(cli, ["demo", "--data", data, "--no-validate"])


class TestConfigCommands:
    def test_init_and_show(self, runner, tmp_path):
        result = runner.invoke(cli, ["config", "init"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "config" / "school_config.yaml").exists()

        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 0, result.output
        assert "Muster-Schule" in result.output

    def test_init_does_not_overwrite(self, runner, tmp_path):
        runner.invoke(cli, ["config", "init"])
        path = tmp_path / "config" / "school_config.yaml"
        path.write_text("school_name: Eigene Schule\n", encoding="utf-8")
        result = runner.invoke(cli, ["config", "init"])
        assert result.exit_code == 0
        assert "existiert bereits" in result.output
        assert "Eigene Schule" in path.read_text(encoding="utf-8")


class TestWorkflow:
    def test_demo_creates_store(self, runner, tmp_path):
        result = _demo(runner)
        assert result.exit_code == 0, result.output
        store = TimetableStore.load_json(tmp_path / "store.json")
        assert len(store.catalog.classes) == 6
        assert store.entries == []

    def test_validate_demo(self, runner):
        _demo(runner)
        result = runner.invoke(cli, ["validate", "--data", "store.json"])
        assert result.exit_code == 0, result.output

    def test_generate_persists(self, runner, tmp_path):
        _demo(runner)
        result = runner.invoke(cli, ["generate", "--data", "store.json", "--morning"])
        assert result.exit_code == 0, result.output
        store = TimetableStore.load_json(tmp_path / "store.json")
        assert store.entries
        assert store.last_generated is not None

    def test_generate_dry_run(self, runner, tmp_path):
        _demo(runner)
        result = runner.invoke(
            cli, ["generate", "--data", "store.json", "--dry-run", "--output", "result.json"]
        )
        assert result.exit_code == 0, result.output
        assert TimetableStore.load_json(tmp_path / "store.json").entries == []
        assert (tmp_path / "result.json").exists()

    def test_generate_without_store(self, runner):
        result = runner.invoke(cli, ["generate", "--data", "fehlt.json"])
        assert result.exit_code == 1
        assert "Kein Datenbestand" in result.output

    def test_timetable_and_workload(self, runner):
        _demo(runner)
        runner.invoke(cli, ["generate", "--data", "store.json"])

        result = runner.invoke(cli, ["timetable", "--data", "store.json", "--class-id", "1"])
        assert result.exit_code == 0, result.output
        assert "Klasse 5a" in result.output

        result = runner.invoke(cli, ["timetable", "--data", "store.json", "--teacher-id", "1"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(cli, ["workload", "--data", "store.json"])
        assert result.exit_code == 0, result.output

    def test_timetable_needs_exactly_one_target(self, runner):
        _demo(runner)
        result = runner.invoke(cli, ["timetable", "--data", "store.json"])
        assert result.exit_code == 1
