"""Tests für das Konfigurationssystem."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import (
    DEFAULT_DAY_GRID,
    SCHOOL_DAYS,
    SUBJECT_METADATA,
    default_app_config,
)
from config.manager import ConfigManager
from config.schema import AppConfig, LoggingConfig, SchedulingOptions, TeacherDefaults
from models.time_period import DayOfWeek


def make_manager(tmp_path: Path) -> ConfigManager:
    mgr = ConfigManager()
    mgr.CONFIG_DIR = tmp_path
    mgr.DEFAULT_CONFIG = tmp_path / "school_config.yaml"
    return mgr


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_options(self):
        opts = SchedulingOptions()
        assert opts.enforce_hard_constraints
        assert opts.respect_soft_constraints
        assert not opts.prioritize_morning_classes
        assert not opts.optimize_teacher_workload
        assert not opts.minimize_room_changes

    def test_default_app_config(self):
        config = default_app_config()
        assert config == AppConfig()
        assert config.teacher_defaults.max_classes_per_day == 6
        assert config.teacher_defaults.max_classes_per_week == 30
        assert config.logging.level == "INFO"

    def test_day_grid(self):
        lessons = [row for row in DEFAULT_DAY_GRID if not row[3]]
        breaks = [row for row in DEFAULT_DAY_GRID if row[3]]
        assert len(lessons) == 6
        assert len(breaks) == 1
        assert SCHOOL_DAYS == [
            DayOfWeek.MONDAY, DayOfWeek.TUESDAY, DayOfWeek.WEDNESDAY,
            DayOfWeek.THURSDAY, DayOfWeek.FRIDAY,
        ]

    def test_subject_metadata_fits_week(self):
        """Die Wochenstunden einer Klasse passen in das Standard-Raster."""
        weekly = sum(hours for _, hours, _ in SUBJECT_METADATA.values())
        lessons = sum(1 for row in DEFAULT_DAY_GRID if not row[3])
        assert weekly <= lessons * len(SCHOOL_DAYS)
        codes = [code for code, _, _ in SUBJECT_METADATA.values()]
        assert len(set(codes)) == len(codes)


class TestSchemaValidation:
    def test_log_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="verbose")

    @pytest.mark.parametrize("field,value", [
        ("max_classes_per_day", 0),
        ("max_classes_per_day", 13),
        ("max_classes_per_week", 61),
    ])
    def test_teacher_default_bounds(self, field, value):
        with pytest.raises(ValidationError):
            TeacherDefaults(**{field: value})


# ─── CONFIG-MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern und wieder laden ergibt identisches Objekt."""
        mgr = make_manager(tmp_path)
        config = default_app_config().model_copy(update={
            "school_name": "Gesamtschule Nord",
            "options": SchedulingOptions(prioritize_morning_classes=True),
        })
        mgr.save(config)
        assert mgr.load() == config

    def test_yaml_has_comments(self, tmp_path: Path):
        mgr = make_manager(tmp_path)
        mgr.save(default_app_config())
        text = mgr.DEFAULT_CONFIG.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "─── Generierung ───" in text
        assert "ohne Wirkung" in text

    def test_first_run_check(self, tmp_path: Path):
        mgr = make_manager(tmp_path)
        assert mgr.first_run_check()
        mgr.save(default_app_config())
        assert not mgr.first_run_check()

    def test_load_nonexistent_raises(self, tmp_path: Path):
        mgr = ConfigManager()
        with pytest.raises(FileNotFoundError):
            mgr.load(tmp_path / "not_there.yaml")

    def test_load_or_default_without_file(self, tmp_path: Path):
        mgr = make_manager(tmp_path)
        assert mgr.load_or_default() == default_app_config()

    def test_invalid_values_raise_value_error(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text(
            "school_name: Test\nteacher_defaults:\n  max_classes_per_day: 99\n",
            encoding="utf-8",
        )
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager().load(path)

    def test_partial_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "partial.yaml"
        path.write_text("options:\n  enforce_hard_constraints: false\n", encoding="utf-8")
        config = ConfigManager().load(path)
        assert not config.options.enforce_hard_constraints
        assert config.options.respect_soft_constraints
        assert config.school_name == "Muster-Schule"
