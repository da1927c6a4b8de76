"""
tests/unit/test_settings.py — Unit tests for config/settings.py.

These tests validate the Pydantic Settings schema with no filesystem or
environment dependencies beyond tmp_path/monkeypatch.

Run: pytest tests/unit/test_settings.py -v
"""

import sys

import pytest

# conftest.py adds project root to sys.path
from config.settings import Settings, load_settings

# ---------------------------------------------------------------------------
# Defaults and validation
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_report_defaults(self):
        s = Settings()
        assert s.CHECK_COLUMN_WIDTH == 50
        assert s.CHECK_OUTPUT == "stdout"
        assert s.CHECK_LOG_RESULTS is False
        assert s.CHECK_LOG_LEVEL == "WARNING"

    def test_kwargs_only_no_environ_bleed(self, monkeypatch):
        monkeypatch.setenv("CHECK_COLUMN_WIDTH", "80")
        assert Settings().CHECK_COLUMN_WIDTH == 50


class TestValidation:
    def test_invalid_output_raises(self):
        with pytest.raises(Exception):  # pydantic ValidationError
            Settings(CHECK_OUTPUT="file")

    def test_invalid_log_level_raises(self):
        with pytest.raises(Exception):
            Settings(CHECK_LOG_LEVEL="TRACE")

    def test_width_must_be_positive(self):
        with pytest.raises(ValueError, match="CHECK_COLUMN_WIDTH"):
            Settings(CHECK_COLUMN_WIDTH=0)

    def test_output_stripped_of_whitespace(self):
        """GNU make leaves trailing whitespace after `include .env`."""
        assert Settings(CHECK_OUTPUT="stderr  ").CHECK_OUTPUT == "stderr"

    def test_log_level_normalised(self):
        assert Settings(CHECK_LOG_LEVEL=" debug ").CHECK_LOG_LEVEL == "DEBUG"

    def test_critical_log_level_accepted(self):
        assert Settings(CHECK_LOG_LEVEL="critical").CHECK_LOG_LEVEL == "CRITICAL"

    def test_bool_parses_true_string(self):
        assert Settings(CHECK_LOG_RESULTS="true").CHECK_LOG_RESULTS is True


class TestOutputStream:
    def test_stdout(self):
        assert Settings().output_stream is sys.stdout

    def test_stderr(self):
        assert Settings(CHECK_OUTPUT="stderr").output_stream is sys.stderr


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------


class TestLoadSettings:
    def test_reads_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CHECK_COLUMN_WIDTH", raising=False)
        monkeypatch.delenv("CHECK_OUTPUT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# report layout\n"
            "CHECK_COLUMN_WIDTH=60\n"
            "\n"
            "CHECK_OUTPUT=stderr   # stdout | stderr\n"
            "UNRELATED=ignored\n",
            encoding="utf-8",
        )

        cfg = load_settings(str(env_file))

        assert cfg.CHECK_COLUMN_WIDTH == 60
        assert cfg.CHECK_OUTPUT == "stderr"

    def test_environ_wins_over_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("CHECK_COLUMN_WIDTH=60\n", encoding="utf-8")
        monkeypatch.setenv("CHECK_COLUMN_WIDTH", "72")

        assert load_settings(str(env_file)).CHECK_COLUMN_WIDTH == 72

    def test_missing_env_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CHECK_COLUMN_WIDTH", raising=False)
        assert load_settings(str(tmp_path / "missing.env")).CHECK_COLUMN_WIDTH == 50

    def test_unprefixed_log_level_in_environ_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "TRACE")
        monkeypatch.delenv("CHECK_LOG_LEVEL", raising=False)
        assert load_settings(str(tmp_path / "missing.env")).CHECK_LOG_LEVEL == "WARNING"

    def test_invalid_value_in_env_file_raises(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CHECK_OUTPUT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("CHECK_OUTPUT=file\n", encoding="utf-8")

        with pytest.raises(Exception):
            load_settings(str(env_file))
