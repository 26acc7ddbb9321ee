"""
Tests for Settings and the language table.
"""

import pytest
from pydantic import ValidationError

from nbstate.config import DEFAULT_MARKDOWN_EXTENSIONS, LANGUAGES, Settings


class TestSettingsFromEnv:
    """Tests for Settings.from_env()."""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.comment_marker == "#"
        assert settings.markdown_extensions == DEFAULT_MARKDOWN_EXTENSIONS
        assert settings.log_level == "WARNING"

    def test_comment_marker(self):
        assert Settings.from_env({"NBSTATE_COMMENT_MARKER": "//"}).comment_marker == "//"

    def test_markdown_extensions(self):
        settings = Settings.from_env({"NBSTATE_MARKDOWN_EXTENSIONS": "tables, fenced_code,"})
        assert settings.markdown_extensions == ("tables", "fenced_code")

    def test_empty_extensions(self):
        assert Settings.from_env({"NBSTATE_MARKDOWN_EXTENSIONS": ""}).markdown_extensions == ()

    def test_log_level_uppercased(self):
        assert Settings.from_env({"NBSTATE_LOG_LEVEL": "debug"}).log_level == "DEBUG"

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("NBSTATE_COMMENT_MARKER", ";")
        assert Settings.from_env().comment_marker == ";"

    def test_empty_marker_rejected(self):
        with pytest.raises(ValidationError):
            Settings(comment_marker="")


class TestLanguages:
    def test_python_entry(self):
        info = LANGUAGES["py"]
        assert info.display_name == "Python"
        assert info.editor_mode == "python"
