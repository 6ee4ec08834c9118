"""
Settings tests.
"""

import pytest
from pydantic import ValidationError

from codegraph_fragments.config import FragmentSettings, get_settings


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment and .env file"""
    monkeypatch.chdir(tmp_path)
    for name in ("LOG_LEVEL", "STRUCTURED_LOGS", "STDIN_NOTICE_DELAY", "STDIN_READ_LIMIT"):
        monkeypatch.delenv(f"CODEGRAPH_FRAGMENTS_{name}", raising=False)
    return monkeypatch


class TestFragmentSettings:
    def test_defaults(self, clean_env):
        settings = FragmentSettings()

        assert settings.log_level == "WARNING"
        assert settings.structured_logs is False
        assert settings.stdin_notice_delay == 0.5
        assert settings.stdin_read_limit == 1_000_000

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("CODEGRAPH_FRAGMENTS_LOG_LEVEL", "DEBUG")
        clean_env.setenv("CODEGRAPH_FRAGMENTS_STRUCTURED_LOGS", "true")
        clean_env.setenv("CODEGRAPH_FRAGMENTS_STDIN_NOTICE_DELAY", "2")

        settings = FragmentSettings()

        assert settings.log_level == "DEBUG"
        assert settings.structured_logs is True
        assert settings.stdin_notice_delay == 2.0

    def test_env_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("CODEGRAPH_FRAGMENTS_STDIN_READ_LIMIT=64\n", encoding="utf-8")

        assert FragmentSettings().stdin_read_limit == 64

    def test_rejects_negative_delay(self, clean_env):
        clean_env.setenv("CODEGRAPH_FRAGMENTS_STDIN_NOTICE_DELAY", "-1")

        with pytest.raises(ValidationError):
            FragmentSettings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
