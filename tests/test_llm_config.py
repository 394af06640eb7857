"""Tests for environment settings."""

from underscoreai.llm import config


class TestTimeout:

    def test_default_when_unset(self):
        assert config._parse_timeout(None) == 30.0
        assert config._parse_timeout("  ") == 30.0

    def test_reads_seconds(self):
        assert config._parse_timeout("12.5") == 12.5

    def test_not_a_number_ignored(self, capsys):
        assert config._parse_timeout("abc") == 30.0
        assert "must be a number" in capsys.readouterr().err

    def test_non_positive_ignored(self, capsys):
        assert config._parse_timeout("0") == 30.0
        assert "must be > 0" in capsys.readouterr().err


class TestEnvOverrides:

    def test_reads_underscoreai_variables(self, monkeypatch):
        monkeypatch.setenv("UNDERSCOREAI_HF_API_KEY", "hf_env")
        monkeypatch.setenv("UNDERSCOREAI_PROMPT_CONTEXT_PATH", "/env/ctx")
        monkeypatch.setenv("UNDERSCOREAI_DEBUG", "true")

        assert config.env_overrides() == {
            "hf_api_key": "hf_env",
            "prompt_context_path": "/env/ctx",
            "debug": True,
        }

    def test_unset_debug_is_none(self, monkeypatch):
        monkeypatch.delenv("UNDERSCOREAI_DEBUG", raising=False)
        assert config.env_overrides()["debug"] is None
