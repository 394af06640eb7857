"""Tests for answer extraction and the end-to-end suggestion flow."""

import pytest
from unittest.mock import MagicMock

from underscoreai import agent
from underscoreai.config_file import Configuration
from underscoreai.errors import ResponseFormatError


class TestExtractAnswer:
    """Picks the answer line for the user's prompt out of the echo."""

    def test_scenario_list_files(self):
        generated = "...\nP: list files\nA: ls -la\n..."
        assert agent.extract_answer(generated, "list files") == "ls -la"

    def test_skips_context_examples(self):
        generated = (
            "P: show current directory\nA: pwd\n...\n"
            "P: count lines in a.txt\nA: wc -l a.txt\n...\n"
            "P: list files\nA: ls -la\n...\nP: something else"
        )
        assert agent.extract_answer(generated, "list files") == "ls -la"

    def test_answer_without_prefix_kept(self):
        generated = "...\nP: list files\nls -la\n..."
        assert agent.extract_answer(generated, "list files") == "ls -la"

    def test_only_first_answer_line_returned(self):
        generated = "ctx...\nP: list files\nA: ls -la\nP: more\nA: junk"
        assert agent.extract_answer(generated, "list files") == "ls -la"

    def test_prompt_missing_raises(self):
        generated = "...\nP: something else\nA: ls\n..."
        with pytest.raises(ResponseFormatError, match="not found"):
            agent.extract_answer(generated, "list files")

    def test_no_answer_line_raises(self):
        with pytest.raises(ResponseFormatError, match="no answer line"):
            agent.extract_answer("...\nP: list files\n...", "list files")

    def test_without_prompt_uses_second_to_last_segment(self):
        generated = "...\nP: pwd\nA: pwd\n...\nP: list files\nA: ls -la\n..."
        assert agent.extract_answer(generated) == "ls -la"

    def test_without_prompt_needs_delimiter(self):
        with pytest.raises(ResponseFormatError, match="delimiter"):
            agent.extract_answer("P: list files\nA: ls -la")


class TestSuggestCommand:

    @pytest.fixture
    def cfg(self, tmp_path):
        ctx = tmp_path / "prompt_context"
        ctx.write_text("P: show current directory\nA: pwd\n...\n")
        return Configuration(hf_api_key="hf_test", prompt_context_path=str(ctx))

    def test_composes_calls_and_extracts(self, cfg):
        client = MagicMock()
        client.generate.return_value = (
            "P: show current directory\nA: pwd\n...\nP: list files\nA: ls -la\n..."
        )

        assert agent.suggest_command(cfg, "list files", client=client) == "ls -la"
        client.generate.assert_called_once_with(
            "P: show current directory\nA: pwd\n...\nP: list files\nA:"
        )

    def test_bad_generation_raises(self, cfg):
        client = MagicMock()
        client.generate.return_value = "the model rambled"

        with pytest.raises(ResponseFormatError):
            agent.suggest_command(cfg, "list files", client=client)
