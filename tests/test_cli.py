"""Tests for the command-line interface."""
import pytest
from typer.testing import CliRunner

from peat.cli import app

pytestmark = pytest.mark.usefixtures("isolated_environment")

runner = CliRunner()


@pytest.fixture
def scripted_backend(monkeypatch, scripted_provider):
    """Route every backend call of the CLI to a ScriptedProvider."""
    def _make(*replies):
        provider, _ = scripted_provider(*replies)
        monkeypatch.setattr(
            "peat.tutor.session.create_provider_from_config",
            lambda config: provider,
        )
        return provider
    return _make


class TestCheck:
    """Tests for the check command."""

    def test_ollama_defaults(self):
        """Test that the default Ollama settings are valid."""
        result = runner.invoke(app, ["check"])

        assert result.exit_code == 0
        assert "ollama" in result.output
        assert "http://localhost:11434" in result.output

    def test_missing_key(self):
        """Test that a cloud backend without key fails."""
        result = runner.invoke(app, ["--backend", "gemini", "check"])

        assert result.exit_code == 1
        assert "API Key is missing" in result.output

    def test_key_from_option(self):
        """Test that --api-key applies to the selected backend."""
        result = runner.invoke(app, ["-b", "openai", "-k", "sk-test", "check"])

        assert result.exit_code == 0
        assert "SET" in result.output

    def test_invalid_url(self):
        """Test that a malformed Ollama URL fails."""
        result = runner.invoke(app, ["--url", "localhost", "check"])

        assert result.exit_code == 1
        assert "Invalid Ollama URL" in result.output

    def test_invalid_log_level(self):
        """Test that unknown log levels are rejected."""
        result = runner.invoke(app, ["--log-level", "loud", "check"])

        assert result.exit_code != 0

    def test_invalid_temperature_environment(self, monkeypatch):
        """Test that a bad PEAT_TEMPERATURE is reported without a traceback."""
        monkeypatch.setenv("PEAT_TEMPERATURE", "warm")

        result = runner.invoke(app, ["check"])

        assert result.exit_code == 2
        assert "PEAT_TEMPERATURE" in result.output
        assert not isinstance(result.exception, ValueError)


class TestAnalyze:
    """Tests for the analyze command."""

    def test_from_file(self, tmp_path, scripted_backend, sample_article, analysis_output):
        """Test analyzing an article file."""
        provider = scripted_backend(analysis_output)
        article = tmp_path / "article.txt"
        article.write_text(sample_article, encoding="utf-8")

        result = runner.invoke(app, ["analyze", str(article)])

        assert result.exit_code == 0
        assert "Bees build hives." in result.output
        assert "Why cooperative?" in result.output
        assert sample_article in provider.requests[0][0].content

    def test_from_stdin(self, scripted_backend, analysis_output):
        """Test analyzing an article piped on stdin."""
        scripted_backend(analysis_output)

        result = runner.invoke(app, ["analyze"], input="Bees build hives.\n")

        assert result.exit_code == 0
        assert "What risks?" in result.output

    def test_empty_article(self):
        """Test that an empty article is rejected before any backend call."""
        result = runner.invoke(app, ["analyze"], input="   \n")

        assert result.exit_code == 1
        assert "empty" in result.output

    def test_failed_analysis(self, scripted_backend):
        """Test that an unusable analysis exits with an error."""
        scripted_backend("no starters here")

        result = runner.invoke(app, ["--locale", "en", "analyze"], input="Bees.\n")

        assert result.exit_code == 1
        assert "Unable to parse conversation starters." in result.output


class TestChat:
    """Tests for the chat command."""

    def test_starter_shortcut_and_exit(self, tmp_path, scripted_backend, analysis_output):
        """Test picking a starter by number, then leaving."""
        provider = scripted_backend(analysis_output, "THINK: none\nRESPONSE: Good question!")
        article = tmp_path / "article.txt"
        article.write_text("Bees build hives.", encoding="utf-8")

        result = runner.invoke(app, ["chat", str(article)], input="2\nquit\n")

        assert result.exit_code == 0
        assert "Good question!" in result.output
        assert provider.requests[1][-1].content == "What risks?"
