"""Tests for the analysis orchestrator."""
import pytest

from peat.errors import ConfigurationError
from peat.llm.models import MessageRole
from peat.tutor import AnalysisOrchestrator, AnalysisResult, get_messages

pytestmark = [pytest.mark.asyncio, pytest.mark.usefixtures("isolated_environment")]


class TestAnalysisOrchestrator:
    """Tests for AnalysisOrchestrator.analyze."""

    async def test_success(self, scripted_provider, sample_article, analysis_output):
        """Test that a well-formed answer becomes a usable result."""
        provider, factory = scripted_provider(analysis_output)
        orchestrator = AnalysisOrchestrator(factory)

        result = await orchestrator.analyze(sample_article)

        assert result == AnalysisResult(
            summary="Bees build hives.",
            starters=["Why cooperative?", "What risks?"],
        )
        assert result.is_usable

    async def test_single_human_request(self, scripted_provider, sample_article, analysis_output):
        """Test that the analysis is one human message carrying the article."""
        provider, factory = scripted_provider(analysis_output)

        await AnalysisOrchestrator(factory).analyze(sample_article)

        assert len(provider.requests) == 1
        (message,) = provider.requests[0]
        assert message.role == MessageRole.HUMAN
        assert sample_article in message.content
        assert provider.close_count == 1

    async def test_missing_starters(self, scripted_provider):
        """Test that an answer without starters becomes the failure sentinel."""
        _, factory = scripted_provider("SUMMARY: Only a summary.")

        result = await AnalysisOrchestrator(factory).analyze("Bees.")

        assert result.summary == "分析失敗: 無法解析對話啟動器。"
        assert result.starters == []
        assert not result.is_usable

    async def test_missing_summary(self, scripted_provider):
        """Test that a missing summary still gives a usable result."""
        _, factory = scripted_provider("STARTER 1: What do you think?")

        result = await AnalysisOrchestrator(factory).analyze("Bees.")

        assert result.summary == "抱歉，無法生成摘要。"
        assert result.is_usable

    async def test_backend_failure(self, scripted_provider):
        """Test that a failed call becomes the failure sentinel."""
        _, factory = scripted_provider(ConnectionError("connection refused"))
        messages = get_messages("en")

        result = await AnalysisOrchestrator(factory, messages=messages).analyze("Bees.")

        assert result == AnalysisResult(summary="Analysis failed: connection refused", starters=[])

    async def test_configuration_failure(self):
        """Test that a settings problem becomes the failure sentinel."""
        def factory():
            raise ConfigurationError("Google API Key is missing.")

        result = await AnalysisOrchestrator(factory).analyze("Bees.")

        assert result.summary == "分析失敗: Google API Key is missing."
        assert not result.is_usable

    async def test_empty_article(self, scripted_provider, analysis_output):
        """Test that an empty article is still sent to the backend."""
        provider, factory = scripted_provider(analysis_output)

        result = await AnalysisOrchestrator(factory).analyze("")

        assert result.is_usable
        assert len(provider.requests) == 1
