"""Tests for three-pass copy generation."""

import os
from unittest.mock import patch

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from smartplanner.exceptions import GenerationError
from smartplanner.langgraph.nodes.copy_generator import (
    clamp_temperature,
    generate_copy,
    generate_copy_text,
)
from smartplanner.langgraph.workflow import create_initial_generation_state
from smartplanner.models.feedback import AdaptiveParams


@pytest.fixture
def generation_state():
    """Create a generation state ready for the generator node."""
    state = create_initial_generation_state("user-1", "promo_email")
    state["adaptive_params"] = AdaptiveParams(temperature_adjustment=0.2)
    state["system_prompt"] = "You are an expert copywriter."
    state["user_prompt"] = "Write a promotional email."
    return state


class TestClampTemperature:
    @pytest.mark.parametrize("value,expected", [
        (0.8, 0.8),
        (-0.1, 0.0),
        (2.5, 2.0),
        (0.7 + 0.2, 0.9),
    ])
    def test_clamp(self, value, expected):
        assert clamp_temperature(value) == expected


class TestGenerateCopyText:
    @patch("smartplanner.langgraph.nodes.copy_generator._call_model")
    def test_three_passes(self, mock_call):
        mock_call.side_effect = [("draft copy", 100), ("critique notes", 40), ("final copy", 120)]

        result = generate_copy_text(
            "system", "user", voice_samples=["my sample"], temperature_adjustment=0.1
        )

        assert result["generated_copy"] == "final copy"
        assert result["tokens_used"] == 260
        assert result["generation_time_ms"] >= 0
        assert mock_call.call_count == 3

        draft_call, critique_call, rewrite_call = mock_call.call_args_list
        assert draft_call.args == ("system", "user", 0.9)
        assert "draft copy" in critique_call.args[1]
        assert "my sample" in critique_call.args[1]
        assert critique_call.args[2] == 0.3
        assert "critique notes" in rewrite_call.args[1]
        assert rewrite_call.args[0] == "system"
        assert rewrite_call.args[2] == 0.8

    @patch("smartplanner.langgraph.nodes.copy_generator._call_model")
    def test_missing_voice_samples(self, mock_call):
        mock_call.side_effect = [("draft", 1), ("critique", 1), ("final", 1)]

        generate_copy_text("system", "user")

        assert "None provided" in mock_call.call_args_list[1].args[1]

    @patch("smartplanner.langgraph.nodes.copy_generator._call_model")
    def test_api_failure_raises_generation_error(self, mock_call):
        mock_call.side_effect = RuntimeError("rate limited")

        with pytest.raises(GenerationError, match="rate limited"):
            generate_copy_text("system", "user")

    @patch("smartplanner.langgraph.nodes.copy_generator._call_model")
    def test_empty_result_raises_generation_error(self, mock_call):
        mock_call.side_effect = [("draft", 1), ("critique", 1), ("   ", 1)]

        with pytest.raises(GenerationError):
            generate_copy_text("system", "user")

    @patch("smartplanner.langgraph.nodes.copy_generator.ChatOpenAI")
    def test_chat_model_chain(self, mock_llm):
        mock_llm.side_effect = lambda **kwargs: FakeListChatModel(responses=[f"reply at {kwargs['temperature']}"])

        result = generate_copy_text("system", "user")

        assert result["generated_copy"] == "reply at 0.7"
        temperatures = [call.kwargs["temperature"] for call in mock_llm.call_args_list]
        assert temperatures == [0.8, 0.3, 0.7]


class TestGenerateCopyNode:
    def test_skips_on_error(self, generation_state):
        generation_state["error"] = "earlier failure"
        assert generate_copy(generation_state) == {}

    def test_requires_api_key(self, generation_state, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        result = generate_copy(generation_state)
        assert result["error"] == "OPENAI_API_KEY environment variable not set"

    @patch("smartplanner.langgraph.nodes.copy_generator._call_model")
    def test_applies_adaptive_temperature(self, mock_call, generation_state, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "test-key")
        mock_call.side_effect = [("draft", 1), ("critique", 1), ("final", 1)]

        result = generate_copy(generation_state)

        assert result["generated_copy"] == "final"
        assert mock_call.call_args_list[0].args[2] == 1.0
        assert mock_call.call_args_list[2].args[2] == 0.9

    @patch("smartplanner.langgraph.nodes.copy_generator._call_model")
    def test_failure_becomes_error_state(self, mock_call, generation_state, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "test-key")
        mock_call.side_effect = RuntimeError("boom")

        result = generate_copy(generation_state)

        assert "boom" in result["error"]
        assert result["generated_copy"] is None


@pytest.mark.skipif(not os.getenv("OPENAI_API_KEY"), reason="OpenAI API key not set")
class TestGenerateCopyLive:
    """Runs against the real API."""

    def test_generates_copy(self, generation_state):
        result = generate_copy(generation_state)

        assert "error" not in result
        assert result["generated_copy"]
        assert result["tokens_used"] > 0
