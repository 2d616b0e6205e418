"""Tests for quick-capture type classification."""

from unittest.mock import patch

import pytest

from smartplanner.langgraph.nodes.capture_classifier import (
    classify,
    classify_capture,
    clean_idea,
    clean_idea_input,
    detect_capture_type,
)
from smartplanner.models.capture import CaptureType, Confidence


def assert_result(result, capture_type, confidence):
    assert result.suggested_type == capture_type
    assert result.confidence == confidence


class TestExplicitMarkers:
    """Explicit markers always win."""

    @pytest.mark.parametrize("text", [
        "IDEA: redesign onboarding",
        "idea: podcast about pricing",
        "#idea summer challenge",
        "#IDEA spent too long on this",
    ])
    def test_idea_markers(self, text):
        assert_result(classify(text), CaptureType.IDEA, Confidence.HIGH)

    def test_income_marker(self):
        assert_result(classify("#income $500 coaching call"), CaptureType.INCOME, Confidence.HIGH)
        assert_result(classify("Income: affiliate payout"), CaptureType.INCOME, Confidence.HIGH)

    def test_expense_marker(self):
        assert_result(classify("expense: new microphone"), CaptureType.EXPENSE, Confidence.HIGH)
        assert_result(classify("  #expense Canva"), CaptureType.EXPENSE, Confidence.HIGH)

    def test_marker_beats_time_pattern(self):
        """A marker wins even when the text looks like a task."""
        assert_result(classify("#idea call Bob tomorrow 2pm"), CaptureType.IDEA, Confidence.HIGH)


class TestCurrency:
    """Amounts at the start of the input."""

    def test_currency_without_context_defaults_to_expense(self):
        result = classify("$45.00 today")
        assert_result(result, CaptureType.EXPENSE, Confidence.MEDIUM)

    def test_currency_with_income_phrase(self):
        assert_result(classify("$1200 client paid invoice"), CaptureType.INCOME, Confidence.HIGH)

    def test_currency_with_expense_phrase(self):
        assert_result(classify("$30 spent on hosting"), CaptureType.EXPENSE, Confidence.HIGH)

    def test_ambiguous_currency_type_override(self):
        result = classify("$45.00 today", ambiguous_currency_type="income")
        assert_result(result, CaptureType.INCOME, Confidence.MEDIUM)

    def test_ambiguous_currency_type_from_config(self):
        with patch.dict(
            "smartplanner.langgraph.nodes.capture_classifier.CLASSIFIER_CONFIG",
            {"ambiguous_currency_type": "income"},
        ):
            assert classify("$99").suggested_type == CaptureType.INCOME

    def test_invalid_ambiguous_currency_type_falls_back_to_expense(self):
        result = classify("$99", ambiguous_currency_type="lottery")
        assert_result(result, CaptureType.EXPENSE, Confidence.MEDIUM)

    def test_currency_must_be_at_start(self):
        """An amount later in the text is not the currency rule."""
        result = classify("pay $45 to the designer")
        assert result.suggested_type == CaptureType.TASK


class TestPhraseRules:
    """Unanchored phrase searches, in precedence order."""

    def test_income_phrase(self):
        assert_result(classify("Sold 3 coaching packages"), CaptureType.INCOME, Confidence.MEDIUM)

    def test_expense_phrase(self):
        assert_result(classify("Bought new ring light"), CaptureType.EXPENSE, Confidence.MEDIUM)

    def test_income_checked_before_expense(self):
        result = classify("got paid but also paid the VA")
        assert result.suggested_type == CaptureType.INCOME

    def test_idea_phrase(self):
        assert_result(
            classify("What if we ran a summer challenge"), CaptureType.IDEA, Confidence.MEDIUM
        )

    def test_tags_are_not_phrases(self):
        """A #sales tag is not the income phrase "sale"."""
        result = classify("Call client tomorrow 2pm 30m !high #sales")
        assert_result(result, CaptureType.TASK, Confidence.HIGH)

    @pytest.mark.parametrize("text,capture_type", [
        ("Pay electricity bills", CaptureType.EXPENSE),
        ("Purchased new laptop", CaptureType.EXPENSE),
        ("Costs for the retreat venue", CaptureType.EXPENSE),
        ("Blog post ideas for spring", CaptureType.IDEA),
        ("Brainstorming launch names", CaptureType.IDEA),
        ("Two deposits cleared", CaptureType.INCOME),
    ])
    def test_inflected_phrases(self, text, capture_type):
        assert_result(classify(text), capture_type, Confidence.MEDIUM)

    def test_phrase_inside_longer_word(self):
        assert_result(classify("Feedback on the landing page"), CaptureType.TASK, Confidence.LOW)


class TestTaskRules:
    """Time/date patterns and action verbs."""

    @pytest.mark.parametrize("text", [
        "Dentist appointment friday",
        "Team sync next week",
        "Standup 9:30 am",
        "Record podcast 45m",
        "Renew domain !low",
        "Dentist TOMORROW",
    ])
    def test_time_date_patterns(self, text):
        assert_result(classify(text), CaptureType.TASK, Confidence.HIGH)

    @pytest.mark.parametrize("text", [
        "Write newsletter draft",
        "Emails to answer",
        "editing the launch video",
    ])
    def test_action_verb_first(self, text):
        assert_result(classify(text), CaptureType.TASK, Confidence.MEDIUM)

    def test_action_verb_must_be_first_word(self):
        assert_result(classify("newsletter write"), CaptureType.TASK, Confidence.LOW)

    @pytest.mark.parametrize("text", ["groceries", "", "   "])
    def test_fallback(self, text):
        result = classify(text)
        assert_result(result, CaptureType.TASK, Confidence.LOW)
        assert result.reason == "Default"


class TestHelpers:
    """Convenience wrappers and LangGraph nodes."""

    def test_detect_capture_type(self):
        assert detect_capture_type("#idea workshop") == CaptureType.IDEA

    @pytest.mark.parametrize("text,expected", [
        ("#idea  podcast series", "podcast series"),
        ("Idea: quiz funnel", "quiz funnel"),
        ("plain idea text", "plain idea text"),
    ])
    def test_clean_idea_input(self, text, expected):
        assert clean_idea_input(text) == expected

    def test_classify_capture_node(self):
        result = classify_capture({"input_text": "$45.00 today", "error": None})
        assert result["suggested_type"] == "expense"
        assert result["confidence"] == "medium"
        assert result["reason"]

    def test_nodes_skip_on_error(self):
        state = {"input_text": "#idea x", "error": "earlier failure"}
        assert classify_capture(state) == {}
        assert clean_idea(state) == {}

    def test_clean_idea_node(self):
        assert clean_idea({"input_text": "#idea x", "error": None}) == {"idea_content": "x"}
