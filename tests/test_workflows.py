"""Tests for the capture and generation workflows."""

from datetime import date, datetime, timedelta

import pytest

from smartplanner.constants import RECENT_TAGS_KEY
from smartplanner.langgraph.workflow import (
    create_initial_capture_state,
    create_initial_generation_state,
    get_capture_workflow,
    get_generation_workflow,
    process_capture,
    process_generation,
    route_after_classification,
)
from smartplanner.models.brand import BrandProfile, Product
from smartplanner.models.feedback import AdaptiveParams, RatedGeneration
from smartplanner.processing.generation_store import InMemoryGenerationStore
from smartplanner.processing.recent_items import RecentItemsStore

TODAY = date(2024, 6, 5)
USER = "user-1"


class BrokenReader:
    """Ratings log that always fails."""

    def fetch_rated_generations(self, user_id, content_types, limit):
        raise TimeoutError("ratings backend timed out")


@pytest.fixture
def formal_feedback_store():
    """Log where the user keeps saying welcome emails are too formal."""
    store = InMemoryGenerationStore()
    now = datetime(2024, 6, 1, 12, 0, 0)
    for index, rating in enumerate([5, 4, 6, 5, 6]):
        store.add_generation(RatedGeneration(
            content_type="welcome_email_1",
            rating=rating,
            feedback_tags=["too_formal"] if index < 4 else [],
            created_at=now - timedelta(hours=index),
            user_id=USER,
        ))
    return store


class TestCaptureWorkflow:
    def test_workflow_compiles(self):
        assert get_capture_workflow() is not None

    def test_task_capture(self):
        result = process_capture("Call Bob tomorrow 2pm 30m !high #sales", today=TODAY)

        assert result["suggested_type"] == "task"
        assert result["confidence"] == "high"
        assert result["parsed_task"]["text"] == "Call Bob"
        assert result["parsed_task"]["date"] == "2024-06-06"
        assert result["task_payload"]["priority"] == "high"
        assert result["task_payload"]["estimated_minutes"] == 30
        assert result["idea_content"] is None
        assert result["error"] is None

    def test_task_capture_remembers_tags(self):
        recent = RecentItemsStore()
        recent.add_many(RECENT_TAGS_KEY, ["ops"])

        process_capture("Email Ana friday #sales #q3", today=TODAY, recent_items=recent)
        process_capture("#idea no tags remembered #music", recent_items=recent)

        assert recent.recent_tags() == ["q3", "sales", "ops"]

    def test_idea_capture(self):
        result = process_capture("#idea podcast about pricing")

        assert result["suggested_type"] == "idea"
        assert result["idea_content"] == "podcast about pricing"
        assert result["parsed_task"] is None

    def test_money_capture_ends_after_classification(self):
        result = process_capture("$45.00 today")

        assert result["suggested_type"] == "expense"
        assert result["confidence"] == "medium"
        assert result["parsed_task"] is None
        assert result["idea_content"] is None

    def test_routing(self):
        state = create_initial_capture_state("x")
        assert route_after_classification({**state, "suggested_type": "task"}) == "extract_task_fields"
        assert route_after_classification({**state, "suggested_type": "idea"}) == "clean_idea"
        assert route_after_classification({**state, "suggested_type": "income"}) == "end"
        assert route_after_classification({**state, "error": "boom"}) == "end"


class TestGenerationWorkflow:
    def test_workflow_compiles(self):
        assert get_generation_workflow(use_mock=True) is not None

    def test_initial_state(self):
        state = create_initial_generation_state(USER, "promo_email")
        assert state["user_id"] == USER
        assert state["ratings_reader"] is None
        assert state["error"] is None

    def test_mock_generation_without_history(self):
        result = process_generation(USER, "promo_email", use_mock=True)

        assert result["error"] is None
        assert result["adaptive_params"] == AdaptiveParams.neutral()
        assert "ADAPTIVE LEARNING ADJUSTMENTS" not in result["system_prompt"]
        assert result["generated_copy"].startswith("Subject:")
        assert result["ai_score"] <= 1
        assert result["ai_assessment"] == "excellent"
        assert len(result["ai_warnings"]) == len(result["ai_suggestions"])

    def test_mock_generation_learns_from_feedback(self, formal_feedback_store):
        result = process_generation(
            USER,
            "welcome_email_1",
            ratings_reader=formal_feedback_store,
            brand_profile=BrandProfile(business_name="Sunrise Pottery"),
            product=Product(product_name="Wheel Basics", product_type="course"),
            use_mock=True,
        )

        params = result["adaptive_params"]
        assert result["error"] is None
        assert params.tone_shift.formality_shift == -1
        assert "too_formal" in result["feedback_pattern"].common_issues
        assert "ADAPTIVE LEARNING ADJUSTMENTS" in result["system_prompt"]
        assert "Formality: -1 (more casual)" in result["system_prompt"]
        assert "Previously rated" in result["system_prompt"]
        assert "Wheel Basics" in result["user_prompt"]
        assert "Wheel Basics" in result["generated_copy"]
        assert result["copy_controls"].length == "short"

    def test_broken_reader_does_not_fail_generation(self):
        result = process_generation(
            USER, "promo_email", ratings_reader=BrokenReader(), use_mock=True
        )

        assert result["error"] is None
        assert result["adaptive_params"] == AdaptiveParams.neutral()
        assert result["past_feedback"] == []
        assert result["generated_copy"]

    def test_unknown_content_type(self):
        result = process_generation(USER, "press_release", use_mock=True)

        assert result["error"] is None
        assert "Write compelling press release copy." in result["user_prompt"]

    def test_missing_api_key_stops_before_scoring(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        result = process_generation(USER, "promo_email")

        assert result["error"] == "OPENAI_API_KEY environment variable not set"
        assert result["generated_copy"] is None
        assert result["ai_score"] is None
