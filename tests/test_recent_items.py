"""Tests for the recent tags/projects store."""

import pytest

from smartplanner.constants import RECENT_PROJECTS_KEY, RECENT_TAGS_KEY
from smartplanner.models.capture import ParsedTask
from smartplanner.processing.recent_items import RecentItemsStore


@pytest.fixture
def recent():
    return RecentItemsStore(limit=3)


class TestRecentItemsStore:
    def test_most_recent_first(self, recent):
        recent.add("tags", "a")
        recent.add("tags", "b")
        assert recent.get("tags") == ["b", "a"]

    def test_re_adding_moves_to_front(self, recent):
        recent.add_many("tags", ["a", "b", "c"])
        recent.add("tags", "a")
        assert recent.get("tags") == ["a", "c", "b"]

    def test_bounded(self, recent):
        recent.add_many("tags", ["a", "b", "c", "d"])
        assert recent.get("tags") == ["d", "c", "b"]

    def test_blank_values_ignored(self, recent):
        recent.add("tags", "  ")
        assert recent.get("tags") == []

    def test_keys_are_independent(self, recent):
        recent.add("tags", "a")
        recent.add("projects", "p1")
        assert recent.get("tags") == ["a"]
        assert recent.get("projects") == ["p1"]

    def test_get_returns_copy(self, recent):
        recent.add("tags", "a")
        recent.get("tags").append("b")
        assert recent.get("tags") == ["a"]

    def test_remove_and_clear(self, recent):
        recent.add_many("tags", ["a", "b"])
        assert recent.remove("tags", "a")
        assert not recent.remove("tags", "a")

        recent.add("projects", "p1")
        recent.clear("tags")
        assert recent.get("tags") == []
        assert recent.get("projects") == ["p1"]

        recent.clear()
        assert recent.get("projects") == []

    def test_remember_task(self, recent):
        task = ParsedTask(text="Call Bob", tags=["sales", "calls"], project_id="proj-1")

        recent.remember_task(task)

        assert recent.recent_tags() == ["calls", "sales"]
        assert recent.recent_projects() == ["proj-1"]
        assert recent.get(RECENT_TAGS_KEY) == recent.recent_tags()
        assert recent.get(RECENT_PROJECTS_KEY) == ["proj-1"]

    def test_remember_task_without_project(self, recent):
        recent.remember_task(ParsedTask(text="Water plants"))
        assert recent.recent_projects() == []
