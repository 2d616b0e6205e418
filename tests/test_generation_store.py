"""Tests for the in-memory generation log."""

from datetime import datetime, timedelta

import pytest

from smartplanner.exceptions import RatingsFetchError, ValidationError
from smartplanner.processing.generation_store import InMemoryGenerationStore


@pytest.fixture
def store():
    """Create a GenerationStore instance for testing."""
    return InMemoryGenerationStore()


@pytest.fixture
def populated_store(store):
    """Store with three generations for one user, two of them rated."""
    base = datetime(2024, 6, 1, 9, 0, 0)
    first = store.record_generation("user-1", "welcome_email_1", "copy one", created_at=base)
    second = store.record_generation(
        "user-1", "promo_email", "copy two", created_at=base + timedelta(hours=1)
    )
    store.record_generation(
        "user-1", "welcome_email_2", "copy three", created_at=base + timedelta(hours=2)
    )
    store.rate_generation("user-1", first.generation_id, 5, ["too_formal", "too_long"])
    store.rate_generation("user-1", second.generation_id, 9, ["great_hook"], "Loved the opener")
    return store


class TestGenerationStore:
    """Test suite for InMemoryGenerationStore."""

    def test_record_generation(self, store):
        generation = store.record_generation("user-1", "promo_email", "Hello")

        assert generation.generation_id
        assert generation.rating is None
        assert not generation.is_rated
        assert store.get_generation("user-1", generation.generation_id) is generation
        assert store.get_generation_count("user-1") == 1

    def test_rate_generation(self, store):
        generation = store.record_generation("user-1", "promo_email")

        rated = store.rate_generation("user-1", generation.generation_id, 8, ["clear_cta"])

        assert rated.rating == 8
        assert rated.tags == ["clear_cta"]
        assert rated.is_rated

    @pytest.mark.parametrize("rating", [-1, 10.5, 11])
    def test_rate_generation_rejects_out_of_range(self, store, rating):
        generation = store.record_generation("user-1", "promo_email")
        with pytest.raises(ValidationError):
            store.rate_generation("user-1", generation.generation_id, rating)

    def test_rate_generation_rejects_unknown_tag(self, store):
        generation = store.record_generation("user-1", "promo_email")
        with pytest.raises(ValidationError, match="not_a_tag"):
            store.rate_generation("user-1", generation.generation_id, 5, ["not_a_tag"])

    def test_rate_unknown_generation(self, store):
        with pytest.raises(ValidationError):
            store.rate_generation("user-1", "missing", 5)

    def test_generations_are_newest_first(self, populated_store):
        generations = populated_store.get_generations("user-1")
        assert [g.content_type for g in generations] == [
            "welcome_email_2",
            "promo_email",
            "welcome_email_1",
        ]

    def test_fetch_rated_generations(self, populated_store):
        rated = populated_store.fetch_rated_generations("user-1", None, 10)
        assert [g.content_type for g in rated] == ["promo_email", "welcome_email_1"]

    def test_fetch_rated_generations_filters_and_limits(self, populated_store):
        rated = populated_store.fetch_rated_generations("user-1", ["welcome_email_1"], 10)
        assert [g.rating for g in rated] == [5]
        assert len(populated_store.fetch_rated_generations("user-1", None, 1)) == 1

    def test_user_isolation(self, populated_store):
        assert populated_store.fetch_rated_generations("user-2", None, 10) == []
        assert populated_store.get_generation_count("user-2") == 0

    def test_delete_generation(self, populated_store):
        generation = populated_store.get_generations("user-1")[0]

        assert populated_store.delete_generation("user-1", generation.generation_id)
        assert not populated_store.delete_generation("user-1", generation.generation_id)
        assert populated_store.get_generation_count("user-1") == 2

    def test_statistics(self, populated_store):
        stats = populated_store.get_statistics("user-1")

        assert stats.total == 3
        assert stats.rated == 2
        assert stats.avg_rating == pytest.approx(7.0)
        assert stats.low_rated == 1
        assert stats.high_rated == 1
        assert stats.tag_counts == {"too_formal": 1, "too_long": 1, "great_hook": 1}

    def test_clear(self, populated_store):
        populated_store.clear_user("user-1")
        assert populated_store.get_generation_count("user-1") == 0

        populated_store.record_generation("user-2", "promo_email")
        populated_store.clear_all()
        assert populated_store.get_generation_count("user-2") == 0


class TestCsvRoundTrip:
    """Export and import of the generation log."""

    def test_export_and_import(self, populated_store, tmp_path):
        path = tmp_path / "generations.csv"

        assert populated_store.export_to_csv(path) == 3

        restored = InMemoryGenerationStore()
        assert restored.import_from_csv(path) == 3

        rated = restored.fetch_rated_generations("user-1", None, 10)
        assert [(g.content_type, g.rating, g.tags) for g in rated] == [
            ("promo_email", 9.0, ["great_hook"]),
            ("welcome_email_1", 5.0, ["too_formal", "too_long"]),
        ]
        assert rated[0].feedback_text == "Loved the opener"

    def test_export_single_user(self, populated_store, tmp_path):
        populated_store.record_generation("user-2", "promo_email")
        path = tmp_path / "user2.csv"

        assert populated_store.export_to_csv(path, user_id="user-2") == 1

    def test_import_missing_file(self, store, tmp_path):
        with pytest.raises(RatingsFetchError):
            store.import_from_csv(tmp_path / "missing.csv")

    def test_import_malformed_row(self, store, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text(
            "generation_id,user_id,content_type,rating,feedback_tags,feedback_text,created_at\n"
            "g1,user-1,promo_email,not-a-number,,,\n",
            encoding="utf-8",
        )

        with pytest.raises(RatingsFetchError, match="row 2"):
            store.import_from_csv(path)

    def test_import_is_all_or_nothing(self, store, tmp_path):
        path = tmp_path / "partial.csv"
        path.write_text(
            "generation_id,user_id,content_type,rating,feedback_tags,feedback_text,created_at\n"
            "g1,user-1,promo_email,8,great_hook,,\n"
            "g2,user-1,promo_email,notanumber,,,\n",
            encoding="utf-8",
        )

        with pytest.raises(RatingsFetchError, match="row 3"):
            store.import_from_csv(path)

        assert store.get_generation_count("user-1") == 0

    def test_import_non_utf8_file(self, store, tmp_path):
        path = tmp_path / "latin1.csv"
        path.write_bytes(b"generation_id,user_id\n\xff\xfe,user-1\n")

        with pytest.raises(RatingsFetchError, match="Cannot read"):
            store.import_from_csv(path)
