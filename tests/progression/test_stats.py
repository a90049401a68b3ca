"""Tests for the stats accumulator."""

from datetime import date, timedelta

import pytest

from progression.models import AgentStats, Interaction
from progression.stats import (
    RECORDERS,
    apply_streak,
    estimate_new_words,
    record_dream,
    start_conversation,
    update_longest_conversation,
    update_stats_from_interaction,
)

TODAY = date(2024, 6, 15)


class TestEstimateNewWords:
    def test_thirty_percent_of_long_tokens(self):
        # 10 tokens longer than 3 chars -> floor(3.0)
        text = " ".join(["science"] * 10)
        assert estimate_new_words(text) == 3

    def test_short_tokens_ignored(self):
        assert estimate_new_words("a an the cat dog") == 0

    def test_punctuation_only_tokens_dropped(self):
        assert estimate_new_words("!!!! ???? ....") == 0


class TestUpdateStats:
    def test_counts_message_and_question(self):
        stats = update_stats_from_interaction(
            AgentStats(last_active_date=TODAY), Interaction(message_content="How?", is_question=True), today=TODAY
        )
        assert stats.total_messages == 1
        assert stats.questions_asked == 1

    def test_none_stats_start_fresh(self):
        stats = update_stats_from_interaction(None, Interaction(), today=TODAY)
        assert stats.total_messages == 1
        assert stats.consecutive_days == 1

    def test_input_not_mutated(self):
        original = AgentStats(last_active_date=TODAY)
        update_stats_from_interaction(original, Interaction(topics=["physics"]), today=TODAY)
        assert original.total_messages == 0
        assert original.unique_topics == []

    def test_topic_domains_counted_once(self):
        stats = AgentStats(last_active_date=TODAY)
        interaction = Interaction(topics=["quantum physics", "poetry", "ethics"])
        stats = update_stats_from_interaction(stats, interaction, today=TODAY)
        stats = update_stats_from_interaction(stats, interaction, today=TODAY)
        assert stats.unique_topics == ["quantum physics", "poetry", "ethics"]
        assert stats.science_topics == 1
        assert stats.art_topics == 1
        assert stats.philosophy_topics == 1

    def test_helpful_and_emotions(self):
        stats = update_stats_from_interaction(
            None, Interaction(is_helpful=True, emotions_detected=2, is_user_message=False), today=TODAY
        )
        assert stats.helpful_responses == 1
        assert stats.emotion_recognitions == 2


class TestStreak:
    def test_same_day_unchanged(self):
        stats = AgentStats(consecutive_days=4, last_active_date=TODAY)
        apply_streak(stats, TODAY)
        assert stats.consecutive_days == 4

    def test_next_day_increments(self):
        stats = AgentStats(consecutive_days=4, last_active_date=TODAY - timedelta(days=1))
        apply_streak(stats, TODAY)
        assert stats.consecutive_days == 5
        assert stats.last_active_date == TODAY

    def test_gap_resets(self):
        stats = AgentStats(consecutive_days=4, last_active_date=TODAY - timedelta(days=3))
        apply_streak(stats, TODAY)
        assert stats.consecutive_days == 1

    def test_future_date_keeps_streak(self):
        stats = AgentStats(consecutive_days=5, last_active_date=TODAY + timedelta(days=1))
        apply_streak(stats, TODAY)
        assert stats.consecutive_days == 5
        assert stats.last_active_date == TODAY

    def test_unparseable_date_resets(self):
        stats = AgentStats(consecutive_days=9, last_active_date="not-a-date")
        assert stats.last_active_date is None
        apply_streak(stats, TODAY)
        assert stats.consecutive_days == 1
        assert stats.last_active_date == TODAY


class TestCounters:
    def test_start_conversation(self):
        assert start_conversation(None).conversation_count == 1

    def test_longest_conversation_never_lowers(self):
        stats = update_longest_conversation(AgentStats(), 12)
        assert stats.longest_conversation == 12
        assert update_longest_conversation(stats, 5).longest_conversation == 12

    def test_record_returns_copy(self):
        stats = AgentStats()
        assert record_dream(stats).dreams_generated == 1
        assert stats.dreams_generated == 0

    @pytest.mark.parametrize("kind,field", [
        ("relationship", "relationships_formed"),
        ("creative_work", "creative_works_created"),
        ("journal_entry", "journal_entries"),
        ("conversation", "conversation_count"),
    ])
    def test_recorders(self, kind, field):
        assert getattr(RECORDERS[kind](AgentStats()), field) == 1
