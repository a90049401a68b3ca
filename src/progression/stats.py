"""Stats accumulator that folds interaction events into AgentStats.

Every function returns a new AgentStats; the input is never mutated.
"""

import math
import re
from datetime import date
from typing import Optional

import structlog

from lexicon import DEFAULT_LEXICON, Lexicon
from timeutil import utctoday

from .models import AgentStats, Interaction

logger = structlog.get_logger()

VOCABULARY_FACTOR = 0.3
_NON_ALPHA = re.compile(r"[^a-z]")


def estimate_new_words(text: str) -> int:
    """Vocabulary growth proxy: 30% of tokens longer than 3 chars.

    Not a unique-word count; repeated words are counted again.
    """
    tokens = []
    for word in text.lower().split():
        if len(word) <= 3:
            continue
        cleaned = _NON_ALPHA.sub("", word)
        if cleaned:
            tokens.append(cleaned)
    return math.floor(len(tokens) * VOCABULARY_FACTOR)


def _coerce_date(value) -> Optional[date]:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def apply_streak(stats: AgentStats, today: Optional[date] = None) -> None:
    """Advance or reset the consecutive-day streak on a stats copy in place."""
    today = today or utctoday()
    last = _coerce_date(stats.last_active_date)
    if last == today:
        return

    gap = (today - last).days if last else None
    if gap == 1:
        stats.consecutive_days += 1
    elif gap is None or gap > 1:
        stats.consecutive_days = 1
    stats.last_active_date = today


def update_stats_from_interaction(
    stats: Optional[AgentStats],
    interaction: Interaction,
    today: Optional[date] = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> AgentStats:
    """Fold one interaction into a copy of ``stats``.

    Args:
        stats: Current stats, or None for a fresh agent.
        interaction: The message-level event.
        today: Override for the current UTC date.
        lexicon: Keyword tables used for domain classification.

    Returns:
        Updated stats copy.
    """
    updated = stats.model_copy(deep=True) if stats else AgentStats()

    updated.total_messages += 1

    if interaction.message_content:
        updated.unique_words += estimate_new_words(interaction.message_content)

    for topic in interaction.topics:
        if topic in updated.unique_topics:
            continue
        updated.unique_topics.append(topic)
        if lexicon.topic_in_domain(topic, "science"):
            updated.science_topics += 1
        if lexicon.topic_in_domain(topic, "art"):
            updated.art_topics += 1
        if lexicon.topic_in_domain(topic, "philosophy"):
            updated.philosophy_topics += 1

    if interaction.is_question:
        updated.questions_asked += 1
    if interaction.is_helpful:
        updated.helpful_responses += 1
    if interaction.emotions_detected:
        updated.emotion_recognitions += interaction.emotions_detected

    apply_streak(updated, today)
    return updated


def _bump(stats: Optional[AgentStats], field: str) -> AgentStats:
    updated = stats.model_copy(deep=True) if stats else AgentStats()
    setattr(updated, field, getattr(updated, field) + 1)
    return updated


def start_conversation(stats: Optional[AgentStats]) -> AgentStats:
    return _bump(stats, "conversation_count")


def update_longest_conversation(stats: Optional[AgentStats], message_count: int) -> AgentStats:
    """Raise ``longest_conversation`` if ``message_count`` beats it; never lowers it."""
    updated = stats.model_copy(deep=True) if stats else AgentStats()
    if message_count > updated.longest_conversation:
        updated.longest_conversation = message_count
    return updated


def record_relationship(stats: Optional[AgentStats]) -> AgentStats:
    return _bump(stats, "relationships_formed")


def record_dream(stats: Optional[AgentStats]) -> AgentStats:
    return _bump(stats, "dreams_generated")


def record_creative_work(stats: Optional[AgentStats]) -> AgentStats:
    return _bump(stats, "creative_works_created")


def record_journal_entry(stats: Optional[AgentStats]) -> AgentStats:
    return _bump(stats, "journal_entries")


RECORDERS = {
    "relationship": record_relationship,
    "dream": record_dream,
    "creative_work": record_creative_work,
    "journal_entry": record_journal_entry,
    "conversation": start_conversation,
}
