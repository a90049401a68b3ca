"""Keyword-based learning pattern detection, merging and adaptations."""

from collections import Counter
from datetime import datetime
from typing import Optional

import structlog

from lexicon import DEFAULT_LEXICON, Lexicon
from observability import metrics
from shared_types import AdaptationType, LearningPatternType, LearningStrategy, MessageRole, PatternOutcome
from timeutil import utcnow

from .models import ConversationMessage, LearningAdaptation, LearningPattern, PatternExample

logger = structlog.get_logger()

CONTEXT_CHARS = 100
MAX_CONTEXTS = 5
MAX_EXAMPLES = 3
MAX_MERGED_CONTEXTS = 10
CONFIDENCE_STEP = 0.2
MAX_DETECTED_CONFIDENCE = 0.9
MERGE_CONFIDENCE_STEP = 0.05
MAX_MERGED_CONFIDENCE = 0.95

OUTCOME_EFFECTIVENESS = {
    PatternOutcome.POSITIVE: 0.7,
    PatternOutcome.NEGATIVE: 0.3,
    PatternOutcome.NEUTRAL: 0.5,
}

ADAPTATION_TYPE_BY_PATTERN = {
    LearningPatternType.TOPIC_INTEREST: AdaptationType.KNOWLEDGE,
    LearningPatternType.COMMUNICATION_STYLE: AdaptationType.STYLE,
    LearningPatternType.EMOTIONAL_RESPONSE: AdaptationType.BEHAVIOR,
    LearningPatternType.PROBLEM_SOLVING: AdaptationType.BEHAVIOR,
    LearningPatternType.MEMORY_RETENTION: AdaptationType.KNOWLEDGE,
    LearningPatternType.RELATIONSHIP_BUILDING: AdaptationType.BEHAVIOR,
}


def determine_outcome(messages: list[ConversationMessage], lexicon: Lexicon = DEFAULT_LEXICON) -> PatternOutcome:
    """Score a conversation by positive/negative indicator hits per message.

    Needs a margin of more than one hit either way to leave neutral.
    """
    positive = negative = 0
    for message in messages:
        lower = message.content.lower()
        positive += sum(1 for ind in lexicon.positive_indicators if ind in lower)
        negative += sum(1 for ind in lexicon.negative_indicators if ind in lower)

    if positive > negative + 1:
        return PatternOutcome.POSITIVE
    if negative > positive + 1:
        return PatternOutcome.NEGATIVE
    return PatternOutcome.NEUTRAL


def detect_strategy(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> LearningStrategy:
    """Strategy with the most indicator hits; ties and no hits fall to exploration."""
    lower = text.lower()
    best = LearningStrategy.EXPLORATION
    best_score = 0
    for strategy, indicators in lexicon.strategy_indicators.items():
        score = sum(1 for ind in indicators if ind in lower)
        if score > best_score:
            best, best_score = strategy, score
    return best


def _example(message: ConversationMessage, success: bool) -> PatternExample:
    return PatternExample(
        input=message.content if message.role == MessageRole.USER else "",
        output=message.content if message.role == MessageRole.AGENT else "",
        timestamp=message.timestamp,
        success=success,
    )


def detect_patterns_from_conversation(
    messages: list[ConversationMessage],
    agent_id: str,
    now: Optional[datetime] = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> list[LearningPattern]:
    """Detect one pattern per category whose keywords appear in the transcript.

    Args:
        messages: Conversation in chronological order.
        agent_id: Owner of the detected patterns.
        now: Observation timestamp override.
        lexicon: Keyword tables.

    Returns:
        Newly observed patterns, each with observation_count 1.
    """
    if not messages:
        return []

    now = now or utcnow()
    transcript = " ".join(m.content.lower() for m in messages)
    outcome = determine_outcome(messages, lexicon)
    effectiveness = OUTCOME_EFFECTIVENESS[outcome]
    success = outcome == PatternOutcome.POSITIVE

    detected = []
    for pattern_type, keywords in lexicon.pattern_keywords.items():
        matches = [kw for kw in keywords if kw in transcript]
        if not matches:
            continue

        contexts = []
        for message in messages:
            lower = message.content.lower()
            if any(m in lower for m in matches):
                contexts.append(message.content[:CONTEXT_CHARS])

        detected.append(LearningPattern(
            agent_id=agent_id,
            type=pattern_type,
            pattern=f"Agent shows {pattern_type.label} pattern",
            trigger=", ".join(matches),
            outcome=outcome,
            frequency=min(len(matches) / len(keywords), 1.0),
            effectiveness=effectiveness,
            confidence=min(len(matches) * CONFIDENCE_STEP, MAX_DETECTED_CONFIDENCE),
            contexts=contexts[:MAX_CONTEXTS],
            examples=[_example(m, success) for m in messages[:MAX_EXAMPLES]],
            first_observed=now,
            last_observed=now,
            observation_count=1,
        ))

    if detected:
        metrics.counter("patterns_detected", len(detected))
        logger.info(
            "patterns_detected",
            agent_id=agent_id,
            count=len(detected),
            outcome=str(outcome),
            lexicon_version=lexicon.version,
        )
    return detected


def merge_pattern(existing: LearningPattern, observed: LearningPattern) -> LearningPattern:
    """Fold a fresh observation into a stored pattern of the same type.

    Effectiveness becomes a running mean weighted by observation count and
    confidence grows by a fixed step up to a ceiling.
    """
    n = existing.observation_count
    merged = existing.model_copy(deep=True)
    merged.observation_count = n + 1
    merged.last_observed = max(existing.last_observed, observed.last_observed)
    merged.effectiveness = (existing.effectiveness * n + observed.effectiveness) / (n + 1)
    merged.confidence = min(existing.confidence + MERGE_CONFIDENCE_STEP, MAX_MERGED_CONFIDENCE)
    merged.frequency = max(existing.frequency, observed.frequency)
    merged.outcome = observed.outcome
    merged.trigger = observed.trigger or existing.trigger

    contexts = list(existing.contexts)
    for ctx in observed.contexts:
        if ctx not in contexts:
            contexts.append(ctx)
    merged.contexts = contexts[-MAX_MERGED_CONTEXTS:]
    return merged


def merge_patterns(
    existing: list[LearningPattern], observed: list[LearningPattern]
) -> tuple[list[LearningPattern], list[LearningPattern]]:
    """Merge a batch of observations into the stored set by pattern type.

    Returns:
        (all patterns after the merge, the subset that changed or is new)
    """
    merged = list(existing)
    index = {p.type: i for i, p in enumerate(merged)}
    changed: dict[LearningPatternType, LearningPattern] = {}
    for obs in observed:
        if obs.type in index:
            i = index[obs.type]
            merged[i] = merge_pattern(merged[i], obs)
        else:
            index[obs.type] = len(merged)
            merged.append(obs)
        changed[obs.type] = merged[index[obs.type]]
    return merged, list(changed.values())


def create_adaptation(
    agent_id: str,
    patterns: list[LearningPattern],
    description: str,
    now: Optional[datetime] = None,
) -> LearningAdaptation:
    """Record a behaviour change triggered by a batch of patterns."""
    counts = Counter(p.type for p in patterns)
    if counts:
        dominant = counts.most_common(1)[0][0]
        adaptation_type = ADAPTATION_TYPE_BY_PATTERN.get(dominant, AdaptationType.BEHAVIOR)
    else:
        adaptation_type = AdaptationType.BEHAVIOR

    impact = 0.0
    if patterns:
        impact = sum(p.effectiveness for p in patterns) / len(patterns) - 0.5

    affected: list[LearningPatternType] = []
    for p in patterns:
        if p.type not in affected:
            affected.append(p.type)

    return LearningAdaptation(
        agent_id=agent_id,
        adaptation_type=adaptation_type,
        description=description,
        previous_state="Default behavior",
        current_state=description,
        triggering_patterns=[p.id for p in patterns],
        triggering_events=[ctx for p in patterns for ctx in p.contexts][:3],
        impact_score=impact,
        affected_areas=affected,
        timestamp=now or utcnow(),
    )
