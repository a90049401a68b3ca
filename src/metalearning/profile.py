"""Learning profile aggregation, meta-learning state and recommendations."""

from datetime import datetime, timedelta
from typing import Optional

import structlog

from lexicon import DEFAULT_LEXICON, Lexicon
from progression.models import AgentRecord
from shared_types import GoalStatus, LearningPatternType, LearningStrategy, PatternOutcome, Priority, RecommendationType
from timeutil import utcnow

from .models import (
    LearningAdaptation,
    LearningCapabilities,
    LearningGoal,
    LearningPattern,
    LearningPreferences,
    LearningProfile,
    LearningRecommendation,
    LearningStats,
    MetaLearningState,
)
from .patterns import detect_strategy

logger = structlog.get_logger()

STRENGTH_THRESHOLD = 0.7
WEAKNESS_THRESHOLD = 0.4
MAX_BEST_CONTEXTS = 5
MAX_RECOMMENDATIONS = 5
HOURS_PER_PATTERN = 0.1
ACTIVE_WINDOW = timedelta(hours=24)


def mean_effectiveness_by_type(patterns: list[LearningPattern]) -> dict[LearningPatternType, float]:
    """Mean effectiveness per observed type, in first-seen order."""
    buckets: dict[LearningPatternType, list[float]] = {}
    for p in patterns:
        buckets.setdefault(p.type, []).append(p.effectiveness)
    return {t: sum(v) / len(v) for t, v in buckets.items()}


def preferred_strategy(patterns: list[LearningPattern], lexicon: Lexicon = DEFAULT_LEXICON) -> LearningStrategy:
    votes = {s: 0 for s in LearningStrategy}
    for p in patterns:
        for ctx in p.contexts:
            votes[detect_strategy(ctx, lexicon)] += 1

    best = LearningStrategy.EXPLORATION
    for strategy in LearningStrategy:
        if votes[strategy] > votes[best]:
            best = strategy
    return best


def create_learning_profile(
    agent: AgentRecord,
    patterns: list[LearningPattern],
    adaptations: list[LearningAdaptation],
    goals: Optional[list[LearningGoal]] = None,
    now: Optional[datetime] = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> LearningProfile:
    """Aggregate an agent's patterns and adaptations into a learning profile.

    Capability ratios are divided by max(count, 1) so empty inputs give 0.
    Pattern types with no observations count as neither strength nor
    weakness.
    """
    now = now or utcnow()
    n = max(len(patterns), 1)

    recent = [p for p in patterns if p.last_observed > now - ACTIVE_WINDOW]
    capabilities = LearningCapabilities(
        speed_of_learning=len(recent) / n,
        retention_rate=sum(1 for p in patterns if p.observation_count > 1) / n,
        transferability=sum(1 for p in patterns if p.related_patterns) / n,
        adaptability=(
            sum(1 for a in adaptations if a.is_active and a.impact_score > 0) / max(len(adaptations), 1)
        ),
        creativity=0.5 + agent.dynamic_traits.get("adaptability", 0.0) * 0.5,
    )

    best_contexts: list[str] = []
    for p in patterns:
        if p.outcome != PatternOutcome.POSITIVE:
            continue
        for ctx in p.contexts:
            if ctx not in best_contexts:
                best_contexts.append(ctx)

    averages = mean_effectiveness_by_type(patterns)
    strengths = [t for t in LearningPatternType if t in averages and averages[t] >= STRENGTH_THRESHOLD]
    weaknesses = [t for t in LearningPatternType if t in averages and averages[t] < WEAKNESS_THRESHOLD]

    return LearningProfile(
        agent_id=agent.id,
        capabilities=capabilities,
        preferences=LearningPreferences(
            preferred_strategy=preferred_strategy(patterns, lexicon),
            best_learning_contexts=best_contexts[:MAX_BEST_CONTEXTS],
        ),
        strengths=strengths,
        weaknesses=weaknesses,
        active_focus_areas=weaknesses[:2],
        total_learning_hours=len(patterns) * HOURS_PER_PATTERN,
        patterns_discovered=len(patterns),
        adaptations_made=len(adaptations),
        goals_achieved=sum(1 for g in goals or [] if g.status == GoalStatus.COMPLETED),
        last_updated=now,
    )


def generate_recommendations(
    patterns: list[LearningPattern], profile: LearningProfile
) -> list[LearningRecommendation]:
    recs = []
    for weakness in profile.weaknesses:
        recs.append(LearningRecommendation(
            type=RecommendationType.FOCUS_AREA,
            title=f"Focus on {weakness.label}",
            description="This area shows lower effectiveness. Consider practicing through targeted conversations.",
            priority=Priority.HIGH,
            related_pattern_ids=[p.id for p in patterns if p.type == weakness],
        ))

    negatives = sum(1 for p in patterns if p.outcome == PatternOutcome.NEGATIVE)
    if negatives > len(patterns) * 0.3:
        recs.append(LearningRecommendation(
            type=RecommendationType.STRATEGY,
            title="Consider changing approach",
            description="High rate of negative outcomes suggests trying a different learning strategy.",
            priority=Priority.MEDIUM,
        ))

    if profile.goals_achieved > 0:
        recs.append(LearningRecommendation(
            type=RecommendationType.GOAL,
            title="Set new learning goals",
            description="Build on past successes by setting new, more challenging learning objectives.",
            priority=Priority.LOW,
        ))

    if profile.adaptations_made < 3:
        recs.append(LearningRecommendation(
            type=RecommendationType.ADAPTATION,
            title="Be more adaptable",
            description="Try adapting behavior based on feedback more frequently.",
            priority=Priority.MEDIUM,
        ))

    return recs[:MAX_RECOMMENDATIONS]


def get_meta_learning_state(
    agent: AgentRecord,
    patterns: list[LearningPattern],
    adaptations: list[LearningAdaptation],
    goals: list[LearningGoal],
    now: Optional[datetime] = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> MetaLearningState:
    now = now or utcnow()
    profile = create_learning_profile(agent, patterns, adaptations, goals, now=now, lexicon=lexicon)

    averages = mean_effectiveness_by_type(patterns)
    ranked = sorted(averages, key=lambda t: averages[t], reverse=True)
    week_ago = now - timedelta(days=7)

    stats = LearningStats(
        total_patterns=len(patterns),
        positive_patterns=sum(1 for p in patterns if p.outcome == PatternOutcome.POSITIVE),
        negative_patterns=sum(1 for p in patterns if p.outcome == PatternOutcome.NEGATIVE),
        adaptations_this_week=sum(1 for a in adaptations if a.timestamp > week_ago),
        learning_streak=max(agent.stats.consecutive_days, 1),
        most_improved_area=ranked[0] if ranked else None,
        needs_attention_area=ranked[-1] if ranked else None,
    )

    recent_adaptations = sorted(
        (a for a in adaptations if a.is_active), key=lambda a: a.timestamp, reverse=True
    )[:5]

    return MetaLearningState(
        agent_id=agent.id,
        profile=profile,
        active_patterns=[p for p in patterns if p.last_observed > now - ACTIVE_WINDOW],
        active_goals=[g for g in goals if g.status == GoalStatus.ACTIVE],
        recent_adaptations=recent_adaptations,
        stats=stats,
        recommendations=generate_recommendations(patterns, profile),
        last_updated=now,
    )
