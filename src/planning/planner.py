"""Future plan synthesis: trajectories, predictions, schedule and insights."""

from collections import Counter
from datetime import datetime
from typing import Optional

import structlog

from metalearning.models import LearningGoal
from observability import metrics
from progression.models import AgentRecord
from shared_types import (
    ActivityType,
    GoalStatus,
    Impact,
    InsightType,
    LearningPatternType,
    Outlook,
    PlanHorizon,
    Priority,
    TrajectoryStatus,
)
from timeutil import add_days, days_between, ensure_utc, utcnow

from .models import (
    FuturePlan,
    FuturePrediction,
    GoalTrajectory,
    PlanInsight,
    PlanSummary,
    ScheduledActivity,
    SuggestedGoal,
    TimelineEvent,
)
from .predictions import generate_emotional_predictions, generate_skill_predictions
from .trajectory import analyze_goal_trajectory

logger = structlog.get_logger()

VALIDITY_DAYS = {
    PlanHorizon.IMMEDIATE: 1,
    PlanHorizon.SHORT_TERM: 7,
    PlanHorizon.MEDIUM_TERM: 30,
    PlanHorizon.LONG_TERM: 90,
}

MAX_SUGGESTIONS = 3
MAX_FOCUS_AREAS = 3
MAX_PREDICTION_INSIGHTS = 2
HIGH_CONFIDENCE = 0.7
MILESTONE_SOON_DAYS = 7

_NEEDS_WORK = (TrajectoryStatus.AT_RISK, TrajectoryStatus.BEHIND)


def suggest_new_goals(goals: list[LearningGoal], recent_events: list[TimelineEvent]) -> list[SuggestedGoal]:
    covered = {g.category for g in goals if g.status == GoalStatus.ACTIVE}
    suggestions = [
        SuggestedGoal(
            title=f"Develop {category.label} skills",
            description=f"Focus on improving {category.label} capabilities.",
            rationale="No active goals in this area",
        )
        for category in LearningPatternType
        if category not in covered
    ]

    topics = [t for e in recent_events for t in e.metadata.topics]
    if topics:
        top = Counter(topics).most_common(1)[0][0]
        suggestions.append(SuggestedGoal(
            title=f"Deep dive into {top}",
            description=f"Build expertise in {top} based on recent interest.",
            rationale="Frequently discussed topic",
        ))

    return suggestions[:MAX_SUGGESTIONS]


def generate_schedule(agent_id: str, trajectories: list[GoalTrajectory], now: datetime) -> list[ScheduledActivity]:
    tomorrow = add_days(now, 1)
    activities = [
        ScheduledActivity(
            agent_id=agent_id,
            title=f"Focus session: {t.goal_title}",
            description=f"Dedicated practice time for {t.goal_title}",
            type=ActivityType.LEARNING,
            scheduled_for=tomorrow,
            duration=30,
            is_recurring=True,
            recurrence_pattern="daily",
            priority=Priority.HIGH if t.status == TrajectoryStatus.BEHIND else Priority.MEDIUM,
            created_at=now,
        )
        for t in trajectories
        if t.status in _NEEDS_WORK
    ]

    activities.append(ScheduledActivity(
        agent_id=agent_id,
        title="Daily reflection",
        description="Review progress and adjust approach",
        type=ActivityType.REFLECTION,
        scheduled_for=tomorrow,
        duration=15,
        is_recurring=True,
        recurrence_pattern="daily",
        is_optional=True,
        created_at=now,
    ))
    return activities


def _insight_type_for(prediction: FuturePrediction) -> InsightType:
    impact = prediction.leading_impact
    if impact == Impact.POSITIVE:
        return InsightType.OPPORTUNITY
    if impact == Impact.NEGATIVE:
        return InsightType.WARNING
    return InsightType.TREND


def generate_insights(
    trajectories: list[GoalTrajectory], predictions: list[FuturePrediction], now: datetime
) -> list[PlanInsight]:
    insights = []

    behind = [t for t in trajectories if t.status == TrajectoryStatus.BEHIND]
    if behind:
        titles = '", "'.join(t.goal_title for t in behind)
        insights.append(PlanInsight(
            type=InsightType.WARNING,
            title=f"{len(behind)} goals behind schedule",
            description=f'Goals "{titles}" need attention.',
            actionable=True,
            suggested_action="Prioritize these goals or adjust timelines",
        ))

    ahead = [t for t in trajectories if t.status == TrajectoryStatus.AHEAD]
    if ahead:
        insights.append(PlanInsight(
            type=InsightType.OPPORTUNITY,
            title="Ahead of schedule on goals",
            description=f"Excellent progress on {len(ahead)} goals. Consider setting stretch targets.",
            actionable=True,
            suggested_action="Add stretch goals or help others",
        ))

    confident = [p for p in predictions if p.confidence_score > HIGH_CONFIDENCE]
    for prediction in confident[:MAX_PREDICTION_INSIGHTS]:
        insights.append(PlanInsight(
            type=_insight_type_for(prediction),
            title=prediction.title,
            description=prediction.description,
            actionable=False,
        ))

    soon = [
        m for t in trajectories for m in t.upcoming_milestones
        if days_between(now, m.projected_date) <= MILESTONE_SOON_DAYS
    ]
    if soon:
        insights.append(PlanInsight(
            type=InsightType.MILESTONE,
            title=f"{len(soon)} milestones approaching",
            description="Key milestones coming up this week.",
            actionable=True,
            suggested_action="Focus effort to hit these milestones",
        ))

    return insights


def generate_summary(
    trajectories: list[GoalTrajectory], predictions: list[FuturePrediction], insights: list[PlanInsight]
) -> PlanSummary:
    positive = (
        sum(1 for t in trajectories if t.status in (TrajectoryStatus.AHEAD, TrajectoryStatus.ON_TRACK))
        + sum(1 for p in predictions if p.leading_impact == Impact.POSITIVE)
        + sum(1 for i in insights if i.type == InsightType.OPPORTUNITY)
    )
    negative = (
        sum(1 for t in trajectories if t.status in (TrajectoryStatus.BEHIND, TrajectoryStatus.BLOCKED))
        + sum(1 for p in predictions if p.leading_impact == Impact.NEGATIVE)
        + sum(1 for i in insights if i.type == InsightType.WARNING)
    )

    if positive > negative * 2:
        outlook = Outlook.POSITIVE
    elif negative > positive:
        outlook = Outlook.CONCERNING
    else:
        outlook = Outlook.NEUTRAL

    focus = [t.goal_title for t in trajectories if t.status in _NEEDS_WORK]
    focus += [i.title for i in insights if i.actionable]

    opportunity = next((i.title for i in insights if i.type == InsightType.OPPORTUNITY), "Continue steady progress")
    risk = next((i.title for i in insights if i.type == InsightType.WARNING), "None identified")

    return PlanSummary(
        overall_outlook=outlook,
        key_focus_areas=focus[:MAX_FOCUS_AREAS],
        biggest_opportunity=opportunity,
        biggest_risk=risk,
    )


def generate_future_plan(
    agent: AgentRecord,
    goals: list[LearningGoal],
    recent_events: list[TimelineEvent],
    horizon: PlanHorizon = PlanHorizon.SHORT_TERM,
    now: Optional[datetime] = None,
) -> FuturePlan:
    """Build a fresh plan for ``horizon``.

    Only predictions inside the horizon's validity window are returned;
    insights and the summary still draw on every prediction.
    """
    now = ensure_utc(now) if now else utcnow()
    valid_until = add_days(now, VALIDITY_DAYS[horizon])

    with metrics.timer("future_plan"):
        all_predictions = (
            generate_emotional_predictions(agent, recent_events, now)
            + generate_skill_predictions(agent, goals, now)
        )
        predictions = [p for p in all_predictions if p.predicted_date <= valid_until]

        trajectories = [analyze_goal_trajectory(g, now) for g in goals if g.status == GoalStatus.ACTIVE]
        insights = generate_insights(trajectories, all_predictions, now)
        summary = generate_summary(trajectories, all_predictions, insights)

    plan = FuturePlan(
        agent_id=agent.id,
        plan_horizon=horizon,
        generated_at=now,
        valid_until=valid_until,
        active_goals=trajectories,
        suggested_goals=suggest_new_goals(goals, recent_events),
        predictions=predictions,
        upcoming_activities=generate_schedule(agent.id, trajectories, now),
        insights=insights,
        summary=summary,
    )

    metrics.counter("plans_generated")
    logger.info(
        "future_plan_generated",
        agent_id=agent.id,
        horizon=str(horizon),
        predictions=len(predictions),
        dropped=len(all_predictions) - len(predictions),
        outlook=str(plan.summary.overall_outlook),
    )
    return plan
