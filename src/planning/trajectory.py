"""Goal trajectory analysis: velocity, status, projections and risks."""

from datetime import datetime
from typing import Optional

from metalearning.models import LearningGoal
from shared_types import Priority, TrajectoryStatus
from timeutil import add_days, days_between, ensure_utc, utcnow

from .models import GoalTrajectory, MilestoneProjection, RiskFactor

DEFAULT_WINDOW_DAYS = 30
STALLED_PROJECTION_DAYS = 365
MAX_PROJECTION_DAYS = 36500
MILESTONE_IMPORTANCE = 0.7

AHEAD_RATIO = 1.2
BEHIND_RATIO = 0.5
AT_RISK_RATIO = 0.8

STATUS_RECOMMENDATIONS = {
    TrajectoryStatus.BEHIND: [
        "Increase focus on this goal",
        "Consider breaking into smaller milestones",
    ],
    TrajectoryStatus.AHEAD: ["Excellent progress! Consider setting stretch goals"],
    TrajectoryStatus.AT_RISK: ["Review blockers and adjust approach"],
}


def progress_velocity(goal: LearningGoal, now: datetime) -> float:
    """Percentage points gained per day since the goal was created."""
    elapsed = days_between(goal.created_at, now)
    return goal.progress_percentage / max(elapsed, 1)


def remaining_progress(goal: LearningGoal) -> float:
    return max(100 - goal.progress_percentage, 0)


def days_to_completion(remaining: float, velocity: float) -> float:
    """Days until ``remaining`` is covered at ``velocity``; 365 when stalled."""
    if remaining <= 0:
        return 0
    if velocity <= 0:
        return STALLED_PROJECTION_DAYS
    return min(remaining / velocity, MAX_PROJECTION_DAYS)


def days_remaining(goal: LearningGoal, now: datetime) -> int:
    if goal.target_date is None:
        return DEFAULT_WINDOW_DAYS
    target = ensure_utc(goal.target_date)
    if target <= now:
        return 0
    return days_between(now, target)


def classify(velocity: float, required: float) -> TrajectoryStatus:
    if velocity >= required * AHEAD_RATIO:
        return TrajectoryStatus.AHEAD
    if velocity < required * BEHIND_RATIO:
        return TrajectoryStatus.BEHIND
    if velocity < required * AT_RISK_RATIO:
        return TrajectoryStatus.AT_RISK
    return TrajectoryStatus.ON_TRACK


def _days_ahead(status: TrajectoryStatus, velocity: float, required: float, remaining_days: int) -> int:
    if status not in (TrajectoryStatus.AHEAD, TrajectoryStatus.BEHIND):
        return 0
    if required == 0:
        return remaining_days
    if status == TrajectoryStatus.AHEAD:
        return round((velocity - required) * remaining_days / required)
    return -round((required - velocity) * remaining_days / required)


def _risk_factors(velocity: float, remaining_days: int, remaining: float) -> list[RiskFactor]:
    risks = []
    if velocity < 0.5:
        risks.append(RiskFactor(
            factor="Low progress velocity",
            severity=Priority.HIGH,
            mitigation="Increase daily practice time or adjust goal scope",
        ))
    if remaining_days < 7 and remaining > 30:
        risks.append(RiskFactor(
            factor="Tight deadline",
            severity=Priority.HIGH,
            mitigation="Focus exclusively on this goal or extend deadline",
        ))
    return risks


def _milestones(goal: LearningGoal, velocity: float, now: datetime) -> list[MilestoneProjection]:
    projections = []
    for milestone in goal.milestones:
        if milestone.achieved:
            continue
        if velocity > 0:
            days = min(max((milestone.target_value - goal.current_value) / velocity, 0), MAX_PROJECTION_DAYS)
        else:
            days = STALLED_PROJECTION_DAYS
        projections.append(MilestoneProjection(
            description=milestone.description,
            projected_date=add_days(now, days),
            importance=MILESTONE_IMPORTANCE,
        ))
    return projections


def analyze_goal_trajectory(goal: LearningGoal, now: Optional[datetime] = None) -> GoalTrajectory:
    """Compare a goal's progress velocity with the velocity its deadline needs.

    Goals without a target date are measured against a 30-day window; a
    target date in the past leaves zero days remaining.
    """
    now = ensure_utc(now) if now else utcnow()
    velocity = progress_velocity(goal, now)
    remaining = remaining_progress(goal)
    remaining_days = days_remaining(goal, now)
    required = remaining / max(remaining_days, 1)

    status = classify(velocity, required)

    return GoalTrajectory(
        goal_id=goal.id,
        goal_title=goal.title,
        current_progress=goal.progress_percentage / 100,
        status=status,
        projected_completion_date=add_days(now, days_to_completion(remaining, velocity)),
        original_target_date=goal.target_date,
        days_ahead=_days_ahead(status, velocity, required, remaining_days),
        progress_velocity=velocity,
        required_velocity=required,
        upcoming_milestones=_milestones(goal, velocity, now),
        risk_factors=_risk_factors(velocity, remaining_days, remaining),
        recommendations=list(STATUS_RECOMMENDATIONS.get(status, [])),
    )
