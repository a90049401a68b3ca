"""Goal trajectories and predictive future plans."""

from .models import FuturePlan, FuturePrediction, GoalTrajectory, TimelineEvent
from .planner import generate_future_plan
from .predictions import generate_emotional_predictions, generate_skill_predictions
from .trajectory import analyze_goal_trajectory

__all__ = [
    "FuturePlan",
    "FuturePrediction",
    "GoalTrajectory",
    "TimelineEvent",
    "analyze_goal_trajectory",
    "generate_emotional_predictions",
    "generate_future_plan",
    "generate_skill_predictions",
]
