"""Learning goal and trajectory routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from agents import AgentPipeline
from metalearning.models import LearningGoal
from planning.models import GoalTrajectory
from shared_types import GoalStatus
from web.deps import get_pipeline
from web.models import GoalCreate, GoalProgressUpdate, GoalsResponse

router = APIRouter(prefix="/api/agents/{agent_id}/goals", tags=["goals"])


def _get_goal(pipeline: AgentPipeline, agent_id: str, goal_id: str) -> LearningGoal:
    goal = pipeline.store.get_goal(agent_id, goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.get("", response_model=GoalsResponse)
async def list_goals(agent_id: str, pipeline: AgentPipeline = Depends(get_pipeline)):
    pipeline.store.get_agent(agent_id)
    return GoalsResponse(goals=pipeline.store.get_goals(agent_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=LearningGoal)
def create_goal(agent_id: str, body: GoalCreate, pipeline: AgentPipeline = Depends(get_pipeline)):
    goal = LearningGoal(agent_id=agent_id, **body.model_dump())
    return pipeline.add_goal(goal)


@router.put("/{goal_id}/progress", response_model=LearningGoal)
def update_progress(
    agent_id: str, goal_id: str, body: GoalProgressUpdate, pipeline: AgentPipeline = Depends(get_pipeline)
):
    goal = _get_goal(pipeline, agent_id, goal_id)
    update = {"progress_percentage": body.progress_percentage}
    if body.progress_percentage >= 100 and goal.status != GoalStatus.COMPLETED:
        update.update(status=GoalStatus.COMPLETED, achieved_at=datetime.now(timezone.utc))
    goal = goal.model_copy(update=update)
    pipeline.store.save_goal(goal)
    return goal


@router.get("/{goal_id}/trajectory", response_model=GoalTrajectory)
async def get_trajectory(agent_id: str, goal_id: str, pipeline: AgentPipeline = Depends(get_pipeline)):
    goal = _get_goal(pipeline, agent_id, goal_id)
    return pipeline.engine.analyze_goal_trajectory(goal)
