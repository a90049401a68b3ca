"""Agent, message, achievement and skill routes."""

from fastapi import APIRouter, Depends, HTTPException, status

from agents import AgentPipeline
from planning.models import TimelineEvent, TimelineEventMetadata
from web.deps import get_pipeline
from web.models import (
    AchievementsResponse,
    ActivityCreate,
    AgentCreate,
    AgentDetail,
    MessageCreate,
    MessageResponse,
    SkillAllocate,
    TimelineEventCreate,
)

router = APIRouter(prefix="/api/agents", tags=["agents"])


def _message_response(update) -> MessageResponse:
    return MessageResponse(
        unlocked=update.unlocked,
        xp_gained=update.xp_gained,
        leveled_up=update.leveled_up,
        level=update.agent.progress.level,
        experience_points=update.agent.progress.experience_points,
    )


@router.get("")
async def list_agents(pipeline: AgentPipeline = Depends(get_pipeline)):
    return [
        {"id": a.id, "name": a.name, "level": a.progress.level, "experience_points": a.progress.experience_points}
        for a in pipeline.store.list_agents()
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_agent(body: AgentCreate, pipeline: AgentPipeline = Depends(get_pipeline)):
    try:
        record = pipeline.store.create_agent(body.name, agent_id=body.id, dynamic_traits=body.dynamic_traits)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return record


@router.get("/{agent_id}", response_model=AgentDetail)
async def get_agent(agent_id: str, pipeline: AgentPipeline = Depends(get_pipeline)):
    record = pipeline.store.get_agent(agent_id)
    service = pipeline.engine.achievements
    return AgentDetail(
        agent=record,
        level=service.get_level_info(record.progress),
        stats_summary=service.get_stats_summary(record.stats),
    )


@router.delete("/{agent_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_agent(agent_id: str, pipeline: AgentPipeline = Depends(get_pipeline)):
    if not pipeline.store.delete_agent(agent_id):
        raise HTTPException(status_code=404, detail="Agent not found")


@router.post("/{agent_id}/messages", response_model=MessageResponse)
def post_message(agent_id: str, body: MessageCreate, pipeline: AgentPipeline = Depends(get_pipeline)):
    update = pipeline.process_message(agent_id, body.content, body.role, emotions_detected=body.emotions_detected)
    return _message_response(update)


@router.post("/{agent_id}/activities", response_model=MessageResponse)
def post_activity(agent_id: str, body: ActivityCreate, pipeline: AgentPipeline = Depends(get_pipeline)):
    try:
        update = pipeline.record_activity(agent_id, body.kind)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _message_response(update)


@router.get("/{agent_id}/achievements", response_model=AchievementsResponse)
async def get_achievements(agent_id: str, pipeline: AgentPipeline = Depends(get_pipeline)):
    record = pipeline.store.get_agent(agent_id)
    service = pipeline.engine.achievements
    return AchievementsResponse(
        level=service.get_level_info(record.progress),
        unlocked=service.get_unlocked_achievements(record.progress),
        locked=service.get_locked_achievements(record.progress, record.stats),
    )


@router.post("/{agent_id}/skills")
def allocate_skill(agent_id: str, body: SkillAllocate, pipeline: AgentPipeline = Depends(get_pipeline)):
    result = pipeline.allocate_skill(agent_id, body.skill, body.points)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)
    return {
        "message": result.message,
        "skill_points": result.progress.skill_points,
        "allocated_skills": result.progress.allocated_skills,
    }


@router.post("/{agent_id}/timeline", status_code=status.HTTP_201_CREATED)
async def add_timeline_event(
    agent_id: str, body: TimelineEventCreate, pipeline: AgentPipeline = Depends(get_pipeline)
):
    pipeline.store.get_agent(agent_id)
    emotional_state = {"dominant_emotion": body.dominant_emotion} if body.dominant_emotion else None
    event = TimelineEvent(
        type=body.type,
        title=body.title,
        importance=body.importance,
        metadata=TimelineEventMetadata(emotional_state=emotional_state, topics=body.topics),
    )
    pipeline.store.add_timeline_event(agent_id, event)
    return event
