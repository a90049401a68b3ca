"""Meta-learning routes."""

from fastapi import APIRouter, Depends, status

from agents import AgentPipeline
from shared_types import LearningPatternType
from web.deps import get_pipeline
from web.models import AdaptationCreate, AnalyzeResponse, LearningResponse

router = APIRouter(prefix="/api/agents/{agent_id}/learning", tags=["learning"])


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(agent_id: str, pipeline: AgentPipeline = Depends(get_pipeline)):
    """Detect patterns in the stored conversation and merge them in."""
    result = pipeline.analyze_conversation(agent_id)
    return AnalyzeResponse(
        patterns=result.patterns,
        learning_value=result.event.learning_value if result.event else 0.0,
    )


@router.get("", response_model=LearningResponse)
async def get_learning(agent_id: str, pipeline: AgentPipeline = Depends(get_pipeline)):
    store = pipeline.store
    record = store.get_agent(agent_id)
    adaptations = store.get_adaptations(agent_id)
    state = pipeline.engine.get_meta_learning_state(
        record, store.get_patterns(agent_id), adaptations, store.get_goals(agent_id)
    )
    return LearningResponse(state=state, adaptations=adaptations)


@router.post("/adaptations", status_code=status.HTTP_201_CREATED)
def create_adaptation(agent_id: str, body: AdaptationCreate, pipeline: AgentPipeline = Depends(get_pipeline)):
    return pipeline.create_adaptation(agent_id, body.description, body.pattern_ids)


@router.post("/goals", status_code=status.HTTP_201_CREATED)
def generate_goals(agent_id: str, pipeline: AgentPipeline = Depends(get_pipeline)):
    return pipeline.generate_goals(agent_id)


@router.post("/skills/{category}")
def update_skill(agent_id: str, category: LearningPatternType, pipeline: AgentPipeline = Depends(get_pipeline)):
    return pipeline.update_skill(agent_id, category)


@router.get("/skills")
async def list_skills(agent_id: str, pipeline: AgentPipeline = Depends(get_pipeline)):
    pipeline.store.get_agent(agent_id)
    return pipeline.store.get_skills(agent_id)
