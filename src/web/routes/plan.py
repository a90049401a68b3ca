"""Future plan route."""

from typing import Optional

from fastapi import APIRouter, Depends

from agents import AgentPipeline
from cli.config_models import AppConfig
from planning.models import FuturePlan
from shared_types import PlanHorizon
from web.deps import get_config, get_pipeline

router = APIRouter(prefix="/api/agents/{agent_id}/plan", tags=["plan"])


@router.get("", response_model=FuturePlan)
async def get_plan(
    agent_id: str,
    horizon: Optional[PlanHorizon] = None,
    pipeline: AgentPipeline = Depends(get_pipeline),
    config: AppConfig = Depends(get_config),
):
    store = pipeline.store
    record = store.get_agent(agent_id)
    return pipeline.engine.generate_future_plan(
        record,
        store.get_goals(agent_id),
        store.get_timeline_events(agent_id),
        horizon or config.engine.default_horizon,
    )
