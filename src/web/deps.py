"""Dependency injection for FastAPI routes."""

from functools import lru_cache

import structlog

from agents import AgentPipeline, AgentStore
from cli.config import load_config_model
from cli.config_models import AppConfig
from engine import ProgressionEngine

logger = structlog.get_logger()


@lru_cache
def get_config() -> AppConfig:
    """Load shared config from ./config.yaml or ~/.agentprog/config.yaml."""
    return load_config_model()


@lru_cache
def get_pipeline() -> AgentPipeline:
    """Process-wide pipeline; one per-agent lock table shared by all requests."""
    config = get_config()
    store = AgentStore(config.paths.db_path)
    engine = ProgressionEngine(conversation_window=config.engine.conversation_window)
    logger.info("web.pipeline_ready", db_path=str(config.paths.db_path))
    return AgentPipeline(store, engine, max_write_retries=config.engine.max_write_retries)
