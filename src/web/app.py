"""FastAPI application entry point."""

import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agents import AgentNotFoundError, StaleRecordError
from observability import log_run_summary
from web.deps import get_pipeline
from web.routes import agents, goals, learning, plan

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    pipeline = app.dependency_overrides.get(get_pipeline, get_pipeline)()
    logger.info("web.startup", db_path=str(pipeline.store.db_path))
    yield
    log_run_summary(source="web")
    logger.info("web.shutdown")


app = FastAPI(
    title="Agent Progression",
    version="0.1.0",
    lifespan=lifespan,
)

frontend_origin = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AgentNotFoundError)
async def agent_not_found(request: Request, exc: AgentNotFoundError):
    return JSONResponse(status_code=404, content={"detail": f"Agent not found: {exc.args[0]}"})


@app.exception_handler(StaleRecordError)
async def stale_record(request: Request, exc: StaleRecordError):
    logger.warning("web.write_conflict", agent_id=exc.agent_id, path=request.url.path)
    return JSONResponse(status_code=409, content={"detail": str(exc)})


app.include_router(agents.router)
app.include_router(learning.router)
app.include_router(goals.router)
app.include_router(plan.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
