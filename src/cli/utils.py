"""Shared CLI utilities."""

import sys
from pathlib import Path
from typing import Optional

import click
import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()


def _config_path_from_context() -> Optional[Path]:
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return None
    obj = ctx.find_root().obj or {}
    return obj.get("config_path")


def get_components(config_path: Optional[Path] = None) -> dict:
    """Initialize config, store, engine and pipeline.

    Args:
        config_path: Explicit config file. Defaults to the root ``--config``
            option, then the standard locations.
    """
    from agents import AgentPipeline, AgentStore
    from cli.config import load_config_model
    from engine import ProgressionEngine

    try:
        config = load_config_model(config_path or _config_path_from_context())
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    store = AgentStore(config.paths.db_path)
    engine = ProgressionEngine(conversation_window=config.engine.conversation_window)
    pipeline = AgentPipeline(store, engine, max_write_retries=config.engine.max_write_retries)

    return {
        "config": config,
        "store": store,
        "engine": engine,
        "pipeline": pipeline,
    }


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error:[/] {message}")
    sys.exit(1)


def progress_bar(pct: float, width: int = 10) -> str:
    filled = max(0, min(width, int(pct) * width // 100))
    return "[green]" + "█" * filled + "[/]" + "[dim]" + "░" * (width - filled) + "[/]"
