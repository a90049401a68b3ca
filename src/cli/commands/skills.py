"""Skill point CLI commands."""

import click
from rich.console import Console

from agents import AgentNotFoundError
from cli.utils import fail, get_components

console = Console()


@click.group()
def skills():
    """Spend skill points earned from level-ups."""
    pass


@skills.command("allocate")
@click.argument("agent_id")
@click.argument("skill")
@click.argument("points", type=int)
def skills_allocate(agent_id: str, skill: str, points: int):
    """Allocate POINTS skill points to SKILL."""
    c = get_components()
    try:
        result = c["pipeline"].allocate_skill(agent_id, skill, points)
    except AgentNotFoundError:
        fail(f"Agent not found: {agent_id}")
    if not result.success:
        fail(result.message)
    console.print(f"[green]✓[/] {result.message} ({result.progress.skill_points} left)")
