"""Agent CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from agents import AgentNotFoundError
from cli.utils import fail, get_components, progress_bar
from progression.stats import RECORDERS
from shared_types import MessageRole

console = Console()


def _print_update(update) -> None:
    if update.unlocked:
        console.print(f"[bold yellow]Unlocked:[/] {', '.join(update.unlocked)} (+{update.xp_gained} XP)")
    if update.leveled_up:
        console.print(f"[bold green]Level up![/] Now level {update.agent.progress.level}")


@click.group()
def agent():
    """Create, inspect and talk to agents."""
    pass


@agent.command("create")
@click.argument("name")
@click.option("--id", "agent_id", default=None, help="Explicit agent id")
def agent_create(name: str, agent_id: str):
    """Create a new agent."""
    c = get_components()
    try:
        record = c["store"].create_agent(name, agent_id=agent_id)
    except ValueError as e:
        fail(str(e))
    console.print(f"[green]✓[/] Created agent {record.name} ([cyan]{record.id}[/])")


@agent.command("list")
def agent_list():
    """List agents."""
    c = get_components()
    agents = c["store"].list_agents()
    if not agents:
        console.print("[yellow]No agents. Run [cyan]agentprog agent create <name>[/] to add one.[/]")
        return

    table = Table(title="Agents", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Level", justify="right")
    table.add_column("XP", justify="right")
    table.add_column("Achievements", justify="right")
    for record in agents:
        table.add_row(
            record.id,
            record.name,
            str(record.progress.level),
            str(record.progress.experience_points),
            str(len(record.progress.achievements)),
        )
    console.print(table)


@agent.command("show")
@click.argument("agent_id")
def agent_show(agent_id: str):
    """Show level, skill points and stats for an agent."""
    c = get_components()
    try:
        record = c["store"].get_agent(agent_id)
    except AgentNotFoundError:
        fail(f"Agent not found: {agent_id}")

    service = c["engine"].achievements
    info = service.get_level_info(record.progress)
    console.print(f"[bold]{record.name}[/] [dim]({record.id})[/]")
    level_line = "MAX" if info.is_max_level else f"{progress_bar(info.progress_percent)} {info.progress_percent}%"
    console.print(f"Level {info.level}  {level_line}  XP {info.xp}/{info.next_level_xp}")
    console.print(f"Skill points: {info.skill_points}")
    if record.progress.allocated_skills:
        allocated = ", ".join(f"{k}={v}" for k, v in sorted(record.progress.allocated_skills.items()))
        console.print(f"Skills: {allocated}")

    table = Table(show_header=False)
    table.add_column("Stat", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in service.get_stats_summary(record.stats).items():
        table.add_row(key.replace("_", " ").capitalize(), str(value))
    console.print(table)


@agent.command("message")
@click.argument("agent_id")
@click.argument("content")
@click.option("--role", type=click.Choice([r.value for r in MessageRole]), default=MessageRole.USER.value)
@click.option("--emotions", default=0, type=int, help="Emotions recognised in the message")
def agent_message(agent_id: str, content: str, role: str, emotions: int):
    """Send a chat message and apply its progression."""
    c = get_components()
    try:
        update = c["pipeline"].process_message(agent_id, content, MessageRole(role), emotions_detected=emotions)
    except AgentNotFoundError:
        fail(f"Agent not found: {agent_id}")
    stats = update.agent.stats
    console.print(f"[green]✓[/] Message stored ({stats.total_messages} total, {len(stats.unique_topics)} topics)")
    _print_update(update)


@agent.command("record")
@click.argument("agent_id")
@click.argument("kind", type=click.Choice(sorted(RECORDERS)))
def agent_record(agent_id: str, kind: str):
    """Record a relationship, dream, creative work, journal entry or conversation."""
    c = get_components()
    try:
        update = c["pipeline"].record_activity(agent_id, kind)
    except AgentNotFoundError:
        fail(f"Agent not found: {agent_id}")
    console.print(f"[green]✓[/] Recorded {kind.replace('_', ' ')}")
    _print_update(update)
