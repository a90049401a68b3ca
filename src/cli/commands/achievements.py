"""Achievement CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from agents import AgentNotFoundError
from cli.utils import fail, get_components, progress_bar

console = Console()


@click.group()
def achievements():
    """Achievement catalog and progress."""
    pass


@achievements.command("list")
@click.argument("agent_id")
@click.option("--locked/--unlocked", default=False, help="Show locked achievements with progress")
@click.option("-n", "--limit", default=10, help="Max locked achievements shown")
def achievements_list(agent_id: str, locked: bool, limit: int):
    """List an agent's unlocked (default) or locked achievements."""
    c = get_components()
    try:
        record = c["store"].get_agent(agent_id)
    except AgentNotFoundError:
        fail(f"Agent not found: {agent_id}")
    service = c["engine"].achievements

    if not locked:
        unlocked = service.get_unlocked_achievements(record.progress)
        if not unlocked:
            console.print("[yellow]No achievements unlocked yet.[/]")
            return
        table = Table(title=f"Unlocked ({len(unlocked)})", show_header=True)
        table.add_column("", width=2)
        table.add_column("Name", style="cyan")
        table.add_column("Rarity")
        table.add_column("XP", justify="right")
        table.add_column("Unlocked", style="dim")
        for a in unlocked:
            table.add_row(a.icon, a.name, str(a.rarity), str(a.reward_xp), a.unlocked_at.strftime("%Y-%m-%d"))
        console.print(table)
        return

    pending = service.get_locked_achievements(record.progress, record.stats)[:limit]
    table = Table(title="Closest locked achievements", show_header=True)
    table.add_column("", width=2)
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Progress")
    for a in pending:
        table.add_row(a.icon, a.name, a.description, f"{progress_bar(a.progress)} {a.progress}%")
    console.print(table)
