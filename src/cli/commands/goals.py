"""Learning goal CLI commands."""

from datetime import datetime, timezone

import click
from rich.console import Console
from rich.table import Table

from agents import AgentNotFoundError
from cli.utils import fail, get_components, progress_bar
from metalearning.models import LearningGoal
from shared_types import GoalStatus, LearningPatternType, Priority, TrajectoryStatus

console = Console()

STATUS_STYLES = {
    TrajectoryStatus.AHEAD: "green",
    TrajectoryStatus.ON_TRACK: "cyan",
    TrajectoryStatus.BEHIND: "yellow",
    TrajectoryStatus.AT_RISK: "red",
}


@click.group()
def goals():
    """Learning goals and their trajectories."""
    pass


@goals.command("add")
@click.argument("agent_id")
@click.argument("title")
@click.option("-d", "--description", default="")
@click.option(
    "-c", "--category",
    type=click.Choice([t.value for t in LearningPatternType]),
    default=LearningPatternType.TOPIC_INTEREST.value,
)
@click.option("-p", "--priority", type=click.Choice([p.value for p in Priority]), default=Priority.MEDIUM.value)
@click.option("--target", "target_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Target date (YYYY-MM-DD)")
def goals_add(agent_id: str, title: str, description: str, category: str, priority: str, target_date):
    """Add a learning goal."""
    c = get_components()
    goal = LearningGoal(
        agent_id=agent_id,
        title=title,
        description=description,
        category=LearningPatternType(category),
        priority=Priority(priority),
        target_date=target_date.replace(tzinfo=timezone.utc) if target_date else None,
    )
    try:
        c["pipeline"].add_goal(goal)
    except AgentNotFoundError:
        fail(f"Agent not found: {agent_id}")
    console.print(f"[green]✓[/] Added goal [cyan]{goal.title}[/] [dim]({goal.id})[/]")


@goals.command("list")
@click.argument("agent_id")
def goals_list(agent_id: str):
    """List an agent's learning goals."""
    c = get_components()
    agent_goals = c["store"].get_goals(agent_id)
    if not agent_goals:
        console.print("[yellow]No goals. Run [cyan]agentprog goals add <agent> <title>[/] to add one.[/]")
        return

    table = Table(title="Learning Goals", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Progress")
    table.add_column("Status")
    table.add_column("Target", style="dim")
    for g in agent_goals:
        pct = g.progress_percentage
        table.add_row(
            g.id,
            g.title,
            f"{progress_bar(pct)} {pct:.0f}%",
            str(g.status),
            g.target_date.strftime("%Y-%m-%d") if g.target_date else "-",
        )
    console.print(table)


@goals.command("progress")
@click.argument("agent_id")
@click.argument("goal_id")
@click.argument("percent", type=click.FloatRange(0, 100))
def goals_progress(agent_id: str, goal_id: str, percent: float):
    """Set a goal's progress percentage."""
    c = get_components()
    goal = c["store"].get_goal(agent_id, goal_id)
    if goal is None:
        fail(f"Goal not found: {goal_id}")

    update = {"progress_percentage": percent}
    if percent >= 100 and goal.status != GoalStatus.COMPLETED:
        update.update(status=GoalStatus.COMPLETED, achieved_at=datetime.now(timezone.utc))
    c["store"].save_goal(goal.model_copy(update=update))
    console.print(f"[green]✓[/] {goal.title}: {percent:.0f}%")


@goals.command("trajectory")
@click.argument("agent_id")
@click.argument("goal_id")
def goals_trajectory(agent_id: str, goal_id: str):
    """Analyze a goal's velocity, projected completion and risks."""
    c = get_components()
    goal = c["store"].get_goal(agent_id, goal_id)
    if goal is None:
        fail(f"Goal not found: {goal_id}")

    t = c["engine"].analyze_goal_trajectory(goal)
    style = STATUS_STYLES.get(t.status, "white")
    console.print(f"[bold]{t.goal_title}[/]  [{style}]{t.status}[/]")
    pct = t.current_progress * 100
    console.print(f"Progress {progress_bar(pct)} {pct:.0f}%")
    console.print(
        f"Velocity {t.progress_velocity:.2f}%/day (needed {t.required_velocity:.2f}), "
        f"projected {t.projected_completion_date.strftime('%Y-%m-%d')}, {t.days_ahead:+d} day(s)"
    )

    if t.upcoming_milestones:
        console.print("\n[bold]Milestones[/]")
        for m in t.upcoming_milestones:
            console.print(f"  {m.projected_date.strftime('%Y-%m-%d')}  {m.description}")
    if t.risk_factors:
        console.print("\n[bold]Risks[/]")
        for r in t.risk_factors:
            console.print(f"  ({r.severity}) {r.factor}" + (f" [dim]- {r.mitigation}[/]" if r.mitigation else ""))
    if t.recommendations:
        console.print("\n[bold]Recommendations[/]")
        for rec in t.recommendations:
            console.print(f"  - {rec}")
