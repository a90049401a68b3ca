"""Meta-learning CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from agents import AgentNotFoundError
from cli.utils import fail, get_components
from shared_types import LearningPatternType

console = Console()


@click.group()
def learn():
    """Meta-learning: conversation patterns, profile, skill progression."""
    pass


@learn.command("analyze")
@click.argument("agent_id")
def learn_analyze(agent_id: str):
    """Detect learning patterns in the agent's recent conversation."""
    c = get_components()
    try:
        result = c["pipeline"].analyze_conversation(agent_id)
    except AgentNotFoundError:
        fail(f"Agent not found: {agent_id}")

    if not result.patterns:
        console.print("[yellow]No patterns detected. Send a few messages first.[/]")
        return

    table = Table(title="Learning Patterns", show_header=True)
    table.add_column("Type", style="cyan")
    table.add_column("Outcome")
    table.add_column("Effectiveness", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Seen", justify="right")
    for p in result.patterns:
        table.add_row(
            p.type.label, str(p.outcome), f"{p.effectiveness:.2f}", f"{p.confidence:.2f}", str(p.observation_count)
        )
    console.print(table)
    if result.event:
        console.print(f"[dim]Learning value {result.event.learning_value:.2f}[/]")


@learn.command("profile")
@click.argument("agent_id")
def learn_profile(agent_id: str):
    """Show the agent's learning profile, stats and recommendations."""
    c = get_components()
    store = c["store"]
    try:
        record = store.get_agent(agent_id)
    except AgentNotFoundError:
        fail(f"Agent not found: {agent_id}")

    state = c["engine"].get_meta_learning_state(
        record, store.get_patterns(agent_id), store.get_adaptations(agent_id), store.get_goals(agent_id)
    )
    profile = state.profile
    caps = profile.capabilities

    console.print(f"[bold]Learning profile: {record.name}[/]")
    table = Table(show_header=False)
    table.add_column("Capability", style="cyan")
    table.add_column("Score", justify="right")
    for label, value in (
        ("Speed of learning", caps.speed_of_learning),
        ("Retention", caps.retention_rate),
        ("Transferability", caps.transferability),
        ("Adaptability", caps.adaptability),
        ("Creativity", caps.creativity),
    ):
        table.add_row(label, f"{value:.2f}")
    console.print(table)

    console.print(f"Preferred strategy: [cyan]{profile.preferences.preferred_strategy}[/]")
    if profile.strengths:
        console.print(f"Strengths: {', '.join(t.label for t in profile.strengths)}")
    if profile.weaknesses:
        console.print(f"Weaknesses: {', '.join(t.label for t in profile.weaknesses)}")
    console.print(
        f"Patterns {state.stats.total_patterns} "
        f"([green]+{state.stats.positive_patterns}[/] / [red]-{state.stats.negative_patterns}[/]), "
        f"streak {state.stats.learning_streak} day(s)"
    )

    if state.recommendations:
        console.print("\n[bold]Recommendations[/]")
        for rec in state.recommendations:
            console.print(f"  ({rec.priority}) [bold]{rec.title}[/]: {rec.description}")


@learn.command("suggest")
@click.argument("agent_id")
def learn_suggest(agent_id: str):
    """Generate and save learning goals from detected patterns."""
    c = get_components()
    try:
        created = c["pipeline"].generate_goals(agent_id)
    except AgentNotFoundError:
        fail(f"Agent not found: {agent_id}")
    if not created:
        console.print("[yellow]No goals suggested. Run [cyan]agentprog learn analyze[/] first.[/]")
        return
    for goal in created:
        console.print(f"[green]✓[/] {goal.title} [dim]({goal.id})[/]")


@learn.command("skill")
@click.argument("agent_id")
@click.argument("category", type=click.Choice([t.value for t in LearningPatternType]))
def learn_skill(agent_id: str, category: str):
    """Update skill progression for a pattern category."""
    c = get_components()
    try:
        skill = c["pipeline"].update_skill(agent_id, LearningPatternType(category))
    except AgentNotFoundError:
        fail(f"Agent not found: {agent_id}")
    console.print(
        f"[cyan]{skill.skill_name}[/] level {skill.current_level} "
        f"({skill.experience_points:.0f}/{skill.points_to_next_level} XP)"
    )
