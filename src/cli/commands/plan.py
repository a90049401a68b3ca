"""Future plan CLI commands."""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from agents import AgentNotFoundError
from cli.utils import fail, get_components
from shared_types import Outlook, PlanHorizon

console = Console()

OUTLOOK_STYLES = {Outlook.POSITIVE: "green", Outlook.NEUTRAL: "cyan", Outlook.CONCERNING: "red"}


@click.group()
def plan():
    """Predictive future plans."""
    pass


@plan.command("show")
@click.argument("agent_id")
@click.option("-h", "--horizon", type=click.Choice([h.value for h in PlanHorizon]), default=None,
              help="Plan horizon (default from config)")
def plan_show(agent_id: str, horizon: Optional[str]):
    """Generate and print an agent's future plan."""
    c = get_components()
    store = c["store"]
    try:
        record = store.get_agent(agent_id)
    except AgentNotFoundError:
        fail(f"Agent not found: {agent_id}")

    chosen = PlanHorizon(horizon) if horizon else c["config"].engine.default_horizon
    future = c["engine"].generate_future_plan(
        record, store.get_goals(agent_id), store.get_timeline_events(agent_id), chosen
    )
    summary = future.summary
    style = OUTLOOK_STYLES.get(summary.overall_outlook, "white")

    console.print(f"[bold]Plan for {record.name}[/] ({future.plan_horizon}, valid until "
                  f"{future.valid_until.strftime('%Y-%m-%d %H:%M')})")
    console.print(f"Outlook: [{style}]{summary.overall_outlook}[/]")
    if summary.key_focus_areas:
        console.print(f"Focus: {', '.join(summary.key_focus_areas)}")
    console.print(f"Opportunity: {summary.biggest_opportunity}")
    console.print(f"Risk: {summary.biggest_risk}")

    if future.predictions:
        table = Table(title="Predictions", show_header=True)
        table.add_column("When", style="dim")
        table.add_column("Prediction", style="cyan")
        table.add_column("Confidence")
        for p in future.predictions:
            table.add_row(p.predicted_date.strftime("%Y-%m-%d"), p.title, f"{p.confidence} ({p.confidence_score:.2f})")
        console.print(table)

    if future.upcoming_activities:
        console.print("\n[bold]Schedule[/]")
        for a in future.upcoming_activities:
            console.print(f"  {a.scheduled_for.strftime('%Y-%m-%d %H:%M')}  {a.title} ({a.duration} min)")

    if future.suggested_goals:
        console.print("\n[bold]Suggested goals[/]")
        for g in future.suggested_goals:
            console.print(f"  - {g.title}: [dim]{g.rationale}[/]")

    for insight in future.insights:
        action = f" [dim]-> {insight.suggested_action}[/]" if insight.suggested_action else ""
        console.print(f"\n[bold]{insight.title}[/] {insight.description}{action}")
