"""Init CLI command."""

from pathlib import Path

import click
from rich.console import Console

from cli.config import CONFIG_ENV_DIR, write_default_config
from cli.utils import get_components

console = Console()

SAMPLE_AGENT_NAME = "Ada"

SAMPLE_MESSAGES = [
    "Hello there! Could you explain how photosynthesis works?",
    "Can you summarize that in a few bullet points?",
    "Thank you, that was really helpful!",
]


@click.command()
@click.option("--samples", is_flag=True, help="Create a sample agent with a short conversation")
@click.pass_context
def init(ctx: click.Context, samples: bool):
    """Initialize config, database, and optionally sample data."""
    config_path = (ctx.find_root().obj or {}).get("config_path") or Path.home() / CONFIG_ENV_DIR / "config.yaml"
    existed = Path(config_path).expanduser().exists()
    written = write_default_config(config_path)
    if existed:
        console.print(f"[dim]Config exists: {written}[/]")
    else:
        console.print(f"[green]✓[/] Created config: {written}")

    c = get_components(written)
    console.print(f"[green]✓[/] database: {c['store'].db_path}")

    if samples:
        agent = c["store"].create_agent(SAMPLE_AGENT_NAME)
        for text in SAMPLE_MESSAGES:
            update = c["pipeline"].process_message(agent.id, text)
        console.print(
            f"[green]✓[/] Sample agent: {agent.name} ([dim]{agent.id}[/]) "
            f"level {update.agent.progress.level}, {len(update.agent.progress.achievements)} achievement(s)"
        )

    console.print("\n[bold]Next steps:[/]")
    console.print("  1. Run [cyan]agentprog agent create <name>[/] to add an agent")
    console.print("  2. Run [cyan]agentprog agent message <id> 'Hello'[/] to start a conversation")
    console.print("  3. Run [cyan]agentprog plan show <id>[/] to see the agent's future plan")
