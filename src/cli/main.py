"""CLI entry point for agentprog."""

import sys
from pathlib import Path
from typing import Optional

import click

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import achievements, agent, goals, init, learn, plan, skills
from cli.config import load_config_model
from cli.logging_config import setup_logging
from cli.utils import console


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ./config.yaml or ~/.agentprog/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Optional[Path]):
    """Agent progression - achievements, meta-learning and future plans."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    try:
        config = load_config_model(config_path)
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    level = "DEBUG" if verbose else config.logging.level
    setup_logging(json_mode=config.logging.json_output, level=level)


cli.add_command(init)
cli.add_command(agent)
cli.add_command(achievements)
cli.add_command(skills)
cli.add_command(learn)
cli.add_command(goals)
cli.add_command(plan)


def main():
    cli()


if __name__ == "__main__":
    main()
