"""Configuration loading and management."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .config_models import AppConfig

CONFIG_ENV_DIR = ".agentprog"

DEFAULT_CONFIG_YAML = """\
paths:
  db_path: ~/.agentprog/agents.db
  log_file: ~/.agentprog/agentprog.log

logging:
  level: INFO
  json: false

engine:
  conversation_window: 50
  default_horizon: short_term
  max_write_retries: 3
"""


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / CONFIG_ENV_DIR / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> AppConfig:
    """Load configuration as Pydantic model with validation.

    Raises:
        ValueError: The file is not valid YAML or fails validation.
    """
    data = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping, got {type(data).__name__}")

    try:
        return AppConfig.from_dict(data)
    except ValidationError as e:
        raise ValueError(f"Config validation failed: {e}")


def write_default_config(path: Path) -> Path:
    """Write the default config to ``path`` unless one exists already."""
    path = Path(path).expanduser()
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_YAML)
    return path
