"""CLI command modules."""

from .achievements import achievements
from .agent import agent
from .goals import goals
from .init import init
from .learn import learn
from .plan import plan
from .skills import skills

__all__ = [
    "init",
    "agent",
    "achievements",
    "skills",
    "learn",
    "goals",
    "plan",
]
