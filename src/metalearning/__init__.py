"""Meta-learning: pattern detection and learning profiles."""

from .events import create_learning_event
from .goals import generate_learning_goals
from .models import (
    ConversationMessage,
    LearningAdaptation,
    LearningGoal,
    LearningPattern,
    LearningProfile,
    MetaLearningState,
    SkillProgression,
)
from .patterns import create_adaptation, detect_patterns_from_conversation, detect_strategy, merge_patterns
from .profile import create_learning_profile, generate_recommendations, get_meta_learning_state
from .skills import update_skill_progression

__all__ = [
    "ConversationMessage",
    "LearningAdaptation",
    "LearningGoal",
    "LearningPattern",
    "LearningProfile",
    "MetaLearningState",
    "SkillProgression",
    "create_adaptation",
    "create_learning_event",
    "create_learning_profile",
    "detect_patterns_from_conversation",
    "detect_strategy",
    "generate_learning_goals",
    "generate_recommendations",
    "get_meta_learning_state",
    "merge_patterns",
    "update_skill_progression",
]
