"""Keyword lexicons for topic, pattern, sentiment and strategy classification.

All classification in the engine is substring matching against these tables.
They live in one frozen, versioned object so a caller can swap in a new
table set (or a different classifier behind the same lookups) without
touching the detectors.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from shared_types import LearningPatternType, LearningStrategy

LEXICON_VERSION = "2024.1"


def _freeze(table: dict) -> Mapping:
    return MappingProxyType({k: tuple(v) for k, v in table.items()})


_TOPIC_DOMAINS = {
    "science": [
        "physics", "chemistry", "biology", "math", "science", "technology",
        "engineering", "medicine", "astronomy", "quantum", "evolution",
        "genetics", "neuroscience", "climate", "ecology", "research",
    ],
    "art": [
        "art", "music", "painting", "sculpture", "dance", "theater",
        "literature", "poetry", "film", "photography", "design",
        "architecture", "creative", "artistic", "aesthetic", "culture",
    ],
    "philosophy": [
        "philosophy", "ethics", "morality", "consciousness", "existence",
        "meaning", "truth", "reality", "knowledge", "wisdom", "logic",
        "metaphysics", "epistemology", "soul", "mind", "free will",
    ],
}

_PATTERN_KEYWORDS = {
    LearningPatternType.TOPIC_INTEREST: [
        "interested", "curious", "fascinated", "learn more", "tell me about", "what is",
    ],
    LearningPatternType.COMMUNICATION_STYLE: [
        "explain", "describe", "simpler", "detail", "brief", "elaborate",
    ],
    LearningPatternType.EMOTIONAL_RESPONSE: [
        "feel", "emotion", "happy", "sad", "excited", "frustrated", "calm",
    ],
    LearningPatternType.PROBLEM_SOLVING: [
        "solve", "figure out", "approach", "strategy", "solution", "method",
    ],
    LearningPatternType.MEMORY_RETENTION: [
        "remember", "recall", "forget", "earlier", "mentioned", "previously",
    ],
    LearningPatternType.RELATIONSHIP_BUILDING: [
        "trust", "friend", "connect", "understand", "relate", "bond",
    ],
}

_STRATEGY_INDICATORS = {
    LearningStrategy.EXPLORATION: ["new", "try", "different", "alternative", "what if", "experiment"],
    LearningStrategy.EXPLOITATION: ["best", "proven", "reliable", "always", "usually", "typically"],
    LearningStrategy.IMITATION: ["like", "similar to", "same as", "copy", "follow", "model"],
    LearningStrategy.EXPERIMENTATION: ["test", "see what happens", "trial", "attempt", "guess"],
    LearningStrategy.REFLECTION: ["think about", "consider", "analyze", "review", "reflect", "ponder"],
}

_POSITIVE_INDICATORS = ("thank", "great", "helpful", "perfect", "excellent", "good", "understand")
_NEGATIVE_INDICATORS = ("no", "wrong", "confused", "don't understand", "not helpful", "bad")

_STOP_WORDS = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "that", "with", "this", "from",
    "have", "will", "your", "about", "what", "when", "where", "which", "who", "why",
    "how", "can", "could", "should", "would", "there", "their", "they", "them", "then",
    "than", "into", "onto", "here", "just", "like", "some", "more", "most", "much",
    "been", "being", "also", "able", "make", "made", "does", "did", "done", "want",
})

_QUESTION_PREFIXES = frozenset({
    "what", "why", "how", "when", "where", "who", "which",
    "can", "could", "should", "would", "do", "does", "did", "is", "are", "will", "may", "might",
})


@dataclass(frozen=True)
class Lexicon:
    """Immutable bundle of keyword tables."""

    version: str = LEXICON_VERSION
    topic_domains: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: _freeze(_TOPIC_DOMAINS))
    pattern_keywords: Mapping[LearningPatternType, tuple[str, ...]] = field(
        default_factory=lambda: _freeze(_PATTERN_KEYWORDS)
    )
    strategy_indicators: Mapping[LearningStrategy, tuple[str, ...]] = field(
        default_factory=lambda: _freeze(_STRATEGY_INDICATORS)
    )
    positive_indicators: tuple[str, ...] = _POSITIVE_INDICATORS
    negative_indicators: tuple[str, ...] = _NEGATIVE_INDICATORS
    stop_words: frozenset[str] = _STOP_WORDS
    question_prefixes: frozenset[str] = _QUESTION_PREFIXES

    def topic_in_domain(self, topic: str, domain: str) -> bool:
        """Case-insensitive substring match of a topic against a domain table."""
        lower = topic.lower()
        return any(k in lower for k in self.topic_domains.get(domain, ()))


DEFAULT_LEXICON = Lexicon()
