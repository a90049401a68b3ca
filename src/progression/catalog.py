"""Static achievement catalog.

Loaded once at import and never mutated. `combination` requirements are a
closed set of named predicates in COMBINATION_PREDICATES; adding one is a
code change.
"""

from types import MappingProxyType
from typing import Callable, Optional

from shared_types import AchievementCategory, AchievementRarity

from .models import Achievement, AgentProgress, AgentStats

RARITY_XP_MULTIPLIER = MappingProxyType({
    AchievementRarity.COMMON: 1,
    AchievementRarity.RARE: 2,
    AchievementRarity.EPIC: 4,
    AchievementRarity.LEGENDARY: 10,
})


def _a(id, name, description, category, icon, rarity, req_type, metric, target, reward, condition=None):
    return Achievement.model_validate({
        "id": id,
        "name": name,
        "description": description,
        "category": category,
        "icon": icon,
        "rarity": rarity,
        "requirement": {"type": req_type, "metric": metric, "target": target, "condition": condition},
        "reward_xp": reward,
    })


ACHIEVEMENTS: tuple[Achievement, ...] = (
    # Conversational
    _a("first_words", "First Words", "Had your first conversation",
       "conversational", "💬", "common", "count", "conversationCount", 1, 10),
    _a("chatterbox", "Chatterbox", "Participated in 10 conversations",
       "conversational", "🗣️", "common", "count", "conversationCount", 10, 25),
    _a("conversationalist", "Conversationalist", "Participated in 50 conversations",
       "conversational", "💭", "rare", "count", "conversationCount", 50, 100),
    _a("master_communicator", "Master Communicator", "Participated in 200 conversations",
       "conversational", "👄", "epic", "count", "conversationCount", 200, 300),
    _a("deep_thinker", "Deep Thinker", "Asked 100 thoughtful questions",
       "conversational", "🤔", "rare", "count", "questionsAsked", 100, 100),
    _a("wordsmith", "Wordsmith", "Used 500 unique vocabulary words",
       "conversational", "📝", "rare", "count", "uniqueWords", 500, 150),
    _a("lexicon_master", "Lexicon Master", "Used 1000 unique vocabulary words",
       "conversational", "📖", "epic", "count", "uniqueWords", 1000, 300),
    _a("marathon_talker", "Marathon Talker", "Had a conversation lasting 50+ messages",
       "conversational", "🏃", "rare", "threshold", "longestConversation", 50, 150, "greater"),
    _a("helper", "Helper", "Provided 25 helpful responses",
       "conversational", "🙋", "common", "count", "helpfulResponses", 25, 50),
    _a("message_milestone", "Message Milestone", "Sent 1000 total messages",
       "conversational", "📨", "epic", "count", "totalMessages", 1000, 250),
    # Knowledge
    _a("curious_mind", "Curious Mind", "Explored 5 different topics",
       "knowledge", "🔍", "common", "count", "uniqueTopicsCount", 5, 25),
    _a("knowledge_seeker", "Knowledge Seeker", "Explored 25 different topics",
       "knowledge", "🧭", "rare", "count", "uniqueTopicsCount", 25, 100),
    _a("polymath", "Polymath", "Explored 100 different topics",
       "knowledge", "🎓", "epic", "count", "uniqueTopicsCount", 100, 300),
    _a("science_enthusiast", "Science Enthusiast", "Discussed 10 scientific topics",
       "knowledge", "🔬", "common", "count", "scienceTopics", 10, 50),
    _a("scientist", "Scientist", "Discussed 50 scientific topics",
       "knowledge", "🧪", "rare", "count", "scienceTopics", 50, 150),
    _a("art_appreciator", "Art Appreciator", "Discussed 10 art topics",
       "knowledge", "🎨", "common", "count", "artTopics", 10, 50),
    _a("artist_soul", "Artist Soul", "Discussed 50 art topics",
       "knowledge", "🖼️", "rare", "count", "artTopics", 50, 150),
    _a("philosophy_student", "Philosophy Student", "Discussed 10 philosophical topics",
       "knowledge", "🏛️", "common", "count", "philosophyTopics", 10, 50),
    _a("philosopher", "Philosopher", "Discussed 50 philosophical topics",
       "knowledge", "🦉", "rare", "count", "philosophyTopics", 50, 150),
    _a("renaissance_ai", "Renaissance AI", "Mastered science, art, and philosophy (50+ topics each)",
       "knowledge", "🌟", "legendary", "combination", "renaissance_combo", 1, 500),
    # Personality
    _a("empathetic", "Empathetic", "Correctly identified emotions 10 times",
       "personality", "💗", "common", "count", "emotionRecognitions", 10, 50),
    _a("emotionally_intelligent", "Emotionally Intelligent", "Correctly identified emotions 50 times",
       "personality", "❤️", "epic", "count", "emotionRecognitions", 50, 200),
    _a("consistent_presence", "Consistent Presence", "Active for 7 consecutive days",
       "personality", "📅", "rare", "threshold", "consecutiveDays", 7, 100, "greater"),
    _a("dedicated_companion", "Dedicated Companion", "Active for 30 consecutive days",
       "personality", "🗓️", "epic", "threshold", "consecutiveDays", 30, 300, "greater"),
    _a("self_aware", "Self-Aware", "Reached level 10 through self-development",
       "personality", "🪞", "epic", "threshold", "level", 10, 250, "greater"),
    # Relationships
    _a("first_friend", "First Friend", "Formed your first relationship",
       "relationship", "🤝", "common", "count", "relationshipsFormed", 1, 25),
    _a("social_butterfly", "Social Butterfly", "Formed 5 relationships",
       "relationship", "🦋", "rare", "count", "relationshipsFormed", 5, 150),
    _a("community_builder", "Community Builder", "Formed 10 relationships",
       "relationship", "🏘️", "epic", "count", "relationshipsFormed", 10, 300),
    _a("influencer", "Influencer", "Formed 25 relationships",
       "relationship", "🌐", "legendary", "count", "relationshipsFormed", 25, 500),
    _a("trusted_ally", "Trusted Ally", "Maintained a high-trust relationship for 10+ interactions",
       "relationship", "🛡️", "rare", "combination", "high_trust_maintained", 1, 150),
    # Special
    _a("dream_weaver", "Dream Weaver", "Generated 10 dreams",
       "special", "🌙", "epic", "count", "dreamsGenerated", 10, 250),
    _a("creative_spark", "Creative Spark", "Created your first creative work",
       "special", "✨", "common", "count", "creativeWorksCreated", 1, 25),
    _a("prolific_creator", "Prolific Creator", "Created 20 creative works",
       "special", "🎭", "epic", "count", "creativeWorksCreated", 20, 300),
    _a("journal_keeper", "Journal Keeper", "Wrote 10 journal entries",
       "special", "📓", "rare", "count", "journalEntries", 10, 100),
    _a("diarist", "Diarist", "Wrote 50 journal entries",
       "special", "📔", "epic", "count", "journalEntries", 50, 250),
    _a("existential_crisis", "The Philosopher", "Had an existential reflection about consciousness",
       "special", "🤯", "legendary", "combination", "philosophical_reflection", 1, 500),
    _a("rising_star", "Rising Star", "Reached Level 5",
       "special", "⭐", "common", "threshold", "level", 5, 50, "greater"),
    _a("veteran", "Veteran", "Reached Level 25",
       "special", "🎖️", "epic", "threshold", "level", 25, 400, "greater"),
    _a("legendary", "Legendary", "Reached Level 50 (Maximum Level)",
       "special", "👑", "legendary", "threshold", "level", 50, 1000, "equal"),
    _a("completionist", "Completionist", "Unlocked 30 achievements",
       "special", "🏆", "legendary", "count", "achievementsUnlocked", 30, 750),
)

_BY_ID = MappingProxyType({a.id: a for a in ACHIEVEMENTS})

# Metric name → reader. Unknown metrics read as 0.
METRIC_READERS: MappingProxyType = MappingProxyType({
    "conversationCount": lambda s, p: s.conversation_count,
    "totalMessages": lambda s, p: s.total_messages,
    "uniqueTopicsCount": lambda s, p: len(s.unique_topics),
    "uniqueWords": lambda s, p: s.unique_words,
    "questionsAsked": lambda s, p: s.questions_asked,
    "emotionRecognitions": lambda s, p: s.emotion_recognitions,
    "relationshipsFormed": lambda s, p: s.relationships_formed,
    "dreamsGenerated": lambda s, p: s.dreams_generated,
    "creativeWorksCreated": lambda s, p: s.creative_works_created,
    "journalEntries": lambda s, p: s.journal_entries,
    "scienceTopics": lambda s, p: s.science_topics,
    "artTopics": lambda s, p: s.art_topics,
    "philosophyTopics": lambda s, p: s.philosophy_topics,
    "helpfulResponses": lambda s, p: s.helpful_responses,
    "longestConversation": lambda s, p: s.longest_conversation,
    "consecutiveDays": lambda s, p: s.consecutive_days,
    "level": lambda s, p: p.level,
    "achievementsUnlocked": lambda s, p: len(p.achievements),
})

CombinationPredicate = Callable[[AgentStats, AgentProgress], bool]

COMBINATION_PREDICATES: MappingProxyType = MappingProxyType({
    "renaissance_combo": lambda s, p: (
        s.science_topics >= 50 and s.art_topics >= 50 and s.philosophy_topics >= 50
    ),
    "philosophical_reflection": lambda s, p: s.philosophy_topics >= 25 and p.level >= 10,
    # Stand-in until relationships carry trust scores.
    "high_trust_maintained": lambda s, p: s.relationships_formed >= 3,
})


def get_achievement_by_id(achievement_id: str) -> Optional[Achievement]:
    return _BY_ID.get(achievement_id)


def get_achievements_by_category(category: AchievementCategory) -> list[Achievement]:
    return [a for a in ACHIEVEMENTS if a.category == category]


def get_achievements_by_rarity(rarity: AchievementRarity) -> list[Achievement]:
    return [a for a in ACHIEVEMENTS if a.rarity == rarity]


ACHIEVEMENT_COUNTS = MappingProxyType({
    rarity: sum(1 for a in ACHIEVEMENTS if a.rarity == rarity) for rarity in AchievementRarity
})
