"""SQLite persistence for agent documents and their learning records.

Agents are stored as one JSON document per row with a ``version`` column.
Writes are conditional on the version read, so two writers racing on the
same agent cannot silently overwrite each other.
"""

import sqlite3
import uuid
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional, Type, TypeVar

import structlog
from pydantic import BaseModel

from db import transaction
from metalearning.models import (
    ConversationMessage,
    LearningAdaptation,
    LearningEvent,
    LearningGoal,
    LearningPattern,
    SkillProgression,
)
from planning.models import TimelineEvent
from progression.models import AgentRecord
from timeutil import utcnow

logger = structlog.get_logger()

M = TypeVar("M", bound=BaseModel)

# Child tables holding one JSON document per row, keyed by (agent_id, id).
DOCUMENT_TABLES = (
    "learning_patterns",
    "learning_adaptations",
    "learning_goals",
    "learning_events",
    "skill_progressions",
    "timeline_events",
)


class AgentNotFoundError(KeyError):
    """Raised when an agent id has no stored record."""


class StaleRecordError(Exception):
    """Raised when a conditional write loses to a concurrent update."""

    def __init__(self, agent_id: str, expected_version: int):
        super().__init__(f"Agent {agent_id} changed since version {expected_version}")
        self.agent_id = agent_id
        self.expected_version = expected_version


class AgentStore:
    """SQLite store for agents, messages and meta-learning documents."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_tables()

    def _init_tables(self):
        with transaction(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS agents (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL DEFAULT '',
                    document TEXT NOT NULL,
                    version INTEGER NOT NULL DEFAULT 0,
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS messages (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    agent_id TEXT NOT NULL,
                    role TEXT NOT NULL CHECK(role IN ('user','agent')),
                    content TEXT NOT NULL,
                    timestamp TIMESTAMP NOT NULL
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_messages_agent ON messages(agent_id, timestamp)")
            for table in DOCUMENT_TABLES:
                conn.execute(f"""
                    CREATE TABLE IF NOT EXISTS {table} (
                        id TEXT NOT NULL,
                        agent_id TEXT NOT NULL,
                        document TEXT NOT NULL,
                        updated_at TIMESTAMP NOT NULL,
                        PRIMARY KEY (agent_id, id)
                    )
                """)

    # Agents

    def create_agent(
        self,
        name: str,
        agent_id: Optional[str] = None,
        dynamic_traits: Optional[dict[str, float]] = None,
    ) -> AgentRecord:
        record = AgentRecord(
            id=agent_id or uuid.uuid4().hex[:12],
            name=name,
            dynamic_traits=dynamic_traits or {},
            version=0,
        )
        now = utcnow().isoformat()
        try:
            with transaction(self.db_path) as conn:
                conn.execute(
                    """INSERT INTO agents (id, name, document, version, created_at, updated_at)
                    VALUES (?, ?, ?, 0, ?, ?)""",
                    (record.id, record.name, self._dump_agent(record), now, now),
                )
        except sqlite3.IntegrityError as e:
            raise ValueError(f"Agent {record.id} already exists") from e
        except sqlite3.Error as e:
            logger.error("agent_store_error", op="create_agent", agent_id=record.id, error=str(e))
            raise
        logger.info("agent_created", agent_id=record.id, name=name)
        return record

    def get_agent(self, agent_id: str) -> AgentRecord:
        with transaction(self.db_path, row_factory=True) as conn:
            row = conn.execute("SELECT document, version FROM agents WHERE id = ?", (agent_id,)).fetchone()
        if row is None:
            raise AgentNotFoundError(agent_id)
        return self._load_agent(row)

    def list_agents(self) -> list[AgentRecord]:
        with transaction(self.db_path, row_factory=True) as conn:
            rows = conn.execute("SELECT document, version FROM agents ORDER BY created_at").fetchall()
        return [self._load_agent(r) for r in rows]

    def save_agent(self, record: AgentRecord) -> AgentRecord:
        """Write ``record`` if nobody else has since its version was read.

        Returns:
            The record with its new version.

        Raises:
            AgentNotFoundError: The agent does not exist.
            StaleRecordError: The stored version moved on.
        """
        try:
            with transaction(self.db_path) as conn:
                cursor = conn.execute(
                    """UPDATE agents SET name = ?, document = ?, version = version + 1, updated_at = ?
                    WHERE id = ? AND version = ?""",
                    (record.name, self._dump_agent(record), utcnow().isoformat(), record.id, record.version),
                )
                if cursor.rowcount == 0:
                    exists = conn.execute("SELECT 1 FROM agents WHERE id = ?", (record.id,)).fetchone()
                    if exists is None:
                        raise AgentNotFoundError(record.id)
                    raise StaleRecordError(record.id, record.version)
        except sqlite3.Error as e:
            logger.error("agent_store_error", op="save_agent", agent_id=record.id, error=str(e))
            raise
        return record.model_copy(update={"version": record.version + 1})

    def delete_agent(self, agent_id: str) -> bool:
        with transaction(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM agents WHERE id = ?", (agent_id,))
            conn.execute("DELETE FROM messages WHERE agent_id = ?", (agent_id,))
            for table in DOCUMENT_TABLES:
                conn.execute(f"DELETE FROM {table} WHERE agent_id = ?", (agent_id,))
        return cursor.rowcount > 0

    @staticmethod
    def _dump_agent(record: AgentRecord) -> str:
        return record.model_dump_json(exclude={"version"})

    @staticmethod
    def _load_agent(row) -> AgentRecord:
        record = AgentRecord.model_validate_json(row["document"])
        return record.model_copy(update={"version": row["version"]})

    # Messages

    def add_message(self, agent_id: str, message: ConversationMessage) -> None:
        with transaction(self.db_path) as conn:
            conn.execute(
                "INSERT INTO messages (agent_id, role, content, timestamp) VALUES (?, ?, ?, ?)",
                (agent_id, str(message.role), message.content, message.timestamp.isoformat()),
            )

    def get_messages(self, agent_id: str, limit: int = 50) -> list[ConversationMessage]:
        """Most recent ``limit`` messages in chronological order."""
        with transaction(self.db_path, row_factory=True) as conn:
            rows = conn.execute(
                """SELECT role, content, timestamp FROM messages WHERE agent_id = ?
                ORDER BY timestamp DESC, id DESC LIMIT ?""",
                (agent_id, limit),
            ).fetchall()
        return [
            ConversationMessage(role=r["role"], content=r["content"], timestamp=r["timestamp"])
            for r in reversed(rows)
        ]

    def count_messages_on(self, agent_id: str, day: date) -> int:
        start = datetime.combine(day, datetime.min.time()).isoformat()
        end = datetime.combine(day + timedelta(days=1), datetime.min.time()).isoformat()
        with transaction(self.db_path) as conn:
            row = conn.execute(
                """SELECT COUNT(*) FROM messages WHERE agent_id = ?
                AND substr(timestamp, 1, 19) >= ? AND substr(timestamp, 1, 19) < ?""",
                (agent_id, start, end),
            ).fetchone()
        return row[0]

    # Documents

    def _put(self, table: str, agent_id: str, doc_id: str, model: BaseModel) -> None:
        try:
            with transaction(self.db_path) as conn:
                conn.execute(
                    f"""INSERT INTO {table} (id, agent_id, document, updated_at) VALUES (?, ?, ?, ?)
                    ON CONFLICT(agent_id, id) DO UPDATE SET
                        document = excluded.document, updated_at = excluded.updated_at""",
                    (doc_id, agent_id, model.model_dump_json(), utcnow().isoformat()),
                )
        except sqlite3.Error as e:
            logger.error("agent_store_error", op=f"put_{table}", agent_id=agent_id, error=str(e))
            raise

    def _all(self, table: str, agent_id: str, model: Type[M]) -> list[M]:
        with transaction(self.db_path, row_factory=True) as conn:
            rows = conn.execute(
                f"SELECT document FROM {table} WHERE agent_id = ? ORDER BY rowid", (agent_id,)
            ).fetchall()
        return [model.model_validate_json(r["document"]) for r in rows]

    def save_patterns(self, agent_id: str, patterns: list[LearningPattern]) -> None:
        for p in patterns:
            self._put("learning_patterns", agent_id, p.id, p)

    def get_patterns(self, agent_id: str) -> list[LearningPattern]:
        return self._all("learning_patterns", agent_id, LearningPattern)

    def save_adaptation(self, adaptation: LearningAdaptation) -> None:
        self._put("learning_adaptations", adaptation.agent_id, adaptation.id, adaptation)

    def get_adaptations(self, agent_id: str) -> list[LearningAdaptation]:
        return self._all("learning_adaptations", agent_id, LearningAdaptation)

    def save_goal(self, goal: LearningGoal) -> None:
        self._put("learning_goals", goal.agent_id, goal.id, goal)

    def get_goals(self, agent_id: str) -> list[LearningGoal]:
        return self._all("learning_goals", agent_id, LearningGoal)

    def get_goal(self, agent_id: str, goal_id: str) -> Optional[LearningGoal]:
        with transaction(self.db_path, row_factory=True) as conn:
            row = conn.execute(
                "SELECT document FROM learning_goals WHERE agent_id = ? AND id = ?", (agent_id, goal_id)
            ).fetchone()
        return LearningGoal.model_validate_json(row["document"]) if row else None

    def save_learning_event(self, event: LearningEvent) -> None:
        self._put("learning_events", event.agent_id, event.id, event)

    def get_learning_events(self, agent_id: str) -> list[LearningEvent]:
        return self._all("learning_events", agent_id, LearningEvent)

    def save_skill(self, agent_id: str, skill: SkillProgression) -> None:
        self._put("skill_progressions", agent_id, str(skill.category), skill)

    def get_skills(self, agent_id: str) -> list[SkillProgression]:
        return self._all("skill_progressions", agent_id, SkillProgression)

    def add_timeline_event(self, agent_id: str, event: TimelineEvent) -> None:
        self._put("timeline_events", agent_id, event.id, event)

    def get_timeline_events(self, agent_id: str, days: int = 30) -> list[TimelineEvent]:
        cutoff = utcnow() - timedelta(days=days)
        return [e for e in self._all("timeline_events", agent_id, TimelineEvent) if e.timestamp >= cutoff]
