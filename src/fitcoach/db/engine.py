"""Database engine setup and initialization."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator
from uuid import uuid4

import aiosqlite

from ..config import get_settings


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_settings().data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "fitcoach.db"


def new_id() -> str:
    """Generate a row identifier."""
    return str(uuid4())


def to_db_time(value: datetime) -> str:
    """Store timestamps as fixed-width UTC ISO strings so they sort as text."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def from_db_time(value: str | None) -> datetime | None:
    """Parse a stored timestamp."""
    if not value:
        return None
    return datetime.fromisoformat(value)


def utcnow() -> str:
    """Current time in storage format."""
    return to_db_time(datetime.now(timezone.utc))


@asynccontextmanager
async def connect(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection with foreign keys enforced and row access by name."""
    async with aiosqlite.connect(db_path) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        yield db


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        await db.execute("""
            CREATE TABLE IF NOT EXISTS clients (
                id TEXT PRIMARY KEY,
                trainer_id TEXT NOT NULL,
                name TEXT NOT NULL,
                age INTEGER NOT NULL,
                gender TEXT NOT NULL,
                height INTEGER,
                weight REAL,
                experience TEXT NOT NULL,
                goals TEXT NOT NULL,
                training_frequency INTEGER NOT NULL,
                equipment TEXT NOT NULL,
                injuries TEXT,
                time_per_session INTEGER NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

        # Generated program documents (versioned JSON)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_programs (
                id TEXT PRIMARY KEY,
                client_id TEXT NOT NULL,
                trainer_id TEXT NOT NULL,
                program_data TEXT NOT NULL,
                weeks_duration INTEGER NOT NULL,
                split TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                FOREIGN KEY (client_id) REFERENCES clients(id) ON DELETE CASCADE
            )
        """)

        # One current nutrition plan per client
        await db.execute("""
            CREATE TABLE IF NOT EXISTS nutrition_plans (
                id TEXT PRIMARY KEY,
                client_id TEXT NOT NULL UNIQUE,
                trainer_id TEXT NOT NULL,
                plan_data TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                FOREIGN KEY (client_id) REFERENCES clients(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS readiness_scores (
                id TEXT PRIMARY KEY,
                client_id TEXT NOT NULL,
                trainer_id TEXT NOT NULL,
                date TEXT NOT NULL,
                sleep_hours REAL NOT NULL,
                stress_level TEXT NOT NULL,
                muscle_soreness TEXT NOT NULL,
                energy_level TEXT NOT NULL,
                score INTEGER NOT NULL,
                recommendation TEXT NOT NULL,
                created_at TEXT NOT NULL,
                FOREIGN KEY (client_id) REFERENCES clients(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_sessions (
                id TEXT PRIMARY KEY,
                client_id TEXT NOT NULL,
                program_id TEXT NOT NULL,
                trainer_id TEXT NOT NULL,
                session_date TEXT NOT NULL,
                week_number INTEGER NOT NULL,
                day_name TEXT NOT NULL,
                completed INTEGER NOT NULL DEFAULT 0,
                notes TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                FOREIGN KEY (client_id) REFERENCES clients(id) ON DELETE CASCADE,
                FOREIGN KEY (program_id) REFERENCES workout_programs(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercise_logs (
                id TEXT PRIMARY KEY,
                session_id TEXT NOT NULL,
                exercise_name TEXT NOT NULL,
                sets_completed INTEGER NOT NULL,
                reps_completed TEXT NOT NULL,
                weight_used TEXT NOT NULL,
                rpe INTEGER,
                notes TEXT,
                created_at TEXT NOT NULL,
                FOREIGN KEY (session_id) REFERENCES workout_sessions(id) ON DELETE CASCADE
            )
        """)

        # Indexes for owner-scoped queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_clients_trainer
            ON clients(trainer_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_programs_client
            ON workout_programs(client_id, trainer_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_readiness_client_date
            ON readiness_scores(client_id, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_sessions_client
            ON workout_sessions(client_id, session_date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercise_logs_session
            ON exercise_logs(session_id)
        """)

        await db.commit()
