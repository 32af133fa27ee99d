"""Data access layer for fitcoach.

Every query is scoped to the owning trainer: a row that belongs to another
trainer is indistinguishable from a missing one.
"""

import json
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import aiosqlite

from ..models.client import Client
from ..models.nutrition import NutritionData, NutritionPlan
from ..models.program import Program, ProgramData
from ..models.readiness import ReadinessScore
from ..models.session import ExerciseLog, WorkoutSession
from .engine import connect, from_db_time, get_db_path, new_id, to_db_time, utcnow


class ClientRepository:
    """Repository for clients."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, client: Client) -> Client:
        """Create a new client."""
        data = client.to_dict()
        client_id = new_id()
        now = utcnow()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO clients
                (id, trainer_id, name, age, gender, height, weight, experience, goals,
                 training_frequency, equipment, injuries, time_per_session, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    client_id,
                    client.trainer_id,
                    data["name"],
                    data["age"],
                    data["gender"],
                    data["height"],
                    data["weight"],
                    data["experience"],
                    data["goals"],
                    data["training_frequency"],
                    data["equipment"],
                    data["injuries"],
                    data["time_per_session"],
                    now,
                    now,
                ),
            )
            await db.commit()
        created = from_db_time(now)
        return replace(client, id=client_id, created_at=created, updated_at=created)

    async def get(self, trainer_id: str, client_id: str) -> Client | None:
        """Get a client by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM clients WHERE id = ? AND trainer_id = ?",
                (client_id, trainer_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_client(row)

    async def list_all(self, trainer_id: str) -> list[Client]:
        """List a trainer's clients, newest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM clients WHERE trainer_id = ? ORDER BY created_at DESC",
                (trainer_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_client(row) for row in rows]

    async def update(self, client: Client) -> Client | None:
        """Update an existing client."""
        if client.id is None:
            raise ValueError("Client must have an ID to update")

        data = client.to_dict()
        now = utcnow()
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE clients SET
                    name = ?, age = ?, gender = ?, height = ?, weight = ?, experience = ?,
                    goals = ?, training_frequency = ?, equipment = ?, injuries = ?,
                    time_per_session = ?, updated_at = ?
                WHERE id = ? AND trainer_id = ?
                """,
                (
                    data["name"],
                    data["age"],
                    data["gender"],
                    data["height"],
                    data["weight"],
                    data["experience"],
                    data["goals"],
                    data["training_frequency"],
                    data["equipment"],
                    data["injuries"],
                    data["time_per_session"],
                    now,
                    client.id,
                    client.trainer_id,
                ),
            )
            await db.commit()
            if cursor.rowcount == 0:
                return None
        return replace(client, updated_at=from_db_time(now))

    async def delete(self, trainer_id: str, client_id: str) -> bool:
        """Delete a client and, by cascade, everything owned through it."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM clients WHERE id = ? AND trainer_id = ?",
                (client_id, trainer_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_client(self, row: aiosqlite.Row) -> Client:
        """Convert a database row to a Client."""
        return Client.from_dict(
            dict(row),
            trainer_id=row["trainer_id"],
            id=row["id"],
            created_at=from_db_time(row["created_at"]),
            updated_at=from_db_time(row["updated_at"]),
        )


class ProgramRepository:
    """Repository for generated workout programs."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, program: Program) -> Program:
        """Insert a program artifact."""
        program_id = new_id()
        now = utcnow()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO workout_programs
                (id, client_id, trainer_id, program_data, weeks_duration, split, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    program_id,
                    program.client_id,
                    program.trainer_id,
                    json.dumps(program.data.to_dict()),
                    program.weeks_duration,
                    program.split,
                    now,
                    now,
                ),
            )
            await db.commit()
        created = from_db_time(now)
        return replace(program, id=program_id, created_at=created, updated_at=created)

    async def get(self, trainer_id: str, program_id: str) -> Program | None:
        """Get a program by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM workout_programs WHERE id = ? AND trainer_id = ?",
                (program_id, trainer_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_program(row)

    async def list_for_client(self, trainer_id: str, client_id: str) -> list[Program]:
        """List a client's programs, newest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM workout_programs
                WHERE client_id = ? AND trainer_id = ?
                ORDER BY created_at DESC
                """,
                (client_id, trainer_id),
            )
            rows = await cursor.fetchall()
            return [self._row_to_program(row) for row in rows]

    async def list_all(self, trainer_id: str) -> list[Program]:
        """List all of a trainer's programs, newest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM workout_programs WHERE trainer_id = ? ORDER BY created_at DESC",
                (trainer_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_program(row) for row in rows]

    async def delete(self, trainer_id: str, program_id: str) -> bool:
        """Delete a program."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM workout_programs WHERE id = ? AND trainer_id = ?",
                (program_id, trainer_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_program(self, row: aiosqlite.Row) -> Program:
        """Convert a database row to a Program."""
        return Program(
            id=row["id"],
            client_id=row["client_id"],
            trainer_id=row["trainer_id"],
            data=ProgramData.from_stored(row["program_data"]),
            created_at=from_db_time(row["created_at"]),
            updated_at=from_db_time(row["updated_at"]),
        )


class NutritionPlanRepository:
    """Repository for nutrition plans (one current plan per client)."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def replace_for_client(self, plan: NutritionPlan) -> NutritionPlan:
        """Store a plan, replacing the client's previous one atomically."""
        async with connect(self.db_path) as db:
            saved = await self._replace(db, plan)
            await db.commit()
        return saved

    async def replace_if_current(
        self, plan: NutritionPlan, current_id: str | None
    ) -> NutritionPlan | None:
        """Store a plan only while ``current_id`` is still the client's plan.

        ``current_id`` of None means the client had no plan. Returns None,
        leaving the stored plan untouched, when another plan has been saved
        since.
        """
        async with connect(self.db_path) as db:
            await db.execute("BEGIN IMMEDIATE")
            cursor = await db.execute(
                "SELECT id FROM nutrition_plans WHERE client_id = ? AND trainer_id = ?",
                (plan.client_id, plan.trainer_id),
            )
            row = await cursor.fetchone()
            if (row["id"] if row else None) != current_id:
                await db.rollback()
                return None
            saved = await self._replace(db, plan)
            await db.commit()
        return saved

    async def _replace(self, db: aiosqlite.Connection, plan: NutritionPlan) -> NutritionPlan:
        plan_id = new_id()
        now = utcnow()
        await db.execute(
            "DELETE FROM nutrition_plans WHERE client_id = ? AND trainer_id = ?",
            (plan.client_id, plan.trainer_id),
        )
        await db.execute(
            """
            INSERT INTO nutrition_plans
            (id, client_id, trainer_id, plan_data, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                plan_id,
                plan.client_id,
                plan.trainer_id,
                json.dumps(plan.data.to_dict()),
                now,
                now,
            ),
        )
        created = from_db_time(now)
        return replace(plan, id=plan_id, created_at=created, updated_at=created)

    async def get_for_client(self, trainer_id: str, client_id: str) -> NutritionPlan | None:
        """Get the client's current plan."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM nutrition_plans WHERE client_id = ? AND trainer_id = ?",
                (client_id, trainer_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_plan(row)

    async def update(self, plan: NutritionPlan) -> NutritionPlan | None:
        """Overwrite a plan's document."""
        if plan.id is None:
            raise ValueError("Plan must have an ID to update")

        now = utcnow()
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE nutrition_plans SET plan_data = ?, updated_at = ?
                WHERE id = ? AND trainer_id = ?
                """,
                (json.dumps(plan.data.to_dict()), now, plan.id, plan.trainer_id),
            )
            await db.commit()
            if cursor.rowcount == 0:
                return None
        return replace(plan, updated_at=from_db_time(now))

    async def delete(self, trainer_id: str, plan_id: str) -> bool:
        """Delete a plan."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM nutrition_plans WHERE id = ? AND trainer_id = ?",
                (plan_id, trainer_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_plan(self, row: aiosqlite.Row) -> NutritionPlan:
        """Convert a database row to a NutritionPlan."""
        return NutritionPlan(
            id=row["id"],
            client_id=row["client_id"],
            trainer_id=row["trainer_id"],
            data=NutritionData.from_stored(row["plan_data"]),
            created_at=from_db_time(row["created_at"]),
            updated_at=from_db_time(row["updated_at"]),
        )


class ReadinessRepository:
    """Append-only store of readiness scores."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, score: ReadinessScore) -> ReadinessScore:
        """Append a score."""
        score_id = new_id()
        now = utcnow()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO readiness_scores
                (id, client_id, trainer_id, date, sleep_hours, stress_level, muscle_soreness,
                 energy_level, score, recommendation, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    score_id,
                    score.client_id,
                    score.trainer_id,
                    to_db_time(score.date),
                    score.sleep_hours,
                    score.stress_level,
                    score.muscle_soreness,
                    score.energy_level,
                    score.score,
                    score.recommendation,
                    now,
                ),
            )
            await db.commit()
        return replace(score, id=score_id, created_at=from_db_time(now))

    async def list_for_client(
        self, trainer_id: str, client_id: str, since: datetime | None = None
    ) -> list[ReadinessScore]:
        """List a client's scores by date, newest first."""
        query = "SELECT * FROM readiness_scores WHERE client_id = ? AND trainer_id = ?"
        params: list = [client_id, trainer_id]
        if since is not None:
            query += " AND date >= ?"
            params.append(to_db_time(since))
        query += " ORDER BY date DESC, created_at DESC"

        async with connect(self.db_path) as db:
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_score(row) for row in rows]

    async def latest(self, trainer_id: str, client_id: str) -> ReadinessScore | None:
        """Get the most recent score by date."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM readiness_scores
                WHERE client_id = ? AND trainer_id = ?
                ORDER BY date DESC, created_at DESC
                LIMIT 1
                """,
                (client_id, trainer_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_score(row)

    def _row_to_score(self, row: aiosqlite.Row) -> ReadinessScore:
        """Convert a database row to a ReadinessScore."""
        return ReadinessScore(
            id=row["id"],
            client_id=row["client_id"],
            trainer_id=row["trainer_id"],
            date=from_db_time(row["date"]),
            sleep_hours=row["sleep_hours"],
            stress_level=row["stress_level"],
            muscle_soreness=row["muscle_soreness"],
            energy_level=row["energy_level"],
            score=row["score"],
            recommendation=row["recommendation"],
            created_at=from_db_time(row["created_at"]),
        )


class SessionRepository:
    """Repository for workout sessions and their exercise logs."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, session: WorkoutSession) -> WorkoutSession:
        """Create a session."""
        session_id = new_id()
        now = utcnow()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO workout_sessions
                (id, client_id, program_id, trainer_id, session_date, week_number, day_name,
                 completed, notes, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    session_id,
                    session.client_id,
                    session.program_id,
                    session.trainer_id,
                    to_db_time(session.session_date),
                    session.week_number,
                    session.day_name,
                    int(session.completed),
                    session.notes,
                    now,
                    now,
                ),
            )
            await db.commit()
        created = from_db_time(now)
        return replace(session, id=session_id, created_at=created, updated_at=created)

    async def get(self, trainer_id: str, session_id: str) -> WorkoutSession | None:
        """Get a session with its exercise logs."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM workout_sessions WHERE id = ? AND trainer_id = ?",
                (session_id, trainer_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None

            cursor = await db.execute(
                "SELECT * FROM exercise_logs WHERE session_id = ? ORDER BY created_at",
                (session_id,),
            )
            logs = [self._row_to_log(r) for r in await cursor.fetchall()]
            return self._row_to_session(row, logs)

    async def list_for_client(self, trainer_id: str, client_id: str) -> list[WorkoutSession]:
        """List a client's sessions, most recent session date first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM workout_sessions
                WHERE client_id = ? AND trainer_id = ?
                ORDER BY session_date DESC
                """,
                (client_id, trainer_id),
            )
            rows = await cursor.fetchall()
            return [self._row_to_session(row, []) for row in rows]

    async def update(
        self,
        trainer_id: str,
        session_id: str,
        completed: bool | None = None,
        notes: str | None = None,
    ) -> WorkoutSession | None:
        """Update the completed flag and/or notes."""
        assignments = ["updated_at = ?"]
        params: list = [utcnow()]
        if completed is not None:
            assignments.append("completed = ?")
            params.append(int(completed))
        if notes is not None:
            assignments.append("notes = ?")
            params.append(notes)
        params.extend([session_id, trainer_id])

        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"UPDATE workout_sessions SET {', '.join(assignments)} WHERE id = ? AND trainer_id = ?",
                params,
            )
            await db.commit()
            if cursor.rowcount == 0:
                return None
        return await self.get(trainer_id, session_id)

    async def delete(self, trainer_id: str, session_id: str) -> bool:
        """Delete a session and its logs."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM workout_sessions WHERE id = ? AND trainer_id = ?",
                (session_id, trainer_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    async def add_exercise_log(self, trainer_id: str, log: ExerciseLog) -> ExerciseLog | None:
        """Attach an exercise log to one of the trainer's sessions."""
        log_id = new_id()
        now = utcnow()
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT id FROM workout_sessions WHERE id = ? AND trainer_id = ?",
                (log.session_id, trainer_id),
            )
            if await cursor.fetchone() is None:
                return None

            await db.execute(
                """
                INSERT INTO exercise_logs
                (id, session_id, exercise_name, sets_completed, reps_completed, weight_used,
                 rpe, notes, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    log_id,
                    log.session_id,
                    log.exercise_name,
                    log.sets_completed,
                    log.reps_completed,
                    log.weight_used,
                    log.rpe,
                    log.notes,
                    now,
                ),
            )
            await db.commit()
        return replace(log, id=log_id, created_at=from_db_time(now))

    async def list_exercise_logs(self, trainer_id: str, session_id: str) -> list[ExerciseLog]:
        """List the logs of one of the trainer's sessions, oldest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT l.* FROM exercise_logs l
                JOIN workout_sessions s ON s.id = l.session_id
                WHERE l.session_id = ? AND s.trainer_id = ?
                ORDER BY l.created_at
                """,
                (session_id, trainer_id),
            )
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    def _row_to_session(self, row: aiosqlite.Row, logs: list[ExerciseLog]) -> WorkoutSession:
        """Convert a database row to a WorkoutSession."""
        return WorkoutSession(
            id=row["id"],
            client_id=row["client_id"],
            program_id=row["program_id"],
            trainer_id=row["trainer_id"],
            session_date=from_db_time(row["session_date"]),
            week_number=row["week_number"],
            day_name=row["day_name"],
            completed=bool(row["completed"]),
            notes=row["notes"],
            exercise_logs=logs,
            created_at=from_db_time(row["created_at"]),
            updated_at=from_db_time(row["updated_at"]),
        )

    def _row_to_log(self, row: aiosqlite.Row) -> ExerciseLog:
        """Convert a database row to an ExerciseLog."""
        return ExerciseLog(
            id=row["id"],
            session_id=row["session_id"],
            exercise_name=row["exercise_name"],
            sets_completed=row["sets_completed"],
            reps_completed=row["reps_completed"],
            weight_used=row["weight_used"],
            rpe=row["rpe"],
            notes=row["notes"],
            created_at=from_db_time(row["created_at"]),
        )
