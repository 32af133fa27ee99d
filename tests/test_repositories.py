"""Tests for the owner-scoped repositories."""

import json
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import aiosqlite
import pytest

from fitcoach.db import (
    ClientRepository,
    NutritionPlanRepository,
    ProgramRepository,
    ReadinessRepository,
    SessionRepository,
)
from fitcoach.models.nutrition import NutritionData, NutritionPlan
from fitcoach.models.program import Program, ProgramData
from fitcoach.models.readiness import ReadinessScore
from fitcoach.models.session import ExerciseLog, WorkoutSession

TRAINER = "trainer-1"
OTHER_TRAINER = "trainer-2"


@pytest.fixture
async def client(db_path, sample_client):
    return await ClientRepository(db_path).create(sample_client)


@pytest.fixture
async def program(db_path, client, program_document):
    return await ProgramRepository(db_path).create(
        Program(client_id=client.id, trainer_id=TRAINER, data=ProgramData.from_dict(program_document))
    )


def make_session(client, program, days_ago: int = 0) -> WorkoutSession:
    return WorkoutSession(
        client_id=client.id,
        program_id=program.id,
        trainer_id=TRAINER,
        session_date=datetime.now(timezone.utc) - timedelta(days=days_ago),
        week_number=1,
        day_name="Lower A",
    )


class TestClientRepository:
    """Tests for ClientRepository."""

    async def test_create_and_get(self, db_path, client):
        fetched = await ClientRepository(db_path).get(TRAINER, client.id)

        assert fetched == client
        assert fetched.created_at.tzinfo is not None

    async def test_other_trainer_sees_nothing(self, db_path, client):
        repo = ClientRepository(db_path)

        assert await repo.get(OTHER_TRAINER, client.id) is None
        assert await repo.list_all(OTHER_TRAINER) == []
        assert await repo.delete(OTHER_TRAINER, client.id) is False
        assert await repo.get(TRAINER, client.id) is not None

    async def test_list_newest_first(self, db_path, sample_client):
        repo = ClientRepository(db_path)
        first = await repo.create(sample_client)
        second = await repo.create(replace(sample_client, name="Second"))

        assert [c.id for c in await repo.list_all(TRAINER)] == [second.id, first.id]

    async def test_update(self, db_path, client):
        repo = ClientRepository(db_path)

        updated = await repo.update(replace(client, weight=63.5, injuries=None))

        assert updated.updated_at >= client.updated_at
        fetched = await repo.get(TRAINER, client.id)
        assert fetched.weight == 63.5
        assert fetched.injuries is None

    async def test_update_foreign_client(self, db_path, client):
        repo = ClientRepository(db_path)

        assert await repo.update(replace(client, trainer_id=OTHER_TRAINER, name="Hijacked")) is None
        assert (await repo.get(TRAINER, client.id)).name == "Jordan Test"

    async def test_update_requires_id(self, db_path, sample_client):
        with pytest.raises(ValueError):
            await ClientRepository(db_path).update(sample_client)

    async def test_delete_cascades(self, db_path, client, program, nutrition_document):
        """Test deleting a client removes everything owned through it."""
        plans = NutritionPlanRepository(db_path)
        sessions = SessionRepository(db_path)
        await plans.replace_for_client(
            NutritionPlan(client_id=client.id, trainer_id=TRAINER, data=NutritionData.from_dict(nutrition_document))
        )
        session = await sessions.create(make_session(client, program))
        await sessions.add_exercise_log(
            TRAINER, ExerciseLog(session.id, "Back Squat", 4, "8,8,8,8", "80kg")
        )
        await ReadinessRepository(db_path).create(
            ReadinessScore(
                client_id=client.id,
                trainer_id=TRAINER,
                date=datetime.now(timezone.utc),
                sleep_hours=8,
                stress_level="low",
                muscle_soreness="none",
                energy_level="high",
                score=100,
                recommendation="ok",
            )
        )

        assert await ClientRepository(db_path).delete(TRAINER, client.id) is True

        assert await ProgramRepository(db_path).get(TRAINER, program.id) is None
        assert await plans.get_for_client(TRAINER, client.id) is None
        assert await sessions.get(TRAINER, session.id) is None
        assert await ReadinessRepository(db_path).latest(TRAINER, client.id) is None
        async with aiosqlite.connect(db_path) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM exercise_logs")
            assert (await cursor.fetchone())[0] == 0


class TestProgramRepository:
    """Tests for ProgramRepository."""

    async def test_roundtrip(self, db_path, program, program_document):
        fetched = await ProgramRepository(db_path).get(TRAINER, program.id)

        assert fetched.data == ProgramData.from_dict(program_document)
        assert fetched.split == "Upper/Lower"

    async def test_stored_with_schema_version(self, db_path, program):
        async with aiosqlite.connect(db_path) as db:
            cursor = await db.execute("SELECT program_data FROM workout_programs WHERE id = ?", (program.id,))
            stored = json.loads((await cursor.fetchone())[0])

        assert stored["schema_version"] == 2

    async def test_legacy_row_upgraded_on_read(self, db_path, client):
        legacy = {
            "weeksDuration": 4,
            "split": "Push/Pull",
            "weeks": [{"weekNumber": 1, "workouts": [{"day": "Push", "exercises": [{"name": "Dip", "sets": "3", "reps": "8"}]}]}],
        }
        async with aiosqlite.connect(db_path) as db:
            await db.execute(
                """
                INSERT INTO workout_programs
                (id, client_id, trainer_id, program_data, weeks_duration, split, created_at, updated_at)
                VALUES ('legacy', ?, ?, ?, 4, 'Push/Pull', '2025-01-01T00:00:00.000000+00:00',
                        '2025-01-01T00:00:00.000000+00:00')
                """,
                (client.id, TRAINER, json.dumps(legacy)),
            )
            await db.commit()

        program = await ProgramRepository(db_path).get(TRAINER, "legacy")

        assert program.weeks_duration == 4
        assert program.data.weeks[0].workouts[0].exercises[0].sets == 3

    async def test_listing(self, db_path, client, program):
        repo = ProgramRepository(db_path)

        assert [p.id for p in await repo.list_for_client(TRAINER, client.id)] == [program.id]
        assert [p.id for p in await repo.list_all(TRAINER)] == [program.id]
        assert await repo.list_for_client(OTHER_TRAINER, client.id) == []
        assert await repo.list_all(OTHER_TRAINER) == []

    async def test_delete(self, db_path, program):
        repo = ProgramRepository(db_path)

        assert await repo.delete(OTHER_TRAINER, program.id) is False
        assert await repo.delete(TRAINER, program.id) is True
        assert await repo.get(TRAINER, program.id) is None


class TestNutritionPlanRepository:
    """Tests for NutritionPlanRepository."""

    async def test_replace_keeps_one_plan(self, db_path, client, nutrition_document):
        repo = NutritionPlanRepository(db_path)
        data = NutritionData.from_dict(nutrition_document)

        first = await repo.replace_for_client(NutritionPlan(client_id=client.id, trainer_id=TRAINER, data=data))
        second = await repo.replace_for_client(
            NutritionPlan(client_id=client.id, trainer_id=TRAINER, data=data.with_targets(calories=1900))
        )

        current = await repo.get_for_client(TRAINER, client.id)
        assert current.id == second.id != first.id
        assert current.data.calories == 1900
        async with aiosqlite.connect(db_path) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM nutrition_plans")
            assert (await cursor.fetchone())[0] == 1

    async def test_replace_if_current(self, db_path, client, nutrition_document):
        """Test a plan is only stored while the expected plan is current."""
        repo = NutritionPlanRepository(db_path)
        data = NutritionData.from_dict(nutrition_document)

        first = await repo.replace_if_current(
            NutritionPlan(client_id=client.id, trainer_id=TRAINER, data=data), None
        )
        assert first is not None

        stale = await repo.replace_if_current(
            NutritionPlan(client_id=client.id, trainer_id=TRAINER, data=data.with_targets(calories=1900)),
            None,
        )
        assert stale is None
        assert (await repo.get_for_client(TRAINER, client.id)).id == first.id

        second = await repo.replace_if_current(
            NutritionPlan(client_id=client.id, trainer_id=TRAINER, data=data.with_targets(calories=1900)),
            first.id,
        )
        current = await repo.get_for_client(TRAINER, client.id)
        assert current.id == second.id
        assert current.data.calories == 1900

    async def test_update(self, db_path, client, nutrition_document):
        repo = NutritionPlanRepository(db_path)
        plan = await repo.replace_for_client(
            NutritionPlan(client_id=client.id, trainer_id=TRAINER, data=NutritionData.from_dict(nutrition_document))
        )

        updated = await repo.update(replace(plan, data=plan.data.with_targets(protein=160)))

        assert updated.data.protein == 160
        assert (await repo.get_for_client(TRAINER, client.id)).data.protein == 160
        assert await repo.update(replace(plan, trainer_id=OTHER_TRAINER)) is None

    async def test_delete(self, db_path, client, nutrition_document):
        repo = NutritionPlanRepository(db_path)
        plan = await repo.replace_for_client(
            NutritionPlan(client_id=client.id, trainer_id=TRAINER, data=NutritionData.from_dict(nutrition_document))
        )

        assert await repo.delete(OTHER_TRAINER, plan.id) is False
        assert await repo.delete(TRAINER, plan.id) is True
        assert await repo.get_for_client(TRAINER, client.id) is None


class TestSessionRepository:
    """Tests for SessionRepository."""

    async def test_create_and_get(self, db_path, client, program):
        repo = SessionRepository(db_path)
        session = await repo.create(make_session(client, program))

        fetched = await repo.get(TRAINER, session.id)

        assert fetched.day_name == "Lower A"
        assert fetched.completed is False
        assert fetched.exercise_logs == []
        assert await repo.get(OTHER_TRAINER, session.id) is None

    async def test_list_by_session_date(self, db_path, client, program):
        repo = SessionRepository(db_path)
        older = await repo.create(make_session(client, program, days_ago=3))
        newer = await repo.create(make_session(client, program, days_ago=1))

        listed = await repo.list_for_client(TRAINER, client.id)

        assert [s.id for s in listed] == [newer.id, older.id]
        assert await repo.list_for_client(OTHER_TRAINER, client.id) == []

    async def test_update_fields(self, db_path, client, program):
        repo = SessionRepository(db_path)
        session = await repo.create(make_session(client, program))

        updated = await repo.update(TRAINER, session.id, completed=True)
        assert updated.completed is True
        assert updated.notes is None

        updated = await repo.update(TRAINER, session.id, notes="Felt strong")
        assert updated.completed is True
        assert updated.notes == "Felt strong"

        assert await repo.update(OTHER_TRAINER, session.id, completed=False) is None

    async def test_exercise_logs(self, db_path, client, program):
        repo = SessionRepository(db_path)
        session = await repo.create(make_session(client, program))

        squat = await repo.add_exercise_log(
            TRAINER, ExerciseLog(session.id, "Back Squat", 4, "8,8,7,6", "80kg", rpe=8)
        )
        row = await repo.add_exercise_log(
            TRAINER, ExerciseLog(session.id, "Chest Supported Row", 3, "10,10,10", "30kg")
        )

        logs = await repo.list_exercise_logs(TRAINER, session.id)
        assert [log.id for log in logs] == [squat.id, row.id]
        assert logs[0].rpe == 8
        assert logs[1].rpe is None
        assert [log.exercise_name for log in (await repo.get(TRAINER, session.id)).exercise_logs] == [
            "Back Squat",
            "Chest Supported Row",
        ]

    async def test_foreign_session_logs(self, db_path, client, program):
        repo = SessionRepository(db_path)
        session = await repo.create(make_session(client, program))

        assert await repo.add_exercise_log(
            OTHER_TRAINER, ExerciseLog(session.id, "Back Squat", 1, "5", "100kg")
        ) is None
        assert await repo.list_exercise_logs(OTHER_TRAINER, session.id) == []
        assert await repo.list_exercise_logs(TRAINER, session.id) == []

    async def test_delete_removes_logs(self, db_path, client, program):
        repo = SessionRepository(db_path)
        session = await repo.create(make_session(client, program))
        await repo.add_exercise_log(TRAINER, ExerciseLog(session.id, "Back Squat", 1, "5", "100kg"))

        assert await repo.delete(OTHER_TRAINER, session.id) is False
        assert await repo.delete(TRAINER, session.id) is True
        assert await repo.list_exercise_logs(TRAINER, session.id) == []
