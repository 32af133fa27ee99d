"""Readiness scoring engine and check-in service.

The engine is a pure function: the same four inputs always give the same
``(score, recommendation)``. It never raises. Level values that are not
recognized (after lowercasing and stripping) and sleep values that are not
finite numbers take the least-penalizing branch, i.e. no deduction. This is
a wellness heuristic, so an odd input lowers nothing rather than failing the
check-in.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from loguru import logger

from ..db.repositories import ClientRepository, ReadinessRepository
from ..errors import ClientNotFoundError
from ..models.readiness import ReadinessInput, ReadinessResult, ReadinessScore

MAX_SCORE = 100
MIN_SCORE = 0

# (minimum score, recommendation), highest band first
RECOMMENDATION_BANDS: tuple[tuple[int, str], ...] = (
    (80, "Excellent! You're ready for a high-intensity workout."),
    (60, "Good readiness. Proceed with your planned workout."),
    (40, "Moderate readiness. Consider reducing intensity or volume."),
    (MIN_SCORE, "Low readiness. Focus on recovery, light activity, or rest."),
)


@dataclass(frozen=True)
class DeductionTable:
    """Points subtracted from 100 for each factor.

    Defaults are the canonical table. Sleep bands are checked in order:
    below ``short_sleep_hours``, below ``low_sleep_hours``, above
    ``long_sleep_hours``.
    """

    short_sleep_hours: float = 6.0
    short_sleep: int = 30
    low_sleep_hours: float = 7.0
    low_sleep: int = 15
    long_sleep_hours: float = 9.0
    long_sleep: int = 10
    stress: dict[str, int] = field(default_factory=lambda: {"high": 25, "medium": 12})
    soreness: dict[str, int] = field(
        default_factory=lambda: {"severe": 25, "moderate": 15, "mild": 7}
    )
    energy: dict[str, int] = field(default_factory=lambda: {"low": 20, "medium": 10})

    def sleep_deduction(self, sleep_hours: Any) -> int:
        hours = _as_hours(sleep_hours)
        if hours is None:
            return 0
        if hours < self.short_sleep_hours:
            return self.short_sleep
        if hours < self.low_sleep_hours:
            return self.low_sleep
        if hours > self.long_sleep_hours:
            return self.long_sleep
        return 0


DEFAULT_DEDUCTIONS = DeductionTable()


def _as_hours(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return None
    return hours if math.isfinite(hours) else None


def _level(value: Any) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def recommendation_for(score: int) -> str:
    """Map a clamped score to its recommendation band."""
    for threshold, recommendation in RECOMMENDATION_BANDS:
        if score >= threshold:
            return recommendation
    return RECOMMENDATION_BANDS[-1][1]


def score_readiness(
    sleep_hours: Any,
    stress_level: Any,
    muscle_soreness: Any,
    energy_level: Any,
    table: DeductionTable = DEFAULT_DEDUCTIONS,
) -> ReadinessResult:
    """Score a daily check-in.

    Args:
        sleep_hours: Hours slept last night
        stress_level: low, medium or high
        muscle_soreness: none, mild, moderate or severe
        energy_level: low, medium or high
        table: Deduction table to apply

    Returns:
        ReadinessResult with an integer score in [0, 100]
    """
    score = MAX_SCORE
    score -= table.sleep_deduction(sleep_hours)
    score -= table.stress.get(_level(stress_level), 0)
    score -= table.soreness.get(_level(muscle_soreness), 0)
    score -= table.energy.get(_level(energy_level), 0)

    score = max(MIN_SCORE, min(MAX_SCORE, score))
    return ReadinessResult(score=score, recommendation=recommendation_for(score))


class ReadinessService:
    """Scores and stores readiness check-ins for a trainer's clients."""

    def __init__(
        self,
        clients: ClientRepository,
        scores: ReadinessRepository,
        table: DeductionTable = DEFAULT_DEDUCTIONS,
    ):
        self.clients = clients
        self.scores = scores
        self.table = table

    async def _require_client(self, trainer_id: str, client_id: str) -> None:
        if await self.clients.get(trainer_id, client_id) is None:
            logger.warning("Client not found", trainer_id=trainer_id, client_id=client_id)
            raise ClientNotFoundError(client_id)

    async def submit_check_in(
        self, trainer_id: str, client_id: str, check_in: ReadinessInput
    ) -> ReadinessScore:
        """Score a check-in and append it to the client's history."""
        await self._require_client(trainer_id, client_id)

        result = score_readiness(
            check_in.sleep_hours,
            check_in.stress_level,
            check_in.muscle_soreness,
            check_in.energy_level,
            self.table,
        )
        score = await self.scores.create(
            ReadinessScore(
                client_id=client_id,
                trainer_id=trainer_id,
                date=check_in.date,
                sleep_hours=check_in.sleep_hours,
                stress_level=check_in.stress_level,
                muscle_soreness=check_in.muscle_soreness,
                energy_level=check_in.energy_level,
                score=result.score,
                recommendation=result.recommendation,
            )
        )
        logger.info(
            "Readiness check submitted",
            trainer_id=trainer_id,
            client_id=client_id,
            readiness_id=score.id,
            score=score.score,
        )
        return score

    async def history(
        self, trainer_id: str, client_id: str, days: int = 30
    ) -> list[ReadinessScore]:
        """Scores dated within the last ``days`` days, newest first."""
        await self._require_client(trainer_id, client_id)
        since = datetime.now(timezone.utc) - timedelta(days=days)
        return await self.scores.list_for_client(trainer_id, client_id, since=since)

    async def latest(self, trainer_id: str, client_id: str) -> ReadinessScore | None:
        """Most recent score by date, if any."""
        await self._require_client(trainer_id, client_id)
        return await self.scores.latest(trainer_id, client_id)
