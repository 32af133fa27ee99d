"""Tests for readiness scoring and the check-in service."""

import itertools
import math
from datetime import datetime, timedelta, timezone

import pytest

from fitcoach.db import ClientRepository, ReadinessRepository
from fitcoach.errors import ClientNotFoundError
from fitcoach.models.readiness import ReadinessInput
from fitcoach.services.readiness import (
    DEFAULT_DEDUCTIONS,
    RECOMMENDATION_BANDS,
    DeductionTable,
    ReadinessService,
    recommendation_for,
    score_readiness,
)

EXCELLENT, GOOD, MODERATE, LOW = (text for _, text in RECOMMENDATION_BANDS)

STRESS = ["low", "medium", "high"]
SORENESS = ["none", "mild", "moderate", "severe"]
ENERGY = ["high", "medium", "low"]
SLEEP = [0, 3, 5, 5.99, 6, 6.5, 7, 8, 9, 9.5, 12, 24]


class TestScoreReadiness:
    """Tests for the scoring engine."""

    def test_fully_rested_scores_100(self):
        """Test the best case lands in the top band."""
        result = score_readiness(8, "low", "none", "high")

        assert result.score == 100
        assert result.recommendation == EXCELLENT

    def test_worst_case_clamps_to_zero(self):
        """Test stacked deductions reach exactly zero."""
        result = score_readiness(5, "high", "severe", "low")

        assert result.score == 0
        assert result.recommendation == LOW

    @pytest.mark.parametrize(
        "sleep,expected",
        [
            (5.5, 70),
            (6, 85),
            (6.9, 85),
            (7, 100),
            (9, 100),
            (9.1, 90),
            (11, 90),
        ],
    )
    def test_sleep_deductions(self, sleep, expected):
        assert score_readiness(sleep, "low", "none", "high").score == expected

    @pytest.mark.parametrize(
        "stress,soreness,energy,expected",
        [
            ("medium", "none", "high", 88),
            ("high", "none", "high", 75),
            ("low", "mild", "high", 93),
            ("low", "moderate", "high", 85),
            ("low", "severe", "high", 75),
            ("low", "none", "medium", 90),
            ("low", "none", "low", 80),
        ],
    )
    def test_level_deductions(self, stress, soreness, energy, expected):
        assert score_readiness(8, stress, soreness, energy).score == expected

    def test_mixed_check_in(self):
        """Test a typical mid-week check-in."""
        result = score_readiness(6.5, "medium", "mild", "medium")

        assert result.score == 100 - 15 - 12 - 7 - 10
        assert result.recommendation == MODERATE

    def test_deterministic(self):
        """Test repeated calls give identical results."""
        for combo in itertools.product(SLEEP, STRESS, SORENESS, ENERGY):
            assert score_readiness(*combo) == score_readiness(*combo)

    def test_bounds_and_band_consistency(self):
        """Test every input lands in [0, 100] with the matching band."""
        bands = {text for _, text in RECOMMENDATION_BANDS}
        for combo in itertools.product(SLEEP + [-5, 1000], STRESS, SORENESS, ENERGY):
            result = score_readiness(*combo)
            assert isinstance(result.score, int)
            assert 0 <= result.score <= 100
            assert result.recommendation in bands
            assert result.recommendation == recommendation_for(result.score)

    def test_monotonic_in_each_factor(self):
        """Test worsening one factor never raises the score."""
        penalized_sleep = [9, 8, 7, 6.5, 6, 5, 3, 0]

        for stress, soreness, energy in itertools.product(STRESS, SORENESS, ENERGY):
            scores = [score_readiness(h, stress, soreness, energy).score for h in penalized_sleep]
            assert scores == sorted(scores, reverse=True)

        for sleep, soreness, energy in itertools.product(SLEEP, SORENESS, ENERGY):
            scores = [score_readiness(sleep, s, soreness, energy).score for s in STRESS]
            assert scores == sorted(scores, reverse=True)

        for sleep, stress, energy in itertools.product(SLEEP, STRESS, ENERGY):
            scores = [score_readiness(sleep, stress, s, energy).score for s in SORENESS]
            assert scores == sorted(scores, reverse=True)

        for sleep, stress, soreness in itertools.product(SLEEP, STRESS, SORENESS):
            scores = [score_readiness(sleep, stress, soreness, e).score for e in ENERGY]
            assert scores == sorted(scores, reverse=True)


class TestDefensiveInputs:
    """Tests for malformed input handling."""

    def test_levels_normalized(self):
        """Test case and surrounding whitespace are ignored."""
        assert score_readiness(8, " HIGH ", "Severe", "LOW\n").score == 30

    @pytest.mark.parametrize("level", ["extreme", "", None, 3, "very high"])
    def test_unknown_levels_deduct_nothing(self, level):
        assert score_readiness(8, level, level, level).score == 100

    @pytest.mark.parametrize("sleep", [None, "lots", math.nan, math.inf, -math.inf, True, [7]])
    def test_unusable_sleep_deducts_nothing(self, sleep):
        assert score_readiness(sleep, "low", "none", "high").score == 100

    def test_numeric_string_sleep(self):
        assert score_readiness("5", "low", "none", "high").score == 70

    def test_negative_sleep_counts_as_short(self):
        assert score_readiness(-1, "low", "none", "high").score == 70


class TestRecommendationBands:
    """Tests for band boundaries."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            (100, EXCELLENT),
            (80, EXCELLENT),
            (79, GOOD),
            (60, GOOD),
            (59, MODERATE),
            (40, MODERATE),
            (39, LOW),
            (0, LOW),
        ],
    )
    def test_band_boundaries(self, score, expected):
        assert recommendation_for(score) == expected

    def test_bands_ordered_from_least_conservative(self):
        """Test higher scores never map to a later band."""
        order = [text for _, text in RECOMMENDATION_BANDS]
        indices = [order.index(recommendation_for(s)) for s in range(100, -1, -1)]
        assert indices == sorted(indices)


class TestDeductionTable:
    """Tests for alternative deduction tables."""

    def test_default_table_values(self):
        assert DEFAULT_DEDUCTIONS.stress == {"high": 25, "medium": 12}
        assert DEFAULT_DEDUCTIONS.soreness == {"severe": 25, "moderate": 15, "mild": 7}
        assert DEFAULT_DEDUCTIONS.energy == {"low": 20, "medium": 10}

    def test_custom_table_replaces_defaults(self):
        """Test a custom table is applied as given, not merged."""
        table = DeductionTable(
            short_sleep=20,
            low_sleep=10,
            long_sleep_hours=10.0,
            stress={"high": 25, "medium": 10},
            soreness={"severe": 30, "moderate": 15, "mild": 5},
            energy={"low": 20, "medium": 5},
        )

        assert score_readiness(5, "medium", "severe", "medium", table).score == 35
        assert score_readiness(9.5, "low", "none", "high", table).score == 100


TRAINER = "trainer-1"


class TestReadinessService:
    """Tests for storing and querying check-ins."""

    @pytest.fixture
    async def service_and_client(self, db_path, sample_client):
        client = await ClientRepository(db_path).create(sample_client)
        service = ReadinessService(ClientRepository(db_path), ReadinessRepository(db_path))
        return service, client

    @staticmethod
    def check_in(days_ago: float = 0, sleep: float = 8, stress: str = "low") -> ReadinessInput:
        return ReadinessInput(
            date=datetime.now(timezone.utc) - timedelta(days=days_ago),
            sleep_hours=sleep,
            stress_level=stress,
            muscle_soreness="none",
            energy_level="high",
        )

    async def test_submit_scores_and_persists(self, service_and_client):
        service, client = service_and_client

        score = await service.submit_check_in(TRAINER, client.id, self.check_in(sleep=6.5))

        assert score.id is not None
        assert score.created_at is not None
        assert score.score == 85
        assert score.recommendation == EXCELLENT
        assert score.client_id == client.id

    async def test_history_newest_first(self, service_and_client):
        """Test history is ordered by check-in date, not insertion order."""
        service, client = service_and_client
        await service.submit_check_in(TRAINER, client.id, self.check_in(days_ago=2, sleep=5))
        await service.submit_check_in(TRAINER, client.id, self.check_in(days_ago=0, sleep=8))
        await service.submit_check_in(TRAINER, client.id, self.check_in(days_ago=5, sleep=6.5))

        history = await service.history(TRAINER, client.id)

        assert [s.score for s in history] == [100, 70, 85]
        assert history[0].date > history[1].date > history[2].date

    async def test_history_window(self, service_and_client):
        service, client = service_and_client
        await service.submit_check_in(TRAINER, client.id, self.check_in(days_ago=40))
        await service.submit_check_in(TRAINER, client.id, self.check_in(days_ago=10))

        assert len(await service.history(TRAINER, client.id)) == 1
        assert len(await service.history(TRAINER, client.id, days=60)) == 2

    async def test_latest(self, service_and_client):
        service, client = service_and_client
        assert await service.latest(TRAINER, client.id) is None

        await service.submit_check_in(TRAINER, client.id, self.check_in(days_ago=0, stress="high"))
        await service.submit_check_in(TRAINER, client.id, self.check_in(days_ago=3))

        latest = await service.latest(TRAINER, client.id)
        assert latest.score == 75

    async def test_other_trainer_cannot_submit_or_read(self, service_and_client):
        service, client = service_and_client
        await service.submit_check_in(TRAINER, client.id, self.check_in())

        with pytest.raises(ClientNotFoundError):
            await service.submit_check_in("trainer-2", client.id, self.check_in())
        with pytest.raises(ClientNotFoundError):
            await service.history("trainer-2", client.id)
        with pytest.raises(ClientNotFoundError):
            await service.latest("trainer-2", client.id)

    async def test_unknown_client(self, service_and_client):
        service, _ = service_and_client
        with pytest.raises(ClientNotFoundError):
            await service.submit_check_in(TRAINER, "missing", self.check_in())

    async def test_odd_levels_stored_as_given(self, service_and_client):
        service, client = service_and_client
        check_in = ReadinessInput(
            date=datetime.now(timezone.utc),
            sleep_hours=8,
            stress_level="Extreme",
            muscle_soreness="none",
            energy_level="high",
        )

        score = await service.submit_check_in(TRAINER, client.id, check_in)

        assert score.score == 100
        stored = await service.latest(TRAINER, client.id)
        assert stored.stress_level == "Extreme"
