"""Tests for the bounded-retry generation orchestrator."""

import asyncio

import pytest

from fitcoach.agents.orchestrator import GenerationOrchestrator, GenerationPolicy
from fitcoach.agents.provider import GenerationPrompt
from fitcoach.errors import (
    HIGH_DEMAND_MESSAGE,
    GenerationFailed,
    PersistenceFailure,
    ProviderError,
    TimeoutExceeded,
)

PROMPT = GenerationPrompt(
    system="system",
    prompt="prompt",
    schema_name="submit_thing",
    schema_description="A thing",
    schema={"type": "object"},
)

FAST = GenerationPolicy(timeout_seconds=0.05, max_attempts=3, backoff_seconds=(2.0, 5.0, 10.0))


def parse_value(document: dict) -> int:
    return int(document["value"])


class Sink:
    """Persistence double that records what it stores."""

    def __init__(self, fail_with: Exception | None = None):
        self.saved: list = []
        self.attempts = 0
        self.fail_with = fail_with

    async def __call__(self, artifact):
        self.attempts += 1
        if self.fail_with:
            raise self.fail_with
        self.saved.append(artifact)
        return {"id": "artifact-1", "value": artifact}


@pytest.fixture
def make_orchestrator(scripted_provider, recording_sleep):
    def make(outcomes, policy: GenerationPolicy = FAST):
        provider = scripted_provider(outcomes)
        return GenerationOrchestrator(provider, policy, sleep=recording_sleep), provider

    return make


class TestGenerationPolicy:
    """Tests for GenerationPolicy."""

    def test_defaults(self):
        policy = GenerationPolicy()

        assert policy.timeout_seconds == 120.0
        assert policy.max_attempts == 3
        assert policy.backoff_seconds == (2.0, 5.0, 10.0)

    def test_backoff_indexed_by_attempt(self):
        policy = GenerationPolicy()

        assert policy.backoff_for(1) == 2.0
        assert policy.backoff_for(2) == 5.0
        assert policy.backoff_for(3) == 10.0
        assert policy.backoff_for(7) == 10.0

    def test_empty_backoff(self):
        assert GenerationPolicy(backoff_seconds=()).backoff_for(1) == 0.0

    @pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"timeout_seconds": 0}])
    def test_invalid_policy(self, kwargs):
        with pytest.raises(ValueError):
            GenerationPolicy(**kwargs)


class TestGenerate:
    """Tests for generate()."""

    async def test_first_attempt_succeeds(self, make_orchestrator, recording_sleep):
        orchestrator, provider = make_orchestrator([{"value": 7}])

        result = await orchestrator.generate("thing", "client-1", PROMPT, parse_value)

        assert result == 7
        assert len(provider.calls) == 1
        assert recording_sleep.delays == []

    async def test_succeeds_after_two_timeouts(self, make_orchestrator, recording_sleep):
        """Test two timed-out attempts are retried with 2s then 5s backoff."""
        orchestrator, provider = make_orchestrator(["hang", "hang", {"value": 3}])

        result = await orchestrator.generate("thing", "client-1", PROMPT, parse_value)

        assert result == 3
        assert len(provider.calls) == 3
        assert recording_sleep.delays == [2.0, 5.0]
        assert provider.finished_hangs == 0

    async def test_retry_bound_and_no_final_backoff(self, make_orchestrator, recording_sleep):
        orchestrator, provider = make_orchestrator([RuntimeError("upstream 529")])

        with pytest.raises(GenerationFailed) as exc_info:
            await orchestrator.generate("thing", "client-1", PROMPT, parse_value)

        assert len(provider.calls) == 3
        assert recording_sleep.delays == [2.0, 5.0]
        failure = exc_info.value
        assert failure.attempts == 3
        assert failure.cause == "provider_error"
        assert isinstance(failure.last_error, ProviderError)

    async def test_terminal_cause_is_last_attempt(self, make_orchestrator):
        orchestrator, _ = make_orchestrator([RuntimeError("boom"), RuntimeError("boom"), "hang"])

        with pytest.raises(GenerationFailed) as exc_info:
            await orchestrator.generate("thing", "client-1", PROMPT, parse_value)

        assert exc_info.value.cause == "timeout"
        assert isinstance(exc_info.value.last_error, TimeoutExceeded)

    async def test_user_message_hides_provider_text(self, make_orchestrator):
        orchestrator, _ = make_orchestrator([RuntimeError("secret upstream detail")])

        with pytest.raises(GenerationFailed) as exc_info:
            await orchestrator.generate("thing", "client-1", PROMPT, parse_value)

        assert exc_info.value.user_message == HIGH_DEMAND_MESSAGE
        assert "secret" not in exc_info.value.user_message

    async def test_malformed_document_is_retried(self, make_orchestrator, recording_sleep):
        orchestrator, provider = make_orchestrator(
            [{"wrong": 1}, {"value": "not a number"}, {"value": 9}]
        )

        result = await orchestrator.generate("thing", "client-1", PROMPT, parse_value)

        assert result == 9
        assert len(provider.calls) == 3
        assert recording_sleep.delays == [2.0, 5.0]

    async def test_non_object_response_is_provider_error(self, make_orchestrator):
        policy = GenerationPolicy(timeout_seconds=1, max_attempts=1)
        orchestrator, _ = make_orchestrator([["not", "a", "dict"]], policy)

        with pytest.raises(GenerationFailed) as exc_info:
            await orchestrator.generate("thing", "client-1", PROMPT, parse_value)

        assert exc_info.value.cause == "provider_error"

    async def test_backoff_reuses_last_value(self, make_orchestrator, recording_sleep):
        policy = GenerationPolicy(timeout_seconds=1, max_attempts=5, backoff_seconds=(2.0, 5.0, 10.0))
        orchestrator, provider = make_orchestrator([RuntimeError("down")], policy)

        with pytest.raises(GenerationFailed):
            await orchestrator.generate("thing", "client-1", PROMPT, parse_value)

        assert len(provider.calls) == 5
        assert recording_sleep.delays == [2.0, 5.0, 10.0, 10.0]

    async def test_cancellation_propagates(self, scripted_provider):
        """Test cancelling the caller abandons the in-flight call."""
        provider = scripted_provider(["hang"])
        orchestrator = GenerationOrchestrator(provider, GenerationPolicy(timeout_seconds=30))

        task = asyncio.create_task(orchestrator.generate("thing", "client-1", PROMPT, parse_value))
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert len(provider.calls) == 1

    async def test_real_backoff_waits(self, scripted_provider):
        """Test the default sleep actually waits between attempts."""
        provider = scripted_provider([RuntimeError("flaky"), {"value": 1}])
        policy = GenerationPolicy(timeout_seconds=1, max_attempts=2, backoff_seconds=(0.05,))
        orchestrator = GenerationOrchestrator(provider, policy)

        loop = asyncio.get_running_loop()
        started = loop.time()
        assert await orchestrator.generate("thing", "client-1", PROMPT, parse_value) == 1
        assert loop.time() - started >= 0.04


class TestGenerateAndPersist:
    """Tests for generate_and_persist()."""

    async def test_success_persists_once(self, make_orchestrator):
        orchestrator, _ = make_orchestrator(["hang", RuntimeError("oops"), {"value": 5}])
        sink = Sink()

        saved = await orchestrator.generate_and_persist(
            "thing", "client-1", PROMPT, parse_value, sink
        )

        assert saved == {"id": "artifact-1", "value": 5}
        assert sink.saved == [5]

    async def test_exhaustion_persists_nothing(self, make_orchestrator):
        orchestrator, _ = make_orchestrator(["hang"])
        sink = Sink()

        with pytest.raises(GenerationFailed):
            await orchestrator.generate_and_persist("thing", "client-1", PROMPT, parse_value, sink)

        assert sink.attempts == 0

    async def test_timed_out_result_never_persisted(self, make_orchestrator):
        """Test a late provider result is discarded, not saved."""
        orchestrator, provider = make_orchestrator(["hang", {"value": 2}])
        sink = Sink()

        await orchestrator.generate_and_persist("thing", "client-1", PROMPT, parse_value, sink)
        await asyncio.sleep(0.1)

        assert sink.saved == [2]
        assert provider.finished_hangs == 0

    async def test_persistence_failure_does_not_regenerate(self, make_orchestrator, recording_sleep):
        orchestrator, provider = make_orchestrator([{"value": 4}])
        sink = Sink(fail_with=OSError("disk full"))

        with pytest.raises(PersistenceFailure) as exc_info:
            await orchestrator.generate_and_persist("thing", "client-1", PROMPT, parse_value, sink)

        assert len(provider.calls) == 1
        assert sink.attempts == 1
        assert recording_sleep.delays == []
        failure = exc_info.value
        assert failure.kind == "thing"
        assert failure.artifact == 4
        assert isinstance(failure.error, OSError)
        assert not isinstance(failure, GenerationFailed)
