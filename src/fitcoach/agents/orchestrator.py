"""Bounded-retry orchestration of generation provider calls.

One call to ``generate`` walks this state machine::

    IDLE -> ATTEMPTING(n) -> SUCCEEDED
                          -> RETRY_SCHEDULED(n + 1) -> ATTEMPTING(n + 1)
                          -> FAILED                       (n == max_attempts)

Each attempt races the provider call against ``timeout_seconds``. A call
that loses the race is cancelled and its result is never parsed, returned or
persisted. Attempts are strictly sequential. Persistence, when requested,
happens once and only after an attempt succeeded; a persistence error is
terminal and never triggers another provider call.

Cancelling the enclosing task cancels the in-flight call or pending backoff;
``CancelledError`` is never caught here.
"""

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Generic, TypeVar

from loguru import logger

from ..errors import GenerationFailed, PersistenceFailure, ProviderError, TimeoutExceeded
from .provider import GenerationPrompt, GenerationProvider

T = TypeVar("T")
R = TypeVar("R")

Parser = Callable[[dict], T]
Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class GenerationPolicy:
    """Timeout and retry configuration for generation calls."""

    timeout_seconds: float = 120.0
    max_attempts: int = 3
    backoff_seconds: tuple[float, ...] = (2.0, 5.0, 10.0)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

    def backoff_for(self, attempt: int) -> float:
        """Delay after failed attempt ``attempt`` (1-indexed)."""
        if not self.backoff_seconds:
            return 0.0
        index = min(attempt, len(self.backoff_seconds)) - 1
        return self.backoff_seconds[index]


class GenerationState(str, Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    RETRY_SCHEDULED = "retry_scheduled"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class GenerationOrchestrator(Generic[T]):
    """Calls a provider with a per-attempt timeout and bounded retries."""

    def __init__(
        self,
        provider: GenerationProvider,
        policy: GenerationPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.provider = provider
        self.policy = policy or GenerationPolicy()
        self._sleep = sleep

    async def _attempt(self, prompt: GenerationPrompt, parse: Parser[T]) -> T:
        """Run one attempt, raising TimeoutExceeded or ProviderError."""
        try:
            document = await asyncio.wait_for(
                self.provider.generate(prompt),
                timeout=self.policy.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise TimeoutExceeded(self.policy.timeout_seconds) from e
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"{type(e).__name__}: {e}") from e

        if not isinstance(document, dict):
            raise ProviderError(f"Expected an object, got {type(document).__name__}")
        try:
            return parse(document)
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Malformed {prompt.schema_name} document: {e!r}") from e

    async def generate(
        self,
        kind: str,
        subject_id: str,
        prompt: GenerationPrompt,
        parse: Parser[T],
    ) -> T:
        """Generate and parse a document, retrying per the policy.

        Raises:
            GenerationFailed: every attempt timed out or failed
        """
        log = logger.bind(kind=kind, subject_id=subject_id)
        state = GenerationState.IDLE
        last_error: TimeoutExceeded | ProviderError | None = None

        for attempt in range(1, self.policy.max_attempts + 1):
            state = GenerationState.ATTEMPTING
            log.info("Calling generation provider", attempt=attempt, state=state.value)
            started = time.monotonic()

            try:
                result = await self._attempt(prompt, parse)
            except (TimeoutExceeded, ProviderError) as e:
                last_error = e
                outcome = "timeout" if isinstance(e, TimeoutExceeded) else "provider_error"
                log.warning(
                    "Generation attempt failed",
                    attempt=attempt,
                    outcome=outcome,
                    error=str(e),
                    elapsed_seconds=round(time.monotonic() - started, 3),
                )
            else:
                state = GenerationState.SUCCEEDED
                log.info(
                    "Generation attempt succeeded",
                    attempt=attempt,
                    outcome="success",
                    state=state.value,
                    elapsed_seconds=round(time.monotonic() - started, 3),
                )
                return result

            if attempt < self.policy.max_attempts:
                state = GenerationState.RETRY_SCHEDULED
                delay = self.policy.backoff_for(attempt)
                log.info("Retrying after backoff", attempt=attempt + 1, delay_seconds=delay)
                await self._sleep(delay)

        state = GenerationState.FAILED
        cause = "timeout" if isinstance(last_error, TimeoutExceeded) else "provider_error"
        log.error(
            "Generation failed after all attempts",
            attempts=self.policy.max_attempts,
            outcome=cause,
            state=state.value,
        )
        raise GenerationFailed(kind, self.policy.max_attempts, cause, last_error)

    async def generate_and_persist(
        self,
        kind: str,
        subject_id: str,
        prompt: GenerationPrompt,
        parse: Parser[T],
        persist: Callable[[T], Awaitable[R]],
    ) -> R:
        """Generate a document, then persist it exactly once.

        Raises:
            GenerationFailed: no artifact was generated (nothing persisted)
            PersistenceFailure: artifact generated but the save failed
        """
        artifact = await self.generate(kind, subject_id, prompt, parse)

        try:
            saved = await persist(artifact)
        except Exception as e:
            logger.error(
                "Failed to persist generated artifact",
                kind=kind,
                subject_id=subject_id,
                outcome="persistence_failure",
                error=str(e),
            )
            raise PersistenceFailure(kind, artifact, e) from e

        logger.info("Generated artifact persisted", kind=kind, subject_id=subject_id, outcome="persisted")
        return saved
