"""Exception types for fitcoach."""

from typing import Any

# Shown to end users when generation gives up; raw provider text never is.
HIGH_DEMAND_MESSAGE = (
    "Our AI coach is experiencing high demand right now. "
    "Please try again in a few moments."
)


class FitcoachError(Exception):
    """Base class for all fitcoach errors."""


class ClientNotFoundError(FitcoachError):
    """Client does not exist or belongs to another trainer."""

    def __init__(self, client_id: str):
        super().__init__(f"Client {client_id} not found")
        self.client_id = client_id


class ArtifactNotFoundError(FitcoachError):
    """Program, plan or session does not exist or belongs to another trainer."""

    def __init__(self, kind: str, artifact_id: str):
        super().__init__(f"{kind.capitalize()} {artifact_id} not found")
        self.kind = kind
        self.artifact_id = artifact_id


class GenerationError(FitcoachError):
    """Base class for generation errors."""


class TimeoutExceeded(GenerationError):
    """A single provider attempt exceeded its wall-clock budget."""

    def __init__(self, timeout_seconds: float):
        super().__init__(f"Provider call exceeded {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds


class ProviderError(GenerationError):
    """Provider raised, or returned a document that failed validation."""


class GenerationFailed(GenerationError):
    """All attempts failed; nothing was persisted.

    ``cause`` is ``"timeout"`` or ``"provider_error"`` for the final attempt.
    """

    user_message = HIGH_DEMAND_MESSAGE

    def __init__(self, kind: str, attempts: int, cause: str, last_error: Exception | None = None):
        super().__init__(f"{kind} generation failed after {attempts} attempt(s): {cause}")
        self.kind = kind
        self.attempts = attempts
        self.cause = cause
        self.last_error = last_error


class PersistenceFailure(GenerationError):
    """Generation succeeded but the artifact could not be saved.

    The generated ``artifact`` is kept so the save can be retried without
    paying for another generation. For nutrition plans ``replaces_id`` is
    the plan that was current when generation started (None if there was
    none); a retry only goes through while that is still the case.
    """

    user_message = "The plan was generated but could not be saved. Please retry saving."

    def __init__(
        self,
        kind: str,
        artifact: Any,
        error: Exception,
        replaces_id: str | None = None,
    ):
        super().__init__(f"Failed to save generated {kind}: {error}")
        self.kind = kind
        self.artifact = artifact
        self.error = error
        self.replaces_id = replaces_id


class StaleArtifactError(FitcoachError):
    """A pending save was superseded by a newer artifact and was dropped."""

    user_message = "A newer plan has been saved since this one was generated."

    def __init__(self, kind: str, client_id: str):
        super().__init__(f"Pending {kind} for client {client_id} was superseded")
        self.kind = kind
        self.client_id = client_id
