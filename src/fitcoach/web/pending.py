"""Generated artifacts whose save failed, kept for a cheap retry."""

from collections import OrderedDict
from uuid import uuid4

from loguru import logger

from ..errors import PersistenceFailure


class PendingSaves:
    """In-memory store of persistence failures, keyed by retry token.

    Bounded to the most recent ``max_entries``; lost on restart.
    """

    def __init__(self, max_entries: int = 100):
        self.max_entries = max_entries
        self._failures: OrderedDict[str, PersistenceFailure] = OrderedDict()

    def add(self, failure: PersistenceFailure) -> str:
        token = str(uuid4())
        self._failures[token] = failure
        while len(self._failures) > self.max_entries:
            evicted_token, evicted = self._failures.popitem(last=False)
            logger.warning(
                "Pending save evicted",
                retry_token=evicted_token,
                kind=evicted.kind,
                subject_id=evicted.artifact.client_id,
            )
        return token

    def take(self, token: str, trainer_id: str) -> PersistenceFailure | None:
        """Claim a pending save, removing it from the store.

        Returns None when the token is unknown or owned by another
        trainer; a claimed token can't be claimed again until it is
        put back with ``replace``.
        """
        failure = self._failures.get(token)
        if failure is None or failure.artifact.trainer_id != trainer_id:
            return None
        del self._failures[token]
        return failure

    def replace(self, token: str, failure: PersistenceFailure) -> None:
        self._failures[token] = failure

    def __contains__(self, token: str) -> bool:
        return token in self._failures

    def __len__(self) -> int:
        return len(self._failures)
