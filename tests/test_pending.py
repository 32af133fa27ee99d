"""Tests for PendingSaves."""

import pytest
from loguru import logger

from fitcoach.errors import PersistenceFailure
from fitcoach.models.program import Program, ProgramData
from fitcoach.web.pending import PendingSaves


@pytest.fixture
def make_failure(program_document):
    def make(trainer_id="trainer-1", client_id="client-1"):
        program = Program(
            client_id=client_id, trainer_id=trainer_id, data=ProgramData.from_dict(program_document)
        )
        return PersistenceFailure("program", program, OSError("disk full"))

    return make


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    yield messages
    logger.remove(handler_id)


class TestPendingSaves:
    """Tests for the pending save store."""

    def test_take_claims_once(self, make_failure):
        pending = PendingSaves()
        failure = make_failure()
        token = pending.add(failure)

        assert pending.take(token, "trainer-1") is failure
        assert pending.take(token, "trainer-1") is None
        assert len(pending) == 0

    def test_take_other_trainer(self, make_failure):
        pending = PendingSaves()
        token = pending.add(make_failure())

        assert pending.take(token, "trainer-2") is None
        assert token in pending

    def test_replace_puts_back(self, make_failure):
        pending = PendingSaves()
        token = pending.add(make_failure())
        claimed = pending.take(token, "trainer-1")

        pending.replace(token, claimed)

        assert pending.take(token, "trainer-1") is claimed

    def test_eviction_is_logged(self, make_failure, log_messages):
        """Test the oldest entry is dropped and the drop is logged."""
        pending = PendingSaves(max_entries=1)
        oldest = pending.add(make_failure(client_id="client-old"))
        newest = pending.add(make_failure(client_id="client-new"))

        assert oldest not in pending
        assert newest in pending
        assert len(log_messages) == 1
        record = log_messages[0].record
        assert record["message"] == "Pending save evicted"
        assert record["extra"]["retry_token"] == oldest
        assert record["extra"]["kind"] == "program"
        assert record["extra"]["subject_id"] == "client-old"
