"""Tests for AnnounceStateTracker."""
import logging

from announce.discovery.models import TickMessage, TickOutcome
from announce.discovery.state import AnnounceStateTracker

LOGGER = "tests.state"


class TestDecide:

    def test_first_tick_always_logs(self):
        assert AnnounceStateTracker().decide(False) is True
        assert AnnounceStateTracker().decide(True) is True

    def test_repeated_outcome_is_silent_and_transitions_log(self):
        tracker = AnnounceStateTracker()
        outcomes = [False, False, True, True, True, False, True]
        decisions = [tracker.decide(o) for o in outcomes]
        assert decisions == [True, False, True, False, False, True, True]

    def test_state_is_updated_even_when_not_logging(self):
        tracker = AnnounceStateTracker()
        tracker.decide(True)
        assert tracker.decide(True) is False
        assert tracker.announced is True
        assert tracker.first_run is False

    def test_initial_state(self):
        tracker = AnnounceStateTracker()
        assert tracker.announced is False
        assert tracker.first_run is True


class TestRecord:

    def test_emits_messages_in_order_when_logging(self, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER)
        cause = ConnectionError("refused")
        outcome = TickOutcome(
            success=True,
            messages=(
                TickMessage.warning("a failed", cause=cause),
                TickMessage.info("b succeeded"),
            ),
        )

        assert AnnounceStateTracker().record(outcome, logging.getLogger(LOGGER)) is True

        assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
            (logging.WARNING, "a failed"),
            (logging.INFO, "b succeeded"),
        ]
        assert caplog.records[0].exc_info[1] is cause
        assert caplog.records[1].exc_info is None

    def test_discards_messages_when_gated(self, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER)
        logger = logging.getLogger(LOGGER)
        tracker = AnnounceStateTracker()
        failed = TickOutcome(success=False, messages=(TickMessage.warning("all failed"),))

        tracker.record(failed, logger)
        caplog.clear()

        assert tracker.record(failed, logger) is False
        assert caplog.records == []
        assert tracker.announced is False
