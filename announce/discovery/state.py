"""Announce state tracking and edge-triggered logging"""
import logging

from announce.discovery.models import TickOutcome


class AnnounceStateTracker:
    """
    Remembers whether the last tick announced and decides whether a tick is logged.

    A tick is logged on the first run and whenever its outcome differs from
    the previous tick; repeated outcomes are dropped silently.
    """

    def __init__(self):
        self._announced = False
        self._first_run = True

    @property
    def announced(self) -> bool:
        return self._announced

    @property
    def first_run(self) -> bool:
        return self._first_run

    def decide(self, tick_success: bool) -> bool:
        """Return whether this tick should be logged, then remember its outcome."""
        should_log = self._first_run or tick_success != self._announced
        self._announced = tick_success
        self._first_run = False
        return should_log

    @staticmethod
    def emit(outcome: TickOutcome, logger: logging.Logger):
        for message in outcome.messages:
            logger.log(message.level, message.text, exc_info=message.cause)

    def record(self, outcome: TickOutcome, logger: logging.Logger) -> bool:
        """Decide on the outcome and log its messages if the gate is open."""
        should_log = self.decide(outcome.success)
        if should_log:
            self.emit(outcome, logger)
        return should_log
