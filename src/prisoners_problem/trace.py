from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class TraceEvent:
    """One box opened by one prisoner."""
    strategy: str
    prisoner: int
    attempt: int  # 1-based
    box: int
    value: int

    @property
    def found(self) -> bool:
        return self.value == self.prisoner


class TraceRecorder(Protocol):
    def record(self, event: TraceEvent) -> None:
        ...


class NullTrace:
    """Default recorder: drops everything."""

    def record(self, event: TraceEvent) -> None:
        pass


class LoggingTrace:
    """
    Writes one DEBUG line per opened box.

    Only meant for small runs; a 100 prisoner trial can open thousands
    of boxes.

    A trial ends at its first failing prisoner, so a lost trial is traced
    up to and including that prisoner only. Evaluating the rest would draw
    extra randomness and change every later trial of a seeded run.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger("prisoners_problem.trace")

    def record(self, event: TraceEvent) -> None:
        self.logger.debug(
            "[%s] prisoner #%d attempt %d opened box #%d, found %d%s",
            event.strategy,
            event.prisoner,
            event.attempt,
            event.box,
            event.value,
            " (WIN)" if event.found else "",
        )


NULL_TRACE = NullTrace()
