# conftest.py
"""
Shared pytest fixtures for the simulation tests.
"""
import logging
import random

import matplotlib

matplotlib.use("Agg")

import pytest


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture(autouse=True)
def reset_package_loggers():
    """get_logger() attaches stream handlers; drop them between tests."""
    yield
    for name in ("prisoners_problem", "simulations"):
        logger = logging.getLogger(name)
        for h in list(logger.handlers):
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)
        if hasattr(logger, "_configured"):
            del logger._configured


class RecordingTrace:
    """Trace recorder that keeps every event."""

    def __init__(self):
        self.events = []

    def record(self, event):
        self.events.append(event)


@pytest.fixture
def recording_trace():
    return RecordingTrace()
