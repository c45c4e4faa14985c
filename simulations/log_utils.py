# simulations/log_utils.py

from __future__ import annotations

import logging


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(*, debug: bool = False) -> logging.Logger:
    """
    Configure and return the root logger of the simulation packages.

    Logs go to stderr so stdout only carries the rate lines. Both
    `simulations.*` and `prisoners_problem.*` loggers share the handler.
    """
    level = logging.DEBUG if debug else logging.INFO

    for name in ("prisoners_problem", "simulations"):
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Avoid duplicate handlers if called multiple times in-process.
        if getattr(logger, "_configured", False):
            for h in logger.handlers:
                h.setLevel(level)
            continue

        sh = logging.StreamHandler()
        sh.setLevel(level)
        sh.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(sh)
        logger._configured = True  # type: ignore[attr-defined]

    return logging.getLogger("simulations")
