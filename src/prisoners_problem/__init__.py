"""
Core of the 100 prisoners Monte Carlo: box placement, the two opening
strategies and closed-form success probabilities used to cross-check them.
"""

from .analytic import success_probability  # noqa: F401
from .permutation import Permutation, cycle_lengths, longest_cycle, place_boxes  # noqa: F401
from .strategies import STRATEGIES, get_strategy  # noqa: F401
from .trace import LoggingTrace, NullTrace, TraceEvent, TraceRecorder  # noqa: F401
