"""
Core application engine.

The `Scheduler` decides when a pass runs and guarantees passes never overlap;
the `SubscriptionRunner` performs a pass: downloading every subscription and
organizing the resulting files.
"""

from .runner import SubscriptionRunner
from .scheduler import Scheduler, SchedulerState

__all__ = ["Scheduler", "SchedulerState", "SubscriptionRunner"]
