"""
Data Models Layer.

This package contains the data structures used throughout the application:
the run configuration, the parsed subscriptions file, and pass statistics.
"""

from .config import RunConfig
from .stats import OrganizeResult, PassStats
from .subscription import (
    Document,
    GlobalConfig,
    OrganizePattern,
    OrganizeRules,
    Section,
    Subscription,
    SubscriptionSet,
)

__all__ = [
    "Document",
    "GlobalConfig",
    "OrganizePattern",
    "OrganizeResult",
    "OrganizeRules",
    "PassStats",
    "RunConfig",
    "Section",
    "Subscription",
    "SubscriptionSet",
]
