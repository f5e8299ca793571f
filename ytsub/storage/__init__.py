"""
Storage Layer.

This package locates, reads and creates the subscriptions file.
"""

from .config_manager import EXAMPLE_SUBSCRIPTIONS, ConfigManager

__all__ = ["EXAMPLE_SUBSCRIPTIONS", "ConfigManager"]
