"""
Service layer for the Bodhi feedback notifier.
"""

from .config_manager import ConfigurationManager

__all__ = [
    "ConfigurationManager",
]
