"""
Platform primitives: environment-driven settings and logging setup.
"""

from rulenet.platform.config import Settings, load_settings
from rulenet.platform.logging import configure_logging

__all__ = [
    "Settings",
    "configure_logging",
    "load_settings",
]
