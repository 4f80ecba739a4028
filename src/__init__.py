"""
LinkGraph - Connection routing for node-graph editors.

Directed links between typed node endpoints, the drag state machine that
creates and rewires them, and the curve geometry used to draw them.
"""

# Core systems
from src.core.config import (
    ConfigManager,
    AppConfig,
    GeneralSettings,
    LinkStyleSettings,
    RoutingSettings,
    OrphanDropPolicy,
)
from src.core.events import Signal
from src.core.logging import setup_logging

__version__ = "0.1.0"

__all__ = [
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "LinkStyleSettings",
    "RoutingSettings",
    "OrphanDropPolicy",
    "Signal",
    "setup_logging",
]
