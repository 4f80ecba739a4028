"""
Core - Shared infrastructure.

Provides:
- ConfigManager: Configuration with persistence
- Signal: Synchronous observer notifications
- setup_logging: Loguru sinks

Usage:
    from src.core import ConfigManager, setup_logging

    config = ConfigManager("config.json")
    setup_logging(config.data.general.debug_mode, config.data.general.log_dir)
"""
from .config import (
    ConfigManager,
    AppConfig,
    GeneralSettings,
    LinkStyleSettings,
    RoutingSettings,
    OrphanDropPolicy,
)
from .events import Signal
from .logging import setup_logging

__all__ = [
    # Configuration
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "LinkStyleSettings",
    "RoutingSettings",
    "OrphanDropPolicy",

    # Events
    "Signal",

    # Logging
    "setup_logging",
]
