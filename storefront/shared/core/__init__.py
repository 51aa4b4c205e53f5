"""
Shared Core Module
==================

Event system, configuration, and the exit cleanup registry.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

# Cleanup
from .service_registry import register_cleanup_handler, run_cleanup_handlers

# Configuration
from .configuration import (
    CatalogConfig,
    CheckoutConfig,
    ConfigManager,
    SystemConfig,
    UIConfig,
    ValidationLevel,
    get_config,
    get_config_manager,
)

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Cleanup
    "register_cleanup_handler",
    "run_cleanup_handlers",
    # Configuration
    "CatalogConfig",
    "CheckoutConfig",
    "ConfigManager",
    "SystemConfig",
    "UIConfig",
    "ValidationLevel",
    "get_config",
    "get_config_manager",
]
