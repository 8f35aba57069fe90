"""
Collaborator protocols and configuration hooks.

Contracts for the debug backend plus the global view configuration.
"""

from .debug_backend import DebugBackend, RegisterValue
from .view_config import RegisterViewConfig, set_view_config, get_view_config

__all__ = [
    "DebugBackend",
    "RegisterValue",
    "RegisterViewConfig",
    "set_view_config",
    "get_view_config",
]
