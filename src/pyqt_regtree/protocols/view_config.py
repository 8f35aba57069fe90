"""Base configuration for the register view.

Provides hooks for applications to customize rendering and persistence.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class RegisterViewConfig:
    """Configuration for register tree behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        state_dir_name: Directory (relative to the workspace folder) holding the state file
        state_file_name: File name of the persisted display preferences
        hex_uppercase: Render hexadecimal digits in upper case
        group_binary: Split binary text into space separated nibbles
        register_width: Bit width of register values
        placeholder_message: Label shown when no debug session has loaded registers
    """

    state_dir_name: str = ".vscode"
    state_file_name: str = ".cortex-debug.registers.state.json"
    hex_uppercase: bool = True
    group_binary: bool = False
    register_width: int = 32
    placeholder_message: str = "Not in active debug session."


# Global config instance (set by application)
_view_config: Optional[RegisterViewConfig] = None


def set_view_config(config: Optional[RegisterViewConfig]) -> None:
    """Set the global register view configuration.

    Args:
        config: RegisterViewConfig instance, or None to restore defaults
    """
    global _view_config
    _view_config = config


def get_view_config() -> RegisterViewConfig:
    """Get the current register view configuration.

    Returns:
        Current RegisterViewConfig or default if not set
    """
    if _view_config is None:
        return RegisterViewConfig()
    return _view_config
