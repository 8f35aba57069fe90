"""
Service layer for the register tree.

Session lifecycle, refresh and preference persistence of the register tree.
"""

from .register_tree_provider import RegisterTreeProvider, TreeState

__all__ = [
    "RegisterTreeProvider",
    "TreeState",
]
