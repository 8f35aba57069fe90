"""
pyqt-regtree: Inspectable CPU register tree for PyQt6 debugger front ends.

Models a debugger's register bank as a tree of registers and their bit-fields,
each rendered in hex, decimal or binary, with display preferences that
survive across debug sessions.

Architecture:
- Tier 1 (Core): Bit helpers and QtCore request runners
- Tier 2 (Protocols): Debug backend contract and view configuration
- Tier 3 (Model): Register and field nodes, formats, field layouts
- Tier 4 (IO): Preference codec and stores
- Tier 5 (Services): RegisterTreeProvider session lifecycle

Key Features:
- Hand-curated field layouts for status registers, extensible by name
- Field -> register -> width heuristic format inheritance
- Name-addressed preference persistence
- Signal based change notification
"""

__version__ = "0.1.0"

from pyqt_regtree.model import FieldSpec, NumberFormat, RegisterNode, FieldNode, register_field_layout
from pyqt_regtree.io import JsonPreferenceStore, MemoryPreferenceStore
from pyqt_regtree.protocols import DebugBackend, RegisterValue, RegisterViewConfig, set_view_config
from pyqt_regtree.services import RegisterTreeProvider, TreeState

__all__ = [
    "__version__",
    "FieldSpec",
    "NumberFormat",
    "RegisterNode",
    "FieldNode",
    "register_field_layout",
    "JsonPreferenceStore",
    "MemoryPreferenceStore",
    "DebugBackend",
    "RegisterValue",
    "RegisterViewConfig",
    "set_view_config",
    "RegisterTreeProvider",
    "TreeState",
]
