"""
Register tree data model.

Register and field nodes, display formats, the field layout table and the
rules that turn raw values into display text.
"""

from .number_format import NumberFormat
from .field_layouts import FieldSpec, FieldLayoutRegistry, register_field_layout
from .format_resolver import resolve_format, render_register_value, render_field_value
from .preference_record import PreferenceRecord
from .nodes import (
    NodeKind,
    CollapsibleState,
    TreeNodeDescriptor,
    BaseNode,
    RegisterNode,
    FieldNode,
)

__all__ = [
    "NumberFormat",
    "PreferenceRecord",
    "FieldSpec",
    "FieldLayoutRegistry",
    "register_field_layout",
    "resolve_format",
    "render_register_value",
    "render_field_value",
    "NodeKind",
    "CollapsibleState",
    "TreeNodeDescriptor",
    "BaseNode",
    "RegisterNode",
    "FieldNode",
]
