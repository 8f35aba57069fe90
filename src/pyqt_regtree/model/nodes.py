"""
Register and field nodes of the register tree.

RegisterNode holds the raw value of one register and owns the FieldNodes
described by its layout. FieldNodes never store a value; they extract their
bits from the owning register on every render.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pyqt_regtree.core.bit_utils import extract_bits
from pyqt_regtree.model.field_layouts import FieldLayoutRegistry
from pyqt_regtree.model.format_resolver import (
    render_field_value,
    render_register_value,
    resolve_format,
)
from pyqt_regtree.model.number_format import NumberFormat
from pyqt_regtree.model.preference_record import PreferenceRecord


class NodeKind(Enum):
    REGISTER = "register"
    FIELD = "field"


class CollapsibleState(Enum):
    """Expansion state reported to the tree view."""
    NONE = "none"
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


@dataclass
class TreeNodeDescriptor:
    """What the tree view needs to draw one row."""
    label: str
    collapsible_state: CollapsibleState
    context_value: str  # "register", "field" or "message"
    node: Optional[BaseNode] = None

    @property
    def is_expandable(self) -> bool:
        return self.collapsible_state is not CollapsibleState.NONE

    @property
    def is_expanded(self) -> bool:
        return self.collapsible_state is CollapsibleState.EXPANDED


class BaseNode:
    """Common display state of registers and fields."""

    def __init__(self, kind: NodeKind):
        self.kind = kind
        self.expanded = False
        self._format = NumberFormat.AUTO

    @property
    def format(self) -> NumberFormat:
        """Explicitly chosen format (AUTO when none was chosen)."""
        return self._format

    def set_format(self, fmt: NumberFormat) -> None:
        self._format = fmt

    def resolved_format(self) -> NumberFormat:
        return self._format

    def get_children(self) -> List[BaseNode]:
        return []

    def render(self) -> str:
        raise NotImplementedError

    def get_copy_value(self) -> str:
        raise NotImplementedError

    def get_tree_node(self) -> TreeNodeDescriptor:
        raise NotImplementedError


class RegisterNode(BaseNode):
    """One named, numbered register and its bit-fields."""

    def __init__(self, name: str, number: int):
        super().__init__(NodeKind.REGISTER)
        self.name = name
        self.number = number
        self.value = 0
        self.fields: List[FieldNode] = [
            FieldNode(spec.name, spec.offset, spec.width, self)
            for spec in FieldLayoutRegistry.get_layout(name)
        ]

    def __repr__(self) -> str:
        return f"RegisterNode({self.name!r}, {self.number}, value=0x{self.value:08X})"

    def set_value(self, value: int) -> None:
        self.value = value

    def extract_bits(self, offset: int, width: int) -> int:
        return extract_bits(self.value, offset, width)

    def get_children(self) -> List[FieldNode]:
        return self.fields

    def find_field(self, name: str) -> Optional[FieldNode]:
        """First field with exactly this name."""
        return next((f for f in self.fields if f.name == name), None)

    def render(self) -> str:
        return f"{self.name} = {self.get_copy_value()}"

    def get_copy_value(self) -> str:
        return render_register_value(self.value, self.resolved_format())

    def get_tree_node(self) -> TreeNodeDescriptor:
        if not self.fields:
            state = CollapsibleState.NONE
        elif self.expanded:
            state = CollapsibleState.EXPANDED
        else:
            state = CollapsibleState.COLLAPSED
        return TreeNodeDescriptor(self.render(), state, NodeKind.REGISTER.value, self)

    def collect_preferences(self) -> List[PreferenceRecord]:
        """Preference records for this register and its fields, non-default state only."""
        records = []
        if self.expanded or self._format is not NumberFormat.AUTO:
            records.append(PreferenceRecord(self.name, self._format, self.expanded))

        for field in self.fields:
            record = field.collect_preference()
            if record is not None:
                records.append(record)
        return records


class FieldNode(BaseNode):
    """A named bit span inside a register."""

    def __init__(self, name: str, offset: int, width: int, register: RegisterNode):
        super().__init__(NodeKind.FIELD)
        self.name = name
        self.offset = offset
        self.width = width
        self.register = register  # owner, fields are dropped together with it

    def __repr__(self) -> str:
        return f"FieldNode({self.name!r}, offset={self.offset}, width={self.width})"

    @property
    def path(self) -> str:
        return f"{self.register.name}.{self.name}"

    @property
    def value(self) -> int:
        return self.register.extract_bits(self.offset, self.width)

    def resolved_format(self) -> NumberFormat:
        return resolve_format(self._format, self.register.resolved_format())

    def render(self) -> str:
        return f"{self.name} = {self.get_copy_value()}"

    def get_copy_value(self) -> str:
        return render_field_value(self.value, self.width, self.resolved_format())

    def get_tree_node(self) -> TreeNodeDescriptor:
        return TreeNodeDescriptor(self.render(), CollapsibleState.NONE, NodeKind.FIELD.value, self)

    def collect_preference(self) -> Optional[PreferenceRecord]:
        if self._format is NumberFormat.AUTO:
            return None
        return PreferenceRecord(self.path, self._format)
