"""Registry of known bit-field layouts keyed by register name.

Registers whose upper-cased name is registered here are built with the
corresponding fields. Applications can add layouts for other architectures
without touching the node classes.

Example:
    from pyqt_regtree.model import FieldSpec, register_field_layout

    register_field_layout(["MSTATUS"], [
        FieldSpec("MIE", 3, 1),
        FieldSpec("MPIE", 7, 1),
    ])
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class FieldSpec:
    """Name and position of one bit-field inside a register."""
    name: str
    offset: int  # Least significant bit
    width: int


class FieldLayoutRegistry:
    """Registry of field layouts by upper-cased register name.

    Layouts keep their declaration order and may contain overlapping spans or
    repeated names; both are displayed as declared.
    """

    _layouts: Dict[str, Tuple[FieldSpec, ...]] = {}

    @classmethod
    def register(cls, names: Iterable[str], specs: Iterable[FieldSpec]) -> None:
        """Register a layout for one or more register names.

        Args:
            names: Register names sharing the layout (matched case-insensitively)
            specs: Ordered field specifications
        """
        layout = tuple(specs)
        for name in names:
            cls._layouts[name.upper()] = layout

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._layouts.pop(name.upper(), None)

    @classmethod
    def get_layout(cls, register_name: str) -> List[FieldSpec]:
        """Return the field specs for a register name, empty when none is registered."""
        return list(cls._layouts.get(register_name.upper(), ()))


def register_field_layout(names: Iterable[str], specs: Iterable[FieldSpec]) -> None:
    """Register a field layout for the given register names.

    Args:
        names: Register names
        specs: Ordered field specifications
    """
    FieldLayoutRegistry.register(names, specs)


# Cortex-M program status register (also reported as CPSR by some servers).
# The IT/ICI bits are split across two spans that share one label.
PROGRAM_STATUS_FIELDS = (
    FieldSpec("Negative Flag (N)", 31, 1),
    FieldSpec("Zero Flag (Z)", 30, 1),
    FieldSpec("Carry or borrow flag (C)", 29, 1),
    FieldSpec("Overflow Flag (V)", 28, 1),
    FieldSpec("Saturation Flag (Q)", 27, 1),
    FieldSpec("GE", 16, 4),
    FieldSpec("Interrupt Number", 0, 8),
    FieldSpec("ICI/IT", 25, 2),
    FieldSpec("ICI/IT", 10, 6),
    FieldSpec("Thumb State (T)", 24, 1),
)

CONTROL_FIELDS = (
    FieldSpec("FPCA", 2, 1),
    FieldSpec("SPSEL", 1, 1),
    FieldSpec("nPRIV", 0, 1),
)

register_field_layout(["XPSR", "CPSR"], PROGRAM_STATUS_FIELDS)
register_field_layout(["CONTROL"], CONTROL_FIELDS)
