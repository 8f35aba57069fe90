"""Display formats for register and field values."""

from enum import Enum
from typing import Any, Optional


class NumberFormat(Enum):
    """Rendering mode of a node.

    AUTO defers to the parent register, then to the default rendering rule.
    The value is the name used in the persisted preference list.
    """
    AUTO = "Auto"
    DECIMAL = "Decimal"
    HEXADECIMAL = "Hexadecimal"
    BINARY = "Binary"

    @classmethod
    def parse(cls, raw: Any) -> Optional["NumberFormat"]:
        """Convert a persisted format value, returning None when it is not recognized.

        Accepts format names and the numeric codes written by older state files.
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            return _LEGACY_CODES.get(raw)
        if isinstance(raw, str):
            for member in cls:
                if member.value.lower() == raw.lower():
                    return member
        return None


_LEGACY_CODES = {
    0: NumberFormat.AUTO,
    1: NumberFormat.HEXADECIMAL,
    2: NumberFormat.DECIMAL,
    3: NumberFormat.BINARY,
}
