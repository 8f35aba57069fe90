"""Protocol for the debug backend that supplies register names and values."""

from dataclasses import dataclass
from typing import Protocol, Sequence, Optional


@dataclass(frozen=True)
class RegisterValue:
    """One raw register reading as reported by the backend.

    Both members are text on the wire: ``number`` is decimal, ``value`` is hexadecimal.
    """
    number: str
    value: str


class DebugBackend(Protocol):
    """Protocol for a debug session able to report register state."""

    def get_register_names(self) -> Sequence[Optional[str]]:
        """Return register names ordered by register number.

        Empty entries are allowed and leave a gap in the numbering.
        """
        ...

    def get_register_values(self) -> Sequence[RegisterValue]:
        """Return the current raw value of every register the backend knows."""
        ...
