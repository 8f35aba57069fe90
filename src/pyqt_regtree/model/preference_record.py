"""Persisted unit of display state."""

from dataclasses import dataclass
from typing import Optional, Tuple

from pyqt_regtree.model.number_format import NumberFormat

PATH_SEPARATOR = "."


@dataclass
class PreferenceRecord:
    """Non-default display state of one node.

    ``path`` is a bare register name or ``"<register>.<field>"``.
    """
    path: str
    format: NumberFormat = NumberFormat.AUTO
    expanded: bool = False  # registers only

    @property
    def is_field(self) -> bool:
        return PATH_SEPARATOR in self.path

    def split_path(self) -> Tuple[str, Optional[str]]:
        """Return ``(register_name, field_name)``; field_name is None for register records."""
        register_name, sep, field_name = self.path.partition(PATH_SEPARATOR)
        return register_name, (field_name if sep else None)
