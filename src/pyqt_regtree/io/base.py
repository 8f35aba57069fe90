"""Protocols for preference storage backends."""

from typing import Any, Dict, List, Optional, Protocol


class PreferenceStore(Protocol):
    """Protocol for persisting the serialized preference list."""

    def load(self) -> Optional[List[Dict[str, Any]]]:
        """Return the stored list, or None when nothing usable is stored."""
        ...

    def save(self, data: List[Dict[str, Any]]) -> None:
        """Replace the stored list."""
        ...
