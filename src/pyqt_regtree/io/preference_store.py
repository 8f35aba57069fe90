"""
Preference stores.

Persist the serialized display preferences of the register tree across debug
sessions. Reading is best effort: a missing or unreadable file means no saved
preferences.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pyqt_regtree.io.exceptions import PreferenceStoreError
from pyqt_regtree.protocols.view_config import get_view_config

logger = logging.getLogger(__name__)


class JsonPreferenceStore:
    """
    Preference store backed by a JSON file.

    The whole list is rewritten on every save.
    """

    def __init__(self, file_path: Union[str, Path], strict: bool = False):
        """
        Initialize the store.

        Args:
            file_path: Location of the JSON state file
            strict: Raise PreferenceStoreError instead of logging IO and decode failures
        """
        self.file_path = Path(file_path)
        self.strict = strict

    @classmethod
    def for_workspace(cls, workspace_folder: Union[str, Path], strict: bool = False) -> "JsonPreferenceStore":
        """Create a store at the configured state file location inside a workspace folder."""
        config = get_view_config()
        return cls(Path(workspace_folder) / config.state_dir_name / config.state_file_name, strict=strict)

    def load(self) -> Optional[List[Dict[str, Any]]]:
        """Load the preference list from disk."""
        try:
            if not self.file_path.exists():
                logger.debug(f"No saved register preferences at {self.file_path}")
                return None
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            if self.strict:
                raise PreferenceStoreError(f"Failed to load {self.file_path}: {e}") from e
            logger.warning(f"Failed to load register preferences: {e}")
            return None

        if not isinstance(data, list):
            if self.strict:
                raise PreferenceStoreError(f"{self.file_path} does not contain a list")
            logger.warning(f"Ignoring register preferences in {self.file_path}: not a list")
            return None

        logger.debug(f"Loaded {len(data)} register preferences from {self.file_path}")
        return data

    def save(self, data: List[Dict[str, Any]]) -> None:
        """Write the preference list to disk, replacing previous content."""
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            if self.strict:
                raise PreferenceStoreError(f"Failed to save {self.file_path}: {e}") from e
            logger.warning(f"Failed to save register preferences: {e}")
            return
        logger.debug(f"Saved {len(data)} register preferences to {self.file_path}")

    def clear(self) -> None:
        """Remove the state file if present."""
        try:
            self.file_path.unlink()
            logger.info(f"Removed register preferences at {self.file_path}")
        except FileNotFoundError:
            pass


class MemoryPreferenceStore:
    """In-memory preference store, for embedding without a workspace and for tests."""

    def __init__(self, data: Optional[List[Dict[str, Any]]] = None):
        self._data = copy.deepcopy(data) if data is not None else None
        self.save_count = 0

    def load(self) -> Optional[List[Dict[str, Any]]]:
        return copy.deepcopy(self._data) if self._data is not None else None

    def save(self, data: List[Dict[str, Any]]) -> None:
        self._data = copy.deepcopy(data)
        self.save_count += 1

    def clear(self) -> None:
        self._data = None
