"""
Register tree provider.

Owns the registers of the active debug session and drives their lifecycle:

1. session_started() drops any previous registers
2. refresh() asks the backend for the register names, builds the nodes,
   applies saved display preferences, then asks for the raw values
3. later refresh() calls (one per debugger stop) only fetch values
4. session_terminated() saves the display preferences and drops the registers

Every coherent change is announced once through ``tree_changed`` so views can
re-read the tree.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_regtree.core.background_task import SyncRequestRunner
from pyqt_regtree.io.base import PreferenceStore
from pyqt_regtree.io.exceptions import PreferenceStoreError, RegisterDataError
from pyqt_regtree.io.preference_codec import (
    apply_preferences,
    collect_preferences,
    decode_preferences,
    encode_preferences,
)
from pyqt_regtree.model.nodes import (
    BaseNode,
    CollapsibleState,
    RegisterNode,
    TreeNodeDescriptor,
)
from pyqt_regtree.model.number_format import NumberFormat
from pyqt_regtree.model.preference_record import PreferenceRecord
from pyqt_regtree.protocols.debug_backend import DebugBackend, RegisterValue
from pyqt_regtree.protocols.view_config import get_view_config

logger = logging.getLogger(__name__)

MESSAGE_CONTEXT = "message"


class TreeState(Enum):
    UNLOADED = "unloaded"  # no registers
    LOADING = "loading"    # register names requested
    LOADED = "loaded"      # registers built, values may be stale


class RegisterTreeProvider(QObject):
    """
    Registry of the registers shown in the register tree.

    Backend calls go through a request runner. Each call is tagged with the
    session generation it was issued in; results arriving after the session
    started again or ended are discarded.

    Usage:
        provider = RegisterTreeProvider(store=JsonPreferenceStore.for_workspace(folder))
        provider.tree_changed.connect(view.reload)

        provider.session_started(backend)
        provider.debug_stopped()          # fetch names, build nodes, fetch values
        ...
        provider.session_terminated()     # persist preferences
    """

    tree_changed = pyqtSignal()
    state_changed = pyqtSignal(object)    # TreeState
    refresh_failed = pyqtSignal(Exception)

    def __init__(self, store: Optional[PreferenceStore] = None, runner=None, parent=None):
        """
        Args:
            store: Where display preferences are persisted; None disables persistence
            runner: Request runner for backend calls, SyncRequestRunner by default
            parent: Optional parent QObject
        """
        super().__init__(parent)
        self._store = store
        self._runner = runner if runner is not None else SyncRequestRunner()
        self._backend: Optional[DebugBackend] = None
        self._registers: List[RegisterNode] = []
        self._register_map: Dict[int, RegisterNode] = {}
        self._state = TreeState.UNLOADED
        self._generation = 0
        self._selected_node: Optional[BaseNode] = None

    # ========== STATE ==========

    @property
    def state(self) -> TreeState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_session_active(self) -> bool:
        return self._backend is not None

    @property
    def registers(self) -> Tuple[RegisterNode, ...]:
        return tuple(self._registers)

    @property
    def selected_node(self) -> Optional[BaseNode]:
        return self._selected_node

    def find_register(self, name: str) -> Optional[RegisterNode]:
        """First register with exactly this name."""
        return next((r for r in self._registers if r.name == name), None)

    def register_by_number(self, number: int) -> Optional[RegisterNode]:
        return self._register_map.get(number)

    def _set_state(self, state: TreeState) -> None:
        if state is self._state:
            return
        logger.debug(f"Register tree {self._state.value} -> {state.value}")
        self._state = state
        self.state_changed.emit(state)

    def _clear(self) -> None:
        self._registers = []
        self._register_map = {}
        self._selected_node = None
        self._set_state(TreeState.UNLOADED)

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug(f"Discarding result of generation {generation}, current is {self._generation}")
            return True
        return False

    # ========== SESSION LIFECYCLE ==========

    def session_started(self, backend: DebugBackend) -> None:
        """Forget registers of any previous session and attach to a new backend."""
        self._generation += 1
        self._backend = backend
        self._clear()
        logger.info(f"Debug session started (generation {self._generation})")
        self.tree_changed.emit()

    def session_terminated(self) -> None:
        """Persist display preferences, then drop all registers."""
        if self._state is TreeState.LOADED:
            self.save_preferences()
        self._generation += 1
        self._backend = None
        self._clear()
        logger.info("Debug session terminated")
        self.tree_changed.emit()

    def debug_stopped(self) -> None:
        self.refresh()

    def debug_continued(self) -> None:
        """Values are not read while the target runs."""

    # ========== REFRESH ==========

    def refresh(self) -> None:
        """Fetch register values, building the registers first if needed."""
        if self._backend is None:
            logger.debug("Refresh ignored: no active debug session")
            return

        if self._state is TreeState.LOADED:
            self._request_values()
        elif self._state is TreeState.UNLOADED:
            self._request_names()
        else:
            logger.debug("Refresh ignored: register names already requested")

    def _request_names(self) -> None:
        generation = self._generation
        self._set_state(TreeState.LOADING)
        self._runner.run(
            self._backend.get_register_names,
            on_success=lambda names: self._on_names_received(generation, names),
            on_error=lambda error: self._on_request_failed(generation, error),
        )

    def _request_values(self) -> None:
        generation = self._generation
        self._runner.run(
            self._backend.get_register_values,
            on_success=lambda values: self._on_values_received(generation, values),
            on_error=lambda error: self._on_request_failed(generation, error),
        )

    def _on_names_received(self, generation: int, names: Sequence[Optional[str]]) -> None:
        if self._is_stale(generation):
            return
        self.create_registers(names)
        self._request_values()

    def _on_values_received(self, generation: int, values: Sequence[Any]) -> None:
        if self._is_stale(generation):
            return
        try:
            self.update_register_values(values)
        except RegisterDataError as e:
            self._on_request_failed(generation, e)

    def _on_request_failed(self, generation: int, error: Exception) -> None:
        if self._is_stale(generation):
            return
        logger.error(f"Register refresh failed: {error}")
        if self._state is TreeState.LOADING:
            self._set_state(TreeState.UNLOADED)
        self.refresh_failed.emit(error)

    def create_registers(self, names: Sequence[Optional[str]]) -> None:
        """
        Build register nodes from the backend name list and apply saved preferences.

        A register's number is its position in the list; empty names are skipped
        and leave a gap.
        """
        self._registers = []
        self._register_map = {}
        self._selected_node = None

        for number, name in enumerate(names):
            if not name:
                continue
            register = RegisterNode(name, number)
            self._registers.append(register)
            self._register_map[number] = register

        logger.debug(f"Created {len(self._registers)} registers")
        self._set_state(TreeState.LOADED)
        self.load_preferences()
        self.tree_changed.emit()

    def update_register_values(self, values: Sequence[Any]) -> None:
        """
        Overwrite register values from backend readings.

        Every entry is parsed before any register changes. Numbers that match no
        register are ignored.

        Raises:
            RegisterDataError: An entry has a non-numeric number or value
        """
        parsed = [self._parse_reading(entry) for entry in values]

        for number, value in parsed:
            register = self._register_map.get(number)
            if register is None:
                continue
            register.set_value(value)

        self.tree_changed.emit()

    @staticmethod
    def _parse_reading(entry: Any) -> Tuple[int, int]:
        """Return ``(number, value)`` from a RegisterValue or ``{"number", "value"}`` mapping."""
        if isinstance(entry, RegisterValue):
            number, value = entry.number, entry.value
        elif isinstance(entry, Mapping):
            number, value = entry.get("number"), entry.get("value")
        else:
            raise RegisterDataError(f"Unsupported register reading: {entry!r}")

        try:
            number = number if isinstance(number, int) else int(number, 10)
            value = value if isinstance(value, int) else int(value, 16)
        except (TypeError, ValueError) as e:
            raise RegisterDataError(f"Malformed register reading {entry!r}: {e}") from e
        return number, value

    # ========== PREFERENCES ==========

    def load_preferences(self) -> int:
        """Apply saved preferences to the current registers.

        Returns:
            Number of records that matched a register or field
        """
        if self._store is None:
            return 0
        try:
            raw = self._store.load()
        except PreferenceStoreError as e:
            logger.warning(f"Ignoring saved register preferences: {e}")
            return 0
        if raw is None:
            return 0

        applied = apply_preferences(self._registers, decode_preferences(raw))
        logger.debug(f"Applied {applied} saved register preferences")
        return applied

    def collect_preferences(self) -> List[PreferenceRecord]:
        return collect_preferences(self._registers)

    def save_preferences(self) -> None:
        """Write the current non-default display state to the store."""
        if self._store is None:
            return
        data = encode_preferences(self.collect_preferences())
        try:
            self._store.save(data)
        except PreferenceStoreError as e:
            logger.error(f"Could not save register preferences: {e}")

    # ========== VIEW SUPPORT ==========

    def get_children(self, node: Optional[BaseNode] = None) -> List[TreeNodeDescriptor]:
        """Descriptors for the top level (node is None) or the children of node."""
        if self._state is TreeState.LOADED and self._registers:
            if node is not None:
                return [child.get_tree_node() for child in node.get_children()]
            return [register.get_tree_node() for register in self._registers]

        if self._state is not TreeState.LOADED:
            message = get_view_config().placeholder_message
            return [TreeNodeDescriptor(message, CollapsibleState.NONE, MESSAGE_CONTEXT)]

        return []

    def get_tree_item(self, node: BaseNode) -> TreeNodeDescriptor:
        return node.get_tree_node()

    def select_node(self, node: Optional[BaseNode]) -> None:
        self._selected_node = node

    def copy_value(self, node: Optional[BaseNode] = None) -> Optional[str]:
        """Copy text of node, or of the selected node when none is given."""
        target = node if node is not None else self._selected_node
        if target is None:
            return None
        return target.get_copy_value()

    def set_format(self, node: BaseNode, fmt: NumberFormat) -> None:
        node.set_format(fmt)
        self.tree_changed.emit()

    def set_expanded(self, node: BaseNode, expanded: bool) -> None:
        """Record expansion reported by the view. Fields cannot expand."""
        if isinstance(node, RegisterNode):
            node.expanded = expanded
