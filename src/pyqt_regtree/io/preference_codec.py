"""
Conversion between live display preferences and the persisted list.

Each record addresses a node by name: a bare register name, or
``"<register>.<field>"`` for a field. Only non-default state is written, so a
missing record means AUTO format and collapsed.

Serialized shape::

    [{"node": "R0", "format": "Decimal"},
     {"node": "XPSR", "expanded": true},
     {"node": "XPSR.GE", "format": "Binary"}]
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pyqt_regtree.model.nodes import RegisterNode
from pyqt_regtree.model.number_format import NumberFormat
from pyqt_regtree.model.preference_record import PreferenceRecord

logger = logging.getLogger(__name__)


def record_to_dict(record: PreferenceRecord) -> Dict[str, Any]:
    data: Dict[str, Any] = {"node": record.path}
    if record.format is not NumberFormat.AUTO:
        data["format"] = record.format.value
    if record.expanded:
        data["expanded"] = True
    return data


def record_from_dict(data: Any) -> Optional[PreferenceRecord]:
    """Build a record from persisted data, returning None for malformed entries."""
    if not isinstance(data, dict):
        return None
    path = data.get("node")
    if not isinstance(path, str) or not path:
        return None

    fmt = NumberFormat.AUTO
    raw_format = data.get("format")
    if raw_format is not None:
        parsed = NumberFormat.parse(raw_format)
        if parsed is None:
            logger.debug(f"Ignoring unknown format {raw_format!r} for {path}")
        else:
            fmt = parsed

    return PreferenceRecord(path, fmt, data.get("expanded") is True)


def encode_preferences(records: Iterable[PreferenceRecord]) -> List[Dict[str, Any]]:
    return [record_to_dict(record) for record in records]


def decode_preferences(raw: Any) -> List[PreferenceRecord]:
    """Decode a persisted list, dropping entries that cannot be understood."""
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning(f"Expected a list of preferences, got {type(raw).__name__}")
        return []

    records = []
    for entry in raw:
        record = record_from_dict(entry)
        if record is None:
            logger.debug(f"Skipping malformed preference entry: {entry!r}")
            continue
        records.append(record)
    return records


def collect_preferences(registers: Iterable[RegisterNode]) -> List[PreferenceRecord]:
    """Gather the non-default state of every register and field, in tree order."""
    records: List[PreferenceRecord] = []
    for register in registers:
        records.extend(register.collect_preferences())
    return records


def apply_preferences(registers: Sequence[RegisterNode], records: Iterable[PreferenceRecord]) -> int:
    """
    Apply records to freshly built registers by name.

    Names are matched exactly; when several registers or fields share a name the
    first one wins. Records naming registers or fields that no longer exist are
    dropped.

    Returns:
        Number of records that matched a node
    """
    applied = 0
    for record in records:
        register_name, field_name = record.split_path()
        register = next((r for r in registers if r.name == register_name), None)
        if register is None:
            logger.debug(f"No register named {register_name!r}, dropping preference")
            continue

        if field_name is None:
            if record.expanded:
                register.expanded = True
            if record.format is not NumberFormat.AUTO:
                register.set_format(record.format)
            applied += 1
            continue

        field = register.find_field(field_name)
        if field is None:
            logger.debug(f"No field {record.path!r}, dropping preference")
            continue
        if record.format is not NumberFormat.AUTO:
            field.set_format(record.format)
        applied += 1

    return applied
