"""
Persistence of register display preferences.

Storage protocol, file and memory stores, and the codec between live node
state and the stored list.
"""

from .base import PreferenceStore
from .exceptions import PreferenceStoreError, RegisterDataError
from .preference_codec import (
    record_to_dict,
    record_from_dict,
    encode_preferences,
    decode_preferences,
    collect_preferences,
    apply_preferences,
)
from .preference_store import JsonPreferenceStore, MemoryPreferenceStore

__all__ = [
    "PreferenceStore",
    "PreferenceStoreError",
    "RegisterDataError",
    "record_to_dict",
    "record_from_dict",
    "encode_preferences",
    "decode_preferences",
    "collect_preferences",
    "apply_preferences",
    "JsonPreferenceStore",
    "MemoryPreferenceStore",
]
