"""
Core utilities.

Bit helpers with no Qt dependency, and request runners built on QtCore.
"""

from .bit_utils import create_mask, extract_bits, hex_format, binary_format, decimal_format
from .background_task import BackgroundTask, SyncRequestRunner, ThreadedRequestRunner

__all__ = [
    "create_mask",
    "extract_bits",
    "hex_format",
    "binary_format",
    "decimal_format",
    "BackgroundTask",
    "SyncRequestRunner",
    "ThreadedRequestRunner",
]
