"""
Bit manipulation and number rendering helpers.

Pure functions shared by register and field nodes. None of them validate
their inputs: callers keep bit spans within the register width.
"""

from typing import Optional

from pyqt_regtree.protocols.view_config import get_view_config


def create_mask(width: int) -> int:
    """Return an integer with the low ``width`` bits set."""
    return (1 << width) - 1


def extract_bits(value: int, offset: int, width: int) -> int:
    """Extract ``width`` bits of ``value`` starting at bit ``offset``."""
    return (value >> offset) & create_mask(width)


def hex_format(value: int, min_digits: int = 8, add_prefix: bool = True,
               uppercase: Optional[bool] = None) -> str:
    """
    Render value as zero-padded hexadecimal.

    Args:
        value: Non-negative integer to render
        min_digits: Minimum number of hex digits (left padded with zeros)
        add_prefix: Prepend ``0x``
        uppercase: Digit case; defaults to the configured ``hex_uppercase``

    Returns:
        Hex text such as ``0x000000FF``
    """
    if uppercase is None:
        uppercase = get_view_config().hex_uppercase

    digits = format(value, "X" if uppercase else "x").rjust(min_digits, "0")
    return f"0x{digits}" if add_prefix else digits


def binary_format(value: int, width: int = 0, group: bool = False, pad: bool = True,
                  add_prefix: bool = False) -> str:
    """
    Render value as binary text.

    Args:
        value: Non-negative integer to render
        width: Number of bits to show when ``pad`` is set
        group: Split into nibbles separated by spaces, counted from the least significant bit
        pad: Left pad with zeros to ``width`` bits
        add_prefix: Prepend ``0b``
    """
    digits = format(value, "b")
    if pad:
        digits = digits.rjust(width, "0")

    if group:
        head = len(digits) % 4
        chunks = [digits[:head]] if head else []
        chunks.extend(digits[i:i + 4] for i in range(head, len(digits), 4))
        digits = " ".join(chunks)

    return f"0b{digits}" if add_prefix else digits


def decimal_format(value: int) -> str:
    """Render value as plain base-10 text."""
    return str(value)
