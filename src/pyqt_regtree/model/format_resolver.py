"""
Format resolution and value rendering.

A field with AUTO format inherits its register's format. When the register is
AUTO as well, the field falls back to a width based default: fields of four
bits or more render as hex, narrower fields as binary. Registers render AUTO
as full-width hex.
"""

import math
from typing import Optional

from pyqt_regtree.core.bit_utils import binary_format, decimal_format, hex_format
from pyqt_regtree.model.number_format import NumberFormat
from pyqt_regtree.protocols.view_config import get_view_config

# Narrowest field rendered as hex when no format is chosen
AUTO_HEX_MIN_WIDTH = 4


def resolve_format(explicit: NumberFormat, inherited: Optional[NumberFormat] = None) -> NumberFormat:
    """Return the explicit format, or the inherited one when explicit is AUTO."""
    if explicit is NumberFormat.AUTO and inherited is not None:
        return inherited
    return explicit


def hex_digits(width: int) -> int:
    """Number of hex digits needed for a span of ``width`` bits."""
    return math.ceil(width / 4)


def render_register_value(value: int, fmt: NumberFormat, width: Optional[int] = None) -> str:
    """Render a whole register value.

    Args:
        value: Raw register contents
        fmt: Resolved register format
        width: Register width in bits, defaults to the configured width
    """
    config = get_view_config()
    if width is None:
        width = config.register_width

    if fmt is NumberFormat.DECIMAL:
        return decimal_format(value)
    if fmt is NumberFormat.BINARY:
        return binary_format(value, width, group=config.group_binary)
    return hex_format(value, hex_digits(width))


def render_field_value(value: int, width: int, fmt: NumberFormat) -> str:
    """Render an extracted field value.

    Args:
        value: Field value, already shifted down to bit 0
        width: Field width in bits
        fmt: Resolved field format (AUTO applies the width heuristic)
    """
    config = get_view_config()

    if fmt is NumberFormat.DECIMAL:
        return decimal_format(value)
    if fmt is NumberFormat.BINARY:
        return binary_format(value, width, group=config.group_binary)
    if fmt is NumberFormat.HEXADECIMAL or width >= AUTO_HEX_MIN_WIDTH:
        return hex_format(value, hex_digits(width))
    return binary_format(value, width, group=config.group_binary)
