"""Tests for register and field nodes."""

import pytest

from pyqt_regtree.model import (
    CollapsibleState,
    FieldLayoutRegistry,
    FieldSpec,
    NumberFormat,
    RegisterNode,
    register_field_layout,
)


def field(register, name):
    return register.find_field(name)


def test_status_register_layout():
    """XPSR gets the hand-written field list, duplicate labels included."""
    xpsr = RegisterNode("XPSR", 0)
    names = [f.name for f in xpsr.fields]

    assert len(names) == 10
    assert names[0] == "Negative Flag (N)"
    assert names.count("ICI/IT") == 2
    spans = [(f.offset, f.width) for f in xpsr.fields if f.name == "ICI/IT"]
    assert spans == [(25, 2), (10, 6)]


@pytest.mark.parametrize("name", ["xpsr", "CPSR", "cpsr"])
def test_status_layout_is_case_insensitive(name):
    assert len(RegisterNode(name, 3).fields) == 10


def test_control_register_layout():
    control = RegisterNode("control", 1)
    assert [(f.name, f.offset, f.width) for f in control.fields] == [
        ("FPCA", 2, 1),
        ("SPSEL", 1, 1),
        ("nPRIV", 0, 1),
    ]


def test_generic_register_has_no_fields():
    r0 = RegisterNode("R0", 0)
    assert r0.fields == []
    assert r0.get_children() == []
    assert r0.value == 0


def test_field_values_follow_register_value():
    """Scenario from a Cortex-M stop: interrupt 1 pending, N flag clear then set."""
    xpsr = RegisterNode("XPSR", 0)
    xpsr.set_value(0x00000001)

    negative = field(xpsr, "Negative Flag (N)")
    interrupt = field(xpsr, "Interrupt Number")
    assert negative.get_copy_value() == "0"
    assert interrupt.get_copy_value() == "0x01"
    assert interrupt.render() == "Interrupt Number = 0x01"

    xpsr.set_value(0x80000000)
    assert negative.get_copy_value() == "1"
    assert negative.render() == "Negative Flag (N) = 1"


def test_register_default_and_hex_render():
    r0 = RegisterNode("R0", 0)
    r0.set_value(255)
    assert r0.render() == "R0 = 0x000000FF"

    r0.set_format(NumberFormat.HEXADECIMAL)
    assert r0.render() == "R0 = 0x000000FF"
    assert r0.get_copy_value() == "0x000000FF"


def test_register_decimal_and_binary_render():
    r0 = RegisterNode("R0", 0)
    r0.set_value(0xDEADBEEF)

    r0.set_format(NumberFormat.DECIMAL)
    assert r0.render() == f"R0 = {0xDEADBEEF}"

    r0.set_format(NumberFormat.BINARY)
    copy = r0.get_copy_value()
    assert len(copy) == 32
    assert copy == format(0xDEADBEEF, "032b")
    assert r0.render() == f"R0 = {copy}"


def test_register_resolved_format_is_explicit_format():
    r0 = RegisterNode("R0", 0)
    assert r0.resolved_format() is NumberFormat.AUTO
    r0.set_format(NumberFormat.BINARY)
    assert r0.resolved_format() is NumberFormat.BINARY


def test_auto_field_width_heuristic():
    """Narrow fields default to binary, fields of 4 bits or more to hex."""
    xpsr = RegisterNode("XPSR", 0)
    xpsr.set_value((0b10 << 25) | (0x5 << 16) | 0xA5)

    assert field(xpsr, "ICI/IT").get_copy_value() == "10"
    assert field(xpsr, "GE").get_copy_value() == "0x5"
    assert field(xpsr, "Interrupt Number").get_copy_value() == "0xA5"


def test_field_inherits_register_format():
    xpsr = RegisterNode("XPSR", 0)
    xpsr.set_value(0xA5)
    interrupt = field(xpsr, "Interrupt Number")

    xpsr.set_format(NumberFormat.DECIMAL)
    assert interrupt.resolved_format() is NumberFormat.DECIMAL
    assert interrupt.get_copy_value() == "165"

    xpsr.set_format(NumberFormat.BINARY)
    assert interrupt.get_copy_value() == "10100101"


def test_auto_register_never_widens_field_hex():
    """With both levels AUTO a field uses its own width, not the register's 8 digits."""
    xpsr = RegisterNode("XPSR", 0)
    xpsr.set_value(0x3)
    interrupt = field(xpsr, "Interrupt Number")

    assert interrupt.resolved_format() is NumberFormat.AUTO
    assert interrupt.get_copy_value() == "0x03"


def test_field_explicit_format_wins():
    xpsr = RegisterNode("XPSR", 0)
    xpsr.set_value(0x80000000)
    xpsr.set_format(NumberFormat.DECIMAL)
    negative = field(xpsr, "Negative Flag (N)")

    negative.set_format(NumberFormat.HEXADECIMAL)
    assert negative.get_copy_value() == "0x1"

    negative.set_format(NumberFormat.BINARY)
    assert negative.get_copy_value() == "1"


def test_binary_grouping_config():
    from pyqt_regtree.protocols import RegisterViewConfig, set_view_config

    set_view_config(RegisterViewConfig(group_binary=True))
    r0 = RegisterNode("R0", 0)
    r0.set_value(0xF)
    r0.set_format(NumberFormat.BINARY)
    assert r0.get_copy_value() == "0000 0000 0000 0000 0000 0000 0000 1111"


def test_tree_descriptors():
    xpsr = RegisterNode("XPSR", 0)
    r0 = RegisterNode("R0", 1)

    item = xpsr.get_tree_node()
    assert item.collapsible_state is CollapsibleState.COLLAPSED
    assert item.context_value == "register"
    assert item.node is xpsr
    assert item.is_expandable and not item.is_expanded

    xpsr.expanded = True
    assert xpsr.get_tree_node().collapsible_state is CollapsibleState.EXPANDED
    assert r0.get_tree_node().collapsible_state is CollapsibleState.NONE

    field_item = xpsr.fields[0].get_tree_node()
    assert field_item.context_value == "field"
    assert field_item.label == "Negative Flag (N) = 0"
    assert not field_item.is_expandable


def test_collect_preferences_skips_defaults():
    xpsr = RegisterNode("XPSR", 0)
    assert xpsr.collect_preferences() == []

    xpsr.expanded = True
    field(xpsr, "GE").set_format(NumberFormat.BINARY)
    records = xpsr.collect_preferences()

    assert [(r.path, r.format, r.expanded) for r in records] == [
        ("XPSR", NumberFormat.AUTO, True),
        ("XPSR.GE", NumberFormat.BINARY, False),
    ]


def test_custom_field_layout():
    register_field_layout(["MSTATUS"], [FieldSpec("MIE", 3, 1), FieldSpec("MPP", 11, 2)])
    try:
        mstatus = RegisterNode("mstatus", 7)
        mstatus.set_value(0x1808)
        assert [f.name for f in mstatus.fields] == ["MIE", "MPP"]
        assert field(mstatus, "MPP").get_copy_value() == "11"
        assert field(mstatus, "MIE").path == "mstatus.MIE"
    finally:
        FieldLayoutRegistry.unregister("MSTATUS")

    assert RegisterNode("MSTATUS", 7).fields == []


@pytest.mark.parametrize("raw, expected", [
    ("Decimal", NumberFormat.DECIMAL),
    ("hexadecimal", NumberFormat.HEXADECIMAL),
    ("BINARY", NumberFormat.BINARY),
    ("Auto", NumberFormat.AUTO),
    (1, NumberFormat.HEXADECIMAL),
    (2, NumberFormat.DECIMAL),
    (3, NumberFormat.BINARY),
    (NumberFormat.DECIMAL, NumberFormat.DECIMAL),
    ("Octal", None),
    (True, None),
    (None, None),
])
def test_number_format_parse(raw, expected):
    assert NumberFormat.parse(raw) is expected
