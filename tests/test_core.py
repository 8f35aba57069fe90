"""Tests for core utilities."""

import pytest

from pyqt_regtree.core import (
    SyncRequestRunner,
    ThreadedRequestRunner,
    binary_format,
    create_mask,
    decimal_format,
    extract_bits,
    hex_format,
)


def test_create_mask():
    assert create_mask(1) == 0b1
    assert create_mask(4) == 0xF
    assert create_mask(32) == 0xFFFFFFFF


@pytest.mark.parametrize("value", [0, 1, 0x80000000, 0xDEADBEEF, 0xFFFFFFFF, 0x12345678])
def test_extract_bits_matches_shift_and_mask(value):
    """Extraction equals shift then mask for every span inside 32 bits."""
    for offset in range(32):
        for width in range(1, 33 - offset):
            assert extract_bits(value, offset, width) == (value >> offset) & ((1 << width) - 1)


def test_extract_bits_examples():
    assert extract_bits(0x80000000, 31, 1) == 1
    assert extract_bits(0x000000A5, 0, 8) == 0xA5
    assert extract_bits(0x000F0000, 16, 4) == 0xF


def test_hex_format_padding_and_prefix():
    assert hex_format(255, 8) == "0x000000FF"
    assert hex_format(1, 2) == "0x01"
    assert hex_format(0xABC, 2) == "0xABC"
    assert hex_format(0xAB, 4, add_prefix=False) == "00AB"


def test_hex_format_lowercase():
    assert hex_format(0xAB, 2, uppercase=False) == "0xab"


def test_hex_format_follows_config():
    from pyqt_regtree.protocols import RegisterViewConfig, set_view_config

    set_view_config(RegisterViewConfig(hex_uppercase=False))
    assert hex_format(0xFF, 8) == "0x000000ff"


def test_binary_format():
    assert binary_format(5, 4) == "0101"
    assert binary_format(0, 1) == "0"
    assert binary_format(1, 2, add_prefix=True) == "0b01"
    assert binary_format(0b1111, 2, pad=False) == "1111"
    assert len(binary_format(0xDEADBEEF, 32)) == 32


def test_binary_format_grouping():
    assert binary_format(0b00101101, 8, group=True) == "0010 1101"
    assert binary_format(0b101101, 6, group=True) == "10 1101"
    assert binary_format(1, 32, group=True) == "0000 0000 0000 0000 0000 0000 0000 0001"


def test_decimal_format():
    assert decimal_format(0) == "0"
    assert decimal_format(4294967295) == "4294967295"


def test_sync_runner_success():
    results = []
    SyncRequestRunner().run(lambda: 42, on_success=results.append)
    assert results == [42]


def test_sync_runner_error_handler():
    errors = []

    def fail():
        raise RuntimeError("backend gone")

    SyncRequestRunner().run(fail, on_success=pytest.fail, on_error=errors.append)
    assert len(errors) == 1
    assert isinstance(errors[0], RuntimeError)


def test_sync_runner_error_without_handler_propagates():
    def fail():
        raise RuntimeError("backend gone")

    with pytest.raises(RuntimeError):
        SyncRequestRunner().run(fail, on_success=lambda result: None)


def test_threaded_runner_delivers_result(qapp):
    """Result is delivered once queued events are processed."""
    runner = ThreadedRequestRunner()
    results = []

    task = runner.run(lambda: ["R0", "R1"], on_success=results.append)
    assert task.wait(5000)
    qapp.processEvents()

    assert results == [["R0", "R1"]]
    assert runner.pending_count == 0
    runner.cleanup()


def test_threaded_runner_delivers_error(qapp):
    runner = ThreadedRequestRunner()
    errors = []

    def fail():
        raise ValueError("bad reply")

    task = runner.run(fail, on_success=pytest.fail, on_error=errors.append)
    assert task.wait(5000)
    qapp.processEvents()

    assert len(errors) == 1
    assert isinstance(errors[0], ValueError)
