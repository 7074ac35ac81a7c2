"""
I2C Bus Tests

Tests for the I2C controller showing:
- Address validation
- Write / read / write-then-read counts (last operation wins)
- Block reads and raw reads
- Exactly-once close

To run these tests:
    pytest tests/peripherals/controllers/test_i2c_bus.py -v
"""

import pytest

from peripherals.controllers.i2c_bus import I2CBus
from peripherals.implementations.mock_i2c_bus import MockI2CBus
from peripherals.interfaces.i2c_interface import (
    BusOpenError,
    I2CError,
    InvalidAddressError,
)


# =============================================================================
# TRANSACT TESTS
# =============================================================================

@pytest.mark.unit
def test_address_out_of_range(i2c_bus, mock_i2c):
    with pytest.raises(InvalidAddressError):
        i2c_bus.transact(0x400, b"\x01")

    assert mock_i2c.calls == []


@pytest.mark.unit
def test_negative_address(i2c_bus, mock_i2c):
    with pytest.raises(InvalidAddressError):
        i2c_bus.transact(-1, b"\x00")

    assert mock_i2c.calls == []


@pytest.mark.unit
def test_invalid_address_is_caller_error(i2c_bus):
    with pytest.raises(ValueError):
        i2c_bus.transact(0x400)


@pytest.mark.unit
def test_empty_transaction_is_noop(i2c_bus, mock_i2c):
    assert i2c_bus.transact(0x3FF, b"", bytearray()) == 0
    assert i2c_bus.transact(0x3FF) == 0
    assert mock_i2c.calls == []


@pytest.mark.unit
def test_write_only(i2c_bus, mock_i2c):
    count = i2c_bus.transact(0x48, b"\x01\x02")

    assert count == 2
    assert mock_i2c.calls == [("write", 0x48, b"\x01\x02")]


@pytest.mark.unit
def test_read_only(i2c_bus, mock_i2c):
    buffer = bytearray(4)

    count = i2c_bus.transact(0x48, read=buffer)

    assert count == 4
    assert buffer == bytearray(b"\x00\x01\x02\x03")
    assert mock_i2c.calls == [("read", 0x48, 4)]


@pytest.mark.unit
def test_write_then_read_returns_read_count(i2c_bus, mock_i2c):
    """
    Both buffers: write happens first, the returned count is the read's.
    """
    buffer = bytearray(2)

    count = i2c_bus.transact(0x48, b"\x05", buffer)

    assert count == 2
    assert [call[0] for call in mock_i2c.calls] == ["write", "read"]


@pytest.mark.unit
def test_empty_write_with_read(i2c_bus, mock_i2c):
    buffer = bytearray(3)

    assert i2c_bus.transact(0x48, b"", buffer) == 3
    assert [call[0] for call in mock_i2c.calls] == ["read"]


@pytest.mark.unit
def test_missing_device_propagates(i2c_bus):
    with pytest.raises(I2CError):
        i2c_bus.transact(0x50, b"\x00")


# =============================================================================
# CONVENIENCE OPERATION TESTS
# =============================================================================

@pytest.mark.unit
def test_write_convenience(i2c_bus, mock_i2c):
    assert i2c_bus.write(0x48, b"\xaa\xbb\xcc") == 3
    assert mock_i2c.written[0x48] == [b"\xaa\xbb\xcc"]


@pytest.mark.unit
def test_write_rejects_bad_address(i2c_bus):
    with pytest.raises(InvalidAddressError):
        i2c_bus.write(0x400, b"\x00")


@pytest.mark.unit
def test_raw_read(i2c_bus, mock_i2c):
    buffer = bytearray(8)

    count = i2c_bus.raw_read(0x48, 3, buffer)

    assert count == 3
    assert buffer[:3] == b"\x00\x01\x02"
    assert mock_i2c.calls == [("read", 0x48, 3)]


@pytest.mark.unit
def test_block_read(i2c_bus, mock_i2c):
    buffer = bytearray(4)

    count = i2c_bus.block_read(0x48, 0x08, buffer)

    assert count == 4
    assert buffer == bytearray(b"\x08\x09\x0a\x0b")
    assert mock_i2c.calls == [("block_read", 0x48, 0x08, 4)]


# =============================================================================
# LIFECYCLE TESTS
# =============================================================================

@pytest.mark.unit
def test_close_exactly_once(mock_i2c):
    bus = I2CBus(1, handle=mock_i2c)

    bus.close()
    bus.close()  # Second close must not reach the handle

    assert mock_i2c.calls.count(("close",)) == 1
    assert bus.closed


@pytest.mark.unit
def test_use_after_close_fails(mock_i2c):
    bus = I2CBus(1, handle=mock_i2c)
    bus.close()

    with pytest.raises(I2CError):
        bus.write(0x48, b"\x00")


@pytest.mark.unit
def test_context_manager_closes():
    handle = MockI2CBus(2, devices={0x20: b"\x7f"})

    with I2CBus(2, handle=handle) as bus:
        buffer = bytearray(1)
        bus.transact(0x20, read=buffer)

    assert buffer == bytearray(b"\x7f")
    assert handle.closed


@pytest.mark.unit
def test_open_missing_bus():
    """
    Real backend on a bus that doesn't exist surfaces as BusOpenError.
    """
    with pytest.raises(BusOpenError):
        I2CBus(250)
