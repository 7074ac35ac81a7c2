"""
smbus2 I2C Implementation

Concrete I2CBusInterface on top of the smbus2 library (/dev/i2c-N through
the i2c-dev ioctl interface).

Plain reads and writes go through I2C_RDWR combined messages so they carry
exactly the bytes asked for (no implicit register byte). Block reads use the
SMBus "read I2C block data" call: command byte, repeated start, data.
"""

import logging

from smbus2 import SMBus, i2c_msg

from peripherals.constants import I2C_M_TEN, I2C_MAX_7BIT_ADDRESS
from peripherals.interfaces.i2c_interface import (
    BusOpenError,
    I2CBusInterface,
    I2CError,
)


class SMBus2Bus(I2CBusInterface):
    """
    I2C bus handle backed by smbus2.SMBus.

    Args:
        bus_number: N in /dev/i2c-N

    Raises:
        BusOpenError: If the device node can't be opened
    """

    def __init__(self, bus_number: int):
        self.logger = logging.getLogger(__name__)
        self.bus_number = bus_number

        try:
            self._bus = SMBus(bus_number)
        except OSError as e:
            raise BusOpenError(
                f"Failed to open /dev/i2c-{bus_number}: {e}"
            ) from e

        self._closed = False
        self.logger.info(f"I2C bus {bus_number} opened (smbus2)")

    def write(self, address: int, length: int, buffer: bytes) -> int:
        self._check_open()
        msg = i2c_msg.write(address, bytes(buffer[:length]))
        self._flag_ten_bit(msg, address)
        try:
            self._bus.i2c_rdwr(msg)
        except OSError as e:
            raise I2CError(
                f"Write of {length} bytes to 0x{address:02x} failed: {e}"
            ) from e
        return len(msg)

    def read(self, address: int, length: int, buffer: bytearray) -> int:
        self._check_open()
        msg = i2c_msg.read(address, length)
        self._flag_ten_bit(msg, address)
        try:
            self._bus.i2c_rdwr(msg)
        except OSError as e:
            raise I2CError(
                f"Read of {length} bytes from 0x{address:02x} failed: {e}"
            ) from e

        data = bytes(msg)
        buffer[:len(data)] = data
        return len(data)

    def block_read(
        self,
        address: int,
        command: int,
        length: int,
        buffer: bytearray,
    ) -> int:
        self._check_open()
        try:
            data = self._bus.read_i2c_block_data(address, command, length)
        except (OSError, ValueError) as e:
            raise I2CError(
                f"Block read 0x{command:02x} from 0x{address:02x} failed: {e}"
            ) from e

        buffer[:len(data)] = bytes(data)
        return len(data)

    def close(self) -> None:
        self._check_open()
        self._bus.close()
        self._closed = True
        self.logger.info(f"I2C bus {self.bus_number} closed")

    def is_available(self) -> bool:
        return True

    def _check_open(self) -> None:
        if self._closed:
            raise I2CError(f"I2C bus {self.bus_number} is closed")

    @staticmethod
    def _flag_ten_bit(msg, address: int) -> None:
        if address > I2C_MAX_7BIT_ADDRESS:
            msg.flags |= I2C_M_TEN
