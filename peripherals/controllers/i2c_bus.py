"""
I2C Bus Controller

Addressed transactions on one /dev/i2c-N bus: write, read, write-then-read
and SMBus block reads. The byte transfers themselves are done by an
I2CBusInterface handle (smbus2 on a board, MockI2CBus in tests).
"""

import logging
from typing import Optional

from peripherals.constants import I2C_ADDRESS_LIMIT
from peripherals.factory import PeripheralFactory
from peripherals.interfaces.i2c_interface import I2CBusInterface, InvalidAddressError
from peripherals.settings import DEFAULT_I2C_BUS


class I2CBus:
    """
    Owner of one I2C bus handle.

    Usage:
        with I2CBus(2) as bus:
            bus.write(0x48, b"\\x01\\x60")
            data = bytearray(2)
            bus.transact(0x48, b"\\x00", data)

    The handle is released exactly once by close().
    """

    def __init__(
        self,
        bus_number: Optional[int] = None,
        handle: Optional[I2CBusInterface] = None,
    ):
        """
        Open a bus.

        Args:
            bus_number: N in /dev/i2c-N, or None for the default bus
            handle: Already opened handle (tests), or None to open the real bus

        Raises:
            BusOpenError: If the bus can't be opened
        """
        self.logger = logging.getLogger(__name__)
        self.bus_number = DEFAULT_I2C_BUS if bus_number is None else bus_number

        self.bus = handle or PeripheralFactory.create_i2c_bus(self.bus_number, mode="real")
        self._closed = False

    def transact(
        self,
        address: int,
        write: Optional[bytes] = None,
        read: Optional[bytearray] = None,
    ) -> int:
        """
        Write and/or read in one call.

        The write (if any) happens first. The return value is the count of
        the LAST transfer performed: with both buffers it is the read count.

        Args:
            address: Device address, must be < 0x400
            write: Bytes to send, or None
            read: Buffer to fill, or None

        Returns:
            Bytes moved by the last transfer, 0 if nothing to do

        Raises:
            InvalidAddressError: address negative or >= 0x400
            I2CError: A transfer failed
        """
        self._check_address(address)

        count = 0
        if not write and not read:
            return count

        if write:
            count = self.bus.write(address, len(write), write)
        if read:
            count = self.bus.read(address, len(read), read)
        return count

    def raw_read(self, address: int, length: int, buffer: bytearray) -> int:
        """Pass-through read of length bytes into buffer"""
        return self.bus.read(address, length, buffer)

    def write(self, address: int, buffer: bytes) -> int:
        return self.transact(address, write=buffer)

    def block_read(self, address: int, command: int, buffer: bytearray) -> int:
        """Send command, then read len(buffer) bytes back"""
        return self.bus.block_read(address, command, len(buffer), buffer)

    def close(self) -> None:
        if self._closed:
            self.logger.warning(f"I2C bus {self.bus_number} already closed")
            return
        self.bus.close()
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    @staticmethod
    def _check_address(address: int) -> None:
        if not 0 <= address < I2C_ADDRESS_LIMIT:
            raise InvalidAddressError(
                f"Invalid address {address:#x} (must be 0 to 0x{I2C_ADDRESS_LIMIT - 1:x})"
            )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
