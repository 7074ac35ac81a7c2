"""
I2C Interface - Abstract Bus Handle

Contract for the native bus handle an I2CBus controller drives. The real
implementation sits on smbus2; the mock records calls for tests.

Buffers are bytearrays: reads fill the caller's buffer in place, the return
value is the number of bytes transferred.
"""

from abc import ABC, abstractmethod

from peripherals.interfaces.sysfs_interface import PeripheralError


class I2CBusInterface(ABC):
    """Synchronous handle on one /dev/i2c-N bus"""

    @abstractmethod
    def write(self, address: int, length: int, buffer: bytes) -> int:
        """
        Write the first length bytes of buffer to a device.

        Args:
            address: 7-bit or 10-bit device address
            length: Number of bytes to send
            buffer: Source bytes

        Returns:
            Number of bytes written

        Raises:
            I2CError: If the transfer fails
        """

    @abstractmethod
    def read(self, address: int, length: int, buffer: bytearray) -> int:
        """
        Read length bytes from a device into buffer.

        Args:
            address: 7-bit or 10-bit device address
            length: Number of bytes to read
            buffer: Destination, filled from index 0

        Returns:
            Number of bytes read

        Raises:
            I2CError: If the transfer fails
        """

    @abstractmethod
    def block_read(
        self,
        address: int,
        command: int,
        length: int,
        buffer: bytearray,
    ) -> int:
        """
        Send a command byte, then read length bytes back (SMBus block read).

        Args:
            address: Device address
            command: Command/register byte
            length: Number of bytes to read
            buffer: Destination, filled from index 0

        Returns:
            Number of bytes read

        Raises:
            I2CError: If the transfer fails
        """

    @abstractmethod
    def close(self) -> None:
        """Release the bus handle"""

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this handle talks to a real bus.

        Returns:
            True if backed by /dev/i2c-N, False if simulated
        """


class I2CError(PeripheralError):
    """
    I2C transfer or handle error.

    Examples:
    - No device acknowledged the address
    - Bus handle already closed
    """


class BusOpenError(I2CError):
    """The /dev/i2c-N handle could not be opened"""


class InvalidAddressError(I2CError, ValueError):
    """Address does not fit in 10 bits (caller error)"""
