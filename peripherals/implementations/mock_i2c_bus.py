"""
Mock I2C Bus Implementation

Simulated bus handle for testing I2CBus without /dev/i2c-N.

Devices are byte arrays keyed by address. Reads return the device's bytes
from the start, block reads return bytes starting at the command offset
(register-file style), writes are recorded.
"""

import logging
from typing import Optional

from peripherals.interfaces.i2c_interface import I2CBusInterface, I2CError


class MockI2CBus(I2CBusInterface):
    """
    Simulated I2C bus.

    Args:
        bus_number: Bus number, only used for logging
        devices: Address -> memory content of the simulated devices
    """

    def __init__(
        self,
        bus_number: int = 0,
        devices: Optional[dict[int, bytes]] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.bus_number = bus_number
        self.devices: dict[int, bytearray] = {
            address: bytearray(data) for address, data in (devices or {}).items()
        }

        # (operation, address, details) in call order
        self.calls: list[tuple] = []
        # Payloads received per address
        self.written: dict[int, list[bytes]] = {}
        self.closed = False

        self.logger.info(f"Mock I2C bus {bus_number} opened (simulation mode)")

    def write(self, address: int, length: int, buffer: bytes) -> int:
        self._check_open()
        payload = bytes(buffer[:length])
        self.calls.append(("write", address, payload))
        self._device(address)
        self.written.setdefault(address, []).append(payload)
        self.logger.debug(f"[MOCK] i2c-{self.bus_number} 0x{address:02x} <- {payload.hex()}")
        return len(payload)

    def read(self, address: int, length: int, buffer: bytearray) -> int:
        self._check_open()
        self.calls.append(("read", address, length))
        data = bytes(self._device(address)[:length])
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
        self.calls.append(("block_read", address, command, length))
        data = bytes(self._device(address)[command:command + length])
        buffer[:len(data)] = data
        return len(data)

    def close(self) -> None:
        self._check_open()
        self.calls.append(("close",))
        self.closed = True
        self.logger.info(f"[MOCK] i2c-{self.bus_number} closed")

    def is_available(self) -> bool:
        """Mock bus is simulated"""
        return False

    # =========================================================================
    # TESTING HELPER METHODS (not part of I2CBusInterface)
    # =========================================================================

    def add_device(self, address: int, data: bytes = b"") -> None:
        self.devices[address] = bytearray(data)

    def _device(self, address: int) -> bytearray:
        if address not in self.devices:
            # Real adapters report a missing ACK as ENXIO/EREMOTEIO
            raise I2CError(f"[MOCK] No device at 0x{address:02x}")
        return self.devices[address]

    def _check_open(self) -> None:
        if self.closed:
            raise I2CError(f"[MOCK] i2c-{self.bus_number} is closed")
