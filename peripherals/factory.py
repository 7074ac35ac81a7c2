"""
Peripheral Factory

Selects real or simulated backends for the controllers.

- Sysfs: LocalSysfs when the kernel GPIO/PWM class directories are present,
  MockSysfs otherwise (development machines, CI)
- I2C: SMBus2Bus on /dev/i2c-N, or MockI2CBus
"""

import logging
from typing import Literal, Optional

from peripherals.config import PeripheralConfig
from peripherals.implementations.local_sysfs import LocalSysfs
from peripherals.implementations.mock_i2c_bus import MockI2CBus
from peripherals.implementations.mock_sysfs import MockSysfs
from peripherals.implementations.smbus2_bus import SMBus2Bus
from peripherals.interfaces.i2c_interface import I2CBusInterface
from peripherals.interfaces.sysfs_interface import SysfsInterface

HardwareMode = Literal["auto", "real", "mock"]


class PeripheralFactory:
    """
    Factory for peripheral backends.

    Usage:
        # Auto-detect (real sysfs if the class directories exist)
        sysfs = PeripheralFactory.create_sysfs()

        # Force mock mode (useful for testing)
        sysfs = PeripheralFactory.create_sysfs(mode="mock")

        # Real I2C bus, BusOpenError if /dev/i2c-2 can't be opened
        bus = PeripheralFactory.create_i2c_bus(2, mode="real")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_sysfs(
        cls,
        mode: HardwareMode = "auto",
        config: Optional[PeripheralConfig] = None,
    ) -> SysfsInterface:
        """
        Create a sysfs backend.

        Args:
            mode: "auto" (detect), "real" (filesystem), "mock" (in-memory)
            config: Used in auto mode to locate the class directories

        Returns:
            LocalSysfs or MockSysfs
        """
        if mode == "mock":
            cls._logger.info("Creating Mock sysfs (forced)")
            return MockSysfs()

        if mode == "real":
            cls._logger.info("Creating local sysfs (forced)")
            return LocalSysfs()

        # mode == "auto"
        local = LocalSysfs()
        if cls._sysfs_roots_present(local, config):
            cls._logger.debug("Creating local sysfs (auto-detected)")
            return local

        cls._logger.warning("GPIO/PWM sysfs not found, using Mock sysfs")
        return MockSysfs()

    @classmethod
    def create_i2c_bus(
        cls,
        bus_number: int,
        mode: HardwareMode = "auto",
    ) -> I2CBusInterface:
        """
        Create an I2C bus handle.

        Args:
            bus_number: N in /dev/i2c-N
            mode: "auto" (real, mock if it can't be opened),
                  "real" (BusOpenError on failure), "mock"

        Returns:
            SMBus2Bus or MockI2CBus

        Raises:
            BusOpenError: If mode="real" and the bus can't be opened
        """
        if mode == "mock":
            cls._logger.info(f"Creating Mock I2C bus {bus_number} (forced)")
            return MockI2CBus(bus_number)

        if mode == "real":
            return SMBus2Bus(bus_number)

        try:
            return SMBus2Bus(bus_number)
        except Exception as e:
            cls._logger.warning(
                f"I2C bus {bus_number} not available ({e}), using Mock I2C bus",
            )
            return MockI2CBus(bus_number)

    @classmethod
    def is_real_hardware_available(
        cls,
        config: Optional[PeripheralConfig] = None,
        i2c_bus: Optional[int] = None,
    ) -> dict[str, bool]:
        """
        Check which real backends are available.

        Returns:
            {'sysfs': True/False, 'i2c': True/False}
        """
        status = {
            "sysfs": cls._sysfs_roots_present(LocalSysfs(), config),
            "i2c": False,
        }

        if i2c_bus is not None:
            try:
                bus = SMBus2Bus(i2c_bus)
                status["i2c"] = bus.is_available()
                bus.close()
            except Exception as e:
                cls._logger.debug(f"I2C bus {i2c_bus} check failed: {e}")

        return status

    @staticmethod
    def _sysfs_roots_present(
        sysfs: SysfsInterface,
        config: Optional[PeripheralConfig],
    ) -> bool:
        config = config or PeripheralConfig()
        return sysfs.is_dir(config.gpio_root) or sysfs.is_dir(config.pwm_root)


# Convenience functions for quick creation

def create_sysfs(
    force_mock: bool = False,
    config: Optional[PeripheralConfig] = None,
) -> SysfsInterface:
    """
    Quick sysfs creation with simple mock override.

    Example:
        sysfs = create_sysfs()                 # auto-detect
        sysfs = create_sysfs(force_mock=True)  # tests
    """
    mode = "mock" if force_mock else "auto"
    return PeripheralFactory.create_sysfs(mode=mode, config=config)


def open_i2c_bus(bus_number: int, force_mock: bool = False) -> I2CBusInterface:
    """
    Quick I2C handle creation.

    Without force_mock the real bus is required (BusOpenError otherwise).
    """
    mode = "mock" if force_mock else "real"
    return PeripheralFactory.create_i2c_bus(bus_number, mode=mode)
