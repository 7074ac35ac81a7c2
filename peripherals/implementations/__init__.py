"""
Peripheral Implementations Package

Exposes concrete implementations of the peripheral interfaces.
"""

from peripherals.implementations.local_sysfs import LocalSysfs
from peripherals.implementations.mock_i2c_bus import MockI2CBus
from peripherals.implementations.mock_sysfs import MockSysfs
from peripherals.implementations.smbus2_bus import SMBus2Bus

# Public API (sorted alphabetically)
__all__ = [
    "LocalSysfs",
    "MockI2CBus",
    "MockSysfs",
    "SMBus2Bus",
]
