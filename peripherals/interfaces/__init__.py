"""
Peripheral Interfaces Package

Exposes abstract interfaces and the exception taxonomy.
"""

from peripherals.interfaces.i2c_interface import (
    BusOpenError,
    I2CBusInterface,
    I2CError,
    InvalidAddressError,
)
from peripherals.interfaces.sysfs_interface import (
    ChipNotFoundError,
    Direction,
    ExportTimeoutError,
    InvalidStateError,
    ParseError,
    PeripheralError,
    Polarity,
    SysfsError,
    SysfsInterface,
    UnknownPinError,
)

# Public API (sorted alphabetically)
__all__ = [
    "BusOpenError",
    "ChipNotFoundError",
    "Direction",
    "ExportTimeoutError",
    "I2CBusInterface",
    "I2CError",
    "InvalidAddressError",
    "InvalidStateError",
    "ParseError",
    "PeripheralError",
    "Polarity",
    "SysfsError",
    "SysfsInterface",
    "UnknownPinError",
]
