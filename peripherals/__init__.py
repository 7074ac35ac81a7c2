"""
Peripherals Module

GPIO, PWM and I2C control for BeagleBone-class boards through the kernel's
sysfs and i2c-dev interfaces.

Provides automatic detection and graceful fallback between the real kernel
tree and in-memory fakes for testing.

Public API:
    - GPIOPin: One exported GPIO line (direction, value, active_low)
    - PWMChannel: One PWM output by board pin name (frequency, duty, polarity)
    - I2CBus: Addressed transactions on /dev/i2c-N
    - PeripheralConfig: YAML-backed roots and export timing
    - PeripheralFactory: Real vs mock backends
    - Direction, Polarity: Control file enums
    - PeripheralError and subclasses: Error taxonomy

Usage:
    from peripherals import Direction, GPIOPin, I2CBus, PWMChannel

    led = GPIOPin(60, Direction.OUT)
    led.set_value(1)

    pwm = PWMChannel("P9_14")
    pwm.set_pwm_frequency_and_value(1000, 0.5)

    with I2CBus(2) as bus:
        bus.write(0x48, b"\\x01")
"""

from peripherals.config import PeripheralConfig
from peripherals.constants import PWM_PIN_MAP
from peripherals.controllers.gpio_pin import GPIOPin
from peripherals.controllers.i2c_bus import I2CBus
from peripherals.controllers.pwm_channel import PWMChannel, available_pins
from peripherals.factory import PeripheralFactory, create_sysfs, open_i2c_bus
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
from peripherals.models.pwm_models import PWMChipChannel, PWMFrequencyValue

__all__ = [
    "BusOpenError",
    "ChipNotFoundError",
    "Direction",
    "ExportTimeoutError",
    "GPIOPin",
    "I2CBus",
    "I2CBusInterface",
    "I2CError",
    "InvalidAddressError",
    "InvalidStateError",
    "PWMChannel",
    "PWMChipChannel",
    "PWMFrequencyValue",
    "PWM_PIN_MAP",
    "ParseError",
    "PeripheralConfig",
    "PeripheralError",
    "PeripheralFactory",
    "Polarity",
    "SysfsError",
    "SysfsInterface",
    "UnknownPinError",
    "available_pins",
    "create_sysfs",
    "open_i2c_bus",
]
