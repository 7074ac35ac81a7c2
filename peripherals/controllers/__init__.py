"""
Peripheral Controllers Package

High-level handles, one per peripheral class.
"""

from peripherals.controllers.gpio_pin import GPIOPin
from peripherals.controllers.i2c_bus import I2CBus
from peripherals.controllers.pwm_channel import PWMChannel, available_pins, resolve_pin

__all__ = [
    "GPIOPin",
    "I2CBus",
    "PWMChannel",
    "available_pins",
    "resolve_pin",
]
