"""
Peripheral Models Package

Exposes the small data classes shared by controllers and constants.
"""

from peripherals.models.pwm_models import PWMChipChannel, PWMFrequencyValue

__all__ = [
    "PWMChipChannel",
    "PWMFrequencyValue",
]
