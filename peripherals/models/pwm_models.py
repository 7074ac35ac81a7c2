"""
PWM Models

Data classes describing where a PWM output lives and what it is doing.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PWMChipChannel:
    """
    Location of a PWM output in the kernel tree.

    chip is the N in /sys/class/pwm/pwmchipN, channel the M in pwmM.
    """

    chip: int
    channel: int


@dataclass
class PWMFrequencyValue:
    """
    Frequency/duty view over the period and duty_cycle control files.

    value is the duty fraction in [0, 1].
    """

    frequency: float  # Hz
    value: float  # duty_cycle / period

    @property
    def percent(self) -> float:
        """Duty cycle as a percentage (0-100)"""
        return self.value * 100.0
