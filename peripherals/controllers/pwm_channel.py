"""
PWM Channel Controller

Drives one output of a kernel PWM controller:
/sys/class/pwm/pwmchipC/pwmP/{enable,polarity,period,duty_cycle}

Board pin names (P9_22, P8_13, ...) are resolved through PWM_PIN_MAP. Several
names share one physical output because the header pins are multiplexed.

Ordering rules the kernel imposes:
- duty_cycle may never exceed the currently configured period, so a new
  frequency is applied as: period, duty_cycle=0, duty_cycle=<real value>
- duty_cycle and polarity are truncated before being rewritten
- the output is configured before it is enabled, and its duty is zeroed
  before it is disabled
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional, Union

from peripherals.config import PeripheralConfig
from peripherals.constants import (
    DEFAULT_PWM_VALUE,
    EXPORT_FILE,
    NANOSECONDS_PER_SECOND,
    PWM_CHANNEL_DIR_TEMPLATE,
    PWM_CHIP_DIR_TEMPLATE,
    PWM_DISABLED,
    PWM_DUTY_CYCLE_FILE,
    PWM_ENABLE_FILE,
    PWM_ENABLED,
    PWM_PERIOD_FILE,
    PWM_PIN_MAP,
    PWM_POLARITY_FILE,
    UNEXPORT_FILE,
)
from peripherals.factory import create_sysfs
from peripherals.interfaces.sysfs_interface import (
    ChipNotFoundError,
    InvalidStateError,
    Polarity,
    SysfsInterface,
    UnknownPinError,
)
from peripherals.models.pwm_models import PWMChipChannel, PWMFrequencyValue
from peripherals.utils.sysfs_utils import (
    export_and_wait,
    parse_choice,
    read_int,
    read_stripped,
)


def available_pins() -> list[str]:
    """Board pin names that can be opened as PWM channels"""
    return list(PWM_PIN_MAP)


def resolve_pin(pin_name: str) -> PWMChipChannel:
    """
    Look up the (chip, channel) pair behind a board pin name.

    Raises:
        UnknownPinError: If the name isn't in the pin table
    """
    try:
        return PWM_PIN_MAP[pin_name]
    except KeyError:
        example = next(iter(PWM_PIN_MAP))
        raise UnknownPinError(
            f"Bad PWM pin {pin_name!r}, needs to be something like: {example}"
        ) from None


class PWMChannel:
    """
    A single exported PWM output.

    Opening a channel leaves it enabled at the default frequency (2000 Hz)
    with a 0 duty cycle and normal polarity.

    Usage:
        pwm = PWMChannel("P9_14")
        pwm.set_pwm_frequency_and_value(1000, 0.25)  # 1 kHz, 25% duty
        ...
        pwm.disable()
    """

    def __init__(
        self,
        pin_name: str,
        sysfs: Optional[SysfsInterface] = None,
        config: Optional[PeripheralConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Resolve, export (if needed) and initialize a PWM channel.

        Args:
            pin_name: Board pin name, e.g. "P9_22"
            sysfs: Filesystem backend, or None to auto-create
            config: Roots, export timing and default frequency
            sleep: Sleep used while waiting for the export

        Raises:
            UnknownPinError: Pin name not in the table
            ChipNotFoundError: pwmchipC missing or not a directory
            ExportTimeoutError: pwmP never appeared after export
            SysfsError: A control file write was rejected
        """
        self.logger = logging.getLogger(__name__)

        location = resolve_pin(pin_name)

        self.config = config or PeripheralConfig()
        self.sysfs = sysfs or create_sysfs(config=self.config)
        self._sleep = sleep

        self.pin_name = pin_name
        self._location = location

        chip_path = self._find_chip_dir()
        self._chip_path = chip_path
        self._path = chip_path / PWM_CHANNEL_DIR_TEMPLATE.format(channel=location.channel)

        if not self.sysfs.exists(self._path):
            self._export()
        else:
            self.logger.debug(f"{self._label} already exported, attaching")

        # Configure before enabling so the output never glitches
        self.set_pwm_frequency_and_value(
            self.config.default_pwm_frequency,
            DEFAULT_PWM_VALUE,
        )
        self.enable()
        self.set_polarity(Polarity.NORMAL)

        self.logger.info(f"PWM {pin_name} ready ({self._label})")

    # =========================================================================
    # IDENTITY
    # =========================================================================

    @property
    def chip(self) -> int:
        return self._location.chip

    @property
    def channel(self) -> int:
        return self._location.channel

    @property
    def location(self) -> PWMChipChannel:
        return self._location

    @property
    def path(self) -> Path:
        """Control directory of this channel"""
        return self._path

    @property
    def _label(self) -> str:
        return f"pwmchip{self.chip}/pwm{self.channel}"

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def _find_chip_dir(self) -> Path:
        chip_path = self.config.pwm_root / PWM_CHIP_DIR_TEMPLATE.format(chip=self.chip)
        if not self.sysfs.is_dir(chip_path):
            raise ChipNotFoundError(
                f"Unable to find pwm chip directory for chip id {self.chip} "
                f"({chip_path})"
            )
        return chip_path

    def _export(self) -> None:
        export_and_wait(
            self.sysfs,
            self._chip_path / EXPORT_FILE,
            self.channel,
            self._path,
            label=f"pwm {self._label} ({self.pin_name})",
            interval=self.config.export_poll_interval,
            attempts=self.config.export_poll_attempts,
            sleep=self._sleep,
        )

    def unexport(self) -> None:
        """Hand the channel back to the kernel (not verified)"""
        self.sysfs.write(self._chip_path / UNEXPORT_FILE, str(self.channel))
        self.logger.info(f"{self._label} unexport requested")

    # =========================================================================
    # ENABLE / POLARITY
    # =========================================================================

    def enable(self) -> None:
        self.sysfs.write(self._path / PWM_ENABLE_FILE, PWM_ENABLED)

    def disable(self) -> None:
        """Zero the duty cycle, then stop the output"""
        duty_path = self._path / PWM_DUTY_CYCLE_FILE
        self.sysfs.truncate(duty_path)
        self.sysfs.write(duty_path, "0")
        self.sysfs.write(self._path / PWM_ENABLE_FILE, PWM_DISABLED)

    def is_enabled(self) -> bool:
        return read_stripped(self.sysfs, self._path / PWM_ENABLE_FILE) == PWM_ENABLED

    def set_polarity(self, polarity: Union[Polarity, str]) -> None:
        polarity = Polarity(polarity)
        path = self._path / PWM_POLARITY_FILE
        self.sysfs.truncate(path)
        self.sysfs.write(path, polarity.value)

    def get_polarity(self) -> Polarity:
        """
        Raises:
            ParseError: If the file holds neither normal nor inversed
        """
        path = self._path / PWM_POLARITY_FILE
        return parse_choice(read_stripped(self.sysfs, path), Polarity, path)

    # =========================================================================
    # PERIOD / DUTY CYCLE
    # =========================================================================

    def get_period_ns(self) -> int:
        return read_int(self.sysfs, self._path / PWM_PERIOD_FILE)

    def get_duty_cycle_ns(self) -> int:
        return read_int(self.sysfs, self._path / PWM_DUTY_CYCLE_FILE)

    def set_pwm_frequency_and_value(self, frequency: float, value: float) -> None:
        """
        Apply a frequency and a duty fraction.

        period = round(1e9 / frequency) ns, duty = round(period * value) ns.
        duty_cycle is written as 0 first so it never exceeds the period the
        kernel currently holds.

        Args:
            frequency: Output frequency in Hz (> 0)
            value: Duty fraction, 0.0 (always low) to 1.0 (always high)

        Raises:
            ValueError: frequency <= 0, too high for a 1 ns period,
                or value outside [0, 1]
            SysfsError: The kernel rejected a write
        """
        if frequency <= 0:
            raise ValueError(f"PWM frequency must be positive, got {frequency}")
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"PWM value must be between 0 and 1, got {value}")

        period = round(NANOSECONDS_PER_SECOND / frequency)
        if period < 1:
            raise ValueError(
                f"PWM frequency {frequency} Hz is too high, period rounds to {period} ns"
            )
        duty = round(period * value)

        duty_path = self._path / PWM_DUTY_CYCLE_FILE
        self.sysfs.write(self._path / PWM_PERIOD_FILE, str(period))
        self.sysfs.write(duty_path, "0")
        self.sysfs.write(duty_path, str(duty))

        self.logger.debug(
            f"{self._label} period={period}ns duty={duty}ns "
            f"({frequency} Hz, {value:.3f})"
        )

    def get_pwm_frequency_and_value(self) -> PWMFrequencyValue:
        """
        Read period and duty cycle back as frequency and duty fraction.

        Raises:
            InvalidStateError: Period reads as 0 (channel never configured)
            ParseError: Non-numeric period or duty_cycle
        """
        period = self.get_period_ns()
        duty = self.get_duty_cycle_ns()

        if period == 0:
            raise InvalidStateError(
                f"{self._label} has a period of 0, frequency is undefined"
            )

        return PWMFrequencyValue(
            frequency=NANOSECONDS_PER_SECOND / period,
            value=duty / period,
        )

    def __repr__(self) -> str:
        return f"PWMChannel(pin_name={self.pin_name!r}, chip={self.chip}, channel={self.channel})"
