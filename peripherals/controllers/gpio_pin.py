"""
GPIO Pin Controller

Owns one GPIO line through the sysfs interface:
/sys/class/gpio/gpioN/{direction,value,active_low}

Constructing a GPIOPin exports the line if needed (waiting for the kernel to
create its directory) and applies the requested direction. After that every
getter reads the control file again; nothing is cached except the last
direction written.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional, Union

from peripherals.config import PeripheralConfig
from peripherals.constants import (
    EXPORT_FILE,
    GPIO_ACTIVE_LOW_FILE,
    GPIO_DIR_TEMPLATE,
    GPIO_DIRECTION_FILE,
    GPIO_VALUE_FILE,
    UNEXPORT_FILE,
)
from peripherals.factory import create_sysfs
from peripherals.interfaces.sysfs_interface import Direction, SysfsInterface
from peripherals.utils.sysfs_utils import (
    export_and_wait,
    parse_choice,
    read_int,
    read_stripped,
)


class GPIOPin:
    """
    A single exported GPIO line.

    Usage:
        led = GPIOPin(60, Direction.OUT)
        led.set_value(1)

        button = GPIOPin(48, Direction.IN)
        if button.get_value() == 0:
            print("pressed")

    Construction fails with ExportTimeoutError if the kernel never creates
    the gpioN directory; the object must not be used in that case.
    """

    def __init__(
        self,
        pin: int,
        direction: Union[Direction, str],
        sysfs: Optional[SysfsInterface] = None,
        config: Optional[PeripheralConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Export (if needed) and configure a GPIO line.

        Args:
            pin: Kernel GPIO number (e.g. 60 for P9_12)
            direction: Initial direction
            sysfs: Filesystem backend, or None to auto-create
            config: Roots and export timing, or None for defaults
            sleep: Sleep used while waiting for the export

        Raises:
            ValueError: If pin is negative or direction unknown
            ExportTimeoutError: If the line directory never appears
            SysfsError: If a control file write fails
        """
        if isinstance(pin, bool) or not isinstance(pin, int) or pin < 0:
            raise ValueError(f"GPIO pin must be a non-negative integer, got {pin!r}")

        self.logger = logging.getLogger(__name__)
        self.config = config or PeripheralConfig()
        self.sysfs = sysfs or create_sysfs(config=self.config)
        self._sleep = sleep

        self._pin = pin
        self.direction = Direction(direction)

        self._root = self.config.gpio_root
        self._path = self._root / GPIO_DIR_TEMPLATE.format(pin=pin)

        if not self.sysfs.exists(self._path):
            self.export()
        else:
            self.logger.debug(f"GPIO {pin} already exported, attaching")

        self.set_direction(self.direction)

    @property
    def pin(self) -> int:
        return self._pin

    @property
    def path(self) -> Path:
        """Control directory of this line"""
        return self._path

    def export(self) -> None:
        """
        Ask the kernel to export this line and wait for its directory.

        Raises:
            ExportTimeoutError: If gpioN doesn't appear in time
        """
        export_and_wait(
            self.sysfs,
            self._root / EXPORT_FILE,
            self._pin,
            self._path,
            label=f"GPIO pin {self._pin}",
            interval=self.config.export_poll_interval,
            attempts=self.config.export_poll_attempts,
            sleep=self._sleep,
        )

    def unexport(self) -> None:
        """Hand the line back to the kernel (not verified)"""
        self.sysfs.write(self._root / UNEXPORT_FILE, str(self._pin))
        self.logger.info(f"GPIO {self._pin} unexport requested")

    def set_direction(self, direction: Union[Direction, str]) -> None:
        """Write in/out/low/high. low and high also switch the line to output."""
        self.direction = Direction(direction)
        self.sysfs.write(self._path / GPIO_DIRECTION_FILE, self.direction.value)
        self.logger.debug(f"GPIO {self._pin} direction -> {self.direction.value}")

    def get_direction(self) -> Direction:
        """
        Read the direction back from the kernel.

        Raises:
            ParseError: If the file holds something other than in/out/low/high
        """
        path = self._path / GPIO_DIRECTION_FILE
        return parse_choice(read_stripped(self.sysfs, path), Direction, path)

    def set_value(self, value: int) -> None:
        # The driver enforces 0/1; no range check here
        self.sysfs.write(self._path / GPIO_VALUE_FILE, str(int(value)))

    def get_value(self) -> int:
        """
        Read the line level.

        Raises:
            ParseError: If the file isn't numeric
        """
        return read_int(self.sysfs, self._path / GPIO_VALUE_FILE)

    def set_active_low(self, active_low: bool) -> None:
        """Invert the meaning of value for both reads and writes"""
        self.sysfs.write(
            self._path / GPIO_ACTIVE_LOW_FILE,
            "1" if active_low else "0",
        )

    def __repr__(self) -> str:
        return f"GPIOPin(pin={self._pin}, direction={self.direction.value!r})"
