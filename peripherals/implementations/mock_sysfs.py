"""
Mock Sysfs Implementation

In-memory fake of the GPIO and PWM sysfs trees for development and testing
without a BeagleBone.

This is a "Fake" (working logic, no kernel). It mimics the parts of the kernel
behavior the controllers depend on:
- Writing N to .../export makes gpioN / pwmN appear, optionally after a delay
- Writing N to .../unexport removes it
- "low"/"high" on a GPIO direction file switch to output and set the value
- duty_cycle writes larger than the current period are rejected (EINVAL)

Every read, write and truncate is appended to `operations` so tests can
assert on exact ordering.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from peripherals.constants import (
    DEFAULT_GPIO_ROOT,
    DEFAULT_PWM_ROOT,
    EXPORT_FILE,
    GPIO_ACTIVE_LOW_FILE,
    GPIO_DIR_TEMPLATE,
    GPIO_DIRECTION_FILE,
    GPIO_VALUE_FILE,
    PWM_CHANNEL_DIR_TEMPLATE,
    PWM_CHIP_DIR_TEMPLATE,
    PWM_DUTY_CYCLE_FILE,
    PWM_ENABLE_FILE,
    PWM_PERIOD_FILE,
    PWM_POLARITY_FILE,
    UNEXPORT_FILE,
)
from peripherals.interfaces.sysfs_interface import (
    PathLike,
    SysfsError,
    SysfsInterface,
)

_PWM_CHIP_RE = re.compile(r"^pwmchip\d+$")

# Attribute files the kernel creates for a freshly exported line
_GPIO_DEFAULTS = {
    GPIO_DIRECTION_FILE: "in",
    GPIO_VALUE_FILE: "0",
    GPIO_ACTIVE_LOW_FILE: "0",
}
_PWM_DEFAULTS = {
    PWM_ENABLE_FILE: "0",
    PWM_POLARITY_FILE: "normal",
    PWM_PERIOD_FILE: "0",
    PWM_DUTY_CYCLE_FILE: "0",
}


class MockSysfs(SysfsInterface):
    """
    Simulated sysfs tree.

    Args:
        export_delay_checks: How many existence checks of a newly exported
            directory return False before it appears (simulates udev lag)
        export_succeeds: False = exported directories never appear
        enforce_duty_limit: Reject duty_cycle > period like the kernel does
    """

    def __init__(
        self,
        export_delay_checks: int = 0,
        export_succeeds: bool = True,
        enforce_duty_limit: bool = True,
    ):
        self.logger = logging.getLogger(__name__)

        self.export_delay_checks = export_delay_checks
        self.export_succeeds = export_succeeds
        self.enforce_duty_limit = enforce_duty_limit

        # Key: absolute path string, Value: raw file content
        self._files: dict[str, str] = {}
        self._dirs: set[str] = set()

        # Directories requested via export, waiting to "appear"
        # Key: directory path, Value: (remaining false checks, attribute defaults)
        self._pending: dict[str, tuple[int, dict[str, str]]] = {}

        # (operation, path, content) in call order
        self.operations: list[tuple[str, str, Optional[str]]] = []
        self.exists_checks = 0

        self.logger.info("Mock sysfs initialized (simulation mode)")

    # =========================================================================
    # SysfsInterface
    # =========================================================================

    def exists(self, path: PathLike) -> bool:
        key = str(path)
        self.exists_checks += 1
        self._resolve_pending(key)
        return key in self._dirs or key in self._files

    def is_dir(self, path: PathLike) -> bool:
        key = str(path)
        self._resolve_pending(key)
        return key in self._dirs

    def read(self, path: PathLike) -> str:
        key = str(path)
        self.operations.append(("read", key, None))
        if key not in self._files:
            raise SysfsError(f"[MOCK] No such file: {key}")
        return self._files[key]

    def write(self, path: PathLike, content: str) -> None:
        key = str(path)
        self.operations.append(("write", key, content))

        if key not in self._files:
            # sysfs never lets userspace create attribute files
            raise SysfsError(f"[MOCK] No such file: {key}")

        name = Path(key).name
        parent = str(Path(key).parent)

        if name == EXPORT_FILE:
            self._handle_export(parent, content)
        elif name == UNEXPORT_FILE:
            self._handle_unexport(parent, content)
        elif name == GPIO_DIRECTION_FILE and content.strip() in ("low", "high"):
            self._files[key] = "out\n"
            value = "1" if content.strip() == "high" else "0"
            self._files[str(Path(parent) / GPIO_VALUE_FILE)] = f"{value}\n"
        elif name == PWM_DUTY_CYCLE_FILE and self.enforce_duty_limit:
            self._check_duty_limit(parent, content)
            self._files[key] = f"{content.strip()}\n"
        else:
            self._files[key] = f"{content.strip()}\n"

        self.logger.debug(f"[MOCK] {key} <- {content!r}")

    def truncate(self, path: PathLike) -> None:
        key = str(path)
        self.operations.append(("truncate", key, None))
        if key not in self._files:
            raise SysfsError(f"[MOCK] No such file: {key}")
        self._files[key] = ""

    def is_available(self) -> bool:
        """Mock sysfs is simulated"""
        return False

    # =========================================================================
    # TESTING HELPER METHODS (not part of SysfsInterface)
    # =========================================================================

    def add_directory(self, path: PathLike) -> None:
        """Create a directory (parents included)"""
        current = Path(path)
        while str(current) not in self._dirs and current != current.parent:
            self._dirs.add(str(current))
            current = current.parent

    def add_file(self, path: PathLike, content: str = "") -> None:
        """Create or overwrite a file without logging an operation"""
        self.add_directory(Path(path).parent)
        self._files[str(path)] = content

    def add_gpio_controller(self, root: PathLike = DEFAULT_GPIO_ROOT) -> None:
        """Create the GPIO class directory with its export/unexport files"""
        self.add_file(Path(root) / EXPORT_FILE)
        self.add_file(Path(root) / UNEXPORT_FILE)

    def add_gpio_pin(self, pin: int, root: PathLike = DEFAULT_GPIO_ROOT) -> None:
        """Create an already exported GPIO line"""
        self.add_gpio_controller(root)
        pin_dir = Path(root) / GPIO_DIR_TEMPLATE.format(pin=pin)
        self._materialize(str(pin_dir), _GPIO_DEFAULTS)

    def add_pwm_chip(self, chip: int, root: PathLike = DEFAULT_PWM_ROOT) -> None:
        """Create a pwmchipN directory with its export/unexport files"""
        chip_dir = Path(root) / PWM_CHIP_DIR_TEMPLATE.format(chip=chip)
        self.add_file(chip_dir / EXPORT_FILE)
        self.add_file(chip_dir / UNEXPORT_FILE)

    def add_pwm_channel(
        self,
        chip: int,
        channel: int,
        root: PathLike = DEFAULT_PWM_ROOT,
    ) -> None:
        """Create an already exported PWM channel"""
        self.add_pwm_chip(chip, root)
        chip_dir = Path(root) / PWM_CHIP_DIR_TEMPLATE.format(chip=chip)
        channel_dir = chip_dir / PWM_CHANNEL_DIR_TEMPLATE.format(channel=channel)
        self._materialize(str(channel_dir), _PWM_DEFAULTS)

    def set_content(self, path: PathLike, content: str) -> None:
        """Simulate the kernel changing a file (e.g. an input going high)"""
        key = str(path)
        if key not in self._files:
            raise SysfsError(f"[MOCK] No such file: {key}")
        self._files[key] = content

    def get_content(self, path: PathLike) -> str:
        """Current content of a file, whitespace stripped"""
        return self._files[str(path)].strip()

    def writes_to(self, path: PathLike) -> list[str]:
        """Every payload written to a path, in order"""
        key = str(path)
        return [c for op, p, c in self.operations if op == "write" and p == key]

    def mutations(self) -> list[tuple[str, str, Optional[str]]]:
        """Writes and truncates only, in order"""
        return [entry for entry in self.operations if entry[0] != "read"]

    def clear_operations(self) -> None:
        self.operations.clear()
        self.exists_checks = 0

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _handle_export(self, parent: str, content: str) -> None:
        index = self._parse_index(content)
        if _PWM_CHIP_RE.match(Path(parent).name):
            name = PWM_CHANNEL_DIR_TEMPLATE.format(channel=index)
            defaults = _PWM_DEFAULTS
        else:
            name = GPIO_DIR_TEMPLATE.format(pin=index)
            defaults = _GPIO_DEFAULTS

        target = str(Path(parent) / name)
        if target in self._dirs:
            # Kernel answers EBUSY for an already exported line
            raise SysfsError(f"[MOCK] {target} already exported")

        if self.export_succeeds:
            self._pending[target] = (self.export_delay_checks, defaults)
        self.logger.info(f"[MOCK] Export requested: {target}")

    def _handle_unexport(self, parent: str, content: str) -> None:
        index = self._parse_index(content)
        if _PWM_CHIP_RE.match(Path(parent).name):
            name = PWM_CHANNEL_DIR_TEMPLATE.format(channel=index)
        else:
            name = GPIO_DIR_TEMPLATE.format(pin=index)

        target = str(Path(parent) / name)
        self._pending.pop(target, None)
        self._dirs.discard(target)
        prefix = target + "/"
        for key in [k for k in self._files if k.startswith(prefix)]:
            del self._files[key]
        self.logger.info(f"[MOCK] Unexported: {target}")

    def _check_duty_limit(self, channel_dir: str, content: str) -> None:
        period_path = str(Path(channel_dir) / PWM_PERIOD_FILE)
        period_text = self._files.get(period_path, "").strip()
        if not period_text:
            return
        duty = self._parse_index(content)
        if duty > int(period_text):
            raise SysfsError(
                f"[MOCK] Invalid argument: duty_cycle {duty} > period {period_text}"
            )

    def _resolve_pending(self, key: str) -> None:
        if key not in self._pending:
            return
        remaining, defaults = self._pending[key]
        if remaining > 0:
            self._pending[key] = (remaining - 1, defaults)
            return
        del self._pending[key]
        self._materialize(key, defaults)

    def _materialize(self, directory: str, defaults: dict[str, str]) -> None:
        self.add_directory(directory)
        for name, value in defaults.items():
            self._files[str(Path(directory) / name)] = f"{value}\n"

    @staticmethod
    def _parse_index(content: str) -> int:
        try:
            return int(content.strip())
        except ValueError as e:
            raise SysfsError(f"[MOCK] Invalid argument: {content!r}") from e
