"""
Sysfs Utilities

Shared helpers for the GPIO and PWM controllers: the export protocol and
the small parsing steps every control file read needs.
"""

import logging
import re
import time
from pathlib import Path
from typing import Callable, Optional

from peripherals.constants import EXPORT_POLL_ATTEMPTS, EXPORT_POLL_INTERVAL
from peripherals.interfaces.sysfs_interface import (
    ExportTimeoutError,
    ParseError,
    SysfsInterface,
)

logger = logging.getLogger(__name__)

# Kernel attributes print plain decimals: optional minus sign, digits only
_DECIMAL_RE = re.compile(r"-?[0-9]+")


def wait_for_path(
    sysfs: SysfsInterface,
    path: Path,
    interval: float = EXPORT_POLL_INTERVAL,
    attempts: int = EXPORT_POLL_ATTEMPTS,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """
    Poll until a path exists, sleeping between checks.

    Sleeps at most `attempts` times. The check is not repeated after the
    last sleep.

    Args:
        sysfs: Filesystem backend
        path: Path expected to appear
        interval: Seconds between checks
        attempts: Maximum number of sleeps
        sleep: Sleep function (injected for tests)

    Returns:
        True if the path appeared, False if the attempts ran out
    """
    count = 0
    while not sysfs.exists(path):
        sleep(interval)
        count += 1
        if count >= attempts:
            return False
    return True


def export_and_wait(
    sysfs: SysfsInterface,
    export_path: Path,
    index: int,
    expected_dir: Path,
    label: str,
    interval: float = EXPORT_POLL_INTERVAL,
    attempts: int = EXPORT_POLL_ATTEMPTS,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """
    Request an export and wait for its control directory.

    Args:
        sysfs: Filesystem backend
        export_path: Controller's export file
        index: Number written to the export file (pin or channel)
        expected_dir: Directory the kernel creates on success
        label: Human readable name used in errors ("GPIO 60", "pwmchip3/pwm0")
        interval: Seconds between checks
        attempts: Maximum number of sleeps
        sleep: Sleep function (injected for tests)

    Raises:
        ExportTimeoutError: Directory didn't appear in time. The line stays
            requested; nothing is rolled back.
        SysfsError: The export write itself failed
    """
    logger.info(f"Exporting {label} via {export_path}")
    sysfs.write(export_path, str(index))

    if not wait_for_path(sysfs, expected_dir, interval, attempts, sleep):
        raise ExportTimeoutError(
            f"Failed to export {label}: {expected_dir} did not appear "
            f"after {attempts} checks ({attempts * interval:.2f}s)"
        )

    logger.debug(f"{label} exported at {expected_dir}")


def read_stripped(sysfs: SysfsInterface, path: Path) -> str:
    """Read a control file and strip surrounding whitespace/newline"""
    return sysfs.read(path).strip()


def read_int(sysfs: SysfsInterface, path: Path) -> int:
    """
    Read a control file holding a decimal integer.

    Raises:
        ParseError: If the content isn't a decimal integer
    """
    text = read_stripped(sysfs, path)
    if not _DECIMAL_RE.fullmatch(text):
        raise ParseError(f"Expected an integer in {path}, got {text!r}")
    return int(text)


def parse_choice(text: str, enum_type, path: Optional[Path] = None):
    """
    Map control file text onto an Enum by value.

    Args:
        text: Raw content (whitespace tolerated)
        enum_type: Enum class with string values
        path: File the text came from (error messages only)

    Raises:
        ParseError: If the text matches no member
    """
    value = text.strip()
    try:
        return enum_type(value)
    except ValueError as e:
        valid = ", ".join(member.value for member in enum_type)
        where = f" in {path}" if path is not None else ""
        raise ParseError(
            f"Unexpected {enum_type.__name__.lower()} {value!r}{where} "
            f"(expected one of: {valid})"
        ) from e
