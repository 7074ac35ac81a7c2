"""
Sysfs Interface - Abstract Control File Layer

Defines the contract for the handful of filesystem primitives the GPIO and PWM
controllers need. The kernel exposes both peripherals as directories of small
text files; everything the controllers do is an existence check, a read, a
write or a truncate against one of those files.

Why an interface instead of calling open() directly?
1. Testability: MockSysfs records every operation in order
2. Simulation: The export protocol can be exercised without a kernel
3. Portability: A fake tree under /tmp works the same as /sys
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


class Direction(Enum):
    """GPIO direction as written to the direction control file"""

    IN = "in"
    OUT = "out"
    LOW = "low"  # Output, driven low on switch
    HIGH = "high"  # Output, driven high on switch


class Polarity(Enum):
    """PWM output polarity as written to the polarity control file"""

    NORMAL = "normal"
    INVERSED = "inversed"


class SysfsInterface(ABC):
    """
    Abstract base class for control file access.

    All paths are absolute. Implementations must raise SysfsError for I/O
    failures so callers never see a raw OSError.
    """

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        """
        Check whether a file or directory exists.

        Args:
            path: Absolute path

        Returns:
            True if the path exists
        """

    @abstractmethod
    def is_dir(self, path: PathLike) -> bool:
        """
        Check whether a path exists and is a directory.

        Args:
            path: Absolute path

        Returns:
            True if the path is a directory
        """

    @abstractmethod
    def read(self, path: PathLike) -> str:
        """
        Read the whole content of a control file.

        Args:
            path: Absolute path

        Returns:
            Raw text content, trailing newline included

        Raises:
            SysfsError: If the file can't be read
        """

    @abstractmethod
    def write(self, path: PathLike, content: str) -> None:
        """
        Write a payload to a control file in one call.

        Args:
            path: Absolute path
            content: Text to write

        Raises:
            SysfsError: If the kernel rejects the write
        """

    @abstractmethod
    def truncate(self, path: PathLike) -> None:
        """
        Truncate a control file to length 0.

        Args:
            path: Absolute path

        Raises:
            SysfsError: If the file can't be truncated
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this backend talks to a real kernel tree.

        Returns:
            True for the real filesystem, False if simulated
        """


class PeripheralError(Exception):
    """Base class for every error raised by the peripherals package"""


class SysfsError(PeripheralError):
    """
    Control file access failed.

    Examples:
    - Permission denied on /sys/class/gpio/export
    - Kernel rejected a duty_cycle larger than the period
    - Control file vanished (pin unexported by someone else)
    """


class ExportTimeoutError(SysfsError):
    """Control directory never appeared after an export request"""


class ParseError(SysfsError, ValueError):
    """Control file held content we don't understand"""


class ChipNotFoundError(SysfsError):
    """PWM controller directory is missing or not a directory"""


class InvalidStateError(SysfsError):
    """Control files describe a state the operation can't work with"""


class UnknownPinError(PeripheralError, KeyError):
    """Pin name is not in the board pin table"""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""
