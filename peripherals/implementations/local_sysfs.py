"""
Local Sysfs Implementation

Concrete SysfsInterface on the real filesystem. On a board this talks to
/sys/class/gpio and /sys/class/pwm; in tests it can point at a temporary tree.

Every OSError is wrapped in SysfsError so callers handle one exception family.
"""

import logging
import os
from pathlib import Path

from peripherals.interfaces.sysfs_interface import (
    PathLike,
    SysfsError,
    SysfsInterface,
)


class LocalSysfs(SysfsInterface):
    """Control file access through pathlib/os"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    def is_dir(self, path: PathLike) -> bool:
        return Path(path).is_dir()

    def read(self, path: PathLike) -> str:
        """Read whole control file (text, newline included)"""
        try:
            return Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise SysfsError(f"Failed to read {path}: {e}") from e

    def write(self, path: PathLike, content: str) -> None:
        """Write payload in a single write() call"""
        self.logger.debug(f"write {path} <- {content!r}")
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise SysfsError(f"Failed to write {content!r} to {path}: {e}") from e

    def truncate(self, path: PathLike) -> None:
        try:
            os.truncate(path, 0)
        except OSError as e:
            raise SysfsError(f"Failed to truncate {path}: {e}") from e

    def is_available(self) -> bool:
        """Real filesystem is always available"""
        return True
