"""
Peripheral Utilities Package

Public API:
    - export_and_wait: Export protocol (write id, poll for directory)
    - wait_for_path: Bounded polling loop with injected sleep
    - read_stripped: Read control file without trailing newline
    - read_int: Read control file as decimal integer
    - parse_choice: Map control file text to an Enum member
"""

from peripherals.utils.sysfs_utils import (
    export_and_wait,
    parse_choice,
    read_int,
    read_stripped,
    wait_for_path,
)

# Public API (sorted alphabetically)
__all__ = [
    "export_and_wait",
    "parse_choice",
    "read_int",
    "read_stripped",
    "wait_for_path",
]
