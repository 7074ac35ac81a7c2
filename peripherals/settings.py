"""
Central Settings

Environment-backed defaults for the peripherals package.

Guidelines:
- Board specific overrides go in .env or the process environment, NOT here
- Import these settings in modules: from peripherals.settings import GPIO_SYSFS_ROOT
- Values here are only defaults; PeripheralConfig can override them from YAML
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# SYSFS ROOTS
# =============================================================================

# Kernel control trees. Overridable so the package can run against a fake tree.
GPIO_SYSFS_ROOT = Path(os.getenv("PERIPHERALS_GPIO_ROOT", "/sys/class/gpio"))
PWM_SYSFS_ROOT = Path(os.getenv("PERIPHERALS_PWM_ROOT", "/sys/class/pwm"))

# =============================================================================
# CONFIGURATION FILE
# =============================================================================

# Optional YAML file with overrides (see peripherals/config.py)
CONFIG_PATH = Path(os.getenv("PERIPHERALS_CONFIG_PATH", "config/peripherals.yaml"))

# =============================================================================
# I2C
# =============================================================================

# Bus used when callers don't pass one (/dev/i2c-2 is the P9_19/P9_20 header bus)
DEFAULT_I2C_BUS = int(os.getenv("PERIPHERALS_I2C_BUS", "2"))
