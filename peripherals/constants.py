"""
Peripheral Constants

Centralizes the wire strings, timing values and the board pin table used by the
GPIO, PWM and I2C controllers.

Everything in the kernel control files is text: enums are kept as exact lowercase
strings here and converted at the controller boundary.
"""

from types import MappingProxyType

from peripherals.models.pwm_models import PWMChipChannel
from peripherals.settings import GPIO_SYSFS_ROOT, PWM_SYSFS_ROOT

# =============================================================================
# SYSFS LAYOUT
# =============================================================================
# Import roots from peripherals.settings to keep a single source of truth

DEFAULT_GPIO_ROOT = GPIO_SYSFS_ROOT
DEFAULT_PWM_ROOT = PWM_SYSFS_ROOT

EXPORT_FILE = "export"
UNEXPORT_FILE = "unexport"

GPIO_DIR_TEMPLATE = "gpio{pin}"
GPIO_DIRECTION_FILE = "direction"
GPIO_VALUE_FILE = "value"
GPIO_ACTIVE_LOW_FILE = "active_low"

PWM_CHIP_DIR_TEMPLATE = "pwmchip{chip}"
PWM_CHANNEL_DIR_TEMPLATE = "pwm{channel}"
PWM_ENABLE_FILE = "enable"
PWM_POLARITY_FILE = "polarity"
PWM_PERIOD_FILE = "period"
PWM_DUTY_CYCLE_FILE = "duty_cycle"

# =============================================================================
# EXPORT PROTOCOL TIMING
# =============================================================================
# The kernel creates the control directory asynchronously after an export write.

# Delay between existence checks (in seconds)
EXPORT_POLL_INTERVAL = 0.05

# Number of sleeps before giving up (20 x 50ms = ~1s worst case)
EXPORT_POLL_ATTEMPTS = 20

# =============================================================================
# PWM
# =============================================================================

NANOSECONDS_PER_SECOND = 1.0e9

# Applied on every PWMChannel construction
DEFAULT_PWM_FREQUENCY_HZ = 2000
DEFAULT_PWM_VALUE = 0.0

PWM_ENABLED = "1"
PWM_DISABLED = "0"

# Board pin name -> (pwmchip, channel). Aliases share the same output.
PWM_PIN_MAP = MappingProxyType({
    "P9_22": PWMChipChannel(chip=3, channel=0),  # EHRPWM0A
    "P9_31": PWMChipChannel(chip=3, channel=0),  # EHRPWM0A
    "P9_21": PWMChipChannel(chip=3, channel=1),  # EHRPWM0B
    "P9_29": PWMChipChannel(chip=3, channel=1),  # EHRPWM0B
    "P9_14": PWMChipChannel(chip=5, channel=0),  # EHRPWM1A
    "P8_36": PWMChipChannel(chip=5, channel=0),  # EHRPWM1A
    "P9_16": PWMChipChannel(chip=5, channel=1),  # EHRPWM1B
    "P8_34": PWMChipChannel(chip=5, channel=1),  # EHRPWM1B
    "P8_19": PWMChipChannel(chip=7, channel=0),  # EHRPWM2A
    "P8_45": PWMChipChannel(chip=7, channel=0),  # EHRPWM2A
    "P8_13": PWMChipChannel(chip=7, channel=1),  # EHRPWM2B
    "P8_46": PWMChipChannel(chip=7, channel=1),  # EHRPWM2B
    "P9_42": PWMChipChannel(chip=0, channel=0),  # ECAPPWM0
    "P9_28": PWMChipChannel(chip=2, channel=0),  # ECAPPWM2
})

# =============================================================================
# I2C
# =============================================================================

# 7-bit and 10-bit addresses both fit below this
I2C_ADDRESS_LIMIT = 0x400

# Largest 7-bit address; anything above needs the ten-bit flag
I2C_MAX_7BIT_ADDRESS = 0x7F

# Linux i2c-dev message flag for ten-bit addressing (include/uapi/linux/i2c.h)
I2C_M_TEN = 0x0010
