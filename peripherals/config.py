"""
Peripheral Configuration Handler

Optional YAML file overriding sysfs roots and export-poll timing.
Provides defaults and validation.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from peripherals.constants import (
    DEFAULT_GPIO_ROOT,
    DEFAULT_PWM_FREQUENCY_HZ,
    DEFAULT_PWM_ROOT,
    EXPORT_POLL_ATTEMPTS,
    EXPORT_POLL_INTERVAL,
)
from peripherals.settings import CONFIG_PATH


class PeripheralConfig:
    """
    Peripheral configuration with YAML file support.

    Reads from config/peripherals.yaml (or PERIPHERALS_CONFIG_PATH) if it
    exists, otherwise uses defaults from constants.py.

    Usage:
        config = PeripheralConfig()
        gpio_root = config.gpio_root
        attempts = config.export_poll_attempts

        # Point everything at a fake tree
        config = PeripheralConfig(overrides={'gpio_root': '/tmp/gpio'})
    """

    DEFAULT_CONFIG_PATH = CONFIG_PATH

    def __init__(
        self,
        config_path: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML config file (None = use default)
            overrides: Values applied on top of file and defaults
        """
        self.logger = logging.getLogger(__name__)
        self.config_path = Path(config_path or self.DEFAULT_CONFIG_PATH)

        self._config = self._load_config()
        if overrides:
            self._config.update(overrides)

        self._validate_config(self._config)

    def _get_defaults(self) -> Dict[str, Any]:
        """Get default configuration values from constants"""
        return {
            # Paths
            'gpio_root': str(DEFAULT_GPIO_ROOT),
            'pwm_root': str(DEFAULT_PWM_ROOT),

            # Export protocol
            'export_poll_interval': EXPORT_POLL_INTERVAL,
            'export_poll_attempts': EXPORT_POLL_ATTEMPTS,

            # PWM
            'default_pwm_frequency': DEFAULT_PWM_FREQUENCY_HZ,
        }

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file or use defaults"""
        config = self._get_defaults()

        if not self.config_path.exists():
            self.logger.debug(
                f"Config file not found at {self.config_path}. Using defaults."
            )
            return config

        try:
            with open(self.config_path, 'r') as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(
                f"Failed to load config from {self.config_path}: {e}"
            ) from e

        if not isinstance(file_config, dict):
            raise ValueError(
                f"Config file {self.config_path} must contain a mapping"
            )

        unknown = set(file_config) - set(config)
        if unknown:
            self.logger.warning(
                f"Ignoring unknown config keys in {self.config_path}: {sorted(unknown)}"
            )
            for key in unknown:
                del file_config[key]

        # File overrides defaults
        config.update(file_config)
        self.logger.info(f"Loaded config from {self.config_path}")
        return config

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate configuration values"""
        for key in ('gpio_root', 'pwm_root'):
            root = Path(config[key])
            if not root.is_absolute():
                raise ValueError(f"{key} must be absolute path: {root}")

        if config['export_poll_interval'] <= 0:
            raise ValueError("export_poll_interval must be positive")

        if int(config['export_poll_attempts']) < 1:
            raise ValueError("export_poll_attempts must be at least 1")

        if config['default_pwm_frequency'] <= 0:
            raise ValueError("default_pwm_frequency must be positive")

    # =========================================================================
    # PROPERTY ACCESSORS
    # =========================================================================

    @property
    def gpio_root(self) -> Path:
        """GPIO class directory (/sys/class/gpio)"""
        return Path(self._config['gpio_root'])

    @property
    def pwm_root(self) -> Path:
        """PWM class directory (/sys/class/pwm)"""
        return Path(self._config['pwm_root'])

    @property
    def export_poll_interval(self) -> float:
        """Seconds between checks for an exported directory"""
        return float(self._config['export_poll_interval'])

    @property
    def export_poll_attempts(self) -> int:
        """Sleeps before an export is declared failed"""
        return int(self._config['export_poll_attempts'])

    @property
    def default_pwm_frequency(self) -> float:
        """Frequency applied when a PWM channel is opened"""
        return self._config['default_pwm_frequency']

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Copy of the effective configuration"""
        return dict(self._config)
