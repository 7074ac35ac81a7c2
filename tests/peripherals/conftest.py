"""
Test Configuration and Fixtures

Shared pytest fixtures for the peripherals tests.

Controllers are always built with injected collaborators:
- MockSysfs instead of /sys/class/...
- a recording sleep instead of time.sleep (no real waiting)
- MockI2CBus instead of /dev/i2c-N

To use pytest:
    pip install -e .[test]
    pytest tests/peripherals/
"""

import pytest

from peripherals.config import PeripheralConfig
from peripherals.constants import PWM_PIN_MAP
from peripherals.controllers.i2c_bus import I2CBus
from peripherals.implementations.mock_i2c_bus import MockI2CBus
from peripherals.implementations.mock_sysfs import MockSysfs


# =============================================================================
# CONFIG FIXTURES
# =============================================================================

@pytest.fixture
def config(tmp_path):
    """
    Default configuration, isolated from any config/peripherals.yaml on disk.
    """
    return PeripheralConfig(config_path=tmp_path / "peripherals.yaml")


# =============================================================================
# SYSFS FIXTURES
# =============================================================================

@pytest.fixture
def mock_sysfs(config):
    """
    Provide a MockSysfs with the GPIO controller and every PWM chip of the
    pin table present, nothing exported yet.

    Usage:
        def test_something(mock_sysfs):
            mock_sysfs.add_gpio_pin(60)
    """
    sysfs = MockSysfs()
    sysfs.add_gpio_controller(config.gpio_root)
    for chip in sorted({location.chip for location in PWM_PIN_MAP.values()}):
        sysfs.add_pwm_chip(chip, config.pwm_root)
    return sysfs


@pytest.fixture
def sleep_recorder():
    """
    Stand-in for time.sleep that records requested delays.

    Usage:
        def test_export(sleep_recorder):
            GPIOPin(60, Direction.OUT, sleep=sleep_recorder, ...)
            assert sleep_recorder.calls == []
    """
    class SleepRecorder:
        def __init__(self):
            self.calls = []

        def __call__(self, seconds):
            self.calls.append(seconds)

        @property
        def count(self) -> int:
            return len(self.calls)

    return SleepRecorder()


# =============================================================================
# I2C FIXTURES
# =============================================================================

@pytest.fixture
def mock_i2c():
    """
    Provide a MockI2CBus with a register-file device at 0x48.

    Device memory is bytes 0x00..0x0f so reads are easy to predict.
    """
    return MockI2CBus(bus_number=1, devices={0x48: bytes(range(16))})


@pytest.fixture
def i2c_bus(mock_i2c):
    """I2CBus controller driving the mock handle, closed after the test"""
    bus = I2CBus(1, handle=mock_i2c)
    yield bus
    if not bus.closed:
        bus.close()


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """
    Configure pytest with custom markers.

    Markers let you categorize and selectively run tests:
        pytest -m unit          # Only unit tests
        pytest -m integration   # Only integration tests
        pytest -m "not hardware"
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (may be slower)")
    config.addinivalue_line("markers", "hardware: Tests requiring real hardware")
