"""
Peripheral Factory Tests

To run these tests:
    pytest tests/peripherals/test_factory.py -v
"""

import pytest

from peripherals.config import PeripheralConfig
from peripherals.factory import PeripheralFactory, create_sysfs, open_i2c_bus
from peripherals.implementations.local_sysfs import LocalSysfs
from peripherals.implementations.mock_i2c_bus import MockI2CBus
from peripherals.implementations.mock_sysfs import MockSysfs
from peripherals.interfaces.i2c_interface import BusOpenError


def config_for(tmp_path, **roots):
    return PeripheralConfig(
        config_path=tmp_path / "absent.yaml",
        overrides={key: str(value) for key, value in roots.items()},
    )


@pytest.mark.unit
def test_forced_modes(tmp_path):
    assert isinstance(PeripheralFactory.create_sysfs(mode="mock"), MockSysfs)
    assert isinstance(PeripheralFactory.create_sysfs(mode="real"), LocalSysfs)
    assert isinstance(create_sysfs(force_mock=True), MockSysfs)


@pytest.mark.unit
def test_auto_detects_sysfs_roots(tmp_path):
    (tmp_path / "pwm").mkdir()
    config = config_for(tmp_path, gpio_root=tmp_path / "gpio", pwm_root=tmp_path / "pwm")

    assert isinstance(create_sysfs(config=config), LocalSysfs)


@pytest.mark.unit
def test_auto_falls_back_to_mock(tmp_path):
    config = config_for(tmp_path, gpio_root=tmp_path / "gpio", pwm_root=tmp_path / "pwm")

    sysfs = PeripheralFactory.create_sysfs(mode="auto", config=config)

    assert isinstance(sysfs, MockSysfs)
    assert sysfs.is_available() is False


@pytest.mark.unit
def test_i2c_modes():
    bus = open_i2c_bus(3, force_mock=True)
    assert isinstance(bus, MockI2CBus)
    assert bus.bus_number == 3

    # Bus 250 doesn't exist on any test machine
    assert isinstance(PeripheralFactory.create_i2c_bus(250, mode="auto"), MockI2CBus)

    with pytest.raises(BusOpenError):
        PeripheralFactory.create_i2c_bus(250, mode="real")
    with pytest.raises(BusOpenError):
        open_i2c_bus(250)


@pytest.mark.unit
def test_hardware_availability_report(tmp_path):
    (tmp_path / "gpio").mkdir()
    config = config_for(tmp_path, gpio_root=tmp_path / "gpio", pwm_root=tmp_path / "pwm")

    status = PeripheralFactory.is_real_hardware_available(config=config, i2c_bus=250)

    assert status == {"sysfs": True, "i2c": False}
