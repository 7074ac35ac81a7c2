"""
Local Sysfs Tests

Runs LocalSysfs and the controllers against a fake sysfs tree built in a
temporary directory.

To run these tests:
    pytest tests/peripherals/implementations/test_local_sysfs.py -v
"""

import pytest

from peripherals.config import PeripheralConfig
from peripherals.controllers.gpio_pin import GPIOPin
from peripherals.controllers.pwm_channel import PWMChannel
from peripherals.implementations.local_sysfs import LocalSysfs
from peripherals.interfaces.sysfs_interface import Direction, Polarity, SysfsError


@pytest.fixture
def fake_tree(tmp_path):
    """
    Minimal /sys/class layout: gpio controller and pwmchip3.
    """
    gpio_root = tmp_path / "gpio"
    gpio_root.mkdir()
    (gpio_root / "export").write_text("")
    (gpio_root / "unexport").write_text("")

    pwm_root = tmp_path / "pwm"
    chip = pwm_root / "pwmchip3"
    chip.mkdir(parents=True)
    (chip / "export").write_text("")
    (chip / "unexport").write_text("")

    return tmp_path


@pytest.fixture
def tree_config(fake_tree):
    return PeripheralConfig(
        config_path=fake_tree / "missing.yaml",
        overrides={
            "gpio_root": str(fake_tree / "gpio"),
            "pwm_root": str(fake_tree / "pwm"),
        },
    )


def add_gpio_dir(root, pin):
    pin_dir = root / f"gpio{pin}"
    pin_dir.mkdir()
    for name, value in (("direction", "in\n"), ("value", "0\n"), ("active_low", "0\n")):
        (pin_dir / name).write_text(value)
    return pin_dir


def add_pwm_dir(chip_dir, channel):
    channel_dir = chip_dir / f"pwm{channel}"
    channel_dir.mkdir()
    for name, value in (("enable", "0\n"), ("polarity", "normal\n"),
                        ("period", "0\n"), ("duty_cycle", "0\n")):
        (channel_dir / name).write_text(value)
    return channel_dir


# =============================================================================
# PRIMITIVE TESTS
# =============================================================================

@pytest.mark.unit
def test_read_write_truncate(tmp_path):
    sysfs = LocalSysfs()
    path = tmp_path / "duty_cycle"
    path.write_text("123456\n")

    assert sysfs.exists(path)
    assert not sysfs.is_dir(path)
    assert sysfs.read(path) == "123456\n"

    sysfs.truncate(path)
    assert path.read_text() == ""

    sysfs.write(path, "0")
    assert path.read_text() == "0"


@pytest.mark.unit
def test_errors_are_wrapped(tmp_path):
    sysfs = LocalSysfs()
    missing = tmp_path / "nope" / "value"

    with pytest.raises(SysfsError):
        sysfs.read(missing)
    with pytest.raises(SysfsError):
        sysfs.write(missing, "1")
    with pytest.raises(SysfsError):
        sysfs.truncate(missing)


@pytest.mark.unit
def test_is_available():
    assert LocalSysfs().is_available() is True


# =============================================================================
# CONTROLLER TESTS ON A REAL DIRECTORY TREE
# =============================================================================

@pytest.mark.integration
def test_gpio_on_fake_tree(fake_tree, tree_config, sleep_recorder):
    pin_dir = add_gpio_dir(fake_tree / "gpio", 60)

    pin = GPIOPin(60, Direction.OUT, sysfs=LocalSysfs(), config=tree_config,
                  sleep=sleep_recorder)
    pin.set_value(1)
    pin.set_active_low(True)

    assert (pin_dir / "direction").read_text() == "out"
    assert pin.get_direction() is Direction.OUT
    assert pin.get_value() == 1
    assert (pin_dir / "active_low").read_text() == "1"
    assert (fake_tree / "gpio" / "export").read_text() == ""


@pytest.mark.integration
def test_gpio_export_completes_while_polling(fake_tree, tree_config):
    """
    The "kernel" (here: the sleep hook) creates gpio48 on the second sleep.
    """
    sleeps = []

    def kernel_sleep(seconds):
        sleeps.append(seconds)
        if len(sleeps) == 2:
            add_gpio_dir(fake_tree / "gpio", 48)

    pin = GPIOPin(48, Direction.IN, sysfs=LocalSysfs(), config=tree_config,
                  sleep=kernel_sleep)

    assert (fake_tree / "gpio" / "export").read_text() == "48"
    assert sleeps == [0.05, 0.05]
    assert pin.get_direction() is Direction.IN


@pytest.mark.integration
def test_pwm_on_fake_tree(fake_tree, tree_config, sleep_recorder):
    channel_dir = add_pwm_dir(fake_tree / "pwm" / "pwmchip3", 0)

    pwm = PWMChannel("P9_31", sysfs=LocalSysfs(), config=tree_config,
                     sleep=sleep_recorder)
    pwm.set_pwm_frequency_and_value(1000, 0.25)

    assert (channel_dir / "period").read_text() == "1000000"
    assert (channel_dir / "duty_cycle").read_text() == "250000"
    assert (channel_dir / "enable").read_text() == "1"
    assert pwm.get_polarity() is Polarity.NORMAL
    assert pwm.get_pwm_frequency_and_value().value == 0.25

    pwm.disable()
    assert (channel_dir / "duty_cycle").read_text() == "0"
    assert not pwm.is_enabled()
