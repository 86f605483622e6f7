"""Pytest configuration and fixtures for Aranet4 integration tests."""

from __future__ import annotations

from typing import Sequence
from unittest.mock import MagicMock

import pytest

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from custom_components.aranet4.aranet_api import CommandResult
from custom_components.aranet4.const import (
    CONF_COMMAND_TIMEOUT,
    CONF_DEVICE_ADDRESS,
    CONF_DEVICE_NAME,
    CONF_EXECUTABLE,
    DOMAIN,
)

SCAN_OUTPUT = """\
Looking for Aranet devices...

=======================================
  Name:           Aranet4 0A1B2
  Address:        AA:BB:CC:DD:EE:FF
  Version:        v1.4.14
  RSSI:           -71 dBm
---------------------------------------
  CO2:            612 ppm
  Temperature:    21.5 °C
  Humidity:       45 %
  Pressure:       1013.2 hPa
  Battery:        87 %
  Status Display: GREEN
  Age:            40/300 s

=======================================
  Name:           Aranet4 3C4D5
  Address:        11:22:33:44:55:66
  CO2:            1450 ppm
  Temperature:    70.2 °F
  Status Display: ORANGE
  Age:            12/60 s
"""

READ_OUTPUT = """\
=======================================
  Name:           Aranet4 0A1B2
  Address:        AA:BB:CC:DD:EE:FF
  CO2:            640 ppm
  Temperature:    22.1 °C
  Humidity:       44 %
  Pressure:       1012.8 hPa
  Battery:        86 %
  Status Display: GREEN
  Age:            5/300 s
"""


class FakeRunner:
    """CommandRunner returning canned output and recording the calls."""

    def __init__(self, stdout: str = "", stderr: str = "") -> None:
        self.stdout = stdout
        self.stderr = stderr
        self.calls: list[list[str]] = []

    async def run(self, args: Sequence[str]) -> CommandResult:
        self.calls.append(list(args))
        return CommandResult(stdout=self.stdout, stderr=self.stderr)


@pytest.fixture
def scan_output() -> str:
    """Captured `aranetctl --scan` output with two devices."""
    return SCAN_OUTPUT


@pytest.fixture
def read_output() -> str:
    """Captured `aranetctl <address>` output."""
    return READ_OUTPUT


@pytest.fixture
def mock_hass() -> HomeAssistant:
    """Mock Home Assistant instance."""
    hass = MagicMock(spec=HomeAssistant)
    hass.data = {DOMAIN: {}}
    return hass


@pytest.fixture
def mock_config_entry() -> ConfigEntry:
    """Mock config entry."""
    entry = MagicMock(spec=ConfigEntry)
    entry.entry_id = "test_entry_id"
    entry.title = "Aranet4 0A1B2"
    entry.data = {
        CONF_DEVICE_ADDRESS: "AA:BB:CC:DD:EE:FF",
        CONF_DEVICE_NAME: "Aranet4 0A1B2",
        CONF_EXECUTABLE: "aranetctl",
        CONF_COMMAND_TIMEOUT: 30,
    }
    entry.options = {}
    return entry
