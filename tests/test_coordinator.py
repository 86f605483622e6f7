"""Tests for the Aranet4 coordinator and entry setup."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from homeassistant.exceptions import ConfigEntryNotReady
from homeassistant.helpers.update_coordinator import UpdateFailed

from custom_components.aranet4 import async_setup_entry, async_unload_entry
from custom_components.aranet4.aranet_api import Aranet4API
from custom_components.aranet4.const import DOMAIN
from custom_components.aranet4.coordinator import Aranet4Coordinator

from .conftest import FakeRunner


@pytest.mark.asyncio
async def test_coordinator_update(mock_hass, mock_config_entry, read_output):
    """Test a successful update returns the flattened reading."""
    runner = FakeRunner(stdout=read_output)
    coordinator = Aranet4Coordinator(mock_hass, mock_config_entry, Aranet4API(runner=runner))

    data = await coordinator._async_update_data()

    assert runner.calls == [["AA:BB:CC:DD:EE:FF"]]
    assert data["reading"] == {
        "co2": 640.0,
        "temperature": 22.1,
        "humidity": 44.0,
        "pressure": 1012.8,
        "battery": 86.0,
    }
    assert data["status"] == 1
    assert data["next_update_millis"] == 295000
    assert data["device"]["temperature"] == {"value": 22.1, "unit": "celsius"}
    assert "last_update" in data


@pytest.mark.asyncio
async def test_coordinator_update_tool_error(mock_hass, mock_config_entry):
    """Test aranetctl errors become UpdateFailed."""
    api = Aranet4API(runner=FakeRunner(stderr="Failed to connect"))
    coordinator = Aranet4Coordinator(mock_hass, mock_config_entry, api)

    with pytest.raises(UpdateFailed, match="Failed to connect"):
        await coordinator._async_update_data()


@pytest.mark.asyncio
async def test_coordinator_update_device_missing(mock_hass, mock_config_entry):
    """Test an empty read becomes UpdateFailed."""
    coordinator = Aranet4Coordinator(
        mock_hass, mock_config_entry, Aranet4API(runner=FakeRunner(stdout=""))
    )

    with pytest.raises(UpdateFailed):
        await coordinator._async_update_data()


def test_coordinator_builds_api_from_entry(mock_hass, mock_config_entry):
    """Test the executable and timeout come from the config entry."""
    coordinator = Aranet4Coordinator(mock_hass, mock_config_entry)

    assert coordinator.device_address == "AA:BB:CC:DD:EE:FF"
    assert coordinator.api.runner.executable == "aranetctl"
    assert coordinator.api.runner.timeout == 30


@pytest.mark.asyncio
async def test_setup_and_unload_entry(mock_hass, mock_config_entry):
    """Test the coordinator is stored on setup and shut down on unload."""
    coordinator = MagicMock()
    coordinator.async_config_entry_first_refresh = AsyncMock()
    coordinator.async_shutdown = AsyncMock()

    with patch("custom_components.aranet4.Aranet4Coordinator", return_value=coordinator):
        assert await async_setup_entry(mock_hass, mock_config_entry)

    assert mock_hass.data[DOMAIN][mock_config_entry.entry_id] is coordinator

    assert await async_unload_entry(mock_hass, mock_config_entry)
    assert mock_config_entry.entry_id not in mock_hass.data[DOMAIN]
    coordinator.async_shutdown.assert_awaited_once()


@pytest.mark.asyncio
async def test_setup_entry_not_ready(mock_hass, mock_config_entry):
    """Test a failing first refresh shuts the coordinator down."""
    coordinator = MagicMock()
    coordinator.async_config_entry_first_refresh = AsyncMock(side_effect=ConfigEntryNotReady)
    coordinator.async_shutdown = AsyncMock()

    with patch("custom_components.aranet4.Aranet4Coordinator", return_value=coordinator):
        with pytest.raises(ConfigEntryNotReady):
            await async_setup_entry(mock_hass, mock_config_entry)

    coordinator.async_shutdown.assert_awaited_once()
    assert mock_config_entry.entry_id not in mock_hass.data[DOMAIN]


@pytest.mark.asyncio
async def test_coordinator_update_error_logs_device_name(mock_hass, mock_config_entry, caplog):
    """Test failures name the configured device."""
    api = Aranet4API(runner=FakeRunner(stderr="Failed to connect"))
    coordinator = Aranet4Coordinator(mock_hass, mock_config_entry, api)

    with pytest.raises(UpdateFailed):
        await coordinator._async_update_data()

    assert coordinator.device_name == "Aranet4 0A1B2"
    assert "Error updating Aranet4 0A1B2 (AA:BB:CC:DD:EE:FF)" in caplog.text
