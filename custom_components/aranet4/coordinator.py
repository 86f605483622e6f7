"""Data coordinator for Aranet4."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .aranet_api import Aranet4API
from .const import (
    CONF_COMMAND_TIMEOUT,
    CONF_DEVICE_ADDRESS,
    CONF_DEVICE_NAME,
    CONF_EXECUTABLE,
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_EXECUTABLE,
    DEFAULT_NAME,
    DOMAIN,
    UPDATE_INTERVAL,
)
from .exceptions import Aranet4Exception

_LOGGER = logging.getLogger(__name__)


class Aranet4Coordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Class to manage fetching Aranet4 data."""

    def __init__(
        self,
        hass: HomeAssistant,
        entry: ConfigEntry,
        api: Aranet4API | None = None,
    ) -> None:
        """Initialize."""
        self.entry = entry
        self.api = api or Aranet4API(
            executable=entry.data.get(CONF_EXECUTABLE, DEFAULT_EXECUTABLE),
            timeout=entry.data.get(CONF_COMMAND_TIMEOUT, DEFAULT_COMMAND_TIMEOUT),
        )
        self.device_address: str = entry.data[CONF_DEVICE_ADDRESS]
        self.device_name = entry.data.get(CONF_DEVICE_NAME, DEFAULT_NAME)

        super().__init__(
            hass,
            _LOGGER,
            config_entry=entry,
            name=DOMAIN,
            update_interval=timedelta(seconds=UPDATE_INTERVAL),
        )

    async def _async_update_data(self) -> dict[str, Any]:
        """Read the configured device."""
        try:
            device = await self.api.async_read_device(self.device_address)
        except Aranet4Exception as err:
            _LOGGER.error(
                "Error updating %s (%s): %s", self.device_name, self.device_address, err
            )
            raise UpdateFailed(f"Error updating data: {err}") from err

        record = device.record
        _LOGGER.debug("Updated %s (%s): %s", self.device_name, self.device_address, record)
        return {
            "reading": device.current_reading().as_dict(),
            "device": record.as_dict(),
            "status": record.status,
            "next_update_millis": record.next_update_millis,
            "last_update": datetime.now().isoformat(),
        }
