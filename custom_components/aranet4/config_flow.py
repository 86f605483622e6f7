"""Config flow for Aranet4 integration."""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.const import CONF_NAME
from homeassistant.data_entry_flow import FlowResult

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
)
from .exceptions import Aranet4Exception

_LOGGER = logging.getLogger(__name__)

USER_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_NAME, default=DEFAULT_NAME): str,
        vol.Optional(CONF_EXECUTABLE, default=DEFAULT_EXECUTABLE): str,
        vol.Optional(CONF_COMMAND_TIMEOUT, default=DEFAULT_COMMAND_TIMEOUT): vol.All(
            int, vol.Range(min=1)
        ),
    }
)


class Aranet4ConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Aranet4."""

    VERSION = 1

    def __init__(self) -> None:
        """Initialize the config flow."""
        self.api: Aranet4API | None = None
        self.settings: dict[str, Any] = {}
        self.discovered_devices: dict[str, tuple[str, str]] = {}

    def _create_api(self) -> Aranet4API:
        return Aranet4API(
            executable=self.settings.get(CONF_EXECUTABLE, DEFAULT_EXECUTABLE),
            timeout=self.settings.get(CONF_COMMAND_TIMEOUT, DEFAULT_COMMAND_TIMEOUT),
        )

    def _scan_form(self, errors: dict[str, str] | None = None) -> FlowResult:
        return self.async_show_form(
            step_id="scan",
            data_schema=vol.Schema(
                {
                    vol.Required("device"): vol.In(list(self.discovered_devices.keys())),
                }
            ),
            errors=errors,
        )

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Handle the initial step."""
        if user_input is None:
            return self.async_show_form(step_id="user", data_schema=USER_SCHEMA)

        try:
            self.settings = USER_SCHEMA(user_input)
        except vol.Invalid as err:
            _LOGGER.error("Invalid settings: %s", err)
            return self.async_show_form(
                step_id="user",
                data_schema=USER_SCHEMA,
                errors={CONF_COMMAND_TIMEOUT: "invalid_timeout"},
            )

        self.api = self._create_api()

        try:
            devices = await self.api.async_scan()
        except Aranet4Exception as err:
            _LOGGER.error("Error scanning for devices: %s", err)
            return self.async_show_form(
                step_id="user", data_schema=USER_SCHEMA, errors={"base": "scan_failed"}
            )

        if not devices:
            return self.async_show_form(
                step_id="user", data_schema=USER_SCHEMA, errors={"base": "no_devices_found"}
            )

        self.discovered_devices = {
            f"{device.name or DEFAULT_NAME} ({device.identifier})": (
                device.identifier,
                device.name or DEFAULT_NAME,
            )
            for device in devices
        }
        return self._scan_form()

    async def async_step_scan(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Let the user pick one of the scanned devices."""
        if user_input is None:
            return self._scan_form()

        device_address, device_name = self.discovered_devices[user_input["device"]]

        await self.async_set_unique_id(device_address)
        self._abort_if_unique_id_configured()

        if self.api is None:
            self.api = self._create_api()

        # a targeted read proves the device answers
        try:
            await self.api.async_read_device(device_address)
        except Aranet4Exception as err:
            _LOGGER.error("Error reading device %s: %s", device_address, err)
            return self._scan_form(errors={"base": "read_failed"})

        title = self.settings.get(CONF_NAME)
        if not title or title == DEFAULT_NAME:
            title = device_name

        return self.async_create_entry(
            title=title,
            data={
                CONF_DEVICE_ADDRESS: device_address,
                CONF_DEVICE_NAME: device_name,
                CONF_EXECUTABLE: self.settings.get(CONF_EXECUTABLE, DEFAULT_EXECUTABLE),
                CONF_COMMAND_TIMEOUT: self.settings.get(
                    CONF_COMMAND_TIMEOUT, DEFAULT_COMMAND_TIMEOUT
                ),
            },
        )
