"""API wrapper for Aranet4 devices read through aranetctl."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .const import DEFAULT_COMMAND_TIMEOUT, DEFAULT_EXECUTABLE, SCAN_ARGUMENT
from .exceptions import DeviceNotFoundError, ExternalToolError
from .models import Aranet4DeviceInfo, AranetReading, DeviceRecord
from .parser import parse

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Decoded output of one aranetctl invocation."""

    stdout: str
    stderr: str


class CommandRunner(Protocol):
    """Runs aranetctl with the given arguments and waits for it to exit."""

    async def run(self, args: Sequence[str]) -> CommandResult:
        ...


class SubprocessCommandRunner:
    """CommandRunner that starts the aranetctl executable."""

    def __init__(
        self,
        executable: str = DEFAULT_EXECUTABLE,
        timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT,
    ) -> None:
        self.executable = executable
        self.timeout = timeout

    async def run(self, args: Sequence[str]) -> CommandResult:
        _LOGGER.debug(f"[RUN] {self.executable} {' '.join(args)}")
        try:
            process = await asyncio.create_subprocess_exec(
                self.executable,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as err:
            raise ExternalToolError(f"Could not start {self.executable}: {err}") from err

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), self.timeout)
        except asyncio.TimeoutError as err:
            await self._kill(process)
            raise ExternalToolError(
                f"{self.executable} did not finish within {self.timeout} seconds"
            ) from err
        except BaseException:
            # cancelled: aranetctl must not keep holding the adapter
            await self._kill(process)
            raise

        return CommandResult(
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )

    async def _kill(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        _LOGGER.debug(f"[RUN] Killing {self.executable} (pid {process.pid})")
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()


class Aranet4Device:
    """One Aranet4 monitor as seen in a single aranetctl run."""

    def __init__(self, record: DeviceRecord, info: Optional[Aranet4DeviceInfo] = None) -> None:
        self.record = record
        self.info = info or Aranet4DeviceInfo()

    @property
    def identifier(self) -> Optional[str]:
        """Address used to target later reads."""
        if self.record.address is None:
            return None
        return self.record.address.value

    @property
    def name(self) -> Optional[str]:
        if self.record.name is None:
            return None
        return self.record.name.value

    def current_reading(self) -> AranetReading:
        """Return the latest values without units.

        Temperature stays in whatever unit aranetctl reported.
        """
        record = self.record
        return AranetReading(
            co2=record.co2.value if record.co2 else None,
            temperature=record.temperature.value if record.temperature else None,
            humidity=record.humidity.value if record.humidity else None,
            pressure=record.pressure.value if record.pressure else None,
            battery=record.battery.value if record.battery else None,
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "record": self.record.as_dict(),
            "info": {
                "manufacturer": self.info.manufacturer,
                "model_number": self.info.model_number,
                "serial_number": self.info.serial_number,
                "hardware_revision": self.info.hardware_revision,
                "firmware_revision": self.info.firmware_revision,
                "software_revision": self.info.software_revision,
            },
        }

    def __repr__(self) -> str:
        return f"Aranet4Device(name={self.name!r}, address={self.identifier!r})"


class Aranet4API:
    """Scan for and read Aranet4 devices through aranetctl"""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        executable: str = DEFAULT_EXECUTABLE,
        timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT,
    ) -> None:
        self.runner: CommandRunner = runner or SubprocessCommandRunner(executable, timeout)

    async def _run(self, args: Sequence[str]) -> str:
        result = await self.runner.run(args)
        if result.stderr:
            _LOGGER.error(f"[API] aranetctl reported an error: {result.stderr.strip()}")
            raise ExternalToolError(result.stderr)
        return result.stdout

    async def async_scan(self) -> List[Aranet4Device]:
        """Scan for nearby devices. An empty list means nothing was found."""
        _LOGGER.debug("[SCAN] Starting to scan...")
        stdout = await self._run([SCAN_ARGUMENT])

        devices: List[Aranet4Device] = []
        seen: set[str] = set()
        for record in parse(stdout):
            device = Aranet4Device(record)
            address = device.identifier
            if not address:
                _LOGGER.warning(f"[SCAN] Skipping device without address: {device.name}")
                continue
            if address in seen:
                _LOGGER.warning(f"[SCAN] Duplicate device address {address}, keeping the first")
                continue
            seen.add(address)
            _LOGGER.debug(f"[SCAN] Found device {device.name} ({address})")
            devices.append(device)

        if not devices:
            _LOGGER.warning("[SCAN] No Aranet4 devices found")
        return devices

    async def async_read_device(self, address: str) -> Aranet4Device:
        """Read the latest measurement of the device at ``address``."""
        _LOGGER.debug(f"[READ] Reading {address}")
        stdout = await self._run([address])

        records = parse(stdout)
        if not records:
            raise DeviceNotFoundError(address)
        return Aranet4Device(records[0])

    async def async_get_sensor_data(self, address: str) -> AranetReading:
        device = await self.async_read_device(address)
        reading = device.current_reading()
        _LOGGER.info(f"[READ] {address}: {reading}")
        return reading
