"""Parser for aranetctl text output.

aranetctl prints one field per line as ``Label: value[ unit]``. Each device
block starts with a line whose label begins with ``=``::

    =======================================
      Name:           Aranet4 0A1B2
      Address:        AA:BB:CC:DD:EE:FF
      CO2:            612 ppm
      Temperature:    21.5 °C
      Status Display: GREEN
      Age:            40/300 s

Field values that cannot be interpreted never abort the batch: numbers fall
back to the raw token, unknown statuses map to tier 0.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .const import (
    BOUNDARY_MARKER,
    STATUS_UNKNOWN,
    STATUSES,
    UNIT_CELSIUS,
    UNIT_FAHRENHEIT,
)
from .models import Age, DeviceRecord, Measurement, Value

_LOGGER = logging.getLogger(__name__)

_LABEL_SEPARATOR = re.compile(r":\s+")
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class FieldKind(Enum):
    """How the text after a label is interpreted."""

    TEXT = "text"
    NUMERIC = "numeric"
    STATUS = "status"
    AGE = "age"


DEVICE_FIELDS: dict[str, tuple[str, FieldKind]] = {
    "Name": ("name", FieldKind.TEXT),
    "Address": ("address", FieldKind.TEXT),
    "CO2": ("co2", FieldKind.NUMERIC),
    "Temperature": ("temperature", FieldKind.NUMERIC),
    "Humidity": ("humidity", FieldKind.NUMERIC),
    "Pressure": ("pressure", FieldKind.NUMERIC),
    "Battery": ("battery", FieldKind.NUMERIC),
    "Status Display": ("status", FieldKind.STATUS),
    "Age": ("age", FieldKind.AGE),
}


def parse_number(token: str) -> Value:
    """Return ``token`` as a float, or the token itself if it is not a number.

    Only plain decimals are numbers; ``1_000``, ``inf`` and ``nan`` are not.
    """
    if not _DECIMAL.fullmatch(token):
        _LOGGER.debug(f"[PARSE] Not a number: {token!r}")
        return token
    return float(token)


def normalize_temperature_unit(unit: str) -> str:
    """Map a temperature unit token to celsius or fahrenheit.

    Only the last character is checked, so ``C`` and ``°C`` are celsius and
    anything else is fahrenheit.
    """
    if unit.endswith("C"):
        return UNIT_CELSIUS
    return UNIT_FAHRENHEIT


def status_tier(text: str) -> int:
    """GREEN -> 1, ORANGE -> 2, RED -> 3, anything else -> 0."""
    try:
        return STATUSES.index(text) + 1
    except ValueError:
        _LOGGER.debug(f"[PARSE] Unknown status: {text!r}")
        return STATUS_UNKNOWN


def parse_age(text: str) -> Optional[Age]:
    """Parse ``elapsed/total`` (an optional trailing unit is ignored)."""
    token = text.split(maxsplit=1)[0] if text.strip() else ""
    elapsed, sep, total = token.partition("/")
    if not sep:
        _LOGGER.debug(f"[PARSE] Malformed age: {text!r}")
        return None
    elapsed_value = parse_number(elapsed)
    total_value = parse_number(total)
    if isinstance(elapsed_value, str) or isinstance(total_value, str):
        _LOGGER.debug(f"[PARSE] Malformed age: {text!r}")
        return None
    return Age(elapsed=elapsed_value, total=total_value)


def _split_value(text: str) -> tuple[str, Optional[str]]:
    parts = text.split(maxsplit=1)
    if not parts:
        return text, None
    if len(parts) == 1:
        return parts[0], None
    return parts[0], parts[1]


@dataclass
class _DeviceRecordBuilder:
    """Collects the fields of one device block."""

    name: Optional[Measurement] = None
    address: Optional[Measurement] = None
    co2: Optional[Measurement] = None
    temperature: Optional[Measurement] = None
    humidity: Optional[Measurement] = None
    pressure: Optional[Measurement] = None
    battery: Optional[Measurement] = None
    status: Optional[int] = None
    age: Optional[Age] = None

    def set_field(self, field: str, kind: FieldKind, text: str) -> None:
        if kind is FieldKind.TEXT:
            setattr(self, field, Measurement(text))
        elif kind is FieldKind.NUMERIC:
            token, unit = _split_value(text)
            if field == "temperature" and unit is not None:
                unit = normalize_temperature_unit(unit)
            setattr(self, field, Measurement(parse_number(token), unit))
        elif kind is FieldKind.STATUS:
            token, _ = _split_value(text)
            self.status = status_tier(token)
        elif kind is FieldKind.AGE:
            self.age = parse_age(text)

    def build(self) -> DeviceRecord:
        return DeviceRecord(
            name=self.name,
            address=self.address,
            co2=self.co2,
            temperature=self.temperature,
            humidity=self.humidity,
            pressure=self.pressure,
            battery=self.battery,
            status=self.status,
            age=self.age,
        )


def parse(raw_text: str) -> list[DeviceRecord]:
    """Parse aranetctl output into device records, in output order.

    A block is complete at the next boundary line or at the end of the text.
    Blocks with no recognized fields are still returned as empty records.
    Lines before the first boundary are ignored.
    """
    devices: list[DeviceRecord] = []
    builder: Optional[_DeviceRecordBuilder] = None

    for line in raw_text.splitlines():
        line = line.strip()
        if not line:
            continue

        parts = _LABEL_SEPARATOR.split(line, maxsplit=1)
        label = parts[0]
        rest = parts[1] if len(parts) > 1 else ""

        if label.startswith(BOUNDARY_MARKER):
            if builder is not None:
                devices.append(builder.build())
            builder = _DeviceRecordBuilder()
            continue

        known = DEVICE_FIELDS.get(label)
        if known is None or builder is None:
            continue

        field, kind = known
        builder.set_field(field, kind, rest)

    # last device has no trailing boundary
    if builder is not None:
        devices.append(builder.build())

    _LOGGER.debug(f"[PARSE] Parsed {len(devices)} device(s)")
    return devices
