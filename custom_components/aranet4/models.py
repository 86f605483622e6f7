"""Data models for the Aranet4 integration."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional, Union

from .const import (
    DEFAULT_FIRMWARE_REV,
    DEFAULT_HARDWARE_REV,
    DEFAULT_MANUFACTURER,
    DEFAULT_MODEL,
    DEFAULT_SERIAL,
    DEFAULT_SOFTWARE_REV,
)

# A numeric field holds the raw token when it is not a number
Value = Union[float, str]


@dataclass(frozen=True)
class Measurement:
    """A value with the unit reported next to it, if any."""

    value: Value
    unit: Optional[str] = None

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"value": self.value}
        if self.unit is not None:
            data["unit"] = self.unit
        return data


@dataclass(frozen=True)
class Age:
    """Seconds elapsed out of the total measurement interval."""

    elapsed: float
    total: float

    @property
    def next_update_millis(self) -> float:
        return (self.total - self.elapsed) * 1000


@dataclass(frozen=True)
class DeviceRecord:
    """One device block parsed from aranetctl output."""

    name: Optional[Measurement] = None
    address: Optional[Measurement] = None
    co2: Optional[Measurement] = None
    temperature: Optional[Measurement] = None
    humidity: Optional[Measurement] = None
    pressure: Optional[Measurement] = None
    battery: Optional[Measurement] = None
    status: Optional[int] = None
    age: Optional[Age] = None

    @property
    def next_update_millis(self) -> Optional[float]:
        """Milliseconds until the device takes its next measurement."""
        if self.age is None:
            return None
        return self.age.next_update_millis

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON friendly representation, omitting absent fields."""
        data: dict[str, Any] = {}
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if value is None:
                continue
            if isinstance(value, Measurement):
                data[field.name] = value.as_dict()
            elif isinstance(value, Age):
                data[field.name] = {"elapsed": value.elapsed, "total": value.total}
            else:
                data[field.name] = value
        if self.age is not None:
            data["next_update_millis"] = self.next_update_millis
        return data


@dataclass(frozen=True)
class Aranet4DeviceInfo:
    """Static device description."""

    manufacturer: str = DEFAULT_MANUFACTURER
    model_number: str = DEFAULT_MODEL
    serial_number: str = DEFAULT_SERIAL
    hardware_revision: str = DEFAULT_HARDWARE_REV
    firmware_revision: str = DEFAULT_FIRMWARE_REV
    software_revision: str = DEFAULT_SOFTWARE_REV


@dataclass(frozen=True)
class AranetReading:
    """Plain sensor values, units stripped."""

    co2: Optional[Value] = None
    temperature: Optional[Value] = None
    humidity: Optional[Value] = None
    pressure: Optional[Value] = None
    battery: Optional[Value] = None

    def as_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)
