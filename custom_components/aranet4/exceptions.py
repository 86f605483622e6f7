"""Custom exceptions for the Aranet4 integration."""


class Aranet4Exception(Exception):
    """Base exception for the Aranet4 integration."""


class ExternalToolError(Aranet4Exception):
    """aranetctl failed: it wrote to stderr, could not be started or timed out."""


class DeviceNotFoundError(Aranet4Exception):
    """A targeted read returned no device."""

    def __init__(self, address: str) -> None:
        super().__init__(f"No Aranet4 device found at {address}")
        self.address = address
