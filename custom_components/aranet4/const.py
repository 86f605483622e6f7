"""Constants for the Aranet4 integration."""

DOMAIN = "aranet4"

# Configuration keys
CONF_DEVICE_ADDRESS = "device_address"
CONF_DEVICE_NAME = "device_name"
CONF_EXECUTABLE = "executable"
CONF_COMMAND_TIMEOUT = "command_timeout"

# Default values
DEFAULT_EXECUTABLE = "aranetctl"
DEFAULT_COMMAND_TIMEOUT = 60  # seconds
DEFAULT_NAME = "Aranet4"

# Update intervals
UPDATE_INTERVAL = 60  # seconds

# aranetctl arguments
SCAN_ARGUMENT = "--scan"

# Output format
BOUNDARY_MARKER = "="
STATUSES = ("GREEN", "ORANGE", "RED")
STATUS_UNKNOWN = 0

UNIT_CELSIUS = "celsius"
UNIT_FAHRENHEIT = "fahrenheit"

# Device info (aranetctl does not report these)
DEFAULT_MANUFACTURER = "DEFAULT_MANUFACTURER"
DEFAULT_MODEL = "DEFAULT_MODEL"
DEFAULT_SERIAL = "DEFAULT_SERIAL"
DEFAULT_HARDWARE_REV = "DEFAULT_HARDWARE_REV"
DEFAULT_FIRMWARE_REV = "DEFAULT_FIRMWARE_REV"
DEFAULT_SOFTWARE_REV = "DEFAULT_SOFTWARE_REV"
