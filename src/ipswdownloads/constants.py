"""
Constants and configuration values for ipswdownloads.

This module contains the default service location, timeouts, environment
variable names and logging formats used throughout the package.
"""

# Service location
DEFAULT_SERVER_URL = "https://api.ipsw.me/v4"
DEVICE_PATH_TEMPLATE = "/device/{identifier}"
FIRMWARES_FOR_DEVICE_OPERATION = "firmwaresForDevice"

# Network settings (in seconds)
DEFAULT_REQUEST_TIMEOUT = 30
DEFAULT_CONNECTOR_LIMIT = 10

HTTP_STATUS_OK = 200
HTTP_STATUS_RETRY_THRESHOLD = 500
ERROR_BODY_EXCERPT_LENGTH = 200

# Configuration file names
APP_NAME = "ipswdownloads"
CONFIG_FILE_NAME = "ipswdownloads.yaml"

# Environment variable names
LOG_LEVEL_ENV_VAR = "IPSWDOWNLOADS_LOG_LEVEL"
SERVER_URL_ENV_VAR = "IPSWDOWNLOADS_SERVER_URL"
TIMEOUT_ENV_VAR = "IPSWDOWNLOADS_TIMEOUT"

# Logging configuration
LOGGER_NAME = "ipswdownloads"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
