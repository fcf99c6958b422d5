"""
SRT Constants

This module consolidates all global constants and environment configuration
used throughout the codebase. Constants are organized by category for easy
reference and maintenance.
"""
from dotenv import dotenv_values

# =============================================================================
# ENVIRONMENT CONFIGURATION
# =============================================================================
# Load environment variables once at module import
_config = dotenv_values(".env")

LOGGER_DEFAULTS = {
    'LOG_LEVEL':                       'INFO',
    'LOG_FORMAT':                      '%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    'LOG_DATE_FORMAT':                 '%Y-%m-%dT%H:%M:%S',
    'LOG_CONSOLE_HIGHLIGHTING':        'True',
    'LOG_FILE_OUTPUT':                 'False',
}

LOG_MAX_FILE_SIZE = 10 * 1024 * 1024 # 10MB
LOG_BACKUP_COUNT = 5


# WARNING: THE RESTRICTION CODES AND MESSAGES BELOW ARE PART OF THE PUBLIC CONTRACT. INTEGRATORS
# BRANCH ON THE NUMERIC CODE, SO NEVER RENUMBER AN EXISTING CODE WITHOUT A MIGRATION NOTE.

# ==================================================================================
# TOKEN PARAMETERS
# ==================================================================================
SRT_VERSION = '1.0.0'
SRT_DEFAULT_DECIMALS = 18
SRT_MAX_DECIMALS = 18
SRT_MAX_SUPPLY = 2 ** 256 - 1  # uint256 ceiling, in base units
SRT_MAX_BATCH_SIZE = 256


# ==================================================================================
# ADDRESSES
# ==================================================================================
ADDRESS_LENGTH = 20  # bytes
ZERO_ADDRESS = '0x' + '00' * ADDRESS_LENGTH


# ==================================================================================
# RESTRICTION CODES
# ==================================================================================
RESTRICTION_CODE_MAX = 255  # codes are uint8

SUCCESS_CODE = 0
ZERO_ADDRESS_RESTRICTION_CODE = 1

SUCCESS_MESSAGE = 'SUCCESS'
ZERO_ADDRESS_RESTRICTION_MESSAGE = 'ILLEGAL_TRANSFER_TO_ZERO_ADDRESS'
UNKNOWN_RESTRICTION_MESSAGE = 'UNKNOWN'


# ==================================================================================
# CONFIGURATION WRAPPERS
# ==================================================================================
class ConfigString(str):
    """
    String setting that remembers its built-in default.
    """
    def __new__(cls, value, default):
        obj = str.__new__(cls, value)
        obj._default = default
        return obj

    def default(self):
        return self._default

class ConfigBool(int):
    """
    Boolean setting that remembers its built-in default.
    """
    def __new__(cls, value, default):
        obj = int.__new__(cls, bool(value))
        obj._default = default
        return obj

    def default(self):
        return self._default


# ==================================================================================
# DYNAMIC CONFIGURATION LOADING
# ==================================================================================
_BOOL_LITERALS = {"true": True, "false": False}

def parse_bool(v):
    """
    Map "True"/"False" (any casing, surrounding whitespace ignored) to bool.
    Anything else is returned unchanged.
    """
    if not isinstance(v, str):
        return v
    return _BOOL_LITERALS.get(v.strip().casefold(), v)

def _setting(key, default_raw):
    # dotenv_values yields None for keys without a value
    raw = _config.get(key)
    raw = default_raw if raw is None else raw
    if isinstance(parse_bool(default_raw), bool):
        return ConfigBool(parse_bool(raw) is True, parse_bool(default_raw))
    return ConfigString(raw, default_raw)

globals().update({key: _setting(key, raw) for key, raw in LOGGER_DEFAULTS.items()})
