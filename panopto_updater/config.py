import logging
import sys
from pathlib import Path

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# --- Global Constants and Paths ---

CONFIG_FILE_NAME = "updater_config.txt"

REQUIRED_KEYS = (
    "RECORDER_VERSION",
    "REMOTE_RECORDER_VERSION",
    "RECORDER_URL",
    "REMOTE_RECORDER_URL",
    "RECORDER_PATH",
    "REMOTE_RECORDER_PATH",
)

DOWNLOAD_TIMEOUT_KEY = "DOWNLOAD_TIMEOUT"
INSTALL_TIMEOUT_KEY = "INSTALL_TIMEOUT"


def runtime_path():
    """
    Returns the directory the updater works from: the folder holding the
    executable when bundled, otherwise the current working directory.
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    return Path.cwd()


def default_config_path():
    return runtime_path() / CONFIG_FILE_NAME


class Config(dict):
    """
    The parsed updater configuration. Every value is kept as the raw string
    read from the file; version strings are compared as-is, never parsed.
    """

    def __init__(self, values=None, source=None):
        super().__init__(values or {})
        self.source = source

    @property
    def download_timeout(self):
        return _parse_timeout(self, DOWNLOAD_TIMEOUT_KEY)

    @property
    def install_timeout(self):
        return _parse_timeout(self, INSTALL_TIMEOUT_KEY)


def _parse_timeout(values, key):
    """Returns the timeout in seconds for `key`, or None when it is not set."""
    raw = values.get(key)
    if raw is None or raw == "":
        return None
    try:
        seconds = float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number of seconds, got '{raw}'")
    if seconds <= 0:
        raise ConfigurationError(f"{key} must be greater than zero, got '{raw}'")
    return seconds


def validate_timeouts(values):
    """Raises ConfigurationError if an optional timeout is set to something unusable."""
    for key in (DOWNLOAD_TIMEOUT_KEY, INSTALL_TIMEOUT_KEY):
        _parse_timeout(values, key)


def parse_config_lines(lines):
    """
    Parses `KEY=VALUE` lines into a dictionary.

    Blank lines and lines starting with '#' are skipped. Each remaining line is
    split on the first '=' only, so values may themselves contain '=' (URLs with
    query strings). Keys and values are stripped of surrounding whitespace.

    Args:
        lines (iterable[str]): The raw lines of the configuration file.

    Returns:
        dict: The parsed key/value pairs. A repeated key keeps its last value.
    """
    values = {}
    for number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            logger.debug(f"Ignoring configuration line {number} without '=': {line}")
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip()
    return values


def load_config(config_path=None):
    """
    Loads and validates the updater configuration file.

    Args:
        config_path (Path | str, optional): The file to read. Defaults to
            updater_config.txt in the runtime directory.

    Returns:
        Config: The validated configuration.

    Raises:
        ConfigurationError: If the file does not exist, any required key is
            missing, or an optional timeout is not a positive number.
    """
    path = Path(config_path) if config_path else default_config_path()
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found at: {path}")

    with open(path, 'r', encoding='utf-8-sig') as f:
        values = parse_config_lines(f)

    missing = [key for key in REQUIRED_KEYS if key not in values]
    if missing:
        raise ConfigurationError(
            f"Configuration file {path} is missing required keys: {', '.join(missing)}"
        )

    validate_timeouts(values)
    return Config(values, source=path)
