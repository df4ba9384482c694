import logging
import sys
from pathlib import Path

from .config import runtime_path

LOGGER_NAME = "panopto_updater"
LOG_DIR_NAME = "logs"
LOG_FILE_PREFIX = "PanoptoUpdate_"

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def default_log_dir():
    return runtime_path() / LOG_DIR_NAME


def log_file_path(log_dir, started_at):
    """Returns the per-run log file path, named after the run's start time."""
    return Path(log_dir) / f"{LOG_FILE_PREFIX}{started_at:%Y%m%d_%H%M%S}.log"


def setup_logging(started_at, log_dir=None):
    """
    Configures the run's logger to write to both a file and the console.

    The file receives every message from DEBUG up; the console mirrors INFO
    and higher. Each run gets its own file, opened for appending.

    Args:
        started_at (datetime): The run's start time, used to name the file.
        log_dir (Path | str, optional): Where to put the log file. Defaults to
            the logs folder in the runtime directory.

    Returns:
        tuple[logging.Logger, Path]: The configured logger and its log file.
    """
    log_dir = Path(log_dir) if log_dir else default_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_file_path(log_dir, started_at)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    close_logging(logger)

    # Create a file handler to write detailed DEBUG messages to the run's log
    file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)

    # Create a stream handler to show INFO messages and higher on the console
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setLevel(logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    file_handler.setFormatter(formatter)
    stream_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)
    return logger, log_path


def close_logging(logger):
    """Detaches and closes every handler on the logger."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
