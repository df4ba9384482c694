import ntpath
import shutil
import sys
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

from . import __version__
from .config import load_config
from .downloader import download_file
from .errors import CleanupError
from .installer import run_installer
from .log import close_logging, setup_logging
from .system import run_pre_flight_checks, warn_if_running
from .versions import display_version, get_installed_version

TEMP_DIR_PREFIX = "PanoptoUpdate_"

# --- Outcomes ---
UP_TO_DATE = "up_to_date"
DOWNLOAD_FAILED = "download_failed"
INSTALLED = "installed"
INSTALL_FAILED = "install_failed"
ERROR = "error"


@dataclass(frozen=True)
class Product:
    """A product this tool keeps up to date, and where its settings live in the config."""
    name: str
    key_prefix: str
    installer_stem: str

    @property
    def version_key(self):
        return f"{self.key_prefix}_VERSION"

    @property
    def url_key(self):
        return f"{self.key_prefix}_URL"

    @property
    def path_key(self):
        return f"{self.key_prefix}_PATH"


PRODUCTS = (
    Product("Panopto Recorder", "RECORDER", "PanoptoRecorder"),
    Product("Panopto Remote Recorder", "REMOTE_RECORDER", "PanoptoRemoteRecorder"),
)


@dataclass
class ProductCheck:
    """What happened to one product during one run."""
    product: Product
    required_version: str
    installed_version: str = None
    installer_path: Path = None
    outcome: str = None


@dataclass
class RunContext:
    config: dict
    logger: object
    temp_dir: Path


def installer_path_for(product, url, temp_dir):
    """
    Returns where the product's installer is downloaded to. The extension comes
    from the URL so MSI packages keep their '.msi' suffix; '.exe' otherwise.
    """
    suffix = PurePosixPath(urlparse(url).path).suffix or ".exe"
    return Path(temp_dir) / f"{product.installer_stem}{suffix}"


def update_product(product, context):
    """
    Checks one product's installed version and updates it if it differs.

    Versions are compared as exact strings. A missing executable or unreadable
    version counts as a mismatch. Download and install failures are logged and
    recorded in the returned check; they never raise.

    Args:
        product (Product): The product to check.
        context (RunContext): The run's configuration, logger and temp directory.

    Returns:
        ProductCheck: The result of the check and any update attempt.
    """
    config, logger = context.config, context.logger
    check = ProductCheck(product=product, required_version=config[product.version_key])

    logger.info(f"Checking {product.name}...")
    exe_path = config[product.path_key]
    check.installed_version = get_installed_version(exe_path, logger)
    logger.info(f"{product.name} installed version: {display_version(check.installed_version)}")
    logger.info(f"{product.name} required version: {check.required_version}")

    if check.installed_version == check.required_version:
        logger.info(f"{product.name} is up to date")
        check.outcome = UP_TO_DATE
        return check

    logger.warning(
        f"{product.name} version mismatch. "
        f"Installed: {display_version(check.installed_version)}, Required: {check.required_version}"
    )

    warn_if_running(ntpath.basename(exe_path), product.name, logger)

    url = config[product.url_key]
    installer_path = installer_path_for(product, url, context.temp_dir)
    if not download_file(url, installer_path, logger, timeout=config.download_timeout):
        logger.error(f"Skipping installation of {product.name} because the download failed.")
        check.outcome = DOWNLOAD_FAILED
        return check
    check.installer_path = installer_path

    if run_installer(installer_path, product.name, logger, timeout=config.install_timeout):
        check.outcome = INSTALLED
    else:
        check.outcome = INSTALL_FAILED
    return check


def log_summary(checks, logger):
    """Logs which products were updated, were already current, or failed."""
    def names(outcomes):
        return [check.product.name for check in checks if check.outcome in outcomes]

    logger.info("==== Update Summary ====")
    updated = names((INSTALLED,))
    current = names((UP_TO_DATE,))
    failed = names((DOWNLOAD_FAILED, INSTALL_FAILED, ERROR))
    if updated:
        logger.info(f"Updated: {', '.join(updated)}")
    if current:
        logger.info(f"Already up to date: {', '.join(current)}")
    if failed:
        logger.error(f"The following updates failed: {', '.join(failed)}")
    else:
        logger.info("All products are at the required version.")


def remove_temp_dir(temp_dir):
    """
    Removes the run's temporary directory. A directory that is already gone is fine.

    Raises:
        CleanupError: If the directory exists but cannot be removed.
    """
    temp_dir = Path(temp_dir)
    if not temp_dir.exists():
        return
    try:
        shutil.rmtree(temp_dir)
    except OSError as e:
        raise CleanupError(f"Failed to remove temporary directory {temp_dir}: {e}") from e


def run(config_path=None, log_dir=None):
    """
    Runs one complete update pass over every product.

    An unexpected error while updating one product is logged and the next
    product is still checked. Configuration errors and any other unexpected
    error abort the pass and give a non-zero exit code. The temporary
    directory is removed whatever happens; a failure to remove it is only a
    warning.

    Args:
        config_path (Path | str, optional): Overrides the default config file.
        log_dir (Path | str, optional): Overrides the default log directory.

    Returns:
        int: 0 if the pass completed, 1 if it was aborted.
    """
    started_at = datetime.now()
    try:
        logger, log_path = setup_logging(started_at, log_dir)
    except OSError as e:
        print(f"Fatal error: could not open the log file in {log_dir or 'the default log directory'}: {e}", file=sys.stderr)
        return 1

    temp_dir = None
    exit_code = 0
    try:
        logger.info(f"==== Panopto update check v{__version__} started at {started_at} ====")
        logger.info(f"Log file: {log_path}")

        temp_dir = Path(tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX))
        logger.debug(f"Temporary directory: {temp_dir}")

        config = load_config(config_path)
        logger.info(f"Loaded configuration from {config.source}")
        context = RunContext(config=config, logger=logger, temp_dir=temp_dir)

        run_pre_flight_checks(temp_dir, logger)

        checks = []
        for product in PRODUCTS:
            try:
                checks.append(update_product(product, context))
            except Exception as e:
                logger.error(f"Error updating {product.name}: {e}", exc_info=True)
                checks.append(ProductCheck(
                    product=product, required_version=config[product.version_key], outcome=ERROR
                ))
        log_summary(checks, logger)
    except KeyboardInterrupt:
        logger.warning("Update interrupted by user (Ctrl+C).")
        exit_code = 1
    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
        exit_code = 1
    finally:
        if temp_dir is not None:
            try:
                remove_temp_dir(temp_dir)
                logger.debug(f"Removed temporary directory {temp_dir}")
            except CleanupError as e:
                logger.warning(str(e))
        logger.info(f"==== Panopto update check finished with exit code {exit_code} ====")
        close_logging(logger)
    return exit_code
