import subprocess
from pathlib import Path

from .errors import InstallError

# Silent install, never restart the machine
SILENT_INSTALL_FLAGS = ("/quiet", "/norestart")


def build_install_command(installer_path):
    """
    Builds the command line for a silent install. MSI packages are handed to
    msiexec; anything else is executed directly.
    """
    installer_path = str(installer_path)
    if installer_path.lower().endswith('.msi'):
        return ["msiexec.exe", "/i", installer_path, *SILENT_INSTALL_FLAGS]
    return [installer_path, *SILENT_INSTALL_FLAGS]


def _execute(command, timeout=None):
    """
    Runs the installer and waits for it to exit.

    Raises:
        InstallError: If the installer cannot be launched, times out, or
            returns a non-zero exit code.
    """
    try:
        process = subprocess.run(
            command, capture_output=True, text=True, errors="replace", shell=False, timeout=timeout
        )
    except subprocess.TimeoutExpired as e:
        raise InstallError(f"Installer did not finish within {e.timeout} seconds") from e
    except OSError as e:
        raise InstallError(f"Failed to launch installer: {e}") from e

    if process.returncode != 0:
        detail = f"Installer exited with code {process.returncode}"
        if process.stderr and process.stderr.strip():
            detail += f"\n--- STDERR ---\n{process.stderr.strip()}\n--- END ---"
        raise InstallError(detail)
    return process


def run_installer(installer_path, display_name, logger, timeout=None):
    """
    Runs a downloaded installer silently and checks its exit code.

    Args:
        installer_path (Path | str): The downloaded installer.
        display_name (str): The product name used in log messages.
        logger (logging.Logger): The run's logger.
        timeout (float, optional): Seconds to wait for the installer. None waits forever.

    Returns:
        bool: True if the installer exited with code 0, False otherwise.
    """
    command = build_install_command(Path(installer_path))
    logger.info(f"Installing {display_name}: {' '.join(command)}")
    try:
        process = _execute(command, timeout=timeout)
    except InstallError as e:
        logger.error(f"Installation of {display_name} failed: {e}")
        return False

    logger.debug(f"Installer Return Code: {process.returncode}")
    if process.stdout and process.stdout.strip():
        logger.debug(f"Installer Stdout:\n--- START ---\n{process.stdout.strip()}\n--- END ---")
    logger.info(f"{display_name} installed successfully.")
    return True
