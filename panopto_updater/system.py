import ctypes
import os
import platform
import socket
import subprocess
import sys

import psutil

MIN_FREE_SPACE_GB = 2
CONNECTIVITY_HOST = ("www.panopto.com", 443)
CONNECTIVITY_TIMEOUT = 5

# --- Privilege Handling ---

def is_admin():
    """
    Checks if the process is running with administrator privileges.

    On Windows this asks the shell; elsewhere it checks for an effective uid of 0.

    Returns:
        bool: True if elevated, False otherwise.
    """
    try:
        if os.name == "nt":
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        return os.geteuid() == 0
    except Exception:
        return False


def can_elevate():
    """Only Windows offers a way to relaunch elevated (the UAC 'runas' verb)."""
    return os.name == "nt"


def relaunch_as_admin(argv):
    """
    Relaunches this program elevated through UAC with the same arguments.

    Args:
        argv (list[str]): The command-line arguments to pass on.

    Returns:
        bool: True if the elevated process was started.
    """
    if getattr(sys, 'frozen', False):
        params = subprocess.list2cmdline(argv)
    else:
        params = subprocess.list2cmdline(["-m", "panopto_updater", *argv])
    # ShellExecuteW returns a value greater than 32 on success
    result = ctypes.windll.shell32.ShellExecuteW(None, "runas", sys.executable, params, os.getcwd(), 1)
    return result > 32

# --- Pre-flight Checks ---

def has_free_space(path, required_gb=MIN_FREE_SPACE_GB):
    """Returns (enough, free_gb) for the drive holding `path`."""
    free_gb = psutil.disk_usage(str(path)).free / (1024**3)
    return free_gb >= required_gb, free_gb


def is_internet_available(host=CONNECTIVITY_HOST, timeout=CONNECTIVITY_TIMEOUT):
    try:
        with socket.create_connection(host, timeout=timeout):
            return True
    except OSError:
        return False


def run_pre_flight_checks(work_dir, logger):
    """
    Logs warnings for environment problems that are likely to make an update fail.

    None of these checks abort the run; each product's update still gets
    attempted and fails on its own if the environment really is broken.

    Args:
        work_dir (Path): The directory installers will be downloaded into.
        logger (logging.Logger): The run's logger.

    Returns:
        bool: True if every check passed.
    """
    logger.debug("--- Running Pre-flight System Checks ---")
    checks_passed = True

    if platform.system() != "Windows":
        logger.warning(f"Unsupported OS: Panopto installers require Windows, but found {platform.system()}.")
        checks_passed = False

    try:
        enough, free_gb = has_free_space(work_dir)
        logger.debug(f"Checking disk space for '{work_dir}': {free_gb:.2f} GB free.")
        if not enough:
            logger.warning(f"Low Disk Space: {free_gb:.2f} GB free, at least {MIN_FREE_SPACE_GB} GB is recommended.")
            checks_passed = False
    except OSError as e:
        logger.warning(f"Could not check disk space for {work_dir}: {e}")
        checks_passed = False

    logger.debug("Checking for internet connectivity...")
    if is_internet_available():
        logger.debug("Internet connection verified.")
    else:
        logger.warning("No internet connection. Installer downloads will likely fail.")
        checks_passed = False

    if checks_passed:
        logger.info("--- Pre-flight System Checks Passed ---")
    else:
        logger.warning("--- Pre-flight System Checks reported problems. Continuing anyway. ---")
    return checks_passed

# --- Running Processes ---

def is_process_running(process_name):
    """Returns True if a process with this executable name is running (case-insensitive)."""
    wanted = process_name.lower()
    for proc in psutil.process_iter(['name']):
        name = proc.info['name']
        if name and name.lower() == wanted:
            return True
    return False


def warn_if_running(process_name, display_name, logger):
    try:
        running = is_process_running(process_name)
    except psutil.Error as e:
        logger.debug(f"Could not scan running processes for '{process_name}': {e}")
        return False
    if running:
        logger.warning(f"Conflict: '{process_name}' is currently running. Installation of {display_name} may fail or require a restart.")
        return True
    return False
