import os

from .errors import VersionReadError

NOT_INSTALLED = "Not Installed"


def _read_product_version(path):
    """
    Reads the ProductVersion string from a Windows executable's version resource.

    Raises:
        VersionReadError: If the file carries no ProductVersion string.
    """
    import win32api

    translations = win32api.GetFileVersionInfo(path, "\\VarFileInfo\\Translation")
    if not translations:
        raise VersionReadError(f"No version resource languages found in {path}")
    language, codepage = translations[0]
    key = f"\\StringFileInfo\\{language:04x}{codepage:04x}\\ProductVersion"
    version = win32api.GetFileVersionInfo(path, key)
    if not version or not str(version).strip():
        raise VersionReadError(f"No ProductVersion found in {path}")
    return str(version).strip()


def get_installed_version(path, logger):
    """
    Returns the installed product version of the executable at `path`.

    A missing executable is an expected case (the product is not installed),
    and a metadata read failure must never abort the run, so both are logged
    as warnings and reported as None.

    Args:
        path (str): The installed executable to inspect.
        logger (logging.Logger): The run's logger.

    Returns:
        str | None: The version string, or None if it could not be determined.
    """
    if not os.path.exists(path):
        logger.warning(f"Executable not found at: {path}")
        return None
    try:
        version = _read_product_version(path)
    except Exception as e:
        logger.warning(f"Could not read version information from {path}: {e}")
        return None
    logger.debug(f"Read product version '{version}' from {path}")
    return version


def display_version(version):
    return version if version is not None else NOT_INSTALLED
