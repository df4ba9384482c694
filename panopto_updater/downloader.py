from pathlib import Path

import requests

from .errors import DownloadError

CHUNK_SIZE = 8192


def _fetch(url, destination, timeout=None):
    """Streams `url` into `destination`, raising DownloadError on any HTTP failure."""
    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with open(destination, 'wb') as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
    except requests.RequestException as e:
        raise DownloadError(f"Request for {url} failed: {e}") from e


def download_file(url, destination, logger, timeout=None):
    """
    Downloads a file over HTTP(S) to a local path.

    The whole file is fetched synchronously. Failures are logged and turned
    into a False return so the caller can skip the installation; nothing is
    raised. No resume, partial-file cleanup or integrity check is done.

    Args:
        url (str): The file to download.
        destination (Path | str): Where to write it.
        logger (logging.Logger): The run's logger.
        timeout (float, optional): Network timeout in seconds. None waits forever.

    Returns:
        bool: True if the file was downloaded, False otherwise.
    """
    destination = Path(destination)
    logger.info(f"Downloading {url} to {destination}")
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        _fetch(url, destination, timeout=timeout)
    except (DownloadError, OSError) as e:
        logger.error(f"Failed to download {url}: {e}")
        return False
    logger.info(f"Download complete: {destination} ({destination.stat().st_size} bytes)")
    return True
