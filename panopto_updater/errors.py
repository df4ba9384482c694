class UpdaterError(Exception):
    """Base class for all updater errors."""


class ConfigurationError(UpdaterError):
    """The configuration file is missing or incomplete. Aborts the run."""


class VersionReadError(UpdaterError):
    """The installed executable's version metadata could not be read."""


class DownloadError(UpdaterError):
    """An installer could not be downloaded."""


class InstallError(UpdaterError):
    """An installer could not be launched or exited with a non-zero code."""


class CleanupError(UpdaterError):
    """The per-run temporary directory could not be removed."""
