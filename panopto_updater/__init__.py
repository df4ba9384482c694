"""
Checks the installed Panopto Recorder and Remote Recorder versions against the
versions named in the updater configuration, and silently installs the
configured installer for any product that does not match.
"""

__version__ = "1.0.0"
