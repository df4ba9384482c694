"""
Shared fixtures for the updater tests.
"""

import logging

import pytest

BASE_CONFIG = {
    "RECORDER_VERSION": "12.0.4.00087",
    "REMOTE_RECORDER_VERSION": "12.0.4.00087",
    "RECORDER_URL": "https://panopto.example.edu/Software/PanoptoRecorder.exe",
    "REMOTE_RECORDER_URL": "https://panopto.example.edu/Software/PanoptoRemoteRecorder.msi",
    "RECORDER_PATH": r"C:\Program Files\Panopto\Recorder\Recorder.exe",
    "REMOTE_RECORDER_PATH": r"C:\Program Files\Panopto\Remote Recorder\RemoteRecorder.exe",
}


@pytest.fixture
def write_config(tmp_path):
    """Returns a factory writing a config file; pass key=None to leave a key out."""
    def _write(name="updater_config.txt", header="# Panopto updater\n", **overrides):
        values = dict(BASE_CONFIG)
        values.update(overrides)
        lines = [header]
        for key, value in values.items():
            if value is not None:
                lines.append(f"{key}={value}\n")
        path = tmp_path / name
        path.write_text("".join(lines), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def logger():
    """A plain logger that propagates to the root so caplog sees every record."""
    log = logging.getLogger("tests.panopto_updater")
    log.setLevel(logging.DEBUG)
    return log
