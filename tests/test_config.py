import sys

import pytest

from panopto_updater.config import (
    Config,
    default_config_path,
    load_config,
    parse_config_lines,
    runtime_path,
    validate_timeouts,
)
from panopto_updater.errors import ConfigurationError


def test_parse_skips_comments_and_blank_lines():
    lines = [
        "# comment\n",
        "\n",
        "   \n",
        "  # indented comment\n",
        "RECORDER_VERSION=12.0.4.00087\n",
    ]
    assert parse_config_lines(lines) == {"RECORDER_VERSION": "12.0.4.00087"}


def test_parse_splits_on_first_equals_and_trims():
    values = parse_config_lines(["  RECORDER_URL =  https://host/get?file=Recorder.exe&x=1  \n"])
    assert values == {"RECORDER_URL": "https://host/get?file=Recorder.exe&x=1"}


def test_parse_ignores_lines_without_equals_and_keeps_last_duplicate():
    values = parse_config_lines(["garbage\n", "A=1\n", "A=2\n"])
    assert values == {"A": "2"}


def test_load_config_reads_all_required_keys(write_config):
    path = write_config()
    config = load_config(path)

    assert isinstance(config, Config)
    assert config.source == path
    assert config["RECORDER_VERSION"] == "12.0.4.00087"
    assert config["REMOTE_RECORDER_PATH"] == r"C:\Program Files\Panopto\Remote Recorder\RemoteRecorder.exe"
    assert config.download_timeout is None
    assert config.install_timeout is None


def test_versions_are_not_coerced(write_config):
    config = load_config(write_config(RECORDER_VERSION="012.0.4.087"))
    assert config["RECORDER_VERSION"] == "012.0.4.087"


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_config(tmp_path / "nope.txt")


@pytest.mark.parametrize("missing", ["RECORDER_VERSION", "REMOTE_RECORDER_URL", "REMOTE_RECORDER_PATH"])
def test_missing_required_key_raises(write_config, missing):
    path = write_config(**{missing: None})
    with pytest.raises(ConfigurationError) as excinfo:
        load_config(path)
    assert missing in str(excinfo.value)


def test_all_missing_keys_are_reported(write_config):
    path = write_config(RECORDER_URL=None, RECORDER_PATH=None)
    with pytest.raises(ConfigurationError) as excinfo:
        load_config(path)
    assert "RECORDER_URL" in str(excinfo.value)
    assert "RECORDER_PATH" in str(excinfo.value)


def test_commented_out_key_counts_as_missing(write_config):
    path = write_config(RECORDER_VERSION=None, header="#RECORDER_VERSION=12.0.4.00087\n")
    with pytest.raises(ConfigurationError, match="RECORDER_VERSION"):
        load_config(path)


def test_timeouts_are_parsed(write_config):
    config = load_config(write_config(DOWNLOAD_TIMEOUT="600", INSTALL_TIMEOUT="1800.5"))
    assert config.download_timeout == 600.0
    assert config.install_timeout == 1800.5


@pytest.mark.parametrize("value", ["soon", "0", "-5"])
def test_invalid_timeout_raises(write_config, value):
    with pytest.raises(ConfigurationError, match="DOWNLOAD_TIMEOUT"):
        load_config(write_config(DOWNLOAD_TIMEOUT=value))


def test_default_config_is_read_from_working_directory(write_config, tmp_path, monkeypatch):
    path = write_config()
    monkeypatch.chdir(tmp_path)

    assert runtime_path() == tmp_path.resolve()
    assert default_config_path() == path.resolve()
    assert load_config().source == path.resolve()


def test_bundled_executable_reads_config_beside_itself(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "executable", str(tmp_path / "PanoptoUpdater.exe"))

    assert default_config_path() == tmp_path / "updater_config.txt"


def test_validate_timeouts_checks_install_timeout_too():
    validate_timeouts({"DOWNLOAD_TIMEOUT": "60"})
    with pytest.raises(ConfigurationError, match="INSTALL_TIMEOUT"):
        validate_timeouts({"DOWNLOAD_TIMEOUT": "60", "INSTALL_TIMEOUT": "never"})
