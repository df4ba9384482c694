import argparse
import sys
from pathlib import Path

from . import __version__
from .config import default_config_path
from .log import default_log_dir
from .system import can_elevate, is_admin, relaunch_as_admin
from .updater import run


def build_parser():
    p = argparse.ArgumentParser(
        prog="panopto-updater",
        description="Update Panopto Recorder and Remote Recorder to the configured versions",
    )
    p.add_argument("-c", "--config", type=str, help="Configuration file (default: updater_config.txt in the current directory)")
    p.add_argument("--log-dir", type=str, help="Directory for the run's log file (default: logs in the current directory)")
    p.add_argument("--no-elevate", action="store_true", help="Exit instead of relaunching as administrator")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def elevated_argv(args):
    """
    Arguments for the elevated copy. Paths are made absolute because the
    elevated process does not necessarily start in this working directory.
    """
    config = Path(args.config) if args.config else default_config_path()
    log_dir = Path(args.log_dir) if args.log_dir else default_log_dir()
    return ["-c", str(config.resolve()), "--log-dir", str(log_dir.resolve())]


def ensure_elevated(args):
    """
    Makes sure the updater runs with administrator rights.

    Returns None when already elevated and the run may go ahead, otherwise
    the exit code this process should finish with: 0 after handing off to an
    elevated copy of itself, 1 when elevation is refused or impossible.
    """
    if is_admin():
        return None
    if args.no_elevate or not can_elevate():
        print("Administrator privileges are required. Run the updater from an elevated prompt.", file=sys.stderr)
        return 1
    print("Not running as admin. Relaunching with elevated privileges...")
    try:
        started = relaunch_as_admin(elevated_argv(args))
    except Exception as e:
        print(f"Failed to relaunch as admin: {e}", file=sys.stderr)
        return 1
    if not started:
        print("Elevation was cancelled or refused.", file=sys.stderr)
        return 1
    return 0


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    args = build_parser().parse_args(argv)

    exit_code = ensure_elevated(args)
    if exit_code is not None:
        return exit_code
    return run(config_path=args.config, log_dir=args.log_dir)
