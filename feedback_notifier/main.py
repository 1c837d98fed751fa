"""
Main entry point for the Bodhi feedback notifier.
"""

import argparse
import sys
from typing import List, Optional

import yaml

from . import __version__
from .orchestrator import RunOrchestrator
from .services.config_manager import ConfigurationManager
from .utils.error_handling import NotifierError
from .utils.logging import default_log_dir, get_logger, setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog="bodhi-feedback-notifier",
        description=(
            "Notify about updates in Fedora updates-testing that touch installed "
            "packages and still need your feedback."
        ),
    )
    parser.add_argument(
        "-c",
        "--config",
        help="configuration file (default: ~/.config/fedora.toml)",
    )
    parser.add_argument(
        "-r",
        "--release",
        help="Bodhi release to check, e.g. F40 (default: detected with rpm)",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="print notifications instead of showing them",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    parser.add_argument(
        "--log-dir",
        help=f"directory for the log file (default: {default_log_dir()})",
    )
    parser.add_argument(
        "--no-log-file", action="store_true", help="log to stderr only"
    )
    parser.add_argument(
        "--print-config-template",
        action="store_true",
        help="print an example configuration file and exit",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    if args.print_config_template:
        sys.stdout.write(
            yaml.safe_dump(ConfigurationManager.get_config_template(), sort_keys=False)
        )
        return 0

    log_dir = None if args.no_log_file else (args.log_dir or default_log_dir())
    try:
        setup_logging(log_dir=log_dir, log_level="DEBUG" if args.verbose else "INFO")
    except OSError as e:
        print(f"Unable to open log directory {log_dir}: {e}", file=sys.stderr)
        setup_logging(log_level="DEBUG" if args.verbose else "INFO")
    logger = get_logger("main")

    logger.debug("Starting Bodhi feedback notifier", extra={"config_path": args.config})

    try:
        orchestrator = RunOrchestrator(
            config_path=args.config,
            release=args.release,
            dry_run=args.dry_run,
            verbose=args.verbose,
        )
        orchestrator.run()

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    except NotifierError as e:
        logger.error(
            "Run aborted",
            extra={"error": str(e), "category": e.category.value},
        )
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
