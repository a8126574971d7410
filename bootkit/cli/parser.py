"""
BootKit CLI argument parser.

This module implements the command-line interface for BootKit using argparse.
Invoked without arguments, BootKit runs the bootstrap plan for the current
directory.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from bootkit import __version__
from bootkit.cli.utils import exit_code_for, print_error
from bootkit.config.settings import INSTALL_OPTIONAL_ENV
from bootkit.core.exceptions import BootKitError

logger = logging.getLogger(__name__)


class CLI:
    """BootKit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="bootkit",
            description="BootKit - bootstrap a development checkout",
            epilog=(
                f"Environment:\n  {INSTALL_OPTIONAL_ENV}  unset: ask, "
                "'1': install the optional CLI, other: skip it"
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "--version", action="version", version=f"BootKit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to plan file (default: ./bootkit.yaml, else built-in plan)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            help="Project root directory (default: current directory)",
        )

        mode = parser.add_mutually_exclusive_group()
        mode.add_argument(
            "--dry-run",
            action="store_true",
            help="Print commands instead of running them",
        )
        mode.add_argument(
            "--list-steps",
            action="store_true",
            help="List the steps of the plan and exit",
        )
        mode.add_argument(
            "--check",
            action="store_true",
            help="Check required tools and step directories and exit",
        )

        parser.add_argument(
            "--strict-env",
            action="store_true",
            help=f"Reject {INSTALL_OPTIONAL_ENV} values other than '1' and '0'",
        )
        parser.add_argument(
            "--lock-timeout",
            type=float,
            default=10.0,
            metavar="SECONDS",
            help="Wait at most SECONDS for another run on this project (default: 10)",
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except BootKitError as e:
            logger.debug(f"Error: {e}", exc_info=parsed_args.verbose)
            print_error(str(e))
            return exit_code_for(e)

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to the doctor check or the bootstrap run.

        Args:
            args: Parsed arguments

        Returns:
            Exit code from command handler
        """
        if args.check:
            from bootkit.cli.commands import doctor

            return doctor.run(args)

        from bootkit.cli.commands import run

        return run.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
