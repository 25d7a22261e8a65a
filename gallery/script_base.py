#!/usr/bin/env python3
"""
Script Base - Common infrastructure for CLI scripts

Provides a base class that handles:
- Logging configuration (stdout + file)
- Argument parsing with common options
- Header/summary printing with consistent formatting
- Exception handling and exit codes

Usage:
    from script_base import ScriptBase, run_script

    def main(argv=None):
        script = ScriptBase(
            name="my_script",
            description="Does something useful",
            epilog="Examples:\\n  python my_script.py 2024"
        )

        script.add_dry_run_arg()    # --dry-run
        script.add_debug_arg()      # --debug

        script.parser.add_argument('year')
        args = script.parse_args(argv)

        script.print_header(settings={"Year": args.year}, modes={"DRY RUN": args.dry_run})
        stats = do_something(args)
        script.print_summary(stats)

        return True

    if __name__ == "__main__":
        run_script(main)
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import Callable, Optional


class ScriptBase:
    """Base class providing common CLI script infrastructure."""

    def __init__(
        self,
        name: str,
        description: str,
        epilog: str = "",
        log_dir: Optional[Path] = None
    ):
        """
        Initialize the script base.

        Args:
            name: Script name (used for log file naming)
            description: Script description for --help
            epilog: Additional help text (examples, etc.)
            log_dir: Directory for log files (default: ./log)
        """
        self.name = name
        self.log_dir = Path(log_dir) if log_dir else Path('log')
        self.logger = self._setup_logging()
        self.parser = self._create_parser(description, epilog)

    def _setup_logging(self) -> logging.Logger:
        """Configure logging with stdout and file handlers."""
        self.log_dir.mkdir(parents=True, exist_ok=True)

        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(levelname)s - %(message)s',
            handlers=[
                logging.StreamHandler(sys.stdout),
                logging.FileHandler(self.log_dir / f'{self.name}.log', encoding='utf-8')
            ]
        )
        return logging.getLogger(self.name)

    def _create_parser(self, description: str, epilog: str) -> argparse.ArgumentParser:
        """Create the argument parser."""
        return argparse.ArgumentParser(
            prog=self.name.replace('_', '-'),
            description=description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=epilog
        )

    # =========================================================================
    # Common Arguments
    # =========================================================================

    def add_dry_run_arg(self):
        """Add --dry-run argument."""
        self.parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would happen without writing any files'
        )

    def add_debug_arg(self):
        """Add --debug argument."""
        self.parser.add_argument(
            '--debug',
            action='store_true',
            help='Enable debug logging'
        )

    def add_common_args(self):
        """Add all common arguments (dry-run, debug)."""
        self.add_dry_run_arg()
        self.add_debug_arg()

    # =========================================================================
    # Argument Parsing
    # =========================================================================

    def parse_args(self, args=None) -> argparse.Namespace:
        """
        Parse command line arguments and apply common settings.

        Args:
            args: Arguments to parse (default: sys.argv)

        Returns:
            Parsed arguments namespace
        """
        parsed = self.parser.parse_args(args)

        if getattr(parsed, 'debug', False):
            logging.getLogger().setLevel(logging.DEBUG)
            self.logger.debug("Debug logging enabled")

        return parsed

    # =========================================================================
    # Output Formatting
    # =========================================================================

    def print_header(self, settings: dict = None, modes: dict = None, title: str = None):
        """
        Print the run banner: title, the settings the run uses, active modes.

        Args:
            settings: Dict of label -> value shown as "Label: value" (e.g. year, entry source)
            modes: Dict of mode_name -> is_active (e.g., {"DRY RUN": True})
            title: Custom title (default: script name formatted)
        """
        title = title or self.name.replace('_', ' ').title()

        self.logger.info("=" * 80)
        self.logger.info(title)
        self.logger.info("=" * 80)

        for label, value in (settings or {}).items():
            self.logger.info(f"  {label}: {format_value(value)}")

        for mode_name, is_active in (modes or {}).items():
            if is_active:
                self.logger.info(f"*** {mode_name} MODE ***")

        self.logger.info("")

    def print_summary(self, stats: dict, title: str = "SUMMARY"):
        """
        Print the run's counters, one aligned line each.

        Args:
            stats: Dict of stat_name -> value (booleans print as yes/no)
            title: Summary section title
        """
        self.logger.info("")
        self.logger.info("=" * 80)
        self.logger.info(title)
        self.logger.info("=" * 80)

        if stats:
            width = max(len(str(k)) for k in stats.keys()) + 5
            for key, value in stats.items():
                display_key = key.replace('_', ' ').capitalize()
                self.logger.info(f"{display_key:<{width}} {format_value(value)}")

        self.logger.info("=" * 80)


def format_value(value) -> str:
    """Render a banner value: yes/no for flags, plain text otherwise"""
    if isinstance(value, bool):
        return 'yes' if value else 'no'
    if value is None:
        return '-'
    return str(value)


def run_script(main_func: Callable[[], bool]):
    """
    Run a script's main function with standard exception handling.

    Args:
        main_func: Function that returns True on success, False on failure
    """
    try:
        success = main_func()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\nCancelled by user")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", exc_info=True)
        sys.exit(1)
