"""Command-Line Interface handler for srtkit."""

import argparse
import logging
import sys
from typing import List, Optional

from .config_loader import ConfigLoader, DEFAULT_CONFIG
from .log_setup import setup_logging
from .toolkit import SrtToolkit
from .exceptions import SrtKitError, ConfigurationError

logger = logging.getLogger(__name__) # Get logger for this module

class CLIHandler:
    """Parses arguments and runs the SRT toolkit on a single file."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Creates the argument parser for the CLI."""
        parser = argparse.ArgumentParser(
            description="srtkit: Renumber, validate and repair an SRT file and substitute {{variables}}.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter # Show defaults in help
        )
        parser.add_argument(
            "input",
            help="Path to the input SRT file."
        )
        parser.add_argument(
            "-o", "--output",
            default=None,
            help="Path for the formatted output file. Defaults to overwriting the input."
        )
        parser.add_argument(
            "-v", "--variables",
            default=None,
            help="Path to a JSON file containing variable definitions. Created if missing."
        )
        parser.add_argument(
            "-c", "--config",
            default=None,
            help="Path to the configuration YAML file. Built-in defaults are used when omitted."
        )
        parser.add_argument(
            "--log-level",
            default="WARNING",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Set the logging level for console and file output."
        )
        return parser

    def _load_config(self, config_path: Optional[str]) -> dict:
        if not config_path:
            return dict(DEFAULT_CONFIG)
        return ConfigLoader().load_config(config_path)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Parses arguments, sets up logging, loads config, and processes the file.

        Returns:
            Process exit code: 0 on success (diagnostics in the document do not
            count as failure), 1 for known errors, 2 for unexpected ones.
        """
        args = self.parser.parse_args(argv)

        log_level = getattr(logging, args.log_level.upper(), logging.WARNING)
        # Console only until the config tells us where the log file goes
        setup_logging(log_level=log_level, log_dir=None)

        try:
            config = self._load_config(args.config)
        except (ConfigurationError, FileNotFoundError) as e:
            logger.critical(f"Failed to load configuration from {args.config}: {e}")
            return 1

        setup_logging(
            log_level=log_level,
            log_dir=config.get('log_dir'),
            log_file=config.get('log_file', 'srtkit.log'),
        )

        try:
            toolkit = SrtToolkit(config)
            report = toolkit.process_file(
                args.input,
                output_path=args.output,
                variables_path=args.variables,
            )
        except FileNotFoundError as e:
            logger.critical(str(e))
            return 1
        except SrtKitError as e:
            logger.error(f"An srtkit error occurred: {e}")
            return 1
        except KeyboardInterrupt:
            logger.warning("Process interrupted by user (Ctrl+C). Exiting.")
            return 1
        except Exception as e:
            logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
            return 2

        for line in report.summary_lines():
            print(line)
        return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Console script entry point."""
    sys.exit(CLIHandler().run(argv))
