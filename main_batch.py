#!/usr/bin/env python3
"""
srtkit Batch Processing Entry Point

Normalizes every .srt file in a directory, sharing one variable table across
all of them so names discovered in one file are saved once for the batch.
"""

import argparse
import logging
import os
import sys
import time
from typing import List, Optional

# Progress bar library
from tqdm import tqdm

from srtkit.config_loader import ConfigLoader, DEFAULT_CONFIG
from srtkit.log_setup import setup_logging
from srtkit.toolkit import SrtToolkit
from srtkit.exceptions import SrtKitError, ConfigurationError, FileSystemError
from srtkit.utils import ensure_dir_exists

logger = logging.getLogger(__name__)

def find_srt_files(input_dir: str) -> List[str]:
    """
    Finds all .srt files in the input directory, sorted by file name.

    Raises:
        FileNotFoundError: If the input directory doesn't exist.
        ValueError: If the input path is not a directory.
    """
    if not os.path.exists(input_dir):
        raise FileNotFoundError(f"Input directory not found: {input_dir}")
    if not os.path.isdir(input_dir):
        raise ValueError(f"Input path is not a directory: {input_dir}")

    logger.info(f"Scanning directory for SRT files: {input_dir}")
    files = []
    for filename in sorted(os.listdir(input_dir)):
        # Case-insensitive check for .srt extension
        filepath = os.path.join(input_dir, filename)
        if filename.lower().endswith(".srt") and os.path.isfile(filepath):
            files.append(filepath)
    logger.info(f"Found {len(files)} SRT files.")
    return files


def output_path_for(input_path: str, output_dir: Optional[str], suffix: str) -> str:
    """Builds the output path: same name (plus optional suffix) in output_dir or next to the input."""
    directory, filename = os.path.split(input_path)
    if suffix:
        base, ext = os.path.splitext(filename)
        filename = f"{base}{suffix}{ext}"
    return os.path.join(output_dir or directory, filename)


def run_batch_processing(argv: Optional[List[str]] = None) -> int:
    """Parses arguments, sets up, and runs the batch normalization. Returns the exit code."""
    parser = argparse.ArgumentParser(
        description="srtkit Batch: Normalize all SRT files in a directory.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "-i", "--input-dir",
        required=True,
        help="Directory containing the input SRT files."
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=None,
        help="Directory for the formatted files. Defaults to writing next to the inputs."
    )
    parser.add_argument(
        "-v", "--variables",
        default=None,
        help="Path to a JSON file containing variable definitions, shared by all files."
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to the configuration YAML file. Built-in defaults are used when omitted."
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level for console and file output."
    )

    args = parser.parse_args(argv)

    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    setup_logging(log_level=log_level, log_dir=None)

    try:
        config = ConfigLoader().load_config(args.config) if args.config else dict(DEFAULT_CONFIG)
    except (ConfigurationError, FileNotFoundError) as e:
        logger.critical(f"Failed to load configuration: {e}")
        return 1

    setup_logging(
        log_level=log_level,
        log_dir=config.get('log_dir'),
        log_file=config.get('log_file', 'srtkit_batch.log'),
    )

    try:
        srt_files = find_srt_files(args.input_dir)
    except (FileNotFoundError, ValueError) as e:
        logger.critical(f"Input directory error: {e}")
        return 1
    if not srt_files:
        logger.warning(f"No .srt files found in {args.input_dir}. Exiting.")
        return 0

    if args.output_dir:
        try:
            ensure_dir_exists(args.output_dir)
        except FileSystemError as e:
            logger.critical(f"Could not create output directory: {e}")
            return 1

    toolkit = SrtToolkit(config)
    variables_path = args.variables or config.get('variables_file')
    variables = None
    if variables_path:
        try:
            variables = toolkit.load_variables(variables_path)
        except SrtKitError as e:
            logger.critical(f"Failed to load variables: {e}")
            return 1

    suffix = config.get('output_suffix') or ''
    total_files = len(srt_files)
    files_processed = 0
    files_failed = 0
    files_with_errors = 0
    batch_start_time = time.time()

    logger.info(f"--- Starting batch normalization for {total_files} files ---")

    with tqdm(total=total_files, unit="file", desc="Starting Batch") as pbar:
        for srt_path in srt_files:
            srt_filename = os.path.basename(srt_path)
            pbar.set_description(f"Processing: {srt_filename[:30]}")
            try:
                report = toolkit.process_file(
                    srt_path,
                    output_path=output_path_for(srt_path, args.output_dir, suffix),
                    variables_path=variables_path,
                    variables=variables,
                )
                files_processed += 1
                if report.result.errors:
                    files_with_errors += 1
                    for error in report.result.errors:
                        logger.error(f"{srt_filename}: {error}")
                for warning in report.result.warnings:
                    logger.warning(f"{srt_filename}: {warning}")
            except (SrtKitError, FileNotFoundError) as e:
                logger.error(f"srtkit failed for '{srt_filename}': {e}")
                files_failed += 1
            except KeyboardInterrupt:
                logger.warning("Batch process interrupted by user (Ctrl+C). Exiting.")
                return 1
            except Exception as e:
                logger.error(f"An unexpected error occurred processing '{srt_filename}': {e}", exc_info=True)
                files_failed += 1
            finally:
                pbar.update(1)

    logger.info("--- Batch normalization finished ---")
    logger.info(f"Total time: {time.time() - batch_start_time:.2f} seconds")
    logger.info(f"Successfully processed: {files_processed}/{total_files} files ({files_with_errors} with timing errors)")
    logger.info(f"Failed: {files_failed}/{total_files} files")

    return 1 if files_failed > 0 else 0


if __name__ == "__main__":
    if sys.version_info < (3, 7):
        sys.stderr.write("srtkit requires Python 3.7 or later.\n")
        sys.exit(1)

    sys.exit(run_batch_processing())
