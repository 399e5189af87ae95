"""Runs the SRT processor against files on disk and persists the variable table."""

import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from .exceptions import FileSystemError, SrtKitError, VariablesFileError
from .models import ProcessResult
from .srt_processor import process_srt
from .subtitle_formatter import write_text
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    """Outcome of processing one SRT file."""
    input_path: str
    output_path: str
    variables_path: Optional[str]
    result: ProcessResult

    def summary_lines(self) -> List[str]:
        """Human readable report, one console line per entry."""
        result = self.result
        lines = [f"Formatted SRT file saved to {self.output_path}"]
        if self.variables_path:
            lines.append(f"Updated variables file saved to {self.variables_path}")
            lines.append(
                f"Substituted {result.substituted_count} variables. "
                f"Added {result.new_count} new variables to JSON."
            )
            if result.unhandled_count > 0:
                lines.append("")
                lines.append("Warnings: there is unhandled variable placeholder in the output.")
        lines.append("")
        lines.append(f"Processed {result.segment_count} segments.")
        if result.errors:
            lines.append("")
            lines.append("Errors:")
            lines.extend(f"- {error}" for error in result.errors)
        if result.warnings:
            lines.append("")
            lines.append("Warnings:")
            lines.extend(f"- {warning}" for warning in result.warnings)
        return lines


class SrtToolkit:
    """
    Reads SRT files, normalizes them and writes the results back out.

    The variable table lives in a JSON object file. A missing file is treated
    as an empty table and is created when the results are saved.
    """

    def __init__(self, config: Optional[dict] = None):
        """
        Initializes the toolkit.

        Args:
            config: Configuration dictionary (see config_loader.DEFAULT_CONFIG).
        """
        config = config or {}
        self.encoding = config.get('encoding', 'utf-8')
        self.json_indent = config.get('json_indent', 2)
        self.default_variables_path = config.get('variables_file')

    def load_variables(self, variables_path: str) -> Dict[str, str]:
        """
        Loads the variable table from a JSON file.

        Raises:
            VariablesFileError: If the file cannot be read, is not valid JSON,
                or its root is not an object.
        """
        if not os.path.exists(variables_path):
            logger.info(f"Variables file not found, starting with an empty table: {variables_path}")
            return {}

        try:
            with open(variables_path, 'r', encoding='utf-8') as f:
                variables = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing variables file {variables_path}: {e}")
            raise VariablesFileError(f"Invalid JSON in variables file {variables_path}: {e}") from e
        except (IOError, UnicodeDecodeError) as e:
            logger.error(f"Error reading variables file {variables_path}: {e}", exc_info=True)
            raise VariablesFileError(f"Could not read variables file {variables_path}: {e}") from e

        if not isinstance(variables, dict):
            raise VariablesFileError(f"Variables file {variables_path} must contain a JSON object.")
        logger.info(f"Loaded {len(variables)} variables from {variables_path}")
        return variables

    def save_variables(self, variables_path: str, variables: Dict[str, str]) -> None:
        """Writes the variable table as pretty-printed JSON, keeping non-ASCII names readable."""
        parent = os.path.dirname(variables_path)
        try:
            if parent:
                ensure_dir_exists(parent)
            with open(variables_path, 'w', encoding='utf-8') as f:
                json.dump(variables, f, ensure_ascii=False, indent=self.json_indent)
        except (IOError, SrtKitError) as e:
            logger.error(f"Failed to write variables file {variables_path}: {e}", exc_info=True)
            raise VariablesFileError(f"Could not write variables file {variables_path}: {e}") from e
        logger.info(f"Saved {len(variables)} variables to {variables_path}")

    def read_document(self, input_path: str) -> str:
        if not os.path.isfile(input_path):
            raise FileNotFoundError(f"Input SRT file not found: {input_path}")
        try:
            with open(input_path, 'r', encoding=self.encoding, newline='') as f:
                return f.read()
        except (IOError, UnicodeDecodeError) as e:
            logger.error(f"Error reading SRT file {input_path}: {e}")
            raise FileSystemError(f"Could not read SRT file {input_path} as {self.encoding}: {e}") from e

    def process_file(
        self,
        input_path: str,
        output_path: Optional[str] = None,
        variables_path: Optional[str] = None,
        variables: Optional[Dict[str, str]] = None,
    ) -> FileReport:
        """
        Normalizes one SRT file.

        Args:
            input_path: The SRT file to read.
            output_path: Where to write the result. Defaults to overwriting the input.
            variables_path: JSON variable table to load, update and save.
                Defaults to the configured ``variables_file``.
            variables: An already loaded table to use instead of reading
                ``variables_path``. It is still saved to ``variables_path``.

        Returns:
            A FileReport describing what was written.

        Raises:
            FileNotFoundError: If the input file does not exist.
            FileSystemError: If the input file cannot be read or decoded.
            VariablesFileError: If the variables file is unusable.
            FormattingError: If the output cannot be written.
        """
        start_time = time.time()
        output_path = output_path or input_path
        variables_path = variables_path or self.default_variables_path
        logger.info(f"--- Processing SRT file: {input_path} ---")

        document_text = self.read_document(input_path)
        if variables is None and variables_path:
            variables = self.load_variables(variables_path)

        result = process_srt(document_text, variables)

        write_text(result.output_text, output_path, encoding=self.encoding)
        logger.info(f"Formatted SRT written to {output_path}")
        if variables_path and result.variables is not None:
            self.save_variables(variables_path, result.variables)

        for error in result.errors:
            logger.debug(f"{input_path}: {error}")
        for warning in result.warnings:
            logger.debug(f"{input_path}: {warning}")

        logger.info(f"--- Finished {input_path} in {time.time() - start_time:.2f} seconds ---")
        return FileReport(
            input_path=input_path,
            output_path=output_path,
            variables_path=variables_path,
            result=result,
        )
