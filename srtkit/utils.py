"""Utility functions for srtkit."""

import os
import logging
import re
from typing import Optional
from .exceptions import FileSystemError

logger = logging.getLogger(__name__)

_LEADING_DIGITS_RE = re.compile(r"\s*([0-9]+)")

def ensure_dir_exists(dir_path: str) -> None:
    """
    Ensures that a directory exists. Creates it if it doesn't.

    Args:
        dir_path: The path to the directory.

    Raises:
        FileSystemError: If the directory cannot be created due to permissions
                         or if the path exists but is not a directory.
    """
    if not dir_path:
        raise ValueError("Directory path cannot be empty.")
    try:
        if not os.path.exists(dir_path):
            os.makedirs(dir_path)
            logger.info(f"Created directory: {dir_path}")
        elif not os.path.isdir(dir_path):
            raise FileSystemError(f"Path exists but is not a directory: {dir_path}")
    except OSError as e:
        logger.error(f"Error creating or accessing directory {dir_path}: {e}", exc_info=True)
        raise FileSystemError(f"Could not create or access directory {dir_path}: {e}") from e

def timecode_to_milliseconds(timecode: Optional[str]) -> Optional[int]:
    """
    Converts an SRT timecode (H:M:S,mmm) into milliseconds.

    Field widths and ranges are not checked, so "0:75:00,000" is 75 minutes.
    Each field is read from its leading digits, so trailing text such as
    "00:00:02,000 X1:40 X2:600" still converts (to 2000).

    Args:
        timecode: Timecode text, e.g. "00:01:05,250".

    Returns:
        The offset in milliseconds, or None if the text is not a usable timecode.
    """
    if not timecode:
        return None
    parts = timecode.split(':')
    if len(parts) < 3:
        return None
    seconds_and_millis = parts[2].split(',')
    if len(seconds_and_millis) < 2:
        return None

    values = []
    for field in (parts[0], parts[1], seconds_and_millis[0], seconds_and_millis[1]):
        match = _LEADING_DIGITS_RE.match(field)
        if match is None:
            return None
        values.append(int(match.group(1), 10))

    hours, minutes, seconds, milliseconds = values
    return (hours * 3600 + minutes * 60 + seconds) * 1000 + milliseconds
