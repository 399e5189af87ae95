"""Handles serializing normalized segments into SRT text and files."""

import logging
import os
from abc import ABC, abstractmethod
from typing import List

from .models import Segment
from .exceptions import FormattingError
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__)

class SubtitleFormatter(ABC):
    """Abstract base class for subtitle formatters."""

    @abstractmethod
    def format_segments(self, segments: List[Segment]) -> str:
        """
        Renders segments as subtitle document text.

        Args:
            segments: Segments in output order.

        Returns:
            The document text.
        """
        pass


class SRTFormatter(SubtitleFormatter):
    """
    Formats segments into SubRip text.

    Each block is the index, the timecode line and the content, and blocks
    are separated by exactly one blank line. There is no trailing newline.
    Timecode text is written as resolved, even if it is still invalid.
    """

    def format_segment(self, segment: Segment) -> str:
        return f"{segment.index}\n{segment.timecode}\n{segment.content}"

    def format_segments(self, segments: List[Segment]) -> str:
        return "\n\n".join(self.format_segment(segment) for segment in segments)


def write_text(text: str, output_path: str, encoding: str = 'utf-8') -> None:
    """Writes already formatted subtitle text, creating the parent directory if needed."""
    parent = os.path.dirname(output_path)
    if parent:
        ensure_dir_exists(parent)
    try:
        # newline='' keeps \n line endings on every platform
        with open(output_path, 'w', encoding=encoding, newline='') as f:
            f.write(text)
    except (IOError, UnicodeEncodeError) as e:
        logger.error(f"Failed to write SRT file to {output_path}: {e}", exc_info=True)
        raise FormattingError(f"Could not write SRT file: {e}") from e
