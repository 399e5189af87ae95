"""Splits an SRT document into segments and repairs/validates their timing."""

import logging
import re
from typing import List, Optional, Tuple

from .models import NormalizationResult, Segment
from .utils import timecode_to_milliseconds

logger = logging.getLogger(__name__)

TIMECODE_SEPARATOR = " --> "
FULL_RANGE_RE = re.compile(r'\d{1,2}:\d{1,2}:\d{1,2},\d{3} --> \d{1,2}:\d{1,2}:\d{1,2},\d{3}')
SINGLE_TIMECODE_RE = re.compile(r'\d{1,2}:\d{1,2}:\d{1,2},\d{3}')
_BLANK_LINES_RE = re.compile(r'\n\n+')


def split_segments(document_text: str) -> List[List[str]]:
    """
    Splits raw SRT text into segments, each a list of lines.

    Line endings are normalized to \\n first. Blocks are separated by one or
    more blank lines; surrounding whitespace is stripped from each block and
    empty blocks are dropped.

    Args:
        document_text: The whole SRT document.

    Returns:
        Raw segments in stream order. Line 0 is the original index, line 1
        the timecode line, the rest is content.
    """
    text = document_text.replace('\r\n', '\n')
    blocks = (block.strip() for block in _BLANK_LINES_RE.split(text))
    return [block.split('\n') for block in blocks if block]


def _split_range(timecode_line: str) -> Tuple[str, Optional[str]]:
    parts = timecode_line.split(TIMECODE_SEPARATOR)
    end = parts[1] if len(parts) > 1 else None
    return parts[0], end


def _timecode_line(raw_segment: List[str]) -> str:
    return raw_segment[1] if len(raw_segment) > 1 else ""


def _repair_timecode(
    position: int,
    raw_segments: List[List[str]],
    original_line: str,
    errors: List[str],
    warnings: List[str],
) -> str:
    """Resolves a line that does not hold a full range. Returns the line to keep."""
    number = position + 1

    if not SINGLE_TIMECODE_RE.search(original_line.strip()):
        errors.append(f'Segment {number}: Invalid timecode format. Timecode: "{original_line}"')
        return original_line

    if position >= len(raw_segments) - 1:
        errors.append(
            f'Segment {number}: Missing an end time and it\'s the last segment. Timecode: "{original_line}"'
        )
        return original_line

    # Only ever borrow from the following segment; a lone timecode is taken as the start.
    next_start, _ = _split_range(_timecode_line(raw_segments[position + 1]))
    next_start = next_start.strip()
    if not next_start or timecode_to_milliseconds(next_start) is None:
        errors.append(
            f'Segment {number}: Invalid timecode "{original_line}" and the next segment\'s timecode is also invalid.'
        )
        return original_line

    repaired = f"{original_line.strip()}{TIMECODE_SEPARATOR}{next_start}"
    warnings.append(
        f'Segment {number}: Missing start or end time. Original: "{original_line}". Corrected to: "{repaired}"'
    )
    logger.debug(f"Segment {number}: repaired timecode {original_line!r} -> {repaired!r}")
    return repaired


def process_segments(raw_segments: List[List[str]]) -> NormalizationResult:
    """
    Validates, repairs and renumbers raw segments.

    Each segment's timecode line is checked for a full "start --> end" range.
    A line holding a single timecode is completed with the next segment's
    start time. Resolved ranges are then checked for start >= end and for
    overlap with the previous segment. Output indices are always position + 1.

    Nothing is raised for bad content: problems are returned as error and
    warning strings, and every segment is kept.

    Args:
        raw_segments: Segments as produced by split_segments().

    Returns:
        A NormalizationResult with the segments and their diagnostics.
    """
    result = NormalizationResult()
    previous_line = None  # type: Optional[str]

    for position, raw_segment in enumerate(raw_segments):
        number = position + 1
        original_line = _timecode_line(raw_segment)
        content = "\n".join(raw_segment[2:])

        timecode_line = original_line
        if not FULL_RANGE_RE.search(original_line):
            timecode_line = _repair_timecode(
                position, raw_segments, original_line, result.errors, result.warnings
            )

        start_text, end_text = _split_range(timecode_line)
        if start_text and end_text:
            start_ms = timecode_to_milliseconds(start_text)
            end_ms = timecode_to_milliseconds(end_text)

            if start_ms is not None and end_ms is not None and start_ms >= end_ms:
                result.errors.append(
                    f'Segment {number}: Invalid timecode (start >= end). Timecode: "{timecode_line}"'
                )

            if previous_line and start_ms is not None:
                _, previous_end = _split_range(previous_line)
                previous_end_ms = timecode_to_milliseconds(previous_end)
                if previous_end_ms is not None and previous_end_ms > start_ms:
                    result.warnings.append(
                        f"Segment {number}: Overlaps with the previous segment. "
                        f"Previous end time: {previous_end}, current start time: {start_text}"
                    )

        previous_line = timecode_line
        result.segments.append(Segment(index=number, timecode=timecode_line, content=content))

    logger.debug(
        f"Normalized {len(result.segments)} segments: "
        f"{len(result.errors)} errors, {len(result.warnings)} warnings"
    )
    return result
