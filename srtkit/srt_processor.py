"""Document-level SRT normalization: split, validate, substitute, serialize."""

import logging
from typing import Dict, Optional

from .models import ProcessResult
from .segment_normalizer import process_segments, split_segments
from .subtitle_formatter import SRTFormatter, SubtitleFormatter
from .variable_substitution import substitute

logger = logging.getLogger(__name__)


def process_srt(
    document_text: str,
    variables: Optional[Dict[str, str]] = None,
    formatter: Optional[SubtitleFormatter] = None,
) -> ProcessResult:
    """
    Normalizes a whole SRT document.

    Segments are renumbered, their timecodes repaired and validated, and
    ``{{name}}`` placeholders substituted from ``variables`` when a table is
    given. Problems in the document never raise; they are reported in
    ``errors`` and ``warnings`` and the offending segment is still written.

    Args:
        document_text: The SRT document, any line-ending convention.
        variables: Name -> value table. Mutated in place with newly found
            names. None disables substitution.
        formatter: Serializer for the output text. Defaults to SRTFormatter.

    Returns:
        A ProcessResult with the output text, diagnostics, counts and the
        (possibly updated) variable table.
    """
    formatter = formatter or SRTFormatter()

    raw_segments = split_segments(document_text)
    normalized = process_segments(raw_segments)
    counts = substitute(normalized.segments, variables)

    output_text = formatter.format_segments(normalized.segments)
    logger.info(
        f"Processed {len(normalized.segments)} segments "
        f"({len(normalized.errors)} errors, {len(normalized.warnings)} warnings)"
    )

    return ProcessResult(
        output_text=output_text,
        errors=list(normalized.errors),
        warnings=list(normalized.warnings),
        new_count=counts.new_count,
        substituted_count=counts.substituted_count,
        unhandled_count=counts.unhandled_count,
        variables=variables,
        segment_count=len(normalized.segments),
    )
