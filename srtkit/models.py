"""Data models for srtkit."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

@dataclass
class Segment:
    """A single subtitle block after normalization."""
    index: int
    timecode: str
    content: str

@dataclass
class NormalizationResult:
    """Segments in stream order plus the diagnostics raised while normalizing them."""
    segments: List[Segment] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

@dataclass(frozen=True)
class Placeholder:
    """Span of one {{name}} occurrence; start/end are string offsets, end exclusive."""
    start: int
    end: int
    name: str

@dataclass
class SubstitutionCounts:
    new_count: int = 0
    substituted_count: int = 0
    unhandled_count: int = 0

    def add(self, other: "SubstitutionCounts") -> None:
        self.new_count += other.new_count
        self.substituted_count += other.substituted_count
        self.unhandled_count += other.unhandled_count

@dataclass
class ProcessResult:
    """Everything the document processor hands back to its caller."""
    output_text: str
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    new_count: int = 0
    substituted_count: int = 0
    unhandled_count: int = 0
    variables: Optional[Dict[str, str]] = None
    segment_count: int = 0
