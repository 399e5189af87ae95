"""Template variable substitution for segment content.

Placeholders look like ``{{name}}``: two opening braces, one or more
characters other than ``}``, two closing braces. Names are not restricted to
ASCII. Unknown names are added to the variable table with an empty value so
the caller can persist them and fill them in for the next run.
"""

import json
import logging
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .models import Placeholder, Segment, SubstitutionCounts

logger = logging.getLogger(__name__)

OPEN = "{{"
CLOSE = "}}"


class Resolution(Enum):
    RESOLVED = "resolved"
    EMPTY = "empty"
    DISCOVERED = "discovered"


def iter_placeholders(text: str) -> Iterator[Placeholder]:
    """
    Yields placeholder spans in ``text`` from left to right.

    Matches never overlap: scanning resumes right after the closing braces
    of the previous match. The name may itself contain ``{``, so
    ``{{{a}}`` yields the name ``{a``.
    """
    position = 0
    length = len(text)
    while position < length:
        start = text.find(OPEN, position)
        if start == -1:
            return
        name_start = start + len(OPEN)
        name_end = text.find("}", name_start)
        if name_end == -1:
            return
        if name_end > name_start and text.startswith(CLOSE, name_end):
            end = name_end + len(CLOSE)
            yield Placeholder(start=start, end=end, name=text[name_start:name_end])
            position = end
        else:
            position = start + 1


def render_value(value) -> str:
    """Text for a table value. Strings pass through; other JSON values are written as JSON (true, 1, [1, 2])."""
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return json.dumps(value, ensure_ascii=False)


def resolve_or_register(variables: Dict[str, str], name: str) -> Tuple[Resolution, Optional[str]]:
    """
    Looks ``name`` up in ``variables``, registering it if it is missing.

    This is the only place the table is mutated: an unknown name is inserted
    with an empty string value.

    Returns:
        (Resolution.RESOLVED, value) for a name with a non-empty value,
        (Resolution.EMPTY, None) for a known name without a value,
        (Resolution.DISCOVERED, None) for a name that was just registered.
    """
    if name in variables:
        value = variables[name]
        if not value:
            return Resolution.EMPTY, None
        return Resolution.RESOLVED, render_value(value)

    variables[name] = ""
    logger.debug(f"Registered new variable: {name!r}")
    return Resolution.DISCOVERED, None


def substitute_text(text: str, variables: Dict[str, str]) -> Tuple[str, SubstitutionCounts]:
    """
    Replaces every resolvable placeholder in ``text``.

    Unresolved placeholders are left in the text literally.

    Returns:
        The rewritten text and the counts for this text alone.
    """
    counts = SubstitutionCounts()
    pieces = []  # type: List[str]
    last_end = 0

    for placeholder in iter_placeholders(text):
        resolution, value = resolve_or_register(variables, placeholder.name)
        pieces.append(text[last_end:placeholder.start])
        if resolution is Resolution.RESOLVED:
            pieces.append(value)
            counts.substituted_count += 1
        else:
            pieces.append(text[placeholder.start:placeholder.end])
            counts.unhandled_count += 1
            if resolution is Resolution.DISCOVERED:
                counts.new_count += 1
        last_end = placeholder.end

    pieces.append(text[last_end:])
    return "".join(pieces), counts


def substitute(segments: List[Segment], variables: Optional[Dict[str, str]]) -> SubstitutionCounts:
    """
    Substitutes variables in the content of each segment, in place.

    Args:
        segments: Normalized segments; their ``content`` is rewritten.
        variables: Name -> value table, updated with newly discovered names.
            None disables substitution entirely.

    Returns:
        Totals of new, substituted and unhandled placeholders.
    """
    totals = SubstitutionCounts()
    if variables is None:
        return totals

    for segment in segments:
        segment.content, counts = substitute_text(segment.content, variables)
        totals.add(counts)

    logger.info(
        f"Substituted {totals.substituted_count} placeholders, "
        f"{totals.new_count} new variables, {totals.unhandled_count} unhandled"
    )
    return totals
