"""Recognition of inline ``<reference>`` and ``<referencegroup>`` blocks."""
from __future__ import annotations

from typing import Optional, Tuple

from .nodes import ReferenceBlock
from .reference_parser import ReferenceDecoder, format_reference

REFERENCE_OPENER = "<reference "
REFERENCE_CLOSER = "</reference>"
GROUP_OPENER = "<referencegroup "
GROUP_CLOSER = "</referencegroup>"

ANCHOR_ATTR = "anchor="


def _closing_marker(data: str) -> Optional[str]:
    if data.startswith(REFERENCE_OPENER):
        return REFERENCE_CLOSER
    if data.startswith(GROUP_OPENER):
        return GROUP_CLOSER
    return None


def is_reference(data: str) -> Tuple[Optional[str], bool]:
    """Return the reference block at the start of ``data``, if there is one.

    The closing tag may be on a later line. The span runs from the opening
    tag through the end of the first closing tag.
    """
    closer = _closing_marker(data)
    if closer is None:
        return None, False

    end = data.find(closer, len(closer))
    if end < 0:
        return None, False
    end -= len(closer)
    # end is relative to the search offset.
    if end > len(data) or end == 0:
        return None, False
    return data[: end + 2 * len(closer)], True


def anchor_from_reference(data: str) -> Optional[str]:
    """Return the value of the first ``anchor=`` attribute of a reference block."""
    if _closing_marker(data) is None:
        return None

    anchor = data.find(ANCHOR_ATTR)
    if anchor < 0:
        return None

    beg = anchor + len(ANCHOR_ATTR)
    if beg >= len(data):
        return None
    quote = data[beg]

    end = data.find(quote, beg + 1)
    if end < 0:
        return None
    return data[beg + 1 : end]


def reference_hook(
    data: str, decoder: Optional[ReferenceDecoder] = None, reformat: bool = True
) -> Tuple[Optional[ReferenceBlock], int]:
    """Build a :class:`ReferenceBlock` from the start of ``data``.

    Returns the node and the number of characters consumed, or ``(None, 0)``.
    """
    span, ok = is_reference(data)
    if not ok:
        return None, 0
    literal = format_reference(span, decoder) if reformat else span
    return ReferenceBlock(literal=literal), len(span)
