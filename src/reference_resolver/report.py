"""Bibliography reporting utilities."""
from __future__ import annotations

from typing import List, Optional

from .app import ResolutionResult
from .nodes import Bibliography, BibliographyItem


def describe_item(item: BibliographyItem) -> str:
    if item.reference is not None:
        title = item.reference.front.title
        return f"decoded: {title}" if title else "decoded"
    if item.reference_group is not None:
        return "raw reference text"
    return "anchor only"


def render_report(result: ResolutionResult) -> str:
    """Return a human-readable summary of the resolved bibliography."""

    lines = ["Bibliography Report"]
    items = result.items
    lines.append(f"References resolved: {len(items)}")
    if not items:
        lines.append("No citations found.")
        return "\n".join(lines)

    lines.extend(_group_lines("Normative references", result.normative))
    lines.extend(_group_lines("Informative references", result.informative))
    if result.injected:
        lines.append("Bibliography inserted in back matter.")
    else:
        lines.append("Bibliography NOT inserted: no {backmatter} found.")
    return "\n".join(lines)


def _group_lines(label: str, group: Optional[Bibliography]) -> List[str]:
    if group is None:
        return []
    lines = [f"{label}: {len(group.children)}"]
    for item in group.children:
        if isinstance(item, BibliographyItem):
            lines.append(f"  [{item.anchor}] {describe_item(item)}")
    return lines
