"""Collection of citations and reference blocks from a document tree."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .models import CitationType
from .nodes import BibliographyItem, Citation, Node, ReferenceBlock, Title, WalkStatus, walk
from .reference_block import anchor_from_reference


def names_from_title(title: Optional[Title]) -> List[str]:
    """Return the full names of all authors, then all contacts, of ``title``."""
    if title is None or title.title_data is None:
        return []
    names = [author.fullname for author in title.title_data.author]
    names.extend(contact.fullname for contact in title.title_data.contact)
    return names


@dataclass
class CollectedCitations:
    """Citations and reference blocks gathered from one document.

    ``items`` and ``raw`` are keyed by the lower-cased anchor; ``order`` keeps
    the anchors as first written, in document order.
    """

    items: Dict[str, BibliographyItem] = field(default_factory=dict)
    order: List[str] = field(default_factory=list)
    raw: Dict[str, str] = field(default_factory=dict)

    def add(self, anchor: str, kind: CitationType) -> bool:
        key = anchor.lower()
        if key in self.items:
            return False
        self.items[key] = BibliographyItem(anchor=anchor, type=kind)
        self.order.append(anchor)
        return True

    def __len__(self) -> int:
        return len(self.items)


class CitationCollector:
    """Finds citations, excluding those that name an author or contact."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def collect(self, doc: Node) -> CollectedCitations:
        names: List[str] = []

        def find_title(node: Node, entering: bool) -> WalkStatus:
            nonlocal names
            if isinstance(node, Title):
                names = names_from_title(node)
                return WalkStatus.TERMINATE
            return WalkStatus.GO_TO_NEXT

        walk(doc, find_title)
        folded_names = {name.lower() for name in names}

        collected = CollectedCitations()

        def gather(node: Node, entering: bool) -> WalkStatus:
            if not entering:
                return WalkStatus.GO_TO_NEXT
            if isinstance(node, Citation):
                for destination, kind in zip(node.destinations, node.types):
                    if destination.lower() in folded_names:
                        self.logger.debug("Skipping author/contact citation %r", destination)
                        continue
                    collected.add(destination, kind)
            elif isinstance(node, ReferenceBlock):
                anchor = anchor_from_reference(node.literal)
                if anchor is not None:
                    collected.raw[anchor.lower()] = node.literal
            return WalkStatus.GO_TO_NEXT

        walk(doc, gather)
        return collected
