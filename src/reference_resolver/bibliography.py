"""Resolution of citations into a bibliography placed in the back matter."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from .citation_extractor import CitationCollector
from .matcher import BibliographyAssembler
from .models import MatterType
from .nodes import (
    Bibliography,
    BibliographyWrapper,
    DocumentMatter,
    Node,
    WalkStatus,
    append_child,
    walk,
)
from .reference_parser import ReferenceDecoder


class BibliographyResolver:
    """Collects citations from a document and injects the bibliography.

    Diagnostics go to ``logger``; nothing is kept between calls.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        decoder: ReferenceDecoder | None = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.decoder = decoder or ReferenceDecoder(logger=self.logger)
        self.collector = CitationCollector(logger=self.logger)
        self.assembler = BibliographyAssembler(decoder=self.decoder)

    def citation_to_bibliography(
        self, doc: Node
    ) -> Tuple[Optional[Bibliography], Optional[Bibliography]]:
        """Return the ``(normative, informative)`` bibliographies for ``doc``."""
        collected = self.collector.collect(doc)
        self.logger.debug(
            "Collected %d citation(s) and %d reference block(s)",
            len(collected),
            len(collected.raw),
        )
        return self.assembler.assemble(collected)

    @staticmethod
    def node_back_matter(doc: Node) -> Optional[DocumentMatter]:
        matter: Optional[DocumentMatter] = None

        def find(node: Node, entering: bool) -> WalkStatus:
            nonlocal matter
            if isinstance(node, DocumentMatter) and node.matter == MatterType.BACK:
                matter = node
                return WalkStatus.TERMINATE
            return WalkStatus.GO_TO_NEXT

        walk(doc, find)
        return matter

    def inject(self, doc: Node) -> bool:
        """Add the bibliography under the back matter node of ``doc``.

        Returns ``False`` and leaves ``doc`` untouched when there is no back
        matter or nothing to add.
        """
        norm, inform = self.citation_to_bibliography(doc)
        return self.splice(doc, norm, inform)

    def splice(
        self,
        doc: Node,
        norm: Optional[Bibliography],
        inform: Optional[Bibliography],
    ) -> bool:
        """Attach already assembled bibliographies under the back matter of ``doc``."""
        where: Optional[Node] = self.node_back_matter(doc)
        if where is None:
            if norm is not None or inform is not None:
                self.logger.warning("No {backmatter} found, can't insert bibliography")
            return False

        # RFC 7322 Section 4.8.6: with both kinds present the references
        # section is split into two subsections.
        if norm is not None and inform is not None:
            where = append_child(where, BibliographyWrapper())

        if norm is not None:
            append_child(where, norm)
        if inform is not None:
            append_child(where, inform)
        return norm is not None or inform is not None


def add_bibliography(doc: Node, logger: logging.Logger | None = None) -> bool:
    """Convenience wrapper around :meth:`BibliographyResolver.inject`."""
    return BibliographyResolver(logger=logger).inject(doc)
