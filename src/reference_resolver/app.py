"""High-level orchestrator for bibliography resolution workflows."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .bibliography import BibliographyResolver
from .formatter import TitleRenderer
from .nodes import Bibliography, BibliographyItem, Document, Node, Title, WalkStatus, walk
from .parsers import DocumentParser
from .reference_parser import ReferenceDecoder


@dataclass
class ResolutionResult:
    """Outcome of resolving the bibliography of one document."""

    document: Document
    normative: Optional[Bibliography]
    informative: Optional[Bibliography]
    injected: bool
    title_xml: str = ""

    @property
    def items(self) -> List[BibliographyItem]:
        items: List[BibliographyItem] = []
        for group in (self.normative, self.informative):
            if group is not None:
                items.extend(child for child in group.children if isinstance(child, BibliographyItem))
        return items


class ReferenceResolverApp:
    """Coordinates parsing, bibliography injection and title rendering."""

    def __init__(
        self,
        logger: logging.Logger | None = None,
        reformat_references: bool = True,
    ):
        self.logger = logger or logging.getLogger(__name__)
        decoder = ReferenceDecoder(logger=self.logger)
        self.parser = DocumentParser(decoder=decoder, reformat_references=reformat_references)
        self.resolver = BibliographyResolver(logger=self.logger, decoder=decoder)
        self.title_renderer = TitleRenderer(logger=self.logger)

    def process_document(self, doc: Document) -> ResolutionResult:
        normative, informative = self.resolver.citation_to_bibliography(doc)
        injected = self.resolver.splice(doc, normative, informative)
        title = find_title(doc)
        title_xml = self.title_renderer.render(title) if title is not None else ""
        return ResolutionResult(
            document=doc,
            normative=normative,
            informative=informative,
            injected=injected,
            title_xml=title_xml,
        )

    def process_text(self, text: str) -> ResolutionResult:
        return self.process_document(self.parser.parse(text))

    def process_file(self, file_path: str | Path) -> ResolutionResult:
        """Parse and resolve a manuscript file read as UTF-8 text."""
        return self.process_text(self.parser.load_text(file_path))


def find_title(doc: Node) -> Optional[Title]:
    found: Optional[Title] = None

    def visit(node: Node, entering: bool) -> WalkStatus:
        nonlocal found
        if isinstance(node, Title):
            found = node
            return WalkStatus.TERMINATE
        return WalkStatus.GO_TO_NEXT

    walk(doc, visit)
    return found
