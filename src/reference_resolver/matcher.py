"""Logic for matching citations to reference blocks and grouping them."""
from __future__ import annotations

from typing import Optional, Tuple

from .citation_extractor import CollectedCitations
from .models import CitationType
from .nodes import Bibliography, append_child
from .reference_parser import ReferenceDecoder


class BibliographyAssembler:
    """Build the normative and informative bibliographies, sorted on anchor."""

    def __init__(self, decoder: ReferenceDecoder | None = None):
        self.decoder = decoder or ReferenceDecoder()

    def assemble(
        self, collected: CollectedCitations
    ) -> Tuple[Optional[Bibliography], Optional[Bibliography]]:
        normative: Optional[Bibliography] = None
        informative: Optional[Bibliography] = None

        for anchor in sorted(collected.order):
            key = anchor.lower()
            item = collected.items[key]
            raw = collected.raw.get(key)
            if raw is not None:
                item.payload = self.decoder.decode_or_fallback(anchor, raw)

            if item.type == CitationType.NORMATIVE:
                if normative is None:
                    normative = Bibliography(type=CitationType.NORMATIVE)
                append_child(normative, item)
            else:
                # Suppressed citations are listed as informative.
                item.type = CitationType.INFORMATIVE
                if informative is None:
                    informative = Bibliography(type=CitationType.INFORMATIVE)
                append_child(informative, item)

        return normative, informative
