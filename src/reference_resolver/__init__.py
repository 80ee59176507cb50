"""Citation-to-bibliography resolution for mmark-style documents."""

from .app import ReferenceResolverApp, ResolutionResult
from .bibliography import BibliographyResolver, add_bibliography
from .models import CitationType, MatterType
from .nodes import (
    Bibliography,
    BibliographyItem,
    BibliographyWrapper,
    Citation,
    Document,
    DocumentMatter,
    ReferenceBlock,
    Title,
    WalkStatus,
    walk,
)
from .parsers import DocumentParser, TitleBlockError
from .reference_parser import DecodedReference, RawReference, ReferenceDecodeError, ReferenceDecoder

__all__ = [
    "ReferenceResolverApp",
    "ResolutionResult",
    "BibliographyResolver",
    "add_bibliography",
    "CitationType",
    "MatterType",
    "Bibliography",
    "BibliographyItem",
    "BibliographyWrapper",
    "Citation",
    "Document",
    "DocumentMatter",
    "ReferenceBlock",
    "Title",
    "WalkStatus",
    "walk",
    "DocumentParser",
    "TitleBlockError",
    "DecodedReference",
    "RawReference",
    "ReferenceDecodeError",
    "ReferenceDecoder",
]
