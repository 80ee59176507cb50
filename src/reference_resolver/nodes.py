"""Document tree nodes and the depth-first walker used to search them."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Union

from .models import CitationType, MatterType, Reference, TitleData
from .reference_parser import ReferencePayload


class WalkStatus(Enum):
    GO_TO_NEXT = "go-to-next"
    TERMINATE = "terminate"


@dataclass(eq=False)
class Node:
    """Base class of all nodes in a document tree."""

    children: List["Node"] = field(default_factory=list, kw_only=True)
    parent: Optional["Node"] = field(default=None, kw_only=True, repr=False)


@dataclass(eq=False)
class Document(Node):
    pass


@dataclass(eq=False)
class Heading(Node):
    level: int = 1
    text: str = ""


@dataclass(eq=False)
class Paragraph(Node):
    pass


@dataclass(eq=False)
class Text(Node):
    literal: str = ""


@dataclass(eq=False)
class Citation(Node):
    """An inline citation; ``destinations`` and ``types`` are parallel lists."""

    destinations: List[str] = field(default_factory=list)
    types: List[CitationType] = field(default_factory=list)


@dataclass(eq=False)
class ReferenceBlock(Node):
    """A raw ``<reference>`` or ``<referencegroup>`` declaration."""

    literal: str = ""


@dataclass(eq=False)
class Title(Node):
    title_data: Optional[TitleData] = None


@dataclass(eq=False)
class DocumentMatter(Node):
    matter: MatterType = MatterType.MAIN


@dataclass(eq=False)
class BibliographyItem(Node):
    """A resolved reference.

    ``payload`` is a ``DecodedReference``, a ``RawReference`` or ``None``
    when the citation had no matching reference block.
    """

    anchor: str = ""
    type: CitationType = CitationType.INFORMATIVE
    payload: Optional[ReferencePayload] = None

    @property
    def reference(self) -> Optional[Reference]:
        return getattr(self.payload, "reference", None)

    @property
    def reference_group(self) -> Optional[str]:
        return getattr(self.payload, "literal", None)


@dataclass(eq=False)
class Bibliography(Node):
    type: CitationType = CitationType.INFORMATIVE


@dataclass(eq=False)
class BibliographyWrapper(Node):
    """Holds the normative and informative bibliographies when both exist."""


Visitor = Callable[[Node, bool], Union[WalkStatus, None]]


def append_child(parent: Node, child: Node) -> Node:
    child.parent = parent
    parent.children.append(child)
    return child


def walk(node: Node, visitor: Visitor) -> WalkStatus:
    """Visit ``node`` and its descendants in document order.

    ``visitor`` is called with ``entering=True`` before a node's children and
    with ``entering=False`` after them. Returning ``WalkStatus.TERMINATE``
    stops the whole traversal.
    """
    if visitor(node, True) == WalkStatus.TERMINATE:
        return WalkStatus.TERMINATE
    if node.children:
        for child in list(node.children):
            if walk(child, visitor) == WalkStatus.TERMINATE:
                return WalkStatus.TERMINATE
        if visitor(node, False) == WalkStatus.TERMINATE:
            return WalkStatus.TERMINATE
    return WalkStatus.GO_TO_NEXT
