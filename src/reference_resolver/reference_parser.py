"""Decoding of raw ``<reference>`` blocks into structured records."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union
from xml.etree import ElementTree

from .models import (
    Format,
    Front,
    Organization,
    Reference,
    ReferenceAuthor,
    ReferenceDate,
    SeriesInfo,
)

INDENT = "   "


class ReferenceDecodeError(ValueError):
    """Raised when a reference block cannot be decoded as a ``<reference>``."""


@dataclass(frozen=True)
class DecodedReference:
    reference: Reference


@dataclass(frozen=True)
class RawReference:
    """Undecodable reference text, kept verbatim."""

    literal: str


ReferencePayload = Union[DecodedReference, RawReference]


class ReferenceDecoder:
    """Parses reference XML, falling back to the raw text on failure."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def decode(self, raw: str) -> Reference:
        try:
            root = ElementTree.fromstring(raw)
        except ElementTree.ParseError as exc:
            raise ReferenceDecodeError(str(exc)) from exc

        if root.tag != "reference":
            raise ReferenceDecodeError(
                f"expected element type <reference> but have <{root.tag}>"
            )
        stray = [root.text or ""] + [child.tail or "" for child in root]
        if any(text.strip() for text in stray):
            raise ReferenceDecodeError("unexpected character data in <reference>")

        front = root.find("front")
        series = [self._series_info(e) for e in root.findall("seriesInfo")]
        if front is not None:
            series.extend(self._series_info(e) for e in front.findall("seriesInfo"))
        return Reference(
            anchor=root.get("anchor", ""),
            target=root.get("target", ""),
            front=self._front(front) if front is not None else Front(),
            series_info=series,
            formats=[
                Format(type=e.get("type", ""), target=e.get("target", ""))
                for e in root.findall("format")
            ],
        )

    def decode_or_fallback(self, anchor: str, raw: str) -> ReferencePayload:
        try:
            return DecodedReference(self.decode(raw))
        except ReferenceDecodeError as exc:
            self.logger.warning(
                "Failed to unmarshal reference: %r: %s, assuming <referencegroup>",
                anchor,
                exc,
            )
            return RawReference(raw)

    @staticmethod
    def _front(element: ElementTree.Element) -> Front:
        title = element.find("title")
        authors: List[ReferenceAuthor] = []
        for author in element.findall("author"):
            org = author.find("organization")
            authors.append(
                ReferenceAuthor(
                    fullname=author.get("fullname", ""),
                    initials=author.get("initials", ""),
                    surname=author.get("surname", ""),
                    role=author.get("role", ""),
                    organization=(
                        Organization(name=(org.text or "").strip(), abbrev=org.get("abbrev", ""))
                        if org is not None
                        else None
                    ),
                )
            )
        date = element.find("date")
        return Front(
            title=(title.text or "").strip() if title is not None else "",
            abbrev=title.get("abbrev", "") if title is not None else "",
            authors=authors,
            date=ReferenceDate(
                year=date.get("year", ""), month=date.get("month", ""), day=date.get("day", "")
            )
            if date is not None
            else ReferenceDate(),
        )

    @staticmethod
    def _series_info(element: ElementTree.Element) -> SeriesInfo:
        return SeriesInfo(
            name=element.get("name", ""),
            value=element.get("value", ""),
            stream=element.get("stream", ""),
            status=element.get("status", ""),
        )


def _attrs(**values: str) -> dict[str, str]:
    return {key: value for key, value in values.items() if value}


def reference_to_element(ref: Reference) -> ElementTree.Element:
    root = ElementTree.Element("reference", _attrs(anchor=ref.anchor, target=ref.target))
    front = ElementTree.SubElement(root, "front")
    title = ElementTree.SubElement(front, "title", _attrs(abbrev=ref.front.abbrev))
    title.text = ref.front.title
    for author in ref.front.authors:
        node = ElementTree.SubElement(
            front,
            "author",
            _attrs(
                initials=author.initials,
                surname=author.surname,
                fullname=author.fullname,
                role=author.role,
            ),
        )
        if author.organization is not None:
            org = ElementTree.SubElement(
                node, "organization", _attrs(abbrev=author.organization.abbrev)
            )
            org.text = author.organization.name
    date = ref.front.date
    ElementTree.SubElement(front, "date", _attrs(year=date.year, month=date.month, day=date.day))
    for info in ref.series_info:
        ElementTree.SubElement(
            root,
            "seriesInfo",
            _attrs(name=info.name, value=info.value, stream=info.stream, status=info.status),
        )
    for fmt in ref.formats:
        ElementTree.SubElement(root, "format", _attrs(type=fmt.type, target=fmt.target))
    return root


def format_reference(raw: str, decoder: Optional[ReferenceDecoder] = None) -> str:
    """Return ``raw`` re-serialized as indented XML, or unchanged if undecodable.

    Only the fields of :class:`~reference_resolver.models.Reference` survive
    the round trip.
    """
    decoder = decoder or ReferenceDecoder()
    try:
        ref = decoder.decode(raw)
    except ReferenceDecodeError:
        return raw
    element = reference_to_element(ref)
    ElementTree.indent(element, space=INDENT)
    return ElementTree.tostring(element, encoding="unicode")
