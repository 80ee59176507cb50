"""Rendering of the document title block as RFC 7991 XML."""
from __future__ import annotations

import datetime
import logging
import re
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from .models import Author, Contact, SeriesInfo
from .nodes import Title

STATUS_TO_CATEGORY = {
    "full-standard": "std",
    "standard": "std",
    "informational": "info",
    "experimental": "exp",
    "bcp": "bcp",
    "historic": "historic",
}

XINCLUDE_NS = "http://www.w3.org/2001/XInclude"

DECIMAL_NUMBER = re.compile(r"[+-]?[0-9]+")


def attributes(keys: Sequence[str], values: Sequence[str]) -> List[str]:
    """Pair keys with values as ``key="value"``, dropping empty values."""
    return [
        f'{key}="{_escape_attr(value)}"'
        for key, value in zip(keys, values)
        if value
    ]


def int_list_to_string(values: Sequence[int]) -> str:
    return ", ".join(str(value) for value in values)


def author_from_title(fullname: str, title: Optional[Title]) -> Optional[Author]:
    if title is None or title.title_data is None:
        return None
    for author in title.title_data.author:
        if author.fullname.lower() == fullname.lower():
            return author
    return None


def contact_from_title(fullname: str, title: Optional[Title]) -> Optional[Contact]:
    if title is None or title.title_data is None:
        return None
    for contact in title.title_data.contact:
        if contact.fullname.lower() == fullname.lower():
            return contact
    return None


class TitleRenderer:
    """Format title block metadata into ``<rfc>`` and ``<front>`` markup.

    The element order is fixed by RFC 7991. Only the opening of the document
    is produced; the abstract and notes belong to the body.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def render(self, title: Title) -> str:
        parts: List[str] = []
        self.title_block(parts, title)
        return "".join(parts)

    def title_block(self, out: List[str], title: Title) -> None:
        data = title.title_data
        if data is None:
            return
        submission_type = data.submission_type or "IETF"

        series = data.series_info
        attrs = attributes(
            ["version", "ipr", "docName", "submissionType", "category", "xml:lang", "xmlns:xi"],
            [
                "3",
                data.ipr,
                series.value,
                submission_type,
                STATUS_TO_CATEGORY.get(series.status, ""),
                "en",
                XINCLUDE_NS,
            ],
        )
        attrs += attributes(
            ["updates", "obsoletes", "indexInclude"],
            [
                int_list_to_string(data.updates),
                int_list_to_string(data.obsoletes),
                _bool(data.index_include),
            ],
        )
        # RFC 7841 Appendix A.2.2: consensus only matters for IETF and IRTF.
        if submission_type in ("IETF", "IRTF") and data.consensus:
            attrs += attributes(["consensus"], [_bool(data.consensus)])
        if data.sort_refs:
            attrs += attributes(["sortRefs"], [_bool(data.sort_refs)])
        if data.toc_depth > 0:
            attrs += attributes(["tocDepth"], [str(data.toc_depth)])
        # xml2rfc still wants the deprecated number, but only when numeric.
        if _is_number(series.value):
            attrs += attributes(["number"], [series.value])

        self._tag(out, "rfc", attrs)
        out.append("\n<front>\n")

        self._tag(out, "title", attributes(["abbrev"], [data.abbrev]))
        out.append(escape(data.title))
        out.append("</title>")

        self.title_series_info(out, series)
        for author in data.author:
            self.title_author(out, author, "author")
        self.title_date(out, data.date)
        self._tag_content(out, "area", data.area)
        self._tag_content(out, "workgroup", data.workgroup)
        self.title_keyword(out, data.keyword)

    def title_author(self, out: List[str], author: Author, tag: str) -> None:
        self._tag(
            out,
            tag,
            attributes(
                ["role", "initials", "surname", "fullname"],
                [author.role, author.initials, author.surname, author.fullname],
            ),
        )
        self._tag(out, "organization", attributes(["abbrev"], [author.organization_abbrev]))
        out.append(escape(author.organization))
        out.append("</organization>")

        postal = author.address.postal
        out.append("<address><postal>")
        self._tag_content(out, "street", postal.street)
        for street in postal.streets:
            self._tag_content(out, "street", street)
        for name, single, repeated in (
            ("city", postal.city, postal.cities),
            ("cityarea", postal.city_area, postal.city_areas),
            ("code", postal.code, postal.codes),
            ("country", postal.country, postal.countries),
            ("extaddr", postal.ext_addr, postal.ext_addrs),
            ("pobox", postal.po_box, postal.po_boxes),
            ("region", postal.region, postal.regions),
        ):
            self._tag_maybe(out, name, single)
            for value in repeated:
                self._tag_content(out, name, value)
        out.append("</postal>")

        address = author.address
        self._tag_maybe(out, "phone", address.phone)
        self._tag_maybe(out, "email", address.email)
        for email in address.emails:
            self._tag_content(out, "email", email)
        self._tag_maybe(out, "uri", address.uri)
        out.append("</address>")
        out.append(f"</{tag}>")

    def title_date(self, out: List[str], date: Optional[datetime.date]) -> None:
        if date is None:
            out.append("<date/>\n")
            return
        attrs = [f'year="{date.year}"', f'month="{date.strftime("%B")}"', f'day="{date.day}"']
        self._tag(out, "date", attrs)
        out.append("</date>\n")

    def title_keyword(self, out: List[str], keywords: Sequence[str]) -> None:
        for keyword in keywords:
            if keyword:
                self._tag_content(out, "keyword", keyword)

    def title_series_info(self, out: List[str], info: SeriesInfo) -> None:
        for name in ("value", "stream", "status", "name"):
            if not getattr(info, name):
                self.logger.warning(
                    "Empty '%s' in [seriesInfo], resulting XML may fail to parse.", name
                )
        self._tag(
            out,
            "seriesInfo",
            attributes(
                ["value", "stream", "status", "name"],
                [info.value, info.stream, info.status, info.name],
            ),
        )
        out.append("</seriesInfo>\n")

    @staticmethod
    def _tag(out: List[str], name: str, attrs: Sequence[str]) -> None:
        if attrs:
            out.append(f"<{name} {' '.join(attrs)}>")
        else:
            out.append(f"<{name}>")

    def _tag_content(self, out: List[str], name: str, content: str) -> None:
        self._tag(out, name, [])
        out.append(escape(content))
        out.append(f"</{name}>")

    def _tag_maybe(self, out: List[str], name: str, content: str) -> None:
        if content:
            self._tag_content(out, name, content)


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _is_number(value: str) -> bool:
    return DECIMAL_NUMBER.fullmatch(value) is not None


def _escape_attr(value: str) -> str:
    return escape(value, {'"': "&quot;"})
