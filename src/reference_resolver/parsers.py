"""Parsers for building a document tree from mmark-style manuscript text."""
from __future__ import annotations

import datetime
import re
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import Address, Author, CitationType, Contact, MatterType, Postal, SeriesInfo, TitleData
from .nodes import Citation, Document, DocumentMatter, Heading, Paragraph, Text, Title, append_child
from .reference_block import GROUP_OPENER, REFERENCE_OPENER, reference_hook
from .reference_parser import ReferenceDecoder


class TitleBlockError(ValueError):
    """Raised when the ``%%%`` title block is missing its end or is not valid TOML."""


class DocumentParser:
    """Splits manuscript text into title, matter markers, headings and paragraphs.

    This is a block reader, not a markdown renderer: paragraph text is kept
    as-is apart from citations, which become :class:`Citation` nodes.
    """

    TITLE_FENCE = "%%%"
    TITLE_END = re.compile(r"^%%%[ \t]*$", re.MULTILINE)
    MATTER_MARKERS = {
        "{frontmatter}": MatterType.FRONT,
        "{mainmatter}": MatterType.MAIN,
        "{backmatter}": MatterType.BACK,
    }
    HEADING_PATTERN = re.compile(r"^(?P<level>#{1,6})\s+(?P<text>.*?)\s*#*\s*$")
    CITATION_PATTERN = re.compile(r"\[(?P<body>@[^\[\]]+)\]")
    CITATION_PART = re.compile(r"^@(?P<modifier>[!?-]?)(?P<anchor>[^\s;,][^;,]*)")
    MODIFIERS = {
        "!": CitationType.NORMATIVE,
        "?": CitationType.INFORMATIVE,
        "-": CitationType.SUPPRESSED,
        "": CitationType.INFORMATIVE,
    }

    def __init__(
        self, decoder: ReferenceDecoder | None = None, reformat_references: bool = True
    ):
        self.decoder = decoder or ReferenceDecoder()
        self.reformat_references = reformat_references

    def parse(self, text: str) -> Document:
        doc = Document()
        text = text.replace("\r\n", "\n")
        text = self._parse_title(doc, text)

        paragraph: List[str] = []

        def flush() -> None:
            if paragraph:
                append_child(doc, self.parse_inline("\n".join(paragraph)))
                paragraph.clear()

        pos = 0
        while pos < len(text):
            eol = text.find("\n", pos)
            if eol < 0:
                eol = len(text)
            line = text[pos:eol]
            stripped = line.strip()

            if line.startswith((REFERENCE_OPENER, GROUP_OPENER)):
                node, consumed = reference_hook(
                    text[pos:], self.decoder, reformat=self.reformat_references
                )
                if node is not None:
                    flush()
                    append_child(doc, node)
                    pos += consumed
                    continue

            if not stripped:
                flush()
            elif stripped in self.MATTER_MARKERS:
                flush()
                append_child(doc, DocumentMatter(matter=self.MATTER_MARKERS[stripped]))
            elif heading := self.HEADING_PATTERN.match(line):
                flush()
                append_child(
                    doc, Heading(level=len(heading.group("level")), text=heading.group("text"))
                )
            else:
                paragraph.append(line)
            pos = eol + 1

        flush()
        return doc

    def parse_inline(self, text: str) -> Paragraph:
        para = Paragraph()
        pos = 0
        for match in self.CITATION_PATTERN.finditer(text):
            citation = self._citation(match.group("body"))
            if citation is None:
                continue
            if match.start() > pos:
                append_child(para, Text(literal=text[pos : match.start()]))
            append_child(para, citation)
            pos = match.end()
        if pos < len(text):
            append_child(para, Text(literal=text[pos:]))
        return para

    def _citation(self, body: str) -> Optional[Citation]:
        citation = Citation()
        for part in (seg.strip() for seg in body.split(";")):
            if not part:
                continue
            match = self.CITATION_PART.match(part)
            if not match:
                return None
            citation.destinations.append(match.group("anchor").rstrip())
            citation.types.append(self.MODIFIERS[match.group("modifier")])
        return citation if citation.destinations else None

    def _parse_title(self, doc: Document, text: str) -> str:
        """Attach a :class:`Title` for a leading ``%%%`` block; return the rest."""
        if not text.startswith(self.TITLE_FENCE):
            return text
        first_eol = text.find("\n")
        if first_eol < 0:
            raise TitleBlockError("Title block is not terminated by '%%%'")
        end = self.TITLE_END.search(text, first_eol + 1)
        if end is None:
            raise TitleBlockError("Title block is not terminated by '%%%'")

        block = text[first_eol + 1 : end.start()]
        try:
            raw = tomllib.loads(block)
        except tomllib.TOMLDecodeError as exc:
            raise TitleBlockError(f"Invalid TOML in title block: {exc}") from exc
        try:
            data = title_data_from_toml(raw)
        except (TypeError, ValueError, AttributeError) as exc:
            raise TitleBlockError(f"Unexpected value in title block: {exc}") from exc

        append_child(doc, Title(title_data=data))
        return text[end.end() :].lstrip("\n")

    def load_text(self, file_path: str | Path) -> str:
        return Path(file_path).read_text(encoding="utf-8")

    def parse_file(self, file_path: str | Path) -> Document:
        return self.parse(self.load_text(file_path))


def _fold_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).lower(): _fold_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_fold_keys(v) for v in value]
    return value


def _str(table: Dict[str, Any], key: str) -> str:
    value = table.get(key, "")
    return value if isinstance(value, str) else str(value)


def _strs(table: Dict[str, Any], key: str) -> List[str]:
    return [str(v) for v in table.get(key, [])]


def _date(value: Any) -> Optional[datetime.date]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(str(value))


def _postal(table: Dict[str, Any]) -> Postal:
    return Postal(
        street=_str(table, "street"),
        streets=_strs(table, "streets"),
        city=_str(table, "city"),
        cities=_strs(table, "cities"),
        city_area=_str(table, "cityarea"),
        city_areas=_strs(table, "cityareas"),
        code=_str(table, "code"),
        codes=_strs(table, "codes"),
        country=_str(table, "country"),
        countries=_strs(table, "countries"),
        ext_addr=_str(table, "extaddr"),
        ext_addrs=_strs(table, "extaddrs"),
        po_box=_str(table, "pobox"),
        po_boxes=_strs(table, "poboxes"),
        region=_str(table, "region"),
        regions=_strs(table, "regions"),
    )


def _person(cls, table: Dict[str, Any]):
    address = table.get("address", {})
    return cls(
        fullname=_str(table, "fullname"),
        initials=_str(table, "initials"),
        surname=_str(table, "surname"),
        role=_str(table, "role"),
        organization=_str(table, "organization"),
        organization_abbrev=_str(table, "abbrev"),
        address=Address(
            postal=_postal(address.get("postal", {})),
            phone=_str(address, "phone"),
            email=_str(address, "email"),
            emails=_strs(address, "emails"),
            uri=_str(address, "uri"),
        ),
    )


def title_data_from_toml(raw: Dict[str, Any]) -> TitleData:
    """Map a decoded TOML title block onto :class:`TitleData`; keys are case-insensitive."""
    table = _fold_keys(raw)
    series = table.get("seriesinfo", {})
    return TitleData(
        title=_str(table, "title"),
        abbrev=_str(table, "abbrev"),
        series_info=SeriesInfo(
            name=_str(series, "name"),
            value=_str(series, "value"),
            stream=_str(series, "stream"),
            status=_str(series, "status"),
        ),
        consensus=bool(table.get("consensus", False)),
        ipr=_str(table, "ipr"),
        updates=[int(v) for v in table.get("updates", [])],
        obsoletes=[int(v) for v in table.get("obsoletes", [])],
        submission_type=_str(table, "submissiontype"),
        date=_date(table.get("date")),
        area=_str(table, "area"),
        workgroup=_str(table, "workgroup"),
        keyword=_strs(table, "keyword"),
        author=[_person(Author, a) for a in table.get("author", [])],
        contact=[_person(Contact, c) for c in table.get("contact", [])],
        index_include=bool(table.get("indexinclude", True)),
        sort_refs=bool(table.get("sortrefs", False)),
        toc_depth=int(table.get("tocdepth", 0)),
    )
