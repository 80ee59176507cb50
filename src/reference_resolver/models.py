"""Data models for document metadata and bibliographic reference records."""
from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class CitationType(Enum):
    """How a cited work relates to the citing document."""

    NORMATIVE = "normative"
    INFORMATIVE = "informative"
    SUPPRESSED = "suppressed"


class MatterType(Enum):
    FRONT = "front"
    MAIN = "main"
    BACK = "back"


@dataclass
class Postal:
    """Postal address; the plural lists hold additional repeated values."""

    street: str = ""
    streets: List[str] = field(default_factory=list)
    city: str = ""
    cities: List[str] = field(default_factory=list)
    city_area: str = ""
    city_areas: List[str] = field(default_factory=list)
    code: str = ""
    codes: List[str] = field(default_factory=list)
    country: str = ""
    countries: List[str] = field(default_factory=list)
    ext_addr: str = ""
    ext_addrs: List[str] = field(default_factory=list)
    po_box: str = ""
    po_boxes: List[str] = field(default_factory=list)
    region: str = ""
    regions: List[str] = field(default_factory=list)


@dataclass
class Address:
    postal: Postal = field(default_factory=Postal)
    phone: str = ""
    email: str = ""
    emails: List[str] = field(default_factory=list)
    uri: str = ""


@dataclass
class Author:
    """An author declared in the document title block."""

    fullname: str = ""
    initials: str = ""
    surname: str = ""
    role: str = ""
    organization: str = ""
    organization_abbrev: str = ""
    address: Address = field(default_factory=Address)


@dataclass
class Contact(Author):
    """A contact person; rendered like an author but never listed as one."""


@dataclass
class SeriesInfo:
    name: str = ""
    value: str = ""
    stream: str = ""
    status: str = ""


@dataclass
class TitleData:
    """Document metadata taken from the title block."""

    title: str = ""
    abbrev: str = ""
    series_info: SeriesInfo = field(default_factory=SeriesInfo)
    consensus: bool = False
    ipr: str = ""
    updates: List[int] = field(default_factory=list)
    obsoletes: List[int] = field(default_factory=list)
    submission_type: str = ""
    date: Optional[Union[datetime.date, datetime.datetime]] = None
    area: str = ""
    workgroup: str = ""
    keyword: List[str] = field(default_factory=list)
    author: List[Author] = field(default_factory=list)
    contact: List[Contact] = field(default_factory=list)
    index_include: bool = True
    sort_refs: bool = False
    toc_depth: int = 0


@dataclass
class Organization:
    name: str = ""
    abbrev: str = ""


@dataclass
class ReferenceAuthor:
    fullname: str = ""
    initials: str = ""
    surname: str = ""
    role: str = ""
    organization: Optional[Organization] = None


@dataclass
class ReferenceDate:
    year: str = ""
    month: str = ""
    day: str = ""


@dataclass
class Front:
    title: str = ""
    abbrev: str = ""
    authors: List[ReferenceAuthor] = field(default_factory=list)
    date: ReferenceDate = field(default_factory=ReferenceDate)


@dataclass
class Format:
    type: str = ""
    target: str = ""


@dataclass
class Reference:
    """A structured ``<reference>`` record."""

    anchor: str
    front: Front = field(default_factory=Front)
    target: str = ""
    series_info: List[SeriesInfo] = field(default_factory=list)
    formats: List[Format] = field(default_factory=list)
