import logging
from typing import Optional, get_type_hints

from reference_resolver.bibliography import BibliographyResolver, add_bibliography
from reference_resolver.models import CitationType, MatterType, Reference
from reference_resolver.nodes import (
    Bibliography,
    BibliographyItem,
    BibliographyWrapper,
    Citation,
    Document,
    DocumentMatter,
    Paragraph,
    ReferenceBlock,
    append_child,
)
from reference_resolver.reference_parser import DecodedReference, RawReference, ReferencePayload

NORM = CitationType.NORMATIVE
INFO = CitationType.INFORMATIVE
SUPP = CitationType.SUPPRESSED


def _document(citations, blocks=(), back_matter=True):
    doc = Document()
    append_child(doc, DocumentMatter(matter=MatterType.MAIN))
    para = append_child(doc, Paragraph())
    for destination, kind in citations:
        append_child(para, Citation(destinations=[destination], types=[kind]))
    back = None
    if back_matter:
        back = append_child(doc, DocumentMatter(matter=MatterType.BACK))
    for literal in blocks:
        append_child(doc, ReferenceBlock(literal=literal))
    return doc, back


def _anchors(group):
    return [item.anchor for item in group.children]


def test_scenario_a_single_normative_anchor_only():
    doc, back = _document([("X", NORM)])
    assert BibliographyResolver().inject(doc) is True
    assert len(back.children) == 1
    group = back.children[0]
    assert isinstance(group, Bibliography)
    assert group.type == NORM
    item = group.children[0]
    assert item.anchor == "X"
    assert item.payload is None
    assert item.reference is None and item.reference_group is None


def test_scenario_b_case_duplicates_resolve_to_one_decoded_item():
    block = '<reference anchor="X"><front><title>Ex</title></front></reference>'
    doc, back = _document([("x", NORM), ("X", NORM)], blocks=[block])
    assert BibliographyResolver().inject(doc) is True
    group = back.children[0]
    assert _anchors(group) == ["x"]
    item = group.children[0]
    assert isinstance(item.payload, DecodedReference)
    assert item.reference.front.title == "Ex"


def test_reference_without_front_is_decoded(caplog):
    block = (
        '<reference anchor="X" target="https://example.org/x">'
        '<seriesInfo name="RFC" value="1"/></reference>'
    )
    doc, back = _document([("X", NORM)], blocks=[block])
    with caplog.at_level(logging.WARNING):
        assert BibliographyResolver().inject(doc) is True
    item = back.children[0].children[0]
    assert isinstance(item.payload, DecodedReference)
    assert item.reference.target == "https://example.org/x"
    assert "Failed to unmarshal" not in caplog.text


def test_scenario_c_undecodable_block_falls_back_to_raw(caplog):
    block = '<reference anchor="BadRef">not-xml-garbage</reference>'
    doc, back = _document([("BadRef", NORM)], blocks=[block])
    with caplog.at_level(logging.WARNING):
        assert BibliographyResolver().inject(doc) is True
    item = back.children[0].children[0]
    assert item.payload == RawReference(block)
    assert item.reference_group == block
    assert "BadRef" in caplog.text


def test_scenario_d_missing_back_matter(caplog):
    doc, _ = _document([("A", NORM)], back_matter=False)
    before = [type(node) for node in doc.children]
    with caplog.at_level(logging.WARNING):
        assert BibliographyResolver().inject(doc) is False
    assert "No {backmatter} found" in caplog.text
    assert [type(node) for node in doc.children] == before
    assert all(not isinstance(n, Bibliography) for n in doc.children)


def test_scenario_e_both_groups_are_wrapped():
    doc, back = _document([("A", NORM), ("B", INFO)])
    assert BibliographyResolver().inject(doc) is True
    assert len(back.children) == 1
    wrapper = back.children[0]
    assert isinstance(wrapper, BibliographyWrapper)
    normative, informative = wrapper.children
    assert (normative.type, _anchors(normative)) == (NORM, ["A"])
    assert (informative.type, _anchors(informative)) == (INFO, ["B"])
    assert normative.parent is wrapper


def test_suppressed_and_informative_share_the_informative_group():
    doc, back = _document([("S", SUPP), ("I", INFO)])
    BibliographyResolver().inject(doc)
    group = back.children[0]
    assert group.type == INFO
    assert _anchors(group) == ["I", "S"]
    assert all(item.type == INFO for item in group.children)


def test_items_sorted_case_sensitively():
    doc, back = _document([("b", INFO), ("B", NORM), ("a", INFO), ("A", NORM)])
    # "b" and "B" collide, as do "a" and "A"; the first kinds win.
    BibliographyResolver().inject(doc)
    assert _anchors(back.children[0]) == ["a", "b"]

    doc, back = _document([("rfc8174", NORM), ("RFC2119", NORM), ("BCP14", NORM)])
    BibliographyResolver().inject(doc)
    assert _anchors(back.children[0]) == ["BCP14", "RFC2119", "rfc8174"]


def test_inject_is_deterministic():
    citations = [("Z", INFO), ("m", NORM), ("A", SUPP), ("k", NORM)]
    shapes = []
    for _ in range(3):
        doc, back = _document(citations)
        BibliographyResolver().inject(doc)
        wrapper = back.children[0]
        shapes.append([(g.type, _anchors(g)) for g in wrapper.children])
    assert shapes[0] == shapes[1] == shapes[2]
    assert shapes[0] == [(NORM, ["k", "m"]), (INFO, ["A", "Z"])]


def test_no_citations_means_nothing_injected_and_no_warning(caplog):
    doc, back = _document([])
    with caplog.at_level(logging.WARNING):
        assert BibliographyResolver().inject(doc) is False
    assert back.children == []
    assert caplog.records == []

    doc, _ = _document([], back_matter=False)
    with caplog.at_level(logging.WARNING):
        assert BibliographyResolver().inject(doc) is False
    assert caplog.records == []


def test_citation_to_bibliography_returns_groups_without_mutating():
    doc, back = _document([("A", NORM)])
    normative, informative = BibliographyResolver().citation_to_bibliography(doc)
    assert informative is None
    assert isinstance(normative.children[0], BibliographyItem)
    assert back.children == []


def test_first_back_matter_node_is_used():
    doc, back = _document([("A", INFO)])
    second = append_child(doc, DocumentMatter(matter=MatterType.BACK))
    assert BibliographyResolver.node_back_matter(doc) is back
    add_bibliography(doc)
    assert len(back.children) == 1
    assert second.children == []


def test_injected_logger_receives_diagnostics(caplog):
    logger = logging.getLogger("tests.resolver")
    doc, _ = _document([("A", NORM)], back_matter=False)
    with caplog.at_level(logging.WARNING, logger="tests.resolver"):
        BibliographyResolver(logger=logger).inject(doc)
    assert [r.name for r in caplog.records] == ["tests.resolver"]


def test_item_payload_is_typed_as_reference_payload():
    hints = get_type_hints(BibliographyItem)
    assert hints["payload"] == Optional[ReferencePayload]
    assert get_type_hints(BibliographyItem.reference.fget)["return"] == Optional[Reference]
