import datetime

import pytest

from reference_resolver.models import CitationType, MatterType
from reference_resolver.nodes import Citation, DocumentMatter, Heading, Paragraph, ReferenceBlock, Text, Title
from reference_resolver.parsers import DocumentParser, TitleBlockError


def test_parser_builds_title_and_blocks(sample_manuscript):
    doc = DocumentParser().parse(sample_manuscript)
    kinds = [type(node) for node in doc.children]
    assert kinds == [
        Title,
        DocumentMatter,
        Heading,
        Paragraph,
        DocumentMatter,
        ReferenceBlock,
        ReferenceBlock,
    ]
    assert doc.children[1].matter == MatterType.MAIN
    assert doc.children[4].matter == MatterType.BACK
    assert doc.children[2].text == "Introduction"


def test_parser_reads_title_block_metadata(sample_manuscript):
    title = DocumentParser().parse(sample_manuscript).children[0]
    data = title.title_data
    assert data.title == "Using Example Protocols"
    assert data.series_info.value == "draft-example-protocol-00"
    assert data.date == datetime.date(2024, 3, 5)
    assert data.author[0].fullname == "Jane Doe"
    assert data.author[0].address.postal.city == "Amsterdam"
    assert data.author[0].address.email == "jane@example.org"
    assert data.contact[0].fullname == "Sam Contact"
    assert data.keyword == ["example", "references"]


def test_parser_reformats_decodable_reference_blocks(sample_manuscript):
    doc = DocumentParser().parse(sample_manuscript)
    rfc2119, hidden = [n for n in doc.children if isinstance(n, ReferenceBlock)]
    assert rfc2119.literal.startswith('<reference anchor="RFC2119"')
    assert "\n   <front>" in rfc2119.literal
    assert hidden.literal == '<reference anchor="Hidden">not-xml-garbage</reference>'


def test_parser_can_keep_reference_blocks_verbatim(sample_manuscript):
    doc = DocumentParser(reformat_references=False).parse(sample_manuscript)
    block = next(n for n in doc.children if isinstance(n, ReferenceBlock))
    assert block.literal.startswith("<reference anchor='RFC2119'")


def test_inline_citations_and_modifiers():
    para = DocumentParser().parse_inline(
        "See [@!RFC2119] and [@?I-D.x; @-Hidden] or [@RFC1, p. 3], not [1]."
    )
    citations = [n for n in para.children if isinstance(n, Citation)]
    assert [c.destinations for c in citations] == [["RFC2119"], ["I-D.x", "Hidden"], ["RFC1"]]
    assert citations[0].types == [CitationType.NORMATIVE]
    assert citations[1].types == [CitationType.INFORMATIVE, CitationType.SUPPRESSED]
    assert citations[2].types == [CitationType.INFORMATIVE]
    texts = "".join(n.literal for n in para.children if isinstance(n, Text))
    assert "not [1]." in texts


def test_inline_citation_may_name_a_person():
    para = DocumentParser().parse_inline("Thanks to [@Jane Doe].")
    citation = next(n for n in para.children if isinstance(n, Citation))
    assert citation.destinations == ["Jane Doe"]


def test_unterminated_reference_block_stays_paragraph_text():
    doc = DocumentParser().parse("<reference anchor='X'>\nno closing tag\n")
    assert [type(n) for n in doc.children] == [Paragraph]


def test_unterminated_title_block_raises():
    with pytest.raises(TitleBlockError):
        DocumentParser().parse("%%%\ntitle = 'x'\n\nBody text.\n")


def test_invalid_toml_title_block_raises():
    with pytest.raises(TitleBlockError, match="Invalid TOML"):
        DocumentParser().parse("%%%\ntitle = \n%%%\nBody\n")


def test_title_keys_are_case_insensitive():
    doc = DocumentParser().parse('%%%\nTitle = "Upper"\n[SeriesInfo]\nValue = "8446"\n%%%\n')
    data = doc.children[0].title_data
    assert data.title == "Upper"
    assert data.series_info.value == "8446"


def test_parse_file_reads_utf8(sample_manuscript_path):
    doc = DocumentParser().parse_file(sample_manuscript_path)
    assert isinstance(doc.children[0], Title)
