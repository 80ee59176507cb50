import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

import pytest


SAMPLE_MANUSCRIPT = """%%%
title = "Using Example Protocols"
abbrev = "Example"
ipr = "trust200902"
area = "Internet"
workgroup = "Network Working Group"
keyword = ["example", "references"]
date = 2024-03-05

[seriesInfo]
name = "Internet-Draft"
value = "draft-example-protocol-00"
stream = "IETF"
status = "standard"

[[author]]
initials = "J."
surname = "Doe"
fullname = "Jane Doe"
organization = "Example Org"

  [author.address]
  email = "jane@example.org"

  [author.address.postal]
  city = "Amsterdam"
  country = "Netherlands"

[[contact]]
fullname = "Sam Contact"
%%%

{mainmatter}

# Introduction

The key words are defined in [@!RFC2119] and [@!rfc8174]. See [@?I-D.example; @-Hidden]
for background. Thanks to [@Jane Doe] and [@sam contact] for the review.

{backmatter}

<reference anchor='RFC2119' target='https://www.rfc-editor.org/info/rfc2119'>
<front>
<title>Key words for use in RFCs to Indicate Requirement Levels</title>
<author initials='S.' surname='Bradner' fullname='S. Bradner'><organization/></author>
<date year='1997' month='March'/>
</front>
<seriesInfo name='BCP' value='14'/>
<seriesInfo name='RFC' value='2119'/>
</reference>

<reference anchor="Hidden">not-xml-garbage</reference>
"""


@pytest.fixture()
def sample_manuscript() -> str:
    return SAMPLE_MANUSCRIPT


@pytest.fixture()
def sample_manuscript_path(tmp_path: Path) -> Path:
    """Write the sample manuscript to a temporary markdown file."""

    path = tmp_path / "draft-example.md"
    path.write_text(SAMPLE_MANUSCRIPT, encoding="utf-8")
    return path
