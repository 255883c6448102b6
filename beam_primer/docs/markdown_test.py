#
# Licensed to the Apache Software Foundation (ASF) under one or more
# contributor license agreements.  See the NOTICE file distributed with
# this work for additional information regarding copyright ownership.
# The ASF licenses this file to You under the Apache License, Version 2.0
# (the "License"); you may not use this file except in compliance with
# the License.  You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

import pytest

from beam_primer.docs import markdown
from beam_primer.docs.models import CheckEnum

DOC = """# Title

Intro [design](DESIGN.md) and `[not](a-link.md)`.

<!-- beam-primer:
  name: hello
  ordered: true
-->
```python
print("hi")
```

Output:

```
hi
```

## Title

See <https://beam.apache.org> and [the guide][guide].

[guide]: https://beam.apache.org/documentation/programming-guide/
"""


@pytest.mark.parametrize(
    "title, anchor",
    [
        ("Title", "title"),
        ("What is a PCollection?", "what-is-a-pcollection"),
        ("Map, FlatMap & Filter", "map-flatmap--filter"),
        ("`GroupByKey` vs `CoGroupByKey`", "groupbykey-vs-cogroupbykey"),
        ("[Runners](https://beam.apache.org) today", "runners-today"),
        ("snake_case-and-dash", "snake_case-and-dash"),
    ],
)
def test_slugify(title, anchor):
  assert markdown.slugify(title) == anchor


def test_parse_tag():
  tag = markdown.parse_tag(
      "beam-primer:\n  name: x\n  pipeline_options: --runner DirectRunner\n")
  assert tag.name == "x"
  assert tag.run
  assert not tag.ordered
  assert tag.pipeline_options == "--runner DirectRunner"


def test_parse_tag_not_a_mapping():
  with pytest.raises(ValueError, match="beam-primer"):
    markdown.parse_tag("name: x\n")


def test_parse_blocks_and_output():
  doc = markdown.parse(DOC, "README.md")

  assert doc.path == "README.md"
  assert not doc.findings
  assert len(doc.blocks) == 1
  block = doc.blocks[0]
  assert block.language == "python"
  assert block.line == 9
  assert block.code == 'print("hi")\n'
  assert block.tag.name == "hello"
  assert block.tag.ordered
  assert block.output == "hi\n"
  assert block.output_line == 15


def test_parse_headings_get_unique_anchors():
  doc = markdown.parse(DOC)

  assert [(h.title, h.level, h.anchor, h.line) for h in doc.headings] == [
      ("Title", 1, "title", 1),
      ("Title", 2, "title-1", 19),
  ]


def test_parse_links():
  doc = markdown.parse(DOC)

  assert [(link.target, link.line) for link in doc.links] == [
      ("DESIGN.md", 3),
      ("https://beam.apache.org", 21),
      ("https://beam.apache.org/documentation/programming-guide/", 23),
  ]


def test_parse_ignores_links_and_headings_in_code():
  doc = markdown.parse("~~~~\n# not a heading\n[x](y.md)\n```\n~~~~\n")

  assert not doc.headings
  assert not doc.links
  assert doc.blocks[0].code == "# not a heading\n[x](y.md)\n```\n"


def test_parse_output_needs_a_preceding_block():
  doc = markdown.parse("Output:\n\n```\nhi\n```\n")

  assert len(doc.blocks) == 1
  assert doc.blocks[0].output is None
  assert doc.blocks[0].code == "hi\n"


def test_parse_bold_output_label():
  doc = markdown.parse("```py\nprint(1)\n```\n**Output:**\n```\n1\n```\n")

  assert doc.blocks[0].output == "1\n"


def test_parse_unterminated_fence():
  doc = markdown.parse("text\n```python\nprint(1)\n")

  assert [(f.line, f.check) for f in doc.findings] == [(2, CheckEnum.FENCE)]


def test_parse_dangling_tag():
  doc = markdown.parse("<!-- beam-primer:\n  name: lost\n-->\nJust text.\n")

  assert len(doc.findings) == 1
  finding = doc.findings[0]
  assert finding.check == CheckEnum.TAG
  assert finding.line == 1
  assert "not followed by a code block" in finding.message


@pytest.mark.parametrize(
    "comment",
    [
        "<!-- beam-primer:\n  description: no name\n-->\n",
        "<!-- beam-primer:\n  name: x\n  unknown: 1\n-->\n",
        "<!-- beam-primer: [1, 2 -->\n",
    ],
)
def test_parse_invalid_tag(comment):
  doc = markdown.parse(comment + "```python\nprint(1)\n```\n")

  assert [f.check for f in doc.findings] == [CheckEnum.TAG]
  assert "invalid tag" in doc.findings[0].message
  assert doc.blocks[0].tag is None


def test_parse_unterminated_tag():
  doc = markdown.parse("<!-- beam-primer:\n  name: x\n")

  assert [(f.line, f.check) for f in doc.findings] == [(1, CheckEnum.TAG)]


def test_parse_plain_comments_are_text():
  doc = markdown.parse("<!-- a note -->\n```python\nprint(1)\n```\n")

  assert not doc.findings
  assert doc.blocks[0].tag is None
