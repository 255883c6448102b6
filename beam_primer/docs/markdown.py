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

"""
Markdown parsing for the documentation checker

Only the parts of CommonMark the checks need are recognised: fenced code
blocks, ATX headings, inline links and images, autolinks and reference
definitions. A ``beam-primer`` tag comment attaches to the next code block,
and an ``Output:`` line followed by a fenced block documents the output of
the code block right before it.
"""

import logging
import re
from collections import Counter
from typing import List
from typing import Optional

import pydantic
import yaml

from beam_primer.docs.config import TAG_KEY
from beam_primer.docs.config import TAG_TITLE
from beam_primer.docs.models import CheckEnum
from beam_primer.docs.models import CodeBlock
from beam_primer.docs.models import Document
from beam_primer.docs.models import Finding
from beam_primer.docs.models import Heading
from beam_primer.docs.models import Link
from beam_primer.docs.models import Tag

_LOGGER = logging.getLogger(__name__)

FENCE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})\s*(?P<info>[^`]*?)\s*$")
HEADING_RE = re.compile(
    r"^ {0,3}(?P<hashes>#{1,6})\s+(?P<title>.*?)(\s+#+)?\s*$")
OUTPUT_RE = re.compile(
    r"^\s*(\*\*|__)?\s*output\s*:?\s*(\*\*|__)?\s*:?\s*$", re.IGNORECASE)
INLINE_LINK_RE = re.compile(
    r"!?\[(?P<text>[^\]]*)\]\(\s*<?(?P<target>[^)\s>]+)>?"
    r"(?:\s+[\"'(][^)]*[\"')])?\s*\)")
AUTOLINK_RE = re.compile(r"<(?P<target>(?:https?|mailto):[^>\s]+)>")
REFERENCE_RE = re.compile(
    r"^ {0,3}\[(?P<text>[^\]]+)\]:\s*<?(?P<target>[^\s>]+)>?")
INLINE_CODE_RE = re.compile(r"(`+).*?\1")
COMMENT_START = "<!--"
COMMENT_END = "-->"


def slugify(title: str) -> str:
  """
  Return the anchor GitHub generates for a heading title.

  Markup characters and punctuation are dropped, the text is lower-cased and
  spaces become hyphens.
  """
  title = re.sub(r"!?\[([^\]]*)\]\([^)]*\)", r"\1", title)
  slug = re.sub(r"[^\w\- ]", "", title.strip().lower())
  return slug.replace(" ", "-")


def parse_tag(content: str) -> Tag:
  """
  Parse the YAML body of a tag comment.

  Raises:
    yaml.YAMLError: if the body is not valid YAML.
    ValueError: if the body is not a ``beam-primer`` mapping.
    pydantic.ValidationError: if the fields are invalid.
  """
  yml = yaml.load(content, Loader=yaml.SafeLoader)
  if not isinstance(yml, dict) or not isinstance(yml.get(TAG_KEY), dict):
    raise ValueError(f"expected a '{TAG_TITLE}' mapping")
  return Tag(**yml[TAG_KEY])


class _Fence:
  def __init__(self, marker: str, info: str, line: int, tag: Optional[Tag]):
    self.marker = marker
    self.info = info
    self.line = line
    self.tag = tag
    self.lines: List[str] = []

  def closes(self, line: str) -> bool:
    """A closing fence uses the same character, at least as many times."""
    indent = len(line) - len(line.lstrip(" "))
    stripped = line.strip()
    return (
        indent <= 3 and len(stripped) >= len(self.marker) and
        set(stripped) == {self.marker[0]})


class _Parser:
  def __init__(self, path: str):
    self.document = Document(path=path)
    self._fence: Optional[_Fence] = None
    self._comment: Optional[List[str]] = None
    self._comment_line = 0
    self._pending_tag: Optional[Tag] = None
    self._pending_tag_line = 0
    self._last_block: Optional[CodeBlock] = None
    self._awaiting_output: Optional[CodeBlock] = None
    self._anchors: Counter = Counter()

  def finding(self, line: int, check: CheckEnum, message: str):
    self.document.findings.append(
        Finding(
            path=self.document.path, line=line, check=check, message=message))

  def feed(self, lineno: int, line: str):
    if self._fence is not None:
      if self._fence.closes(line):
        self._close_fence()
      else:
        self._fence.lines.append(line)
      return

    if self._comment is not None:
      self._feed_comment(line)
      return

    match = FENCE_RE.match(line)
    if match:
      self._open_fence(lineno, match.group("fence"), match.group("info"))
      return

    stripped = line.strip()
    if not stripped:
      return

    if stripped.startswith(COMMENT_START) and stripped[len(
        COMMENT_START):].lstrip().startswith(TAG_TITLE):
      self._drop_pending_tag()
      self._comment = []
      self._comment_line = lineno
      self._feed_comment(stripped[len(COMMENT_START):].lstrip())
      return

    self._drop_pending_tag()
    if OUTPUT_RE.match(line):
      self._awaiting_output = self._last_block
      self._last_block = None
      return
    self._last_block = None
    self._awaiting_output = None

    heading = HEADING_RE.match(line)
    if heading:
      self._add_heading(lineno, heading)
    self._add_links(lineno, line)

  def finish(self):
    if self._fence is not None:
      self.finding(
          self._fence.line,
          CheckEnum.FENCE,
          f"unterminated code fence '{self._fence.marker}'")
      self._fence = None
    if self._comment is not None:
      self.finding(
          self._comment_line, CheckEnum.TAG, "unterminated tag comment")
      self._comment = None
    self._drop_pending_tag()
    return self.document

  def _feed_comment(self, line: str):
    line = line.rstrip("\r\n")
    end = line.find(COMMENT_END)
    if end < 0:
      self._comment.append(line)
      return
    self._comment.append(line[:end])
    content = "\n".join(self._comment) + "\n"
    self._comment = None
    try:
      self._pending_tag = parse_tag(content)
      self._pending_tag_line = self._comment_line
    except (yaml.YAMLError, ValueError, TypeError,
            pydantic.ValidationError) as err:
      self.finding(self._comment_line, CheckEnum.TAG, f"invalid tag: {err}")

  def _drop_pending_tag(self):
    if self._pending_tag is not None:
      self.finding(
          self._pending_tag_line,
          CheckEnum.TAG,
          f"tag '{self._pending_tag.name}' is not followed by a code block")
      self._pending_tag = None

  def _open_fence(self, lineno: int, marker: str, info: str):
    tag = self._pending_tag
    self._pending_tag = None
    self._fence = _Fence(marker, info, lineno, tag)

  def _close_fence(self):
    fence = self._fence
    self._fence = None
    code = "".join(fence.lines)
    if self._awaiting_output is not None:
      self._awaiting_output.output = code
      self._awaiting_output.output_line = fence.line
      self._awaiting_output = None
      self._last_block = None
      return
    language = fence.info.split()[0] if fence.info else ""
    block = CodeBlock(
        language=language, code=code, line=fence.line, tag=fence.tag)
    self.document.blocks.append(block)
    self._last_block = block

  def _add_heading(self, lineno: int, match):
    title = match.group("title")
    anchor = slugify(title)
    count = self._anchors[anchor]
    self._anchors[anchor] += 1
    if count:
      anchor = f"{anchor}-{count}"
    self.document.headings.append(
        Heading(
            title=title,
            level=len(match.group("hashes")),
            anchor=anchor,
            line=lineno))

  def _add_links(self, lineno: int, line: str):
    reference = REFERENCE_RE.match(line)
    if reference:
      self.document.links.append(
          Link(
              text=reference.group("text"),
              target=reference.group("target"),
              line=lineno))
      return
    text = INLINE_CODE_RE.sub("", line)
    for match in INLINE_LINK_RE.finditer(text):
      self.document.links.append(
          Link(
              text=match.group("text"),
              target=match.group("target"),
              line=lineno))
    for match in AUTOLINK_RE.finditer(text):
      self.document.links.append(
          Link(target=match.group("target"), line=lineno))


def parse(text: str, path: str = "<string>") -> Document:
  """
  Parse a Markdown document.

  Malformed input (an unterminated fence, an invalid or dangling tag) does
  not raise: it is reported in ``Document.findings``.

  Args:
    text: the Markdown source.
    path: the path reported in findings.

  Returns:
    A Document with code blocks, links and headings.
  """
  parser = _Parser(path)
  for lineno, line in enumerate(text.splitlines(keepends=True), start=1):
    parser.feed(lineno, line)
  document = parser.finish()
  _LOGGER.debug(
      "parsed %s: %d code blocks, %d links, %d headings",
      path,
      len(document.blocks),
      len(document.links),
      len(document.headings))
  return document
