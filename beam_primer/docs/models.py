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
Models of a parsed Markdown document and of the defects found in it
"""

from enum import Enum
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class CheckEnum(str, Enum):
  FENCE = "fence"
  TAG = "tag"
  SYNTAX = "syntax"
  LINK = "link"
  OUTPUT = "output"


class Tag(BaseModel):
  """
  Tag represents the beam-primer YAML embedded in an HTML comment directly
  above a code block:

      <!-- beam-primer:
        name: group_by_key
        ordered: false
      -->
  """
  model_config = ConfigDict(extra="forbid")

  name: str = Field(..., min_length=1)
  """
  Name of the snippet, used in log messages.
  """

  description: str = ""

  run: bool = True
  """
  Whether the snippet is executed to compare its output. Set to false for
  snippets that need external resources.
  """

  ordered: bool = False
  """
  Compare printed lines in order instead of as a multiset.
  """

  pipeline_options: str = ""
  """
  Extra command line arguments for the snippet, e.g. "--runner DirectRunner".
  """


class CodeBlock(BaseModel):
  """
  A fenced code block. ``line`` is the 1-based line of the opening fence.
  """
  language: str = ""
  code: str = ""
  line: int = Field(..., gt=0)
  tag: Optional[Tag] = None
  output: Optional[str] = None
  output_line: Optional[int] = None


class Link(BaseModel):
  text: str = ""
  target: str = Field(..., min_length=1)
  line: int = Field(..., gt=0)


class Heading(BaseModel):
  title: str
  level: int = Field(..., ge=1, le=6)
  anchor: str
  line: int = Field(..., gt=0)


class Finding(BaseModel):
  path: str
  line: int = Field(..., ge=0)
  check: CheckEnum
  message: str

  def __str__(self):
    return f"{self.path}:{self.line}: [{self.check.value}] {self.message}"


class Document(BaseModel):
  path: str
  blocks: List[CodeBlock] = []
  links: List[Link] = []
  headings: List[Heading] = []
  findings: List[Finding] = []
