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
Configuration for the documentation checker
"""

import os
from dataclasses import dataclass
from dataclasses import field

from beam_primer.docs.constants import CHECK_EXTERNAL_LINKS_ENV_VAR_KEY
from beam_primer.docs.constants import LINK_TIMEOUT_ENV_VAR_KEY
from beam_primer.docs.constants import SNIPPET_TIMEOUT_ENV_VAR_KEY

TAG_TITLE = "beam-primer:"
TAG_KEY = "beam-primer"
PYTHON_LANGUAGES = ("python", "py", "python3")
YAML_LANGUAGES = ("yaml", "yml")
JSON_LANGUAGES = ("json", )
EXTERNAL_SCHEMES = ("http", "https")


def _env_flag(key, default=False):
  value = os.getenv(key)
  if value is None:
    return default
  return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
  """
  Settings of a checker run. Defaults come from the environment.
  """
  snippet_timeout: int = field(
      default_factory=lambda: int(
          os.getenv(SNIPPET_TIMEOUT_ENV_VAR_KEY, "300")))
  link_timeout: float = field(
      default_factory=lambda: float(os.getenv(LINK_TIMEOUT_ENV_VAR_KEY, "10")))
  check_external_links: bool = field(
      default_factory=lambda: _env_flag(CHECK_EXTERNAL_LINKS_ENV_VAR_KEY))
  run_outputs: bool = True
