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
Checks that a primer document is accurate

  * every fenced Python, YAML or JSON block parses;
  * every link resolves: in-page anchors name a heading, relative paths exist
    and, when enabled, web links answer without an error status;
  * every Python block followed by an ``Output:`` block prints exactly the
    documented lines when executed.

Usage::

  python -m beam_primer.docs.checker README.md [--check_external_links]

Exits with status 1 when any finding is reported.
"""

import argparse
import ast
import dataclasses
import json
import logging
import os
import shlex
import subprocess
import sys
import tempfile
import urllib.parse
from typing import Dict
from typing import List
from typing import Optional

import requests
import yaml

from beam_primer.docs import markdown
from beam_primer.docs.config import EXTERNAL_SCHEMES
from beam_primer.docs.config import JSON_LANGUAGES
from beam_primer.docs.config import PYTHON_LANGUAGES
from beam_primer.docs.config import YAML_LANGUAGES
from beam_primer.docs.config import Config
from beam_primer.docs.logger import setup_logger
from beam_primer.docs.models import CheckEnum
from beam_primer.docs.models import CodeBlock
from beam_primer.docs.models import Document
from beam_primer.docs.models import Finding
from beam_primer.util import diff_stdout

_LOGGER = logging.getLogger(__name__)

# Servers that refuse HEAD requests answer with one of these.
_RETRY_WITH_GET = (403, 405)
_STDERR_TAIL_LINES = 5


class SnippetError(Exception):
  """Raised when a documented snippet exits with a non-zero status."""
  def __init__(self, returncode: int, stderr: str):
    self.returncode = returncode
    self.stderr = stderr
    tail = "\n".join(stderr.strip().splitlines()[-_STDERR_TAIL_LINES:])
    super().__init__(f"snippet exited with status {returncode}: {tail}")


class DocChecker:
  """
  Runs the documentation checks.

  Args:
    config: checker settings; read from the environment when omitted.
    session: requests session used for external links.
  """
  def __init__(
      self,
      config: Optional[Config] = None,
      session: Optional[requests.Session] = None):
    self._config = config or Config()
    self._session = session or requests.Session()
    self._url_cache: Dict[str, Optional[str]] = {}

  def check_file(self, path: str) -> List[Finding]:
    with open(path, encoding="utf-8") as doc_file:
      text = doc_file.read()
    document = markdown.parse(text, path)
    return self.check_document(document, os.path.dirname(os.path.abspath(path)))

  def check_document(self, document: Document, base_dir: str) -> List[Finding]:
    findings = list(document.findings)
    findings.extend(self.check_syntax(document))
    findings.extend(self.check_links(document, base_dir))
    if self._config.run_outputs:
      findings.extend(self.check_outputs(document, base_dir))
    findings.sort(key=lambda finding: finding.line)
    _LOGGER.info(
        "%s: %d code blocks, %d links, %d findings",
        document.path,
        len(document.blocks),
        len(document.links),
        len(findings))
    return findings

  def check_syntax(self, document: Document) -> List[Finding]:
    findings = []
    for block in document.blocks:
      language = block.language.lower()
      error = None
      if language in PYTHON_LANGUAGES:
        error = _python_syntax_error(block)
      elif language in YAML_LANGUAGES:
        error = _yaml_syntax_error(block)
      elif language in JSON_LANGUAGES:
        error = _json_syntax_error(block)
      if error is not None:
        line, message = error
        findings.append(
            Finding(
                path=document.path,
                line=line,
                check=CheckEnum.SYNTAX,
                message=message))
    return findings

  def check_links(self, document: Document, base_dir: str) -> List[Finding]:
    anchors = {heading.anchor for heading in document.headings}
    findings = []
    for link in document.links:
      message = self._check_link(link.target, anchors, base_dir)
      if message is not None:
        findings.append(
            Finding(
                path=document.path,
                line=link.line,
                check=CheckEnum.LINK,
                message=f"{link.target}: {message}"))
    return findings

  def check_outputs(self, document: Document, base_dir: str) -> List[Finding]:
    findings = []
    for block in document.blocks:
      if block.output is None:
        continue
      if block.language.lower() not in PYTHON_LANGUAGES:
        continue
      if block.tag is not None and not block.tag.run:
        _LOGGER.info("skipping snippet %s (run: false)", block.tag.name)
        continue
      message = self._check_output(block, base_dir)
      if message is not None:
        findings.append(
            Finding(
                path=document.path,
                line=block.line,
                check=CheckEnum.OUTPUT,
                message=message))
    return findings

  def run_snippet(
      self, code: str, cwd: str, args: Optional[List[str]] = None) -> str:
    """
    Execute a snippet with the current interpreter and return its stdout.

    Raises:
      SnippetError: if the snippet exits with a non-zero status.
      subprocess.TimeoutExpired: if it runs longer than the configured
        snippet timeout.
    """
    fd, path = tempfile.mkstemp(suffix=".py", prefix="beam_primer_snippet_")
    try:
      with os.fdopen(fd, "w", encoding="utf-8") as snippet_file:
        snippet_file.write(code)
      completed = subprocess.run(
          [sys.executable, path] + list(args or []),
          cwd=cwd,
          capture_output=True,
          text=True,
          timeout=self._config.snippet_timeout,
          check=False)
    finally:
      os.remove(path)
    if completed.returncode != 0:
      raise SnippetError(completed.returncode, completed.stderr)
    return completed.stdout

  def _check_output(self, block: CodeBlock, base_dir: str) -> Optional[str]:
    name = block.tag.name if block.tag is not None else f"line {block.line}"
    args = shlex.split(block.tag.pipeline_options) if block.tag else []
    ordered = block.tag.ordered if block.tag else False
    _LOGGER.info("running snippet %s", name)
    try:
      stdout = self.run_snippet(block.code, base_dir, args)
    except subprocess.TimeoutExpired:
      return f"snippet timed out after {self._config.snippet_timeout}s"
    except SnippetError as err:
      return str(err)

    missing, unexpected = diff_stdout(
        stdout.splitlines(), block.output.splitlines(), ordered=ordered)
    if not missing and not unexpected:
      return None
    parts = []
    if missing:
      parts.append("documented but not printed: " + "; ".join(missing))
    if unexpected:
      parts.append("printed but not documented: " + "; ".join(unexpected))
    return "output does not match: " + " | ".join(parts)

  def _check_link(self, target: str, anchors, base_dir: str) -> Optional[str]:
    parsed = urllib.parse.urlparse(target)
    if parsed.scheme in EXTERNAL_SCHEMES:
      if not self._config.check_external_links:
        return None
      return self._check_url(target)
    if parsed.scheme:
      # mailto:, ftp: and friends are not checked.
      return None
    if target.startswith("#"):
      if target[1:] not in anchors:
        return "no heading with this anchor"
      return None

    path, _, fragment = target.partition("#")
    resolved = os.path.normpath(
        os.path.join(base_dir, urllib.parse.unquote(path)))
    if not os.path.exists(resolved):
      return "file does not exist"
    if fragment and resolved.endswith(".md") and os.path.isfile(resolved):
      with open(resolved, encoding="utf-8") as linked_file:
        linked = markdown.parse(linked_file.read(), resolved)
      if fragment not in {heading.anchor for heading in linked.headings}:
        return f"no heading with anchor '{fragment}' in {path}"
    return None

  def _check_url(self, url: str) -> Optional[str]:
    if url in self._url_cache:
      return self._url_cache[url]
    timeout = self._config.link_timeout
    try:
      response = self._session.head(
          url, allow_redirects=True, timeout=timeout)
      if response.status_code in _RETRY_WITH_GET:
        response = self._session.get(
            url, allow_redirects=True, timeout=timeout, stream=True)
        response.close()
    except requests.RequestException as err:
      message = f"unreachable: {err}"
    else:
      message = (
          f"HTTP {response.status_code}"
          if response.status_code >= 400 else None)
    _LOGGER.debug("checked %s: %s", url, message or "ok")
    self._url_cache[url] = message
    return message


def _python_syntax_error(block: CodeBlock):
  try:
    ast.parse(block.code)
  except SyntaxError as err:
    return block.line + (err.lineno or 1), f"invalid Python: {err.msg}"
  return None


def _yaml_syntax_error(block: CodeBlock):
  try:
    list(yaml.safe_load_all(block.code))
  except yaml.YAMLError as err:
    mark = getattr(err, "problem_mark", None)
    offset = mark.line + 1 if mark is not None else 1
    problem = getattr(err, "problem", None) or str(err)
    return block.line + offset, f"invalid YAML: {problem}"
  return None


def _json_syntax_error(block: CodeBlock):
  try:
    json.loads(block.code)
  except json.JSONDecodeError as err:
    return block.line + err.lineno, f"invalid JSON: {err.msg}"
  return None


def parse_args(argv=None) -> argparse.Namespace:
  parser = argparse.ArgumentParser(
      description="Check code blocks, links and documented output.")
  parser.add_argument("paths", nargs="+", help="Markdown files to check")
  parser.add_argument(
      "--check_external_links",
      action="store_true",
      default=None,
      help="also request http(s) links")
  parser.add_argument(
      "--skip_outputs",
      action="store_true",
      default=False,
      help="do not execute snippets to compare their output")
  parser.add_argument(
      "--snippet_timeout",
      type=int,
      default=None,
      help="seconds a snippet may run")
  parser.add_argument("-v", "--verbose", action="store_true")
  return parser.parse_args(argv)


def main(argv=None) -> int:
  args = parse_args(argv)
  setup_logger(logging.DEBUG if args.verbose else logging.INFO)

  config = Config()
  overrides = {}
  if args.check_external_links is not None:
    overrides["check_external_links"] = args.check_external_links
  if args.snippet_timeout is not None:
    overrides["snippet_timeout"] = args.snippet_timeout
  if args.skip_outputs:
    overrides["run_outputs"] = False
  config = dataclasses.replace(config, **overrides)

  checker = DocChecker(config)
  findings = []
  for path in args.paths:
    findings.extend(checker.check_file(path))
  for finding in findings:
    _LOGGER.error("%s", finding)
  if findings:
    _LOGGER.error("%d finding(s)", len(findings))
    return 1
  _LOGGER.info("all checks passed")
  return 0


if __name__ == "__main__":
  sys.exit(main())
