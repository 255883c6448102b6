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

"""Helpers to compare printed pipeline output with documented output."""

# pytype: skip-file

import ast

import apache_beam as beam
from apache_beam.testing.util import assert_that
from apache_beam.testing.util import equal_to


def stdout_to_python_object(elem_str):
  """Parses a printed element back into a Python object.

  Lines that are Python literals (numbers, strings, tuples, lists, dicts) are
  evaluated; anything else is returned as the stripped string. Objects that
  are not strings are returned unchanged.
  """
  if not isinstance(elem_str, str):
    return elem_str
  elem_str = elem_str.strip()
  try:
    return ast.literal_eval(elem_str)
  except (SyntaxError, ValueError):
    return elem_str


def assert_matches_stdout(
    actual, expected_stdout, normalize_fn=lambda elem: elem, label=''):
  """Asserts a PCollection of strings matches the expected stdout elements.

  Args:
    actual (beam.PCollection): A PCollection.
    expected (List[str]): A list of stdout elements, one line per element.
    normalize_fn (Function[any]): A function to normalize elements before
        comparing them. Can be used to sort lists before comparing.
    label (str): [optional] Label to make transform names unique.
  """
  def normalize(elem_str):
    return normalize_fn(stdout_to_python_object(elem_str))

  actual = actual | label >> beam.Map(normalize)
  expected = list(map(normalize, expected_stdout))
  assert_that(actual, equal_to(expected), 'assert ' + label)


def diff_stdout(actual_stdout, expected_stdout, ordered=False):
  """Compares printed lines with documented lines outside of a pipeline.

  Blank lines are ignored on both sides.

  Args:
    actual_stdout: lines printed by a pipeline.
    expected_stdout: lines the documentation promises.
    ordered: when False (the default) the lines are compared as multisets,
      since a runner makes no ordering guarantee.

  Returns:
    A ``(missing, unexpected)`` pair of lists of lines: documented lines
    that were not printed, and printed lines that were not documented. Both
    are empty when the output matches.
  """
  actual = [line for line in actual_stdout if line.strip()]
  expected = [line for line in expected_stdout if line.strip()]
  actual_objs = [stdout_to_python_object(line) for line in actual]
  expected_objs = [stdout_to_python_object(line) for line in expected]

  if ordered:
    if actual_objs == expected_objs:
      return [], []
    return expected, actual

  unmatched = list(range(len(actual_objs)))
  missing = []
  for line, obj in zip(expected, expected_objs):
    for position, index in enumerate(unmatched):
      if actual_objs[index] == obj:
        del unmatched[position]
        break
    else:
      missing.append(line)
  unexpected = [actual[index] for index in unmatched]
  return missing, unexpected
