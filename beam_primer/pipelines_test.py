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

"""Tests for pipeline construction and composite transforms."""

# pytype: skip-file

import logging
import os
import re
import shutil
import tempfile
import unittest

import apache_beam as beam
from apache_beam.metrics.metric import MetricsFilter
from apache_beam.testing.test_pipeline import TestPipeline
from apache_beam.testing.test_utils import read_files_from_pattern
from apache_beam.testing.util import assert_that
from apache_beam.testing.util import equal_to
from beam_primer import pipelines


class CompositeTransformsTest(unittest.TestCase):
  def test_reverse_words(self):
    with TestPipeline() as p:
      reversed_words = (
          p | beam.Create(['beam', 'pipeline']) | pipelines.ReverseWords())
      assert_that(reversed_words, equal_to(['maeb', 'enilepip']))

  def test_compute_word_lengths(self):
    with TestPipeline() as p:
      lengths = (
          p | beam.Create(['a', 'ab', 'abc']) | pipelines.ComputeWordLengths())
      assert_that(lengths, equal_to([1, 2, 3]))

  def test_keys(self):
    occurrences = [('cat', 1), ('cat', 5), ('dog', 5), ('cat', 9), ('dog', 2)]
    with TestPipeline() as p:
      keys = p | beam.Create(occurrences) | pipelines.Keys()
      assert_that(keys, equal_to(['cat', 'cat', 'dog', 'cat', 'dog']))

  def test_count_words(self):
    lines = ['the cat sat', '', 'the dog sat down']
    with TestPipeline() as p:
      counts = p | beam.Create(lines) | pipelines.CountWords()
      assert_that(
          counts,
          equal_to([('the', 2), ('cat', 1), ('sat', 2), ('dog', 1),
                    ('down', 1)]))

  def test_format_count(self):
    self.assertEqual(pipelines.format_count(('beam', 3)), 'beam: 3')


class ExtractWordsFnTest(unittest.TestCase):
  def test_metrics(self):
    p = TestPipeline()
    _ = (
        p
        | beam.Create(['a bb', '', 'ccc'])
        | beam.ParDo(pipelines.ExtractWordsFn()))
    result = p.run()

    counters = result.metrics().query(
        MetricsFilter().with_name('words'))['counters']
    self.assertEqual(counters[0].committed, 3)
    empty_lines = result.metrics().query(
        MetricsFilter().with_name('empty_lines'))['counters']
    self.assertEqual(empty_lines[0].committed, 1)
    distributions = result.metrics().query(
        MetricsFilter().with_name('word_len_dist'))['distributions']
    self.assertEqual(distributions[0].committed.sum, 6)


class RunWordCountTest(unittest.TestCase):
  SAMPLE_TEXT = ['a b c a b a', '', ' aa bb cc aa bb aa']

  def setUp(self):
    self.temp_dir = tempfile.mkdtemp()

  def tearDown(self):
    shutil.rmtree(self.temp_dir)

  def test_writes_counts(self):
    output = os.path.join(self.temp_dir, 'counts')
    pipelines.run_word_count(self.SAMPLE_TEXT, output)

    results = []
    for line in read_files_from_pattern(output + '*').splitlines():
      match = re.search(r'(\S+): ([0-9]+)', line)
      if match is not None:
        results.append((match.group(1), int(match.group(2))))
    self.assertEqual(
        sorted(results),
        sorted([('a', 3), ('b', 2), ('c', 1), ('aa', 3), ('bb', 2),
                ('cc', 1)]))


if __name__ == '__main__':
  logging.getLogger().setLevel(logging.INFO)
  unittest.main()
