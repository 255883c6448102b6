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

"""Tests that every catalog example prints its documented output."""

# pytype: skip-file

import logging
import unittest

from parameterized import parameterized

import apache_beam as beam
from apache_beam.options.pipeline_options import StandardOptions
from apache_beam.testing.test_pipeline import TestPipeline
from beam_primer import catalog
from beam_primer.util import assert_matches_stdout


class CatalogExamplesTest(unittest.TestCase):
  @parameterized.expand([(example.name, )
                         for example in catalog.list_examples()])
  def test_documented_output(self, name):
    example = catalog.get_example(name)
    options = catalog.pipeline_options_for(example, save_main_session=False)
    with TestPipeline(options=options) as p:
      actual = example.build(p) | 'ToStdout' >> beam.Map(str)
      assert_matches_stdout(actual, example.expected)


class CatalogTest(unittest.TestCase):
  def test_list_examples_is_sorted(self):
    names = [example.name for example in catalog.list_examples()]
    self.assertEqual(names, sorted(names))
    self.assertIn('group_by_key', names)
    self.assertIn('early_late_triggers', names)

  def test_every_example_documents_output(self):
    for example in catalog.list_examples():
      self.assertTrue(example.expected, example.name)
      self.assertTrue(example.question.endswith('?'), example.name)

  def test_unknown_example(self):
    with self.assertRaisesRegex(ValueError, "Unknown example 'nope'"):
      catalog.get_example('nope')

  def test_duplicate_registration(self):
    with self.assertRaisesRegex(ValueError, 'already registered'):
      catalog.register('map', 'Again?', ['1'])(lambda p: p)

  def test_streaming_examples_use_streaming_options(self):
    example = catalog.get_example('early_late_triggers')
    self.assertTrue(example.streaming)
    options = catalog.pipeline_options_for(example)
    self.assertTrue(options.view_as(StandardOptions).streaming)

  def test_group_by_key_documented_output(self):
    self.assertEqual(
        catalog.get_example('group_by_key').expected,
        ["('fruit', ['apple', 'banana'])", "('veg', ['carrot'])"])


if __name__ == '__main__':
  logging.getLogger().setLevel(logging.INFO)
  unittest.main()
