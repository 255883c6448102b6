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

"""Tests for the core transforms."""

# pytype: skip-file

import logging
import unittest

from parameterized import parameterized

import apache_beam as beam
from apache_beam.testing.test_pipeline import TestPipeline
from apache_beam.testing.util import assert_that
from apache_beam.testing.util import equal_to
from beam_primer import core_transforms


class ElementWiseTest(unittest.TestCase):
  def test_map(self):
    with TestPipeline() as p:
      squares = p | beam.Create([1, 2, 3, 4]) | beam.Map(core_transforms.square)
      assert_that(squares, equal_to([1, 4, 9, 16]))

  def test_filter(self):
    with TestPipeline() as p:
      evens = (
          p | beam.Create(range(1, 11)) | beam.Filter(core_transforms.is_even))
      assert_that(evens, equal_to([2, 4, 6, 8, 10]))

  def test_flat_map(self):
    with TestPipeline() as p:
      words = (
          p
          | beam.Create(['To be, or not', "isn't it"])
          | beam.FlatMap(core_transforms.find_words))
      assert_that(words, equal_to(['To', 'be', 'or', 'not', "isn't", 'it']))

  def test_pardo(self):
    with TestPipeline() as p:
      lengths = (
          p
          | beam.Create(['aa', 'bbb', 'c'])
          | beam.ParDo(core_transforms.ComputeWordLengthFn()))
      assert_that(lengths, equal_to([2, 3, 1]))

  def test_pardo_with_tagged_outputs(self):
    with TestPipeline() as p:
      results = (
          p
          | beam.Create([1, 2, 3, 4, 5])
          | beam.ParDo(core_transforms.SplitByParityFn()).with_outputs(
              core_transforms.EVEN_TAG, core_transforms.ODD_TAG))
      assert_that(
          results[core_transforms.EVEN_TAG], equal_to([2, 4]), label='even')
      assert_that(
          results[core_transforms.ODD_TAG], equal_to([1, 3, 5]), label='odd')


class GroupingTest(unittest.TestCase):
  def test_group_and_sort(self):
    produce = [('fruit', 'banana'), ('fruit', 'apple'), ('veg', 'carrot')]
    with TestPipeline() as p:
      grouped = p | beam.Create(produce) | core_transforms.GroupAndSort()
      assert_that(
          grouped,
          equal_to([('fruit', ['apple', 'banana']), ('veg', ['carrot'])]))

  def test_sorted_values(self):
    self.assertEqual(
        core_transforms.sorted_values(('k', iter([3, 1, 2]))), ('k', [1, 2, 3]))

  def test_join_contacts(self):
    with TestPipeline() as p:
      emails = p | 'emails' >> beam.Create([
          ('amy', 'amy@example.com'),
          ('carl', 'carl@example.com'),
          ('amy', 'amy@work.example.com'),
      ])
      phones = p | 'phones' >> beam.Create([
          ('amy', '111-222-3333'),
          ('james', '222-333-4444'),
      ])
      joined = {
          'emails': emails, 'phones': phones
      } | core_transforms.JoinContacts()
      assert_that(
          joined,
          equal_to([
              ('amy', {
                  'emails': ['amy@example.com', 'amy@work.example.com'],
                  'phones': ['111-222-3333']
              }),
              ('carl', {
                  'emails': ['carl@example.com'], 'phones': []
              }),
              ('james', {
                  'emails': [], 'phones': ['222-333-4444']
              }),
          ]))

  def test_sum_per_key(self):
    occurrences = [('cat', 1), ('cat', 5), ('dog', 5), ('cat', 9), ('dog', 2)]
    with TestPipeline() as p:
      sums = p | beam.Create(occurrences) | core_transforms.SumPerKey()
      assert_that(sums, equal_to([('cat', 15), ('dog', 7)]))


class PartitionTest(unittest.TestCase):
  def test_by_modulo(self):
    self.assertEqual(core_transforms.by_modulo(7, 3), 1)

  def test_partition_by_modulo(self):
    with TestPipeline() as p:
      labelled = (
          p
          | beam.Create([1, 2, 3, 4, 5, 6])
          | core_transforms.PartitionByModulo(3))
      assert_that(
          labelled,
          equal_to([(1, 1), (2, 2), (0, 3), (1, 4), (2, 5), (0, 6)]))

  def test_invalid_partition_count(self):
    with self.assertRaisesRegex(ValueError, 'num_partitions'):
      core_transforms.PartitionByModulo(0)

  @parameterized.expand([(2.5, ), ('3', ), (None, ), (True, )])
  def test_non_integer_partition_count(self, num_partitions):
    with self.assertRaisesRegex(ValueError, 'positive integer'):
      core_transforms.PartitionByModulo(num_partitions)


if __name__ == '__main__':
  logging.getLogger().setLevel(logging.INFO)
  unittest.main()
