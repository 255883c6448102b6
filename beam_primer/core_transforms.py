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

"""The core transforms: element-wise, grouping and multi-output.

Map, FlatMap and Filter take plain callables; ParDo takes a DoFn whose
``process`` method may emit zero or more elements, optionally to tagged
outputs. GroupByKey and CoGroupByKey group key/value pairs; Combine reduces
them. Partition splits one PCollection into several and Flatten merges
several back into one.
"""

# pytype: skip-file

import re

import apache_beam as beam
from apache_beam import pvalue

EVEN_TAG = 'even'
ODD_TAG = 'odd'


def square(x):
  return x * x


def is_even(x):
  return x % 2 == 0


def find_words(line):
  return re.findall(r'[A-Za-z\']+', line)


class ComputeWordLengthFn(beam.DoFn):
  def process(self, element):
    yield len(element)


class SplitByParityFn(beam.DoFn):
  """Emits even numbers to the ``even`` output and odd ones to ``odd``."""
  def process(self, element):
    if is_even(element):
      yield pvalue.TaggedOutput(EVEN_TAG, element)
    else:
      yield pvalue.TaggedOutput(ODD_TAG, element)


def sorted_values(key_values):
  (key, values) = key_values
  return (key, sorted(values))


class GroupAndSort(beam.PTransform):
  """GroupByKey followed by sorting each group.

  The order of the values in a group is not defined by the model; sorting
  them makes the printed output reproducible.
  """
  def expand(self, pcoll):
    return (
        pcoll
        | 'GroupByKey' >> beam.GroupByKey()
        | 'SortValues' >> beam.Map(sorted_values))


class JoinContacts(beam.PTransform):
  """Joins ``emails`` and ``phones`` keyed by name with CoGroupByKey.

  The input is a dict of the two PCollections; each output element is
  ``(name, {'emails': [...], 'phones': [...]})``.
  """
  def expand(self, pcolls):
    def sort_info(name_info):
      (name, info) = name_info
      return (name, {tag: sorted(values) for tag, values in info.items()})

    return (
        pcolls
        | 'CoGroupByKey' >> beam.CoGroupByKey()
        | 'SortInfo' >> beam.Map(sort_info))


class SumPerKey(beam.PTransform):
  def expand(self, pcoll):
    return pcoll | 'SumPerKey' >> beam.CombinePerKey(sum)


def by_modulo(element, num_partitions):
  return element % num_partitions


class PartitionByModulo(beam.PTransform):
  """Partitions integers by ``element % num_partitions``.

  The partitions are flattened back together and every element is tagged
  with the index of the partition it landed in.
  """
  def __init__(self, num_partitions):
    super().__init__()
    if (not isinstance(num_partitions, int) or isinstance(num_partitions, bool)
        or num_partitions < 1):
      raise ValueError(
          'num_partitions must be a positive integer, got %r' %
          num_partitions)
    self._num_partitions = num_partitions

  def expand(self, pcoll):
    partitions = pcoll | 'Partition' >> beam.Partition(
        by_modulo, self._num_partitions)
    labelled = [
        partitions[index]
        | 'Label%d' % index >> beam.Map(lambda x, index=index: (index, x))
        for index in range(self._num_partitions)
    ]
    return tuple(labelled) | 'Flatten' >> beam.Flatten()
