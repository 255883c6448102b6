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

"""A catalog of named, runnable examples and the output they document.

Every entry answers one question of the primer. ``build`` receives the root
of a pipeline and returns the PCollection whose elements are printed; the
``expected`` lines are exactly what the documentation shows under "Output:".
Examples marked ``streaming`` read from a ``TestStream`` and need a runner in
streaming mode.
"""

# pytype: skip-file

import logging
from typing import Callable
from typing import Dict
from typing import List
from typing import NamedTuple

import apache_beam as beam
from apache_beam.testing.test_stream import TestStream
from apache_beam.transforms import window
from apache_beam.transforms.window import TimestampedValue
from beam_primer import core_transforms
from beam_primer import pipelines
from beam_primer import side_inputs
from beam_primer import windowing
from beam_primer.options import make_pipeline_options

_LOGGER = logging.getLogger(__name__)


class Example(NamedTuple):
  name: str
  question: str
  build: Callable[[beam.Pipeline], beam.PCollection]
  expected: List[str]
  streaming: bool = False


_EXAMPLES = {}  # type: Dict[str, Example]


def register(name, question, expected, streaming=False):
  """Registers the decorated build function under ``name``."""
  def wrapper(build):
    if name in _EXAMPLES:
      raise ValueError('Example %r is already registered.' % name)
    _EXAMPLES[name] = Example(name, question, build, list(expected), streaming)
    return build

  return wrapper


def get_example(name):
  try:
    return _EXAMPLES[name]
  except KeyError:
    raise ValueError(
        'Unknown example %r; choose one of: %s' %
        (name, ', '.join(sorted(_EXAMPLES)))) from None


def list_examples():
  return [_EXAMPLES[name] for name in sorted(_EXAMPLES)]


def pipeline_options_for(example, argv=None, save_main_session=True):
  return make_pipeline_options(
      argv, streaming=example.streaming, save_main_session=save_main_session)


@register(
    'create',
    'How do you create a PCollection from in-memory data?',
    ['Hello', 'Beam'])
def create(p):
  return p | 'Create' >> beam.Create(['Hello', 'Beam'])


@register(
    'map',
    'What does Map do?',
    ['1', '4', '9', '16', '25'])
def map_squares(p):
  return (
      p
      | 'Create' >> beam.Create([1, 2, 3, 4, 5])
      | 'Square' >> beam.Map(core_transforms.square))


@register(
    'flat_map',
    'How is FlatMap different from Map?',
    ['To', 'be', 'or', 'not', 'to', 'be'])
def flat_map_words(p):
  return (
      p
      | 'Create' >> beam.Create(['To be, or not to be'])
      | 'Split' >> beam.FlatMap(core_transforms.find_words))


@register(
    'filter',
    'How do you drop elements from a PCollection?',
    ['2', '4', '6', '8', '10'])
def filter_even(p):
  return (
      p
      | 'Create' >> beam.Create(range(1, 11))
      | 'KeepEven' >> beam.Filter(core_transforms.is_even))


@register(
    'pardo',
    'What is a DoFn and how is it applied with ParDo?',
    ['2', '3', '1'])
def pardo_word_lengths(p):
  return (
      p
      | 'Create' >> beam.Create(['aa', 'bbb', 'c'])
      | 'Lengths' >> beam.ParDo(core_transforms.ComputeWordLengthFn()))


@register(
    'pardo_tagged_outputs',
    'Can a ParDo produce more than one output?',
    ["('odd', 1)", "('even', 2)", "('odd', 3)", "('even', 4)", "('odd', 5)"])
def pardo_tagged_outputs(p):
  results = (
      p
      | 'Create' >> beam.Create([1, 2, 3, 4, 5])
      | 'Split' >> beam.ParDo(core_transforms.SplitByParityFn()).with_outputs(
          core_transforms.EVEN_TAG, core_transforms.ODD_TAG))
  evens = results[core_transforms.EVEN_TAG] | 'LabelEven' >> beam.Map(
      lambda x: (core_transforms.EVEN_TAG, x))
  odds = results[core_transforms.ODD_TAG] | 'LabelOdd' >> beam.Map(
      lambda x: (core_transforms.ODD_TAG, x))
  return (evens, odds) | 'Merge' >> beam.Flatten()


@register(
    'group_by_key',
    'What does GroupByKey produce?',
    ["('fruit', ['apple', 'banana'])", "('veg', ['carrot'])"])
def group_by_key(p):
  return (
      p
      | 'Create' >> beam.Create([('fruit', 'apple'), ('fruit', 'banana'),
                                 ('veg', 'carrot')])
      | 'Group' >> core_transforms.GroupAndSort())


@register(
    'co_group_by_key',
    'How do you join two keyed PCollections?',
    [
        "('amy', {'emails': ['amy@example.com'], 'phones': ['555-0101']})",
        "('carl', {'emails': ['carl@example.com'], 'phones': []})",
        "('james', {'emails': [], 'phones': ['555-0102']})",
    ])
def co_group_by_key(p):
  emails = p | 'Emails' >> beam.Create([('amy', 'amy@example.com'),
                                        ('carl', 'carl@example.com')])
  phones = p | 'Phones' >> beam.Create([('amy', '555-0101'),
                                        ('james', '555-0102')])
  return {'emails': emails, 'phones': phones} | 'Join' >> (
      core_transforms.JoinContacts())


@register(
    'combine_per_key',
    'When should you prefer CombinePerKey over GroupByKey?',
    ["('cat', 15)", "('dog', 7)"])
def combine_per_key(p):
  return (
      p
      | 'Create' >> beam.Create([('cat', 1), ('cat', 5), ('dog', 5),
                                 ('cat', 9), ('dog', 2)])
      | 'Sum' >> core_transforms.SumPerKey())


@register(
    'count_words',
    'What is a composite transform?',
    ['the: 2', 'cat: 1', 'sat: 2', 'dog: 1'])
def count_words(p):
  return (
      p
      | 'Create' >> beam.Create(['the cat sat', 'the dog sat'])
      | 'CountWords' >> pipelines.CountWords()
      | 'Format' >> beam.Map(pipelines.format_count))


@register(
    'partition',
    'How do you split one PCollection into several?',
    ['(1, 1)', '(2, 2)', '(0, 3)', '(1, 4)', '(2, 5)', '(0, 6)'])
def partition(p):
  return (
      p
      | 'Create' >> beam.Create([1, 2, 3, 4, 5, 6])
      | 'Partition' >> core_transforms.PartitionByModulo(3))


@register(
    'flatten',
    'How do you merge PCollections of the same type?',
    ['apple', 'banana', 'carrot'])
def flatten(p):
  fruits = p | 'Fruits' >> beam.Create(['apple', 'banana'])
  vegetables = p | 'Vegetables' >> beam.Create(['carrot'])
  return (fruits, vegetables) | 'Flatten' >> beam.Flatten()


@register(
    'side_input_singleton',
    'What is a side input?',
    ['ccc', 'dddd'])
def side_input_singleton(p):
  return (
      p
      | 'Create' >> beam.Create(['a', 'bb', 'ccc', 'dddd'])
      | 'LongerThanAverage' >> side_inputs.LongerThanAverage())


@register(
    'side_input_dict',
    'How do you look values up in another PCollection?',
    [
        "('Henry', 'Singapore', 'Singapore')",
        "('Jane', 'San Francisco', 'United States')",
        "('Lee', 'Beijing', 'China')",
    ])
def side_input_dict(p):
  cities_to_countries = p | 'Cities' >> beam.Create([
      ('Beijing', 'China'),
      ('San Francisco', 'United States'),
      ('Singapore', 'Singapore'),
  ])
  persons = p | 'Persons' >> beam.Create([('Henry', 'Singapore'),
                                          ('Jane', 'San Francisco'),
                                          ('Lee', 'Beijing')])
  return persons | 'Enrich' >> side_inputs.EnrichCountry(cities_to_countries)


def _timestamped_scores(p, values, scale=1):
  return (
      p
      | 'Create' >> beam.Create(values)
      | 'Key' >> beam.Map(lambda x: ('score', x))
      | 'Timestamp' >> beam.ParDo(
          windowing.AddTimestampDoFn(lambda kv: kv[1] * scale)))


@register(
    'fixed_windows',
    'What are fixed windows?',
    [
        "(0, 60, ('score', 110))",
        "(60, 120, ('score', 215))",
        "(120, 180, ('score', 120))",
    ])
def fixed_windows(p):
  return (
      _timestamped_scores(p, [22, 33, 55, 100, 115, 120])
      | 'Sum' >> windowing.WindowedSum(window.FixedWindows(60))
      | 'Format' >> beam.ParDo(windowing.FormatWindowFn()))


@register(
    'sliding_windows',
    'How do sliding windows differ from fixed windows?',
    [
        "(-25, 5, ('score', 2))",
        "(-20, 10, ('score', 2))",
        "(-15, 15, ('score', 2))",
        "(-10, 20, ('score', 18))",
        "(-5, 25, ('score', 41))",
        "(0, 30, ('score', 41))",
        "(5, 35, ('score', 39))",
        "(10, 40, ('score', 39))",
        "(15, 45, ('score', 39))",
        "(20, 50, ('score', 23))",
    ])
def sliding_windows(p):
  return (
      _timestamped_scores(p, [2, 16, 23])
      | 'Sum' >> windowing.WindowedSum(window.SlidingWindows(30, 5))
      | 'Format' >> beam.ParDo(windowing.FormatWindowFn()))


@register(
    'session_windows',
    'What is a session window?',
    ["(120, 1560, ('score', 29))", "(1620, 2220, ('score', 27))"])
def session_windows(p):
  return (
      _timestamped_scores(p, [2, 11, 16, 27], scale=60)
      | 'Sum' >> windowing.WindowedSum(window.Sessions(10 * 60))
      | 'Format' >> beam.ParDo(windowing.FormatWindowFn()))


@register(
    'early_late_triggers',
    'How do watermarks and triggers handle early and late data?',
    ["('a', 4)", "('b', 2)", "('a', 1)"],
    streaming=True)
def early_late_triggers(p):
  events = (
      TestStream()
      .advance_watermark_to(10)
      .add_elements(['a', 'a', 'a', 'b', 'b'])
      .add_elements([TimestampedValue('a', 10)])
      .advance_watermark_to(20)
      .advance_processing_time(60)
      .add_elements([TimestampedValue('a', 10)]))
  return (
      p
      | 'Events' >> events
      | 'Count' >> windowing.WindowedCount(
          window.FixedWindows(15),
          trigger=windowing.early_and_late_trigger(early_delay=60,
                                                   late_count=1),
          allowed_lateness=20))


@register(
    'repeated_trigger',
    'How can a window fire more than once?',
    ["('a', 3)", "('b', 2)", "('a', 100)"],
    streaming=True)
def repeated_trigger(p):
  events = (
      TestStream()
      .advance_watermark_to(10)
      .add_elements(['a', 'a'])
      .add_elements(['a', 'b', 'b'])
      .advance_processing_time(60)
      .add_elements(['a'] * 100))
  return (
      p
      | 'Events' >> events
      | 'Count' >> windowing.WindowedCount(
          window.FixedWindows(60),
          trigger=windowing.count_or_timeout_trigger(count=100, delay=60)))
