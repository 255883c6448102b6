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

"""Pipeline, PCollection and PTransform: constructing a pipeline.

A pipeline is built by applying transforms to PCollections with ``|``; a
label can be attached with ``>>``. Composite transforms package several steps
behind a single name, either by subclassing ``beam.PTransform`` or with the
``beam.ptransform_fn`` decorator.
"""

# pytype: skip-file

import logging
import re

import apache_beam as beam
from apache_beam.io import WriteToText
from apache_beam.metrics import Metrics
from apache_beam.metrics.metric import MetricsFilter

_LOGGER = logging.getLogger(__name__)

WORD_PATTERN = r'[\w\']+'


class ExtractWordsFn(beam.DoFn):
  """Parse each line of input text into words."""
  def __init__(self):
    super().__init__()
    self.words_counter = Metrics.counter(self.__class__, 'words')
    self.word_lengths_dist = Metrics.distribution(
        self.__class__, 'word_len_dist')
    self.empty_line_counter = Metrics.counter(self.__class__, 'empty_lines')

  def process(self, element):
    """Yields the words of a line of text.

    Blank lines produce no words and are counted in ``empty_lines``.

    Args:
      element: the line being processed
    """
    text_line = element.strip()
    if not text_line:
      self.empty_line_counter.inc()
    for word in re.findall(WORD_PATTERN, text_line, re.UNICODE):
      self.words_counter.inc()
      self.word_lengths_dist.update(len(word))
      yield word


@beam.ptransform_fn
@beam.typehints.with_input_types(str)
@beam.typehints.with_output_types(str)
def ReverseWords(pcoll):  # pylint: disable=invalid-name
  """A PTransform that reverses individual elements in a PCollection."""
  return pcoll | beam.Map(lambda word: word[::-1])


class ComputeWordLengths(beam.PTransform):
  def expand(self, pcoll):
    return pcoll | beam.Map(len)


class Keys(beam.PTransform):
  def expand(self, pcoll):
    return pcoll | 'Keys' >> beam.Map(lambda k_v: k_v[0])


class CountWords(beam.PTransform):
  """Turns lines of text into (word, count) pairs."""
  def expand(self, pcoll):
    return (
        pcoll
        | 'ExtractWords' >> beam.ParDo(ExtractWordsFn()).with_output_types(str)
        | 'PairWithOne' >> beam.Map(lambda word: (word, 1))
        | 'SumCounts' >> beam.CombinePerKey(sum))


def format_count(word_count):
  (word, count) = word_count
  return '%s: %d' % (word, count)


def run_word_count(lines, output, options=None):
  """Counts the words of ``lines`` and writes 'word: count' shards.

  Args:
    lines: an iterable of strings, materialized with ``beam.Create``.
    output: output file prefix handed to WriteToText.
    options: PipelineOptions; the direct runner is used when omitted.

  Returns:
    The finished PipelineResult, so callers can query metrics.
  """
  with beam.Pipeline(options=options) as p:
    # pylint: disable=expression-not-assigned
    (
        p
        | 'Create' >> beam.Create(lines)
        | 'CountWords' >> CountWords()
        | 'Format' >> beam.Map(format_count)
        | 'Write' >> WriteToText(output))

  result = p.result
  empty_lines = result.metrics().query(
      MetricsFilter().with_name('empty_lines'))['counters']
  if empty_lines:
    _LOGGER.info('number of empty lines: %d', empty_lines[0].result)
  return result
