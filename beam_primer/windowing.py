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

"""Event time, windows, watermarks and triggers.

Every element carries an event-time timestamp. ``WindowInto`` assigns each
element to one or more windows, and grouping transforms then aggregate per key
*and* window. The watermark is the runner's estimate of how far event time has
progressed; a trigger decides when a window's aggregate is emitted relative to
it (early, on time or late) and the accumulation mode decides whether later
firings repeat the elements already emitted.
"""

# pytype: skip-file

import apache_beam as beam
from apache_beam.transforms.trigger import AccumulationMode
from apache_beam.transforms.trigger import AfterAny
from apache_beam.transforms.trigger import AfterCount
from apache_beam.transforms.trigger import AfterProcessingTime
from apache_beam.transforms.trigger import AfterWatermark
from apache_beam.transforms.trigger import Repeatedly
from apache_beam.utils.timestamp import Duration


class AddTimestampDoFn(beam.DoFn):
  """Attaches an event-time timestamp extracted from each element.

  Args:
    timestamp_fn: callable returning the element's timestamp in seconds since
      the Unix epoch.
  """
  def __init__(self, timestamp_fn):
    super().__init__()
    self._timestamp_fn = timestamp_fn

  def process(self, element):
    yield beam.window.TimestampedValue(element, self._timestamp_fn(element))


def _to_seconds(timestamp):
  return timestamp.micros // 1000000


class FormatWindowFn(beam.DoFn):
  """Emits ``(window_start, window_end, element)``, bounds in seconds."""
  def process(self, element, window=beam.DoFn.WindowParam):
    yield (_to_seconds(window.start), _to_seconds(window.end), element)


class WindowedSum(beam.PTransform):
  """Sums timestamped (key, value) pairs per key and window."""
  def __init__(self, windowfn):
    super().__init__()
    self._windowfn = windowfn

  def expand(self, pcoll):
    return (
        pcoll
        | 'Window' >> beam.WindowInto(self._windowfn)
        | 'Group' >> beam.GroupByKey()
        | 'Sum' >> beam.CombineValues(sum))


class WindowedCount(beam.PTransform):
  """Counts words per window, firing as ``trigger`` dictates.

  Without a trigger the window's default applies: a single firing once the
  watermark passes the end of the window.
  """
  def __init__(
      self,
      windowfn,
      trigger=None,
      accumulation_mode=None,
      allowed_lateness=0):
    super().__init__()
    self._windowfn = windowfn
    self._trigger = trigger
    self._accumulation_mode = accumulation_mode
    self._allowed_lateness = allowed_lateness

  def expand(self, pcoll):
    window_kwargs = {}
    if self._trigger is not None:
      window_kwargs['trigger'] = self._trigger
      window_kwargs['accumulation_mode'] = (
          self._accumulation_mode or AccumulationMode.DISCARDING)
    if self._allowed_lateness:
      window_kwargs['allowed_lateness'] = Duration(
          seconds=self._allowed_lateness)
    return (
        pcoll
        | 'PairWithOne' >> beam.Map(lambda word: (word, 1))
        | 'Window' >> beam.WindowInto(self._windowfn, **window_kwargs)
        | 'Group' >> beam.GroupByKey()
        | 'Count' >> beam.Map(
            lambda word_ones: (word_ones[0], sum(word_ones[1]))))


def early_and_late_trigger(early_delay=60, late_count=1):
  """Fires early every ``early_delay`` processing-time seconds before the
  watermark, once when it passes the window, and again for every
  ``late_count`` late elements."""
  return AfterWatermark(
      early=AfterProcessingTime(delay=early_delay),
      late=AfterCount(late_count))


def count_or_timeout_trigger(count=100, delay=60):
  """Fires whenever ``count`` elements arrived or ``delay`` seconds passed."""
  return Repeatedly(AfterAny(AfterCount(count), AfterProcessingTime(delay)))
