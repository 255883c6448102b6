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

"""Side inputs: extra, read-only views of a PCollection.

A side input is passed to Map, FlatMap or ParDo next to the main input and
every invocation sees the whole view. ``AsSingleton`` expects exactly one
element, ``AsIter`` / ``AsList`` expose all elements and ``AsDict`` exposes
key/value pairs as a dictionary.
"""

# pytype: skip-file

import apache_beam as beam
from apache_beam import pvalue


def filter_using_length(word, lower_bound, upper_bound=float('inf')):
  if lower_bound <= len(word) <= upper_bound:
    yield word


class FilterUsingLength(beam.DoFn):
  def process(self, element, lower_bound, upper_bound=float('inf')):
    if lower_bound <= len(element) <= upper_bound:
      yield element


class LongerThanAverage(beam.PTransform):
  """Keeps the words at least as long as the average word.

  The average is itself computed from the input and handed back to FlatMap
  as a singleton side input.
  """
  def expand(self, words):
    avg_word_len = (
        words
        | 'Lengths' >> beam.Map(len)
        | 'Mean' >> beam.CombineGlobally(beam.combiners.MeanCombineFn()))
    return words | 'Filter' >> beam.FlatMap(
        filter_using_length, lower_bound=pvalue.AsSingleton(avg_word_len))


class EnrichCountryDoFn(beam.DoFn):
  """Turns ``(name, city)`` into ``(name, city, country)``.

  ``cities_to_countries`` is a dict side input; cities missing from it get an
  empty country.
  """
  def process(self, element, cities_to_countries):
    (name, city) = element
    yield (name, city, cities_to_countries.get(city, ''))


class EnrichCountry(beam.PTransform):
  def __init__(self, cities_to_countries):
    super().__init__()
    self._cities_to_countries = cities_to_countries

  def expand(self, persons):
    return persons | 'Enrich' >> beam.ParDo(
        EnrichCountryDoFn(), pvalue.AsDict(self._cities_to_countries))


def join_info(name, emails, phone_numbers):
  filtered_emails = [email for (owner, email) in emails if owner == name]
  filtered_phone_numbers = [
      phone for (owner, phone) in phone_numbers if owner == name
  ]
  return '; '.join(
      [name, ','.join(filtered_emails), ','.join(filtered_phone_numbers)])


class JoinUsingSideInputs(beam.PTransform):
  """Joins names with emails and phones passed as iterable side inputs.

  This is the side-input alternative to CoGroupByKey: it suits small lookup
  collections that fit in every worker's memory.
  """
  def __init__(self, emails, phones):
    super().__init__()
    self._emails = emails
    self._phones = phones

  def expand(self, names):
    return names | 'CreateContacts' >> beam.Map(
        join_info, pvalue.AsIter(self._emails), pvalue.AsIter(self._phones))
