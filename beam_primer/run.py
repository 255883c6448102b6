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

"""Runs one catalog example on the configured runner.

Usage::

  python -m beam_primer.run --list_examples
  python -m beam_primer.run --example group_by_key
  python -m beam_primer.run --example fixed_windows --output /tmp/windows
  python -m beam_primer.run --example map --runner DirectRunner

Flags other than the ones in :class:`~beam_primer.options.PrimerOptions` are
handed to Beam unchanged, so ``--runner`` and any runner-specific option
select where the example executes.
"""

# pytype: skip-file

import logging
import sys

import apache_beam as beam
from apache_beam.io import WriteToText
from apache_beam.options.pipeline_options import PipelineOptions
from beam_primer import catalog
from beam_primer.options import PrimerOptions

_LOGGER = logging.getLogger(__name__)


def print_examples():
  for example in catalog.list_examples():
    print('%-22s %s' % (example.name, example.question))


def run(argv=None, save_main_session=True):
  """Main entry point; builds and runs the selected example.

  Returns:
    The PipelineResult, or None when only listing the examples.
  """
  primer_options = PipelineOptions(list(argv or [])).view_as(PrimerOptions)
  if primer_options.list_examples:
    print_examples()
    return None
  if not primer_options.example:
    raise ValueError(
        '--example is required; run with --list_examples to see the names.')

  example = catalog.get_example(primer_options.example)
  options = catalog.pipeline_options_for(
      example, argv, save_main_session=save_main_session)
  _LOGGER.info('Running example %s: %s', example.name, example.question)

  with beam.Pipeline(options=options) as p:
    output = example.build(p)
    # pylint: disable=expression-not-assigned
    if primer_options.output:
      output | 'Format' >> beam.Map(str) | 'Write' >> WriteToText(
          primer_options.output)
    else:
      output | 'Print' >> beam.Map(print)

  return p.result


if __name__ == '__main__':
  logging.getLogger().setLevel(logging.INFO)
  run(sys.argv[1:])
