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

"""Pipeline options shared by the primer examples.

The runner is never hard-coded: it is picked with the standard ``--runner``
flag and falls back to the direct runner, so the same example can be handed to
any engine Beam supports.
"""

# pytype: skip-file

import logging

from apache_beam.options.pipeline_options import PipelineOptions
from apache_beam.options.pipeline_options import SetupOptions
from apache_beam.options.pipeline_options import StandardOptions

_LOGGER = logging.getLogger(__name__)

DEFAULT_RUNNER = 'DirectRunner'


class PrimerOptions(PipelineOptions):
  """Flags understood by ``python -m beam_primer.run``."""
  @classmethod
  def _add_argparse_args(cls, parser):
    parser.add_argument(
        '--example',
        default=None,
        help='Name of the catalog example to run.')
    parser.add_argument(
        '--output',
        default=None,
        help=(
            'Output file prefix. When unset, each element is printed to '
            'stdout.'))
    parser.add_argument(
        '--list_examples',
        action='store_true',
        default=False,
        help='List the catalog examples and exit.')


def make_pipeline_options(argv=None, streaming=False, save_main_session=True):
  """Builds PipelineOptions from an explicit argument list.

  Args:
    argv: pipeline flags. ``sys.argv`` is never consulted, so callers (and
      tests) get exactly the options they pass.
    streaming: force ``--streaming``; required for TestStream sources and
      for triggers that fire more than once.
    save_main_session: pickle the main session so DoFns defined in
      ``__main__`` can be shipped to remote workers.

  Returns:
    A PipelineOptions instance.
  """
  options = PipelineOptions(list(argv or []))
  standard_options = options.view_as(StandardOptions)
  if not standard_options.runner:
    standard_options.runner = DEFAULT_RUNNER
  if streaming:
    standard_options.streaming = True
  options.view_as(SetupOptions).save_main_session = save_main_session
  _LOGGER.debug(
      'Pipeline options: runner=%s streaming=%s',
      standard_options.runner,
      standard_options.streaming)
  return options
