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

"""Pytest configuration and custom hooks."""

import logging

import pytest

from apache_beam.testing.test_pipeline import TestPipeline


def pytest_addoption(parser):
  parser.addoption(
      '--test-pipeline-options',
      help='Options to use in test pipelines. NOTE: Tests may '
      'ignore some or all of these options.')


def pytest_configure(config):
  """Saves options added in pytest_addoption for later use."""
  TestPipeline.pytest_test_pipeline_options = config.getoption(
      'test_pipeline_options', default='')


@pytest.fixture(autouse=True)
def restore_root_logger():
  """The doc checker CLI installs handlers on the root logger."""
  root = logging.getLogger()
  handlers = list(root.handlers)
  level = root.level
  yield
  for handler in root.handlers[:]:
    if handler not in handlers:
      root.removeHandler(handler)
  root.setLevel(level)
