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

"""Apache Beam primer setup file."""

import os

import setuptools


def get_version():
  global_names = {}
  exec(  # pylint: disable=exec-used
      open(os.path.join(
          os.path.dirname(os.path.abspath(__file__)),
          'beam_primer/version.py')
          ).read(),
      global_names
  )
  return global_names['__version__']


PACKAGE_NAME = 'beam-primer'
PACKAGE_VERSION = get_version()
PACKAGE_DESCRIPTION = 'Questions, answers and runnable examples for Apache Beam'
PACKAGE_URL = 'https://beam.apache.org'
PACKAGE_KEYWORDS = 'apache beam primer'
PACKAGE_LONG_DESCRIPTION = '''
A primer on the Apache Beam programming model: interview-style questions and
answers, a catalog of small runnable pipelines that demonstrate each concept,
and a checker that keeps the documentation honest by running its snippets.
'''


if __name__ == '__main__':
  setuptools.setup(
      name=PACKAGE_NAME,
      version=PACKAGE_VERSION,
      description=PACKAGE_DESCRIPTION,
      long_description=PACKAGE_LONG_DESCRIPTION,
      url=PACKAGE_URL,
      packages=setuptools.find_packages(),
      install_requires=[
          'apache-beam>=2.48.0',
          'pydantic>=2.0,<3',
          'pyyaml>=3.12,<7.0.0',
          'requests>=2.24.0,<3.0.0',
      ],
      python_requires='>=3.8',
      extras_require={
          'test': [
              'mock>=1.0.1,<6.0.0',
              'parameterized>=0.7.1',
              'pytest>=7.1.2',
              'requests_mock>=1.7,<2.0',
          ],
      },
      zip_safe=False,
      # PyPI package information.
      classifiers=[
          'Intended Audience :: Developers',
          'License :: OSI Approved :: Apache Software License',
          'Operating System :: POSIX :: Linux',
          'Programming Language :: Python :: 3',
          'Topic :: Software Development :: Libraries',
      ],
      license='Apache License, Version 2.0',
      keywords=PACKAGE_KEYWORDS,
  )
