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

"""
Apache Beam primer
==================

Runnable, tested companions to the questions and answers in ``README.md``.

Overview
--------
Each module renders one part of the programming model with the public
Apache Beam API:

* :mod:`beam_primer.pipelines`: constructing a pipeline and composite
  transforms.
* :mod:`beam_primer.core_transforms`: Map, FlatMap, Filter, ParDo,
  GroupByKey, CoGroupByKey, Combine, Partition and Flatten.
* :mod:`beam_primer.windowing`: timestamps, windows, watermarks and triggers.
* :mod:`beam_primer.side_inputs`: singleton, iterable and dict side inputs.
* :mod:`beam_primer.catalog`: every example above under a name, together
  with the output the documentation promises.

Typical usage
-------------
Run a documented example on the direct runner::

  python -m beam_primer.run --example group_by_key

Verify the documentation::

  python -m beam_primer.docs.checker README.md
"""

from beam_primer.version import __version__
