# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
pytest configuration and common code lives here.
"""

import pytest

from quantify import loader
from quantify.registry import Registry, get_registry


@pytest.fixture
def registry():
    """The shared registry. Tests must not modify it."""
    return get_registry()


@pytest.fixture
def fresh_registry():
    """A registry of its own, loaded from the package tables."""
    return loader.load_tables(Registry())


@pytest.fixture
def empty_registry():
    return Registry()

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab
