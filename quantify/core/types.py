# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Various extra basic types for use by the package.
"""

# Use the newer built-in enums for Enum. Here we will always use Integer Enums.
from enum import IntEnum as Enum  # noqa

from quantify.core import exceptions


class UnitClass(Enum):
    """Tag for the unit system a unit or prefix belongs to."""
    SI = 1
    NON_SI = 2
    COMPOUND = 3

    def __str__(self):
        return _CLASS_NAMES[self]

    @classmethod
    def from_name(cls, name):
        """Get a UnitClass from a configuration name, such as "SI" or "NonSI".
        """
        if isinstance(name, cls):
            return name
        try:
            return _CLASS_LOOKUP[str(name).replace("_", "").replace("-", "").lower()]
        except KeyError:
            raise exceptions.InvalidArgumentError(
                "Unknown unit class: {!r}".format(name)) from None


_CLASS_NAMES = {
    UnitClass.SI: "SI",
    UnitClass.NON_SI: "NonSI",
    UnitClass.COMPOUND: "Compound",
}

_CLASS_LOOKUP = {
    "si": UnitClass.SI,
    "nonsi": UnitClass.NON_SI,
    "compound": UnitClass.COMPOUND,
}

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab
