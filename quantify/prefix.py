# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Unit prefixes, such as kilo and milli.
"""

from numbers import Real

from quantify.core import exceptions
from quantify.core.types import UnitClass


class Prefix:
    """A named multiplicative scale factor, belonging to one unit system."""

    __slots__ = ("name", "symbol", "factor", "prefix_class")

    def __init__(self, name, symbol, factor, prefix_class=UnitClass.SI):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "symbol", symbol)
        object.__setattr__(self, "factor", float(factor))
        object.__setattr__(self, "prefix_class", prefix_class)

    def __setattr__(self, name, value):
        raise AttributeError("Prefix objects are immutable")

    def __repr__(self):
        return "{}({!r}, {!r}, {!r}, {})".format(self.__class__.__name__, self.name,
                                                 self.symbol, self.factor,
                                                 self.prefix_class.name)

    def __str__(self):
        return self.symbol

    def __eq__(self, other):
        if not isinstance(other, Prefix):
            return NotImplemented
        return ((self.name, self.symbol, self.factor, self.prefix_class) ==
                (other.name, other.symbol, other.factor, other.prefix_class))

    def __hash__(self):
        return hash((self.name, self.symbol, self.factor, self.prefix_class))

    @property
    def is_si_prefix(self):
        return self.prefix_class == UnitClass.SI

    @property
    def is_non_si_prefix(self):
        return self.prefix_class == UnitClass.NON_SI


class PrefixTable:
    """Ordered collection of prefixes, looked up by name or symbol."""

    def __init__(self):
        self._prefixes = []

    def __len__(self):
        return len(self._prefixes)

    def __iter__(self):
        return iter(list(self._prefixes))

    def load(self, record):
        """Add a prefix from a record with name, symbol, factor and class keys."""
        try:
            name = record["name"]
            symbol = record["symbol"]
            factor = record["factor"]
        except KeyError as err:
            raise exceptions.InvalidArgumentError(
                "Prefix record missing {}: {!r}".format(err, record)) from None
        if not isinstance(name, str) or not name or not isinstance(symbol, str) or not symbol:
            raise exceptions.InvalidArgumentError("Prefix name and symbol must be strings")
        if isinstance(factor, bool) or not isinstance(factor, Real) or factor <= 0:
            raise exceptions.InvalidArgumentError("Bad prefix factor: {!r}".format(factor))
        prefix_class = UnitClass.from_name(record.get("class", "SI"))
        if prefix_class == UnitClass.COMPOUND:
            raise exceptions.InvalidArgumentError("Prefixes are either SI or NonSI")
        if self.for_name(name) is not None or self.for_symbol(symbol) is not None:
            raise exceptions.InvalidArgumentError("Prefix {!r} already loaded".format(name))
        prefix = Prefix(name, symbol, factor, prefix_class)
        self._prefixes.append(prefix)
        return prefix

    def unload(self, name_or_symbol):
        prefix = self.get(name_or_symbol)
        if prefix is None:
            raise exceptions.InvalidArgumentError("Prefix {!r} not loaded".format(name_or_symbol))
        self._prefixes.remove(prefix)

    def for_name(self, name):
        name = name.lower()
        for prefix in self._prefixes:
            if prefix.name.lower() == name:
                return prefix
        return None

    def for_symbol(self, symbol):
        for prefix in self._prefixes:
            if prefix.symbol == symbol:
                return prefix
        return None

    def get(self, name_or_symbol):
        """Get a prefix by symbol (case-sensitive) or name (case-insensitive)."""
        if isinstance(name_or_symbol, Prefix):
            return name_or_symbol
        return self.for_symbol(name_or_symbol) or self.for_name(name_or_symbol)

    def of_class(self, prefix_class):
        return [prefix for prefix in self._prefixes if prefix.prefix_class == prefix_class]

    def candidates(self, token):
        """Possible (prefix, remainder) splits of a token.

        Prefix names match case-insensitively, symbols exactly. Longer matched
        prefixes come first, ties in table order. A remainder is never empty.
        """
        found = []
        lower = token.lower()
        for index, prefix in enumerate(self._prefixes):
            for text, is_name in ((prefix.name, True), (prefix.symbol, False)):
                if len(text) >= len(token):
                    continue
                if (lower.startswith(text.lower()) if is_name else token.startswith(text)):
                    found.append((len(text), index, prefix, token[len(text):]))
        found.sort(key=lambda item: (-item[0], item[1]))
        return [(prefix, remainder) for _, _, prefix, remainder in found]

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab
