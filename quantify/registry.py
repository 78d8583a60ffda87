# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""The unit registry.

A :class:`Registry` holds the known dimensions, prefixes and units and
resolves text into units. Resolution of a single token tries, in order:

1. a label (case-sensitive)
2. a name, singular or plural (case-insensitive, underscores read as spaces)
3. a symbol (case-sensitive)
4. a prefix followed by an unprefixed unit of the same unit class
5. two adjacent unit symbols, such as "Nm" or "kWs"

Longer unit strings are split into numerator and denominator at "/" or
"per", and each side into words.

Most code should use the shared registry from :func:`get_registry`.
"""

import re
from numbers import Real

from quantify import config
from quantify import loader
from quantify import logging
from quantify.compound import CompoundUnit, Term
from quantify.core import exceptions
from quantify.core.types import UnitClass
from quantify.dimensions import Dimension, DimensionTable
from quantify.prefix import PrefixTable
from quantify.textutils import remove_underscores, without_superscript_characters
from quantify.unit import Unit, factors_equal, unity_unit

_REGISTRY = None  # singleton instance.

UNIT_KEYS = frozenset(("label", "name", "symbol", "physical_quantity", "factor", "scaling",
                       "class", "alternative", "equivalent", "benchmark"))
DEFINITION_KEYS = frozenset(("definition", "name", "symbol", "label", "alternative",
                             "equivalent", "benchmark"))

_DENOMINATOR_RE = re.compile(r"\s*/\s*|\bper\b")
_INDEX_RE = re.compile(r"^(.+?)\^(-?\d+)$")
POWER_WORDS = {"square": 2, "cubic": 3}
POWER_SUFFIXES = {"squared": 2, "cubed": 3}


def _split_index(text):
    mo = _INDEX_RE.match(text)
    if mo:
        return mo.group(1), int(mo.group(2))
    return text, 1


class Registry:
    """Tables of dimensions, prefixes and units, and the resolver over them.

    Arguments:
        options: optional mapping of dotted option names, such as
                 "format.superscript_characters", overriding the configured
                 values for units bound to this registry.
    """

    def __init__(self, options=None):
        cf = config.get_config()
        self.options = config.to_config_dict({"format": cf["format"], "quantity": cf["quantity"]})
        if options:
            for key, value in options.items():
                self.options[key] = value
        self.dimensions = DimensionTable()
        self.prefixes = PrefixTable()
        self._units = []

    def __repr__(self):
        return "{}(dimensions={}, prefixes={}, units={})".format(
            self.__class__.__name__, len(self.dimensions), len(self.prefixes), len(self._units))

    def __len__(self):
        return len(self._units)

    def __iter__(self):
        return (unit.copy() for unit in self._units)

    def __contains__(self, item):
        return self.is_loaded(item)

    # Loading

    def load_dimension(self, record):
        dim = self.dimensions.load(record)
        logging.debug("loaded dimension {}".format(dim.physical_quantity))
        return dim

    def unload_dimension(self, name):
        self.dimensions.unload(name)

    def load_prefix(self, record):
        prefix = self.prefixes.load(record)
        logging.debug("loaded prefix {}".format(prefix.name))
        return prefix

    def unload_prefix(self, name_or_symbol):
        self.prefixes.unload(name_or_symbol)

    def load_unit(self, record):
        """Add a unit to the registry.

        The record is either a :class:`Unit` or a mapping. A mapping either
        describes a simple unit, or gives a unit expression as "definition"
        with optional name, symbol and label overrides.

        Raises:
            InvalidArgumentError for malformed records.
            InvalidDimensionError if the physical quantity is not known.
            DuplicateUnitIdentityError if the label is already loaded.
        """
        if isinstance(record, Unit):
            unit = record.copy()
            unit.registry = self
        elif "definition" in record:
            unit = self._unit_from_definition(record)
        else:
            unit = self._unit_from_record(record)
        if not unit.plain_label:
            raise exceptions.InvalidArgumentError("Unit has no label: {!r}".format(record))
        if self._by_label(unit.plain_label) is not None:
            raise exceptions.DuplicateUnitIdentityError(
                "Unit {!r} already loaded".format(unit.plain_label))
        self._units.append(unit)
        logging.debug("loaded unit {}".format(unit.plain_label))
        return unit.copy()

    def _unit_from_record(self, record):
        unknown = set(record) - UNIT_KEYS
        if unknown:
            raise exceptions.InvalidArgumentError(
                "Unknown unit record keys {}: {!r}".format(sorted(unknown), record))
        try:
            label = record["label"]
            name = record["name"]
            quantity = record["physical_quantity"]
        except KeyError as err:
            raise exceptions.InvalidArgumentError(
                "Unit record missing {}: {!r}".format(err, record)) from None
        symbol = record.get("symbol", label)
        for value in (label, name, symbol):
            if not isinstance(value, str):
                raise exceptions.InvalidArgumentError(
                    "Unit name, symbol and label must be strings: {!r}".format(record))
        factor = record.get("factor", 1.0)
        scaling = record.get("scaling", 0.0)
        for value in (factor, scaling):
            if isinstance(value, bool) or not isinstance(value, Real):
                raise exceptions.InvalidArgumentError("Bad unit number {!r} in {!r}".format(value, record))
        if factor <= 0:
            raise exceptions.InvalidArgumentError("Unit factor must be positive: {!r}".format(record))
        unit_class = UnitClass.from_name(record.get("class", "SI"))
        if unit_class == UnitClass.COMPOUND:
            raise exceptions.InvalidArgumentError("Use a definition for compound units: {!r}".format(record))
        dimension = self.dimensions.for_name(quantity)
        return Unit(name, symbol, label, dimension, factor=factor, scaling=scaling,
                    unit_class=unit_class,
                    acts_as_alternative_unit=self._flag(record, "alternative",
                                                        not dimension.is_dimensionless),
                    acts_as_equivalent_unit=self._flag(record, "equivalent", dimension.is_base),
                    benchmark=self._flag(record, "benchmark", False),
                    registry=self)

    def _unit_from_definition(self, record):
        unknown = set(record) - DEFINITION_KEYS
        if unknown:
            raise exceptions.InvalidArgumentError(
                "Unknown unit definition keys {}: {!r}".format(sorted(unknown), record))
        unit = self.parse_unit_string(record["definition"])
        unit = unit.configure(name=record.get("name"), symbol=record.get("symbol"),
                              label=record.get("label"))
        unit.acts_as_alternative_unit = self._flag(record, "alternative",
                                                   not unit.dimension.is_dimensionless)
        unit.acts_as_equivalent_unit = self._flag(record, "equivalent", False)
        unit.benchmark = self._flag(record, "benchmark", False)
        return unit

    @staticmethod
    def _flag(record, key, default):
        value = record.get(key, default)
        if not isinstance(value, bool):
            raise exceptions.InvalidArgumentError("{} must be true or false: {!r}".format(key, record))
        return value

    def unload_unit(self, unit):
        label = unit.plain_label if isinstance(unit, Unit) else without_superscript_characters(unit)
        found = self._by_label(label)
        if found is None:
            raise exceptions.UnitNotFoundError("Unit {!r} not loaded".format(label))
        self._units[:] = [unit for unit in self._units if unit is not found]

    def prefix_and_load(self, prefixes, units):
        """Load every combination of the prefixes applied to the units.

        Combinations already loaded are left alone. Nothing is loaded if any
        combination is invalid.
        """
        new = []
        for unit in units:
            unit = self.resolve(unit)
            for prefix in prefixes:
                prefixed = unit.with_prefix(prefix)
                if self._by_label(prefixed.plain_label) is None:
                    new.append(prefixed)
        for unit in new:
            self.load_unit(unit)
        return [unit.copy() for unit in new]

    # Queries

    def is_loaded(self, unit):
        label = unit.plain_label if isinstance(unit, Unit) else without_superscript_characters(unit)
        return self._by_label(label) is not None

    def units(self, by=None):
        """All loaded units, or a list of one attribute of each ("name", "symbol", "label")."""
        if by is None:
            return [unit.copy() for unit in self._units]
        return [getattr(unit, by) for unit in self._units]

    def unity(self):
        unit = self._by_label("unity")
        if unit is None:
            return unity_unit(self)
        return unit.copy()

    def si_unit_for(self, dimension):
        """The SI unit of a dimension.

        This is the first simple SI benchmark unit of the dimension, else a
        loaded compound of SI units with factor one, else a compound of base
        quantity SI units. None if there is no SI unit for a base quantity.

        Simple units must also measure the same named quantity, so that plane
        angle and dimensionless ratios get different units.
        """
        for unit in self._units:
            if (not unit.is_compound_unit and unit.is_si_unit and unit.dimension == dimension and
                    unit.measures == dimension.physical_quantity and
                    unit.scaling == 0.0 and unit.is_benchmark_unit):
                return unit.copy()
        for unit in self._units:
            if (unit.is_compound_unit and unit.is_si_unit and unit.dimension == dimension and
                    factors_equal(unit.factor, 1.0)):
                return unit.copy()
        if dimension.is_dimensionless:
            return self.unity()
        if dimension.is_base:
            return None
        terms = []
        for quantity, exponent in dimension:
            unit = self.si_unit_for(Dimension({quantity: 1}, table=self.dimensions))
            if unit is None:
                return None
            terms.append(Term(unit, exponent))
        return CompoundUnit(*terms, registry=self)

    def alternatives(self, unit, by=None):
        """Other units of the same dimension that act as alternatives."""
        unit = self.resolve(unit)
        found = [other for other in self._units
                 if other.acts_as_alternative_unit and other.is_alternative_for(unit) and
                 other.plain_label != unit.plain_label]
        if by is None:
            return [other.copy() for other in found]
        return [getattr(other, by) for other in found]

    def equivalent_known_unit(self, unit):
        """The first loaded simple unit flagged as equivalent, with equal dimension and factor."""
        for other in self._units:
            if (not other.is_compound_unit and other.acts_as_equivalent_unit and
                    other.is_equivalent_to(unit)):
                return other.copy()
        return None

    # Resolution

    def _by_label(self, text):
        for unit in self._units:
            if unit.plain_label == text:
                return unit
        return None

    def _by_name(self, text):
        text = remove_underscores(text).lower()
        for unit in self._units:
            name = unit.name
            if name and (name.lower() == text or unit.pluralized_name.lower() == text):
                return unit
        return None

    def _by_symbol(self, text):
        for unit in self._units:
            if unit.plain_symbol and unit.plain_symbol == text:
                return unit
        return None

    def _lookup(self, text):
        return self._by_label(text) or self._by_name(text) or self._by_symbol(text)

    def _decompose(self, text, symbolic=False):
        """Split text into prefix and unit.

        Returns a (unit, conflict) pair. If no valid split exists, conflict is
        the first (base unit, prefix) pair found that cannot be combined.
        """
        conflict = None
        for prefix, remainder in self.prefixes.candidates(text):
            if symbolic:
                if text[:len(text) - len(remainder)] != prefix.symbol:
                    continue
                base = self._by_label(remainder) or self._by_symbol(remainder)
            else:
                base = self._lookup(remainder)
            if base is None or base.is_compound_unit:
                continue
            if base.is_prefixed_unit or base.unit_class != prefix.prefix_class:
                if conflict is None:
                    conflict = (base, prefix)
                continue
            return base.with_prefix(prefix), None
        return None, conflict

    def _symbolic(self, text):
        unit = self._by_label(text) or self._by_symbol(text)
        if unit is not None:
            return unit.copy()
        unit, _ = self._decompose(text, symbolic=True)
        return unit

    def _juxtapose(self, text):
        for index in range(len(text) - 1, 0, -1):
            left = self._symbolic(text[:index])
            if left is None:
                continue
            right = self._symbolic(text[index:])
            if right is None:
                continue
            return left.multiply(right)
        return None

    def _find(self, token):
        text = without_superscript_characters(token.strip())
        if not text:
            return None, None
        unit = self._lookup(text)
        if unit is not None:
            return unit.copy(), None
        unit, conflict = self._decompose(text)
        if unit is not None or conflict is not None:
            return unit, conflict
        return self._juxtapose(text), None

    def match(self, token):
        """Resolve a token to a unit, or None."""
        if isinstance(token, Unit):
            return token.copy()
        unit, _ = self._find(token)
        return unit

    def resolve(self, token):
        """Resolve a token to a unit.

        Raises:
            PrefixConflictError or PrefixClassMismatchError if the token is a
            prefix on a unit that cannot take it.
            UnitNotFoundError otherwise.
        """
        if isinstance(token, Unit):
            return token.copy()
        unit, conflict = self._find(token)
        if unit is not None:
            return unit
        if conflict is not None:
            base, prefix = conflict
            if base.is_prefixed_unit:
                raise exceptions.PrefixConflictError(
                    "{!r}: unit {} already has a prefix".format(token, base.name))
            raise exceptions.PrefixClassMismatchError(
                "{!r}: {} prefix {} does not apply to {} unit {}".format(
                    token, prefix.prefix_class, prefix.name, base.unit_class, base.name))
        raise exceptions.UnitNotFoundError("Unknown unit: {!r}".format(token))

    # Parsing

    def parse_unit_string(self, text, strict=True):
        """Parse a unit expression such as "kg m^2/s^2" or "metres per second".

        If not strict, None is returned where an error would be raised.
        """
        if isinstance(text, Unit):
            return text.copy()
        text = remove_underscores(without_superscript_characters(text)).strip()
        if not text:
            return self.unity()
        unit = self._lookup(text)
        if unit is not None:
            return unit.copy()
        parts = _DENOMINATOR_RE.split(text)
        if len(parts) > 2 or (len(parts) == 2 and not parts[1].strip()):
            if strict:
                raise exceptions.MalformedUnitExpressionError(
                    "Malformed unit expression: {!r}".format(text))
            return None
        pairs = self._parse_side(parts[0], strict)
        if pairs is None:
            return None
        if len(parts) == 2:
            denominator = self._parse_side(parts[1], strict)
            if denominator is None:
                return None
            pairs += [(unit, -exponent) for unit, exponent in denominator]
        if not pairs:
            return self.unity()
        if len(pairs) == 1 and pairs[0][1] == 1:
            return pairs[0][0]
        terms = []
        for unit, exponent in pairs:
            if unit.is_compound_unit:
                terms.extend(Term(term.unit, term.exponent * exponent) for term in unit.terms)
            elif not unit.is_unity:
                terms.append(Term(unit, exponent))
        unit = CompoundUnit(*terms, registry=self)
        if not unit.terms:
            return self.unity()
        return unit

    def _parse_side(self, text, strict):
        words = text.replace("·", " ").split()
        pairs = []
        power = 1
        index = 0
        while index < len(words):
            word = words[index].lower()
            if word in POWER_WORDS:
                power *= POWER_WORDS[word]
                index += 1
                continue
            if word in POWER_SUFFIXES and pairs:
                unit, exponent = pairs[-1]
                pairs[-1] = (unit, exponent * POWER_SUFFIXES[word])
                index += 1
                continue
            found = None
            for end in range(len(words), index, -1):
                candidate, exponent = _split_index(" ".join(words[index:end]))
                if end - index == 1:
                    unit, conflict = self._find(candidate)
                    if unit is None and conflict is not None and strict:
                        self.resolve(candidate)
                else:
                    unit = self._lookup(candidate)
                if unit is not None:
                    found = (unit, exponent * power, end)
                    break
            if found is None:
                if strict:
                    raise exceptions.UnitNotFoundError("Unknown unit: {!r}".format(words[index]))
                return None
            unit, exponent, index = found
            pairs.append((unit.copy(), exponent))
            power = 1
        return pairs


def get_registry():
    """Get the shared registry, loading the configured tables on first use."""
    global _REGISTRY
    if _REGISTRY is None:
        registry = Registry()
        loader.load_tables(registry)
        _REGISTRY = registry
    return _REGISTRY

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab:fileencoding=utf-8
