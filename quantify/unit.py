# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Units of measure.

A :class:`Unit` has a name, a symbol and a label. The label is the identity
key within a registry. The factor relates the unit to the SI unit of its
dimension, and the scaling is an additive offset used by affine temperature
units. Conversion to the SI unit is::

    si_value = (value + scaling) * factor

Units are combined by multiplication, division and integer powers into
:class:`quantify.compound.CompoundUnit` objects.
"""

import math
from numbers import Number

from quantify import config
from quantify.core import exceptions
from quantify.core.types import UnitClass
from quantify.dimensions import Dimension
from quantify.textutils import (pluralize, with_superscript_characters,
                                without_superscript_characters)

# Relative tolerance for comparing factors derived through float arithmetic.
FACTOR_TOLERANCE = 1e-12


def format_option(registry, key):
    """Get a presentation option from the registry, or from global configuration."""
    options = registry.options if registry is not None else config.get_config()
    return options["format." + key]


def factors_equal(a, b):
    return math.isclose(a, b, rel_tol=FACTOR_TOLERANCE, abs_tol=0.0)


class Unit:
    """A simple (SI or NonSI) unit, possibly prefixed.

    Arguments:
        name: full name, e.g. "metre".
        symbol: symbol, e.g. "m". May use "^2" index notation.
        label: identity key, e.g. "m".
        dimension: a :class:`Dimension`, or a mapping of base quantity exponents.
        factor: multiple of the SI unit for the dimension.
        scaling: additive offset, for affine units.
        unit_class: UnitClass.SI or UnitClass.NON_SI
        prefix, base_unit: provenance of a prefixed unit.
        acts_as_alternative_unit: listed among alternatives of its dimension.
        acts_as_equivalent_unit: may stand in for equivalent compound units.
        benchmark: the canonical unit of its dimension, even if its name looks prefixed.
        registry: the :class:`quantify.registry.Registry` this unit resolves against.
    """

    def __init__(self, name, symbol, label, dimension, factor=1.0, scaling=0.0,
                 unit_class=UnitClass.SI, prefix=None, base_unit=None,
                 acts_as_alternative_unit=True, acts_as_equivalent_unit=False,
                 benchmark=False, registry=None):
        if not isinstance(dimension, Dimension):
            table = registry.dimensions if registry is not None else None
            dimension = Dimension(dimension, table=table)
        self._name = name
        self._symbol = without_superscript_characters(symbol)
        self._label = without_superscript_characters(label)
        self.dimension = dimension
        self.factor = float(factor)
        self.scaling = float(scaling)
        self.unit_class = UnitClass.from_name(unit_class)
        self.prefix = prefix
        self.base_unit = base_unit
        self.acts_as_alternative_unit = acts_as_alternative_unit
        self.acts_as_equivalent_unit = acts_as_equivalent_unit
        self.benchmark = benchmark
        self.registry = registry

    def __repr__(self):
        return "{}({!r}, {!r}, {!r}, factor={!r})".format(self.__class__.__name__, self.name,
                                                         self.symbol, self.label, self.factor)

    def __str__(self):
        return self.symbol

    def copy(self):
        new = self.__class__.__new__(self.__class__)
        new.__dict__.update(self.__dict__)
        new.dimension = self.dimension.copy()
        if self.base_unit is not None:
            new.base_unit = self.base_unit.copy()
        return new

    __copy__ = copy

    def configure(self, name=None, symbol=None, label=None):
        """Return a copy with a different name, symbol or label."""
        new = self.copy()
        if name is not None:
            new._name = name
        if symbol is not None:
            new._symbol = without_superscript_characters(symbol)
        if label is not None:
            new._label = without_superscript_characters(label)
        return new

    def _render(self, text):
        if format_option(self.registry, "superscript_characters"):
            return with_superscript_characters(text)
        return text

    # Derived presentation

    @property
    def name(self):
        return self._name

    @property
    def pluralized_name(self):
        return pluralize(self.name)

    @property
    def symbol(self):
        return self._render(self.plain_symbol)

    @property
    def label(self):
        return self._render(self.plain_label)

    @property
    def plain_symbol(self):
        """Symbol in "^n" index notation, used for matching."""
        return self._symbol

    @property
    def plain_label(self):
        """Label in "^n" index notation, the identity key."""
        return self._label

    @property
    def measures(self):
        return self.dimension.physical_quantity

    # Predicates

    @property
    def is_si_unit(self):
        return self.unit_class == UnitClass.SI

    @property
    def is_non_si_unit(self):
        return self.unit_class == UnitClass.NON_SI

    @property
    def is_compound_unit(self):
        return False

    @property
    def is_dimensionless(self):
        return self.dimension.is_dimensionless

    @property
    def is_unity(self):
        return self.plain_label == "unity"

    @property
    def is_prefixed_unit(self):
        """True if derived from a prefix, or if the name begins with a prefix of the unit's class.
        """
        if self.prefix is not None:
            return True
        if self.registry is None or not self._name:
            return False
        name = self._name.lower()
        for prefix in self.registry.prefixes.of_class(self.unit_class):
            pname = prefix.name.lower()
            if len(name) > len(pname) and name.startswith(pname):
                return True
        return False

    @property
    def is_benchmark_unit(self):
        """True for the canonical SI unit of a dimension."""
        if self.benchmark:
            return True
        return (self.is_si_unit and self.scaling == 0.0 and factors_equal(self.factor, 1.0) and
                not self.is_prefixed_unit)

    @property
    def is_base_quantity_si_unit(self):
        return self.is_si_unit and self.dimension.is_base

    def is_alternative_for(self, other):
        """Same physical dimension."""
        return self.dimension == other.dimension

    def is_equivalent_to(self, other):
        """Same dimension, factor and scaling."""
        return (self.dimension == other.dimension and factors_equal(self.factor, other.factor) and
                self.scaling == other.scaling)

    def __eq__(self, other):
        if not isinstance(other, Unit):
            return NotImplemented
        return self.plain_label == other.plain_label and self.is_equivalent_to(other)

    def __hash__(self):
        return hash(self.plain_label)

    # Registry backed operations

    def _require_registry(self):
        if self.registry is None:
            raise exceptions.InvalidArgumentError("Unit {!r} is not bound to a registry".format(self.plain_label))
        return self.registry

    def _coerce(self, other):
        if isinstance(other, Unit):
            return other
        if isinstance(other, str):
            return self._require_registry().parse_unit_string(other)
        raise exceptions.InvalidArgumentError("Not a unit: {!r}".format(other))

    def with_prefix(self, prefix):
        """Return a new unit with the prefix applied.

        Raises:
            PrefixConflictError if the unit already carries a prefix of its class.
            PrefixClassMismatchError if the prefix class differs from the unit class.
        """
        if isinstance(prefix, str):
            found = self._require_registry().prefixes.get(prefix)
            if found is None:
                raise exceptions.InvalidArgumentError("Unknown prefix: {!r}".format(prefix))
            prefix = found
        if self.is_prefixed_unit:
            raise exceptions.PrefixConflictError(
                "Cannot add prefix {} to already prefixed unit {}".format(prefix.name, self.name))
        if prefix.prefix_class != self.unit_class:
            raise exceptions.PrefixClassMismatchError(
                "Cannot add {} prefix {} to {} unit {}".format(prefix.prefix_class, prefix.name,
                                                               self.unit_class, self.name))
        new = self.copy()
        new._name = prefix.name + self._name
        new._symbol = prefix.symbol + self._symbol
        new._label = prefix.symbol + self._label
        new.factor = prefix.factor * self.factor
        new.prefix = prefix
        new.base_unit = self.copy()
        new.benchmark = False
        return new

    def si_unit(self):
        return self._require_registry().si_unit_for(self.dimension)

    def alternatives(self, by=None):
        return self._require_registry().alternatives(self, by=by)

    def equivalent_known_unit(self):
        return self._require_registry().equivalent_known_unit(self)

    def or_equivalent(self):
        return self

    def conversion_factor_to(self, other):
        """Multiplier converting values in this unit to values in other."""
        other = self._coerce(other)
        if not self.is_alternative_for(other):
            raise exceptions.IncompatibleUnitsError(
                "{} is not compatible with {}".format(self.label, other.label))
        if self.scaling or other.scaling:
            raise exceptions.IncompatibleUnitsError(
                "Conversion between {} and {} needs an offset".format(self.label, other.label))
        return self.factor / other.factor

    # Algebra

    def multiply(self, other):
        from quantify.compound import CompoundUnit, terms_of
        other = self._coerce(other)
        return CompoundUnit(*terms_of(self), *terms_of(other), registry=self.registry)

    def divide(self, other):
        from quantify.compound import CompoundUnit, terms_of
        other = self._coerce(other)
        return CompoundUnit(*terms_of(self), *(term.reciprocal() for term in terms_of(other)),
                            registry=self.registry)

    def reciprocalize(self):
        from quantify.compound import CompoundUnit, terms_of
        return CompoundUnit(*(term.reciprocal() for term in terms_of(self)), registry=self.registry)

    def pow(self, n):
        """Raise to an integer power. The zeroth power is the dimensionless unity unit."""
        if isinstance(n, bool) or not isinstance(n, int):
            raise exceptions.InvalidArgumentError("Unit power must be an integer: {!r}".format(n))
        if n == 0:
            if self.registry is not None:
                return self.registry.unity()
            return unity_unit()
        if n > 0:
            result = self
            for _ in range(n - 1):
                result = result.multiply(self)
            return result.copy() if result is self else result
        result = self.reciprocalize()
        for _ in range(-n - 1):
            result = result.divide(self)
        return result

    def __mul__(self, other):
        if isinstance(other, Number):
            return self._quantity(other)
        if isinstance(other, (Unit, str)):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Number):
            return self._quantity(other)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, (Unit, str)):
            return self.divide(other)
        return NotImplemented

    def __rtruediv__(self, other):
        if isinstance(other, Number) and other == 1:
            return self.reciprocalize()
        return NotImplemented

    def __pow__(self, n):
        return self.pow(n)

    def _quantity(self, value):
        from quantify.quantity import Quantity
        return Quantity(value, self)


def unity_unit(registry=None):
    """A dimensionless unit with factor one and no name or symbol."""
    table = registry.dimensions if registry is not None else None
    return Unit("", "", "unity", Dimension(table=table), acts_as_alternative_unit=False,
                acts_as_equivalent_unit=True, registry=registry)

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab
