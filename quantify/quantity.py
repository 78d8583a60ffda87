# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Physical quantities with units.

This module provides a data type that represents a physical quantity
together with its unit. Quantities with alternative units (the same
physical dimension) can be added, subtracted and compared, and a quantity
can be converted to another alternative unit. Multiplication, division and
raising to integer powers are allowed without restriction, and the result
will have the correct compound unit.

    >>> q = Quantity(100, "km/h")
    >>> print(q.to("mi").round(2))
    62.14 mi/h

The value may be None, for a quantity with a unit but no known value.
"""

import re
from numbers import Real

import numpy

from quantify.compound import CompoundUnit, Term, terms_of
from quantify.core import exceptions
from quantify.registry import get_registry
from quantify.unit import Unit

_UNIT_TERMINATORS_RE = re.compile(r"[,;:]")


class Quantity:
    """Physical quantity with units.

    Constructor:

    - Quantity(value, unit), where `value` is a number, or None, and `unit`
      is a :class:`quantify.unit.Unit` or a unit string.
    - Quantity.parse(string), where `string` contains both the value and
      the unit.

    Addition and subtraction return the result in the unit of the first
    operand.
    """

    _NUMBER_RE = re.compile(
        r"(?<![\w^.])(?<!\^[-+])([+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")

    def __init__(self, value, unit=None, registry=None):
        if registry is None:
            if isinstance(unit, Unit) and unit.registry is not None:
                registry = unit.registry
            else:
                registry = get_registry()
        self.registry = registry
        if value is not None:
            if isinstance(value, bool) or not isinstance(value, Real):
                raise exceptions.InvalidArgumentError("Quantity value must be a number: {!r}".format(value))
            value = float(value)
        self.value = value
        self.unit = self._find_unit(unit)

    def _find_unit(self, unit):
        if unit is None:
            return self.registry.unity()
        if isinstance(unit, Unit):
            return unit.copy()
        if isinstance(unit, str):
            return self.registry.parse_unit_string(unit)
        raise exceptions.InvalidArgumentError("{!r} is not a unit".format(unit))

    def _new(self, value, unit):
        return self.__class__(value, unit, self.registry)

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return "{}({!r}, {!r})".format(self.__class__.__name__, self.value, self.unit.label)

    def to_string(self, style="symbol"):
        """Text form of the quantity.

        Arguments:
            style: "symbol" (default), "label", or "name". Names are
                   pluralized unless the value is one.
        """
        if style == "symbol":
            text = self.unit.symbol
        elif style == "label":
            text = self.unit.label
        elif style == "name":
            text = self.unit.name if self.value == 1 else self.unit.pluralized_name
        else:
            raise exceptions.InvalidArgumentError("Unknown quantity style: {!r}".format(style))
        value = "" if self.value is None else str(self.value)
        return "{} {}".format(value, text or "").strip()

    def __float__(self):
        if self.value is None:
            raise exceptions.InvalidArgumentError("Quantity has no value")
        return self.value

    def __bool__(self):
        return bool(self.value)

    def copy(self):
        return self._new(self.value, self.unit)

    __copy__ = copy

    @property
    def represents(self):
        """Name of the physical quantity measured by the unit."""
        return self.unit.measures

    # Conversion

    def _converted(self, target):
        source = self.unit
        value = self.value
        affine = source.scaling or target.scaling
        if affine and not (source.is_compound_unit or target.is_compound_unit):
            if not source.is_alternative_for(target):
                raise exceptions.IncompatibleUnitsError(
                    "Cannot convert {} to {}".format(source.label, target.label))
            if value is not None:
                value = (value + source.scaling) * source.factor / target.factor - target.scaling
            return value, target
        if source.is_alternative_for(target):
            if value is not None:
                value = value * source.factor / target.factor
            return value, target
        if source.is_compound_unit:
            terms = [term.copy() for term in source.terms]
            changed = False
            for new in terms_of(target):
                for term in terms:
                    if term.unit.dimension == new.unit.dimension:
                        if value is not None:
                            value *= (term.unit.factor / new.unit.factor) ** term.exponent
                        term.unit = new.unit.copy()
                        changed = True
            if changed:
                return value, CompoundUnit(*terms, registry=self.registry, scope="partial")
        raise exceptions.IncompatibleUnitsError(
            "Cannot convert {} to {}".format(source.label, target.label))

    def to(self, unit):
        """Return a new quantity expressed in another unit.

        If the unit is not an alternative, compound units have each term of
        matching dimension converted instead, e.g. km/h to mi gives mi/h.
        """
        value, unit = self._converted(self._find_unit(unit))
        return self._new(value, unit)

    def to_unit(self, unit):
        """Changes the unit to `unit` and adjusts the value such that the
        combination is equivalent."""
        self.value, self.unit = self._converted(self._find_unit(unit))

    def to_si(self):
        """Return the quantity in SI units."""
        unit = self.unit
        if not unit.is_compound_unit:
            si = self.registry.si_unit_for(unit.dimension)
            if si is None:
                raise exceptions.IncompatibleUnitsError("No SI unit for {}".format(unit.label))
            return self.to(si)
        value = self.value
        terms = []
        for term in unit.terms:
            si = self.registry.si_unit_for(term.unit.dimension)
            if si is None:
                raise exceptions.IncompatibleUnitsError("No SI unit for {}".format(term.unit.label))
            if value is not None:
                value *= (term.unit.factor / si.factor) ** term.exponent
            terms.extend(Term(t.unit, t.exponent * term.exponent) for t in terms_of(si))
        return self._new(value, self._collapse(CompoundUnit(*terms, registry=self.registry,
                                                            scope="partial")))

    def in_units_of(self, *units):
        """Returns one or more Quantity objects that express the same
        physical quantity in different units. If several units are
        specified, the return value is a tuple of Quantity instances, one
        per unit, largest first, such that the sum of all quantities in the
        tuple equals the original quantity and all the values except for
        the last one are integers. This is used to convert to irregular unit
        systems like hour/minute/second. The original object will not be
        changed.
        """
        units = [self._find_unit(unit) for unit in units]
        if len(units) == 1:
            return self.to(units[0])
        units.sort(key=lambda unit: unit.factor)
        result = []
        value = self.value
        unit = self.unit
        for i in range(len(units) - 1, -1, -1):
            value = value * unit.conversion_factor_to(units[i])
            if i == 0:
                rounded = value
            else:
                rounded = _round(value)
            result.append(self._new(rounded, units[i]))
            value = value - rounded
            unit = units[i]
        return tuple(result)

    # Unit restructuring

    def _restructure(self, unit):
        value = self.value
        if value is not None:
            value = value * self.unit.factor / unit.factor
        return self._new(value, unit)

    def rationalize_units(self, *units):
        """Express all compound unit terms of one dimension in a single unit."""
        if not self.unit.is_compound_unit:
            return self.copy()
        return self._restructure(self.unit.rationalize(*units))

    def cancel_base_units(self, *units):
        if not self.unit.is_compound_unit:
            return self.copy()
        return self._restructure(self.unit.cancel(*units))

    def consolidate_units(self):
        if not self.unit.is_compound_unit:
            return self.copy()
        return self._restructure(self.unit.consolidate())

    def round(self, places=0):
        if self.value is None:
            return self.copy()
        return self._new(float(numpy.round(self.value, places)), self.unit)

    # Arithmetic

    def _collapse(self, unit):
        terms = unit.terms
        if not terms:
            return self.registry.unity()
        if len(terms) == 1 and terms[0].exponent == 1:
            return terms[0].unit
        return unit.or_equivalent()

    def _sum(self, other, sign):
        if not isinstance(other, Quantity):
            raise exceptions.InvalidArgumentError("Cannot add or subtract {!r}".format(other))
        if self.value is None or other.value is None:
            raise exceptions.InvalidArgumentError("Cannot add or subtract quantities without values")
        if other.unit.is_alternative_for(self.unit):
            other = other.to(self.unit)
        if not other.unit.is_equivalent_to(self.unit):
            raise exceptions.IncompatibleUnitsError(
                "Cannot add {} to {}".format(other.unit.label, self.unit.label))
        return self._new(self.value + sign * other.value, self.unit)

    def __add__(self, other):
        return self._sum(other, 1)

    def __sub__(self, other):
        return self._sum(other, -1)

    def _product(self, other, divide):
        if isinstance(other, Quantity):
            other_terms = terms_of(other.unit)
            if divide:
                other_terms = [term.reciprocal() for term in other_terms]
            if self.registry.options["quantity.auto_consolidate_units"]:
                scope = "full"
            else:
                scope = "partial"
            unit = CompoundUnit(*terms_of(self.unit), *other_terms, registry=self.registry,
                                scope=scope)
            if self.value is None or other.value is None:
                value = None
            elif divide:
                value = self.value / other.value
            else:
                value = self.value * other.value
            return self._new(value, self._collapse(unit))
        if isinstance(other, Real) and not isinstance(other, bool):
            if self.value is None:
                return self.copy()
            value = self.value / other if divide else self.value * other
            return self._new(value, self.unit)
        return NotImplemented

    def multiply(self, other):
        return self._product(other, False)

    def divide(self, other):
        return self._product(other, True)

    __mul__ = multiply
    __truediv__ = divide

    def __rmul__(self, other):
        return self._product(other, False)

    def __rtruediv__(self, other):
        if isinstance(other, Real) and not isinstance(other, bool):
            value = None if self.value is None else other / self.value
            return self._new(value, self._collapse(self.unit.reciprocalize()))
        return NotImplemented

    def pow(self, n):
        if isinstance(n, bool) or not isinstance(n, int):
            raise exceptions.InvalidArgumentError("Quantity power must be an integer: {!r}".format(n))
        value = None if self.value is None else self.value ** n
        unit = self.unit.pow(n)
        if unit.is_compound_unit:
            unit = self._collapse(unit)
        return self._new(value, unit)

    __pow__ = pow

    def __neg__(self):
        return self._new(None if self.value is None else -self.value, self.unit)

    def __pos__(self):
        return self

    def __abs__(self):
        return self._new(None if self.value is None else abs(self.value), self.unit)

    # Comparison

    def __eq__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        if not self.unit.is_alternative_for(other.unit):
            return False
        if self.value is None or other.value is None:
            return self.value is None and other.value is None
        return self.value == other.to(self.unit).value

    __hash__ = None

    def _other_value(self, other):
        if not self.unit.is_alternative_for(other.unit):
            raise exceptions.IncompatibleUnitsError(
                "Cannot compare {} with {}".format(self.unit.label, other.unit.label))
        if self.value is None and other.value is None:
            return None
        if self.value is None or other.value is None:
            raise exceptions.InvalidArgumentError("Cannot order a quantity without a value")
        return other.to(self.unit).value

    def __lt__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        value = self._other_value(other)
        return value is not None and self.value < value

    def __le__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        value = self._other_value(other)
        return value is None or self.value <= value

    def __gt__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        value = self._other_value(other)
        return value is not None and self.value > value

    def __ge__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        value = self._other_value(other)
        return value is None or self.value >= value

    def between(self, low, high):
        return low <= self <= high

    # Parsing

    @classmethod
    def parse(cls, text, registry=None):
        """Make a quantity from a string such as "12.5 km/h".

        Raises:
            QuantityParseError if the text is not exactly one number followed
            by a unit.
        """
        registry = registry or get_registry()
        matches = list(cls._NUMBER_RE.finditer(text))
        if len(matches) != 1:
            raise exceptions.QuantityParseError(
                "Expected one number in {!r}, found {}".format(text, len(matches)))
        mo = matches[0]
        if text[:mo.start()].strip():
            raise exceptions.QuantityParseError("Text before the value in {!r}".format(text))
        try:
            unit = registry.parse_unit_string(text[mo.end():])
        except exceptions.QuantifyError as err:
            raise exceptions.QuantityParseError("Bad unit in {!r}: {}".format(text, err)) from err
        return cls(float(mo.group(1)), unit, registry)

    @classmethod
    def parse_all(cls, text, remainder=False, registry=None):
        """Find all quantities in free text.

        Each number takes the longest run of following words that parses as
        a unit, stopping at any of ",;:". A number without a unit is
        dimensionless. If remainder is true, also return the list of text
        fragments not used.
        """
        registry = registry or get_registry()
        quantities = []
        unused = []
        matches = list(cls._NUMBER_RE.finditer(text))
        start = matches[0].start() if matches else len(text)
        unused.append(text[:start])
        for index, mo in enumerate(matches):
            end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
            following = text[mo.end():end]
            cut = _UNIT_TERMINATORS_RE.search(following)
            tail = ""
            if cut:
                following, tail = following[:cut.start()], following[cut.start():]
            words = following.split()
            unit = None
            used = 0
            for count in range(len(words), 0, -1):
                unit = registry.parse_unit_string(" ".join(words[:count]), strict=False)
                if unit is not None:
                    used = count
                    break
            if unit is None:
                unit = registry.unity()
            quantities.append(cls(float(mo.group(1)), unit, registry))
            unused.append(" ".join(words[used:]) + tail)
        if remainder:
            return quantities, [part.strip() for part in unused if part.strip()]
        return quantities


def _round(x):
    if numpy.greater(x, 0.):
        return float(numpy.floor(x))
    else:
        return float(numpy.ceil(x))


def quantity(value, unit=None, registry=None):
    """Make a :class:`Quantity` from a value and a unit or unit string."""
    return Quantity(value, unit, registry)


def ratio(unit, other, registry=None):
    """How many of unit make one of other, as a quantity in unit per other.

    >>> print(ratio("lb", "kg").round(3).to_string("name"))
    2.205 pounds per kilogram
    """
    registry = registry or get_registry()
    unit = registry.parse_unit_string(unit)
    other = registry.parse_unit_string(other)
    if not unit.is_alternative_for(other):
        raise exceptions.IncompatibleUnitsError(
            "{} and {} do not measure the same quantity".format(unit.label, other.label))
    new = unit.divide(other)
    return Quantity(1.0 / new.factor, new, registry)

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab:fileencoding=utf-8
