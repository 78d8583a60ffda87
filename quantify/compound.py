# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Compound units.

A :class:`CompoundUnit` is an ordered list of :class:`Term` objects, each a
simple unit raised to a non-zero integer exponent. Terms with a positive
exponent form the numerator, the rest the denominator. The dimension and
factor of a compound unit are derived from its terms, as are its name,
symbol and label unless explicitly given with ``configure()``.
"""

from quantify.core import exceptions
from quantify.core.types import UnitClass
from quantify.dimensions import Dimension
from quantify.textutils import to_power
from quantify.unit import Unit, format_option


class Term:
    """A simple unit raised to an integer power."""

    __slots__ = ("unit", "exponent")

    def __init__(self, unit, exponent=1):
        if isinstance(unit, CompoundUnit):
            raise exceptions.InvalidArgumentError(
                "A compound unit cannot be a term: {!r}".format(unit.plain_label))
        if not isinstance(unit, Unit):
            raise exceptions.InvalidArgumentError("Term unit must be a Unit: {!r}".format(unit))
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise exceptions.InvalidArgumentError(
                "Term exponent must be an integer: {!r}".format(exponent))
        self.unit = unit
        self.exponent = exponent

    def __repr__(self):
        return "Term({!r}, {})".format(self.unit.plain_label, self.exponent)

    def __eq__(self, other):
        if not isinstance(other, Term):
            return NotImplemented
        return self.unit == other.unit and self.exponent == other.exponent

    __hash__ = None

    def copy(self):
        return Term(self.unit.copy(), self.exponent)

    def reciprocal(self):
        return Term(self.unit.copy(), -self.exponent)

    @property
    def is_numerator(self):
        return self.exponent > 0

    @property
    def is_denominator(self):
        return self.exponent < 0

    @property
    def dimension(self):
        return self.unit.dimension.pow(self.exponent)

    @property
    def factor(self):
        return self.unit.factor ** self.exponent

    @property
    def name(self):
        return to_power(self.unit.name, abs(self.exponent))

    @property
    def pluralized_name(self):
        return to_power(self.unit.pluralized_name, abs(self.exponent))

    def _indexed(self, text, reciprocal):
        index = -self.exponent if reciprocal else self.exponent
        if index == 1:
            return text
        return "{}^{}".format(text, index)

    def symbol(self, reciprocal=False):
        """Symbol with index. If reciprocal the exponent sign is flipped."""
        return self._indexed(self.unit.plain_symbol, reciprocal)

    def label(self, reciprocal=False):
        return self._indexed(self.unit.plain_label, reciprocal)


def terms_of(unit):
    """Copies of the terms making up a unit. The unity unit has none."""
    if isinstance(unit, CompoundUnit):
        return [term.copy() for term in unit.terms]
    if unit.is_unity:
        return []
    return [Term(unit.copy(), 1)]


def _remove(terms, removed):
    return [term for term in terms if not any(term is other for other in removed)]


def consolidate_terms(terms):
    """Merge terms with equivalent units by summing exponents.

    The first unit of each equivalent group is kept. Zero exponent terms and
    unity terms are dropped.
    """
    remaining = [term.copy() for term in terms]
    result = []
    while remaining:
        term = remaining.pop(0)
        if term.unit.is_unity:
            continue
        same = [other for other in remaining if term.unit.is_equivalent_to(other.unit)]
        for other in same:
            term.exponent += other.exponent
        remaining = _remove(remaining, same)
        if term.exponent != 0:
            result.append(term)
    return result


def consolidate_sides(terms):
    """Consolidate numerator and denominator terms separately."""
    numerator = [term for term in terms if term.is_numerator]
    denominator = [term for term in terms if term.is_denominator]
    return consolidate_terms(numerator) + consolidate_terms(denominator)


def _rationalize_terms(terms, preferred):
    result = []
    for term in terms:
        unit = None
        for candidate in preferred:
            if candidate.dimension == term.unit.dimension:
                unit = candidate
                break
        if unit is None:
            for other in terms:
                if other.unit.dimension == term.unit.dimension:
                    unit = other.unit
                    break
        result.append(Term(unit.copy(), term.exponent))
    return result


class CompoundUnit(Unit):
    """A unit built from simple unit terms.

    Arguments:
        terms: each a :class:`Unit`, a :class:`Term`, a (unit, exponent) pair, or
               a unit string resolved against the registry.
        registry: registry for lookups and presentation options. Defaults to
                  the registry of the first term's unit.
        scope: "full" consolidates equivalent units across all terms, "partial"
               only within the numerator and within the denominator.
    """

    def __init__(self, *terms, registry=None, scope="full"):
        parsed = []
        for item in terms:
            if isinstance(item, Term):
                parsed.append(Term(item.unit.copy(), item.exponent))
            elif isinstance(item, Unit):
                parsed.append(Term(item.copy(), 1))
            elif isinstance(item, (tuple, list)):
                if len(item) != 2:
                    raise exceptions.InvalidArgumentError(
                        "Term must be a (unit, exponent) pair: {!r}".format(item))
                unit, exponent = item
                if isinstance(unit, str):
                    unit = self._resolve_term(unit, registry)
                parsed.append(Term(unit.copy(), exponent))
            elif isinstance(item, str):
                parsed.append(Term(self._resolve_term(item, registry).copy(), 1))
            else:
                raise exceptions.InvalidArgumentError("Bad compound unit term: {!r}".format(item))
        if registry is None and parsed:
            registry = parsed[0].unit.registry
        if scope == "full":
            parsed = consolidate_terms(parsed)
        elif scope == "partial":
            parsed = consolidate_sides(parsed)
        else:
            raise exceptions.InvalidArgumentError("Scope must be 'full' or 'partial': {!r}".format(scope))
        self._init(parsed, registry)

    @staticmethod
    def _resolve_term(text, registry):
        if registry is None:
            raise exceptions.InvalidArgumentError(
                "Cannot resolve {!r} without a registry".format(text))
        return registry.resolve(text)

    def _init(self, terms, registry):
        self._terms = terms
        self.registry = registry
        self._name = None
        self._symbol = None
        self._label = None
        self.scaling = 0.0
        self.unit_class = UnitClass.COMPOUND
        self.prefix = None
        self.base_unit = None
        self.acts_as_alternative_unit = True
        self.acts_as_equivalent_unit = False
        self.benchmark = False

    @classmethod
    def from_terms(cls, terms, registry=None):
        """Build from terms as given, without consolidation."""
        new = cls.__new__(cls)
        terms = [term.copy() for term in terms]
        if registry is None and terms:
            registry = terms[0].unit.registry
        new._init(terms, registry)
        return new

    def _with_terms(self, terms):
        return self.__class__.from_terms(terms, self.registry)

    def copy(self):
        new = self._with_terms(self._terms)
        new._name = self._name
        new._symbol = self._symbol
        new._label = self._label
        new.acts_as_alternative_unit = self.acts_as_alternative_unit
        new.acts_as_equivalent_unit = self.acts_as_equivalent_unit
        new.benchmark = self.benchmark
        return new

    __copy__ = copy

    # Derived attributes

    @property
    def terms(self):
        return tuple(self._terms)

    @property
    def numerator_terms(self):
        return [term for term in self._terms if term.is_numerator]

    @property
    def denominator_terms(self):
        return [term for term in self._terms if term.is_denominator]

    @property
    def dimension(self):
        if self.registry is not None:
            result = self.registry.dimensions.dimensionless()
        else:
            result = Dimension()
        for term in self._terms:
            result = result.multiply(term.dimension)
        return result

    @property
    def factor(self):
        result = 1.0
        for term in self._terms:
            result *= term.factor
        return result

    @property
    def is_compound_unit(self):
        return True

    @property
    def is_si_unit(self):
        return all(term.unit.is_si_unit for term in self._terms)

    @property
    def is_non_si_unit(self):
        return any(term.unit.is_non_si_unit for term in self._terms)

    @property
    def is_prefixed_unit(self):
        return False

    @property
    def has_multiple_terms(self):
        return len(self._terms) > 1

    # Presentation

    @property
    def name(self):
        if self._name is not None:
            return self._name
        return self._render_with_denominator("name", " per ", " ")

    @property
    def pluralized_name(self):
        if self._name is not None:
            return super().pluralized_name
        return self._render_with_denominator("name", " per ", " ", plural=True)

    @property
    def plain_symbol(self):
        if self._symbol is not None:
            return self._symbol
        registry = self.registry
        unit_delimiter = format_option(registry, "symbol_unit_delimiter")
        if format_option(registry, "symbol_denominator_syntax"):
            return self._render_with_denominator(
                "symbol", format_option(registry, "symbol_denominator_delimiter"), unit_delimiter,
                parentheses=format_option(registry, "symbol_parentheses"))
        return self._render_indices_only(unit_delimiter)

    @property
    def plain_label(self):
        if self._label is not None:
            return self._label
        return self._render_with_denominator("label", "/", "·")

    def _render_with_denominator(self, attribute, denominator_delimiter, unit_delimiter,
                                 plural=False, parentheses=False):
        numerator = self.numerator_terms
        denominator = self.denominator_terms
        num_string = ""
        if numerator:
            if attribute == "name":
                parts = [term.name for term in numerator]
                if plural:
                    parts[-1] = numerator[-1].pluralized_name
            else:
                parts = [getattr(term, attribute)() for term in numerator]
            num_string = unit_delimiter.join(parts)
            if parentheses and len(numerator) > 1 and denominator:
                num_string = "({})".format(num_string)
        den_string = ""
        if denominator:
            reciprocal = bool(numerator)
            if attribute == "name":
                parts = [term.name for term in denominator]
            else:
                parts = [getattr(term, attribute)(reciprocal) for term in denominator]
            den_string = unit_delimiter.join(parts)
            if parentheses and len(denominator) > 1 and numerator:
                den_string = "({})".format(den_string)
        if den_string and (num_string or attribute == "name"):
            return (num_string + denominator_delimiter + den_string).strip()
        return (num_string + den_string).strip()

    def _render_indices_only(self, unit_delimiter):
        terms = sorted(self._terms, key=lambda term: -term.exponent)
        return unit_delimiter.join(term.symbol() for term in terms).strip()

    # Structural operations. Each returns a new unit without name, symbol or label overrides.

    def consolidate(self):
        return self._with_terms(consolidate_terms(self._terms))

    def consolidate_numerator_and_denominator(self):
        return self._with_terms(consolidate_sides(self._terms))

    def cancel(self, *units):
        """Cancel equivalent units appearing in both numerator and denominator."""
        terms = [term.copy() for term in self._terms]
        for unit in units:
            unit = self._coerce(unit)
            if isinstance(unit, CompoundUnit):
                raise exceptions.InvalidArgumentError("Cannot cancel compound unit {}".format(unit.label))
            upper = next((term for term in terms
                          if term.is_numerator and unit.is_equivalent_to(term.unit)), None)
            lower = next((term for term in terms
                          if term.is_denominator and unit.is_equivalent_to(term.unit)), None)
            if upper is None or lower is None:
                continue
            amount = min(upper.exponent, -lower.exponent)
            upper.exponent -= amount
            lower.exponent += amount
        return self._with_terms(consolidate_sides([term for term in terms if term.exponent != 0]))

    def _preferred(self, units):
        return [self._coerce(unit) for unit in units]

    def rationalize(self, *units):
        """Express all terms of one dimension in a single unit.

        The unit is one of the given units where its dimension matches, else
        the first term's unit of that dimension. The value the unit represents
        changes with its factor.
        """
        terms = _rationalize_terms(self._terms, self._preferred(units))
        return self._with_terms(consolidate_sides(terms))

    def rationalize_numerator_and_denominator(self, *units):
        preferred = self._preferred(units)
        terms = (_rationalize_terms(self.numerator_terms, preferred) +
                 _rationalize_terms(self.denominator_terms, preferred))
        return self._with_terms(consolidate_sides(terms))

    def or_equivalent(self):
        """A registered simple unit equivalent to this, or self."""
        if self.registry is None:
            return self
        return self.registry.equivalent_known_unit(self) or self

    def with_prefix(self, prefix):
        if len(self._terms) != 1:
            raise exceptions.InvalidArgumentError(
                "Only a single term compound unit can take a prefix: {}".format(self.label))
        term = self._terms[0]
        return self._with_terms([Term(term.unit.with_prefix(prefix), term.exponent)])

    def replace_terms(self, replacement):
        """New unit with each term's unit replaced by replacement(unit), exponents kept."""
        return self._with_terms([Term(replacement(term.unit).copy(), term.exponent)
                                 for term in self._terms])

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab:fileencoding=utf-8
