# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Physical dimensions as exponent vectors over the base quantities.

A :class:`Dimension` maps base quantity names to non-zero integer exponents.
Velocity, for example, is ``{"length": 1, "time": -1}``. Dimensions multiply,
divide and raise to integer powers. After every operation the result is given
the name of the first structurally equal entry in its :class:`DimensionTable`,
if there is one.
"""

from quantify.core import exceptions
from quantify.textutils import remove_underscores

BASE_QUANTITIES = (
    "mass",
    "length",
    "time",
    "electric_current",
    "temperature",
    "luminous_intensity",
    "amount_of_substance",
    "information",
    "currency",
    "item",
)


def normalize_name(name):
    """Canonical form of a physical quantity name: "electric_current" -> "electric current"."""
    if not isinstance(name, str):
        raise exceptions.InvalidArgumentError("Physical quantity name must be a string: {!r}".format(name))
    return " ".join(remove_underscores(name).split()).lower()


def _check_vector(exponents):
    vector = {}
    for quantity, exponent in exponents.items():
        if quantity not in BASE_QUANTITIES:
            raise exceptions.InvalidDimensionError("Unknown base quantity: {!r}".format(quantity))
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise exceptions.InvalidArgumentError(
                "Exponent of {} must be an integer, not {!r}".format(quantity, exponent))
        if exponent != 0:
            vector[quantity] = exponent
    return vector


class Dimension:
    """Exponent vector over the base quantities.

    Arguments:
        exponents: mapping of base quantity name to integer exponent. Zero
                   exponents are dropped.
        physical_quantity: explicit name. If not given the name is looked up in
                   the table.
        table: the :class:`DimensionTable` used for name resolution.
    """

    def __init__(self, exponents=None, physical_quantity=None, table=None):
        self._vector = _check_vector(exponents or {})
        self._table = table
        if physical_quantity is not None:
            self.physical_quantity = normalize_name(physical_quantity)
        elif table is not None:
            self.physical_quantity = table.name_for(self)
        else:
            self.physical_quantity = None

    def __repr__(self):
        return "{}({!r}, {!r})".format(self.__class__.__name__, self._vector,
                                       self.physical_quantity)

    def __str__(self):
        if self.physical_quantity:
            return self.physical_quantity
        return self.describe()

    def describe(self):
        """Textual form of the exponents, e.g. "length^2 time^-1"."""
        if not self._vector:
            return "dimensionless"
        parts = []
        for quantity in BASE_QUANTITIES:
            exponent = self._vector.get(quantity)
            if exponent is None:
                continue
            parts.append(quantity if exponent == 1 else "{}^{}".format(quantity, exponent))
        return " ".join(parts)

    def __eq__(self, other):
        if not isinstance(other, Dimension):
            return NotImplemented
        return self._vector == other._vector

    def __hash__(self):
        return hash(frozenset(self._vector.items()))

    def __bool__(self):
        return bool(self._vector)

    def __iter__(self):
        return iter(self._vector.items())

    def get(self, quantity):
        """Exponent of a base quantity, zero if absent."""
        return self._vector.get(quantity, 0)

    def as_dict(self):
        return dict(self._vector)

    def copy(self):
        new = self.__class__.__new__(self.__class__)
        new._vector = dict(self._vector)
        new._table = self._table
        new.physical_quantity = self.physical_quantity
        return new

    __copy__ = copy

    def _new(self, vector):
        return self.__class__(vector, table=self._table)

    # Pure operations

    def multiply(self, other):
        vector = dict(self._vector)
        for quantity, exponent in other._vector.items():
            vector[quantity] = vector.get(quantity, 0) + exponent
        return self._new(vector)

    def reciprocal(self):
        return self._new({quantity: -exponent for quantity, exponent in self._vector.items()})

    def divide(self, other):
        return self.multiply(other.reciprocal())

    def pow(self, n):
        if isinstance(n, bool) or not isinstance(n, int):
            raise exceptions.InvalidArgumentError("Power must be an integer: {!r}".format(n))
        if n == 0:
            return self._new({})
        base = self if n > 0 else self.reciprocal()
        result = base
        for _ in range(abs(n) - 1):
            result = result.multiply(base)
        return result

    __mul__ = multiply
    __truediv__ = divide
    __pow__ = pow

    # In-place versions assign the pure result back to self.

    def _assign(self, other):
        self._vector = other._vector
        self.physical_quantity = other.physical_quantity
        return self

    def multiply_(self, other):
        return self._assign(self.multiply(other))

    def divide_(self, other):
        return self._assign(self.divide(other))

    def reciprocalize_(self):
        return self._assign(self.reciprocal())

    def pow_(self, n):
        return self._assign(self.pow(n))

    # Predicates

    @property
    def is_dimensionless(self):
        return not self._vector

    @property
    def is_base(self):
        """True if this is exactly one base quantity to the first power."""
        return len(self._vector) == 1 and next(iter(self._vector.values())) == 1

    @property
    def is_known(self):
        return self.physical_quantity is not None

    @property
    def base_quantities(self):
        return [quantity for quantity in BASE_QUANTITIES if quantity in self._vector]

    @property
    def denominator_quantities(self):
        return [quantity for quantity in BASE_QUANTITIES if self._vector.get(quantity, 0) < 0]

    @property
    def is_specific_quantity(self):
        """Quantities per unit mass, such as specific energy."""
        return self.denominator_quantities == ["mass"]

    @property
    def is_molar_quantity(self):
        """Quantities per mole, such as molar energy."""
        return self.denominator_quantities == ["amount_of_substance"]


class DimensionTable:
    """Ordered table of named dimensions.

    Lookup of a name for an exponent vector is a linear scan, the first
    structurally equal entry wins.
    """

    def __init__(self):
        self._dimensions = []

    def __len__(self):
        return len(self._dimensions)

    def __iter__(self):
        return (dim.copy() for dim in self._dimensions)

    def __contains__(self, name):
        return self._find(name) is not None

    def _find(self, name):
        if isinstance(name, str):
            name = normalize_name(name)
            for dim in self._dimensions:
                if dim.physical_quantity == name:
                    return dim
        return None

    def load(self, record):
        """Add a dimension from a record.

        The record has a "physical_quantity" name and base quantity exponents,
        for example ``{"physical_quantity": "velocity", "length": 1, "time": -1}``.
        """
        record = dict(record)
        try:
            name = record.pop("physical_quantity")
        except KeyError:
            raise exceptions.InvalidDimensionError(
                "Dimension record has no physical_quantity: {!r}".format(record)) from None
        name = normalize_name(name)
        if not name:
            raise exceptions.InvalidDimensionError("Empty physical_quantity name")
        if self._find(name) is not None:
            raise exceptions.InvalidArgumentError("Dimension {!r} already loaded".format(name))
        dim = Dimension(record, physical_quantity=name, table=self)
        self._dimensions.append(dim)
        return dim.copy()

    def unload(self, name):
        dim = self._find(name)
        if dim is None:
            raise exceptions.InvalidDimensionError("Dimension {!r} not loaded".format(name))
        # Dimensions compare by vector, so remove by identity.
        for index, entry in enumerate(self._dimensions):
            if entry is dim:
                del self._dimensions[index]
                break

    def for_name(self, name):
        """Get a copy of the named dimension."""
        dim = self._find(name)
        if dim is None:
            raise exceptions.InvalidDimensionError("Unknown physical quantity: {!r}".format(name))
        return dim.copy()

    def name_for(self, dimension):
        for dim in self._dimensions:
            if dim == dimension:
                return dim.physical_quantity
        return None

    def dimensionless(self):
        return Dimension(table=self)

    def names(self):
        return [dim.physical_quantity for dim in self._dimensions]

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab
