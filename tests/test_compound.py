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
Unit tests for quantify.compound module.
"""

import pytest

from quantify.compound import CompoundUnit, Term, consolidate_terms
from quantify.core import exceptions
from quantify.core.types import UnitClass
from quantify.unit import Unit


@pytest.fixture
def units(registry):
    """Resolve labels to units."""
    def get(*labels):
        return [registry.resolve(label) for label in labels]
    return get


class TestConstruction:

    def test_terms(self, registry, units):
        m, s = units("m", "s")
        unit = CompoundUnit(m, (s, -2))
        assert [(t.unit.label, t.exponent) for t in unit.terms] == [("m", 1), ("s", -2)]
        assert unit.unit_class == UnitClass.COMPOUND
        assert unit.measures == "acceleration"
        assert unit.registry is registry

    def test_strings_and_terms(self, registry):
        unit = CompoundUnit("kg", Term(registry.resolve("m"), 2), ("s", -2), registry=registry)
        assert unit.label == "kg·m²/s²"

    def test_rejects_compound_terms(self, registry, units):
        m, s = units("m", "s")
        with pytest.raises(exceptions.InvalidArgumentError):
            CompoundUnit(m / s, s)
        with pytest.raises(exceptions.InvalidArgumentError):
            CompoundUnit((m / s, 2))
        with pytest.raises(exceptions.InvalidArgumentError):
            Term(m / s, 1)

    def test_rejects_bad_terms(self, units):
        m, = units("m")
        with pytest.raises(exceptions.InvalidArgumentError):
            CompoundUnit((m, 2, 3))
        with pytest.raises(exceptions.InvalidArgumentError):
            CompoundUnit((m, 1.5))
        with pytest.raises(exceptions.InvalidArgumentError):
            CompoundUnit(42)
        with pytest.raises(exceptions.InvalidArgumentError):
            CompoundUnit(m, scope="some")

    def test_factor_and_dimension(self, units):
        km, h = units("km", "h")
        unit = CompoundUnit(km, (h, -1))
        assert unit.factor == pytest.approx(1000.0 / 3600.0)
        assert unit.measures == "velocity"
        assert unit.is_compound_unit
        assert not unit.is_si_unit
        assert unit.is_non_si_unit

    def test_dimension_without_registry(self):
        smoot = Unit("smoot", "smoot", "smoot", {"length": 1}, factor=1.7018)
        tick = Unit("tick", "tick", "tick", {"time": 1}, factor=0.5)
        unit = CompoundUnit(smoot, (tick, -2))
        assert unit.registry is None
        assert unit.dimension.as_dict() == {"length": 1, "time": -2}
        assert unit.factor == pytest.approx(1.7018 / 0.25)


class TestRendering:

    def test_partial_scope(self, units):
        m, s, kg = units("m", "s", "kg")
        unit = CompoundUnit((m, 2), s, kg, (m, -3), (s, -1), scope="partial")
        assert unit.symbol == "m² s kg/m³ s"
        assert unit.label == "m²·s·kg/m³·s"
        assert len(unit.terms) == 5

    def test_indices_only(self, fresh_registry):
        fresh_registry.options["format.symbol_denominator_syntax"] = False
        m, s, kg = (fresh_registry.resolve(x) for x in ("m", "s", "kg"))
        unit = CompoundUnit((m, 2), s, kg, (m, -3), (s, -1), scope="partial")
        assert unit.symbol == "m² s kg s^-1 m^-3"

    def test_parentheses(self, fresh_registry):
        fresh_registry.options["format.symbol_parentheses"] = True
        m, s, kg = (fresh_registry.resolve(x) for x in ("m", "s", "kg"))
        unit = CompoundUnit((m, 2), s, kg, (m, -3), (s, -1), scope="partial")
        assert unit.symbol == "(m² s kg)/(m³ s)"
        assert unit.label == "m²·s·kg/m³·s"

    def test_delimiters(self, fresh_registry):
        fresh_registry.options["format.symbol_denominator_delimiter"] = " per "
        fresh_registry.options["format.symbol_unit_delimiter"] = "·"
        unit = fresh_registry.parse_unit_string("kg m/s")
        assert unit.symbol == "kg·m per s"

    def test_names(self, registry, units):
        m, K, s = units("m", "K", "s")
        unit = CompoundUnit((m, 4), (K, 2), (s, -3))
        assert unit.name == "metre to the 4th power square kelvin per cubic second"
        assert CompoundUnit((m, -3)).name == "per cubic metre"
        unit = registry.parse_unit_string("t km/year")
        assert unit.name == "tonne kilometre per year"
        assert unit.pluralized_name == "tonne kilometres per year"

    def test_labels(self, registry, units):
        assert registry.parse_unit_string("kg/t km").label == "kg/t·km"
        assert CompoundUnit((units("m")[0], -1)).label == "m^-1"
        assert registry.parse_unit_string("MJ m^3/kg^2").label == "MJ·m³/kg²"

    def test_overrides(self, registry):
        kwh = registry.resolve("kWh")
        assert kwh.symbol == "kWh"
        assert kwh.label == "kWh"
        assert kwh.name == "kilowatt hour"
        assert kwh.pluralized_name == "kilowatt hours"
        assert kwh.consolidate().label == "kW·h"


class TestConsolidation:

    def test_full(self, units):
        m, s = units("m", "s")
        unit = CompoundUnit(m, s, (m, -1), (s, -2), scope="partial")
        assert len(unit.terms) == 4
        assert unit.consolidate().label == "s^-1"

    def test_per_side(self, units):
        m, s = units("m", "s")
        unit = CompoundUnit(m, m, (s, -1), (m, -1), scope="partial")
        assert unit.label == "m²/s·m"
        assert unit.consolidate_numerator_and_denominator().label == "m²/s·m"

    def test_equivalent_units_merge(self, registry):
        unit = CompoundUnit(registry.resolve("m"), registry.resolve("metre"))
        assert [(t.unit.label, t.exponent) for t in unit.terms] == [("m", 2)]

    def test_unity_dropped(self, registry, units):
        m, = units("m")
        unit = CompoundUnit(m, registry.unity(), registry.resolve("%"))
        assert [t.unit.label for t in unit.terms] == ["m", "percent"]

    def test_idempotent(self, units):
        m, s, kg = units("m", "s", "kg")
        terms = [Term(m, 2), Term(s, 1), Term(kg, 1), Term(m, -3), Term(s, -1)]
        once = consolidate_terms(terms)
        assert consolidate_terms(once) == once
        assert [(t.unit.label, t.exponent) for t in once] == [("m", -1), ("kg", 1)]

    def test_cancel(self, units):
        m, s, kg = units("m", "s", "kg")
        unit = CompoundUnit((m, 2), s, kg, (m, -3), (s, -1), scope="partial")
        cancelled = unit.cancel("m", s)
        assert cancelled.label == "kg/m"
        assert unit.label == "m²·s·kg/m³·s"

    def test_cancel_rejects_compound(self, units):
        m, s = units("m", "s")
        with pytest.raises(exceptions.InvalidArgumentError):
            CompoundUnit(m, (s, -1)).cancel(m / s)


class TestRationalize:

    def test_rationalize(self, registry, units):
        yd, ft = units("yd", "ft")
        assert (yd * ft).rationalize().label == "yd²"
        unit = registry.parse_unit_string("m cm/in")
        rationalized = unit.rationalize()
        assert rationalized.label == "m²/m"
        assert rationalized.consolidate().label == "m"

    def test_rationalize_with_unit(self, registry, units):
        yd, ft = units("yd", "ft")
        assert (yd * ft).rationalize_numerator_and_denominator("yd").label == "yd²"
        unit = registry.parse_unit_string("m cm/in")
        rationalized = unit.rationalize("cm")
        assert rationalized.label == "cm²/cm"
        assert rationalized.consolidate().label == "cm"

    def test_rationalize_per_side(self, registry, units):
        yd, ft = units("yd", "ft")
        assert (yd * ft).rationalize_numerator_and_denominator().label == "yd²"
        unit = registry.parse_unit_string("m cm/in")
        rationalized = unit.rationalize_numerator_and_denominator()
        assert rationalized.label == "m²/in"
        assert rationalized.consolidate().label == "m²/in"


class TestAlgebra:

    def test_multiply_consolidates(self, units):
        m, s = units("m", "s")
        velocity = m / s
        assert (velocity * s).label == "m"
        assert (velocity * s).is_compound_unit

    def test_pow(self, units):
        m, s = units("m", "s")
        assert (m / s).pow(2).label == "m²/s²"
        assert (m / s).pow(-1).label == "s/m"

    def test_with_prefix(self, registry):
        squared = registry.resolve("m^2")
        assert squared.with_prefix("k").label == "km²"
        with pytest.raises(exceptions.InvalidArgumentError):
            registry.parse_unit_string("m/s").with_prefix("k")

    def test_or_equivalent(self, registry):
        assert registry.parse_unit_string("N m").or_equivalent().label == "J"
        assert registry.parse_unit_string("m/s").or_equivalent().label == "m/s"

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab:fileencoding=utf-8
