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
Unit tests for quantify.quantity module.
"""

import pytest

from quantify.core import exceptions
from quantify.quantity import Quantity, quantity, ratio


def test_construction():
    q = Quantity(3, "ft")
    assert q.value == 3.0
    assert isinstance(q.value, float)
    assert q.unit.label == "ft"
    assert q.represents == "length"
    assert Quantity(5).unit.is_unity
    assert str(Quantity(5)) == "5.0"
    assert quantity(2, "m").unit.name == "metre"


def test_bad_values():
    with pytest.raises(exceptions.InvalidArgumentError):
        Quantity("3", "m")
    with pytest.raises(exceptions.InvalidArgumentError):
        Quantity(True, "m")
    with pytest.raises(exceptions.InvalidArgumentError):
        Quantity(3, 42)


def test_no_value():
    q = Quantity(None, "m")
    assert str(q) == "m"
    assert q.to("km").value is None
    assert Quantity(None, "m") == Quantity(None, "ft")
    with pytest.raises(exceptions.InvalidArgumentError):
        q + Quantity(1, "m")


def test_to_string():
    assert str(Quantity(2, "m/s")) == "2.0 m/s"
    assert Quantity(1, "ft").to_string("name") == "1.0 foot"
    assert Quantity(2, "ft").to_string("name") == "2.0 feet"
    assert Quantity(20, "°C").to_string("label") == "20.0 deg_c"
    assert Quantity(20, "°C").to_string() == "20.0 °C"
    with pytest.raises(exceptions.InvalidArgumentError):
        Quantity(1, "m").to_string("fancy")


class TestConversion:

    def test_prefixed(self):
        assert Quantity(1000, "m").to("km").value == 1.0
        assert Quantity(1, "km").unit.factor == 1000.0

    def test_temperature(self):
        kelvin = Quantity(0, "°C").to("K")
        assert kelvin.value == pytest.approx(273.15)
        assert kelvin.to("°C").value == pytest.approx(0.0, abs=1e-9)
        assert Quantity(32, "°F").to("°C").value == pytest.approx(0.0, abs=1e-9)
        assert Quantity(85, "°F").to("°C").round(2).value == 29.44

    def test_compound_alternative(self):
        assert Quantity(1, "kWh").to("kW s").value == pytest.approx(3600.0)

    def test_partial_conversion(self):
        speed = Quantity(100, "km/h").to("mi")
        assert str(speed.round(2)) == "62.14 mi/h"
        assert speed.represents == "velocity"

    def test_compound_to_affine(self):
        rate = Quantity(2, "K/s").to("°C")
        assert rate.value == 2.0
        assert str(rate) == "2.0 °C/s"
        assert rate.to("K").value == 2.0
        assert rate.to("K").unit.label == "K/s"

    @pytest.mark.parametrize("value,unit,other", [
        (3.5, "km", "mi"),
        (2, "kWh", "J"),
        (90, "km/h", "m/s"),
        (12, "lb", "kg"),
        (7, "ft", "fur"),
        (-40, "°F", "°C"),
    ])
    def test_round_trip(self, value, unit, other):
        q = Quantity(value, unit)
        back = q.to(other).to(unit)
        assert back.value == pytest.approx(q.value)
        assert back.unit.label == q.unit.label

    def test_incompatible(self):
        with pytest.raises(exceptions.IncompatibleUnitsError):
            Quantity(1, "m").to("s")
        with pytest.raises(exceptions.IncompatibleUnitsError):
            Quantity(1, "°C").to("m")

    def test_to_unit_in_place(self):
        q = Quantity(1, "km")
        assert q.to_unit("m") is None
        assert q.value == 1000.0
        assert q.unit.label == "m"

    def test_to_si(self):
        assert str(Quantity(2, "kWh").to_si()) == "7200000.0 J"
        assert str(Quantity(400, "ha").to_si()) == "4000000.0 m²"
        assert Quantity(0, "°C").to_si().value == pytest.approx(273.15)
        assert Quantity(3, "ft").to_si().unit.label == "m"

    def test_in_units_of(self):
        hours, minutes = Quantity(1.5, "h").in_units_of("min", "h")
        assert hours.value == 1.0
        assert hours.unit.label == "h"
        assert minutes.value == pytest.approx(30.0)
        assert minutes.unit.label == "min"
        assert Quantity(90, "min").in_units_of("h").value == 1.5

    def test_ratio(self):
        assert ratio("lb", "kg").round(3).to_string("name") == "2.205 pounds per kilogram"
        with pytest.raises(exceptions.IncompatibleUnitsError):
            ratio("m", "s")


class TestArithmetic:

    def test_add_converts_to_first_unit(self):
        total = Quantity(125.4, "K") + Quantity(-211.85, "°C")
        assert total.value == pytest.approx(186.7)
        assert total.unit.label == "K"
        assert (Quantity(1, "km") - Quantity(500, "m")).value == 0.5

    def test_add_incompatible(self):
        with pytest.raises(exceptions.IncompatibleUnitsError):
            Quantity(1, "m") + Quantity(1, "kg")

    def test_multiply_keeps_units(self):
        q = Quantity(20, "L") * Quantity(1, "km") * (Quantity(5, "lb") / Quantity(1, "L"))
        assert str(q) == "100.0 L km lb/L"
        cancelled = q.cancel_base_units("L")
        assert cancelled.unit.label == "km·lb"
        assert cancelled.value == pytest.approx(100.0)
        assert q.consolidate_units().unit.label == "km·lb"

    def test_auto_consolidate(self, fresh_registry):
        fresh_registry.options["quantity.auto_consolidate_units"] = True
        litres = Quantity(20, "L", registry=fresh_registry)
        q = litres * Quantity(1, "km", registry=fresh_registry) * Quantity(5, "lb/L", registry=fresh_registry)
        assert str(q) == "100.0 km lb"
        assert str(litres * Quantity(5, "lb/L", registry=fresh_registry)) == "100.0 lb"

    def test_equivalent_unit_substituted(self):
        assert str(Quantity(10, "N") * Quantity(2, "m")) == "20.0 J"
        assert str(Quantity(3, "m") / Quantity(1, "s")) == "3.0 m/s"
        assert str(Quantity(3, "m") * Quantity(2, "m")) == "6.0 m²"

    def test_rationalize(self):
        q = Quantity(12, "yd") * Quantity(36, "ft")
        assert str(q) == "432.0 yd ft"
        area = q.rationalize_units()
        assert area.unit.label == "yd²"
        assert area.value == pytest.approx(144.0)

    def test_cancelled_unit_is_unity(self):
        q = Quantity(3, "m/m")
        assert q.unit.is_unity
        assert str(q) == "3.0"

    def test_numbers(self):
        assert str(2 * Quantity(3, "m")) == "6.0 m"
        assert str(Quantity(6, "m") / 2) == "3.0 m"
        assert str(1 / Quantity(4, "s")) == "0.25 s^-1"

    def test_pow(self):
        assert str(Quantity(2, "m/s") ** 2) == "4.0 m²/s²"
        assert Quantity(3, "m").pow(2).unit.label == "m²"
        with pytest.raises(exceptions.InvalidArgumentError):
            Quantity(3, "m").pow(0.5)

    def test_sign(self):
        assert (-Quantity(3, "m")).value == -3.0
        assert abs(Quantity(-3, "m")).value == 3.0
        assert (+Quantity(3, "m")).value == 3.0


class TestComparison:

    def test_equal(self):
        assert Quantity(1000, "m") == Quantity(1, "km")
        assert Quantity(1, "m") != Quantity(1, "s")
        assert Quantity(1, "m") != 1

    def test_order(self):
        assert Quantity(1, "km") > Quantity(999, "m")
        assert Quantity(1, "ft") < Quantity(1, "m")
        assert Quantity(12, "in") <= Quantity(1, "ft") * 1.0001
        assert Quantity(5, "ft").between(Quantity(1, "m"), Quantity(2, "m"))

    def test_order_incompatible(self):
        with pytest.raises(exceptions.IncompatibleUnitsError):
            Quantity(1, "m") < Quantity(1, "s")
        with pytest.raises(TypeError):
            Quantity(1, "m") < 2


class TestParse:

    def test_parse(self):
        q = Quantity.parse("12.5 km/h")
        assert q.value == 12.5
        assert q.unit.label == "km/h"
        assert Quantity.parse("3 m^2").unit.label == "m²"
        assert Quantity.parse("-1.5e3 J").value == -1500.0

    def test_parse_negative_index(self):
        q = Quantity.parse("9.81 m s^-2")
        assert q.value == 9.81
        assert q.unit.label == "m/s²"
        assert q.represents == "acceleration"
        q = Quantity.parse("5 m^-1")
        assert q.value == 5.0
        assert q.unit.label == "m^-1"
        found = Quantity.parse_all("g is 9.81 m s^-2")
        assert len(found) == 1
        assert str(found[0]) == "9.81 m/s²"

    def test_parse_errors(self):
        with pytest.raises(exceptions.QuantityParseError):
            Quantity.parse("km 12")
        with pytest.raises(exceptions.QuantityParseError):
            Quantity.parse("1 2 m")
        with pytest.raises(exceptions.QuantityParseError):
            Quantity.parse("5 blivets")
        with pytest.raises(exceptions.QuantityParseError):
            Quantity.parse("no number")

    def test_parse_all(self):
        found, rest = Quantity.parse_all("The room is 12 ft by 10.5 ft, 3 m tall", remainder=True)
        assert [str(q) for q in found] == ["12.0 ft", "10.5 ft", "3.0 m"]
        assert rest == ["The room is", "by", ",", "tall"]

    def test_parse_all_without_unit(self):
        found = Quantity.parse_all("batch 4, done")
        assert len(found) == 1
        assert found[0].value == 4.0
        assert found[0].unit.is_unity

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab:fileencoding=utf-8
