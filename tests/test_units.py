"""Tests for quantity parsing and gram conversion."""

import pytest

from nutrition_planner.services.units import (
    WEIGHT_UNITS,
    UnitConverter,
    parse_quantity_unit,
)


def test_parse_mixed_fraction() -> None:
    parsed = parse_quantity_unit("1 1/2 cups")
    assert parsed.amount == 1.5
    assert parsed.unit == "cups"


def test_parse_simple_fraction() -> None:
    parsed = parse_quantity_unit("3/4 cup")
    assert parsed.amount == 0.75
    assert parsed.unit == "cup"


def test_parse_decimal_without_space() -> None:
    parsed = parse_quantity_unit("2.5kg")
    assert parsed.amount == 2.5
    assert parsed.unit == "kg"


def test_parse_text_without_number_keeps_text_as_unit() -> None:
    parsed = parse_quantity_unit("a pinch of salt")
    assert parsed.amount == 0
    assert parsed.unit == "a pinch of salt"


def test_parse_empty_input() -> None:
    assert parse_quantity_unit("").amount == 0
    assert parse_quantity_unit(None).unit == ""


def test_parse_zero_denominator_does_not_fail() -> None:
    assert parse_quantity_unit("1/0 cup").amount == 1


@pytest.mark.parametrize("unit", sorted(WEIGHT_UNITS))
def test_weight_units_convert_with_table(unit: str) -> None:
    assert UnitConverter().to_grams(1, unit, "", "") == WEIGHT_UNITS[unit]


def test_weight_unit_is_case_insensitive() -> None:
    assert UnitConverter().to_grams(2, " KG ", "flour") == 2000


def test_count_uses_typical_ingredient_weight() -> None:
    converter = UnitConverter()
    assert converter.to_grams(3, "", "egg") == 150
    assert converter.to_grams(1, "pcs", "onion") == 110


def test_count_unit_weight_used_when_name_unknown() -> None:
    assert UnitConverter().to_grams(2, "cloves", "garlic") == 6


def test_container_defaults_by_category() -> None:
    converter = UnitConverter()
    assert converter.to_grams(1, "can", "kidney beans") == 240
    assert converter.to_grams(1, "tin", "chopped tomatoes") == 400
    assert converter.to_grams(1, "can", "coconut milk") == 300
    assert converter.to_grams(1, "jar", "pesto") == 350
    assert converter.to_grams(1, "pouch", "microwave rice") == 250
    assert converter.to_grams(1, "packet", "frozen veg") == 300
    assert converter.to_grams(1, "pack", "tofu") == 200


def test_unknown_count_weight_contributes_nothing() -> None:
    assert UnitConverter().to_grams(2, "pieces", "dragon fruit") == 0


def test_volume_uses_ingredient_density() -> None:
    converter = UnitConverter()
    assert converter.to_grams(1, "cup", "flour") == pytest.approx(236.588 * 0.53)
    assert converter.to_grams(2, "tbsp", "extra virgin olive oil") == pytest.approx(
        2 * 14.7868 * 0.91
    )


def test_volume_defaults_to_water_density() -> None:
    assert UnitConverter().to_grams(250, "ml", "stock") == 250


def test_unrecognized_unit_is_zero() -> None:
    assert UnitConverter().to_grams(3, "handfuls", "spinach") == 0


def test_missing_amount_recovered_from_original() -> None:
    converter = UnitConverter()
    assert converter.to_grams(0, "", "flour", "2 cups") == pytest.approx(
        2 * 236.588 * 0.53
    )
    assert converter.to_grams(0, "", "rice", "200 g") == 200
    assert converter.to_grams(0, "", "butter", "1/2 lb") == pytest.approx(226.796)


def test_unparseable_original_is_zero() -> None:
    assert UnitConverter().to_grams(0, "", "salt", "to taste") == 0


@pytest.mark.parametrize(
    "measure",
    ["9" * 400 + "/1 cup", "1 " + "9" * 400 + "/1 cup", "9" * 5000 + " g"],
)
def test_oversized_amounts_degrade_to_zero(measure: str) -> None:
    assert parse_quantity_unit(measure).amount == 0
    assert UnitConverter().to_grams(0, "", "flour", measure) == 0


def test_overflowing_conversion_is_zero() -> None:
    assert UnitConverter().to_grams(1e308, "kg", "flour") == 0
