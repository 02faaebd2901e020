"""Unit tests for the macro/calorie resolver."""

import pytest

from gymlog.services.macros import (
    MacroValues,
    ResolutionStatus,
    energy,
    parse_macro,
    resolve_macros,
)

# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("150", 150.0),
        (" 12,5 ", 12.5),
        ("0", 0.0),
        (60, 60.0),
        ("-3", -3.0),
        ("", None),
        ("   ", None),
        (None, None),
        ("abc", None),
        ("nan", None),
        ("inf", None),
    ],
)
def test_parse_macro(raw, expected):
    assert parse_macro(raw) == expected


def test_energy_uses_4_4_9():
    assert energy(150, 200, 60) == 1940


# ---------------------------------------------------------------------------
# Fewer than three fields
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "fields",
    [
        {},
        {"calories": "2000"},
        {"protein": "150", "fat": "60"},
        {"calories": "2000", "protein": "abc", "carbs": "", "fat": "60"},
    ],
)
def test_insufficient_input(fields):
    resolution = resolve_macros(**fields)
    assert resolution.status is ResolutionStatus.INSUFFICIENT
    assert resolution.values is None
    assert resolution.can_save is False
    assert resolution.show_error is False
    assert resolution.save_disabled is True


# ---------------------------------------------------------------------------
# Exactly three fields
# ---------------------------------------------------------------------------


def test_missing_calories_derived_from_macros():
    resolution = resolve_macros(protein="150", carbs="200", fat="60")
    assert resolution.missing == "calories"
    assert resolution.values == MacroValues(calories=1940, protein=150, carbs=200, fat=60)
    assert resolution.is_valid is True
    assert resolution.save_disabled is False


def test_missing_protein():
    resolution = resolve_macros(calories="2000", carbs="200", fat="60")
    # (2000 - 800 - 540) / 4 = 165
    assert resolution.missing == "protein"
    assert resolution.values.protein == 165


def test_missing_carbs():
    resolution = resolve_macros(calories="2000", protein="150", fat="60")
    # (2000 - 600 - 540) / 4 = 215
    assert resolution.values.carbs == 215


def test_missing_fat_rounds_up():
    resolution = resolve_macros(calories="2000", protein="150", carbs="200")
    # (2000 - 600 - 800) / 9 = 66.67
    assert resolution.values.fat == 67
    assert resolution.is_valid is True


def test_missing_calories_rounds_up():
    resolution = resolve_macros(protein="10,1", carbs="0", fat="0")
    # 40.4 kcal
    assert resolution.values.calories == 41


def test_derived_negative_value_is_invalid_not_clamped():
    resolution = resolve_macros(calories="500", protein="150", carbs="200")
    assert resolution.values.fat < 0
    assert resolution.is_valid is False
    assert resolution.status is ResolutionStatus.INCONSISTENT
    assert resolution.show_error is True
    assert resolution.save_disabled is True


def test_negative_entered_value_is_invalid():
    resolution = resolve_macros(protein="-10", carbs="200", fat="60")
    assert resolution.is_valid is False


def test_negative_entered_calories_with_all_four_is_invalid():
    # Within tolerance of the derived 0 kcal, but still negative.
    resolution = resolve_macros(calories="-40", protein="0", carbs="0", fat="0")
    assert resolution.values.calories == 0
    assert resolution.is_valid is False
    assert resolution.show_error is True
    assert resolution.save_disabled is True


# ---------------------------------------------------------------------------
# All four fields
# ---------------------------------------------------------------------------


def test_all_four_within_tolerance_stores_derived_calories():
    resolution = resolve_macros(calories="2000", protein="150", carbs="200", fat="60")
    assert resolution.is_valid is True
    assert resolution.entered_calories == 2000
    assert resolution.derived_energy == 1940
    assert resolution.values == MacroValues(calories=1940, protein=150, carbs=200, fat=60)
    assert resolution.missing is None


def test_all_four_outside_tolerance_is_invalid():
    resolution = resolve_macros(calories="2500", protein="150", carbs="200", fat="60")
    assert resolution.can_save is True
    assert resolution.is_valid is False
    assert resolution.show_error is True
    assert resolution.save_disabled is True


@pytest.mark.parametrize("calories, valid", [("2037", True), ("2038", False), ("1843", True), ("1842", False)])
def test_percentage_tolerance_boundary(calories, valid):
    # 5% of 1940 = 97 kcal
    assert resolve_macros(calories, "150", "200", "60").is_valid is valid


@pytest.mark.parametrize("calories, valid", [("130", True), ("131", False), ("30", True), ("29", False)])
def test_absolute_tolerance_for_small_meals(calories, valid):
    # 80 kcal derived; 5% would be 4, so the 50 kcal floor applies
    assert resolve_macros(calories, "10", "10", "0").is_valid is valid


def test_all_four_rounds_half_up():
    resolution = resolve_macros(calories="40", protein="10.125", carbs="0", fat="0")
    # 40.5 kcal
    assert resolution.values.calories == 41
