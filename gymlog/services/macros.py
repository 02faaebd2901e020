"""Reconcile partially filled nutrition input into a consistent record.

Any three of calories, protein, carbs and fat are enough: the fourth follows
from energy = 4 × protein + 4 × carbs + 9 × fat (kcal per gram). Derived values
are always rounded up. With all four given, calories are recomputed from the
macros and the entered value only has to be close enough to it.
"""

import math
from dataclasses import dataclass
from enum import Enum

KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}
FIELDS = ("calories", "protein", "carbs", "fat")

TOLERANCE_KCAL = 50.0
TOLERANCE_RATIO = 0.05

# Float noise to discard before taking a ceiling, so 0.1-style inputs don't
# push a whole-number result up by one.
_CEIL_PRECISION = 6


class ResolutionStatus(str, Enum):
    INSUFFICIENT = "insufficient"
    VALID = "valid"
    INCONSISTENT = "inconsistent"


@dataclass(frozen=True)
class MacroValues:
    calories: float
    protein: float
    carbs: float
    fat: float

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in FIELDS}


@dataclass(frozen=True)
class MacroResolution:
    present: int
    values: MacroValues | None = None
    missing: str | None = None
    entered_calories: float | None = None
    derived_energy: float | None = None
    is_valid: bool = False

    @property
    def can_save(self) -> bool:
        return self.present >= 3

    @property
    def show_error(self) -> bool:
        return self.can_save and not self.is_valid

    @property
    def save_disabled(self) -> bool:
        return not self.can_save or self.show_error

    @property
    def status(self) -> ResolutionStatus:
        if not self.can_save:
            return ResolutionStatus.INSUFFICIENT
        return ResolutionStatus.VALID if self.is_valid else ResolutionStatus.INCONSISTENT


def parse_macro(raw) -> float | None:
    """Parse one input field. Empty, non-numeric and non-finite input is absent."""
    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip().replace(",", ".")
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def energy(protein: float, carbs: float, fat: float) -> float:
    return (
        protein * KCAL_PER_GRAM["protein"]
        + carbs * KCAL_PER_GRAM["carbs"]
        + fat * KCAL_PER_GRAM["fat"]
    )


def _ceil(value: float) -> int:
    return math.ceil(round(value, _CEIL_PRECISION))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _tolerance(derived: float) -> float:
    return max(TOLERANCE_KCAL, TOLERANCE_RATIO * derived)


def _derive_missing(missing: str, given: dict[str, float]) -> float:
    if missing == "calories":
        return _ceil(energy(given["protein"], given["carbs"], given["fat"]))
    remainder = given["calories"] - sum(
        given[name] * KCAL_PER_GRAM[name] for name in KCAL_PER_GRAM if name != missing
    )
    return _ceil(remainder / KCAL_PER_GRAM[missing])


def resolve_macros(calories=None, protein=None, carbs=None, fat=None) -> MacroResolution:
    parsed = {
        "calories": parse_macro(calories),
        "protein": parse_macro(protein),
        "carbs": parse_macro(carbs),
        "fat": parse_macro(fat),
    }
    given = {name: value for name, value in parsed.items() if value is not None}
    present = len(given)

    if present < 3:
        return MacroResolution(present=present)

    if present == 3:
        missing = next(name for name in FIELDS if name not in given)
        resolved = dict(given, **{missing: _derive_missing(missing, given)})
        values = MacroValues(**resolved)
        return MacroResolution(
            present=present,
            values=values,
            missing=missing,
            is_valid=all(v >= 0 for v in resolved.values()),
        )

    derived = energy(given["protein"], given["carbs"], given["fat"])
    values = MacroValues(
        calories=_round_half_up(derived),
        protein=given["protein"],
        carbs=given["carbs"],
        fat=given["fat"],
    )
    within_tolerance = abs(given["calories"] - derived) <= _tolerance(derived)
    # The entered calories are discarded on save but still must not be negative
    entered_ok = given["calories"] >= 0
    return MacroResolution(
        present=present,
        values=values,
        entered_calories=given["calories"],
        derived_energy=derived,
        is_valid=within_tolerance and entered_ok and all(v >= 0 for v in values.as_dict().values()),
    )
