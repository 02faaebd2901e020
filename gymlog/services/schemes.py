from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Scheme:
    """Selectable rep (or seconds) range for an exercise."""

    min: int
    max: int
    step: int
    unit_label: str = "reps"

    def clamp(self, value: int) -> int:
        return max(self.min, min(self.max, value))

    def step_values(self) -> list[int]:
        return list(range(self.min, self.max + 1, self.step))


DEFAULT_SCHEME = Scheme(min=8, max=12, step=1)

# Keyed by lower-cased, trimmed exercise name
SCHEME_OVERRIDES: dict[str, Scheme] = {
    "flat barbell bench press": Scheme(min=3, max=6, step=1),
    "elbow plank": Scheme(min=30, max=120, step=15, unit_label="sec"),
}


class HasReps(Protocol):
    top_reps: int | None
    back_reps: int | None


def resolve_scheme(exercise_name: str | None) -> Scheme:
    key = str(exercise_name or "").strip().lower()
    return SCHEME_OVERRIDES.get(key, DEFAULT_SCHEME)


def ready_to_upgrade(scheme: Scheme, entry: HasReps | None) -> bool:
    """Both sets of the latest entry hit the top of the range: time to add weight."""
    if entry is None:
        return False
    return entry.top_reps == scheme.max and entry.back_reps == scheme.max
