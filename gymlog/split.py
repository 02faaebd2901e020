import re
from dataclasses import dataclass


@dataclass(frozen=True)
class SplitDay:
    name: str
    exercises: tuple[str, ...]

    @property
    def subtitle(self) -> str:
        """The day name without its ``DAY n.`` prefix."""
        return re.sub(r"^DAY\s*\d+\s*\.?\s*", "", self.name, flags=re.IGNORECASE).strip()


SPLIT: tuple[SplitDay, ...] = (
    SplitDay(
        "DAY 1. CHEST / TRICEPS / CORE",
        (
            "Flat Barbell Bench Press",
            "High-To-Low Cable Fly",
            "Cable Bar Overhead Extension",
            "Cable Bar Pushdown",
            "Elbow Plank",
            "Hyperextension",
        ),
    ),
    SplitDay(
        "DAY 2. BACK / BICEPS / FOREARMS",
        (
            "Overhand Grip Lat Pulldown",
            "Chest-Supported Machine Row",
            "EZ-Bar Curl",
            "Cable Bar Curl",
            "Unilateral Hammer Curl",
            "Behind-Back Wrist Curl",
        ),
    ),
    SplitDay(
        "DAY 3. SHOULDERS / LEGS / ABS",
        (
            "Dumbbell Shoulder Press",
            "Unilateral Cable Lateral Raise",
            "Leg Extension",
            "Seated Leg Curl",
            "Ab Crunch",
            "Lateral Ab Crunch",
        ),
    ),
    SplitDay(
        "DAY 4. CHEST / TRICEPS / CORE",
        (
            "Incline Dumbbell Bench Press",
            "Low-To-High Cable Fly",
            "Cable Bar Overhead Extension",
            "Cable Bar Pushdown",
            "Elbow Plank",
            "Hyperextension",
        ),
    ),
    SplitDay(
        "DAY 5. BACK / BICEPS / FOREARMS",
        (
            "Neutral Grip Lat Pulldown",
            "Cable Row",
            "EZ-Bar Curl",
            "Machine Preacher Curl",
            "Unilateral Hammer Curl",
            "Behind-Back Wrist Curl",
        ),
    ),
    SplitDay(
        "DAY 6. SHOULDERS / LEGS / ABS",
        (
            "Peck-Deck Rear Delt Fly",
            "Dumbbell Shrugs",
            "Leg Extension",
            "Seated Leg Curl",
            "Ab Crunch",
            "Lateral Ab Crunch",
        ),
    ),
)
