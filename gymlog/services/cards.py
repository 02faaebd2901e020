"""Which exercise card is expanded, and whether a refresh result is still wanted.

Pure view state for an in-process UI client that owns the screens; the HTTP
routes are stateless and do not use it. Nothing here touches the database.
"""

from dataclasses import dataclass
from enum import Enum


class CardPhase(str, Enum):
    COLLAPSED = "collapsed"
    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"


class CardMode(str, Enum):
    ADD = "add"
    HISTORY = "history"


@dataclass(frozen=True)
class CardTarget:
    exercise: str
    mode: CardMode


@dataclass
class RoutineCards:
    """At most one card is expanded. A card that is closing keeps its mode until
    its collapse finishes; opening another card drops it straight away."""

    expanded: CardTarget | None = None
    closing: CardTarget | None = None
    settled: bool = False

    def toggle(self, exercise: str, mode: CardMode) -> None:
        target = CardTarget(exercise, CardMode(mode))
        if self.expanded == target:
            self.closing = target
            self.expanded = None
        else:
            self.closing = None
            self.expanded = target
        self.settled = False

    def open_add(self, exercise: str) -> None:
        self.toggle(exercise, CardMode.ADD)

    def open_history(self, exercise: str) -> None:
        self.toggle(exercise, CardMode.HISTORY)

    def open_done(self, exercise: str) -> None:
        if self.expanded is not None and self.expanded.exercise == exercise:
            self.settled = True

    def collapse_done(self, exercise: str) -> None:
        # Only clear if this card is still the one closing
        if self.closing is not None and self.closing.exercise == exercise:
            self.closing = None

    def reset(self) -> None:
        self.expanded = None
        self.closing = None
        self.settled = False

    def phase(self, exercise: str) -> CardPhase:
        if self.expanded is not None and self.expanded.exercise == exercise:
            return CardPhase.OPEN if self.settled else CardPhase.OPENING
        if self.closing is not None and self.closing.exercise == exercise:
            return CardPhase.CLOSING
        return CardPhase.COLLAPSED

    def mode(self, exercise: str) -> CardMode | None:
        for target in (self.expanded, self.closing):
            if target is not None and target.exercise == exercise:
                return target.mode
        return None


class RefreshGuard:
    """Hands out tokens for in-flight refreshes; only the latest one may be applied."""

    def __init__(self) -> None:
        self._current = 0

    def begin(self) -> int:
        self._current += 1
        return self._current

    def cancel(self) -> None:
        self._current += 1

    def is_current(self, token: int) -> bool:
        return token == self._current
