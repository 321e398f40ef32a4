"""
Cyclic list of selectable choices.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple


@dataclass(frozen=True)
class CarouselSnapshot:
    """What the display needs to draw the carousel for one frame."""
    current: str
    previous: Tuple[str, ...]   # previous[0] is the closest choice
    following: Tuple[str, ...]  # following[0] is the closest choice
    offset: float = 0.0         # slide offset in gaps, negative for LEFT


class ChoiceCarousel:
    """
    Ordered choices with a current position that wraps in both directions.
    """

    def __init__(self, choices: Sequence[str] = ()):
        self.choices: List[str] = list(choices)
        self.index = 0

    def set_choices(self, choices: Sequence[str]):
        """Replace the choices and move back to the first one."""
        assert len(choices) > 0, "a carousel needs at least one choice"
        self.choices = list(choices)
        self.index = 0

    def next(self):
        if self.choices:
            self.index = (self.index + 1) % len(self.choices)

    def prev(self):
        if self.choices:
            self.index = (self.index - 1) % len(self.choices)

    def current(self) -> str:
        assert self.choices, "empty carousel has no current choice"
        return self.choices[self.index]

    def neighbor(self, offset: int) -> str:
        """Label ``offset`` positions away from the current one (negative = before)."""
        assert self.choices, "empty carousel has no neighbors"
        return self.choices[(self.index + offset) % len(self.choices)]

    def snapshot(self, radius: int, offset: float = 0.0) -> CarouselSnapshot:
        return CarouselSnapshot(
            current=self.current(),
            previous=tuple(self.neighbor(-i) for i in range(1, radius + 1)),
            following=tuple(self.neighbor(i) for i in range(1, radius + 1)),
            offset=offset,
        )

    def __len__(self):
        return len(self.choices)

    def __repr__(self):
        return f"<ChoiceCarousel({self.choices!r}, index={self.index})>"
