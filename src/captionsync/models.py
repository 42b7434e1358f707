"""
Data models for the caption timeline.
"""

import math
from dataclasses import dataclass, field

from .errors import InvalidEntryError

DEFAULT_X = 50.0
DEFAULT_Y = 80.0


@dataclass(frozen=True)
class Word:
    """A single word with its own timing inside a subtitle entry."""

    text: str
    start: float  # seconds
    end: float  # seconds


@dataclass(frozen=True)
class Position:
    """Normalized on-screen position, 0-100 on each axis."""

    x: float = DEFAULT_X
    y: float = DEFAULT_Y

    @classmethod
    def create(cls, x: float, y: float) -> "Position":
        """Build a position, rejecting coordinates outside 0..100."""
        for name, value in (("x", x), ("y", y)):
            if math.isnan(value) or not 0.0 <= value <= 100.0:
                raise InvalidEntryError(f"position {name}={value} is outside 0..100")
        return cls(x=float(x), y=float(y))


@dataclass(frozen=True)
class SubtitleEntry:
    """One timed caption.

    Direct construction does not validate timings so that tolerant parsing and
    in-place edits can represent degenerate spans. Use ``create`` for new
    entries coming from user input.
    """

    sequence_id: int
    start: float  # seconds
    end: float  # seconds
    text: str
    position: Position | None = None
    words: tuple[Word, ...] = field(default_factory=tuple)

    @classmethod
    def create(
        cls,
        start: float,
        end: float,
        text: str,
        *,
        sequence_id: int = 0,
        position: Position | None = None,
        words: tuple[Word, ...] | list[Word] = (),
    ) -> "SubtitleEntry":
        """Build an entry enforcing ``0 <= start < end`` and nested word spans."""
        if math.isnan(start) or math.isnan(end):
            raise InvalidEntryError("entry timing must be a number")
        if start < 0:
            raise InvalidEntryError(f"entry start {start} is negative")
        if end <= start:
            raise InvalidEntryError(f"entry end {end} must be after start {start}")
        words = tuple(words)
        for w in words:
            if w.start < start or w.end > end or w.end < w.start:
                raise InvalidEntryError(
                    f"word {w.text!r} [{w.start}, {w.end}] is outside entry [{start}, {end}]"
                )
        return cls(
            sequence_id=sequence_id,
            start=float(start),
            end=float(end),
            text=text,
            position=position,
            words=words,
        )

    @property
    def duration(self) -> float:
        return self.end - self.start

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")


# A timeline is an ordered list of entries, chronological by start.
Timeline = list[SubtitleEntry]
