"""
Find the caption (and word) active at a playback position.
"""

import bisect

from .models import SubtitleEntry, Timeline, Word

# Keeps a caption on screen briefly after its nominal end.
DEFAULT_GRACE_WINDOW = 0.5


def active_index(entries: Timeline, t: float, grace: float = 0.0) -> int | None:
    """Index of the first entry with ``start <= t <= end + grace``."""
    for i, e in enumerate(entries):
        if e.start <= t <= e.end + grace:
            return i
    return None


def active_entry(entries: Timeline, t: float, grace: float = 0.0) -> SubtitleEntry | None:
    i = active_index(entries, t, grace)
    return None if i is None else entries[i]


def active_word(entry: SubtitleEntry, t: float) -> Word | None:
    for w in entry.words:
        if w.start <= t <= w.end:
            return w
    return None


class TimelineIndex:
    """Bisect-based lookup for long, chronologically ordered timelines.

    Gives the same answer as ``active_entry`` provided entries are sorted by
    start and do not overlap.
    """

    def __init__(self, entries: Timeline, grace: float = 0.0):
        self.entries = list(entries)
        self.grace = grace
        self._starts = [e.start for e in self.entries]

    def find_index(self, t: float) -> int | None:
        # rightmost entry starting at or before t, then walk back while
        # earlier entries still reach t (ends are sorted when entries don't overlap)
        i = bisect.bisect_right(self._starts, t) - 1
        hit = None
        while i >= 0 and self.entries[i].end + self.grace >= t:
            hit = i
            i -= 1
        return hit

    def find(self, t: float) -> SubtitleEntry | None:
        i = self.find_index(t)
        return None if i is None else self.entries[i]

    def __len__(self) -> int:
        return len(self.entries)
