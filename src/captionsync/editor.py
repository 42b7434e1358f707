"""
Edit operations on a subtitle timeline.

Every operation returns a new list and leaves the input untouched, so callers
can swap the result in as a single atomic replacement.
"""

import logging
import math
from dataclasses import replace

from .models import Position, SubtitleEntry, Timeline, Word

logger = logging.getLogger("captionsync")


def _shift_entry(entry: SubtitleEntry, delta: float) -> SubtitleEntry:
    # start and end are clamped independently, so an entry pushed below zero
    # loses part of its duration
    words = tuple(
        Word(text=w.text, start=max(0.0, w.start + delta), end=max(0.0, w.end + delta))
        for w in entry.words
    )
    return replace(
        entry,
        start=max(0.0, entry.start + delta),
        end=max(0.0, entry.end + delta),
        words=words,
    )


def ripple_shift(entries: Timeline, index: int, new_start: float) -> Timeline:
    """Move entry ``index`` to ``new_start`` and shift every later entry by the same delta."""
    if not math.isfinite(new_start):
        return list(entries)
    delta = new_start - entries[index].start
    logger.debug(f"Ripple shift from entry {index} by {delta:+.3f}s")
    return list(entries[:index]) + [_shift_entry(e, delta) for e in entries[index:]]


def set_end(entries: Timeline, index: int, new_end: float) -> Timeline:
    """Set one entry's end time without touching its neighbours.

    The new end is not checked against the entry's start.
    """
    if not math.isfinite(new_end):
        return list(entries)
    out = list(entries)
    out[index] = replace(out[index], end=new_end)
    return out


def set_text(entries: Timeline, index: int, new_text: str) -> Timeline:
    """Replace one entry's text; timing and position are kept."""
    out = list(entries)
    out[index] = replace(out[index], text=new_text)
    return out


def set_position(entries: Timeline, index: int, x: float, y: float) -> Timeline:
    """Place an entry at normalized coordinates (0-100 on each axis)."""
    out = list(entries)
    out[index] = replace(out[index], position=Position.create(x, y))
    return out


def insert_entry(
    entries: Timeline,
    index: int,
    start: float,
    end: float,
    text: str,
    position: Position | None = None,
) -> Timeline:
    """Insert a validated new entry before ``index``."""
    entry = SubtitleEntry.create(start, end, text, sequence_id=index + 1, position=position)
    out = list(entries)
    out.insert(index, entry)
    return out


def delete_entry(entries: Timeline, index: int) -> Timeline:
    """Remove one entry; later entries keep their timings."""
    out = list(entries)
    del out[index]
    return out
