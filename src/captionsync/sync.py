"""
Uniform time-stretch of a subtitle timeline to a new reference duration.
"""

import logging
import math
from dataclasses import replace

from .errors import InvalidDurationError
from .models import SubtitleEntry, Timeline, Word

logger = logging.getLogger("captionsync")


def stretch_ratio(current_duration: float, target_duration: float) -> float:
    """Return ``target / current``, rejecting durations that cannot be stretched."""
    if not math.isfinite(current_duration) or current_duration <= 0:
        raise InvalidDurationError(f"Current duration must be positive, got {current_duration}")
    if not math.isfinite(target_duration) or target_duration <= 0:
        raise InvalidDurationError(f"Target duration must be positive, got {target_duration}")
    return target_duration / current_duration


def _scale_entry(entry: SubtitleEntry, ratio: float) -> SubtitleEntry:
    words = tuple(Word(text=w.text, start=w.start * ratio, end=w.end * ratio) for w in entry.words)
    return replace(entry, start=entry.start * ratio, end=entry.end * ratio, words=words)


def synchronize(entries: Timeline, current_duration: float, target_duration: float) -> Timeline:
    """Rescale every entry so the timeline fits ``target_duration``.

    Models a uniform linear stretch of the underlying video: relative spacing
    and pacing are preserved exactly. The input list is never modified; an
    invalid duration raises ``InvalidDurationError`` before any work is done.
    """
    ratio = stretch_ratio(current_duration, target_duration)
    logger.info(
        f"Synchronizing {len(entries)} entries: {current_duration:.3f}s -> "
        f"{target_duration:.3f}s (ratio {ratio:.4f})"
    )
    return [_scale_entry(e, ratio) for e in entries]
