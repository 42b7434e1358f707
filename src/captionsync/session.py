"""
Editing session: the single owner of a timeline and its footage.

Collaborator calls (transcription, translation, TTS, transcoding) resolve
asynchronously, so a user can retrigger an action before the previous one
returns. Each request is tagged with a generation token and a response is
only applied if its token is still the current one.
"""

import logging
from dataclasses import dataclass

from . import editor
from .lookup import DEFAULT_GRACE_WINDOW, active_index
from .models import SubtitleEntry, Timeline
from .srt_utils import parse_srt_text, serialize_srt
from .sync import synchronize

logger = logging.getLogger("captionsync")


@dataclass
class Footage:
    """Reference to the video the timeline is timed against."""

    path: str
    duration: float  # seconds


class EditingSession:
    """Holds one timeline and replaces it wholesale on every change."""

    def __init__(self, grace: float = DEFAULT_GRACE_WINDOW):
        self.grace = grace
        self.footage: Footage | None = None
        self._entries: Timeline = []
        self._generation = 0

    @property
    def entries(self) -> Timeline:
        return list(self._entries)

    @property
    def generation(self) -> int:
        return self._generation

    def load_video(self, path: str, duration: float) -> None:
        """Start over with new footage; in-flight responses become stale."""
        self._generation += 1
        self.footage = Footage(path=path, duration=duration)
        self._entries = []
        logger.info(f"Loaded video {path} ({duration:.3f}s), generation {self._generation}")

    # --- collaborator responses ---

    def begin_request(self) -> int:
        """Issue a token for a new collaborator call, superseding older ones."""
        self._generation += 1
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def apply_timeline(self, token: int, entries: Timeline) -> bool:
        if not self.is_current(token):
            logger.warning(
                f"Discarding stale response (token {token}, current {self._generation})"
            )
            return False
        self._entries = list(entries)
        logger.info(f"Applied timeline with {len(entries)} entries")
        return True

    def apply_srt(self, token: int, text: str) -> bool:
        return self.apply_timeline(token, parse_srt_text(text))

    def resynchronize(self, token: int, new_video_path: str, target_duration: float) -> bool:
        """Swap in stretched footage and rescale the timeline to match it.

        Raises ``InvalidDurationError`` (leaving the session untouched) when
        either duration cannot be used.
        """
        if self.footage is None:
            raise RuntimeError("No video loaded")
        if not self.is_current(token):
            logger.warning(
                f"Discarding stale sync result (token {token}, current {self._generation})"
            )
            return False
        rescaled = synchronize(self._entries, self.footage.duration, target_duration)
        self._entries = rescaled
        self.footage = Footage(path=new_video_path, duration=target_duration)
        return True

    # --- user edits ---

    def shift(self, index: int, new_start: float) -> None:
        self._entries = editor.ripple_shift(self._entries, index, new_start)

    def set_end(self, index: int, new_end: float) -> None:
        self._entries = editor.set_end(self._entries, index, new_end)

    def set_text(self, index: int, new_text: str) -> None:
        self._entries = editor.set_text(self._entries, index, new_text)

    def set_position(self, index: int, x: float, y: float) -> None:
        self._entries = editor.set_position(self._entries, index, x, y)

    def move_active_to(self, t: float, x: float, y: float) -> bool:
        """Reposition whichever entry is showing at ``t``; False if none is."""
        i = active_index(self._entries, t, self.grace)
        if i is None:
            return False
        self.set_position(i, x, y)
        return True

    def insert(self, index: int, start: float, end: float, text: str) -> None:
        self._entries = editor.insert_entry(self._entries, index, start, end, text)

    def delete(self, index: int) -> None:
        self._entries = editor.delete_entry(self._entries, index)

    def active_entry(self, t: float) -> SubtitleEntry | None:
        i = active_index(self._entries, t, self.grace)
        return None if i is None else self._entries[i]

    def export_srt(self) -> str:
        return serialize_srt(self._entries)
