"""
SRT parsing and writing for subtitle timelines.
"""

import logging
import re
from pathlib import Path

from .models import SubtitleEntry, Timeline
from .timecode import format_timecode, parse_timecode

logger = logging.getLogger("captionsync")

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")
_INDEX_RE = re.compile(r"^\d+$")


def _is_glued_index(text_lines: list[str], seq_id: int, next_lines: list[str] | None) -> bool:
    """True when the last text line is really the next block's index.

    Streaming parsers can glue that index onto the previous block; the next
    block then starts without its own index. A caption whose only text is a
    number is never treated as an artifact.
    """
    if len(text_lines) < 2 or not next_lines or _INDEX_RE.match(next_lines[0]):
        return False
    return bool(_INDEX_RE.match(text_lines[-1])) and int(text_lines[-1]) == seq_id + 1

def parse_srt_text(raw: str) -> Timeline:
    """Parse SRT text into entries, best effort.

    Blocks without a ``-->`` timing line are dropped. Entries keep block order.
    """
    raw = (raw or "").replace("\r\n", "\n").replace("\r", "\n").lstrip("\ufeff")
    blocks = [
        [ln.strip() for ln in b.split("\n") if ln.strip()]
        for b in _BLOCK_SPLIT_RE.split(raw.strip())
    ]
    blocks = [b for b in blocks if b]
    out: Timeline = []
    dropped = 0
    for bi, lines in enumerate(blocks):
        next_lines = blocks[bi + 1] if bi + 1 < len(blocks) else None

        seq_id = len(out) + 1
        if _INDEX_RE.match(lines[0]):
            seq_id = int(lines[0])
            lines = lines[1:]

        timing_idx = next((i for i, ln in enumerate(lines) if "-->" in ln), None)
        if timing_idx is None:
            dropped += 1
            continue

        left, _, right = lines[timing_idx].partition("-->")
        text_lines = lines[timing_idx + 1 :]
        if _is_glued_index(text_lines, seq_id, next_lines):
            text_lines = text_lines[:-1]

        out.append(
            SubtitleEntry(
                sequence_id=seq_id,
                start=parse_timecode(left),
                end=parse_timecode(right),
                text="\n".join(text_lines),
            )
        )

    if dropped:
        logger.debug("Dropped %d SRT block(s) without a timing line", dropped)
    return out


def serialize_srt(entries: Timeline) -> str:
    """Serialize entries to SRT text, renumbering from 1."""
    blocks = [
        f"{i}\n{format_timecode(e.start)} --> {format_timecode(e.end)}\n{e.text}"
        for i, e in enumerate(entries, 1)
    ]
    return "\n\n".join(blocks)


def read_srt(path: str) -> Timeline:
    """Read and parse an SRT file."""
    with open(path, encoding="utf-8-sig") as f:
        entries = parse_srt_text(f.read())
    logger.debug("Loaded %d entries from %s", len(entries), path)
    return entries


def write_srt(entries: Timeline, path: str) -> None:
    """Write entries to an SRT file."""
    parent = Path(path).parent
    parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(serialize_srt(entries))
        f.write("\n")
