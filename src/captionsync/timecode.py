"""
Conversion between SRT timestamps and seconds.
"""

import logging
import re

logger = logging.getLogger("captionsync")

_STRIP_RE = re.compile(r"[^0-9:.,]")


def parse_timecode(ts: str) -> float:
    """Parse ``HH:MM:SS,mmm``, ``HH:MM:SS.mmm`` or ``MM:SS(.mmm)`` into seconds.

    Malformed input yields 0.0 so that one bad timestamp never blocks a parse.
    """
    cleaned = _STRIP_RE.sub("", ts or "")
    parts = cleaned.split(":")
    if len(parts) == 3:
        h, m, rest = parts
    elif len(parts) == 2:
        h = "0"
        m, rest = parts
    else:
        logger.debug("Unparsable timecode %r, using 0", ts)
        return 0.0

    sec, sep, frac = rest.replace(",", ".").partition(".")
    if "." in frac or not h.isdigit() or not m.isdigit() or not sec.isdigit():
        logger.debug("Unparsable timecode %r, using 0", ts)
        return 0.0
    if sep and frac and not frac.isdigit():
        logger.debug("Unparsable timecode %r, using 0", ts)
        return 0.0

    fraction = float(f"0.{frac}") if frac else 0.0
    return int(h) * 3600 + int(m) * 60 + int(sec) + fraction


def format_timecode(t: float) -> str:
    """Format seconds as ``HH:MM:SS,mmm`` rounding to the nearest millisecond."""
    total_ms = max(0, int(round(t * 1000)))
    h, rem = divmod(total_ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms = divmod(rem, 1000)
    return f"{h:02}:{m:02}:{s:02},{ms:03}"
