"""
Audio and video processing utilities using ffmpeg/ffprobe.
"""

import io
import logging
import os
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path

from pydub import AudioSegment

from .errors import CollaboratorError
from .models import Position
from .sync import stretch_ratio

logger = logging.getLogger("captionsync")


def run(cmd: list[str], *, check: bool = True) -> str:
    """Run a shell command and return stdout."""
    logger.debug("Running: %s", " ".join(map(str, cmd)))
    try:
        proc = subprocess.run(
            cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True, check=False
        )
    except FileNotFoundError as e:
        raise CollaboratorError(f"{cmd[0]} is not installed or not on PATH") from e
    if proc.returncode != 0 and check:
        logger.error("Command failed with code %d: %s", proc.returncode, proc.stdout)
        msg = f"Command failed with code {proc.returncode}"
        raise CollaboratorError(msg)
    return proc.stdout


def ensure_dir(path: str) -> None:
    """Ensure directory exists."""
    if path:
        Path(path).mkdir(parents=True, exist_ok=True)


def probe_duration(path: str) -> float:
    """Get media duration in seconds (0.0 if ffprobe reports nothing usable)."""
    out = run(
        [
            "ffprobe",
            "-v",
            "error",
            "-show_entries",
            "format=duration",
            "-of",
            "default=noprint_wrappers=1:nokey=1",
            path,
        ]
    )
    try:
        return float(out.strip())
    except ValueError:
        return 0.0


def audio_duration_from_bytes(data: bytes, fmt: str | None = None) -> float:
    """Measure the duration of raw audio bytes, e.g. a TTS response."""
    if not data:
        return 0.0
    clip = AudioSegment.from_file(io.BytesIO(data), format=fmt)
    return len(clip) / 1000.0


def extract_audio(input_video: str, out_wav: str, sample_rate: int = 16000) -> None:
    """Extract audio from video file."""
    ensure_dir(str(Path(out_wav).parent))
    cmd = [
        "ffmpeg",
        "-y",
        "-i",
        input_video,
        "-vn",
        "-acodec",
        "pcm_s16le",
        "-ar",
        str(sample_rate),
        "-ac",
        "1",
        out_wav,
    ]
    run(cmd)


def stretch_video_to_duration(
    input_video: str,
    target_duration: float,
    output_video: str,
    current_duration: float | None = None,
    audio: str | None = None,
) -> None:
    """Uniformly stretch the video stream to ``target_duration`` seconds.

    Uses the same ratio as ``synchronize`` so captions rescaled with it stay
    aligned. When ``audio`` is given it replaces the original soundtrack.
    """
    if current_duration is None:
        current_duration = probe_duration(input_video)
    ratio = stretch_ratio(current_duration, target_duration)
    ensure_dir(str(Path(output_video).parent))
    cmd = ["ffmpeg", "-y", "-i", input_video]
    if audio:
        cmd += ["-i", audio]
    cmd += ["-filter:v", f"setpts={ratio:.6f}*PTS"]
    if audio:
        cmd += ["-map", "0:v:0", "-map", "1:a:0", "-c:a", "aac", "-shortest"]
    else:
        cmd += ["-an"]
    cmd += ["-c:v", "libx264", "-preset", "ultrafast", "-crf", "23", output_video]
    run(cmd)


@dataclass
class BurnStyle:
    """Style directive passed to the subtitles filter."""

    font: str = "Arial"
    font_size: int = 24
    margin_v: int = 20

    def force_style(self) -> str:
        return f"FontName={self.font},FontSize={self.font_size},MarginV={self.margin_v}"


def style_for_position(
    position: Position | None,
    video_height: int = 288,
    font: str = "Arial",
    font_size: int = 24,
) -> BurnStyle:
    """Derive a bottom margin from a normalized caption position.

    ``video_height`` is in subtitle-renderer units (libass scales a 288-line
    play resolution for SRT input).
    """
    pos = position or Position()
    margin_v = max(0, round((100.0 - pos.y) / 100.0 * video_height))
    return BurnStyle(font=font, font_size=font_size, margin_v=margin_v)


def _escape_filter_path(path: str) -> str:
    return path.replace("\\", "/").replace(":", "\\:").replace("'", "\\'")


def burn_subtitles(
    input_video: str,
    srt_text: str,
    output_video: str,
    style: BurnStyle | None = None,
    crf: int = 18,
    preset: str = "medium",
) -> None:
    """Burn SRT text into the video frames (hard subs)."""
    style = style or BurnStyle()
    ensure_dir(str(Path(output_video).parent))
    fd, subs_path = tempfile.mkstemp(suffix=".srt")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(srt_text)
        vf = f"subtitles='{_escape_filter_path(subs_path)}':force_style='{style.force_style()}'"
        cmd = [
            "ffmpeg",
            "-y",
            "-i",
            input_video,
            "-vf",
            vf,
            "-c:v",
            "libx264",
            "-crf",
            str(crf),
            "-preset",
            preset,
            "-c:a",
            "copy",
            output_video,
        ]
        run(cmd)
    finally:
        Path(subs_path).unlink(missing_ok=True)
