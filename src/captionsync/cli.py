"""
Command-line interface for the caption timeline engine.
"""

import argparse
import logging
import os
import pathlib

from dotenv import load_dotenv
from openai import OpenAI

from .editor import ripple_shift
from .errors import CaptionSyncError
from .io_ffmpeg import (
    audio_duration_from_bytes,
    burn_subtitles,
    ensure_dir,
    extract_audio,
    probe_duration,
    stretch_video_to_duration,
    style_for_position,
)
from .models import Position
from .srt_utils import parse_srt_text, read_srt, serialize_srt, write_srt
from .stt import transcribe_to_srt
from .sync import synchronize
from .translation import STYLES, translate_entries
from .tts import script_from_entries, synthesize_elevenlabs, synthesize_openai

logger = logging.getLogger("captionsync")


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Subtitle timeline tools (transcribe, retime, sync, burn)")

    ap.add_argument(
        "--stage",
        choices=["transcribe", "shift", "sync", "tts", "burn"],
        required=True,
        help="transcribe: video -> SRT; shift: ripple-retime; sync: rescale to a new duration; "
        "tts: voice the SRT text; burn: hard-sub the SRT into the video",
    )

    # IO
    ap.add_argument("--video", default=None, help="Input video")
    ap.add_argument("--subs", default=None, help="Input SRT (or output SRT for transcribe)")
    ap.add_argument("--output", default=None, help="Output file (defaults to overwriting --subs)")
    ap.add_argument("--workdir", default=".work")

    # Transcription / translation
    ap.add_argument("--whisper-model", default="whisper-1")
    ap.add_argument("--source-language", default=None)
    ap.add_argument("--translate-to", default=None, help="Target language name, e.g. Burmese")
    ap.add_argument("--translation-style", choices=STYLES, default="Narrative")
    ap.add_argument("--translation-model", default="gpt-4o-mini")

    # Ripple shift
    ap.add_argument("--index", type=int, default=0, help="Entry index (0-based) to retime")
    ap.add_argument("--start", type=float, default=None, help="New start time in seconds")

    # Sync
    ap.add_argument("--current-duration", type=float, default=None)
    ap.add_argument("--target-duration", type=float, default=None)
    ap.add_argument("--audio", default=None, help="Replacement audio whose length is the target")
    ap.add_argument(
        "--stretch-video",
        default=None,
        help="Also write the uniformly stretched video (muxed with --audio) to this path",
    )

    # TTS
    ap.add_argument("--tts-provider", choices=["openai", "elevenlabs"], default="openai")
    ap.add_argument("--tts-model", default="gpt-4o-mini-tts")
    ap.add_argument("--voice", default="alloy")
    ap.add_argument("--voice-instructions", default=os.getenv("OPENAI_TTS_INSTRUCTIONS"))
    ap.add_argument("--elevenlabs-voice-id", default=os.getenv("ELEVENLABS_VOICE_ID"))
    ap.add_argument("--elevenlabs-model-id", default="eleven_multilingual_v2")

    # Burn
    ap.add_argument("--font", default="Arial")
    ap.add_argument("--font-size", type=int, default=24)
    ap.add_argument("--position-y", type=float, default=80.0, help="Vertical position 0-100")
    ap.add_argument("--burn-crf", type=int, default=18)
    ap.add_argument("--burn-preset", default="medium")

    ap.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return ap


def _require(args: argparse.Namespace, *names: str) -> None:
    missing = [f"--{n.replace('_', '-')}" for n in names if getattr(args, n) is None]
    if missing:
        raise CaptionSyncError(f"--stage {args.stage} requires {', '.join(missing)}")


def _openai_client() -> OpenAI:
    key = os.getenv("OPENAI_API_KEY")
    if not key:
        raise CaptionSyncError("OPENAI_API_KEY is not set. Put it in .env or environment.")
    return OpenAI(api_key=key)


def stage_transcribe(args: argparse.Namespace) -> None:
    _require(args, "video", "subs")
    ensure_dir(args.workdir)
    wav = os.path.join(args.workdir, "extracted.wav")
    extract_audio(args.video, wav)
    client = _openai_client()
    entries = parse_srt_text(
        transcribe_to_srt(client, wav, model=args.whisper_model, language=args.source_language)
    )
    logger.info(f"Transcribed {len(entries)} entries")
    if args.translate_to:
        entries = translate_entries(
            client,
            entries,
            args.translate_to,
            style=args.translation_style,
            model=args.translation_model,
        )
    write_srt(entries, args.subs)
    logger.info(f"Saved SRT -> {args.subs}")


def stage_shift(args: argparse.Namespace) -> None:
    _require(args, "subs", "start")
    entries = ripple_shift(read_srt(args.subs), args.index, args.start)
    out = args.output or args.subs
    write_srt(entries, out)
    logger.info(f"Shifted entries from #{args.index} to start at {args.start:.3f}s -> {out}")


def stage_sync(args: argparse.Namespace) -> None:
    _require(args, "subs")
    current = args.current_duration
    if current is None:
        _require(args, "video")
        current = probe_duration(args.video)
    target = args.target_duration
    if target is None:
        _require(args, "audio")
        target = probe_duration(args.audio)
    logger.info(f"[dur] current = {current:.3f}s, target = {target:.3f}s")

    entries = synchronize(read_srt(args.subs), current, target)
    if args.stretch_video:
        _require(args, "video")
        stretch_video_to_duration(
            args.video, target, args.stretch_video, current_duration=current, audio=args.audio
        )
        logger.info(f"Stretched video -> {args.stretch_video}")
    out = args.output or args.subs
    write_srt(entries, out)
    logger.info(f"Saved synchronized SRT -> {out}")


def stage_tts(args: argparse.Namespace) -> None:
    _require(args, "subs", "output")
    script = script_from_entries(read_srt(args.subs))
    if args.tts_provider == "openai":
        audio = synthesize_openai(
            _openai_client(), script, args.tts_model, args.voice, args.voice_instructions
        )
        fmt = "wav"
    else:
        audio = synthesize_elevenlabs(
            os.getenv("ELEVENLABS_API_KEY", ""),
            args.elevenlabs_voice_id,
            script,
            model_id=args.elevenlabs_model_id,
        )
        fmt = "mp3"
    ensure_dir(str(pathlib.Path(args.output).parent))
    with open(args.output, "wb") as f:
        f.write(audio)
    logger.info(
        f"Saved voice-over -> {args.output} ({audio_duration_from_bytes(audio, fmt):.3f}s)"
    )


def stage_burn(args: argparse.Namespace) -> None:
    _require(args, "video", "subs", "output")
    entries = read_srt(args.subs)
    if not entries:
        raise CaptionSyncError("Please generate and review subtitles first.")
    style = style_for_position(
        Position.create(50.0, args.position_y), font=args.font, font_size=args.font_size
    )
    burn_subtitles(
        args.video,
        serialize_srt(entries),
        args.output,
        style=style,
        crf=args.burn_crf,
        preset=args.burn_preset,
    )
    logger.info(f"Done (subs -> {args.output})")


STAGES = {
    "transcribe": stage_transcribe,
    "shift": stage_shift,
    "sync": stage_sync,
    "tts": stage_tts,
    "burn": stage_burn,
}


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    project_root = pathlib.Path(__file__).parent.parent.parent
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    else:
        load_dotenv()

    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    STAGES[args.stage](args)


if __name__ == "__main__":
    main()
