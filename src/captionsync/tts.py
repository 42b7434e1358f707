"""
Text-to-speech synthesis with OpenAI and ElevenLabs.

Both providers return raw audio bytes; their duration is measured separately
(see ``io_ffmpeg.audio_duration_from_bytes``) before the timeline is rescaled.
"""

import logging

import httpx
from openai import OpenAI

from .errors import CollaboratorError
from .models import Timeline

logger = logging.getLogger("captionsync")

HTTP_OK = 200


def script_from_entries(entries: Timeline) -> str:
    """Join entry text into a single narration script."""
    return " ".join(" ".join(e.lines).strip() for e in entries if e.text.strip())


def synthesize_openai(
    client: OpenAI,
    text: str,
    model: str = "gpt-4o-mini-tts",
    voice: str = "alloy",
    instructions: str | None = None,
    response_format: str = "wav",
) -> bytes:
    """Synthesize speech using OpenAI TTS."""
    if client is None:
        raise CollaboratorError("OpenAI client is not initialized (missing OPENAI_API_KEY)")
    if not text.strip():
        raise CollaboratorError("No script to read.")

    kwargs = {"model": model, "voice": voice, "input": text, "response_format": response_format}
    if instructions:
        kwargs["instructions"] = instructions
    try:
        resp = client.audio.speech.create(**kwargs)
    except Exception as e:
        raise CollaboratorError(f"OpenAI TTS failed: {e}") from e
    logger.info(f"Synthesized {len(text)} characters with {model}/{voice}")
    return resp.content


def synthesize_elevenlabs(
    api_key: str, voice_id: str, text: str, model_id: str = "eleven_multilingual_v2"
) -> bytes:
    """Synthesize speech using ElevenLabs TTS (returns MP3 bytes)."""
    if not api_key:
        raise CollaboratorError("ELEVENLABS_API_KEY is not set.")
    if not voice_id:
        raise CollaboratorError(
            "ElevenLabs voice_id is required (use --elevenlabs-voice-id or ELEVENLABS_VOICE_ID)."
        )

    url = f"https://api.elevenlabs.io/v1/text-to-speech/{voice_id}"
    headers = {
        "xi-api-key": api_key,
        "accept": "audio/mpeg",
        "Content-Type": "application/json",
        "User-Agent": "captionsync/0.1",
    }
    payload = {
        "text": text,
        "model_id": model_id,
        "voice_settings": {"stability": 0.5, "similarity_boost": 0.75},
    }

    try:
        with httpx.Client(follow_redirects=True, timeout=60.0) as client:
            r = client.post(url, json=payload, headers=headers)
    except httpx.HTTPError as e:
        raise CollaboratorError(f"ElevenLabs TTS request failed: {e}") from e
    ctype = r.headers.get("content-type", "")
    if r.status_code != HTTP_OK or not ctype.startswith(("audio/", "application/octet-stream")):
        raise CollaboratorError(f"ElevenLabs TTS failed: {r.status_code} {r.text[:300]}")
    return r.content
