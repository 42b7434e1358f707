"""
Speech-to-text via OpenAI, returning SRT interchange text.
"""

import logging

from openai import OpenAI

from .errors import CollaboratorError

logger = logging.getLogger("captionsync")


def transcribe_to_srt(
    client: OpenAI, wav_path: str, model: str = "whisper-1", language: str | None = None
) -> str:
    """Transcribe audio and return the raw SRT text for the parser."""
    if client is None:
        raise CollaboratorError("OpenAI client is not initialized (missing OPENAI_API_KEY)")

    kwargs = {"model": model, "response_format": "srt"}
    if language:
        kwargs["language"] = language
    with open(wav_path, "rb") as f:
        logger.info(f"Transcribing with {model} (language: {language or 'auto'}) …")
        try:
            resp = client.audio.transcriptions.create(file=f, **kwargs)
        except Exception as e:
            raise CollaboratorError(f"Transcription failed: {e}") from e

    # the SDK returns a plain string for text formats
    text = resp if isinstance(resp, str) else getattr(resp, "text", "")
    if not str(text).strip():
        raise CollaboratorError("Transcription returned empty text.")
    return str(text)
