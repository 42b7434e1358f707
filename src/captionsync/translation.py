"""
Translation of subtitle text while keeping every entry's timing.
"""

import logging
import re
from dataclasses import replace

from openai import OpenAI
from tqdm import tqdm

from .errors import CollaboratorError
from .models import Timeline

logger = logging.getLogger("captionsync")

_NUMBERED_RE = re.compile(r"^\s*\[(\d+)\]:\s?(.*)$")

STYLES = ("Narrative", "Formal", "Informal")


def _build_prompt(texts: list[str], target_language: str, style: str) -> str:
    numbered = "\n".join(f"[{j}]: {t}" for j, t in enumerate(texts))
    return f"""Translate the following numbered subtitle lines to {target_language}.
Use a {style.lower()} tone. Each text is numbered with [number]: format; translate each one
separately and keep the numbering. Line breaks inside a subtitle are written as " / ".
Return only the translations in the same numbered format.

Texts to translate:
{numbered}"""


def _parse_numbered(content: str) -> dict[int, str]:
    out: dict[int, str] = {}
    for line in content.splitlines():
        m = _NUMBERED_RE.match(line)
        if m:
            out[int(m.group(1))] = m.group(2).strip()
    return out


def translate_entries(
    client: OpenAI,
    entries: Timeline,
    target_language: str,
    style: str = "Narrative",
    model: str = "gpt-4o-mini",
    batch_size: int = 10,
) -> Timeline:
    """
    Translate entry text in numbered batches.

    Args:
        client: OpenAI client instance
        entries: Timeline to translate
        target_language: Language name, e.g. "Burmese"
        style: One of ``STYLES``
        model: Chat model used for translation
        batch_size: Entries per request

    Returns:
        New timeline with translated text; timings and positions untouched.
        Entries the model skipped keep their original text.
    """
    if client is None:
        raise CollaboratorError("OpenAI client is not initialized (missing OPENAI_API_KEY)")
    if style not in STYLES:
        raise ValueError(f"Unknown translation style {style!r}, expected one of {STYLES}")

    out: Timeline = []
    batches = range(0, len(entries), batch_size)
    for i in tqdm(batches, desc=f"Translate -> {target_language}", disable=len(batches) < 2):
        batch = entries[i : i + batch_size]
        texts = [e.text.replace("\n", " / ") for e in batch]
        try:
            response = client.chat.completions.create(
                model=model,
                messages=[
                    {
                        "role": "system",
                        "content": "You are a professional subtitle translator. Keep each line short enough to read on screen.",
                    },
                    {"role": "user", "content": _build_prompt(texts, target_language, style)},
                ],
                temperature=0.1,
            )
        except Exception as e:
            raise CollaboratorError(f"Translation failed: {e}") from e

        translated = _parse_numbered(response.choices[0].message.content or "")
        missing = [j for j in range(len(batch)) if j not in translated]
        if missing:
            logger.warning(f"Batch {i // batch_size + 1}: no translation for lines {missing}")
        for j, e in enumerate(batch):
            text = translated.get(j)
            out.append(replace(e, text=text.replace(" / ", "\n")) if text else e)

    logger.info(f"Translated {len(out)} entries to {target_language}")
    return out
