"""
Caption Sync - Subtitle timeline engine for video captioning and dubbing.

Provides:
- Parsing and writing SRT interchange text
- Ripple edits on caption timings, text and positions
- Rescaling a whole timeline when the video's duration changes
- Active caption/word lookup during playback
- Thin adapters for transcription, translation, TTS and ffmpeg burn-in
"""

__version__ = "0.1.0"
