"""
Tests for ffmpeg/ffprobe helpers (commands are captured, not executed).
"""

import os

import pytest

from src.captionsync import io_ffmpeg
from src.captionsync.errors import CollaboratorError, InvalidDurationError
from src.captionsync.models import Position


@pytest.fixture
def captured(monkeypatch):
    calls = []

    def fake_run(cmd, *, check=True):
        calls.append(cmd)
        return "12.5\n"

    monkeypatch.setattr(io_ffmpeg, "run", fake_run)
    return calls


def test_probe_duration(captured):
    assert io_ffmpeg.probe_duration("in.mp4") == 12.5
    assert captured[0][0] == "ffprobe"


def test_probe_duration_unparsable(monkeypatch):
    monkeypatch.setattr(io_ffmpeg, "run", lambda cmd, check=True: "N/A")

    assert io_ffmpeg.probe_duration("in.mp4") == 0.0


def test_run_missing_binary_raises_collaborator_error():
    with pytest.raises(CollaboratorError):
        io_ffmpeg.run(["definitely-not-a-real-binary-xyz"])


def test_audio_duration_from_empty_bytes():
    assert io_ffmpeg.audio_duration_from_bytes(b"") == 0.0


def test_style_for_position():
    assert io_ffmpeg.style_for_position(Position(50, 80)).margin_v == 58
    assert io_ffmpeg.style_for_position(None).margin_v == 58
    assert io_ffmpeg.style_for_position(Position(50, 100)).margin_v == 0
    style = io_ffmpeg.style_for_position(Position(50, 50), video_height=1080, font="Padauk")
    assert style.margin_v == 540
    assert style.force_style() == "FontName=Padauk,FontSize=24,MarginV=540"


def test_stretch_video_uses_sync_ratio(captured, tmp_path):
    out = str(tmp_path / "out.mp4")
    io_ffmpeg.stretch_video_to_duration("in.mp4", 15.0, out, current_duration=10.0, audio="vo.wav")

    cmd = captured[-1]
    assert "setpts=1.500000*PTS" in cmd
    assert cmd[-1] == out
    assert "vo.wav" in cmd


def test_stretch_video_rejects_zero_duration(captured, tmp_path):
    with pytest.raises(InvalidDurationError):
        io_ffmpeg.stretch_video_to_duration(
            "in.mp4", 0.0, str(tmp_path / "out.mp4"), current_duration=10.0
        )
    assert captured == []


def test_burn_subtitles_writes_payload(monkeypatch, tmp_path):
    seen = {}

    def fake_run(cmd, *, check=True):
        vf = cmd[cmd.index("-vf") + 1]
        path = vf.split("'")[1].replace("\\:", ":")
        with open(path, encoding="utf-8") as f:
            seen["payload"] = f.read()
        seen["path"] = path
        seen["vf"] = vf
        return ""

    monkeypatch.setattr(io_ffmpeg, "run", fake_run)
    srt = "1\n00:00:01,000 --> 00:00:02,000\nHi"
    io_ffmpeg.burn_subtitles("in.mp4", srt, str(tmp_path / "out.mp4"), io_ffmpeg.BurnStyle(margin_v=30))

    assert seen["payload"] == srt
    assert "MarginV=30" in seen["vf"]
    assert not os.path.exists(seen["path"])
