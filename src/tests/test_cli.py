"""
Tests for the command-line stages that need no external services.
"""

import pytest

from src.captionsync import cli
from src.captionsync.errors import CaptionSyncError, InvalidDurationError
from src.captionsync.srt_utils import read_srt

SCENARIO_A = "1\n00:00:01,000 --> 00:00:03,000\nHello\n\n2\n00:00:03,500 --> 00:00:06,000\nWorld\n"


@pytest.fixture
def subs(tmp_path):
    path = tmp_path / "subs.srt"
    path.write_text(SCENARIO_A, encoding="utf-8")
    return path


def test_shift_stage(subs, tmp_path):
    out = tmp_path / "shifted.srt"
    cli.main(["--stage", "shift", "--subs", str(subs), "--index", "0", "--start", "2", "--output", str(out)])

    assert [(e.start, e.end) for e in read_srt(str(out))] == [(2.0, 4.0), (4.5, 7.0)]


def test_sync_stage_with_explicit_durations(subs):
    cli.main(
        ["--stage", "sync", "--subs", str(subs), "--current-duration", "10", "--target-duration", "15"]
    )

    assert [(e.start, e.end) for e in read_srt(str(subs))] == [(1.5, 4.5), (5.25, 9.0)]


def test_sync_stage_probes_media(subs, monkeypatch):
    durations = {"video.mp4": 10.0, "vo.wav": 5.0}
    monkeypatch.setattr(cli, "probe_duration", lambda path: durations[path])

    cli.main(["--stage", "sync", "--subs", str(subs), "--video", "video.mp4", "--audio", "vo.wav"])

    assert [(e.start, e.end) for e in read_srt(str(subs))] == [(0.5, 1.5), (1.75, 3.0)]


def test_sync_stage_zero_duration_leaves_file(subs, monkeypatch):
    monkeypatch.setattr(cli, "probe_duration", lambda path: 0.0)

    with pytest.raises(InvalidDurationError):
        cli.main(["--stage", "sync", "--subs", str(subs), "--video", "v.mp4", "--target-duration", "5"])

    assert subs.read_text(encoding="utf-8") == SCENARIO_A


def test_missing_arguments_are_reported(subs):
    with pytest.raises(CaptionSyncError, match="--start"):
        cli.main(["--stage", "shift", "--subs", str(subs)])


def test_burn_stage_builds_style(subs, tmp_path, monkeypatch):
    seen = {}

    def fake_burn(video, srt_text, output, style=None, crf=18, preset="medium"):
        seen.update(video=video, srt=srt_text, style=style)

    monkeypatch.setattr(cli, "burn_subtitles", fake_burn)
    cli.main(
        [
            "--stage", "burn", "--video", "in.mp4", "--subs", str(subs),
            "--output", str(tmp_path / "out.mp4"), "--position-y", "90", "--font", "Padauk",
        ]
    )

    assert seen["srt"] == SCENARIO_A.rstrip("\n")
    assert seen["style"].font == "Padauk"
    assert seen["style"].margin_v == 29
