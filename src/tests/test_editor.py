"""
Tests for timeline edit operations.
"""

import math

import pytest

from src.captionsync.editor import (
    delete_entry,
    insert_entry,
    ripple_shift,
    set_end,
    set_position,
    set_text,
)
from src.captionsync.errors import InvalidEntryError
from src.captionsync.models import Position, SubtitleEntry, Word
from src.captionsync.srt_utils import parse_srt_text, serialize_srt

SCENARIO_A = "1\n00:00:01,000 --> 00:00:03,000\nHello\n\n2\n00:00:03,500 --> 00:00:06,000\nWorld"


def _spans(entries):
    return [(e.start, e.end) for e in entries]


def test_ripple_shift_moves_entry_and_everything_after():
    entries = parse_srt_text(SCENARIO_A)

    shifted = ripple_shift(entries, 0, 2.0)

    assert _spans(shifted) == [(2.0, 4.0), (4.5, 7.0)]
    # input untouched
    assert _spans(entries) == [(1.0, 3.0), (3.5, 6.0)]


def test_ripple_shift_leaves_earlier_entries_alone():
    entries = [
        SubtitleEntry(sequence_id=i + 1, start=float(i * 2), end=float(i * 2 + 1), text=f"e{i}")
        for i in range(5)
    ]

    shifted = ripple_shift(entries, 2, 3.25)

    assert shifted[:2] == entries[:2]
    for before, after in zip(entries[2:], shifted[2:]):
        assert after.start - before.start == pytest.approx(-0.75)
        assert after.end - before.end == pytest.approx(-0.75)
        assert after.text == before.text


def test_ripple_shift_clamps_start_and_end_independently():
    entries = [
        SubtitleEntry(sequence_id=1, start=1.0, end=3.0, text="a"),
        SubtitleEntry(sequence_id=2, start=4.0, end=5.0, text="b"),
    ]

    shifted = ripple_shift(entries, 0, -2.0)

    # delta is -3: first entry loses a second of duration, second keeps its own
    assert _spans(shifted) == [(0.0, 0.0), (1.0, 2.0)]


def test_ripple_shift_moves_words_too():
    entry = SubtitleEntry.create(
        1.0, 3.0, "Hi there", words=[Word("Hi", 1.0, 1.5), Word("there", 1.6, 3.0)]
    )

    shifted = ripple_shift([entry], 0, 2.0)

    starts = [w.start for w in shifted[0].words]
    ends = [w.end for w in shifted[0].words]
    assert starts == pytest.approx([2.0, 2.6])
    assert ends == pytest.approx([2.5, 4.0])


def test_ripple_shift_nan_is_noop():
    entries = parse_srt_text(SCENARIO_A)

    assert ripple_shift(entries, 0, math.nan) == entries


@pytest.mark.parametrize("value", [math.inf, -math.inf])
def test_ripple_shift_infinite_is_noop(value):
    entries = parse_srt_text(SCENARIO_A)

    assert ripple_shift(entries, 1, value) == entries


def test_ripple_shift_keeps_position():
    entries = set_position(parse_srt_text(SCENARIO_A), 1, 20, 30)

    shifted = ripple_shift(entries, 0, 5.0)

    assert shifted[1].position == Position(20.0, 30.0)


def test_set_end_only_touches_one_entry():
    entries = parse_srt_text(SCENARIO_A)

    edited = set_end(entries, 0, 3.2)

    assert _spans(edited) == [(1.0, 3.2), (3.5, 6.0)]


def test_set_end_does_not_validate_against_start():
    entries = parse_srt_text(SCENARIO_A)

    edited = set_end(entries, 1, 2.0)

    assert edited[1].end == 2.0
    assert edited[1].duration < 0


def test_set_end_nan_is_noop():
    entries = parse_srt_text(SCENARIO_A)

    assert set_end(entries, 0, float("nan")) == entries


@pytest.mark.parametrize("value", [math.inf, -math.inf])
def test_set_end_infinite_is_noop(value):
    entries = parse_srt_text(SCENARIO_A)

    edited = set_end(entries, 0, value)

    assert edited == entries
    assert serialize_srt(edited).startswith("1\n00:00:01,000 --> 00:00:03,000")


def test_set_text():
    entries = parse_srt_text(SCENARIO_A)

    edited = set_text(entries, 1, "Everyone")

    assert edited[1].text == "Everyone"
    assert _spans(edited) == _spans(entries)
    assert entries[1].text == "World"


def test_set_position_validates_range():
    entries = parse_srt_text(SCENARIO_A)

    with pytest.raises(InvalidEntryError):
        set_position(entries, 0, 50, 120)


def test_insert_entry_validates():
    entries = parse_srt_text(SCENARIO_A)

    inserted = insert_entry(entries, 1, 3.1, 3.4, "Between")

    assert [e.text for e in inserted] == ["Hello", "Between", "World"]
    with pytest.raises(InvalidEntryError):
        insert_entry(entries, 1, 3.4, 3.1, "Backwards")
    with pytest.raises(InvalidEntryError):
        insert_entry(entries, 0, -1.0, 0.5, "Negative")


def test_delete_entry():
    entries = parse_srt_text(SCENARIO_A)

    assert [e.text for e in delete_entry(entries, 0)] == ["World"]
    assert len(entries) == 2


def test_out_of_range_index_raises():
    entries = parse_srt_text(SCENARIO_A)

    with pytest.raises(IndexError):
        ripple_shift(entries, 5, 1.0)
    with pytest.raises(IndexError):
        set_text(entries, 5, "x")
