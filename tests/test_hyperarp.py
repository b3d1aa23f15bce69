import time

import pytest

from midiarp import cc
from midiarp.arp_notes import Note
from midiarp.arp_options import channel_in, channel_out, control_channel, transpose
from midiarp.channel import (
    after_touch,
    control_change,
    note_off,
    note_on,
    pitchbend,
    program_change,
)
from midiarp.combined import silence_channel
from midiarp.hyperarp import Arp


def make_arp(*options):
    sent = []
    return Arp(sent.append, *options), sent


def texts(messages):
    return [str(m) for m in messages]


def test_control_channel_default_and_option():
    arp, _ = make_arp()
    assert arp.control_channel() == 0
    arp2, _ = make_arp(control_channel(3))
    assert arp2.control_channel() == 3


def test_timing_defaults():
    arp, _ = make_arp()
    assert arp.note_distance_micros() == 250000
    assert arp.note_length_micros() == 166667
    arp.set_style_staccato()
    assert arp.note_length_micros() == 50000
    arp.set_style_legato()
    assert arp.note_length_micros() == 249990


def test_tempo_changes_distance():
    arp, _ = make_arp()
    arp.set_tempo(60)
    assert arp.note_distance_micros() == 500000


def _play_sequence(arp, count):
    out = []
    for _ in range(count):
        key, velocity = arp.calc_next_note()
        arp.write_note_on(key, velocity)
        out.append((key, velocity))
    return out


def test_two_notes_upward():
    arp, _ = make_arp()
    arp.start_with_note(12 + Note.E, 120)
    arp.add_note(Note.D, 100)
    assert _play_sequence(arp, 3) == [(26, 100), (28, 120), (38, 100)]


def test_three_notes_upward():
    arp, _ = make_arp()
    arp.start_with_note(12 + Note.E, 120)
    arp.add_note(Note.D, 100)
    arp.add_note(Note.G, 80)
    assert _play_sequence(arp, 3) == [(19, 80), (26, 100), (28, 120)]


def test_two_notes_downward():
    arp, _ = make_arp()
    arp.switch_direction(True)
    arp.start_with_note(12 + Note.E, 120)
    arp.add_note(Note.D, 100)
    assert _play_sequence(arp, 3) == [(14, 100), (4, 120), (16, 100)]
    assert arp.last_note == 16


def test_repetition_without_pool():
    arp, _ = make_arp()
    arp.start_with_note(60, 90)
    assert arp.calc_next_note() == (60, 90)


def test_pitchbend_passthrough():
    arp, sent = make_arp()
    arp.handle_message(pitchbend(0, 1000))
    assert texts(sent) == ["PitchBend channel: 0 pitch: 1000 (9192)"]


def test_pitchbend_and_aftertouch_passthrough():
    arp, sent = make_arp()
    arp.handle_message(pitchbend(0, 100))
    arp.handle_message(after_touch(0, 100))
    assert texts(sent) == [
        "PitchBend channel: 0 pitch: 100 (8292)",
        "AfterTouch channel: 0 pressure: 100",
    ]


def test_forwarded_to_output_channel():
    arp, sent = make_arp(channel_out(5))
    arp.handle_message(control_change(0, cc.VOLUME_MSB, 90))
    arp.handle_message(program_change(0, 12))
    assert texts(sent) == [
        "ControlChange channel: 5 controller: 7 value: 90",
        "ProgramChange channel: 5 program: 12",
    ]


def test_pool_notes_added_and_removed():
    arp, sent = make_arp()
    arp.handle_message(note_on(0, Note.D, 100))
    arp.handle_message(note_on(0, Note.G, 80))
    assert arp.notes == {2, 7}
    assert arp.note_velocities == {2: 100, 7: 80}
    arp.handle_message(note_off(0, Note.D))
    arp.handle_message(note_on(0, Note.G, 0))
    assert arp.notes == set()
    assert sent == []


def test_time_interval_controller():
    arp, _ = make_arp()
    arp.handle_message(control_change(0, cc.GENERAL_PURPOSE_SLIDER1, 3))
    assert arp.note_distance == 0.25
    assert arp.note_distance_micros() == 125000
    arp.handle_message(control_change(0, cc.GENERAL_PURPOSE_SLIDER1, 0))
    assert arp.note_distance == 0.25


def test_style_controller():
    arp, _ = make_arp()
    arp.handle_message(control_change(0, cc.GENERAL_PURPOSE_SLIDER2, 10))
    assert arp.note_length_micros() == 50000
    arp.handle_message(control_change(0, cc.GENERAL_PURPOSE_SLIDER2, 100))
    assert arp.note_length_micros() == 249990
    arp.handle_message(control_change(0, cc.GENERAL_PURPOSE_SLIDER2, 60))
    assert arp.note_length_micros() == 166667


def test_direction_controller():
    arp, _ = make_arp()
    arp.handle_message(control_change(0, cc.GENERAL_PURPOSE_BUTTON1_SWITCH, cc.ON))
    assert arp.direction_up is False
    arp.handle_message(control_change(0, cc.GENERAL_PURPOSE_BUTTON1_SWITCH, cc.OFF))
    assert arp.direction_up is True


def test_other_channel_passes_through():
    arp, sent = make_arp(channel_in(1))
    message = note_on(0, 60, 100)
    arp.handle_message(message)
    assert sent == [message]
    assert arp.is_running is False


def test_transpose_message():
    arp, _ = make_arp(transpose(12))
    assert str(arp.transpose_message(note_on(0, 60, 100))) == "NoteOn channel: 0 key: 72 velocity: 100"
    assert str(arp.transpose_message(note_on(0, 120, 100))) == "NoteOn channel: 0 key: 127 velocity: 100"
    assert str(arp.transpose_message(note_off(0, 60))) == "NoteOff channel: 0 key: 72"
    other = control_change(0, 7, 7)
    assert arp.transpose_message(other) == other


def test_transpose_clamps_low_and_filters_channel():
    arp, _ = make_arp(transpose(-20), channel_in(2))
    assert str(arp.transpose_message(note_on(2, 10, 50))) == "NoteOn channel: 2 key: 0 velocity: 50"
    foreign = note_on(3, 60, 50)
    assert arp.transpose_message(foreign) == foreign


def test_receive_applies_transposition():
    arp, _ = make_arp(transpose(-12))
    arp.receive(note_on(0, 14, 100))
    assert arp.notes == {2}


def test_write_note_on_ends_running_note():
    arp, sent = make_arp()
    arp.write_note_on(60, 100)
    arp.write_note_on(62, 90)
    arp.write_note_off(62)
    assert texts(sent) == [
        "NoteOn channel: 0 key: 60 velocity: 100",
        "NoteOff channel: 0 key: 60",
        "NoteOn channel: 0 key: 62 velocity: 90",
        "NoteOff channel: 0 key: 62",
    ]
    assert arp.running_note == -1


def test_silence_uses_output_channel():
    arp, sent = make_arp(channel_out(3))
    arp.silence()
    assert sent == silence_channel(3)


def test_run_twice_raises():
    arp, _ = make_arp()
    arp.run()
    try:
        with pytest.raises(RuntimeError):
            arp.run()
    finally:
        arp.close()


def test_stop_with_note_only_for_starting_note():
    arp, _ = make_arp()
    with arp:
        arp.start_with_note(40, 100)
        arp.stop_with_note(41)
        assert arp.is_running is True
        arp.stop_with_note(40)
        assert arp.is_running is False


def test_arpeggio_plays_in_time():
    arp, sent = make_arp()
    arp.run()
    arp.receive(control_change(0, cc.GENERAL_PURPOSE_SLIDER1, 3))
    arp.receive(note_on(0, Note.D, 100))
    arp.receive(note_on(0, 12 + Note.E, 120))
    time.sleep(0.44)
    arp.receive(note_off(0, Note.D))
    arp.receive(note_off(0, 12 + Note.E))
    arp.close()

    ons = [m.as_note_on() for m in sent if m.as_note_on() is not None]
    assert [(k, v) for _, k, v in ons[:3]] == [(16, 120), (26, 100), (28, 120)]
    assert sent[-32:] == silence_channel(-1)
    assert arp.is_running is False