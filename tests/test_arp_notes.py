import pytest

from midiarp.arp_notes import NOTE_DISTANCES, NextNote, Note, next_note, note_distance


def test_note_members_drive_next_note():
    assert len(Note) == 12
    result = next_note({Note.G}, {Note.G: 80}, Note.E + 12, 120, Note.E + 12, True)
    assert result == NextNote(19, 80, False)


def test_note_distance_known_steps():
    assert note_distance(0) == 2.0
    assert note_distance(1) == 1.0
    assert note_distance(2) == 0.5
    assert note_distance(3) == 0.25


def test_note_distance_covers_all_steps():
    assert [note_distance(s) for s in range(16)] == [NOTE_DISTANCES[s] for s in range(16)]
    assert all(note_distance(s) > 0 for s in range(16))


@pytest.mark.parametrize("step", [-1, 16, 100])
def test_note_distance_invalid(step):
    with pytest.raises(ValueError):
        note_distance(step)


def _run(pool, velocities, start_key, start_velocity, up, count):
    last = start_key
    played = [(start_key, start_velocity)]
    for _ in range(count):
        result = next_note(pool, velocities, start_key, start_velocity, last, up)
        played.append((result.key, result.velocity))
        last = result.key
    return played


def test_two_notes_upward():
    played = _run({Note.D}, {Note.D: 100}, 16, 120, True, 3)
    assert played == [(16, 120), (26, 100), (28, 120), (38, 100)]


def test_three_notes_upward():
    played = _run({Note.D, Note.G}, {Note.D: 100, Note.G: 80}, 16, 120, True, 3)
    assert played == [(16, 120), (19, 80), (26, 100), (28, 120)]


def test_two_notes_downward():
    played = _run({Note.D}, {Note.D: 100}, 16, 120, False, 3)
    assert played == [(16, 120), (14, 100), (4, 120), (16, 100)]


def test_downward_restart_is_reported():
    result = next_note({Note.D}, {Note.D: 100}, 16, 120, 4, False)
    assert result == NextNote(16, 100, True)


def test_empty_pool_repeats_start():
    assert next_note(set(), {}, 60, 90, 60, True) == NextNote(60, 90, False)


def test_pool_of_start_class_only_repeats_start():
    assert next_note({60 % 12}, {0: 10}, 60, 90, 72, False) == NextNote(60, 90, False)


def test_upward_restart_near_top():
    result = next_note({Note.D}, {Note.D: 100}, 16, 120, 124, True)
    assert result.restarted
    assert result.key == 16


def test_keys_stay_in_range():
    pool = {Note.C, Note.E, Note.G, Note.B}
    velocities = {n: 64 for n in pool}
    for up in (True, False):
        last = 50
        for _ in range(60):
            result = next_note(pool, velocities, 50, 70, last, up)
            assert 0 <= result.key <= 127
            last = result.key


def test_downward_unknown_last_note_raises():
    with pytest.raises(IndexError):
        next_note({Note.D, Note.G}, {}, 16, 120, 21, False)