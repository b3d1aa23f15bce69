"""Note names, note distances and the note selection of the arpeggiator."""

from __future__ import annotations

from enum import IntEnum
from typing import Mapping, NamedTuple


class Note(IntEnum):
    """Pitch classes within an octave."""

    C = 0
    Cis = 1
    D = 2
    Dis = 3
    E = 4
    F = 5
    Fis = 6
    G = 7
    Gis = 8
    A = 9
    Ais = 10
    B = 11


# Distance between two arpeggio notes, in quarter notes.
NOTE_DISTANCES: dict[int, float] = {
    0: 2.0,  # half notes
    1: 1.0,  # quarter notes
    2: 0.5,  # eighths
    3: 0.25,  # sixteenths
    4: 0.125,  # 32ths
    5: 2.0 / 3.0,  # half note triplets
    6: 1.0 / 3.0,  # quarter note triplets
    7: 0.5 / 3.0,  # eighths triplets
    8: 0.25 / 3.0,  # sixteenths triplets
    9: 0.125 / 3.0,  # 32ths triplets
    10: 1.0 * 3.0 / 2.0,  # dotted quarter notes
    11: 0.5 * 3.0 / 2.0,  # dotted eighths
    12: 0.25 * 3.0 / 2.0,  # dotted sixteenths
    13: 0.125 * 3.0 / 2.0,  # dotted 32ths
    14: 1.0 / 5.0,  # quarter note quintuplets
    15: 0.5 / 5.0,  # eighths quintuplets
}


def note_distance(step: int) -> float:
    """Return the note distance (in quarter notes) selected by a step of 0..15."""
    try:
        return NOTE_DISTANCES[step]
    except KeyError:
        raise ValueError(f"note distance step must be within 0..15, got {step}") from None


class NextNote(NamedTuple):
    """The next note to play; restarted tells that playing begins anew at the start key."""

    key: int
    velocity: int
    restarted: bool = False


def _truncated_mod(value: int, modulus: int) -> int:
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def next_note(
    pool: set[int] | frozenset[int],
    velocities: Mapping[int, int],
    start_key: int,
    start_velocity: int,
    last_note: int,
    up: bool,
) -> NextNote:
    """Calculate the next arpeggio note from the pitch class pool.

    The pool holds pitch classes (0..11); velocities maps pitch classes to their
    velocity. Without pool notes besides the starting note, the start is repeated.
    """
    start_class = start_key % 12
    classes = sorted({n for n in pool if n != start_class} | {start_class})

    if len(classes) == 1:
        return NextNote(start_key, start_velocity)

    last_octave = last_note // 12
    last_idx = next(
        (i for i, n in enumerate(classes) if n == last_note % 12),
        -1,
    )

    if up:
        candidate = classes[(last_idx + 1) % len(classes)]
    else:
        if last_idx == 0:
            last_idx = len(classes)
        idx = _truncated_mod(last_idx - 1, len(classes))
        if idx < 0:
            raise IndexError(f"note {last_note} is not part of the note pool")
        candidate = classes[idx]

    velocity = start_velocity if candidate == start_class else velocities.get(candidate, 0)
    key = candidate + 12 * last_octave

    if up:
        if key < last_note:
            key += 12
        if key > 127 - start_class:
            return NextNote(start_key, velocity, True)
        return NextNote(key, velocity)

    if key > last_note:
        key -= 12
    if key < start_class:
        return NextNote(start_key, velocity, True)
    return NextNote(max(key, 0), velocity)