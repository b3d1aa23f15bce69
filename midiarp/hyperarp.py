"""The hyper arpeggiator: plays arpeggios over a pool of pitch classes."""

from __future__ import annotations

import heapq
import math
import queue
import threading
import time
from enum import IntEnum
from typing import Callable

from midiarp import cc
from midiarp.arp_notes import next_note
from midiarp.arp_options import cc_direction_switch, cc_style, cc_time_interval
from midiarp.channel import (
    Message,
    after_touch,
    control_change,
    note_off,
    note_on,
    pitchbend,
    program_change,
)
from midiarp.combined import silence_channel


class _Style(IntEnum):
    STACCATO = -1
    NON_LEGATO = 0
    LEGATO = 1


def _round(value: float) -> int:
    """Round half away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


class Arp:
    """An arpeggiator that reads messages via receive() and writes them with send.

    The options given after send configure it (see midiarp.arp_options).
    """

    def __init__(self, send: Callable[[Message], object], *args: Callable[["Arp"], None]):
        self._send = send
        self._lock = threading.RLock()
        self._commands: queue.Queue[tuple] = queue.Queue()
        self._thread: threading.Thread | None = None

        self.tempo_bpm = 120.0
        self.note_pool_octave = 0
        self.channel_in = -1
        self.control_channel_in = 0
        self.channel_out = 0
        self.transpose = 0
        self.is_running = False
        self.starting_note = 0
        self.start_velocity = 0
        self.last_note = 0
        self.style = _Style.NON_LEGATO
        self.swing = 0.0
        self.notes: set[int] = set()
        self.note_velocities: dict[int, int] = {}
        self.note_distance = 0.5
        self.direction_up = True
        self.running_note = -1

        self.direction_switch_handler: Callable[[Message], bool | None]
        self.note_distance_handler: Callable[[Message], float | None]
        self.style_handler: Callable[[Message], int | None]

        self.reset()
        cc_direction_switch(cc.GENERAL_PURPOSE_BUTTON1_SWITCH)(self)
        cc_time_interval(cc.GENERAL_PURPOSE_SLIDER1)(self)
        cc_style(cc.GENERAL_PURPOSE_SLIDER2)(self)
        for option in args:
            option(self)

        self._distance_micros = self.note_distance_micros()
        self._length_micros = self.note_length_micros()

    def __enter__(self) -> "Arp":
        self.run()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def control_channel(self) -> int:
        """Return the channel for control messages; negative means any channel."""
        if self.control_channel_in < 0:
            return self.channel_in
        return self.control_channel_in

    def reset(self) -> None:
        """Clear the note pool and restore distance, direction and running note."""
        with self._lock:
            self.notes = set()
            self.note_velocities = {}
            self.note_distance = 0.5
            self.direction_up = True
            self.running_note = -1

    def set_tempo(self, bpm: float) -> None:
        with self._lock:
            self.tempo_bpm = bpm

    def switch_direction(self, down: bool) -> None:
        with self._lock:
            self.direction_up = not down

    def add_note(self, key: int, velocity: int) -> None:
        with self._lock:
            self.notes.add(key % 12)
            self.note_velocities[key % 12] = velocity

    def set_note_velocity(self, key: int, velocity: int) -> None:
        with self._lock:
            self.note_velocities[key % 12] = velocity

    def remove_note(self, key: int) -> None:
        with self._lock:
            self.notes.discard(key % 12)

    def start_with_note(self, key: int, velocity: int) -> None:
        """Begin arpeggiating from key."""
        with self._lock:
            self.starting_note = key
            self.last_note = key
            self.start_velocity = velocity
            self.is_running = True
        self._commands.put(("start", key, velocity))

    def stop_with_note(self, key: int) -> None:
        """Stop arpeggiating if key is the starting note."""
        with self._lock:
            starting = self.starting_note
        if starting == key:
            self.stop()

    def set_start_note_velocity(self, velocity: int) -> None:
        with self._lock:
            self.start_velocity = velocity

    def _set_style(self, style: _Style) -> None:
        with self._lock:
            self.style = style
            self._length_micros = self.note_length_micros()

    def set_style_staccato(self) -> None:
        self._set_style(_Style.STACCATO)

    def set_style_non_legato(self) -> None:
        self._set_style(_Style.NON_LEGATO)

    def set_style_legato(self) -> None:
        self._set_style(_Style.LEGATO)

    def set_swing(self, percent: float) -> None:
        with self._lock:
            self.swing = percent

    def set_note_distance(self, distance: float) -> None:
        """Set the distance between notes in quarter notes."""
        with self._lock:
            self.note_distance = distance
            self._distance_micros = self.note_distance_micros()
            self._length_micros = self.note_length_micros()

    def _distance_float(self) -> float:
        with self._lock:
            return self.note_distance * 60_000_000.0 / self.tempo_bpm

    def note_distance_micros(self) -> int:
        """Return the time between two note starts in microseconds."""
        return _round(self._distance_float())

    def note_length_micros(self) -> int:
        """Return the length of a note in microseconds, according to the style."""
        distance = self._distance_float()
        with self._lock:
            style = self.style
        if style == _Style.STACCATO:
            length = distance / 5.0
        elif style == _Style.NON_LEGATO:
            length = distance * 2.0 / 3.0
        else:
            length = distance - 10
        return _round(length)

    def calc_next_note(self) -> tuple[int, int]:
        """Return (key, velocity) of the next note to play."""
        with self._lock:
            result = next_note(
                frozenset(self.notes),
                dict(self.note_velocities),
                self.starting_note,
                self.start_velocity,
                self.last_note,
                self.direction_up,
            )
            if result.restarted:
                self.last_note = self.starting_note
        return result.key, result.velocity

    def write_note_on(self, key: int, velocity: int) -> None:
        """Send a note on, ending the note that is still sounding."""
        with self._lock:
            self.last_note = key
            if self.running_note > -1:
                self._send(note_off(self.channel_out, self.running_note))
            self.running_note = key
            self._send(note_on(self.channel_out, key, velocity))

    def write_note_off(self, key: int) -> None:
        with self._lock:
            self.running_note = -1
            self._send(note_off(self.channel_out, key))

    def silence(self) -> None:
        """Send all-notes-off and all-sound-off on the output channel."""
        with self._lock:
            for message in silence_channel(self.channel_out):
                self._send(message)

    def _write(self, message: Message) -> None:
        self._send(message)

    def handle_message(self, message: Message) -> None:
        """Act on one incoming message; messages not meant for the arpeggiator pass through."""
        channel = message.channel()
        if channel is None:
            self._write(message)
            return

        if self.channel_in >= 0 and self.channel_in != channel:
            self._write(message)
            return

        distance = self.note_distance_handler(message)
        if distance is not None:
            if distance == 0.0:
                distance = 1.0
            if distance >= 0:
                self.set_note_distance(distance)
            return

        down = self.direction_switch_handler(message)
        if down is not None:
            self.switch_direction(down)
            return

        style = self.style_handler(message)
        if style is not None:
            if style < 40:
                self.set_style_staccato()
            elif style > 80:
                self.set_style_legato()
            elif style > 0:
                self.set_style_non_legato()
            return

        if (on := message.as_note_on()) is not None:
            _, key, velocity = on
            if key // 12 == self.note_pool_octave:
                if velocity > 0:
                    self.add_note(key % 12, velocity)
                else:
                    self.remove_note(key % 12)
            elif velocity > 0:
                self.start_with_note(key, velocity)
            else:
                self.stop_with_note(key)
        elif (off := message.as_note_off()) is not None:
            _, key, _ = off
            if key // 12 == self.note_pool_octave:
                self.remove_note(key % 12)
            else:
                self.stop_with_note(key)
        elif (change := message.as_control_change()) is not None:
            _, controller, value = change
            self._write(control_change(self.channel_out, controller, value))
        elif (poly := message.as_poly_after_touch()) is not None:
            _, key, pressure = poly
            if key // 12 == self.note_pool_octave:
                self.set_note_velocity(key % 12, pressure)
            else:
                self.set_start_note_velocity(pressure)
        elif (touch := message.as_after_touch()) is not None:
            self._write(after_touch(self.channel_out, touch[1]))
        elif (program := message.as_program_change()) is not None:
            self._write(program_change(self.channel_out, program[1]))
        elif (bend := message.as_pitch_bend()) is not None:
            self._write(pitchbend(self.channel_out, bend[1]))
        else:
            raise ValueError(f"unexpected channel message {message.hex(' ')}")

    def transpose_message(self, message: Message) -> Message:
        """Return the message with notes on the input channel transposed."""
        shift = self.transpose
        if (on := message.as_note_on()) is not None:
            channel, key, velocity = on
            if self.channel_in >= 0 and self.channel_in != channel:
                return message
            return note_on(channel, min(127, max(0, key + shift)), velocity)
        if (off := message.as_note_off()) is not None:
            channel, key, _ = off
            if self.channel_in >= 0 and self.channel_in != channel:
                return message
            return note_off(channel, min(127, max(0, key + shift)))
        return message

    def receive(self, message: Message) -> None:
        """Feed an incoming message, transposing it first if configured."""
        if self.transpose != 0:
            message = self.transpose_message(message)
        self.handle_message(message)

    def run(self) -> None:
        """Start the scheduler that plays the arpeggio."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("arpeggiator is already running")
        with self._lock:
            self._distance_micros = self.note_distance_micros()
            self._length_micros = self.note_length_micros()
        self._thread = threading.Thread(target=self._play, daemon=True)
        self._thread.start()

    def _timing(self) -> tuple[float, float]:
        with self._lock:
            return self._distance_micros / 1e6, self._length_micros / 1e6

    def _play(self) -> None:
        note_offs: list[tuple[float, int, int]] = []
        sequence = 0
        next_due: float | None = None

        while True:
            deadlines = [d for d in (next_due, note_offs[0][0] if note_offs else None) if d is not None]
            timeout = max(0.0, min(deadlines) - time.monotonic()) if deadlines else None
            try:
                command = self._commands.get(timeout=timeout)
            except queue.Empty:
                command = None

            now = time.monotonic()
            while note_offs and note_offs[0][0] <= now:
                _, _, key = heapq.heappop(note_offs)
                self.write_note_off(key)

            if next_due is not None and next_due <= now:
                key, velocity = self.calc_next_note()
                self.write_note_on(key, velocity)
                distance, length = self._timing()
                sequence += 1
                heapq.heappush(note_offs, (now + length, sequence, key))
                next_due = now + distance

            if command is None:
                continue
            kind = command[0]
            if kind == "start":
                _, key, velocity = command
                self.write_note_on(key, velocity)
                distance, length = self._timing()
                sequence += 1
                heapq.heappush(note_offs, (now + length, sequence, key))
                next_due = now + distance
            elif kind == "stop":
                next_due = None
                command[1].set()
            elif kind == "finish":
                self.silence()
                return

    def stop(self) -> None:
        """Stop arpeggiating; notes already playing still end on time."""
        with self._lock:
            running = self.is_running
        if not running:
            return
        if self._thread is not None and self._thread.is_alive():
            done = threading.Event()
            self._commands.put(("stop", done))
            done.wait()
        with self._lock:
            self.is_running = False

    def close(self) -> None:
        """Stop, end the scheduler and silence every channel."""
        self.stop()
        if self._thread is not None:
            self._commands.put(("finish",))
            self._thread.join()
            self._thread = None
        for message in silence_channel(-1):
            self._send(message)