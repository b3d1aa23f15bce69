"""Channel voice messages: construction, inspection and formatting."""

from __future__ import annotations

PITCH_RESET = 0
PITCH_LOWEST = -8192
PITCH_HIGHEST = 8191

_NOTE_OFF = 0x8
_NOTE_ON = 0x9
_POLY_AFTER_TOUCH = 0xA
_CONTROL_CHANGE = 0xB
_PROGRAM_CHANGE = 0xC
_AFTER_TOUCH = 0xD
_PITCH_BEND = 0xE

_DATA_LENGTH = {
    _NOTE_OFF: 2,
    _NOTE_ON: 2,
    _POLY_AFTER_TOUCH: 2,
    _CONTROL_CHANGE: 2,
    _PROGRAM_CHANGE: 1,
    _AFTER_TOUCH: 1,
    _PITCH_BEND: 2,
}


class Message(bytes):
    """A complete MIDI message as raw bytes."""

    def _kind(self) -> int | None:
        if not self or not 0x80 <= self[0] < 0xF0:
            return None
        kind = self[0] >> 4
        if len(self) < 1 + _DATA_LENGTH[kind]:
            return None
        return kind

    def channel(self) -> int | None:
        """Return the channel of a channel message, or None for other messages."""
        if self._kind() is None:
            return None
        return self[0] & 0x0F

    def as_note_on(self) -> tuple[int, int, int] | None:
        """Return (channel, key, velocity) of a note on message."""
        if self._kind() != _NOTE_ON:
            return None
        return self[0] & 0x0F, self[1], self[2]

    def as_note_off(self) -> tuple[int, int, int] | None:
        """Return (channel, key, velocity) of a note off message."""
        if self._kind() != _NOTE_OFF:
            return None
        return self[0] & 0x0F, self[1], self[2]

    def as_control_change(self) -> tuple[int, int, int] | None:
        """Return (channel, controller, value) of a control change message."""
        if self._kind() != _CONTROL_CHANGE:
            return None
        return self[0] & 0x0F, self[1], self[2]

    def as_poly_after_touch(self) -> tuple[int, int, int] | None:
        """Return (channel, key, pressure) of a polyphonic aftertouch message."""
        if self._kind() != _POLY_AFTER_TOUCH:
            return None
        return self[0] & 0x0F, self[1], self[2]

    def as_after_touch(self) -> tuple[int, int] | None:
        """Return (channel, pressure) of an aftertouch message."""
        if self._kind() != _AFTER_TOUCH:
            return None
        return self[0] & 0x0F, self[1]

    def as_program_change(self) -> tuple[int, int] | None:
        """Return (channel, program) of a program change message."""
        if self._kind() != _PROGRAM_CHANGE:
            return None
        return self[0] & 0x0F, self[1]

    def as_pitch_bend(self) -> tuple[int, int, int] | None:
        """Return (channel, relative, absolute) of a pitch bend message."""
        if self._kind() != _PITCH_BEND:
            return None
        absolute = (self[2] << 7) | self[1]
        return self[0] & 0x0F, absolute - 8192, absolute

    def __str__(self) -> str:
        if (m := self.as_note_on()) is not None:
            return f"NoteOn channel: {m[0]} key: {m[1]} velocity: {m[2]}"
        if (m := self.as_note_off()) is not None:
            if m[2] == 0:
                return f"NoteOff channel: {m[0]} key: {m[1]}"
            return f"NoteOff channel: {m[0]} key: {m[1]} velocity: {m[2]}"
        if (m := self.as_control_change()) is not None:
            return f"ControlChange channel: {m[0]} controller: {m[1]} value: {m[2]}"
        if (m := self.as_poly_after_touch()) is not None:
            return f"PolyAfterTouch channel: {m[0]} key: {m[1]} pressure: {m[2]}"
        if (m := self.as_after_touch()) is not None:
            return f"AfterTouch channel: {m[0]} pressure: {m[1]}"
        if (m := self.as_program_change()) is not None:
            return f"ProgramChange channel: {m[0]} program: {m[1]}"
        if (m := self.as_pitch_bend()) is not None:
            return f"PitchBend channel: {m[0]} pitch: {m[1]} ({m[2]})"
        return f"Message {self.hex(' ').upper()}"


def _clamp(name: str, value: int, maximum: int) -> int:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return min(value, maximum)


def _message(kind: int, channel: int, *data: int) -> Message:
    channel = _clamp("channel", channel, 15)
    return Message(bytes(((kind << 4) | channel, *data)))


def pitchbend(channel: int, value: int) -> Message:
    """Return a pitch bend message; value is clamped to -8192..8191, 0 is neutral."""
    value = max(PITCH_LOWEST, min(PITCH_HIGHEST, value))
    absolute = value - PITCH_LOWEST
    return _message(_PITCH_BEND, channel, absolute & 0x7F, absolute >> 7)


def poly_after_touch(channel: int, key: int, pressure: int) -> Message:
    """Return a polyphonic aftertouch message."""
    return _message(
        _POLY_AFTER_TOUCH,
        channel,
        _clamp("key", key, 127),
        _clamp("pressure", pressure, 127),
    )


def note_on(channel: int, key: int, velocity: int) -> Message:
    """Return a note on message."""
    return _message(
        _NOTE_ON, channel, _clamp("key", key, 127), _clamp("velocity", velocity, 127)
    )


def note_off_velocity(channel: int, key: int, velocity: int) -> Message:
    """Return a note off message with a release velocity."""
    return _message(
        _NOTE_OFF, channel, _clamp("key", key, 127), _clamp("velocity", velocity, 127)
    )


def note_off(channel: int, key: int) -> Message:
    """Return a note off message."""
    return _message(_NOTE_OFF, channel, _clamp("key", key, 127), 0)


def program_change(channel: int, program: int) -> Message:
    """Return a program change message."""
    return _message(_PROGRAM_CHANGE, channel, _clamp("program", program, 127))


def after_touch(channel: int, pressure: int) -> Message:
    """Return a channel aftertouch message."""
    return _message(_AFTER_TOUCH, channel, _clamp("pressure", pressure, 127))


def control_change(channel: int, controller: int, value: int) -> Message:
    """Return a control change message."""
    return _message(
        _CONTROL_CHANGE,
        channel,
        _clamp("controller", controller, 127),
        _clamp("value", value, 127),
    )