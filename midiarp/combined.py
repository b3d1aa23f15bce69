"""Sequences of channel messages for common tasks."""

from __future__ import annotations

from midiarp import cc
from midiarp.channel import Message, control_change, program_change


def reset_channel(channel: int, bank: int, program: int) -> list[Message]:
    """Return messages that reset a channel to established defaults."""
    return [
        control_change(channel, cc.BANK_SELECT_MSB, bank),
        program_change(channel, program),
        control_change(channel, cc.ALL_CONTROLLERS_OFF, 0),
        control_change(channel, cc.VOLUME_MSB, 100),
        control_change(channel, cc.EXPRESSION_MSB, 127),
        control_change(channel, cc.HOLD_PEDAL_SWITCH, 0),
        control_change(channel, cc.PAN_POSITION_MSB, 64),
    ]


def _silentium(channel: int) -> list[Message]:
    return [
        control_change(channel, cc.ALL_NOTES_OFF, 0),
        control_change(channel, cc.ALL_SOUND_OFF, 0),
    ]


def silence_channel(channel: int) -> list[Message]:
    """Return all-notes-off and all-sound-off messages.

    A negative channel affects all sixteen channels; a channel above 15 is an error.
    """
    if channel > 15:
        raise ValueError(f"invalid channel number {channel}")
    if channel >= 0:
        return _silentium(channel)
    return [message for ch in range(16) for message in _silentium(ch)]