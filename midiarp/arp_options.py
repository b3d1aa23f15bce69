"""Options that configure an arpeggiator.

Each option is a callable applied to the arpeggiator. It sets one of its
attributes: tempo_bpm, note_pool_octave, direction_switch_handler,
note_distance_handler, style_handler, control_channel_in, channel_in,
transpose or channel_out. Handlers take a message and return None when the
message is not meant for them.
"""

from __future__ import annotations

from typing import Any, Callable

from midiarp.arp_notes import note_distance
from midiarp.channel import Message

Option = Callable[[Any], None]


def _channel_matches(arp: Any, channel: int) -> bool:
    wanted = arp.control_channel()
    return wanted < 0 or wanted == channel


def tempo(bpm: float) -> Option:
    """Set the tempo in beats per minute."""

    def apply(arp: Any) -> None:
        arp.tempo_bpm = bpm

    return apply


def note_pool_octave(octave: int) -> Option:
    """Set the octave whose keys define the note pool."""

    def apply(arp: Any) -> None:
        arp.note_pool_octave = octave

    return apply


def cc_direction_switch(controller: int) -> Option:
    """Use a controller as direction switch; a value above 0 means downward."""

    def apply(arp: Any) -> None:
        def handler(message: Message) -> bool | None:
            cc = message.as_control_change()
            if cc is None:
                return None
            channel, number, value = cc
            if number != controller or not _channel_matches(arp, channel):
                return None
            return value > 0

        arp.direction_switch_handler = handler

    return apply


def note_direction_switch(key: int) -> Option:
    """Use a key as direction switch; while it is held, the direction is downward."""

    def apply(arp: Any) -> None:
        def handler(message: Message) -> bool | None:
            if (on := message.as_note_on()) is not None:
                channel, number, velocity = on
                if not _channel_matches(arp, channel) or number != key:
                    return None
                return velocity > 0
            if (off := message.as_note_off()) is not None:
                channel, number, _ = off
                if not _channel_matches(arp, channel) or number != key:
                    return None
                return False
            return None

        arp.direction_switch_handler = handler

    return apply


def cc_time_interval(controller: int) -> Option:
    """Use a controller to select the note distance; a value of 0 yields -1."""

    def apply(arp: Any) -> None:
        def handler(message: Message) -> float | None:
            cc = message.as_control_change()
            if cc is None:
                return None
            channel, number, value = cc
            if number != controller or not _channel_matches(arp, channel):
                return None
            return note_distance(value % 16) if value > 0 else -1.0

        arp.note_distance_handler = handler

    return apply


def note_time_interval(key: int) -> Option:
    """Use a key's velocity to select the note distance; releasing it yields -1."""

    def apply(arp: Any) -> None:
        def handler(message: Message) -> float | None:
            if (on := message.as_note_on()) is not None:
                channel, number, velocity = on
                if not _channel_matches(arp, channel) or number != key:
                    return None
                return note_distance(velocity % 12) if velocity > 0 else -1.0
            if (off := message.as_note_off()) is not None:
                channel, number, _ = off
                if not _channel_matches(arp, channel) or number != key:
                    return None
                return -1.0
            return None

        arp.note_distance_handler = handler

    return apply


def cc_style(controller: int) -> Option:
    """Use a controller to select the playing style (staccato, non-legato, legato)."""

    def apply(arp: Any) -> None:
        def handler(message: Message) -> int | None:
            cc = message.as_control_change()
            if cc is None:
                return None
            channel, number, value = cc
            if number != controller or not _channel_matches(arp, channel):
                return None
            return value

        arp.style_handler = handler

    return apply


def note_style(key: int) -> Option:
    """Use a key's velocity to select the playing style; releasing it yields 0."""

    def apply(arp: Any) -> None:
        def handler(message: Message) -> int | None:
            if (on := message.as_note_on()) is not None:
                channel, number, velocity = on
                if not _channel_matches(arp, channel) or number != key:
                    return None
                return velocity
            if (off := message.as_note_off()) is not None:
                channel, number, _ = off
                if not _channel_matches(arp, channel) or number != key:
                    return None
                return 0
            return None

        arp.style_handler = handler

    return apply


def control_channel(channel: int) -> Option:
    """Set a separate channel for control messages; channels above 15 are ignored."""

    def apply(arp: Any) -> None:
        if 0 <= channel < 16:
            arp.control_channel_in = channel

    return apply


def channel_in(channel: int) -> Option:
    """Set the channel to listen to; channels above 15 are ignored."""

    def apply(arp: Any) -> None:
        if 0 <= channel < 16:
            arp.channel_in = channel

    return apply


def transpose(halfnotes: int) -> Option:
    """Set the transposition in semitones."""

    def apply(arp: Any) -> None:
        arp.transpose = halfnotes

    return apply


def channel_out(channel: int) -> Option:
    """Set the channel to write to; channels above 15 are ignored."""

    def apply(arp: Any) -> None:
        if 0 <= channel < 16:
            arp.channel_out = channel

    return apply