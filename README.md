# midiarp

Build and inspect MIDI channel messages, and drive a hyper arpeggiator with them.

## Installation

```
pip install midiarp
```

## Channel messages

`midiarp.channel` builds channel messages as `Message` objects, which are
`bytes`. Channels above 15 are clamped to 15, data bytes above 127 are
clamped to 127, and pitch bend values are clamped to -8192..8191
(`PITCH_LOWEST`, `PITCH_HIGHEST`; 0 is neutral). A negative channel or data
byte raises `ValueError`.

```python
from midiarp.channel import note_on, pitchbend

msg = note_on(1, 60, 120)
print(msg.hex(" ").upper())   # 91 3C 78
print(msg)                    # NoteOn channel: 1 key: 60 velocity: 120
print(pitchbend(4, 300))      # PitchBend channel: 4 pitch: 300 (8492)
```

The builders are `note_on`, `note_off`, `note_off_velocity`,
`poly_after_touch`, `after_touch`, `program_change`, `control_change` and
`pitchbend`.

A `Message` is read back with `channel()` and the `as_*` methods
(`as_note_on`, `as_note_off`, `as_control_change`, `as_poly_after_touch`,
`as_after_touch`, `as_program_change`, `as_pitch_bend`). Each returns a tuple
of the decoded fields, or `None` if the message is of another kind.
`as_pitch_bend` returns `(channel, relative, absolute)`. Any bytes can be
wrapped, e.g. `Message(b"\x91\x3c\x78")`.

## Controller numbers

`midiarp.cc` defines the controller numbers as constants (`VOLUME_MSB`,
`HOLD_PEDAL_SWITCH`, `ALL_NOTES_OFF`, ...), `ON` (127) and `OFF` (0).
`control_change_name(controller)` returns the common name of a controller,
for example `"Volume (MSB)"` for 7, or an empty string for a number without
one. The whole table is `CONTROL_CHANGE_NAMES`.

## Combined messages

```python
from midiarp.combined import reset_channel, silence_channel

reset_channel(2, 5, 7)   # bank select, program, all controllers off, volume 100,
                         # expression 127, hold pedal off, pan 64
silence_channel(4)       # All Notes Off and All Sound Off on channel 4
silence_channel(-1)      # the same for all 16 channels
```

`silence_channel` raises `ValueError` for a channel above 15.

## The arpeggiator

`midiarp.hyperarp.Arp` takes a callable that sends messages, followed by any
options from `midiarp.arp_options`. Incoming messages are fed to `receive`,
which transposes them first if a transposition is set. Playing happens on a
background thread started by `run()` and ended by `close()`; the `Arp` is
also a context manager that does both.

How incoming messages are handled:

- Messages that are not channel messages, and channel messages on another
  channel than the one set with `channel_in`, are passed through unchanged.
- Keys in the note-pool octave (octave 0, keys 0..11, by default) add their
  pitch class to the pool, with their velocity; releasing them removes it.
- Any other key starts the arpeggio from that key; releasing it stops it.
- Control messages are recognised on channel 0 unless `control_channel` or
  `channel_in` say otherwise. By default controller 16 selects the note
  distance (the value modulo 16 picks a step of `arp_notes.note_distance`),
  controller 80 switches the direction (a value above 0 means downward), and
  controller 17 selects the style: below 40 staccato, above 80 legato,
  otherwise non-legato.
- Other control changes, aftertouch, program changes and pitch bends are
  re-sent on the output channel; polyphonic aftertouch changes the velocity
  of a pool note or of the starting note.

```python
import time

from midiarp import cc
from midiarp.arp_options import tempo
from midiarp.channel import control_change, note_off, note_on
from midiarp.hyperarp import Arp

sent = []
with Arp(sent.append, tempo(120)) as arp:
    arp.receive(control_change(0, cc.GENERAL_PURPOSE_SLIDER1, 3))  # sixteenths
    arp.receive(note_on(0, 2, 100))     # add D to the pool
    arp.receive(note_on(0, 16, 120))    # start from E
    time.sleep(0.5)
    arp.receive(note_off(0, 16))        # stop
for message in sent:
    print(message)
```

On closing, the arpeggiator sends All Notes Off and All Sound Off on its
output channel and then on all 16 channels.

Options in `midiarp.arp_options`: `tempo`, `note_pool_octave`,
`cc_direction_switch`, `note_direction_switch`, `cc_time_interval`,
`note_time_interval`, `cc_style`, `note_style`, `control_channel`,
`channel_in`, `channel_out` and `transpose`.

The `Arp` can also be driven directly: `add_note`, `remove_note`,
`start_with_note`, `stop_with_note`, `switch_direction`, `set_tempo`,
`set_note_distance`, `set_style_staccato`, `set_style_non_legato`,
`set_style_legato`. `note_distance_micros()` and `note_length_micros()`
report the current timing, and `calc_next_note()` the next note to be played.

`midiarp.arp_notes.next_note` computes the next note of an arpeggio from a
pool of pitch classes without any timing, and `midiarp.arp_notes.Note` names
the pitch classes (`Note.C` to `Note.B`).

## What it does not do

The package does not open MIDI ports or talk to devices: messages leave
through the callable given to `Arp`, and arrive through `receive`. It reads
and writes no MIDI files and has no command-line program.