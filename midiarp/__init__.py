"""MIDI channel messages, controller names and a hyper arpeggiator."""

__version__ = "0.1.0"
__all__ = ["cc", "channel", "combined", "arp_notes", "arp_options", "hyperarp"]