"""Standard MIDI File parsing."""

from binasc.formats.midi.reader import MidiReader
from binasc.formats.midi.events import EventDecoder

__all__ = ["MidiReader", "EventDecoder"]
