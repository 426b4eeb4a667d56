"""
MIDI track event decoder.

Turns one delta-timed event into a MidiEvent whose tokens use the same
notation the encoder reads, so the text converts back to identical bytes:

    v0      90 '60 '64          note-on, explicit status
    v96        '60 '0           running status
    v0      ff 51 v3 t120.0     tempo meta-event
    v0      f0 v3 43 10 f7      system exclusive

Channel messages are dispatched on the high nibble of the status byte,
system messages on the full status byte and meta-events on their type.
"""

from typing import Callable, Dict, List, Optional, Tuple

from binasc.formats.midi.models import META_END_OF_TRACK, MICROSECONDS_PER_MINUTE, MidiEvent
from binasc.formats.midi.stream import ByteStream
from binasc.utils.byteorder import unpack_uint16, unpack_uint24
from binasc.utils.pitch import key_to_pitch_name
from binasc.utils.validation import MissingRunningStatus, UnsupportedStatus
from binasc.utils.vlv import format_vlv

# High nibble -> (label, data byte count)
CHANNEL_MESSAGES: Dict[int, Tuple[str, int]] = {
    0x80: ("note-off", 2),
    0x90: ("note-on", 2),
    0xA0: ("after-touch", 2),
    0xB0: ("controller", 2),
    0xC0: ("patch-change", 1),
    0xD0: ("channel pressure", 1),
    0xE0: ("pitch-bend", 2),
}

# System messages that carry no payload in a MIDI file
SYSTEM_MESSAGES: Dict[int, str] = {
    0xF1: "MTC quarter frame",
    0xF2: "song position",
    0xF3: "song select",
    0xF4: "undefined system message",
    0xF5: "undefined system message",
    0xF6: "tune request",
    0xF8: "timing clock",
    0xF9: "undefined system message",
    0xFA: "start",
    0xFB: "continue",
    0xFC: "stop",
    0xFD: "undefined system message",
}

META_LABELS: Dict[int, str] = {
    0x00: "sequence number",
    0x01: "text",
    0x02: "copyright notice",
    0x03: "track name",
    0x04: "instrument name",
    0x05: "lyric",
    0x06: "marker",
    0x07: "cue point",
    0x08: "program name",
    0x09: "device name",
    0x20: "MIDI channel prefix",
    0x21: "MIDI port",
    META_END_OF_TRACK: "end-of-track",
    0x51: "tempo",
    0x54: "SMPTE offset",
    0x58: "time signature",
    0x59: "key signature",
    0x7F: "system exclusive",
}


def hex_tokens(payload: bytes) -> List[str]:
    return [f"{b:02x}" for b in payload]


def decimal_tokens(payload: bytes) -> List[str]:
    return [f"'{b}" for b in payload]


# Meta payload formatters return None when the payload does not have the
# layout of its type; the payload is then written as hex bytes.


def _format_sequence_number(payload: bytes) -> Optional[List[str]]:
    if len(payload) != 2:
        return None
    return [f"2'{unpack_uint16(payload)}"]


def _format_text(payload: bytes) -> Optional[List[str]]:
    if b"\\" in payload or any(not 0x20 <= b < 0x7F for b in payload):
        return None
    text = payload.decode("ascii").replace('"', '\\"')
    return [f'"{text}"']


def _format_single_byte(payload: bytes) -> Optional[List[str]]:
    if len(payload) != 1:
        return None
    return decimal_tokens(payload)


def _format_tempo(payload: bytes) -> Optional[List[str]]:
    if len(payload) != 3:
        return None
    microseconds = unpack_uint24(payload)
    if microseconds == 0:
        return None
    return [f"t{MICROSECONDS_PER_MINUTE / microseconds!r}"]


def _fixed_decimal(size: int) -> Callable[[bytes], Optional[List[str]]]:
    def formatter(payload: bytes) -> Optional[List[str]]:
        if len(payload) != size:
            return None
        return decimal_tokens(payload)

    return formatter


def _format_key_signature(payload: bytes) -> Optional[List[str]]:
    if len(payload) != 2:
        return None
    accidentals, mode = payload
    # Flats are stored as a negative count
    if accidentals >= 0x80:
        first = f"1'-{256 - accidentals}"
    else:
        first = f"'{accidentals}"
    return [first, f"'{mode}"]


META_FORMATTERS: Dict[int, Callable[[bytes], Optional[List[str]]]] = {
    0x00: _format_sequence_number,
    0x20: _format_single_byte,
    0x21: _format_single_byte,
    0x51: _format_tempo,
    0x54: _fixed_decimal(5),
    0x58: _fixed_decimal(4),
    0x59: _format_key_signature,
}
META_FORMATTERS.update({meta_type: _format_text for meta_type in range(0x01, 0x0A)})


class EventDecoder:
    """
    Stateful decoder for the events of one track.

    Holds the running status, which the structural parser resets at the
    start of every track.

    Example:
        decoder = EventDecoder(ByteStream(io.BytesIO(track_data)))
        event = decoder.read_event()
        print(event.to_line(show_comments=True))
    """

    def __init__(self, stream: ByteStream):
        self.stream = stream
        self.running_status = 0
        self._system_handlers = {
            0xF0: self._decode_sysex,
            0xF7: self._decode_sysex,
            0xFE: self._decode_unsupported,
            0xFF: self._decode_meta,
        }

    def reset(self) -> None:
        """Forget the running status (start of a new track)."""
        self.running_status = 0

    def read_event(self) -> MidiEvent:
        """
        Read one delta time and the event that follows it.

        Raises:
            StreamExhausted: If the input ends inside the event
            UnsupportedStatus: For status 0xFE
            MissingRunningStatus: For a data byte with no prior status
        """
        start = self.stream.tell()
        delta, delta_bytes = self.stream.read_vlv("delta time")

        offset = self.stream.tell()
        first = self.stream.peek_byte("status byte")
        if first < 0x80:
            if self.running_status < 0x80:
                raise MissingRunningStatus(first, offset)
            status = self.running_status
            running = True
        else:
            status = self.stream.read_byte("status byte")
            self.running_status = status
            running = False

        if status < 0xF0:
            tokens, label, meta_type = self._decode_channel_message(status)
        else:
            handler = self._system_handlers.get(status, self._decode_system_message)
            tokens, label, meta_type = handler(status, offset)

        return MidiEvent(
            delta=delta,
            status=status,
            running_status=running,
            tokens=tokens,
            label=label,
            size=self.stream.tell() - start,
            meta_type=meta_type,
            delta_bytes=delta_bytes,
        )

    def _decode_channel_message(self, status: int):
        label, count = CHANNEL_MESSAGES[status & 0xF0]
        data = self.stream.read_exact(count, f"{label} data")

        if status & 0xF0 in (0x80, 0x90):
            # Note-on with zero velocity is a note-off
            if status & 0xF0 == 0x90 and data[1] == 0:
                label = "note-off"
            label = f"{label} {key_to_pitch_name(data[0])}"

        return decimal_tokens(data), label, None

    def _decode_sysex(self, status: int, offset: int):
        length, raw_length = self.stream.read_vlv("system exclusive length")
        payload = self.stream.read_exact(length, "system exclusive data")
        label = "system exclusive" if status == 0xF0 else "system exclusive continuation"
        return format_vlv(length, raw_length) + hex_tokens(payload), label, None

    def _decode_meta(self, status: int, offset: int):
        meta_type = self.stream.read_byte("meta-event type")
        length, raw_length = self.stream.read_vlv("meta-event length")
        payload = self.stream.read_exact(length, f"meta-event 0x{meta_type:02x} data")

        formatter = META_FORMATTERS.get(meta_type)
        payload_tokens = formatter(payload) if formatter else None
        if payload_tokens is None:
            payload_tokens = hex_tokens(payload)

        tokens = [f"{meta_type:02x}"] + format_vlv(length, raw_length) + payload_tokens
        return tokens, META_LABELS.get(meta_type, "meta-message"), meta_type

    def _decode_system_message(self, status: int, offset: int):
        return [], SYSTEM_MESSAGES[status], None

    def _decode_unsupported(self, status: int, offset: int):
        raise UnsupportedStatus(status, offset)
