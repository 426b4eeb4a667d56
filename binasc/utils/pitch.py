"""Pitch naming for MIDI key numbers."""

PITCH_CLASSES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


def key_to_pitch_name(key: int) -> str:
    """
    Convert a MIDI key number to scientific pitch notation.

    Example:
        >>> key_to_pitch_name(60)
        'C4'
    """
    return f"{PITCH_CLASSES[key % 12]}{key // 12 - 1}"
