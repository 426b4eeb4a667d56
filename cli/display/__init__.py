"""
CLI display modules.
"""

from cli.display.tables import display_midi_info, display_track_events

__all__ = [
    "display_midi_info",
    "display_track_events",
]
