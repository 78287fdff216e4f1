__all__ = [
    "Interface",
    "MPRIS_PARTIAL_INTERFACE",
    "MPRIS_PATH",
    "DBUS_INTERFACE",
    "DBUS_BUS_NAME",
    "DBUS_PATH",
    "PLAYING",
    "PAUSED",
    "STOPPED",
    "PLAYBACK_STATUSES",
    "LOOP_NONE",
    "LOOP_TRACK",
    "LOOP_PLAYLIST",
    "LOOP_STATUSES",
    "METADATA",
    "SEEKED",
    "NO_TRACK",
]

from enum import Enum


class Interface(str, Enum):
    BASE = "org.mpris.MediaPlayer2"
    PLAYER = "org.mpris.MediaPlayer2.Player"
    TRACKLIST = "org.mpris.MediaPlayer2.TrackList"
    PLAYLISTS = "org.mpris.MediaPlayer2.Playlists"

    def __str__(self):
        return self.value


MPRIS_PARTIAL_INTERFACE = Interface.BASE.value + "."
MPRIS_PATH = "/org/mpris/MediaPlayer2"
DBUS_INTERFACE = "org.freedesktop.DBus.Properties"
DBUS_BUS_NAME = "org.freedesktop.DBus"
DBUS_PATH = "/org/freedesktop/DBus"

PLAYING = "Playing"
PAUSED = "Paused"
STOPPED = "Stopped"
PLAYBACK_STATUSES = (PLAYING, PAUSED, STOPPED)

LOOP_NONE = "None"
LOOP_TRACK = "Track"
LOOP_PLAYLIST = "Playlist"
LOOP_STATUSES = (LOOP_NONE, LOOP_TRACK, LOOP_PLAYLIST)

METADATA = "Metadata"
SEEKED = "Seeked"
# TrackList "after" argument meaning "insert at the start"
NO_TRACK = "/org/mpris/MediaPlayer2/TrackList/NoTrack"
