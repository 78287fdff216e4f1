__all__ = ["Player"]

import queue
import threading
import typing as typ
from datetime import timedelta

import dbus

from .cast import (
    to_bool,
    to_duration,
    to_float,
    to_int,
    to_mapping,
    to_object_path,
    to_str,
    to_str_list,
)
from .constants import METADATA, Interface
from .errors import CastError
from .metadata import (
    ALBUM,
    ALBUM_ARTIST,
    ARTIST,
    ART_URL,
    LENGTH,
    TITLE,
    TRACK_ID,
    TRACK_NUMBER,
    URL,
    Metadata,
)
from .playlists import PlaylistsMixin
from .signals import SeekedSubscription
from .tracklist import TrackListMixin

T = typ.TypeVar("T")


def _microseconds(duration: timedelta) -> dbus.Int64:
    return dbus.Int64(duration // timedelta(microseconds=1))


class Player(TrackListMixin, PlaylistsMixin):
    """An MPRIS player on the bus.

    Every method is a single round trip to the remote player and raises
    :class:`~mprisbus.errors.TransportError` when the call fails.
    """

    # org.mpris.MediaPlayer2

    def raise_(self):
        """Brings the player's user interface to the front."""
        self._call(Interface.BASE, "Raise")

    def quit(self):
        self._call(Interface.BASE, "Quit")

    def can_quit(self) -> bool:
        return self._get_cast(Interface.BASE, "CanQuit", to_bool)

    def get_fullscreen(self) -> bool:
        return self._get_cast(Interface.BASE, "Fullscreen", to_bool)

    def set_fullscreen(self, fullscreen: bool):
        self.set_base_property("Fullscreen", dbus.Boolean(fullscreen))

    def can_set_fullscreen(self) -> bool:
        return self._get_cast(Interface.BASE, "CanSetFullscreen", to_bool)

    def can_raise(self) -> bool:
        return self._get_cast(Interface.BASE, "CanRaise", to_bool)

    def has_track_list(self) -> bool:
        return self._get_cast(Interface.BASE, "HasTrackList", to_bool)

    def get_identity(self) -> str:
        return self._get_cast(Interface.BASE, "Identity", to_str)

    def get_desktop_entry(self) -> str:
        return self._get_cast(Interface.BASE, "DesktopEntry", to_str)

    def get_supported_uri_schemes(self) -> typ.List[str]:
        return self._get_cast(Interface.BASE, "SupportedUriSchemes", to_str_list)

    def get_supported_mime_types(self) -> typ.List[str]:
        return self._get_cast(Interface.BASE, "SupportedMimeTypes", to_str_list)

    # org.mpris.MediaPlayer2.Player methods

    def next(self):
        self._call(Interface.PLAYER, "Next")

    def previous(self):
        self._call(Interface.PLAYER, "Previous")

    def pause(self):
        self._call(Interface.PLAYER, "Pause")

    def play_pause(self):
        self._call(Interface.PLAYER, "PlayPause")

    def stop(self):
        self._call(Interface.PLAYER, "Stop")

    def play(self):
        self._call(Interface.PLAYER, "Play")

    def seek(self, offset: timedelta):
        """Moves the position by ``offset``; negative offsets seek backward."""
        self._call(Interface.PLAYER, "Seek", _microseconds(offset))

    def set_track_position(self, track_id: str, position: timedelta):
        self._call(
            Interface.PLAYER,
            "SetPosition",
            self._object_path(Interface.PLAYER, "SetPosition", track_id),
            _microseconds(position),
        )

    def set_position(self, position: timedelta):
        """Sets the position of the current track.

        Raises MissingKeyError without touching the position when no track is
        loaded.
        """
        self.set_track_position(self.get_track_id(), position)

    def open_uri(self, uri: str):
        self._call(Interface.PLAYER, "OpenUri", uri)

    # org.mpris.MediaPlayer2.Player properties

    def get_playback_status(self) -> str:
        """One of PLAYING, PAUSED or STOPPED."""
        return self._get_cast(Interface.PLAYER, "PlaybackStatus", to_str)

    def get_loop_status(self) -> str:
        """One of LOOP_NONE, LOOP_TRACK or LOOP_PLAYLIST."""
        return self._get_cast(Interface.PLAYER, "LoopStatus", to_str)

    def set_loop_status(self, loop_status: str):
        self.set_player_property("LoopStatus", dbus.String(loop_status))

    def get_rate(self) -> float:
        return self._get_cast(Interface.PLAYER, "Rate", to_float)

    def set_rate(self, rate: float):
        self.set_player_property("Rate", dbus.Double(rate))

    def get_shuffle(self) -> bool:
        return self._get_cast(Interface.PLAYER, "Shuffle", to_bool)

    def set_shuffle(self, shuffle: bool):
        self.set_player_property("Shuffle", dbus.Boolean(shuffle))

    def get_metadata(self) -> Metadata:
        return Metadata(self._get_cast(Interface.PLAYER, METADATA, to_mapping))

    def get_volume(self) -> float:
        return self._get_cast(Interface.PLAYER, "Volume", to_float)

    def set_volume(self, volume: float):
        self.set_player_property("Volume", dbus.Double(volume))

    def get_position(self) -> timedelta:
        return self._get_cast(Interface.PLAYER, "Position", to_duration)

    def get_minimum_rate(self) -> float:
        return self._get_cast(Interface.PLAYER, "MinimumRate", to_float)

    def get_maximum_rate(self) -> float:
        return self._get_cast(Interface.PLAYER, "MaximumRate", to_float)

    def can_go_next(self) -> bool:
        return self._get_cast(Interface.PLAYER, "CanGoNext", to_bool)

    def can_go_previous(self) -> bool:
        return self._get_cast(Interface.PLAYER, "CanGoPrevious", to_bool)

    def can_play(self) -> bool:
        return self._get_cast(Interface.PLAYER, "CanPlay", to_bool)

    def can_pause(self) -> bool:
        return self._get_cast(Interface.PLAYER, "CanPause", to_bool)

    def can_seek(self) -> bool:
        return self._get_cast(Interface.PLAYER, "CanSeek", to_bool)

    def can_control(self) -> bool:
        return self._get_cast(Interface.PLAYER, "CanControl", to_bool)

    # Metadata shortcuts, all raise MissingKeyError on an idle player

    def _get_metadata_cast(self, key: str, caster: typ.Callable[[typ.Any], T]) -> T:
        value = self.get_metadata()[key]
        try:
            return caster(value)
        except CastError as err:
            raise err.with_context(f"{Interface.PLAYER}.{METADATA}[{key!r}]") from None

    def get_track_id(self) -> str:
        return str(self._get_metadata_cast(TRACK_ID, to_object_path))

    def get_length(self) -> timedelta:
        return self._get_metadata_cast(LENGTH, to_duration)

    def get_title(self) -> str:
        return self._get_metadata_cast(TITLE, to_str)

    def get_artist(self) -> typ.List[str]:
        return self._get_metadata_cast(ARTIST, to_str_list)

    def get_album(self) -> str:
        return self._get_metadata_cast(ALBUM, to_str)

    def get_album_artist(self) -> typ.List[str]:
        return self._get_metadata_cast(ALBUM_ARTIST, to_str_list)

    def get_art_url(self) -> str:
        return self._get_metadata_cast(ART_URL, to_str)

    def get_url(self) -> str:
        return self._get_metadata_cast(URL, to_str)

    def get_track_number(self) -> int:
        return self._get_metadata_cast(TRACK_NUMBER, to_int)

    # Signals

    def seeked(self, cancel: typ.Optional[threading.Event] = None) -> SeekedSubscription:
        return SeekedSubscription(self._bus, self._name, cancel)

    def on_seeked(self, cancel: threading.Event, positions: "queue.Queue[timedelta]"):
        """Puts every position reported by ``Seeked`` on ``positions``.

        Blocks until ``cancel`` is set; meant to run on its own thread.
        """
        with self.seeked(cancel) as subscription:
            for position in subscription:
                positions.put(position)
