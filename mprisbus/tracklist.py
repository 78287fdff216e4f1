__all__ = ["TrackListMixin"]

import typing as typ

import dbus

from .cast import to_bool, to_mapping, to_object_path_list
from .constants import NO_TRACK, Interface
from .errors import CastError, DecodeError
from .metadata import Metadata
from .properties import PlayerProxy


class TrackListMixin(PlayerProxy):
    """``org.mpris.MediaPlayer2.TrackList``, optional for players.

    Check :meth:`~mprisbus.Player.has_track_list` before relying on it.
    """

    def get_tracks(self) -> typ.List[str]:
        return self._get_cast(Interface.TRACKLIST, "Tracks", to_object_path_list)

    def can_edit_tracks(self) -> bool:
        return self._get_cast(Interface.TRACKLIST, "CanEditTracks", to_bool)

    def get_tracks_metadata(self, track_ids: typ.Iterable[str]) -> typ.List[Metadata]:
        tracks = [
            self._object_path(Interface.TRACKLIST, "GetTracksMetadata", track_id)
            for track_id in track_ids
        ]
        reply = self._call(
            Interface.TRACKLIST, "GetTracksMetadata", dbus.Array(tracks, signature="o")
        )
        if not isinstance(reply, (list, tuple)):
            raise DecodeError(
                f"{Interface.TRACKLIST}.GetTracksMetadata: expected a list, got {reply!r}"
            )
        try:
            return [Metadata(to_mapping(item)) for item in reply]
        except CastError as err:
            raise DecodeError(f"{Interface.TRACKLIST}.GetTracksMetadata: {err}") from None

    def add_track(self, uri: str, after: str = NO_TRACK, set_as_current: bool = False):
        self._call(
            Interface.TRACKLIST,
            "AddTrack",
            uri,
            self._object_path(Interface.TRACKLIST, "AddTrack", after),
            dbus.Boolean(set_as_current),
        )

    def remove_track(self, track_id: str):
        track = self._object_path(Interface.TRACKLIST, "RemoveTrack", track_id)
        self._call(Interface.TRACKLIST, "RemoveTrack", track)

    def go_to(self, track_id: str):
        """Skips to ``track_id``, which must be in the track list."""
        track = self._object_path(Interface.TRACKLIST, "GoTo", track_id)
        self._call(Interface.TRACKLIST, "GoTo", track)
