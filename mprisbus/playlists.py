__all__ = ["Playlist", "PlaylistsMixin", "ORDER_ALPHABETICAL", "PLAYLIST_ORDERINGS"]

import typing as typ

import dbus

from .cast import to_int, to_str_list
from .constants import Interface
from .errors import CastError, DecodeError
from .properties import PlayerProxy

ORDER_ALPHABETICAL = "Alphabetical"
PLAYLIST_ORDERINGS = (
    ORDER_ALPHABETICAL,
    "CreationDate",
    "ModifiedDate",
    "LastPlayDate",
    "UserDefined",
)


class Playlist(typ.NamedTuple):
    id: str
    name: str
    icon: str

    @classmethod
    def from_mpris(cls, value: typ.Any) -> "Playlist":
        if not isinstance(value, (list, tuple)) or len(value) != 3:
            raise CastError(value, "Playlist")
        playlist_id, name, icon = value
        if not all(isinstance(field, str) for field in value):
            raise CastError(value, "Playlist")
        return cls(str(playlist_id), str(name), str(icon))


def _to_active_playlist(value: typ.Any) -> typ.Optional[Playlist]:
    # (b(oss)): the flag says whether the struct holds a real playlist
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise CastError(value, "(bool, Playlist)")
    valid, playlist = value
    return Playlist.from_mpris(playlist) if valid else None


class PlaylistsMixin(PlayerProxy):
    """``org.mpris.MediaPlayer2.Playlists``, optional for players."""

    def get_playlist_count(self) -> int:
        return self._get_cast(Interface.PLAYLISTS, "PlaylistCount", to_int)

    def get_orderings(self) -> typ.List[str]:
        return self._get_cast(Interface.PLAYLISTS, "Orderings", to_str_list)

    def get_active_playlist(self) -> typ.Optional[Playlist]:
        """Returns None when the player has no active playlist."""
        return self._get_cast(Interface.PLAYLISTS, "ActivePlaylist", _to_active_playlist)

    def activate_playlist(self, playlist_id: str):
        playlist = self._object_path(Interface.PLAYLISTS, "ActivatePlaylist", playlist_id)
        self._call(Interface.PLAYLISTS, "ActivatePlaylist", playlist)

    def get_playlists(
        self,
        index: int = 0,
        max_count: int = 100,
        order: str = ORDER_ALPHABETICAL,
        reverse: bool = False,
    ) -> typ.List[Playlist]:
        reply = self._call(
            Interface.PLAYLISTS,
            "GetPlaylists",
            dbus.UInt32(index),
            dbus.UInt32(max_count),
            order,
            dbus.Boolean(reverse),
        )
        if not isinstance(reply, (list, tuple)):
            raise DecodeError(f"{Interface.PLAYLISTS}.GetPlaylists: expected a list, got {reply!r}")
        try:
            return [Playlist.from_mpris(item) for item in reply]
        except CastError as err:
            raise DecodeError(f"{Interface.PLAYLISTS}.GetPlaylists: {err}") from None
