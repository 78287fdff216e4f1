__all__ = [
    "Metadata",
    "TRACK_ID",
    "LENGTH",
    "ART_URL",
    "TITLE",
    "ARTIST",
    "ALBUM",
    "ALBUM_ARTIST",
    "URL",
    "TRACK_NUMBER",
]

import typing as typ
from collections.abc import Mapping

from .errors import MissingKeyError

TRACK_ID = "mpris:trackid"
LENGTH = "mpris:length"
ART_URL = "mpris:artUrl"
TITLE = "xesam:title"
ARTIST = "xesam:artist"
ALBUM = "xesam:album"
ALBUM_ARTIST = "xesam:albumArtist"
URL = "xesam:url"
TRACK_NUMBER = "xesam:trackNumber"


class Metadata(Mapping):
    """Read-only view of a track's ``Metadata`` dictionary.

    Keys whose value is null are dropped, so a lookup of an absent or null key
    raises :class:`MissingKeyError`. ``get(key, default)`` still returns the
    default because the error is a ``KeyError``.
    """

    def __init__(self, values: typ.Optional[typ.Mapping[str, typ.Any]] = None):
        self._values: typ.Dict[str, typ.Any] = {
            str(key): value
            for key, value in (values or {}).items()
            if value is not None
        }

    def __getitem__(self, key: str) -> typ.Any:
        try:
            return self._values[key]
        except KeyError:
            raise MissingKeyError(key) from None

    def __iter__(self) -> typ.Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._values!r})"
