__all__ = [
    "session_bus",
    "list_players",
    "new_player",
    "find_player",
    "strip_mpris",
    "resolve_player_name",
]

import logging
import typing as typ

import dbus
import dbus.mainloop.glib
from dbus.bus import BusConnection
from dbus.exceptions import DBusException

from .cast import to_str_list
from .constants import DBUS_BUS_NAME, MPRIS_PARTIAL_INTERFACE, Interface
from .errors import CastError, DecodeError, TransportError
from .player import Player

logger = logging.getLogger(__name__)


def session_bus(mainloop: bool = True) -> dbus.SessionBus:
    """Connects to the session bus.

    With ``mainloop`` the GLib main loop becomes the default first, which signal
    subscriptions need in order to be delivered.
    """
    if mainloop:
        dbus.mainloop.glib.DBusGMainLoop(set_as_default=True)
    try:
        return dbus.SessionBus()
    except DBusException as err:
        logger.error(f"Unable to connect to the session bus: {err}")
        raise TransportError("failed to connect to the session bus", err) from err


def strip_mpris(player_name: str) -> str:
    # human friendly name
    return player_name.replace(MPRIS_PARTIAL_INTERFACE, "")


def resolve_player_name(name: str) -> str:
    """``vlc`` and ``org.mpris.MediaPlayer2.vlc`` both give the full bus name."""
    if name.startswith(MPRIS_PARTIAL_INTERFACE):
        return name
    return MPRIS_PARTIAL_INTERFACE + name


def list_players(bus: BusConnection) -> typ.List[str]:
    """Bus names of every MPRIS player currently on ``bus``."""
    try:
        names = bus.list_names()
    except DBusException as err:
        logger.error(f"Unable to list bus names: {err}")
        raise TransportError(f"failed to call {DBUS_BUS_NAME}.ListNames", err) from err
    try:
        names = to_str_list(names)
    except CastError as err:
        raise DecodeError(f"{DBUS_BUS_NAME}.ListNames: {err}") from None

    players = [name for name in names if name.startswith(Interface.BASE.value)]
    logger.debug(f"found players: {players}")
    return players


def new_player(bus: BusConnection, name: str) -> Player:
    return Player(bus, resolve_player_name(name))


def find_player(
    bus: BusConnection,
    wanted: typ.Optional[str] = None,
    ignore: typ.Iterable[str] = (),
) -> typ.Optional[Player]:
    """First player matching ``wanted``, skipping names containing an ``ignore`` entry.

    Without ``wanted`` the first non-ignored player is picked. Returns None when
    nothing matches.
    """
    ignore = tuple(ignore or ())
    wanted_name = resolve_player_name(wanted) if wanted else None
    for player_name in list_players(bus):
        if wanted_name:
            # instances register as org.mpris.MediaPlayer2.vlc.instance1234
            if player_name != wanted_name and not player_name.startswith(wanted_name + "."):
                continue
        elif any(ignore_player in strip_mpris(player_name) for ignore_player in ignore):
            logger.info(f"Ignoring player: {strip_mpris(player_name)}")
            continue
        return Player(bus, player_name)
    return None
