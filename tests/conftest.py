import typing as typ

import dbus
import pytest
from dbus.exceptions import DBusException

from mprisbus import Player
from mprisbus.constants import DBUS_INTERFACE, Interface

VLC = "org.mpris.MediaPlayer2.vlc"
TRACK_ID = "/org/videolan/vlc/playlist/7"


class FakeSignalMatch:
    def __init__(self, bus: "FakeBus", handler: typ.Callable, match: typ.Dict[str, typ.Any]):
        self.bus = bus
        self.handler = handler
        self.match = match
        self.removed = False

    def remove(self):
        self.removed = True
        self.bus.receivers.remove(self)


class FakeObject:
    """Stands in for a dbus-python proxy object of an MPRIS player."""

    def __init__(self, properties: typ.Dict[str, typ.Dict[str, typ.Any]]):
        self.properties = properties
        self.read_only: typ.Set[typ.Tuple[str, str]] = set()
        self.replies: typ.Dict[typ.Tuple[str, str], typ.Any] = {}
        self.errors: typ.Dict[typ.Tuple[str, str], DBusException] = {}
        self.calls: typ.List[typ.Tuple[str, str, tuple]] = []

    def calls_to(self, interface: str, method: str) -> typ.List[tuple]:
        return [args for iface, name, args in self.calls if (iface, name) == (interface, method)]

    def get_dbus_method(self, member: str, dbus_interface: typ.Optional[str] = None):
        def method(*args):
            self.calls.append((dbus_interface, member, args))
            error = self.errors.get((dbus_interface, member))
            if error is not None:
                raise error
            if dbus_interface == DBUS_INTERFACE:
                return self.handle_properties(member, *args)
            return self.replies.get((dbus_interface, member))

        return method

    def handle_properties(self, member: str, *args):
        if member == "Get":
            interface, name = args
            try:
                return self.properties[interface][name]
            except KeyError:
                raise DBusException(
                    f"no property {name}", name="org.freedesktop.DBus.Error.UnknownProperty"
                ) from None
        if member == "Set":
            interface, name, value = args
            if (interface, name) in self.read_only:
                raise DBusException(
                    f"{name} is read-only", name="org.freedesktop.DBus.Error.PropertyReadOnly"
                )
            self.properties.setdefault(interface, {})[name] = value
            return None
        if member == "GetAll":
            return dbus.Dictionary(self.properties.get(args[0], {}), signature="sv")
        raise DBusException(member, name="org.freedesktop.DBus.Error.UnknownMethod")


class FakeBus:
    """Stands in for dbus.SessionBus."""

    def __init__(self, names: typ.Iterable[str] = (), objects: typ.Optional[typ.Dict[str, FakeObject]] = None):
        self.names = list(names)
        self.objects = objects or {}
        self.receivers: typ.List[FakeSignalMatch] = []
        self.requested: typ.List[typ.Tuple[str, str]] = []

    def list_names(self):
        return dbus.Array([dbus.String(name) for name in self.names], signature="s")

    def get_object(self, bus_name: str, object_path: str):
        self.requested.append((bus_name, object_path))
        try:
            return self.objects[bus_name]
        except KeyError:
            raise DBusException(
                f"{bus_name} was not provided", name="org.freedesktop.DBus.Error.ServiceUnknown"
            ) from None

    def add_signal_receiver(self, handler, **match):
        receiver = FakeSignalMatch(self, handler, match)
        self.receivers.append(receiver)
        return receiver

    def emit(self, signal_name: str, *body):
        for receiver in list(self.receivers):
            if receiver.match.get("signal_name") == signal_name:
                receiver.handler(*body)


def vlc_metadata() -> dbus.Dictionary:
    return dbus.Dictionary(
        {
            "mpris:trackid": dbus.ObjectPath(TRACK_ID),
            "mpris:length": dbus.Int64(215_000_000),
            "mpris:artUrl": dbus.String("file:///tmp/cover.jpg"),
            "xesam:title": dbus.String("Windowlicker"),
            "xesam:artist": dbus.Array([dbus.String("Aphex Twin")], signature="s"),
            "xesam:album": dbus.String("Windowlicker"),
            "xesam:url": dbus.String("file:///music/windowlicker.flac"),
            "xesam:trackNumber": dbus.Int32(1),
        },
        signature="sv",
    )


def vlc_properties() -> typ.Dict[str, typ.Dict[str, typ.Any]]:
    return {
        Interface.BASE.value: {
            "CanQuit": dbus.Boolean(True),
            "Fullscreen": dbus.Boolean(False),
            "CanSetFullscreen": dbus.Boolean(True),
            "CanRaise": dbus.Boolean(True),
            "HasTrackList": dbus.Boolean(True),
            "Identity": dbus.String("VLC media player"),
            "DesktopEntry": dbus.String("vlc"),
            "SupportedUriSchemes": dbus.Array(["file", "http"], signature="s"),
            "SupportedMimeTypes": dbus.Array(["audio/flac", "video/mp4"], signature="s"),
        },
        Interface.PLAYER.value: {
            "PlaybackStatus": dbus.String("Playing"),
            "LoopStatus": dbus.String("None"),
            "Rate": dbus.Double(1.0),
            "Shuffle": dbus.Boolean(False),
            "Metadata": vlc_metadata(),
            "Volume": dbus.Double(1.0),
            "Position": dbus.Int64(42_000_000),
            "MinimumRate": dbus.Double(0.032),
            "MaximumRate": dbus.Double(32.0),
            "CanGoNext": dbus.Boolean(True),
            "CanGoPrevious": dbus.Boolean(True),
            "CanPlay": dbus.Boolean(True),
            "CanPause": dbus.Boolean(True),
            "CanSeek": dbus.Boolean(True),
            "CanControl": dbus.Boolean(True),
        },
        Interface.TRACKLIST.value: {
            "Tracks": dbus.Array([dbus.ObjectPath(TRACK_ID)], signature="o"),
            "CanEditTracks": dbus.Boolean(False),
        },
        Interface.PLAYLISTS.value: {
            "PlaylistCount": dbus.UInt32(2),
            "Orderings": dbus.Array(["Alphabetical", "UserDefined"], signature="s"),
            "ActivePlaylist": dbus.Struct(
                (
                    dbus.Boolean(True),
                    dbus.Struct(
                        (dbus.ObjectPath("/playlists/1"), dbus.String("Favourites"), dbus.String("")),
                        signature="oss",
                    ),
                ),
                signature="b(oss)",
            ),
        },
    }


@pytest.fixture
def player_object() -> FakeObject:
    player_object = FakeObject(vlc_properties())
    player_object.read_only.add((Interface.PLAYER.value, "PlaybackStatus"))
    return player_object


@pytest.fixture
def bus(player_object: FakeObject) -> FakeBus:
    return FakeBus(names=[VLC, "org.other.Thing"], objects={VLC: player_object})


@pytest.fixture
def player(bus: FakeBus) -> Player:
    return Player(bus, VLC)


@pytest.fixture
def idle_player(bus: FakeBus, player_object: FakeObject) -> Player:
    player_object.properties[Interface.PLAYER.value]["Metadata"] = dbus.Dictionary({}, signature="sv")
    return Player(bus, VLC)


def unknown_method() -> DBusException:
    return DBusException("no such method", name="org.freedesktop.DBus.Error.UnknownMethod")

