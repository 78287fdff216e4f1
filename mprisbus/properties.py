__all__ = ["PlayerProxy"]

import logging
import typing as typ

import dbus
from dbus.bus import BusConnection
from dbus.exceptions import DBusException

from .cast import to_mapping, to_object_path
from .constants import DBUS_INTERFACE, MPRIS_PARTIAL_INTERFACE, MPRIS_PATH, Interface
from .errors import CastError, DecodeError, NilValueError, TransportError

T = typ.TypeVar("T")
InterfaceLike = typ.Union[Interface, str]


class PlayerProxy:
    """Bus, remote object and bus name of one MPRIS player.

    Holds the plumbing every interface shares: generic ``Properties.Get`` and
    ``Properties.Set`` plus plain method calls. Nothing is cached; every
    accessor is one round trip.
    """

    def __init__(self, bus: BusConnection, name: str):
        self.logger = logging.getLogger(self.__class__.__name__)
        self._bus = bus
        self._name = str(name)
        try:
            self._object = bus.get_object(self._name, MPRIS_PATH)
        except DBusException as err:
            self.logger.error(f"[{self}] unable to reach {MPRIS_PATH}: {err}")
            raise TransportError(f"failed to get object {self._name}{MPRIS_PATH}", err) from err
        self._properties = dbus.Interface(self._object, DBUS_INTERFACE)
        self._interfaces = {
            interface: dbus.Interface(self._object, interface.value)
            for interface in Interface
        }

    @property
    def bus(self) -> BusConnection:
        return self._bus

    @property
    def name(self) -> str:
        """Full bus name, e.g. ``org.mpris.MediaPlayer2.vlc``."""
        return self._name

    @property
    def short_name(self) -> str:
        return self._name.replace(MPRIS_PARTIAL_INTERFACE, "")

    def _call(self, interface: InterfaceLike, method: str, *args) -> typ.Any:
        interface = Interface(interface)
        self.logger.debug(f"[{self}] {interface}.{method}{args}")
        try:
            return getattr(self._interfaces[interface], method)(*args)
        except DBusException as err:
            self.logger.error(f"[{self}] {interface}.{method} failed: {err}")
            raise TransportError(f"failed to call {interface}.{method}", err) from err

    def _object_path(self, interface: InterfaceLike, method: str, value: typ.Any) -> dbus.ObjectPath:
        try:
            return to_object_path(value)
        except CastError as err:
            raise err.with_context(f"{Interface(interface)}.{method}") from None

    def get_property(self, interface: InterfaceLike, property_name: str) -> typ.Any:
        """Returns the raw value of ``property_name`` in ``interface``."""
        interface = Interface(interface)
        context = f"failed to get property {interface}.{property_name}"
        try:
            reply = self._properties.Get(interface.value, property_name)
        except DBusException as err:
            self.logger.error(f"[{self}] {context}: {err}")
            raise TransportError(context, err) from err

        # several out arguments come back as a bare tuple, structs as dbus.Struct
        if type(reply) is tuple:
            raise DecodeError(f"{context}: expected one value, got {len(reply)}")
        self.logger.debug(f"[{self}] {interface}.{property_name} = {reply!r}")
        return reply

    def set_property(self, interface: InterfaceLike, property_name: str, value: typ.Any):
        interface = Interface(interface)
        self.logger.debug(f"[{self}] set {interface}.{property_name} = {value!r}")
        try:
            self._properties.Set(interface.value, property_name, value)
        except DBusException as err:
            context = f"failed to set property {interface}.{property_name} to value ({value!r})"
            self.logger.error(f"[{self}] {context}: {err}")
            raise TransportError(context, err) from err

    def get_all_properties(self, interface: InterfaceLike) -> typ.Dict[str, typ.Any]:
        interface = Interface(interface)
        context = f"failed to get all properties of {interface}"
        try:
            reply = self._properties.GetAll(interface.value)
        except DBusException as err:
            self.logger.error(f"[{self}] {context}: {err}")
            raise TransportError(context, err) from err
        try:
            return to_mapping(reply)
        except CastError as err:
            raise DecodeError(f"{context}: {err}") from None

    def get_base_property(self, property_name: str) -> typ.Any:
        return self.get_property(Interface.BASE, property_name)

    def get_player_property(self, property_name: str) -> typ.Any:
        return self.get_property(Interface.PLAYER, property_name)

    def get_tracklist_property(self, property_name: str) -> typ.Any:
        return self.get_property(Interface.TRACKLIST, property_name)

    def get_playlists_property(self, property_name: str) -> typ.Any:
        return self.get_property(Interface.PLAYLISTS, property_name)

    def set_base_property(self, property_name: str, value: typ.Any):
        self.set_property(Interface.BASE, property_name, value)

    def set_player_property(self, property_name: str, value: typ.Any):
        self.set_property(Interface.PLAYER, property_name, value)

    def set_tracklist_property(self, property_name: str, value: typ.Any):
        self.set_property(Interface.TRACKLIST, property_name, value)

    def set_playlists_property(self, property_name: str, value: typ.Any):
        self.set_property(Interface.PLAYLISTS, property_name, value)

    def _get_cast(
        self,
        interface: InterfaceLike,
        property_name: str,
        caster: typ.Callable[[typ.Any], T],
    ) -> T:
        interface = Interface(interface)
        value = self.get_property(interface, property_name)
        if value is None:
            raise NilValueError(interface.value, property_name)
        try:
            return caster(value)
        except CastError as err:
            raise err.with_context(f"{interface}.{property_name}") from None

    def __str__(self):
        return self.short_name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._name!r})"
