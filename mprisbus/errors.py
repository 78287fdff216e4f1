__all__ = [
    "MPRISError",
    "TransportError",
    "DecodeError",
    "CastError",
    "NilValueError",
    "MissingKeyError",
]

import typing as typ

from dbus.exceptions import DBusException


class MPRISError(Exception):
    """Base class for every error raised by mprisbus."""


class TransportError(MPRISError):
    """The remote call itself failed: player gone, bus unreachable, method unsupported."""

    def __init__(self, context: str, cause: DBusException):
        self.context = context
        self.cause = cause
        self.dbus_name: typ.Optional[str] = cause.get_dbus_name()
        super().__init__(f"{context}: {cause}")


class DecodeError(MPRISError):
    """The reply did not have the shape the call promises."""


class CastError(MPRISError, TypeError):
    def __init__(self, value: typ.Any, target: str, context: str = ""):
        self.value = value
        self.target = target
        self.context = context
        message = f"cannot cast {value!r} ({type(value).__name__}) to {target}"
        super().__init__(f"{context}: {message}" if context else message)

    def with_context(self, context: str) -> "CastError":
        return CastError(self.value, self.target, context)


class NilValueError(MPRISError):
    def __init__(self, interface: str, property_name: str):
        self.interface = interface
        self.property_name = property_name
        super().__init__(f"property {interface}.{property_name} returned nil value")


class MissingKeyError(MPRISError, KeyError):
    """Metadata key absent or null, which is how an idle player looks."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self):
        return f"Metadata missing or nil for key {self.key!r}"
