"""Fallible projections out of the values dbus-python hands back.

dbus-python unwraps variants into typed Python values (``dbus.Boolean``,
``dbus.Int64``, ``dbus.Dictionary`` and so on). These functions are the only
place such a value is turned into a plain Python type; each raises
:class:`~mprisbus.errors.CastError` with the offending value when the
projection does not apply.
"""

__all__ = [
    "to_bool",
    "to_str",
    "to_float",
    "to_int",
    "to_duration",
    "to_str_list",
    "to_mapping",
    "to_object_path",
    "to_object_path_list",
]

import typing as typ
from collections.abc import Mapping
from datetime import timedelta

import dbus

from .errors import CastError

_TRUE_STRINGS = {"true", "1"}
_FALSE_STRINGS = {"false", "0"}


def _is_boolean(value: typ.Any) -> bool:
    # dbus.Boolean subclasses int, not bool
    return isinstance(value, (bool, dbus.Boolean))


def to_bool(value: typ.Any) -> bool:
    if _is_boolean(value) or isinstance(value, int):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise CastError(value, "bool")


def to_str(value: typ.Any) -> str:
    # covers dbus.String, dbus.ObjectPath and dbus.Signature
    if isinstance(value, str):
        return str(value)
    raise CastError(value, "str")


def to_float(value: typ.Any) -> float:
    if not _is_boolean(value):
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                pass
    raise CastError(value, "float")


def to_int(value: typ.Any) -> int:
    """Signed and unsigned wire integers both land here as plain ints."""
    if not _is_boolean(value):
        if isinstance(value, int):
            return int(value)
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                pass
    raise CastError(value, "int")


def to_duration(value: typ.Any) -> timedelta:
    """Microsecond count to :class:`datetime.timedelta`."""
    try:
        return timedelta(microseconds=to_int(value))
    except CastError:
        raise CastError(value, "timedelta") from None


def to_str_list(value: typ.Any) -> typ.List[str]:
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return [str(v) for v in value]
    raise CastError(value, "list[str]")


def to_object_path(value: typ.Any) -> dbus.ObjectPath:
    if isinstance(value, str):
        try:
            return dbus.ObjectPath(value)
        except (TypeError, ValueError):
            pass
    raise CastError(value, "object path")


def to_object_path_list(value: typ.Any) -> typ.List[str]:
    try:
        return to_str_list(value)
    except CastError:
        raise CastError(value, "list[object path]") from None


def to_mapping(value: typ.Any) -> typ.Dict[str, typ.Any]:
    if isinstance(value, Mapping) and all(isinstance(k, str) for k in value):
        return {str(k): v for k, v in value.items()}
    raise CastError(value, "dict[str, Any]")
