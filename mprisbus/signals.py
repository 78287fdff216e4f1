__all__ = ["SeekedSubscription"]

import logging
import queue
import threading
import typing as typ
from datetime import timedelta

from dbus.bus import BusConnection
from dbus.exceptions import DBusException

from .cast import to_duration
from .constants import MPRIS_PATH, SEEKED, Interface
from .errors import CastError, TransportError

_CLOSED = object()


class SeekedSubscription:
    """Positions reported by a player's ``Seeked`` signal.

    Iterating yields :class:`datetime.timedelta` positions until ``cancel`` is
    set or :meth:`close` is called. The sequence can only be iterated once.
    Signals are delivered by the GLib main loop, which must be running on some
    thread (see :class:`mprisbus.loop.MainLoopThread`).
    """

    poll_interval = 0.1

    def __init__(
        self,
        bus: BusConnection,
        bus_name: str,
        cancel: typ.Optional[threading.Event] = None,
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.bus_name = bus_name
        self._cancel = cancel if cancel is not None else threading.Event()
        self._positions: "queue.Queue[typ.Any]" = queue.Queue()
        self._closed = False
        self._iterated = False
        self._lock = threading.Lock()

        try:
            self._signal_connection = bus.add_signal_receiver(
                self.handle_seeked,
                signal_name=SEEKED,
                dbus_interface=Interface.PLAYER.value,
                bus_name=bus_name,
                path=MPRIS_PATH,
            )
        except DBusException as err:
            raise TransportError(
                f"failed to subscribe to {Interface.PLAYER}.{SEEKED}", err
            ) from err
        self.logger.debug(f"[{bus_name}] subscribed to {SEEKED}")

    @property
    def closed(self) -> bool:
        return self._closed

    def handle_seeked(self, *body: typ.Any):
        if self._closed:
            return
        if len(body) != 1:
            self.logger.debug(f"[{self.bus_name}] dropping {SEEKED} with {len(body)} values")
            return
        try:
            position = to_duration(body[0])
        except CastError as err:
            self.logger.debug(f"[{self.bus_name}] dropping {SEEKED}: {err}")
            return
        self._positions.put(position)

    def __iter__(self) -> typ.Iterator[timedelta]:
        with self._lock:
            if self._iterated:
                raise RuntimeError("a SeekedSubscription can only be iterated once")
            self._iterated = True
        return self._iter_positions()

    def _iter_positions(self) -> typ.Generator[timedelta, None, None]:
        try:
            while not self._cancel.is_set():
                try:
                    position = self._positions.get(timeout=self.poll_interval)
                except queue.Empty:
                    continue
                if position is _CLOSED:
                    break
                yield position
        finally:
            self.close()

    def close(self):
        """Removes the match rule and wakes up a blocked iterator."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._signal_connection.remove()
        while True:
            try:
                self._positions.get_nowait()
            except queue.Empty:
                break
        self._positions.put(_CLOSED)
        self.logger.debug(f"[{self.bus_name}] unsubscribed from {SEEKED}")

    def __enter__(self) -> "SeekedSubscription":
        return self

    def __exit__(self, *exc_info):
        self.close()
