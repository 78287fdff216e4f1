__all__ = ["MainLoopThread"]

import logging
import threading

from gi.repository import GLib


class MainLoopThread(threading.Thread):
    """Runs a GLib main loop so that D-Bus signals get dispatched.

    Daemonic, so it never keeps the interpreter alive on its own.
    """

    def __init__(self):
        super().__init__(name=self.__class__.__name__, daemon=True)
        self.logger = logging.getLogger(self.__class__.__name__)
        self.loop = GLib.MainLoop()

    def run(self):
        self.logger.debug("GLib main loop started")
        self.loop.run()
        self.logger.debug("GLib main loop stopped")

    def stop(self):
        self.loop.quit()

    def __enter__(self) -> "MainLoopThread":
        self.start()
        return self

    def __exit__(self, *exc_info):
        self.stop()
