__all__ = ["COMMANDS", "add_command_parsers", "format_duration"]

import argparse
import logging
import signal
import threading
import typing as typ
from datetime import timedelta

from .constants import LOOP_STATUSES
from .errors import MissingKeyError
from .loop import MainLoopThread
from .player import Player

logger = logging.getLogger(__name__)

Command = typ.Callable[[Player, argparse.Namespace], None]


def format_duration(duration: timedelta) -> str:
    sign = "-" if duration < timedelta(0) else ""
    total = abs(duration).total_seconds()
    minutes, seconds = divmod(total, 60)
    return f"{sign}{int(minutes)}:{seconds:06.3f}"


def show_status(player: Player, args: argparse.Namespace):
    print(f"player:   {player.get_identity()} ({player.name})")
    print(f"status:   {player.get_playback_status()}")
    print(f"volume:   {player.get_volume():.2f}")
    try:
        print(f"track:    {', '.join(player.get_artist())} - {player.get_title()}")
        print(f"position: {format_duration(player.get_position())} / {format_duration(player.get_length())}")
    except MissingKeyError:
        print("track:    nothing loaded")


def show_metadata(player: Player, args: argparse.Namespace):
    for key, value in sorted(player.get_metadata().items()):
        print(f"{key}: {value}")


def seek(player: Player, args: argparse.Namespace):
    player.seek(timedelta(seconds=args.seconds))


def position(player: Player, args: argparse.Namespace):
    if args.seconds is None:
        print(format_duration(player.get_position()))
    else:
        player.set_position(timedelta(seconds=args.seconds))


def volume(player: Player, args: argparse.Namespace):
    if args.value is None:
        print(f"{player.get_volume():.2f}")
    else:
        player.set_volume(args.value)


def loop_status(player: Player, args: argparse.Namespace):
    if args.status is None:
        print(player.get_loop_status())
    else:
        player.set_loop_status(args.status)


def shuffle(player: Player, args: argparse.Namespace):
    if args.state is None:
        print("on" if player.get_shuffle() else "off")
    else:
        player.set_shuffle(args.state == "on")


def open_uri(player: Player, args: argparse.Namespace):
    player.open_uri(args.uri)


def watch_seeked(player: Player, args: argparse.Namespace):
    cancel = threading.Event()
    exit_signals = (signal.SIGTERM, signal.SIGINT)

    def signal_handler(signum, _):
        logger.info(f"{signal.strsignal(signum)}: Shutting down...")
        cancel.set()

    for exit_signal in exit_signals:
        signal.signal(exit_signal, signal_handler)

    with MainLoopThread(), player.seeked(cancel) as subscription:
        for new_position in subscription:
            print(f"[{player}] seeked to {format_duration(new_position)}", flush=True)


def _simple(method: str) -> Command:
    def command(player: Player, args: argparse.Namespace):
        getattr(player, method)()

    return command


COMMANDS: typ.Dict[str, Command] = {
    "status": show_status,
    "metadata": show_metadata,
    "play": _simple("play"),
    "pause": _simple("pause"),
    "play-pause": _simple("play_pause"),
    "stop": _simple("stop"),
    "next": _simple("next"),
    "previous": _simple("previous"),
    "raise": _simple("raise_"),
    "quit": _simple("quit"),
    "seek": seek,
    "position": position,
    "volume": volume,
    "loop": loop_status,
    "shuffle": shuffle,
    "open": open_uri,
    "watch-seeked": watch_seeked,
}


def add_command_parsers(parser: argparse.ArgumentParser):
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list", help="list running players")
    subparsers.add_parser("status", help="show playback status")
    subparsers.add_parser("metadata", help="show current track metadata")
    for name in ("play", "pause", "play-pause", "stop", "next", "previous", "raise", "quit"):
        subparsers.add_parser(name, help=f"send {name}")

    seek_parser = subparsers.add_parser("seek", help="move the position by SECONDS")
    seek_parser.add_argument("seconds", type=float)

    position_parser = subparsers.add_parser("position", help="show or set the position")
    position_parser.add_argument("seconds", type=float, nargs="?")

    volume_parser = subparsers.add_parser("volume", help="show or set the volume")
    volume_parser.add_argument("value", type=float, nargs="?")

    loop_parser = subparsers.add_parser("loop", help="show or set the loop status")
    loop_parser.add_argument("status", choices=LOOP_STATUSES, nargs="?")

    shuffle_parser = subparsers.add_parser("shuffle", help="show or set shuffle")
    shuffle_parser.add_argument("state", choices=("on", "off"), nargs="?")

    open_parser = subparsers.add_parser("open", help="open and play URI")
    open_parser.add_argument("uri")

    subparsers.add_parser("watch-seeked", help="print positions reported by Seeked")
