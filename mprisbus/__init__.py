__all__ = [
    "cli",
    "Player",
    "Metadata",
    "Playlist",
    "Interface",
    "SeekedSubscription",
    "MainLoopThread",
    "session_bus",
    "list_players",
    "new_player",
    "find_player",
    "MPRISError",
    "TransportError",
    "DecodeError",
    "CastError",
    "NilValueError",
    "MissingKeyError",
]

import argparse
import logging
import os
import sys
from pprint import pformat
from typing import Any, Dict

from yaml import safe_load as load

from .bus import find_player, list_players, new_player, session_bus
from .commands import COMMANDS, add_command_parsers
from .constants import Interface
from .errors import (
    CastError,
    DecodeError,
    MissingKeyError,
    MPRISError,
    NilValueError,
    TransportError,
)
from .loop import MainLoopThread
from .metadata import Metadata
from .player import Player
from .playlists import Playlist
from .signals import SeekedSubscription

DEFAULT_CONFIG = "~/.config/mprisbus/config.yaml"


def cli():
    sys.exit(run(*setup()))


def run(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    logger = logging.getLogger("main")
    try:
        bus = session_bus()
        if args.command == "list":
            for player_name in list_players(bus):
                print(player_name)
            return 0

        player = find_player(bus, args.player or config.get("player"), config.get("ignore") or [])
        if player is None:
            logger.error("No MPRIS player found")
            return 1
        COMMANDS[args.command](player, args)
    except MPRISError as err:
        logger.error(err)
        return 1
    return 0


def setup(argv=None) -> tuple[argparse.Namespace, Dict[str, Any]]:
    parser = setup_parser()
    args = parser.parse_args(argv)
    config_file = os.path.expanduser(args.config)
    required = args.config != DEFAULT_CONFIG
    if required and not os.path.isfile(config_file):
        parser.error(f"not a file: {config_file}")
    config = read_config_file(config_file, required)

    verbose = args.verbose or config.get("verbose", False)

    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    logger = logging.getLogger("main")
    logger.debug(pformat(config, indent=True))

    return args, config


def setup_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mprisbus")
    parser.add_argument(
        "-c",
        "--config",
        help="YAML configuration file",
        required=False,
        default=DEFAULT_CONFIG,
    )
    parser.add_argument(
        "-p",
        "--player",
        help="player to control, e.g. vlc or org.mpris.MediaPlayer2.vlc",
        required=False,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    add_command_parsers(parser)
    return parser


def read_config_file(config_file: str, required: bool = True) -> Dict[str, Any]:
    if not required and not os.path.isfile(config_file):
        return {}
    assert os.path.isfile(config_file), f"not a file: {config_file}"
    with open(config_file, "r") as fh:
        return load(fh) or {}
