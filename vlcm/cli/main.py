"""
vlcm command line entry point
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .commands import COMMANDS
from .config import add_client_flags, load_config
from .output import add_output_flag
from .. import __version__
from ..client import VLCMClient
from ..exceptions import ConfigurationError, VLCMError


logger = logging.getLogger("vlcm")


def setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)
    if not debug:
        # urllib3 connection chatter is only useful when debugging
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vlcm",
        description="vSphere Lifecycle Manager depots and cluster software drafts")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    for name in sorted(COMMANDS):
        command_class = COMMANDS[name]
        sub = subparsers.add_parser(
            name,
            help=command_class.summary,
            description=command_class.description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            allow_abbrev=False,
        )
        add_client_flags(sub)
        add_output_flag(sub)
        command_class.register(sub)
        sub.set_defaults(command_class=command_class)

    return parser


def main(argv: Optional[List[str]] = None, stream: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    client = VLCMClient(
        config.url,
        username=config.username,
        password=config.password,
        session_id=config.session_id,
        insecure=config.insecure,
    )

    try:
        client.connect()
        return args.command_class(args, stream=stream).run(client)
    except ConfigurationError as e:
        logger.error(str(e))
        return 2
    except VLCMError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130
    finally:
        client.disconnect()


if __name__ == "__main__":
    sys.exit(main())
