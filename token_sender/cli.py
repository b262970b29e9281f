#!/usr/bin/env python3

import asyncio
import logging
import sys
from argparse import ArgumentParser
from typing import List, Optional

from token_sender import __version__
from token_sender.approve import approve
from token_sender.config import ENV_FILE, Config, load_config
from token_sender.declare import declare
from token_sender.deploy import deploy
from token_sender.errors import ScriptError
from token_sender.multisend import multisend

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_args(argv: Optional[List[str]] = None):
    parser = ArgumentParser(
        prog="token-sender",
        description="Declare, deploy, approve and multisend through a StarkNet account.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    declare_parser = subparsers.add_parser("declare", help="Declare a contract class.")
    declare_parser.add_argument(
        "-s",
        "--sierra-file-path",
        type=str,
        required=True,
        help="The sierra file path to declare",
    )
    declare_parser.add_argument(
        "-c",
        "--casm-file-path",
        type=str,
        required=True,
        help="The casm file path to declare",
    )
    subparsers.add_parser("deploy", help="Deploy the token sender contract.")
    subparsers.add_parser("approve", help="Approve the token sender to spend DAI and USDC.")
    subparsers.add_parser("multisend", help="Send tokens through the token sender contract.")

    return parser.parse_args(argv)


def configure_logging(level: str):
    logging.basicConfig(
        level=level, format=LOG_FORMAT, stream=sys.stderr
    )


async def run_command(args, config: Config):
    if args.command == "declare":
        return await declare(config, args.sierra_file_path, args.casm_file_path)
    if args.command == "deploy":
        return await deploy(config)
    if args.command == "approve":
        return await approve(config)
    if args.command == "multisend":
        return await multisend(config)
    raise ValueError(f"Unknown command {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(ENV_FILE)
        configure_logging(config.log_level)
        asyncio.run(run_command(args, config))
    except ScriptError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
