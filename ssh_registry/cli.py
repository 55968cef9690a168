"""Command-line interface for the host registry.

    ssh-registry upsert <alias> <hostname> <user> <identityfile>
    ssh-registry repair            (also: ssh-registry --repair / -r)
    ssh-registry list
    ssh-registry check [--timeout SECONDS]
    ssh-registry serve

Missing upsert arguments are prompted for interactively.
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from ssh_registry.config import Settings
from ssh_registry.errors import RegistryError
from ssh_registry.services import HostRegistry, set_settings
from ssh_registry.utils.console import configure_logging

logger = logging.getLogger(__name__)

PROMPTS = {
    "alias": "Alias (e.g., github): ",
    "hostname": "Hostname (e.g., github.com): ",
    "user": "User (usually 'git'): ",
    "identityfile": "Identity file (e.g., id_github): ",
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ssh-registry",
        description="Manage SSH host aliases and their identity keys.",
    )
    parser.add_argument(
        "-r",
        "--repair",
        action="store_true",
        help="same as the repair command",
    )
    parser.add_argument("--config", type=Path, help="SSH config file (default: ~/.ssh/config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    sub = parser.add_subparsers(dest="command")

    upsert = sub.add_parser("upsert", help="add or replace a host alias")
    for name in PROMPTS:
        upsert.add_argument(name, nargs="?", default=None)

    sub.add_parser("repair", help="ensure every IdentityFile in the config exists")
    sub.add_parser("list", help="list configured host aliases")

    check = sub.add_parser("check", help="probe SSH port reachability of every alias")
    check.add_argument("--timeout", type=float, default=None)

    sub.add_parser("serve", help="run the MCP server")
    return parser


def prompt_missing(
    args: argparse.Namespace,
    ask: Callable[[str], str] | None = None,
) -> tuple[str, str, str, str]:
    """Fill in missing upsert arguments interactively.

    Args:
        args: Parsed arguments of the upsert command
        ask: Prompt function, input() by default

    Returns:
        (alias, hostname, user, identityfile)
    """
    ask = ask or input
    values = []
    for name, prompt in PROMPTS.items():
        value = getattr(args, name, None)
        if not value:
            value = ask(prompt).strip()
        values.append(value)
    alias, hostname, user, identityfile = values
    return alias, hostname, user, identityfile


async def _upsert(registry: HostRegistry, args: argparse.Namespace) -> int:
    alias, hostname, user, identityfile = prompt_missing(args)
    result = await registry.upsert(alias, hostname, user, identityfile)
    if result.public_key:
        print(result.public_key)
    if result.agent_loaded:
        print(f"Host {alias} configured and key loaded.", file=sys.stderr)
    else:
        print(f"Host {alias} configured; key not loaded into ssh-agent.", file=sys.stderr)
    return 0


async def _repair(registry: HostRegistry, args: argparse.Namespace) -> int:
    report = await registry.repair()
    for path, error in report.failures.items():
        logger.error("Could not materialize %s: %s", path, error)
    return 0 if report.ok else 1


async def _list(registry: HostRegistry, args: argparse.Namespace) -> int:
    for alias, entry in sorted(registry.list_hosts().items()):
        identity = entry.identity_file or "-"
        print(f"{alias}\t{entry.user}@{entry.hostname}\t{identity}")
    return 0


async def _check(registry: HostRegistry, args: argparse.Namespace) -> int:
    status = await registry.check_hosts(timeout=args.timeout)
    for alias, online in sorted(status.items()):
        print(f"{alias}\t{'online' if online else 'offline'}")
    return 0


COMMANDS = {
    "upsert": _upsert,
    "repair": _repair,
    "list": _list,
    "check": _check,
}


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    command = "repair" if args.repair else (args.command or "upsert")

    settings = Settings.from_env()
    if args.config is not None:
        settings.config_path = args.config
    if args.verbose:
        settings.log_level = "DEBUG"

    configure_logging(settings.log_level, settings.log_colors, settings.log_file)

    if command == "serve":
        from ssh_registry.server import run_server

        set_settings(settings)
        run_server(settings)
        return 0

    registry = HostRegistry(settings)
    handler = COMMANDS[command]

    try:
        return asyncio.run(handler(registry, args))
    except RegistryError as e:
        logger.error("%s", e)
        return 1
    except EOFError:
        logger.error("Input closed before all values were entered")
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
