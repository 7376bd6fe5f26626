#!/usr/bin/env python
"""
Command line interface for the Empty Epsilon scenario manager.

Usage:
    esm ls
    esm add <identifier | url | path>
    esm rm <identifier>
    esm clean
    esm config [--empty-epsilon-path[=PATH]] [--registry[=URL]]

Every subcommand returns 0 on success and 1 on a reported failure. This
module is the only place that turns errors into exit statuses.
"""

import os
import sys
import logging
import argparse
import tempfile
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

from esm import __version__
from esm import prompt
from esm.config import ConfigStore
from esm.dirs import EsmDirs
from esm.errors import ConfigNotFoundError, EsmError
from esm.registry.fetcher import fetch, is_remote, resolve_source, stage_local
from esm.scenario import ScenarioMetadata, ScenarioStore, parse_scenario_metadata
from esm.utils import format_size

logger = logging.getLogger("esm.cli")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
# Default level is ERROR; -v steps down the list, -q steps up to "off".
LOG_LEVELS = [logging.CRITICAL + 10, logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG]
DEFAULT_LOG_LEVEL_INDEX = 1

# Marks a config flag given without a value ("show the current value").
SHOW_VALUE = object()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


@dataclass
class CommandContext:
    dirs: EsmDirs
    confirm: prompt.ConfirmFunc


def configure_logging(verbose: int = 0, quiet: int = 0) -> int:
    """Set the level of the 'esm' logger from -v/-q counts and return it."""
    index = DEFAULT_LOG_LEVEL_INDEX + verbose - quiet
    index = max(0, min(index, len(LOG_LEVELS) - 1))
    level = LOG_LEVELS[index]
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("esm").setLevel(level)
    return level


def registry_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise argparse.ArgumentTypeError(f"not an absolute http(s) URL: {value!r}")
    return value


# =============================================================================
# Commands
# =============================================================================

def cmd_ls(args: argparse.Namespace, ctx: CommandContext) -> int:
    store = ScenarioStore(ctx.dirs.scenarios_dir)
    entries = store.list()
    if not entries:
        print("No scenarios installed.")
        return EXIT_OK

    print("Installed Empty Epsilon scenarios:")
    for entry in entries:
        try:
            metadata = parse_scenario_metadata(entry.path)
        except OSError as e:
            logger.warning(f"Could not read scenario header of {entry.path}: {e}")
            metadata = ScenarioMetadata()
        print(f" - {entry.identifier} ({entry.file_name}, {format_size(entry.size)})")
        print(f"   name: {metadata.name}")
        print(f"   type: {metadata.scenario_type}")
        print(f"   description: {metadata.description}")
        if metadata.description_long:
            print("   long description:")
            for line in metadata.description_long.rstrip("\n").split("\n"):
                print(f"     {line}".rstrip())
    return EXIT_OK


def cmd_add(args: argparse.Namespace, ctx: CommandContext) -> int:
    print(f"Installing scenario: {args.uri}")
    identifier, source = resolve_source(args.uri)
    store = ScenarioStore(ctx.dirs.scenarios_dir)

    with tempfile.TemporaryDirectory(prefix="esm") as temp_dir:
        if is_remote(source):
            staged = fetch(source, temp_dir)
            print(f"Downloaded {format_size(os.path.getsize(staged))}")
        else:
            staged = stage_local(source, temp_dir)
            print(f"Copied {format_size(os.path.getsize(staged))}")

        overwrite = False
        if store.exists(identifier):
            if not ctx.confirm("Scenario already exists. Overwrite?", True):
                print(f"Kept existing scenario {identifier}")
                return EXIT_OK
            overwrite = True

        dest = store.install(staged, identifier, overwrite_confirmed=overwrite)

    print(f"Installed scenario {identifier} ({dest})")
    return EXIT_OK


def cmd_rm(args: argparse.Namespace, ctx: CommandContext) -> int:
    logger.info(f"Removing scenario: {args.identifier}")
    store = ScenarioStore(ctx.dirs.scenarios_dir)
    path = store.remove(args.identifier)
    print(f"Removed scenario: {args.identifier} ({path})")
    return EXIT_OK


def cmd_open_dir(args: argparse.Namespace, ctx: CommandContext) -> int:
    print("TODO: Opening scenario directory in browser")
    return EXIT_OK


def cmd_clean(args: argparse.Namespace, ctx: CommandContext) -> int:
    store = ScenarioStore(ctx.dirs.scenarios_dir)
    logger.info(f"Cleaning scenario directory: {store.scenarios_dir}")
    if not ctx.confirm("Are you sure you want to delete all scenarios? There is no coming back.", False):
        print("Nothing removed.")
        return EXIT_OK
    path = store.clear()
    print(f"Cleaned scenario directory: {path}")
    return EXIT_OK


def cmd_config(args: argparse.Namespace, ctx: CommandContext) -> int:
    config_store = ConfigStore(ctx.dirs.config_path)
    try:
        config = config_store.load()
    except ConfigNotFoundError as e:
        if not ctx.confirm("No configuration file found. Create a new config?", True):
            logger.info(str(e))
            print("No config created.")
            return EXIT_OK
        config = config_store.create_default()
        print(f"Created config file: {config_store.path}")

    changed = False
    for field in ("empty_epsilon_path", "registry"):
        value = getattr(args, field)
        if value is None:
            continue
        if value is SHOW_VALUE:
            logger.info(f"Reading {field} from config")
            current = getattr(config, field)
            if current is None:
                print(f"{field} is not set")
            else:
                print(current)
        else:
            logger.info(f"Setting {field} to: {value}")
            setattr(config, field, value)
            print(f"Set {field} to {value}")
            changed = True

    if changed:
        config_store.save(config)
    return EXIT_OK


# =============================================================================
# Parser / entry point
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="esm", description="Manage Empty Epsilon scenarios")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="More log output (repeat for more)")
    parser.add_argument("-q", "--quiet", action="count", default=0,
                        help="Less log output (repeat for less)")
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    ls_parser = subparsers.add_parser("ls", aliases=["list"], help="List installed scenarios")
    ls_parser.set_defaults(handler=cmd_ls)

    add_parser = subparsers.add_parser(
        "add", help="Add a scenario with identifier, from an URL or local file")
    add_parser.add_argument("uri", help="Scenario identifier, http(s) URL or path to a script")
    add_parser.set_defaults(handler=cmd_add)

    rm_parser = subparsers.add_parser("rm", aliases=["remove"], help="Remove an installed scenario")
    rm_parser.add_argument("identifier")
    rm_parser.set_defaults(handler=cmd_rm)

    open_dir_parser = subparsers.add_parser("open-dir", help="Open the scenario directory in browser")
    open_dir_parser.set_defaults(handler=cmd_open_dir)

    clean_parser = subparsers.add_parser("clean", help="Clean installed scenarios")
    clean_parser.set_defaults(handler=cmd_clean)

    config_parser = subparsers.add_parser("config", help="Configure esm")
    config_parser.add_argument("-e", "--empty-epsilon-path", nargs="?", const=SHOW_VALUE,
                               default=None, metavar="PATH",
                               help="Path to the Empty Epsilon installation")
    config_parser.add_argument("-r", "--registry", nargs="?", const=SHOW_VALUE,
                               default=None, type=registry_url, metavar="URL",
                               help="URL of the registry to use")
    config_parser.set_defaults(handler=cmd_config, subparser=config_parser)

    return parser


def main(argv: Optional[List[str]] = None, root_dir: Optional[str] = None,
         confirm: Optional[prompt.ConfirmFunc] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    if args.command == "config" and args.empty_epsilon_path is None and args.registry is None:
        args.subparser.print_help()
        return EXIT_USAGE

    dirs = EsmDirs(root_dir)
    ctx = CommandContext(dirs=dirs, confirm=confirm or prompt.confirm)
    try:
        dirs.ensure_scenarios_dir()
        return args.handler(args, ctx)
    except (EsmError, OSError) as e:
        logger.error(str(e))
        return EXIT_ERROR
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
