"""Gridforge CLI entry point.

Provides subcommands for running the dungeon HTTP API and for generating a
dungeon straight to the terminal. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from gridforge.dungeon import Dungeon, DungeonConfig, DungeonGenerationError, TileKind
from gridforge.dungeon.config import OPTION_ALIASES
from gridforge.dungeon.render import TILE_CHARS, ascii_rows, dungeon_to_dict

_color_init()

# Viewer palette: walls grey, rooms light, corridors blue, entry green, exit red
TILE_COLORS = {
    TileKind.WALL: Fore.WHITE + Style.DIM,
    TileKind.FLOOR: Fore.WHITE + Style.BRIGHT,
    TileKind.CORRIDOR: Fore.BLUE + Style.BRIGHT,
    TileKind.ENTRY: Fore.GREEN + Style.BRIGHT,
    TileKind.EXIT: Fore.RED + Style.BRIGHT,
}


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def _snake_to_flag(name: str) -> str:
    return "--" + name.replace("_", "-")


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Gridforge dungeon generator

    Serve the JSON generation API or print a generated dungeon to the terminal.
    Configuration can be provided via CLI flags or environment variables. If
    both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                      Bind address for the web server (default: 0.0.0.0)
          PORT                      Port for the web server (default: 5000)
          GRIDFORGE_LOG_LEVEL       debug | info | warn | error (default: info)
          GRIDFORGE_LOG_JSON        Emit JSON log lines when set to 1
          GRIDFORGE_DEFAULT_<OPT>   Default generator option for the API (e.g. GRIDFORGE_DEFAULT_ROW_COUNT)

        Examples:
          # Print a seeded dungeon
          python run.py generate --seed 42

          # A small four-room layout as JSON
          python run.py generate --seed 42 --row-count 20 --col-count 20 --room-count-min 4 --room-count-max 4 --json

          # Run the API server on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="Gridforge",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Gridforge Dungeon Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the dungeon JSON API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask dungeon generation API",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description=dedent(
            """
            Generate one dungeon and print it as an ASCII map.

            Legend:  # wall   . room   , corridor   < entry   > exit
            """
        ),
    )
    defaults = DungeonConfig()
    for name in sorted(set(OPTION_ALIASES.values())):
        gen_parser.add_argument(
            _snake_to_flag(name),
            dest=name,
            type=int,
            default=None,
            help=f"(default: {getattr(defaults, name)})",
        )
    gen_parser.add_argument("--json", action="store_true", help="Print the API JSON payload instead of a map")
    gen_parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def render_map(dungeon: Dungeon, color: bool) -> str:
    rows = ascii_rows(dungeon)
    if color:
        palette = {TILE_CHARS[kind]: code for kind, code in TILE_COLORS.items()}
        rows = ["".join(f"{palette[ch]}{ch}{Style.RESET_ALL}" for ch in row) for row in rows]
    return "\n".join(rows)


def _summary(dungeon: Dungeon) -> str:
    m = dungeon.metrics
    entry = dungeon.special_points.entry
    exit_ = dungeon.special_points.exit
    return "\n".join(
        [
            f"seed={dungeon.seed} size={dungeon.col_count}x{dungeon.row_count}",
            f"rooms={m['rooms']}/{m['grids']} connections={m['connections']} extra_paths={m['extra_paths']}",
            f"attempts={m['attempts']} forced={m['forced_attempts']} runtime_ms={m['runtime_ms']}",
            f"entry={entry} exit={exit_}",
        ]
    )


def run_generate(args: argparse.Namespace) -> int:
    options = {name: getattr(args, name) for name in set(OPTION_ALIASES.values()) if getattr(args, name) is not None}
    try:
        dungeon = Dungeon(DungeonConfig.from_mapping(options))
    except DungeonGenerationError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    if args.json:
        print(json.dumps(dungeon_to_dict(dungeon), indent=2))
        return 0
    color = not args.no_color and sys.stdout.isatty()
    print(render_map(dungeon, color))
    print(_summary(dungeon))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))

    # Import server entrypoint only after environment is ready
    from gridforge.logging_utils import log
    from gridforge.server import start_server

    log.info(event="startup", mode=mode, host=host, port=port)
    start_server(host, port, bool(getattr(args, "debug", False)))
    return 0


def cli() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
