"""Cavegen CLI entry point.

Provides subcommands for generating a level file from a seed and for running
the HTTP level API. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

from __future__ import annotations

import argparse
import os
import sys
from textwrap import dedent

from colorama import Fore, Style, just_fix_windows_console
from dotenv import load_dotenv

just_fix_windows_console()


def _color_enabled() -> bool:
    # Disable colors if output is not a real terminal (e.g., during pytest capture)
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):  # pragma: no cover - environment dependent
        return False


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Cavegen level generator

    Generate a cave level file from a seed, or serve levels over HTTP.
    Configuration can be provided via CLI flags or environment variables. If
    both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                  Bind address for the web server (default: 127.0.0.1)
          PORT                  Port for the web server (default: 5000)
          MAPGEN_LOG_LEVEL      debug|info|warn|error (default: info, warn for generate)
          MAPGEN_ENABLE_METRICS 0 to skip metrics collection

        Examples:
          # Print the level for seed 42 at the default size
          python run.py generate --seed 42

          # Bigger lava map, retrying up to 5 seeds if the map is unplayable
          python run.py generate --seed cavern --size 64 --set flood_type=lava --retries 5

          # Randomize every parameter from the seed
          python run.py generate --seed 7 --shuffle

          # Serve levels at http://127.0.0.1:8080/api/level?seed=42
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="Cavegen",
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
        version=f"Cavegen Level Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a level and print it to stdout",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a level file from a seed and print it to stdout",
    )
    gen_parser.add_argument("--seed", default=None, help="Master seed (default: random)")
    gen_parser.add_argument("--size", type=int, default=32, help="Requested map size, rounded up to a multiple of 8")
    gen_parser.add_argument(
        "--shuffle",
        action="store_true",
        help="Draw every generation parameter from the seed instead of using defaults",
    )
    gen_parser.add_argument(
        "--retries",
        type=int,
        default=0,
        help="Extra attempts with derived seeds when the map is unplayable",
    )
    gen_parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a generation parameter (repeatable), e.g. --set biome=ice",
    )
    gen_parser.add_argument(
        "--metrics",
        action="store_true",
        help="Print generation metrics as JSON to stderr",
    )
    gen_parser.set_defaults(command="generate")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP level API",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask development server exposing /api/level",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 127.0.0.1)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "generate"
        for name, value in (("seed", None), ("size", 32), ("shuffle", False), ("retries", 0), ("overrides", []), ("metrics", False)):
            setattr(args, name, value)
    return args


def _parse_overrides(pairs: list[str]) -> dict:
    overrides = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"expected KEY=VALUE, got {pair!r}")
        overrides[key.strip()] = value
    return overrides


def banner(mode: str, rows: list[tuple[str, object]]) -> str:
    color = _color_enabled()
    title = f"{Fore.CYAN}{Style.BRIGHT}Cavegen {mode}{Style.RESET_ALL}" if color else f"Cavegen {mode}"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if color else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if color else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if color else "=" * 40
    lines = [divider, f"  {title}", divider]
    lines += [f"  {label(name + ':'):12} {value(val)}" for name, val in rows]
    lines += [divider, ""]
    return "\n".join(lines)


def run_generate(args: argparse.Namespace) -> int:
    import json

    from app.mapgen import MapgenConfig, generate_with_retries
    from app.mapgen.seeds import fresh_rng, normalize_seed

    seed = normalize_seed(args.seed)
    try:
        base = MapgenConfig.shuffled(fresh_rng(seed)) if args.shuffle else None
        config = MapgenConfig.from_mapping(_parse_overrides(args.overrides), base=base)
        gen = generate_with_retries(seed, args.size, config, attempts=args.retries + 1)
    except ValueError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    if args.metrics:
        print(json.dumps({"seed": gen.seed, "success": gen.succeeded, "metrics": gen.metrics}, indent=2), file=sys.stderr)
    if not gen.succeeded:
        print(f"[ERROR] Generation failed for seed {gen.seed}: {gen.failure_reason}", file=sys.stderr)
        return 1
    sys.stdout.write(gen.to_level())
    return 0


def run_server(args: argparse.Namespace) -> int:
    from app.logging_utils import log
    from app.server import start_server

    host = args.host or os.getenv("HOST", "127.0.0.1")
    port = int(args.port or os.getenv("PORT", "5000"))
    print(banner("Server", [("Host", host), ("Port", port), ("Debug", "YES" if args.debug else "NO")]))
    log.info(event="startup", mode="server", host=host, port=port)
    start_server(host=host, port=port, debug=args.debug)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested, else the default .env if present (no error if missing)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    if args.command == "server":
        return run_server(args)
    # Keep stdout clean for the level text
    os.environ.setdefault("MAPGEN_LOG_LEVEL", "warn")
    return run_generate(args)


def cli() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(cli())
