"""Command-line launcher for the resolution service and one-off rolls."""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path

from rpgresolve.backend.config import configure_logging, load_settings
from rpgresolve.backend.dice import roll_dice_pool
from rpgresolve.backend.errors import InvalidInput
from rpgresolve.backend.models import DicePoolConfig
from rpgresolve.backend.pool import generate_token_pool
from rpgresolve.backend.rng import create_random_source

ROOT_DIR = Path(__file__).resolve().parents[2]

OUTCOME_LABELS = {
    "failure": "Failure",
    "success": "Success",
    "exceptional_success": "Exceptional Success",
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="RPG resolution launcher")
    parser.add_argument("--log-level", default=settings.log_level)
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="run the HTTP service")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)

    roll = commands.add_parser("roll", help="roll an exploding d10 pool")
    roll.add_argument("--stats", type=int, default=0)
    roll.add_argument("--skills", type=int, default=0)
    roll.add_argument("--bonuses", type=int, default=0)
    roll.add_argument("--seed", type=int, default=settings.seed)
    roll.add_argument("--max-depth", type=int, default=settings.max_explosion_depth)

    pool = commands.add_parser("pool", help="print a shuffled token pool")
    pool.add_argument("--successes", type=int, default=0)
    pool.add_argument("--seed", type=int, default=settings.seed)

    return parser.parse_args(argv)


def build_server_command(host: str, port: int) -> list[str]:
    return [
        sys.executable,
        "-m",
        "uvicorn",
        "rpgresolve.backend.api:app",
        "--host",
        host,
        "--port",
        str(port),
    ]


def run_roll(args: argparse.Namespace) -> int:
    try:
        config = DicePoolConfig(stats=args.stats, skills=args.skills, bonuses=args.bonuses)
    except InvalidInput as exc:
        print(f"Invalid dice pool: {exc}", file=sys.stderr)
        return 2
    if config.total_dice == 0:
        print("Dice pool is empty; set at least one of --stats, --skills, --bonuses.", file=sys.stderr)
        return 1

    try:
        result = roll_dice_pool(config, create_random_source(args.seed), max_depth=args.max_depth)
    except InvalidInput as exc:
        print(f"Invalid depth guard: {exc}", file=sys.stderr)
        return 2
    print(f"Dice: {config.total_dice}")
    print(f"Rolls: {' '.join(str(value) for value in result.rolls)}")
    print(f"Successes: {result.total_successes}")
    print(f"Outcome: {OUTCOME_LABELS[result.outcome]}")
    return 0


def run_pool(args: argparse.Namespace) -> int:
    try:
        tokens = generate_token_pool(args.successes, create_random_source(args.seed))
    except InvalidInput as exc:
        print(f"Invalid successes: {exc}", file=sys.stderr)
        return 2
    for position, token in enumerate(tokens, start=1):
        print(f"{position:2d}. {token.outcome:<5} ({token.tier})")
    return 0


def run_serve(args: argparse.Namespace) -> int:
    command = build_server_command(host=args.host, port=args.port)
    return subprocess.call(command, cwd=str(ROOT_DIR))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "serve":
        return run_serve(args)
    if args.command == "roll":
        return run_roll(args)
    return run_pool(args)


if __name__ == "__main__":
    raise SystemExit(main())
