# MAIN
import argparse
import os
import sys
from dataclasses import replace
from typing import Optional, Sequence

from .config import ConfigRegistry
from .game import Game
from .utils import info_text


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    default_preset = os.environ.get("JUMP61_PRESET", "balanced")
    parser = argparse.ArgumentParser(description="Play Jump61 against the computer or another person")
    parser.add_argument("--display", action="store_true", help="Use the graphical board instead of the text interface")
    parser.add_argument(
        "--preset",
        choices=sorted(ConfigRegistry.PRESETS.keys()),
        default=default_preset,
        help="Configuration preset to load",
    )
    parser.add_argument("--size", type=int, help="Board size (overrides the preset)")
    parser.add_argument("--debug", action="store_true", help="Print search and move traces")
    parser.add_argument("input", nargs="?", help="File of commands to run instead of standard input")
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    config = ConfigRegistry.resolve(args.preset)
    if args.size is not None:
        config = replace(config, board_size=args.size).clamp()
    if args.debug:
        print(info_text(f"preset={args.preset} size={config.board_size} depth={config.search_depth}"), file=sys.stderr)

    if args.display:
        from .gui import run

        return run(Game(config=config, debug=args.debug), dev=args.debug)

    if args.input:
        with open(args.input) as inp:
            return Game(inp, config=config, debug=args.debug).play()
    prompts = sys.stdout if sys.stdin.isatty() else None
    return Game(sys.stdin, prompts=prompts, config=config, debug=args.debug).play()


if __name__ == "__main__":
    sys.exit(main())
