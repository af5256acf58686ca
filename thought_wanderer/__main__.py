#!/usr/bin/env python3

"""
Thought Wanderer - a character that walks around and thinks out loud

Usage:
    python -m thought_wanderer [options]

Controls:
    Space       - Toggle wander / manual mode
    Arrows      - Move the character (manual mode)
    I           - Toggle info panel
    ESC         - Quit

The character fetches its thoughts from a thought service
(POST <server>/think) and speaks them sentence by sentence.
"""

import argparse
import asyncio
import logging
import sys

from .config import WandererConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thought-wanderer",
        description="A wandering character that speaks its thoughts.",
    )
    parser.add_argument("--server", dest="server_url",
                        help="Thought service base URL (env: WANDERER_SERVER_URL)")
    parser.add_argument("--spritesheet", help="8x8 walk spritesheet image")
    parser.add_argument("--width", dest="canvas_width", type=int, help="Window width")
    parser.add_argument("--height", dest="canvas_height", type=int, help="Window height")
    parser.add_argument("--fps", type=int, help="Frames per second")
    parser.add_argument("--voice", help="Preferred voice name (env: WANDERER_VOICE)")
    parser.add_argument("--language", help="Voice language prefix (env: WANDERER_LANGUAGE)")
    parser.add_argument("--mute", action="store_true", default=None,
                        help="Show speech bubbles without sound")
    parser.add_argument("--manual", dest="start_manual", action="store_true", default=None,
                        help="Start in manual (keyboard) mode")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser


def config_from_args(args: argparse.Namespace) -> WandererConfig:
    """Environment settings with the command line flags on top."""
    return WandererConfig().with_overrides(
        server_url=args.server_url,
        spritesheet=args.spritesheet,
        canvas_width=args.canvas_width,
        canvas_height=args.canvas_height,
        fps=args.fps,
        voice=args.voice,
        language=args.language,
        mute=args.mute,
        start_manual=args.start_manual,
    )


def setup_logging(verbose: bool = False, quiet: bool = False):
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.quiet)
    config = config_from_args(args)

    print(f"Thought service: {config.server_url}")

    try:
        from .app import WandererApp
        app = WandererApp(config)
        asyncio.run(app.run())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
