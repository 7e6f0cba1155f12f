"""Command-line entry point that opens the game window."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import pygame

from novelstage.game import Game, InputState
from novelstage.script import ScriptError, load_scripts
from novelstage.ui import load_ui

__all__ = ["parse_args", "main", "SCRIPT_PATH", "WINDOW_TITLE"]

log = logging.getLogger(__name__)

SCRIPT_PATH = Path("assets", "scripts", "demo.json")
WINDOW_TITLE = "Novel Game Demo"
FPS = 60


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse the screen size options."""
    parser = argparse.ArgumentParser(prog="novelstage", description="Run the novel game.")
    parser.add_argument("-width", "--width", type=int, default=640, help="screen width")
    parser.add_argument("-height", "--height", type=int, default=480, help="screen height")
    return parser.parse_args(argv)


def _run(game: Game, screen: pygame.Surface) -> None:
    clock = pygame.time.Clock()
    while True:
        events = pygame.event.get()
        if any(event.type == pygame.QUIT for event in events):
            return
        game.update(InputState.from_events(events))
        game.draw(screen)
        pygame.display.flip()
        clock.tick(FPS)


def main(argv: Sequence[str] | None = None) -> int:
    """Load the demo script and run the game until the window is closed."""
    args = parse_args(argv)
    try:
        pages = load_scripts(SCRIPT_PATH)
        ui = load_ui()
    except (OSError, ScriptError, ValueError) as exc:
        print(f"novelstage: {exc}", file=sys.stderr)
        return 1

    pygame.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height))
        pygame.display.set_caption(WINDOW_TITLE)
        game = Game(ui, pages, args.width, args.height)
        _run(game, screen)
    except (pygame.error, ValueError) as exc:
        print(f"novelstage: {exc}", file=sys.stderr)
        return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())