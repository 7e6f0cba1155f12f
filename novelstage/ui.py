"""Fonts shared by the user interface."""

from __future__ import annotations

import io
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import pygame

DEFAULT_FONT_PATH = Path("assets", "fonts", "DotGothic16-Regular.ttf")
DEFAULT_FONT_SIZE = 22


@dataclass
class UI:
    """Assets used to render interface elements."""

    font: pygame.font.Font


def load_ui(
    font_path: Union[str, os.PathLike] = DEFAULT_FONT_PATH,
    size: int = DEFAULT_FONT_SIZE,
) -> UI:
    """Load the interface font; OSError if unreadable, ValueError if invalid."""
    data = Path(font_path).read_bytes()
    pygame.font.init()
    try:
        return UI(font=pygame.font.Font(io.BytesIO(data), size))
    except (pygame.error, OSError) as exc:
        raise ValueError(f"cannot load font {os.fspath(font_path)!r}: {exc}") from exc