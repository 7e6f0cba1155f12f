"""The dialogue box drawn at the bottom of the screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pygame

from novelstage.nineslice import NineSlice

__all__ = ["DialogueBox", "BOX_COLOR", "NAME_BOX_COLOR", "TEXT_COLOR", "NAME_HEIGHT"]

BOX_COLOR = (0, 0, 0, 180)
NAME_BOX_COLOR = (0, 0, 0, 220)
TEXT_COLOR = (255, 255, 255)
NAME_HEIGHT = 24


def _shade(screen: pygame.Surface, rect: pygame.Rect, color: tuple) -> None:
    if rect.width <= 0 or rect.height <= 0:
        return
    box = pygame.Surface(rect.size, pygame.SRCALPHA)
    box.fill(color)
    screen.blit(box, rect.topleft)


@dataclass
class DialogueBox:
    """The main dialogue area with an optional frame for the box and the name tag."""

    rect: pygame.Rect
    frame: NineSlice | None = None
    name_frame: NineSlice | None = None

    def __post_init__(self) -> None:
        self.rect = pygame.Rect(self.rect)

    def name_rect(self) -> pygame.Rect:
        """The area of the speaker's name tag."""
        return pygame.Rect(
            self.rect.x + 20, self.rect.y + 10, self.rect.width // 3, NAME_HEIGHT
        )

    def draw(self, screen: pygame.Surface, font: Any, name: str, text: str) -> None:
        """Draw the box, the speaker's name if any, and the text."""
        if self.frame is not None:
            self.frame.draw(screen, self.rect)
        else:
            _shade(screen, self.rect, BOX_COLOR)

        y = self.rect.y + 20
        if name:
            tag = self.name_rect()
            if self.name_frame is not None:
                self.name_frame.draw(screen, tag)
            else:
                _shade(screen, tag, NAME_BOX_COLOR)
            screen.blit(font.render(name, True, TEXT_COLOR), (tag.x + 10, tag.bottom - 6))
            y += tag.height + 10

        screen.blit(font.render(text, True, TEXT_COLOR), (self.rect.x + 20, y))