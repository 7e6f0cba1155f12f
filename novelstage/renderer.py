"""Stage rendering: backgrounds and character sprites with simple cross-fades."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Union

import pygame

from novelstage.nineslice import PLACEHOLDER_COLOR
from novelstage.script import SpriteInfo, StageInfo

__all__ = ["StageRenderer", "sprites_equal", "sprite_x", "SPRITE_ANCHORS"]

log = logging.getLogger(__name__)

SPRITE_ANCHORS = {"left": 0.2, "center": 0.5, "right": 0.8}


def sprites_equal(a: Sequence[SpriteInfo], b: Sequence[SpriteInfo]) -> bool:
    """Whether two sprite lists show the same files at the same positions."""
    return len(a) == len(b) and all(
        x.file == y.file and x.pos == y.pos for x, y in zip(a, b)
    )


def sprite_x(pos: str, screen_w: int, sprite_w: int) -> float:
    """Left edge of a sprite centred on its named anchor; unknown positions give 0."""
    anchor = SPRITE_ANCHORS.get(pos)
    if anchor is None:
        return 0.0
    return screen_w * anchor - sprite_w / 2


def _alpha(value: float) -> int:
    return max(0, min(255, int(round(value * 255))))


class StageRenderer:
    """Draws the current stage, fading between backgrounds and sprite sets."""

    def __init__(
        self,
        width: int,
        height: int,
        assets_dir: Union[str, os.PathLike] = "assets",
    ) -> None:
        self.width = width
        self.height = height
        self.assets_dir = Path(assets_dir)
        self._bg_cache: dict[str, pygame.Surface] = {}
        self._sprite_cache: dict[str, pygame.Surface] = {}

        self.curr_bg = ""
        self.prev_bg = ""
        self.bg_fade_frames = 0
        self.bg_fade_counter = 0

        self.curr_sprites: list[SpriteInfo] = []
        self.prev_sprites: list[SpriteInfo] = []
        self.sprite_fade_frames = 0
        self.sprite_fade_counter = 0

        self._black = pygame.Surface((width, height))
        self._black.fill((0, 0, 0))

    def _load(self, cache: dict[str, pygame.Surface], folder: str, file: str) -> pygame.Surface:
        image = cache.get(file)
        if image is not None:
            return image
        path = self.assets_dir / folder / file
        try:
            image = pygame.image.load(os.fspath(path))
        except (OSError, pygame.error) as exc:
            log.warning("image load error: %s: %s", path, exc)
            image = pygame.Surface((1, 1))
            image.fill(PLACEHOLDER_COLOR)
        cache[file] = image
        return image

    def update_stage(self, stage: StageInfo | None) -> None:
        """Start transitions for whatever in ``stage`` differs from what is shown."""
        if stage is None:
            return
        if stage.bg and stage.bg != self.curr_bg:
            if stage.bg_fade > 0:
                self.prev_bg = self.curr_bg
                self.curr_bg = stage.bg
                self.bg_fade_frames = stage.bg_fade
                self.bg_fade_counter = 0
            else:
                self.prev_bg = ""
                self.curr_bg = stage.bg
                self.bg_fade_frames = 0

        if not sprites_equal(stage.sprites, self.curr_sprites):
            if stage.sprite_fade > 0:
                self.prev_sprites = self.curr_sprites
                self.curr_sprites = list(stage.sprites)
                self.sprite_fade_frames = stage.sprite_fade
                self.sprite_fade_counter = 0
            else:
                self.prev_sprites = []
                self.curr_sprites = list(stage.sprites)
                self.sprite_fade_frames = 0

    def draw(self, dst: pygame.Surface, stage: StageInfo | None) -> None:
        """Apply ``stage`` and draw one frame of background and sprites onto ``dst``."""
        self.update_stage(stage)
        self._draw_background(dst)
        self._draw_sprites(dst)

    def _background(self, name: str, alpha: float) -> pygame.Surface:
        if name:
            image = self._load(self._bg_cache, "bg", name)
            surface = pygame.transform.scale(image, (self.width, self.height))
        else:
            surface = self._black.copy()
        if alpha < 1:
            surface.set_alpha(_alpha(alpha))
        return surface

    def _draw_background(self, dst: pygame.Surface) -> None:
        if self.bg_fade_frames == 0:
            dst.blit(self._background(self.curr_bg, 1.0), (0, 0))
            return

        ratio = self.bg_fade_counter / self.bg_fade_frames
        dst.blit(self._background(self.prev_bg, 1 - ratio), (0, 0))
        dst.blit(self._background(self.curr_bg, ratio), (0, 0))
        if self.bg_fade_counter < self.bg_fade_frames:
            self.bg_fade_counter += 1

    def _draw_sprites(self, dst: pygame.Surface) -> None:
        if self.sprite_fade_frames == 0:
            self._draw_sprite_set(dst, self.curr_sprites, 1.0)
            return

        ratio = self.sprite_fade_counter / self.sprite_fade_frames
        self._draw_sprite_set(dst, self.prev_sprites, 1 - ratio)
        self._draw_sprite_set(dst, self.curr_sprites, ratio)
        if self.sprite_fade_counter < self.sprite_fade_frames:
            self.sprite_fade_counter += 1

    def _draw_sprite_set(
        self, dst: pygame.Surface, sprites: Sequence[SpriteInfo], alpha: float
    ) -> None:
        if alpha <= 0:
            return
        for sprite in sprites:
            image = self._load(self._sprite_cache, "sprites", sprite.file)
            sw, sh = image.get_size()
            x = sprite_x(sprite.pos, self.width, sw)
            y = self.height - sh
            if alpha < 1:
                image = image.copy()
                image.set_alpha(_alpha(alpha))
            dst.blit(image, (int(x), int(y)))