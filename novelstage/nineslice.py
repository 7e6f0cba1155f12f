"""Nine-slice frame images that scale without stretching their corners."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Union

import pygame

__all__ = [
    "PLACEHOLDER_COLOR",
    "NineSlice",
    "NineSliceLoadError",
    "nine_slice_parts",
    "load_nine_slice",
]

PLACEHOLDER_COLOR = (255, 0, 255, 255)

RectLike = Union[pygame.Rect, tuple]


def nine_slice_parts(
    src_size: tuple[int, int], rect: RectLike, corner: int
) -> list[tuple[pygame.Rect, pygame.Rect]]:
    """Return (source, destination) rectangle pairs for drawing into ``rect``.

    When ``rect`` is too small for two corners, the whole source is mapped onto it.
    """
    sw, sh = src_size
    target = pygame.Rect(rect)
    cw = corner
    if target.width < 2 * cw or target.height < 2 * cw:
        return [(pygame.Rect(0, 0, sw, sh), target)]

    left, top, right, bottom = target.left, target.top, target.right, target.bottom
    w = target.width - 2 * cw
    h = target.height - 2 * cw
    inner_w = sw - 2 * cw
    inner_h = sh - 2 * cw
    R = pygame.Rect
    return [
        (R(0, 0, cw, cw), R(left, top, cw, cw)),
        (R(sw - cw, 0, cw, cw), R(right - cw, top, cw, cw)),
        (R(0, sh - cw, cw, cw), R(left, bottom - cw, cw, cw)),
        (R(sw - cw, sh - cw, cw, cw), R(right - cw, bottom - cw, cw, cw)),
        (R(cw, 0, inner_w, cw), R(left + cw, top, w, cw)),
        (R(cw, sh - cw, inner_w, cw), R(left + cw, bottom - cw, w, cw)),
        (R(0, cw, cw, inner_h), R(left, top + cw, cw, h)),
        (R(sw - cw, cw, cw, inner_h), R(right - cw, top + cw, cw, h)),
        (R(cw, cw, inner_w, inner_h), R(left + cw, top + cw, w, h)),
    ]


@dataclass
class NineSlice:
    """An image drawn by the nine-slice technique with square corners of ``corner`` pixels."""

    image: pygame.Surface | None
    corner: int

    def draw(self, dst: pygame.Surface, rect: RectLike) -> None:
        """Draw the frame into ``rect`` on ``dst``, scaling edges and centre."""
        if self.image is None:
            return
        bounds = self.image.get_rect()
        for src, target in nine_slice_parts(self.image.get_size(), rect, self.corner):
            src = src.clip(bounds)
            if src.width <= 0 or src.height <= 0:
                continue
            if target.width <= 0 or target.height <= 0:
                continue
            part = self.image.subsurface(src)
            if part.get_size() != target.size:
                part = pygame.transform.scale(part, target.size)
            dst.blit(part, target.topleft)


class NineSliceLoadError(Exception):
    """Raised when a frame image cannot be loaded; carries a usable placeholder."""

    def __init__(self, path: str, placeholder: NineSlice) -> None:
        super().__init__(f"cannot load nine-slice image {path!r}")
        self.path = path
        self.placeholder = placeholder


def load_nine_slice(path: Union[str, os.PathLike], corner: int) -> NineSlice:
    """Load an image as a nine-slice frame.

    On failure, raises NineSliceLoadError whose ``placeholder`` is a solid
    magenta frame of twice the corner size.
    """
    try:
        image = pygame.image.load(os.fspath(path))
    except (OSError, pygame.error) as exc:
        placeholder = pygame.Surface((corner * 2, corner * 2))
        placeholder.fill(PLACEHOLDER_COLOR)
        raise NineSliceLoadError(os.fspath(path), NineSlice(placeholder, corner)) from exc
    return NineSlice(image, corner)