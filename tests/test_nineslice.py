import pygame
import pytest

from novelstage.nineslice import (
    PLACEHOLDER_COLOR,
    NineSlice,
    NineSliceLoadError,
    load_nine_slice,
    nine_slice_parts,
)

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
GREEN = (0, 255, 0, 255)


def _frame_image(size, corner):
    image = pygame.Surface((size, size))
    image.fill(RED)
    image.fill(BLUE, pygame.Rect(0, 0, corner, corner))
    image.fill(GREEN, pygame.Rect(size - corner, size - corner, corner, corner))
    return image


def test_parts_tile_the_destination():
    rect = pygame.Rect(5, 7, 200, 100)
    parts = nine_slice_parts((90, 90), rect, 30)
    assert len(parts) == 9
    assert sum(dst.width * dst.height for _, dst in parts) == rect.width * rect.height
    union = parts[0][1].unionall([dst for _, dst in parts[1:]])
    assert union == rect


def test_parts_cover_the_source():
    parts = nine_slice_parts((90, 60), (0, 0, 300, 200), 20)
    assert sum(src.width * src.height for src, _ in parts) == 90 * 60
    assert all(pygame.Rect(0, 0, 90, 60).contains(src) for src, _ in parts)


def test_corners_keep_their_size():
    parts = nine_slice_parts((90, 90), (0, 0, 400, 300), 30)
    for src, dst in parts[:4]:
        assert src.size == dst.size == (30, 30)


def test_small_rect_maps_whole_image():
    rect = pygame.Rect(10, 10, 40, 100)
    parts = nine_slice_parts((90, 90), rect, 30)
    assert parts == [(pygame.Rect(0, 0, 90, 90), rect)]


def test_draw_preserves_corners_and_fills_centre():
    slice_ = NineSlice(_frame_image(6, 2), 2)
    dst = pygame.Surface((20, 10))
    dst.fill((0, 0, 0))
    slice_.draw(dst, pygame.Rect(0, 0, 20, 10))
    assert dst.get_at((0, 0)) == BLUE
    assert dst.get_at((1, 1)) == BLUE
    assert dst.get_at((19, 9)) == GREEN
    assert dst.get_at((10, 5)) == RED
    assert dst.get_at((19, 0)) == RED


def test_draw_small_rect_scales_whole_image():
    slice_ = NineSlice(_frame_image(6, 2), 2)
    dst = pygame.Surface((10, 10))
    dst.fill((0, 0, 0))
    slice_.draw(dst, pygame.Rect(2, 2, 3, 3))
    assert dst.get_at((2, 2)) == BLUE
    assert dst.get_at((4, 4)) == GREEN
    assert dst.get_at((0, 0)) == (0, 0, 0, 255)


def test_draw_without_image_leaves_target_untouched():
    dst = pygame.Surface((8, 8))
    dst.fill(RED)
    NineSlice(None, 2).draw(dst, pygame.Rect(0, 0, 8, 8))
    assert dst.get_at((4, 4)) == RED


def test_load_round_trip(tmp_path):
    path = tmp_path / "frame.bmp"
    pygame.image.save(_frame_image(12, 4), str(path))
    loaded = load_nine_slice(path, 4)
    assert loaded.corner == 4
    assert loaded.image.get_size() == (12, 12)
    assert loaded.image.get_at((0, 0)) == BLUE


def test_load_missing_gives_placeholder(tmp_path):
    with pytest.raises(NineSliceLoadError) as info:
        load_nine_slice(tmp_path / "missing.png", 30)
    placeholder = info.value.placeholder
    assert placeholder.corner == 30
    assert placeholder.image.get_size() == (60, 60)
    assert tuple(placeholder.image.get_at((0, 0))) == PLACEHOLDER_COLOR