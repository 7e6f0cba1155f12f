import pygame
import pytest

from novelstage.nineslice import PLACEHOLDER_COLOR
from novelstage.renderer import StageRenderer, sprite_x, sprites_equal
from novelstage.script import SpriteInfo, StageInfo

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
GREEN = (0, 255, 0, 255)
BLACK = (0, 0, 0, 255)

W, H = 100, 50


def _save(path, color, size):
    path.parent.mkdir(parents=True, exist_ok=True)
    surface = pygame.Surface(size)
    surface.fill(color)
    pygame.image.save(surface, str(path))


@pytest.fixture
def assets(tmp_path):
    _save(tmp_path / "bg" / "red.png", RED, (4, 4))
    _save(tmp_path / "bg" / "blue.png", BLUE, (4, 4))
    _save(tmp_path / "sprites" / "green.png", GREEN, (10, 10))
    _save(tmp_path / "sprites" / "blue.png", BLUE, (10, 10))
    return tmp_path


@pytest.fixture
def renderer(assets):
    return StageRenderer(W, H, assets_dir=assets)


@pytest.fixture
def screen():
    return pygame.Surface((W, H))


def test_sprites_equal_ignores_id():
    a = [SpriteInfo(id="a", file="x.png", pos="left")]
    b = [SpriteInfo(id="b", file="x.png", pos="left")]
    assert sprites_equal(a, b) is True


def test_sprites_equal_detects_differences():
    a = [SpriteInfo(file="x.png", pos="left")]
    assert sprites_equal(a, [SpriteInfo(file="x.png", pos="right")]) is False
    assert sprites_equal(a, [SpriteInfo(file="y.png", pos="left")]) is False
    assert sprites_equal(a, []) is False
    assert sprites_equal([], []) is True


def test_sprite_x_unknown_position_is_zero():
    assert sprite_x("nowhere", W, 10) == 0
    assert sprite_x("", W, 10) == 0


def test_sprite_x_anchors_are_ordered_and_centered():
    left = sprite_x("left", W, 10)
    center = sprite_x("center", W, 10)
    right = sprite_x("right", W, 10)
    assert left < center < right
    assert center + 5 == W / 2


def test_empty_stage_draws_black(renderer, screen):
    screen.fill(RED)
    renderer.draw(screen, None)
    assert screen.get_at((50, 25)) == BLACK


def test_background_without_fade_fills_screen(renderer, screen):
    renderer.draw(screen, StageInfo(bg="red.png"))
    assert renderer.curr_bg == "red.png"
    assert screen.get_at((0, 0)) == RED
    assert screen.get_at((W - 1, H - 1)) == RED


def test_missing_background_uses_placeholder(renderer, screen):
    renderer.draw(screen, StageInfo(bg="missing.png"))
    assert screen.get_at((10, 10)) == PLACEHOLDER_COLOR


def test_background_fade_progresses(renderer, screen):
    renderer.draw(screen, StageInfo(bg="red.png"))
    stage = StageInfo(bg="blue.png", bg_fade=2)

    renderer.draw(screen, stage)
    assert renderer.prev_bg == "red.png"
    assert renderer.curr_bg == "blue.png"
    assert screen.get_at((10, 10)) == RED
    assert renderer.bg_fade_counter == 1

    renderer.draw(screen, stage)
    assert renderer.bg_fade_counter == 2

    renderer.draw(screen, stage)
    assert renderer.bg_fade_counter == 2
    assert screen.get_at((10, 10)) == BLUE


def test_same_background_does_not_restart_fade(renderer, screen):
    stage = StageInfo(bg="blue.png", bg_fade=3)
    renderer.draw(screen, stage)
    renderer.draw(screen, stage)
    assert renderer.bg_fade_counter == 2
    assert renderer.prev_bg == ""


def test_empty_bg_keeps_current(renderer, screen):
    renderer.draw(screen, StageInfo(bg="red.png"))
    renderer.draw(screen, StageInfo(bg=""))
    assert renderer.curr_bg == "red.png"
    assert screen.get_at((5, 5)) == RED


def test_sprite_drawn_at_bottom_of_anchor(renderer, screen):
    sprites = [SpriteInfo(file="green.png", pos="left")]
    renderer.draw(screen, StageInfo(sprites=sprites))
    x = int(sprite_x("left", W, 10))
    assert screen.get_at((x + 5, H - 5)) == GREEN
    assert screen.get_at((x + 5, H - 15)) == BLACK
    assert screen.get_at((x - 5, H - 5)) == BLACK


def test_sprite_fade_swaps_sets(renderer, screen):
    renderer.draw(screen, StageInfo(sprites=[SpriteInfo(file="green.png", pos="left")]))
    stage = StageInfo(sprites=[SpriteInfo(file="blue.png", pos="right")], sprite_fade=1)
    left = int(sprite_x("left", W, 10)) + 5
    right = int(sprite_x("right", W, 10)) + 5

    renderer.draw(screen, stage)
    assert screen.get_at((left, H - 5)) == GREEN
    assert screen.get_at((right, H - 5)) == BLACK

    renderer.draw(screen, stage)
    assert screen.get_at((left, H - 5)) == BLACK
    assert screen.get_at((right, H - 5)) == BLUE


def test_update_stage_copies_sprite_list(renderer):
    sprites = [SpriteInfo(file="green.png", pos="center")]
    renderer.update_stage(StageInfo(sprites=sprites))
    sprites.append(SpriteInfo(file="blue.png", pos="left"))
    assert len(renderer.curr_sprites) == 1
    assert renderer.prev_sprites == []
    assert renderer.sprite_fade_frames == 0
    assert renderer.curr_sprites[0].file == "green.png"