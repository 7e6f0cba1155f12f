import os

import pygame
import pytest

from novelstage.ui import load_ui


def _default_font_path():
    return os.path.join(os.path.dirname(pygame.__file__), pygame.font.get_default_font())


def test_loads_font():
    ui = load_ui(_default_font_path(), 22)
    assert ui.font.get_height() > 0
    width, height = ui.font.size("hello")
    assert width > 0 and height > 0


def test_larger_size_gives_taller_font():
    small = load_ui(_default_font_path(), 12)
    large = load_ui(_default_font_path(), 40)
    assert large.font.get_height() > small.font.get_height()


def test_missing_font_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_ui(tmp_path / "missing.ttf", 22)


def test_invalid_font_raises(tmp_path):
    path = tmp_path / "broken.ttf"
    path.write_bytes(b"this is not a font")
    with pytest.raises(ValueError):
        load_ui(path, 22)