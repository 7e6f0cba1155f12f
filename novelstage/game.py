"""Runtime state of the visual novel: paging, choices, backlog and audio."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import pygame

from novelstage.dialogue import DialogueBox
from novelstage.nineslice import NineSlice, NineSliceLoadError, load_nine_slice
from novelstage.renderer import StageRenderer
from novelstage.script import AudioInfo, DialogueInfo, Page, parse_dialogue
from novelstage.ui import UI

__all__ = [
    "DialogueEntry",
    "InputState",
    "Game",
    "FRAME_IMAGE",
    "FRAME_CORNER",
    "LINE_HEIGHT",
    "CHOICE_COLOR",
    "SELECTED_CHOICE_COLOR",
]

log = logging.getLogger(__name__)

FRAME_IMAGE = Path("ui", "9slice30.png")
FRAME_CORNER = 30
LINE_HEIGHT = 24
AUDIO_FREQUENCY = 48000
BACKLOG_SHADE = (0, 0, 0, 220)
TEXT_COLOR = (255, 255, 255)
CHOICE_COLOR = (255, 255, 255)
SELECTED_CHOICE_COLOR = (255, 255, 0)

_GAMEPAD_BOTTOM_BUTTON = 0


@dataclass
class DialogueEntry:
    """A line shown in the backlog."""

    speaker: str
    text: str


@dataclass(frozen=True)
class InputState:
    """The actions requested during one frame."""

    toggle_backlog: bool = False
    up: bool = False
    down: bool = False
    back: bool = False
    confirm: bool = False
    advance: bool = False

    @classmethod
    def from_events(cls, events: Iterable[pygame.event.Event]) -> "InputState":
        """Collect the actions from a frame's pygame events."""
        flags = dict.fromkeys(
            ("toggle_backlog", "up", "down", "back", "confirm", "advance"), False
        )
        for event in events:
            if event.type == pygame.KEYDOWN:
                key = event.key
                if key == pygame.K_b:
                    flags["toggle_backlog"] = True
                elif key == pygame.K_UP:
                    flags["up"] = True
                elif key == pygame.K_DOWN:
                    flags["down"] = True
                elif key in (pygame.K_BACKSPACE, pygame.K_LEFT):
                    flags["back"] = True
                elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                    flags["confirm"] = True
                    flags["advance"] = True
                elif key == pygame.K_SPACE:
                    flags["advance"] = True
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if getattr(event, "button", None) == 1:
                    flags["advance"] = True
            elif event.type == pygame.FINGERDOWN:
                flags["advance"] = True
            elif event.type == pygame.JOYBUTTONDOWN:
                if getattr(event, "button", None) == _GAMEPAD_BOTTOM_BUTTON:
                    flags["advance"] = True
            elif event.type == pygame.CONTROLLERBUTTONDOWN:
                if getattr(event, "button", None) == pygame.CONTROLLER_BUTTON_A:
                    flags["advance"] = True
        return cls(**flags)


class Game:
    """All runtime state of the visual novel."""

    def __init__(
        self,
        ui: UI | None,
        pages: Sequence[Page],
        width: int,
        height: int,
        assets_dir: Union[str, os.PathLike] = "assets",
        audio_enabled: bool = True,
    ) -> None:
        if not pages:
            raise ValueError("script has no pages")
        self.ui = ui
        self.pages = list(pages)
        self.index = 0
        self.width = width
        self.height = height
        self.assets_dir = Path(assets_dir)
        self.stage = StageRenderer(width, height, self.assets_dir)

        frame: NineSlice | None
        try:
            frame = load_nine_slice(self.assets_dir / FRAME_IMAGE, FRAME_CORNER)
        except NineSliceLoadError as exc:
            log.warning("nine-slice load error: %s", exc)
            frame = exc.placeholder
        top = height * 2 // 3
        self.dialogue_box = DialogueBox(
            pygame.Rect(0, top, width, height - top), frame=frame, name_frame=frame
        )

        self.backlog: list[DialogueEntry] = []
        self.show_backlog = False
        self.backlog_offset = 0
        self.choosing = False
        self.choice_index = 0

        self._audio_enabled = audio_enabled
        self._sounds: dict[str, pygame.mixer.Sound] = {}
        self._bgm: pygame.mixer.Sound | None = None
        self._bgm_file = ""

        first = self.pages[0]
        self._play_audio(first.audio)
        self._add_to_backlog(first.dialogue)

    @property
    def page(self) -> Page:
        """The page currently shown."""
        return self.pages[self.index]

    def _add_to_backlog(self, dialogue: DialogueInfo | None) -> None:
        if dialogue is None:
            return
        self.backlog.append(DialogueEntry(dialogue.speaker, parse_dialogue(dialogue.text)))

    def _enter_page(self, index: int) -> None:
        self.index = index
        self._play_audio(self.page.audio)
        self._add_to_backlog(self.page.dialogue)

    def next_page(self) -> None:
        """Move to the following page, unless already on the last one."""
        if self.index >= len(self.pages) - 1:
            return
        self._enter_page(self.index + 1)

    def prev_page(self) -> None:
        """Move back one page, unless already on the first one."""
        if self.index <= 0:
            return
        self.index -= 1
        self._play_audio(self.page.audio)

    def _update_backlog(self, inputs: InputState) -> bool:
        if inputs.toggle_backlog:
            self.show_backlog = not self.show_backlog
            return True
        if not self.show_backlog:
            return False
        if inputs.up and self.backlog_offset < len(self.backlog) - 1:
            self.backlog_offset += 1
        if inputs.down and self.backlog_offset > 0:
            self.backlog_offset -= 1
        return True

    def _update_choice_selection(self, inputs: InputState) -> bool:
        if not self.choosing:
            return False
        choices = self.page.choices
        if not choices:
            self.choosing = False
            return True
        if inputs.back:
            self.prev_page()
            self.choosing = False
            return True
        if inputs.up and self.choice_index > 0:
            self.choice_index -= 1
        if inputs.down and self.choice_index < len(choices) - 1:
            self.choice_index += 1
        if inputs.confirm:
            dest = choices[self.choice_index].page
            if 0 <= dest < len(self.pages):
                self._enter_page(dest)
            self.choosing = False
        return True

    def _handle_page_input(self, inputs: InputState) -> None:
        if inputs.back:
            self.prev_page()
        if not inputs.advance:
            return
        if self.page.choices:
            self.choosing = True
            self.choice_index = 0
            return
        self.next_page()

    def update(self, inputs: InputState) -> None:
        """Advance the game state by one frame of input."""
        if self._update_backlog(inputs):
            return
        if self._update_choice_selection(inputs):
            return
        self._handle_page_input(inputs)

    def draw(self, screen: pygame.Surface) -> None:
        """Render the current frame onto ``screen``."""
        page = self.page
        self.stage.draw(screen, page.stage)
        if self.show_backlog:
            self._draw_backlog(screen)
            return
        if page.dialogue is not None:
            self.dialogue_box.draw(screen, self._font(), page.dialogue.speaker, page.clean)
        if self.choosing:
            self._draw_choices(screen)

    def _font(self) -> pygame.font.Font:
        if self.ui is None:
            raise RuntimeError("drawing text needs a UI with a font")
        return self.ui.font

    def _draw_backlog(self, screen: pygame.Surface) -> None:
        shade = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        shade.fill(BACKLOG_SHADE)
        screen.blit(shade, (0, 0))

        font = self._font()
        lines = self.height // LINE_HEIGHT
        start = len(self.backlog) - 1 - self.backlog_offset
        visible = self.backlog[max(0, start - lines + 1) : start + 1]
        for row, entry in enumerate(reversed(visible)):
            label = font.render(f"{entry.speaker}: {entry.text}", True, TEXT_COLOR)
            screen.blit(label, (20, 20 + row * LINE_HEIGHT))

    def _draw_choices(self, screen: pygame.Surface) -> None:
        choices = self.page.choices
        if not choices:
            return
        font = self._font()
        box = self.dialogue_box.rect
        start_y = box.y + 60
        for number, choice in enumerate(choices):
            color = SELECTED_CHOICE_COLOR if number == self.choice_index else CHOICE_COLOR
            label = font.render(f"{number + 1}. {choice.text}", True, color)
            screen.blit(label, (box.x + 40, start_y + number * LINE_HEIGHT))

    def layout(self, width: int, height: int) -> tuple[int, int]:
        """The logical screen size, whatever the window's size."""
        return self.width, self.height

    def _mixer_ready(self) -> bool:
        if not self._audio_enabled:
            return False
        if pygame.mixer.get_init():
            return True
        try:
            pygame.mixer.init(frequency=AUDIO_FREQUENCY)
        except pygame.error as exc:
            log.warning("audio init error: %s", exc)
            self._audio_enabled = False
            return False
        return True

    def _play_audio(self, info: AudioInfo | None) -> None:
        if info is None or not info.file:
            return
        loops = -1 if info.loop else 0

        sound = self._sounds.get(info.file)
        if sound is not None:
            sound.stop()
            if info.loop:
                if self._bgm is not None and self._bgm is not sound:
                    self._bgm.stop()
                    self._bgm_file = info.file
                self._bgm = sound
            sound.play(loops=loops)
            return

        if not self._mixer_ready():
            return
        path = self.assets_dir / info.file
        try:
            sound = pygame.mixer.Sound(os.fspath(path))
        except (pygame.error, OSError) as exc:
            log.warning("audio load error: %s: %s", path, exc)
            return
        self._sounds[info.file] = sound
        if info.loop:
            if self._bgm is not None and self._bgm is not sound:
                self._discard_sound(self._bgm_file)
            self._bgm = sound
            self._bgm_file = info.file
        sound.play(loops=loops)

    def _discard_sound(self, file: str) -> None:
        if not file:
            return
        sound = self._sounds.pop(file, None)
        if sound is not None:
            sound.stop()