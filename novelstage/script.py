"""Script model and loader for the visual novel's JSON page files."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from os import PathLike
from typing import Any, Union

_TAG = re.compile(r"<[^>]+>")


class ScriptError(ValueError):
    """Raised when a script document is not valid."""


@dataclass
class SpriteInfo:
    """A character sprite on screen."""

    id: str = ""
    file: str = ""
    pos: str = ""


@dataclass
class StageInfo:
    """Background and sprite placement, with fade lengths in frames."""

    bg: str = ""
    sprites: list[SpriteInfo] = field(default_factory=list)
    bg_fade: int = 0
    sprite_fade: int = 0


@dataclass
class DialogueInfo:
    """Spoken text and the speaker's name."""

    speaker: str = ""
    text: str = ""


@dataclass
class AudioInfo:
    """A sound file to play, optionally looped."""

    file: str = ""
    loop: bool = False


@dataclass
class ChoiceInfo:
    """A selectable option leading to another page."""

    text: str = ""
    page: int = 0


@dataclass
class Page:
    """A single entry of a script."""

    stage: StageInfo | None = None
    dialogue: DialogueInfo | None = None
    audio: AudioInfo | None = None
    choices: list[ChoiceInfo] = field(default_factory=list)
    clean: str = ""


def parse_dialogue(src: str) -> str:
    """Strip markup tags, turn newlines into spaces and trim the result."""
    return _TAG.sub("", src.replace("\n", " ")).strip()


def _get(obj: Any, key: str, kind: type, default: Any, where: str) -> Any:
    """Fetch a field, matching the key case-insensitively, and check its type."""
    if not isinstance(obj, dict):
        raise ScriptError(f"{where}: expected an object, got {obj!r}")
    if key in obj:
        value = obj[key]
    else:
        value = next((v for k, v in obj.items() if k.lower() == key.lower()), None)
    if value is None:
        return default
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ScriptError(f"{where}.{key}: expected {kind.__name__}, got {value!r}")
    return value


def _page(obj: Any, where: str) -> Page:
    page = Page()
    stage = _get(obj, "stage", dict, None, where)
    if stage is not None:
        at = f"{where}.stage"
        page.stage = StageInfo(
            bg=_get(stage, "bg", str, "", at),
            sprites=[
                SpriteInfo(
                    id=_get(item, "id", str, "", f"{at}.sprites[{n}]"),
                    file=_get(item, "file", str, "", f"{at}.sprites[{n}]"),
                    pos=_get(item, "pos", str, "", f"{at}.sprites[{n}]"),
                )
                for n, item in enumerate(_get(stage, "sprites", list, [], at))
            ],
            bg_fade=_get(stage, "bgFade", int, 0, at),
            sprite_fade=_get(stage, "spriteFade", int, 0, at),
        )
    dialogue = _get(obj, "dialogue", dict, None, where)
    if dialogue is not None:
        at = f"{where}.dialogue"
        page.dialogue = DialogueInfo(
            speaker=_get(dialogue, "speaker", str, "", at),
            text=_get(dialogue, "text", str, "", at),
        )
        page.clean = parse_dialogue(page.dialogue.text)
    audio = _get(obj, "audio", dict, None, where)
    if audio is not None:
        at = f"{where}.audio"
        page.audio = AudioInfo(
            file=_get(audio, "file", str, "", at),
            loop=_get(audio, "loop", bool, False, at),
        )
    page.choices = [
        ChoiceInfo(
            text=_get(item, "text", str, "", f"{where}.choices[{n}]"),
            page=_get(item, "page", int, 0, f"{where}.choices[{n}]"),
        )
        for n, item in enumerate(_get(obj, "choices", list, [], where))
    ]
    return page


def parse_pages(data: Union[str, bytes, bytearray]) -> list[Page]:
    """Decode a JSON array of pages."""
    try:
        document = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ScriptError(f"invalid JSON: {exc}") from exc
    if document is None:
        return []
    if not isinstance(document, list):
        raise ScriptError("script must be a JSON array of pages")
    return [_page(item, f"pages[{n}]") for n, item in enumerate(document)]


def load_scripts(path: Union[str, PathLike]) -> list[Page]:
    """Read a JSON script file and return its pages."""
    with open(path, "rb") as handle:
        return parse_pages(handle.read())