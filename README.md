# novelstage

A small visual novel engine built on pygame. A story is a JSON list of
pages; each page may set the stage (background and character sprites, with
optional fades), show a line of dialogue, play a sound or looping music, and
offer choices that jump to other pages. A backlog keeps the lines of dialogue
seen so far.

## Installing

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Running

From a directory holding an `assets/` folder:

    novelstage --width 640 --height 480

`-width` and `-height` are accepted as well; both default to 640×480. The
command reads `assets/scripts/demo.json` and the font
`assets/fonts/DotGothic16-Regular.ttf`, opens a window titled
"Novel Game Demo" and runs at 60 frames per second until the window is
closed. The dialogue frame comes from `assets/ui/9slice30.png`, backgrounds
from `assets/bg/`, sprites from `assets/sprites/` and sounds from `assets/`
itself. A missing or unreadable script or font, or a script with no pages,
prints a message and exits with status 1. A missing frame, background or
sprite is logged and drawn as a magenta placeholder; a sound that cannot be
loaded is logged and skipped.

### Controls

- Space, Enter, left click, a touch, or the gamepad's bottom face button: next page
- Backspace or Left arrow: previous page
- On a page with choices, advancing opens the choice list: Up/Down to pick,
  Enter to confirm, Backspace/Left to go back a page
- B: show or hide the backlog; Up/Down scroll it

## Script format

```json
[
  {
    "stage": {
      "bg": "room.png",
      "bgFade": 30,
      "sprites": [{"id": "a", "file": "alice.png", "pos": "left"}],
      "spriteFade": 15
    },
    "dialogue": {"speaker": "Alice", "text": "Hello,\n<b>world</b>!"},
    "audio": {"file": "theme.mp3", "loop": true},
    "choices": [{"text": "Go on", "page": 1}]
  }
]
```

Every key is optional. Sprite positions are `left`, `center` and `right`;
anything else sits at the left edge. Fades are counted in frames; a stage
without a `bg` keeps the current background. Markup tags in dialogue are
removed and newlines become spaces. A choice whose `page` is out of range
does nothing. Looping audio replaces the music that was playing.

## Using it as a library

```python
from novelstage.script import load_scripts, parse_dialogue

pages = load_scripts("assets/scripts/demo.json")
print(parse_dialogue("<p>Hello\n<b>World</b></p>"))  # Hello World
```

- `novelstage.script`: the page dataclasses (`Page`, `StageInfo`,
  `SpriteInfo`, `DialogueInfo`, `AudioInfo`, `ChoiceInfo`), `parse_pages`
  for a JSON string or bytes, `load_scripts` for a file, and `ScriptError`
  for malformed documents.
- `novelstage.nineslice`: `NineSlice`, `load_nine_slice` (raising
  `NineSliceLoadError`, which carries a placeholder frame) and
  `nine_slice_parts`, which gives the source and destination rectangles.
- `novelstage.dialogue.DialogueBox`: the dialogue area and speaker name tag.
- `novelstage.ui.load_ui`: loads the interface font into a `UI`.
- `novelstage.renderer.StageRenderer`: draws backgrounds and sprites with
  cross-fades; `sprites_equal` and `sprite_x` are its helpers.
- `novelstage.game.Game`: ties these together. Each frame, build an
  `InputState` with `InputState.from_events(pygame.event.get())`, pass it to
  `Game.update`, then call `Game.draw` on the screen surface. `Game` accepts
  `assets_dir` and `audio_enabled=False` for running without sound.
- `novelstage.app.main`: the `novelstage` command.

## What it does not do

There is no saving or loading of progress, no settings screen, and the
command always plays `assets/scripts/demo.json`; other scripts are run by
building a `Game` from code.