"""
Terminal presenter - shows frames as text blocks on stdout
"""

import sys
from typing import Any, Callable, List, Optional, TextIO, Tuple

from vnplayer.schemas.render import SpriteFocus

from .frame import SpriteView

FOCUS_MARKS = {"active": "*", "inactive": "-", "none": " "}


class TerminalPresenter:
    """Presenter that keeps the current screen and prints it on demand"""

    def __init__(self, stream: Optional[TextIO] = None, width: int = 80):
        self.stream = stream or sys.stdout
        self.width = width
        self.speaker = ""
        self.text = ""
        self.background: Optional[str] = None
        self.sprites = {"left": SpriteView(), "right": SpriteView()}
        self.choices: List[Tuple[str, Callable[[], Any]]] = []
        self.next_visible = False
        self.restart_visible = False
        self.advance_disabled = False

    # Presenter protocol

    def set_speaker_name(self, name: str) -> None:
        self.speaker = name

    def set_dialogue_text(self, text: str) -> None:
        self.text = text

    def set_sprite_left(self, image: Optional[str], focus: SpriteFocus) -> None:
        self.sprites["left"] = SpriteView(image=image, focus=focus)

    def set_sprite_right(self, image: Optional[str], focus: SpriteFocus) -> None:
        self.sprites["right"] = SpriteView(image=image, focus=focus)

    def set_background(self, image: Optional[str]) -> None:
        self.background = image

    def show_next_control(self, visible: bool) -> None:
        self.next_visible = visible

    def show_choices(self, choices: List[Tuple[str, Callable[[], Any]]]) -> None:
        self.choices = list(choices)

    def show_restart_control(self, visible: bool) -> None:
        self.restart_visible = visible

    def disable_advance(self, disabled: bool) -> None:
        self.advance_disabled = disabled

    # Terminal helpers

    def select(self, number: int) -> bool:
        """Invoke the 1-based choice ``number``; False if there is no such choice"""
        if not 1 <= number <= len(self.choices):
            return False
        _, on_select = self.choices[number - 1]
        on_select()
        return True

    def render(self) -> str:
        lines = ["=" * self.width]
        if self.background:
            lines.append(f"[background: {self.background}]")
        sprite_parts = []
        for slot in ("left", "right"):
            sprite = self.sprites[slot]
            if sprite.visible:
                sprite_parts.append(f"{FOCUS_MARKS[sprite.focus]}{slot}: {sprite.image}")
        if sprite_parts:
            lines.append("  ".join(sprite_parts))
        lines.append("-" * self.width)
        if self.speaker:
            lines.append(f"{self.speaker}:")
        lines.append(self.text)
        lines.append("-" * self.width)
        for number, (text, _) in enumerate(self.choices, start=1):
            lines.append(f"  {number}) {text}")
        lines.append(self.prompt())
        return "\n".join(lines)

    def prompt(self) -> str:
        if self.advance_disabled:
            return "[q] quit"
        options = []
        if self.next_visible:
            options.append("[Enter] next")
        elif not self.choices:
            options.append("FIN")
        if self.choices:
            options.append(f"[1-{len(self.choices)}] choose")
        if self.restart_visible:
            options.append("[r] restart")
        options.append("[q] quit")
        return "  ".join(options)

    def show(self) -> None:
        print(self.render(), file=self.stream)
