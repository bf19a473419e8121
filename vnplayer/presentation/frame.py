"""
Presenter protocol and double-buffered frame

A Frame is an immutable snapshot of everything on screen. The FrameBuffer folds
a whole batch of render instructions into a back frame first and only then
pushes the changed fields to the presenter, so a presenter never shows half of
a line (for example a new speaker next to the previous line's sprites).
"""

from functools import partial
from typing import Any, Callable, Iterable, List, Optional, Protocol, Tuple

from pydantic import BaseModel, Field

from vnplayer.schemas.render import (
    ChoiceOption,
    DisableAdvance,
    Instruction,
    ResetStage,
    SetBackground,
    SetDialogueText,
    SetSpeakerName,
    SetSprite,
    ShowChoices,
    ShowGameOverUnknownScene,
    ShowLoadError,
    ShowNextControl,
    ShowRestartOption,
    ShowTheEnd,
    SpriteFocus,
)
from vnplayer.utils.logger import get_logger

logger = get_logger(__name__)

THE_END_TITLE = "The End"
THE_END_TEXT = "Thank you for playing this game!"
GAME_OVER_TITLE = "Game Over"
LOAD_ERROR_TITLE = "Error"


class Presenter(Protocol):
    """Collaborator that puts a frame on screen"""

    def set_speaker_name(self, name: str) -> None: ...

    def set_dialogue_text(self, text: str) -> None: ...

    def set_sprite_left(self, image: Optional[str], focus: SpriteFocus) -> None: ...

    def set_sprite_right(self, image: Optional[str], focus: SpriteFocus) -> None: ...

    def set_background(self, image: Optional[str]) -> None: ...

    def show_next_control(self, visible: bool) -> None: ...

    def show_choices(self, choices: List[Tuple[str, Callable[[], Any]]]) -> None: ...

    def show_restart_control(self, visible: bool) -> None: ...

    def disable_advance(self, disabled: bool) -> None: ...


class SpriteView(BaseModel):
    image: Optional[str] = None
    focus: SpriteFocus = "none"

    class Config:
        frozen = True

    @property
    def visible(self) -> bool:
        return self.image is not None


class Frame(BaseModel):
    """Complete snapshot of the presented screen"""

    speaker: str = ""
    text: str = ""
    left: SpriteView = Field(default_factory=SpriteView)
    right: SpriteView = Field(default_factory=SpriteView)
    background: Optional[str] = None
    choices: List[ChoiceOption] = Field(default_factory=list)
    next_visible: bool = False
    restart_visible: bool = False
    advance_disabled: bool = False

    class Config:
        frozen = True

    def apply(self, batch: Iterable[Instruction]) -> "Frame":
        """Return a new frame with every instruction of the batch applied"""
        frame = self
        for instruction in batch:
            frame = frame._apply_one(instruction)
        return frame

    def _apply_one(self, instruction: Instruction) -> "Frame":
        if isinstance(instruction, SetSpeakerName):
            return self.model_copy(update={"speaker": instruction.name})
        if isinstance(instruction, SetDialogueText):
            return self.model_copy(update={"text": instruction.text})
        if isinstance(instruction, SetSprite):
            view = SpriteView(image=instruction.image, focus=instruction.focus)
            return self.model_copy(update={instruction.slot: view})
        if isinstance(instruction, SetBackground):
            return self.model_copy(update={"background": instruction.image})
        if isinstance(instruction, ShowChoices):
            return self.model_copy(update={"choices": list(instruction.options)})
        if isinstance(instruction, ShowNextControl):
            return self.model_copy(update={"next_visible": instruction.visible})
        if isinstance(instruction, ShowRestartOption):
            return self.model_copy(update={"restart_visible": instruction.visible})
        if isinstance(instruction, DisableAdvance):
            return self.model_copy(update={"advance_disabled": instruction.disabled})
        if isinstance(instruction, ShowTheEnd):
            return self.model_copy(update={"speaker": THE_END_TITLE, "text": THE_END_TEXT})
        if isinstance(instruction, ShowGameOverUnknownScene):
            return self.model_copy(
                update={
                    "speaker": GAME_OVER_TITLE,
                    "text": f"The scene ID '{instruction.scene_id}' was not found.",
                }
            )
        if isinstance(instruction, ShowLoadError):
            return self.model_copy(
                update={
                    "speaker": LOAD_ERROR_TITLE,
                    "text": instruction.message,
                    "choices": [],
                    "next_visible": False,
                    "advance_disabled": True,
                }
            )
        if isinstance(instruction, ResetStage):
            return Frame(advance_disabled=self.advance_disabled)
        raise TypeError(f"Unsupported render instruction: {instruction!r}")


class FrameBuffer:
    """
    Double buffer between the story engine and a presenter

    Args:
        presenter: Receives the changed parts of each committed frame
        on_choose: Called with the option index when a choice is selected
    """

    def __init__(self, presenter: Presenter, on_choose: Callable[[int], Any]):
        self.presenter = presenter
        self.on_choose = on_choose
        self.front: Optional[Frame] = None

    def commit(self, batch: Iterable[Instruction]) -> Frame:
        batch = list(batch)
        back = (self.front or Frame()).apply(batch)
        self._push(self.front, back)
        self.front = back
        logger.debug(f"Committed frame from {len(batch)} instructions")
        return back

    def _push(self, old: Optional[Frame], new: Frame) -> None:
        def changed(field: str) -> bool:
            return old is None or getattr(old, field) != getattr(new, field)

        p = self.presenter
        if changed("background"):
            p.set_background(new.background)
        if changed("left"):
            p.set_sprite_left(new.left.image, new.left.focus)
        if changed("right"):
            p.set_sprite_right(new.right.image, new.right.focus)
        if changed("speaker"):
            p.set_speaker_name(new.speaker)
        if changed("text"):
            p.set_dialogue_text(new.text)
        if changed("choices"):
            p.show_choices(
                [(option.text, partial(self.on_choose, option.index)) for option in new.choices]
            )
        if changed("next_visible"):
            p.show_next_control(new.next_visible)
        if changed("restart_visible"):
            p.show_restart_control(new.restart_visible)
        if changed("advance_disabled"):
            p.disable_advance(new.advance_disabled)
