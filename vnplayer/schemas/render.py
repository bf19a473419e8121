"""
Render instruction definitions

The story engine never touches the presentation layer directly. Each intent
produces an ordered batch of these instructions which a presenter applies.
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

SpriteSlot = Literal["left", "right"]
SpriteFocus = Literal["none", "active", "inactive"]


class RenderInstruction(BaseModel):
    """Base class for all render instructions"""

    class Config:
        frozen = True


class SetSpeakerName(RenderInstruction):
    type: Literal["set_speaker_name"] = "set_speaker_name"
    name: str


class SetDialogueText(RenderInstruction):
    type: Literal["set_dialogue_text"] = "set_dialogue_text"
    text: str


class SetSprite(RenderInstruction):
    """Show or hide the sprite in one slot

    A hidden sprite has no image and is fully transparent; its focus is always
    ``none``.
    """

    type: Literal["set_sprite"] = "set_sprite"
    slot: SpriteSlot
    image: Optional[str] = None
    focus: SpriteFocus = "none"


class SetBackground(RenderInstruction):
    type: Literal["set_background"] = "set_background"
    image: Optional[str] = None


class ChoiceOption(BaseModel):
    """Choice entry as offered to the player"""

    index: int = Field(..., ge=0, description="Index to pass back with ChooseOption")
    text: str
    target_scene_id: str

    class Config:
        frozen = True


class ShowChoices(RenderInstruction):
    """Replace the choice buttons; an empty list hides them"""

    type: Literal["show_choices"] = "show_choices"
    options: List[ChoiceOption] = Field(default_factory=list)


class ShowNextControl(RenderInstruction):
    type: Literal["show_next_control"] = "show_next_control"
    visible: bool = True


class ShowRestartOption(RenderInstruction):
    type: Literal["show_restart_option"] = "show_restart_option"
    visible: bool = True


class DisableAdvance(RenderInstruction):
    type: Literal["disable_advance"] = "disable_advance"
    disabled: bool = True


class ShowTheEnd(RenderInstruction):
    """The story reached a scene with no further dialogue and no next scene"""

    type: Literal["show_the_end"] = "show_the_end"


class ShowGameOverUnknownScene(RenderInstruction):
    """A transition referenced a scene that does not exist"""

    type: Literal["show_game_over_unknown_scene"] = "show_game_over_unknown_scene"
    scene_id: str


class ShowLoadError(RenderInstruction):
    type: Literal["show_load_error"] = "show_load_error"
    message: str = "Failed to load story data. Check console for details."


class ResetStage(RenderInstruction):
    """Clear background, sprites and terminal captions before a restart"""

    type: Literal["reset_stage"] = "reset_stage"


Instruction = Union[
    SetSpeakerName,
    SetDialogueText,
    SetSprite,
    SetBackground,
    ShowChoices,
    ShowNextControl,
    ShowRestartOption,
    DisableAdvance,
    ShowTheEnd,
    ShowGameOverUnknownScene,
    ShowLoadError,
    ResetStage,
]
