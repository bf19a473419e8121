"""
Schemas for scene data and render instructions
"""

from .render import (
    ChoiceOption,
    DisableAdvance,
    Instruction,
    RenderInstruction,
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
    SpriteSlot,
)
from .scene import Choice, DialogueLine, Scene
from .validation import SCENE_DATA_SCHEMA, parse_scene_data

__all__ = [
    # Scene graph
    "Scene",
    "DialogueLine",
    "Choice",
    # Render instructions
    "RenderInstruction",
    "Instruction",
    "SetSpeakerName",
    "SetDialogueText",
    "SetSprite",
    "SetBackground",
    "ChoiceOption",
    "ShowChoices",
    "ShowNextControl",
    "ShowRestartOption",
    "DisableAdvance",
    "ShowTheEnd",
    "ShowGameOverUnknownScene",
    "ShowLoadError",
    "ResetStage",
    "SpriteSlot",
    "SpriteFocus",
    # Validation
    "SCENE_DATA_SCHEMA",
    "parse_scene_data",
]
