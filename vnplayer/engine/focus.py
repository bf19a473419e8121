"""
Sprite visibility and focus policy

Pure functions: given a dialogue line they decide which sprite slots are shown
and which one is highlighted as speaking.
"""

from typing import Optional, Tuple

from vnplayer.schemas.render import SetSprite, SpriteFocus, SpriteSlot
from vnplayer.schemas.scene import DialogueLine

NARRATOR = "Narrator"


def resolve_focus(
    character_name: str,
    talking_slot: Optional[SpriteSlot],
    left_visible: bool,
    right_visible: bool,
    narrator_name: str = NARRATOR,
) -> Tuple[SpriteFocus, SpriteFocus]:
    """
    Compute the (left, right) focus for one line

    Hidden slots are always ``none``. When the narrator speaks, or the talking
    tag does not point at a visible slot, every visible slot is dimmed.

    Args:
        character_name: Speaker of the line
        talking_slot: Slot named by the line's talking tag, if any
        left_visible: Whether the left slot has an image
        right_visible: Whether the right slot has an image
        narrator_name: Speaker name that never takes focus

    Returns:
        Tuple of focus values for the left and right slots
    """
    talking = talking_slot
    if character_name == narrator_name:
        talking = None
    elif talking == "left" and not left_visible:
        talking = None
    elif talking == "right" and not right_visible:
        talking = None

    def focus_for(slot: str, visible: bool) -> SpriteFocus:
        if not visible:
            return "none"
        return "active" if talking == slot else "inactive"

    return focus_for("left", left_visible), focus_for("right", right_visible)


def sprite_instructions(
    line: DialogueLine, narrator_name: str = NARRATOR
) -> Tuple[SetSprite, SetSprite]:
    """Build the left and right sprite instructions for a line"""
    left_focus, right_focus = resolve_focus(
        line.character_name,
        line.talking_slot,
        left_visible=line.character1_image is not None,
        right_visible=line.character2_image is not None,
        narrator_name=narrator_name,
    )
    return (
        SetSprite(slot="left", image=line.character1_image, focus=left_focus),
        SetSprite(slot="right", image=line.character2_image, focus=right_focus),
    )
