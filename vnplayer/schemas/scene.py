"""
Scene graph schema definitions

Field aliases mirror the camelCase keys of the scene data file, so records can
be parsed straight from JSON while Python code uses snake_case names.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, validator

# currentlyTalking tags and the sprite slot each one selects
TALKING_SLOTS = {"character1": "left", "character2": "right"}


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class Choice(BaseModel):
    """Player-selectable branch to another scene"""

    choice_text: str = Field(..., alias="choiceText", description="Button label")
    next_scene_id: str = Field(
        ..., alias="nextSceneId", description="Scene entered when chosen"
    )

    class Config:
        frozen = True
        populate_by_name = True


class DialogueLine(BaseModel):
    """One line of speech or narration plus its sprite state"""

    character_name: str = Field(..., alias="characterName")
    text: str = Field(..., description="Dialogue text")
    character1_image: Optional[str] = Field(
        None, alias="character1Image", description="Left sprite image reference"
    )
    character2_image: Optional[str] = Field(
        None, alias="character2Image", description="Right sprite image reference"
    )
    currently_talking: Optional[str] = Field(
        None,
        alias="currentlyTalking",
        description="character1, character2, or absent",
    )
    choices: List[Choice] = Field(default_factory=list)

    class Config:
        frozen = True
        populate_by_name = True

    @validator("character1_image", "character2_image", "currently_talking", pre=True)
    def normalize_blank(cls, v):
        return _blank_to_none(v)

    @validator("choices", pre=True)
    def validate_choices(cls, v):
        return [] if v is None else v

    @property
    def talking_slot(self) -> Optional[str]:
        """Sprite slot named by the currently-talking tag, if any"""
        return TALKING_SLOTS.get(self.currently_talking or "")

    @property
    def has_choices(self) -> bool:
        return bool(self.choices)


class Scene(BaseModel):
    """Named unit of the narrative graph"""

    scene_id: str = Field(..., alias="sceneId", description="Unique scene identifier")
    dialogue: List[DialogueLine] = Field(..., description="Ordered dialogue lines")
    next_scene_id: Optional[str] = Field(
        None,
        alias="nextSceneId",
        description="Scene entered automatically once dialogue is exhausted",
    )
    background_image: Optional[str] = Field(None, alias="backgroundImage")

    class Config:
        frozen = True
        populate_by_name = True

    @validator("scene_id")
    def validate_scene_id(cls, v):
        if not v.strip():
            raise ValueError("sceneId must be a non-empty string")
        return v

    # Absent and empty nextSceneId both mean "no default scene"
    @validator("next_scene_id", "background_image", pre=True)
    def normalize_blank(cls, v):
        return _blank_to_none(v)
