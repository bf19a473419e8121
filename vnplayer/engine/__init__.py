"""
Core engine components for the visual novel player
"""

from .focus import NARRATOR, resolve_focus, sprite_instructions
from .loader import LoadStatus, SceneLoader
from .runner import StoryRunner
from .store import SceneStore
from .story import (
    ChooseOption,
    GoToScene,
    Intent,
    Next,
    Restart,
    StoryEngine,
    StoryPosition,
    StoryState,
)

__all__ = [
    "SceneStore",
    "SceneLoader",
    "LoadStatus",
    "StoryEngine",
    "StoryPosition",
    "StoryState",
    "StoryRunner",
    "Intent",
    "Next",
    "GoToScene",
    "ChooseOption",
    "Restart",
    "NARRATOR",
    "resolve_focus",
    "sprite_instructions",
]
