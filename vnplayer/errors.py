"""
Exception taxonomy for the story player
"""

from typing import Optional


class StoryError(Exception):
    """Base class for every error raised by the player"""


class DataError(StoryError, ValueError):
    """Scene data is malformed or inconsistent"""


class LoadError(StoryError):
    """Fetching or parsing the scene data failed"""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class UnknownSceneError(StoryError, KeyError):
    """A scene identifier does not resolve in the scene store"""

    def __init__(self, scene_id: str):
        super().__init__(scene_id)
        self.scene_id = scene_id

    def __str__(self) -> str:
        return f"The scene ID '{self.scene_id}' was not found."


class InvalidChoiceIndex(StoryError, IndexError):
    """A choice was requested that the current line does not offer"""

    def __init__(self, index: int, available: int):
        if available:
            message = f"Choice index {index} out of range (0..{available - 1})"
        else:
            message = f"Choice index {index} requested but no choice is pending"
        super().__init__(message)
        self.index = index
        self.available = available
