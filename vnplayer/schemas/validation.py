"""
Scene data validation utilities
"""

from collections.abc import Sequence
from typing import Any, Dict, List

from jsonschema import Draft7Validator
from pydantic import ValidationError as PydanticValidationError

from vnplayer.errors import DataError

from .scene import Scene

_OPTIONAL_STRING = {"type": ["string", "null"]}

SCENE_DATA_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["sceneId", "dialogue"],
        "properties": {
            "sceneId": {"type": "string", "minLength": 1},
            "nextSceneId": _OPTIONAL_STRING,
            "backgroundImage": _OPTIONAL_STRING,
            "dialogue": {
                "type": "array",
                "items": {
                    "type": "object",
                    "required": ["characterName", "text"],
                    "properties": {
                        "characterName": {"type": "string"},
                        "text": {"type": "string"},
                        "character1Image": _OPTIONAL_STRING,
                        "character2Image": _OPTIONAL_STRING,
                        "currentlyTalking": _OPTIONAL_STRING,
                        "choices": {
                            "type": ["array", "null"],
                            "items": {
                                "type": "object",
                                "required": ["choiceText", "nextSceneId"],
                                "properties": {
                                    "choiceText": {"type": "string"},
                                    "nextSceneId": {"type": "string"},
                                },
                            },
                        },
                    },
                },
            },
        },
    },
}

_validator = Draft7Validator(SCENE_DATA_SCHEMA)


def validate_json_schema(data: Any) -> None:
    """Validate raw scene data against the scene data JSON schema"""
    errors = sorted(_validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if errors:
        first = errors[0]
        location = "/".join(str(part) for part in first.absolute_path) or "<root>"
        raise DataError(
            f"Scene data failed schema validation at {location}: {first.message}"
            + (f" (and {len(errors) - 1} more)" if len(errors) > 1 else "")
        )


def find_empty_scene_cycle(scenes: List[Scene]) -> List[str]:
    """
    Find a chain of empty-dialogue scenes that loops back onto itself.

    Automatic nextSceneId chaining only passes through scenes that have no
    dialogue, so such a chain would never yield a line to display.

    Returns:
        The scene ids forming the cycle, or an empty list
    """
    by_id = {scene.scene_id: scene for scene in scenes}
    for scene in scenes:
        chain: List[str] = []
        current = scene
        while current is not None and not current.dialogue:
            if current.scene_id in chain:
                return chain[chain.index(current.scene_id):] + [current.scene_id]
            chain.append(current.scene_id)
            current = by_id.get(current.next_scene_id) if current.next_scene_id else None
    return []


def parse_scene_data(raw_data: Any) -> List[Scene]:
    """
    Validate and parse raw scene data into Scene models

    Args:
        raw_data: Decoded JSON payload, expected to be a sequence of scene records

    Returns:
        Parsed scenes in their original order

    Raises:
        DataError: The payload is not a sequence, a record is malformed, scene ids
            are missing or duplicated, or empty scenes chain into a cycle
    """
    if isinstance(raw_data, (str, bytes)) or not isinstance(raw_data, Sequence):
        raise DataError(
            f"Scene data must be a sequence of scene records, got {type(raw_data).__name__}"
        )

    records = list(raw_data)
    validate_json_schema(records)

    scenes: List[Scene] = []
    for position, record in enumerate(records):
        try:
            scenes.append(Scene(**record))
        except PydanticValidationError as e:
            raise DataError(f"Invalid scene record at index {position}: {e}") from e

    seen = set()
    for scene in scenes:
        if scene.scene_id in seen:
            raise DataError(f"Duplicate sceneId: {scene.scene_id}")
        seen.add(scene.scene_id)

    cycle = find_empty_scene_cycle(scenes)
    if cycle:
        raise DataError(
            f"Scenes without dialogue chain into a cycle: {' -> '.join(cycle)}"
        )

    return scenes
