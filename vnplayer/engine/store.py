"""
Scene store - the loaded scene graph, indexed by scene id
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from vnplayer.errors import DataError, UnknownSceneError
from vnplayer.schemas.scene import Scene
from vnplayer.schemas.validation import parse_scene_data
from vnplayer.utils.logger import get_logger

logger = get_logger(__name__)


class SceneStore:
    """Read-only lookup of scenes by identifier"""

    def __init__(self, scenes: Iterable[Scene]):
        self._scenes: Dict[str, Scene] = {}
        for scene in scenes:
            if scene.scene_id in self._scenes:
                raise DataError(f"Duplicate sceneId: {scene.scene_id}")
            self._scenes[scene.scene_id] = scene

    @classmethod
    def load(cls, raw_data: Any) -> "SceneStore":
        """
        Build a store from decoded scene data

        Raises:
            DataError: The data is not a valid scene sequence
        """
        store = cls(parse_scene_data(raw_data))
        logger.info(f"Scene store loaded with {len(store)} scenes")
        for scene_id, target in store.dangling_references():
            logger.warning(
                f"Scene '{scene_id}' references missing scene '{target}'"
            )
        return store

    def lookup(self, scene_id: str) -> Optional[Scene]:
        return self._scenes.get(scene_id)

    def require(self, scene_id: str) -> Scene:
        """Lookup that raises UnknownSceneError instead of returning None"""
        scene = self._scenes.get(scene_id)
        if scene is None:
            raise UnknownSceneError(scene_id)
        return scene

    @property
    def scene_ids(self) -> List[str]:
        return list(self._scenes)

    def dangling_references(self) -> List[Tuple[str, str]]:
        """(scene_id, target) pairs whose target scene does not exist"""
        missing: List[Tuple[str, str]] = []
        for scene in self._scenes.values():
            targets = [scene.next_scene_id] if scene.next_scene_id else []
            for line in scene.dialogue:
                targets.extend(choice.next_scene_id for choice in line.choices)
            for target in targets:
                if target not in self._scenes:
                    missing.append((scene.scene_id, target))
        return missing

    def __contains__(self, scene_id: object) -> bool:
        return scene_id in self._scenes

    def __len__(self) -> int:
        return len(self._scenes)
