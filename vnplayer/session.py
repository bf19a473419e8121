"""
Story session - wires the loader, the story engine and a presenter together.

Until the scene data has loaded every user intent is ignored and the advance
control stays disabled. A failed load leaves the session in a permanent error
display; there is no automatic retry.
"""

from typing import Optional

import httpx

from vnplayer.config import Settings, settings as default_settings
from vnplayer.engine.loader import LoadStatus, SceneLoader
from vnplayer.engine.story import (
    ChooseOption,
    GoToScene,
    Intent,
    Next,
    Restart,
    StoryEngine,
)
from vnplayer.errors import LoadError
from vnplayer.presentation.frame import Frame, FrameBuffer, Presenter
from vnplayer.schemas.render import DisableAdvance, ShowLoadError
from vnplayer.utils.logger import get_logger

logger = get_logger(__name__)


class StorySession:
    """
    One play-through of a story on one presenter

    Args:
        presenter: Presentation shell receiving committed frames
        source: Scene data path or URL, defaults to settings.scenes_source
        config: Settings to use instead of the global instance
        transport: Optional httpx transport for the scene fetch
    """

    def __init__(
        self,
        presenter: Presenter,
        source: Optional[str] = None,
        config: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or default_settings
        self.loader = SceneLoader(
            source or self.config.scenes_source,
            start_scene_id=self.config.start_scene_id,
            timeout=self.config.fetch_timeout,
            transport=transport,
        )
        self.buffer = FrameBuffer(presenter, on_choose=self.choose)
        self.engine: Optional[StoryEngine] = None

    @property
    def ready(self) -> bool:
        return self.engine is not None

    @property
    def frame(self) -> Optional[Frame]:
        return self.buffer.front

    async def load(self) -> bool:
        """
        Load the scene data and show the first line

        Returns:
            True once the story is showing, False if the load failed or was a
            duplicate of one already in flight
        """
        if self.engine is not None:
            return True
        if self.loader.status == LoadStatus.LOADING:
            logger.debug("Load already in progress")
            return False

        self.buffer.commit([DisableAdvance(disabled=True)])
        try:
            store = await self.loader.load()
        except LoadError as e:
            logger.error(f"Story unavailable: {e}")
            self.buffer.commit([ShowLoadError(), DisableAdvance(disabled=True)])
            return False
        if store is None:
            return False

        self.engine = StoryEngine(
            store,
            start_scene_id=self.config.start_scene_id,
            narrator_name=self.config.narrator_name,
        )
        self.buffer.commit([DisableAdvance(disabled=False)] + self.engine.start())
        return True

    def dispatch(self, intent: Intent) -> Optional[Frame]:
        """Send an intent to the engine and commit the resulting batch"""
        if self.engine is None:
            logger.warning(f"Ignoring {intent.kind}: story data is not loaded")
            return None
        return self.buffer.commit(self.engine.advance(intent))

    def next(self) -> Optional[Frame]:
        return self.dispatch(Next())

    def choose(self, index: int) -> Optional[Frame]:
        return self.dispatch(ChooseOption(index=index))

    def go_to(self, scene_id: str) -> Optional[Frame]:
        return self.dispatch(GoToScene(scene_id=scene_id))

    def restart(self) -> Optional[Frame]:
        return self.dispatch(Restart())
