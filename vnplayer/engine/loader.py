"""
One-shot asynchronous loader for scene data

The loader is the only asynchronous operation in the player. It fetches the
scene payload once, from a file path or an http(s) URL, and never retries.
"""

import asyncio
import json
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import httpx

from vnplayer.config import settings
from vnplayer.errors import DataError, LoadError, UnknownSceneError
from vnplayer.utils.logger import get_logger

from .store import SceneStore

logger = get_logger(__name__)


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class SceneLoader:
    """
    Loads the scene store at most once

    Concurrent calls made while a load is in flight are coalesced into a no-op
    (they return None). After a successful load the cached store is returned;
    after a failure the same LoadError is raised again without refetching.

    Args:
        source: File path or http(s) URL of the scene data
        start_scene_id: Scene that must exist for the data to be usable
        timeout: HTTP timeout in seconds
        transport: Optional httpx transport, used to stub the network
    """

    def __init__(
        self,
        source: Optional[str] = None,
        start_scene_id: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.source = source or settings.scenes_source
        self.start_scene_id = start_scene_id or settings.start_scene_id
        self.timeout = timeout or settings.fetch_timeout
        self._transport = transport
        self.status = LoadStatus.IDLE
        self._store: Optional[SceneStore] = None
        self._error: Optional[LoadError] = None

    @property
    def store(self) -> Optional[SceneStore]:
        return self._store

    async def load(self) -> Optional[SceneStore]:
        """
        Fetch and validate the scene data

        Returns:
            The loaded store, or None if another load is already in flight

        Raises:
            LoadError: Fetching, decoding or validating the data failed
        """
        if self.status == LoadStatus.LOADING:
            logger.debug("Scene load already in flight; ignoring duplicate request")
            return None
        if self.status == LoadStatus.LOADED:
            return self._store
        if self._error is not None:
            raise self._error

        self.status = LoadStatus.LOADING
        logger.info(f"Loading scene data from {self.source}")
        try:
            raw = await self._fetch()
            store = SceneStore.load(raw)
            store.require(self.start_scene_id)
        except UnknownSceneError as e:
            raise self._fail(f"Start scene is missing from story data: {e}") from e
        except (
            httpx.HTTPError,
            OSError,
            UnicodeDecodeError,
            json.JSONDecodeError,
            DataError,
        ) as e:
            raise self._fail(f"Could not load story data: {e}") from e

        self._store = store
        self.status = LoadStatus.LOADED
        logger.info(f"✓ Story data loaded: {len(store)} scenes")
        return store

    def _fail(self, message: str) -> LoadError:
        logger.error(message, exc_info=True)
        self._error = LoadError(message, source=self.source)
        self.status = LoadStatus.FAILED
        return self._error

    async def _fetch(self) -> Any:
        if is_url(self.source):
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(self.source)
                response.raise_for_status()
                return response.json()

        text = await asyncio.to_thread(Path(self.source).read_text, encoding="utf-8")
        return json.loads(text)
