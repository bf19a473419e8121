"""
Story engine - the story-advancement state machine

The engine owns the story position and turns user intents into ordered batches
of render instructions. It is synchronous and never touches the presentation
layer, so it can be driven headlessly.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from vnplayer.config import settings
from vnplayer.errors import InvalidChoiceIndex, UnknownSceneError
from vnplayer.schemas.render import (
    ChoiceOption,
    Instruction,
    ResetStage,
    SetBackground,
    SetDialogueText,
    SetSpeakerName,
    ShowChoices,
    ShowGameOverUnknownScene,
    ShowNextControl,
    ShowRestartOption,
    ShowTheEnd,
)
from vnplayer.schemas.scene import Choice, Scene
from vnplayer.utils.logger import get_logger

from .focus import sprite_instructions
from .store import SceneStore

logger = get_logger(__name__)


class StoryState(str, Enum):
    """Engine states"""

    AWAITING_SCENE = "awaiting_scene"
    DISPLAYING_LINE = "displaying_line"
    AWAITING_CHOICE = "awaiting_choice"
    SCENE_EXHAUSTED = "scene_exhausted"
    FINISHED = "finished"


class Next(BaseModel):
    """Advance to the following line"""

    kind: Literal["next"] = "next"


class GoToScene(BaseModel):
    """Enter a scene explicitly"""

    kind: Literal["go_to_scene"] = "go_to_scene"
    scene_id: str = Field(..., description="Scene to enter")


class ChooseOption(BaseModel):
    """Take one of the choices offered by the current line"""

    kind: Literal["choose_option"] = "choose_option"
    index: int = Field(..., description="Index into the current line's choices")


class Restart(BaseModel):
    """Return to the start scene, clearing any terminal state"""

    kind: Literal["restart"] = "restart"


Intent = Union[Next, GoToScene, ChooseOption, Restart]


@dataclass
class StoryPosition:
    """Where the story currently is"""

    scene_id: str
    dialogue_index: int = 0
    finished: bool = False


class StoryEngine:
    """
    State machine driving a story through a scene store

    Args:
        store: Loaded scene graph
        start_scene_id: Scene used at start and on restart
        narrator_name: Speaker name that never takes sprite focus

    Raises:
        UnknownSceneError: The start scene is not in the store
    """

    def __init__(
        self,
        store: SceneStore,
        start_scene_id: Optional[str] = None,
        narrator_name: Optional[str] = None,
    ):
        self.store = store
        self.start_scene_id = start_scene_id or settings.start_scene_id
        self.narrator_name = narrator_name or settings.narrator_name

        if self.start_scene_id not in store:
            raise UnknownSceneError(self.start_scene_id)

        self._position = StoryPosition(scene_id=self.start_scene_id)
        self._state = StoryState.AWAITING_SCENE
        self._pending_choices: List[Choice] = []
        self._background_pending = True

    @property
    def state(self) -> StoryState:
        return self._state

    @property
    def position(self) -> StoryPosition:
        """Copy of the current position"""
        return replace(self._position)

    @property
    def finished(self) -> bool:
        return self._position.finished

    @property
    def pending_choices(self) -> List[Choice]:
        return list(self._pending_choices)

    # Intent handling

    def advance(self, intent: Intent) -> List[Instruction]:
        """
        Apply one intent and return the render instructions it produces

        Raises:
            InvalidChoiceIndex: ChooseOption outside a pending choice or out of range
        """
        if isinstance(intent, Restart):
            return self._restart()
        if isinstance(intent, Next):
            return self._next()
        if isinstance(intent, ChooseOption):
            return self._choose(intent.index)
        if isinstance(intent, GoToScene):
            return self._go_to(intent.scene_id)
        raise TypeError(f"Unsupported intent: {intent!r}")

    def start(self) -> List[Instruction]:
        """Render the first line of the start scene"""
        return self.advance(Next())

    def next(self) -> List[Instruction]:
        return self.advance(Next())

    def choose(self, index: int) -> List[Instruction]:
        return self.advance(ChooseOption(index=index))

    def go_to(self, scene_id: str) -> List[Instruction]:
        return self.advance(GoToScene(scene_id=scene_id))

    def restart(self) -> List[Instruction]:
        return self.advance(Restart())

    def _restart(self) -> List[Instruction]:
        logger.info(f"Restarting story at '{self.start_scene_id}'")
        self._position = StoryPosition(scene_id=self.start_scene_id)
        out: List[Instruction] = [ResetStage()]
        self._enter_scene(self.start_scene_id)
        self._run(out)
        return out

    def _next(self) -> List[Instruction]:
        if self._position.finished:
            logger.debug("Next ignored: story is finished")
            return []
        if self._state == StoryState.AWAITING_CHOICE:
            logger.debug("Next ignored: waiting for a choice")
            return []
        out: List[Instruction] = []
        self._run(out)
        return out

    def _choose(self, index: int) -> List[Instruction]:
        if self._state != StoryState.AWAITING_CHOICE or self._position.finished:
            error = InvalidChoiceIndex(index, 0)
            logger.error(str(error))
            raise error
        if not 0 <= index < len(self._pending_choices):
            error = InvalidChoiceIndex(index, len(self._pending_choices))
            logger.error(str(error))
            raise error

        choice = self._pending_choices[index]
        logger.debug(
            f"Choice {index} '{choice.choice_text}' -> scene '{choice.next_scene_id}'"
        )
        out: List[Instruction] = []
        self._enter_scene(choice.next_scene_id)
        self._run(out)
        return out

    def _go_to(self, scene_id: str) -> List[Instruction]:
        if self._position.finished:
            logger.debug(f"GoToScene('{scene_id}') ignored: story is finished")
            return []
        out: List[Instruction] = []
        self._enter_scene(scene_id)
        self._run(out)
        return out

    # Transition function

    def _enter_scene(self, scene_id: str) -> None:
        """Scene-entry transition: new scene, first line, no pending choices"""
        logger.debug(f"Entering scene '{scene_id}'")
        self._position.scene_id = scene_id
        self._position.dialogue_index = 0
        self._pending_choices = []
        self._background_pending = True
        self._state = StoryState.AWAITING_SCENE

    def _run(self, out: List[Instruction]) -> None:
        """Resolve the current position into instructions appended to ``out``"""
        while True:
            scene = self.store.lookup(self._position.scene_id)
            if scene is None:
                self._finish_unknown_scene(out)
                return

            if self._position.dialogue_index >= len(scene.dialogue):
                self._state = StoryState.SCENE_EXHAUSTED
                if scene.next_scene_id:
                    # Chaining loops only through empty scenes, which the
                    # store rejects when they form a cycle.
                    self._enter_scene(scene.next_scene_id)
                    continue
                self._finish_the_end(scene, out)
                return

            self._emit_line(scene, out)
            return

    def _emit_line(self, scene: Scene, out: List[Instruction]) -> None:
        index = self._position.dialogue_index
        line = scene.dialogue[index]

        if self._background_pending and scene.background_image:
            out.append(SetBackground(image=scene.background_image))
        self._background_pending = False

        out.append(SetSpeakerName(name=line.character_name))
        out.append(SetDialogueText(text=line.text))
        out.extend(sprite_instructions(line, self.narrator_name))

        if line.has_choices:
            self._pending_choices = list(line.choices)
            self._state = StoryState.AWAITING_CHOICE
            out.append(ShowNextControl(visible=False))
            out.append(
                ShowChoices(
                    options=[
                        ChoiceOption(
                            index=i,
                            text=choice.choice_text,
                            target_scene_id=choice.next_scene_id,
                        )
                        for i, choice in enumerate(line.choices)
                    ]
                )
            )
        else:
            # The index only moves on lines without choices; a choice performs
            # its own scene-entry transition instead.
            self._pending_choices = []
            self._state = StoryState.DISPLAYING_LINE
            out.append(ShowChoices(options=[]))
            out.append(ShowNextControl(visible=True))
            self._position.dialogue_index = index + 1

        logger.debug(
            f"Line {index} of '{scene.scene_id}' ({line.character_name}), "
            f"state={self._state.value}"
        )

    def _finish_unknown_scene(self, out: List[Instruction]) -> None:
        scene_id = self._position.scene_id
        logger.warning(f"Game over: scene '{scene_id}' not found")
        self._position.finished = True
        self._pending_choices = []
        self._state = StoryState.FINISHED
        out.append(ShowGameOverUnknownScene(scene_id=scene_id))
        out.append(ShowChoices(options=[]))
        out.append(ShowNextControl(visible=False))
        out.append(ShowRestartOption(visible=True))

    def _finish_the_end(self, scene: Scene, out: List[Instruction]) -> None:
        logger.info(f"Story finished at scene '{scene.scene_id}'")
        self._position.finished = True
        self._pending_choices = []
        self._state = StoryState.FINISHED
        out.append(ShowTheEnd())
        out.append(ShowChoices(options=[]))
        out.append(ShowNextControl(visible=False))
        out.append(ShowRestartOption(visible=True))
