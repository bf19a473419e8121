"""
Headless runtime helper that plays a story to its end
"""

from typing import Callable, List, Optional

from vnplayer.schemas.render import ChoiceOption, Instruction
from vnplayer.utils.logger import get_logger

from .story import StoryEngine, StoryState

logger = get_logger(__name__)

Chooser = Callable[[List[ChoiceOption]], int]


class StoryRunner:
    """Drive an engine until the story finishes.

    Args:
        engine: Engine instance to run. It may already be started, in which
            case the runner continues from the current line.
    """

    def __init__(self, engine: StoryEngine) -> None:
        self.engine = engine

    def run(
        self, chooser: Optional[Chooser] = None, max_steps: int = 1000
    ) -> List[List[Instruction]]:
        """Run the engine and collect one instruction batch per intent.

        Args:
            chooser: Optional callback invoked when a line offers choices. It
                receives the offered options and returns the selected index.
            max_steps: Upper bound on intents issued, since choices can loop.

        Returns:
            Instruction batches in the order they were produced.
        """

        batches: List[List[Instruction]] = []
        if self.engine.state == StoryState.AWAITING_SCENE:
            batches.append(self.engine.start())

        while not self.engine.finished:
            if len(batches) >= max_steps:
                logger.warning(
                    f"Stopping after {max_steps} steps without reaching the end"
                )
                break
            if self.engine.state == StoryState.AWAITING_CHOICE:
                options = [
                    ChoiceOption(
                        index=i, text=choice.choice_text, target_scene_id=choice.next_scene_id
                    )
                    for i, choice in enumerate(self.engine.pending_choices)
                ]
                index = chooser(options) if chooser else 0
                batches.append(self.engine.choose(index))
            else:
                batches.append(self.engine.next())
        return batches
