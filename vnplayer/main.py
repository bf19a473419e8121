"""
Command line entry point for the visual novel player

Usage:
    # Play scenes.json from the current directory
    vn-player

    # Play a story served over HTTP, starting at a given scene
    vn-player --scenes https://example.com/scenes.json --start chapter1

    # Play through without input, always taking the first choice
    vn-player --autoplay --log-level DEBUG
"""

import argparse
import asyncio
import sys
from typing import Callable, List, Optional

from vnplayer.config import Settings, settings
from vnplayer.engine.runner import StoryRunner
from vnplayer.presentation.terminal import TerminalPresenter
from vnplayer.session import StorySession
from vnplayer.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vn-player", description="Play a branching visual novel in the terminal"
    )
    parser.add_argument(
        "--scenes",
        default=None,
        help=f"Scene data path or URL (default: {settings.scenes_source})",
    )
    parser.add_argument(
        "--start",
        default=None,
        help=f"Start scene id (default: {settings.start_scene_id})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help=f"Logging level (default: {settings.log_level})",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument(
        "--autoplay",
        action="store_true",
        help="Play to the end without input, taking the first option of every choice",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Overlay command line flags on the environment settings"""
    overrides = {
        "scenes_source": args.scenes,
        "start_scene_id": args.start,
        "log_level": args.log_level,
        "log_file": args.log_file,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return settings.model_copy(update=overrides)


def run_interactive(
    session: StorySession,
    presenter: TerminalPresenter,
    read: Callable[[str], str] = input,
) -> None:
    """Read commands until the player quits or input ends"""
    while True:
        presenter.show()
        if presenter.advance_disabled and not session.ready:
            # Load failures are permanent; nothing left to do
            return
        try:
            command = read("> ").strip().lower()
        except EOFError:
            return

        if command in ("q", "quit"):
            return
        if command in ("r", "restart"):
            session.restart()
        elif command.isdigit():
            if not presenter.select(int(command)):
                print("No such choice.", file=presenter.stream)
        elif command == "":
            if presenter.next_visible:
                session.next()
        else:
            print(f"Unknown command: {command}", file=presenter.stream)


def run_autoplay(session: StorySession, presenter: TerminalPresenter) -> None:
    """Play the loaded story to the end, printing every frame"""
    if session.engine is None:
        return
    for batch in StoryRunner(session.engine).run():
        session.buffer.commit(batch)
        presenter.show()


async def run(config: Settings, autoplay: bool = False) -> int:
    presenter = TerminalPresenter()
    session = StorySession(presenter, config=config)
    loaded = await session.load()
    if autoplay:
        presenter.show()
        run_autoplay(session, presenter)
    else:
        run_interactive(session, presenter)
    return 0 if loaded else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = settings_from_args(args)

    setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        enable_colors=True,
        include_timestamp=config.debug,
    )
    logger.debug(f"Scenes: {config.scenes_source}, start: {config.start_scene_id}")

    try:
        return asyncio.run(run(config, autoplay=args.autoplay))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
