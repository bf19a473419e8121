"""
Presentation shell: presenter protocol, frame buffer and terminal presenter
"""

from .frame import Frame, FrameBuffer, Presenter, SpriteView
from .terminal import TerminalPresenter

__all__ = [
    "Frame",
    "FrameBuffer",
    "Presenter",
    "SpriteView",
    "TerminalPresenter",
]
