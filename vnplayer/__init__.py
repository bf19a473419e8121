"""
Visual novel player: a scene-graph story engine with a terminal shell
"""

__version__ = "0.1.0"
