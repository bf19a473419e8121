"""
Shared fixtures for the player tests
"""

import pytest

from vnplayer.engine.store import SceneStore
from vnplayer.engine.story import StoryEngine


def line(name="Bob", text="Hello", **extra):
    """Build a raw dialogue line record"""
    record = {"characterName": name, "text": text}
    record.update(extra)
    return record


@pytest.fixture
def branching_data():
    """Introduction with one plain line and one two-way choice"""
    return [
        {
            "sceneId": "introduction",
            "backgroundImage": "bg/intro.png",
            "dialogue": [
                line("Narrator", "Once upon a time."),
                line(
                    "Alice",
                    "Where to?",
                    character1Image="alice.png",
                    character2Image="bob.png",
                    currentlyTalking="character1",
                    choices=[
                        {"choiceText": "Forest", "nextSceneId": "forest"},
                        {"choiceText": "Castle", "nextSceneId": "castle"},
                    ],
                ),
            ],
        },
        {
            "sceneId": "forest",
            "dialogue": [line("Bob", "Trees everywhere.", character2Image="bob.png")],
        },
        {
            "sceneId": "castle",
            "backgroundImage": "bg/castle.png",
            "dialogue": [line("Alice", "A castle!"), line("Alice", "Let's go in.")],
            "nextSceneId": "throne",
        },
        {
            "sceneId": "throne",
            "dialogue": [line("King", "Welcome.")],
        },
    ]


@pytest.fixture
def branching_store(branching_data):
    return SceneStore.load(branching_data)


@pytest.fixture
def engine(branching_store):
    return StoryEngine(branching_store, start_scene_id="introduction")
