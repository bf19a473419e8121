"""
Tests for frames, the frame buffer and the terminal presenter
"""

import io
from unittest.mock import MagicMock

import pytest

from vnplayer.presentation.frame import Frame, FrameBuffer, SpriteView
from vnplayer.presentation.terminal import TerminalPresenter
from vnplayer.schemas.render import (
    ChoiceOption,
    DisableAdvance,
    ResetStage,
    SetBackground,
    SetDialogueText,
    SetSpeakerName,
    SetSprite,
    ShowChoices,
    ShowGameOverUnknownScene,
    ShowLoadError,
    ShowNextControl,
    ShowRestartOption,
    ShowTheEnd,
)

LINE_BATCH = [
    SetBackground(image="bg.png"),
    SetSpeakerName(name="Alice"),
    SetDialogueText(text="Hello"),
    SetSprite(slot="left", image="alice.png", focus="active"),
    SetSprite(slot="right", image=None, focus="none"),
    ShowChoices(options=[]),
    ShowNextControl(visible=True),
]

CHOICES = [
    ChoiceOption(index=0, text="Stay", target_scene_id="here"),
    ChoiceOption(index=1, text="Leave", target_scene_id="there"),
]


class TestFrame:
    """Test folding instructions into frames"""

    def test_apply_line_batch(self):
        """Test that a line batch produces the expected snapshot"""
        frame = Frame().apply(LINE_BATCH)

        assert frame.speaker == "Alice"
        assert frame.text == "Hello"
        assert frame.background == "bg.png"
        assert frame.left == SpriteView(image="alice.png", focus="active")
        assert not frame.right.visible
        assert frame.next_visible

    def test_apply_returns_new_frame(self):
        """Test that frames are never modified in place"""
        empty = Frame()
        empty.apply(LINE_BATCH)
        assert empty == Frame()

    def test_the_end_captions(self):
        """Test the captions shown at the end of the story"""
        frame = Frame().apply(LINE_BATCH + [ShowTheEnd(), ShowRestartOption(visible=True)])
        assert frame.speaker == "The End"
        assert frame.text == "Thank you for playing this game!"
        assert frame.restart_visible

    def test_game_over_captions(self):
        """Test the captions shown for an unknown scene"""
        frame = Frame().apply([ShowGameOverUnknownScene(scene_id="missing")])
        assert frame.speaker == "Game Over"
        assert frame.text == "The scene ID 'missing' was not found."

    def test_load_error(self):
        """Test that the load error frame disables advancing"""
        frame = Frame().apply(LINE_BATCH + [ShowLoadError()])
        assert frame.speaker == "Error"
        assert "Failed to load story data" in frame.text
        assert frame.advance_disabled
        assert not frame.next_visible

    def test_reset_stage(self):
        """Test that a reset clears everything except the advance lock"""
        frame = Frame().apply(
            LINE_BATCH + [ShowRestartOption(visible=True), DisableAdvance(disabled=True), ResetStage()]
        )
        assert frame == Frame(advance_disabled=True)

    def test_unknown_instruction(self):
        """Test that foreign objects are rejected"""
        with pytest.raises(TypeError):
            Frame().apply(["not an instruction"])  # type: ignore[list-item]


class TestFrameBuffer:
    """Test the double buffer between engine and presenter"""

    def test_first_commit_pushes_everything(self):
        """Test that the first frame is pushed in full"""
        presenter = MagicMock()
        buffer = FrameBuffer(presenter, on_choose=MagicMock())

        buffer.commit(LINE_BATCH)

        presenter.set_background.assert_called_once_with("bg.png")
        presenter.set_sprite_left.assert_called_once_with("alice.png", "active")
        presenter.set_sprite_right.assert_called_once_with(None, "none")
        presenter.set_speaker_name.assert_called_once_with("Alice")
        presenter.set_dialogue_text.assert_called_once_with("Hello")
        presenter.show_choices.assert_called_once_with([])
        presenter.show_next_control.assert_called_once_with(True)
        presenter.show_restart_control.assert_called_once_with(False)
        presenter.disable_advance.assert_called_once_with(False)

    def test_only_changes_are_pushed(self):
        """Test that later commits push only the fields that changed"""
        presenter = MagicMock()
        buffer = FrameBuffer(presenter, on_choose=MagicMock())
        buffer.commit(LINE_BATCH)
        presenter.reset_mock()

        buffer.commit([SetSpeakerName(name="Alice"), SetDialogueText(text="Again")])

        presenter.set_dialogue_text.assert_called_once_with("Again")
        presenter.set_speaker_name.assert_not_called()
        presenter.set_background.assert_not_called()
        presenter.set_sprite_left.assert_not_called()

    def test_batch_applied_as_a_whole(self):
        """Test that intermediate states inside a batch are never pushed"""
        presenter = MagicMock()
        buffer = FrameBuffer(presenter, on_choose=MagicMock())
        buffer.commit(LINE_BATCH)
        presenter.reset_mock()

        buffer.commit([SetDialogueText(text="Draft"), SetDialogueText(text="Hello")])

        presenter.set_dialogue_text.assert_not_called()

    def test_choice_callbacks_report_index(self):
        """Test that on_select callbacks call on_choose with the option index"""
        presenter = MagicMock()
        on_choose = MagicMock()
        buffer = FrameBuffer(presenter, on_choose=on_choose)

        frame = buffer.commit([ShowChoices(options=CHOICES)])

        [(choices,), _] = presenter.show_choices.call_args
        assert [text for text, _ in choices] == ["Stay", "Leave"]
        choices[1][1]()
        on_choose.assert_called_once_with(1)
        assert buffer.front is frame


class TestTerminalPresenter:
    """Test the terminal presentation shell"""

    @pytest.fixture
    def presenter(self):
        presenter = TerminalPresenter(stream=io.StringIO(), width=20)
        FrameBuffer(presenter, on_choose=MagicMock()).commit(LINE_BATCH)
        return presenter

    def test_render_line(self, presenter):
        """Test that the rendered screen shows speaker, text and sprites"""
        screen = presenter.render()
        assert "Alice:" in screen
        assert "Hello" in screen
        assert "*left: alice.png" in screen
        assert "right:" not in screen
        assert presenter.sprites["right"] == SpriteView()
        assert not presenter.sprites["right"].visible
        assert "[Enter] next" in screen

    def test_select_choice(self):
        """Test that numbered selection invokes the callback"""
        on_choose = MagicMock()
        presenter = TerminalPresenter(stream=io.StringIO())
        FrameBuffer(presenter, on_choose=on_choose).commit(
            [ShowNextControl(visible=False), ShowChoices(options=CHOICES)]
        )

        assert "2) Leave" in presenter.render()
        assert presenter.select(2)
        on_choose.assert_called_once_with(1)
        assert not presenter.select(3)
        assert not presenter.select(0)

    def test_prompt_at_the_end(self):
        """Test the prompt once the story finished"""
        presenter = TerminalPresenter(stream=io.StringIO())
        FrameBuffer(presenter, on_choose=MagicMock()).commit(
            [ShowTheEnd(), ShowNextControl(visible=False), ShowRestartOption(visible=True)]
        )
        assert presenter.prompt() == "FIN  [r] restart  [q] quit"

    def test_prompt_when_disabled(self):
        """Test that only quitting is offered while advance is disabled"""
        presenter = TerminalPresenter(stream=io.StringIO())
        presenter.disable_advance(True)
        assert presenter.prompt() == "[q] quit"

    def test_show_writes_to_stream(self, presenter):
        """Test that show prints the rendered screen"""
        presenter.show()
        assert "Hello" in presenter.stream.getvalue()
