"""Emoji stage tests."""

from __future__ import annotations

import pytest

from deslopify.config import EmojiOptions
from deslopify.stages import EmojiStage


def test_emoji_are_untouched_without_options() -> None:
    """With both options off the stage changes nothing."""

    text = "Hello \U0001F44B World! How are you? \U0001F60A"
    assert EmojiStage().process(text) == text


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello \U0001F44B World! How are you? \U0001F60A", "Hello  World! How are you? "),
        ("Team \U0001F469\u200d\U0001F4BB\U0001F3FD done", "Team  done"),
        ("Press 1\ufe0f\u20e3 now", "Press  now"),
        ("\U0001F1FA\U0001F1F8 USA", " USA"),
        ("\u2764\ufe0f love", " love"),
        ("Call 911 in 2024 #1", "Call 911 in 2024 #1"),
    ],
)
def test_remove_all_strips_every_emoji_sequence(text: str, expected: str) -> None:
    """Whole sequences go, while digits and `#` outside keycaps stay."""

    stage = EmojiStage(options=EmojiOptions(remove_all=True))
    assert stage.process(text) == expected


def test_remove_overused_keeps_other_emoji() -> None:
    """Only emoji on the overused list are removed."""

    stage = EmojiStage(options=EmojiOptions(remove_overused=True))

    assert stage.process("Great progress! \U0001F680") == "Great progress! "
    assert stage.process("Good idea! \U0001F4A1") == "Good idea! "
    assert stage.process("Look at this \U0001F440") == "Look at this \U0001F440"


def test_remove_overused_drops_clusters_of_three() -> None:
    """Runs of three or more emoji are removed as clusters."""

    stage = EmojiStage(options=EmojiOptions(remove_overused=True))

    assert stage.process("Zoo \U0001F43C\U0001F981\U0001F42F") == "Zoo "
    assert stage.process("Zoo \U0001F43C\U0001F981") == "Zoo \U0001F43C\U0001F981"


def test_custom_overused_pattern() -> None:
    """Added overused patterns take effect immediately."""

    stage = EmojiStage(options=EmojiOptions(remove_overused=True))
    assert stage.process("Hello \U0001F44B World!") == "Hello \U0001F44B World!"

    stage.add_overused_pattern("\U0001F44B")
    assert stage.process("Hello \U0001F44B World!") == "Hello  World!"


def test_options_can_change_after_creation() -> None:
    """`set_options` accepts field overrides or a whole options object."""

    stage = EmojiStage()
    text = "Hello \U0001F44B World!"

    stage.set_options(remove_all=True)
    assert stage.process(text) == "Hello  World!"

    stage.set_options(EmojiOptions())
    assert stage.process(text) == text


def test_emoji_rules_cannot_substitute_text() -> None:
    """Emoji rules only remove their matches."""

    with pytest.raises(ValueError, match="replacement"):
        EmojiStage().add_rule("\U0001F44B", ":wave:")
