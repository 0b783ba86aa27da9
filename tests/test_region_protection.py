"""Code-region protection tests."""

from __future__ import annotations

import pytest

from deslopify.errors import ProtectedRegionError
from deslopify.models import ProtectedRegion
from deslopify.text.protection import (
    PLACEHOLDER_ESCAPE,
    RegionProtector,
    contains_placeholder,
    placeholder_for,
)


def test_fenced_block_is_extracted_and_restored_verbatim() -> None:
    """A fenced block becomes one placeholder and comes back byte-for-byte."""

    protector = RegionProtector()
    text = "Intro\n```py\nx  =  1\n```\nOutro"

    masked, regions = protector.extract(text)

    assert "```" not in masked
    assert regions == [ProtectedRegion(placeholder_id=0, verbatim="```py\nx  =  1\n```")]
    assert masked == f"Intro\n{placeholder_for(0)}\nOutro"
    assert protector.restore(masked, regions) == text


def test_indented_block_run_is_one_region() -> None:
    """Consecutive indented lines form one region."""

    protector = RegionProtector()
    text = "Para\n\n    code  line\n    more\n\nEnd"

    masked, regions = protector.extract(text)

    assert [region.verbatim for region in regions] == ["    code  line\n    more"]
    assert masked == f"Para\n\n{placeholder_for(0)}\n\nEnd"


def test_indented_fence_round_trips() -> None:
    """An indented run that contains a fenced placeholder is restored newest first."""

    protector = RegionProtector()
    text = "    ```\n    code\n    ```"

    masked, regions = protector.extract(text)

    assert len(regions) == 2
    assert protector.restore(masked, regions) == text


def test_indented_detection_can_be_disabled() -> None:
    """Indented blocks stay in place when detection is off."""

    masked, regions = RegionProtector(indented=False).extract("    code")
    assert masked == "    code"
    assert regions == []


def test_placeholder_is_private_use_only() -> None:
    """Placeholders use only private-use code points and differ per id."""

    token = placeholder_for(12)

    assert all(0xE000 <= ord(character) <= 0xF8FF for character in token)
    assert token != placeholder_for(1)
    assert contains_placeholder(f"a {token} b")
    assert not contains_placeholder("a b")


def test_missing_placeholder_raises() -> None:
    """A removed placeholder is reported."""

    with pytest.raises(ProtectedRegionError, match="found 0 times"):
        RegionProtector().restore("nothing here", [ProtectedRegion(0, "code")])


def test_duplicated_placeholder_raises() -> None:
    """A duplicated placeholder is reported."""

    token = placeholder_for(0)
    with pytest.raises(ProtectedRegionError, match="found 2 times"):
        RegionProtector().restore(f"{token}{token}", [ProtectedRegion(0, "code")])


def test_text_without_regions_passes_through() -> None:
    """Text without code comes back unchanged."""

    protector = RegionProtector()
    masked, regions = protector.extract("plain text")

    assert regions == []
    assert protector.restore(masked, regions) == "plain text"


def test_marker_characters_in_input_round_trip() -> None:
    """Private-use marker characters already in the text never collide with placeholders."""

    protector = RegionProtector()
    text = f"{placeholder_for(0)} icon {PLACEHOLDER_ESCAPE}\n\n```\ncode\n```"

    masked, regions = protector.extract(text)

    assert len(regions) == 1
    assert masked.count(placeholder_for(0)) == 1
    assert protector.restore(masked, regions) == text
