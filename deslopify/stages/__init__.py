"""Normalization stages.

Each stage exposes `process(text) -> text` and an append-only rule list. The
pipeline runs them in the order listed in `deslopify.config.STAGE_ORDER`.
"""

from .abbreviations import ALWAYS_CAPITALIZED, AbbreviationMapping, AbbreviationStage
from .base import RuleStage, TextStage
from .characters import CharacterStage
from .datetime_format import DateTimeStage
from .emoji import EmojiStage
from .layout import LayoutStage
from .phrases import DEFAULT_PHRASE_PATTERNS, PhrasePattern, PhrasePosition, PhraseStage
from .punctuation import PunctuationStage

__all__ = [
    "ALWAYS_CAPITALIZED",
    "AbbreviationMapping",
    "AbbreviationStage",
    "CharacterStage",
    "DEFAULT_PHRASE_PATTERNS",
    "DateTimeStage",
    "EmojiStage",
    "LayoutStage",
    "PhrasePattern",
    "PhrasePosition",
    "PhraseStage",
    "PunctuationStage",
    "RuleStage",
    "TextStage",
]
