"""Top-level package for Deslopify.

This package normalizes noisy generated text (mixed dashes, repeated
punctuation, unbalanced brackets and quotes, inconsistent markdown layout)
while keeping code blocks byte-identical. The main entry point is
`Deslopifier`; `deslopify()` runs a fresh default pipeline.
"""

from .config import DeslopifyConfig, EmojiOptions, LayoutOptions
from .pipeline import Deslopifier, deslopify

__all__ = [
    "Deslopifier",
    "DeslopifyConfig",
    "EmojiOptions",
    "LayoutOptions",
    "__version__",
    "deslopify",
]

__version__ = "0.1.0"
