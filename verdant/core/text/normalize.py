"""Whitespace and emoji normalization."""

import re

from ..utils import TextUtils

# Emoji blocks stripped when emoji removal is enabled
EMOJI_RANGES = [
    ("\U0001F600", "\U0001F64F"),  # Emoticons
    ("\U0001F300", "\U0001F5FF"),  # Misc Symbols and Pictographs
    ("\U0001F680", "\U0001F6FF"),  # Transport and Map
    ("\U0001F1E0", "\U0001F1FF"),  # Regional indicators (flags)
    ("\u2600", "\u26FF"),  # Misc symbols
    ("\u2700", "\u27BF"),  # Dingbats
    ("\U0001F900", "\U0001F9FF"),  # Supplemental Symbols and Pictographs
    ("\U0001FA70", "\U0001FAFF"),  # Symbols and Pictographs Extended-A
]

# The removal report only counts the first six blocks
COUNTED_EMOJI_RANGES = EMOJI_RANGES[:6]


def _char_class(ranges: list[tuple[str, str]]) -> re.Pattern:
    return re.compile("[" + "".join(f"{start}-{end}" for start, end in ranges) + "]")


class TextNormalizer:
    """Collapse whitespace, drop blank lines and optionally strip emoji.

    Running ``normalize`` on its own output returns the same text.
    """

    emoji_pattern = _char_class(EMOJI_RANGES)
    counted_emoji_pattern = _char_class(COUNTED_EMOJI_RANGES)

    multiple_newlines = re.compile(r"\n{2,}")
    multiple_spaces = re.compile(r" {2,}")
    trailing_spaces = re.compile(r" +\n")

    def __init__(self, remove_emojis: bool = True):
        self.remove_emojis_enabled = remove_emojis

    def normalize(self, content: str) -> str:
        """Full normalization. Emoji go first since removing them can leave double spaces."""
        if self.remove_emojis_enabled:
            content = self.remove_emojis(content)
        content = self.collapse_whitespace(content)
        return self.remove_empty_lines(content)

    @classmethod
    def remove_emojis(cls, content: str) -> str:
        return cls.emoji_pattern.sub("", content)

    @classmethod
    def count_emojis(cls, content: str) -> int:
        """Number of emoji glyphs for the "tokens saved" report."""
        return len(cls.counted_emoji_pattern.findall(content))

    @classmethod
    def collapse_whitespace(cls, content: str) -> str:
        content = cls.multiple_newlines.sub("\n", content)
        content = cls.multiple_spaces.sub(" ", content)
        return cls.trailing_spaces.sub("\n", content)

    @staticmethod
    def remove_empty_lines(content: str) -> str:
        return "\n".join(
            line for line in TextUtils.split_lines(content) if line.strip()
        )


__all__ = ["TextNormalizer", "EMOJI_RANGES"]
