"""Structural markdown rewriting: headers, inline formatting, code fences, lists."""

import re

from verdant.models.config import TargetModel

from ..utils import TextUtils


class StructuralCompressor:
    """Rewrite markdown structure into compact token-saving notation.

    Stages, in the order the pipeline applies them:

    1. ``compress_headers``: ``## Setup`` becomes ``H2:Setup`` (one to four
       hashes only).
    2. ``compress_formatting``: bold, italic and inline code delimiters.
    3. ``compress_code_blocks``: fenced blocks become one ``CODE`` line.
    4. ``compress_lists``: ``*``/``-`` items get a bullet glyph.

    Unterminated fences and other malformed constructs are left unchanged.
    """

    header_pattern = re.compile(r"^(#{1,4}) (.+)$", re.MULTILINE)
    bold_pattern = re.compile(r"\*\*([^*]+)\*\*")
    italic_pattern = re.compile(r"\*([^*]+)\*")
    inline_code_pattern = re.compile(r"`([^`]+)`")
    code_block_pattern = re.compile(r"```(\w+)?\n([\s\S]*?)```")
    list_item_pattern = re.compile(r"^[*-] (.+)$", re.MULTILINE)

    BULLET = "•"

    def __init__(self, target_model: TargetModel = TargetModel.CLAUDE):
        self.target_model = target_model

    def compress_headers(self, content: str) -> str:
        return self.header_pattern.sub(
            lambda m: f"H{len(m.group(1))}:{m.group(2)}", content
        )

    def compress_formatting(self, content: str) -> str:
        """Extension point for inline formatting.

        Every delimiter is currently rewritten to itself, so the output is
        byte-for-byte the input. Keep the stage: shorter emphasis notations
        plug in here without touching the stage order.
        """
        content = self.bold_pattern.sub(r"**\1**", content)
        content = self.italic_pattern.sub(r"*\1*", content)
        return self.inline_code_pattern.sub(r"`\1`", content)

    def compress_code_blocks(self, content: str) -> str:
        return self.code_block_pattern.sub(self._render_code_block, content)

    def compress_lists(self, content: str) -> str:
        return self.list_item_pattern.sub(lambda m: self.BULLET + m.group(1), content)

    def _render_code_block(self, match: re.Match) -> str:
        lang = match.group(1) or ""
        lines = [line for line in TextUtils.split_lines(match.group(2)) if line.strip()]

        if self.target_model is TargetModel.COPILOT:
            body = " | ".join(lines)
            return f"{lang.upper()}:{body}" if lang else f"CODE:{body}"

        body = "|".join(lines)
        return f"CODE({lang}):{body}" if lang else f"CODE:{body}"


__all__ = ["StructuralCompressor"]
