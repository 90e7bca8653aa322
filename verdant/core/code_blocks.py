"""Fenced code block extraction and compaction for VRD records."""

import re
from dataclasses import dataclass

from .utils import TextUtils


@dataclass
class CodeBlock:
    """A fenced code block found in content."""

    language: str
    content: str


class CodeBlockExtractor:
    """Pull fenced code blocks out of markdown and squeeze them onto one line."""

    block_pattern = re.compile(r"```(\w+)?\n([\s\S]*?)```")
    # Any fenced region, with or without a language tag or newline
    fence_pattern = re.compile(r"```[\s\S]*?```")

    # Applied to every trimmed code line, in order
    LINE_REWRITES = [
        (" => ", "→"),
        (" -> ", "→"),
        ("return ", "→"),
        ("async function ", "async FN "),
        ("function ", "FN "),
        ("const ", ""),
        ("let ", ""),
        ("var ", ""),
        ("( ", "("),
        (" )", ")"),
        ("{ ", "{"),
        (" }", "}"),
    ]

    LINE_JOIN = "→"

    def extract_code_blocks(self, content: str) -> list[CodeBlock]:
        """Code blocks in document order."""
        return [
            CodeBlock(language=match.group(1) or "", content=match.group(2))
            for match in self.block_pattern.finditer(content)
        ]

    def extract_compacted(self, content: str) -> list[str]:
        return [self.compact_code(block.content) for block in self.extract_code_blocks(content)]

    def compact_code(self, code: str) -> str:
        """Drop blank lines, rewrite tokens to symbols, join lines with an arrow."""
        lines = []
        for line in TextUtils.split_lines(code):
            if not line.strip():
                continue
            compact = line.strip()
            for old, new in self.LINE_REWRITES:
                compact = compact.replace(old, new)
            lines.append(compact)
        return self.LINE_JOIN.join(lines)

    def strip_code_blocks(self, content: str) -> str:
        """Remove every fenced region from content."""
        return self.fence_pattern.sub("", content)


__all__ = ["CodeBlock", "CodeBlockExtractor"]
