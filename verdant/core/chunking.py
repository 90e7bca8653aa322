"""Line-budget splitting of a compressed payload into linked chunks."""

import logging
from collections.abc import Callable

from verdant.models.config import OutputFormat
from verdant.models.domain import Chunk

from .utils import TextUtils
from .vrd import VERSION

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINES = 800
SINGLE_CHUNK_TOKEN = "CHUNKS:1/1"


class ChunkSplitter:
    """Partition a payload into sequential chunks of at most ``max_lines`` lines.

    Markdown chunks get a synthesized ``CHUNK:i/n`` header and a
    ``CHUNK_END`` footer. VRD chunks instead carry the payload's own header
    line with its ``CHUNKS:1/1`` field rewritten, so every chunk starts with
    exactly one VRD header line. The repeated header counts against the line
    budget.
    """

    def __init__(self, max_lines: int = DEFAULT_MAX_LINES):
        if max_lines < 1:
            raise ValueError("max_lines must be at least 1")
        self.max_lines = max_lines

    def split(
        self,
        payload: str,
        output_format: OutputFormat,
        name_for: Callable[[int], str],
    ) -> list[Chunk]:
        """
        Split ``payload`` on line boundaries.

        Args:
            payload: Complete compressed output
            output_format: Decides between markdown and VRD chunk framing
            name_for: Maps a 1-based chunk index to its output filename

        Returns:
            Chunks in order; empty for an empty payload
        """
        lines = TextUtils.split_lines(payload)

        vrd_header = None
        if output_format is OutputFormat.VRD and lines and lines[0].startswith(VERSION + "|"):
            vrd_header = lines[0]

        windows = self._windows(lines, repeats_header=vrd_header is not None)
        total = len(windows)
        logger.debug(f"Splitting {len(lines)} lines into {total} chunks")

        chunks = []
        for index, window in enumerate(windows, start=1):
            next_name = name_for(index + 1) if index < total else None

            if output_format is OutputFormat.VRD:
                content = self._frame_vrd(window, index, total, next_name, vrd_header)
            else:
                content = self._frame_markdown(window, index, total, next_name)

            chunks.append(
                Chunk(
                    index=index,
                    total=total,
                    filename=name_for(index),
                    content=content,
                    line_count=len(window),
                )
            )
        return chunks

    def _windows(self, lines: list[str], repeats_header: bool) -> list[list[str]]:
        """Payload line windows.

        When every continuation chunk repeats the VRD header, those chunks
        carry one payload line less so the header fits in the budget. A budget
        of one line cannot hold a header plus content, so there the header
        comes on top.
        """
        windows = [lines[: self.max_lines]] if lines else []
        step = self.max_lines - 1 if repeats_header and self.max_lines > 1 else self.max_lines
        for start in range(self.max_lines, len(lines), step):
            windows.append(lines[start : start + step])
        return windows

    @staticmethod
    def _frame_markdown(
        window: list[str], index: int, total: int, next_name: str | None
    ) -> str:
        header = f"CHUNK:{index}/{total}"
        if next_name:
            header += f" | NEXT:{next_name}"
        content = header + "\n" + "\n".join(window)
        tokens = TextUtils.estimate_tokens(content)
        return content + f"\n---\nCHUNK_END | Lines:{len(window)} | Est.tokens:{tokens}"

    @classmethod
    def _frame_vrd(
        cls,
        window: list[str],
        index: int,
        total: int,
        next_name: str | None,
        vrd_header: str | None,
    ) -> str:
        if vrd_header is None:
            return "\n".join(window)

        header = cls.rewrite_vrd_header(vrd_header, index, total, next_name)
        if index == 1:
            # The window starts with the payload's own header line
            return "\n".join([header] + window[1:])
        return "\n".join([header] + window)

    @staticmethod
    def rewrite_vrd_header(
        header: str, index: int, total: int, next_name: str | None
    ) -> str:
        """``CHUNKS:1/1`` becomes ``CHUNKS:i/n`` plus ``|NEXT:<file>`` unless last."""
        replacement = f"CHUNKS:{index}/{total}"
        if next_name:
            replacement += f"|NEXT:{next_name}"
        return header.replace(SINGLE_CHUNK_TOKEN, replacement, 1)


__all__ = ["ChunkSplitter", "DEFAULT_MAX_LINES"]
