"""
Unit tests for chunk splitting.
"""

import pytest

from verdant.core.chunking import ChunkSplitter
from verdant.core.utils import TextUtils
from verdant.models.config import OutputFormat


def name_for(index):
    return f"out_chunk_{index}.md"


def vrd_name_for(index):
    return f"out_chunk_{index}.vrd"


class TestMarkdownChunks:
    """Test markdown chunk framing."""

    def setup_method(self):
        self.payload = "\n".join(f"line {i}" for i in range(1700))
        self.chunks = ChunkSplitter(800).split(self.payload, OutputFormat.MARKDOWN, name_for)

    def test_chunk_sizes(self):
        """1700 lines over 800 make 800, 800 and 100."""
        assert len(self.chunks) == 3
        assert [chunk.line_count for chunk in self.chunks] == [800, 800, 100]
        assert [chunk.index for chunk in self.chunks] == [1, 2, 3]
        assert all(chunk.total == 3 for chunk in self.chunks)

    def test_filenames(self):
        """Chunk filenames come from the naming callback."""
        assert [chunk.filename for chunk in self.chunks] == [
            "out_chunk_1.md",
            "out_chunk_2.md",
            "out_chunk_3.md",
        ]

    def test_next_links(self):
        """Every chunk but the last links to its successor."""
        assert self.chunks[0].content.startswith("CHUNK:1/3 | NEXT:out_chunk_2.md\nline 0\n")
        assert self.chunks[1].content.startswith("CHUNK:2/3 | NEXT:out_chunk_3.md\nline 800\n")
        assert self.chunks[2].content.startswith("CHUNK:3/3\nline 1600\n")
        assert "NEXT:" not in self.chunks[2].content
        assert self.chunks[2].is_last

    def test_footer(self):
        """Footer carries the line count and a token estimate of header plus lines."""
        last = self.chunks[2]
        body = "CHUNK:3/3\n" + "\n".join(f"line {i}" for i in range(1600, 1700))
        tokens = TextUtils.estimate_tokens(body)
        assert last.content == body + f"\n---\nCHUNK_END | Lines:100 | Est.tokens:{tokens}"

    def test_lines_preserved_in_order(self):
        """Concatenated chunk bodies give back the payload lines."""
        lines = []
        for chunk in self.chunks:
            lines.extend(chunk.content.split("\n")[1:-2])
        assert lines == self.payload.split("\n")

    def test_single_chunk(self):
        """A short payload is one chunk without a link."""
        chunks = ChunkSplitter(800).split("a\nb", OutputFormat.MARKDOWN, name_for)
        assert len(chunks) == 1
        assert chunks[0].content.startswith("CHUNK:1/1\na\nb\n---\n")

    def test_empty_payload(self):
        """Nothing to split, nothing returned."""
        assert ChunkSplitter(800).split("", OutputFormat.MARKDOWN, name_for) == []

    def test_invalid_budget(self):
        """Budget must be positive."""
        with pytest.raises(ValueError):
            ChunkSplitter(0)


class TestVrdChunks:
    """Test VRD chunk framing."""

    HEADER = "VRD1.0|TARGET:CLAUDE|MODE:MEDIUM|CHUNKS:1/1"

    def setup_method(self):
        payload = "\n".join([self.HEADER, "META:{x}", "DICT:{y}", "---", "F:a.md", "|"]) + "\n"
        self.chunks = ChunkSplitter(3).split(payload, OutputFormat.VRD, vrd_name_for)

    def test_chunk_count(self):
        """Continuation chunks leave room for the repeated header."""
        assert len(self.chunks) == 3
        assert [chunk.line_count for chunk in self.chunks] == [3, 2, 1]

    def test_header_rewritten(self):
        """Each chunk starts with its own rewritten header line."""
        first_lines = [chunk.content.split("\n")[0] for chunk in self.chunks]
        assert first_lines == [
            "VRD1.0|TARGET:CLAUDE|MODE:MEDIUM|CHUNKS:1/3|NEXT:out_chunk_2.vrd",
            "VRD1.0|TARGET:CLAUDE|MODE:MEDIUM|CHUNKS:2/3|NEXT:out_chunk_3.vrd",
            "VRD1.0|TARGET:CLAUDE|MODE:MEDIUM|CHUNKS:3/3",
        ]

    def test_exactly_one_header_per_chunk(self):
        """The original header is not duplicated into the first chunk."""
        for chunk in self.chunks:
            headers = [line for line in chunk.content.split("\n") if line.startswith("VRD1.0|")]
            assert len(headers) == 1

    def test_content_after_header(self):
        """Payload lines follow the header in order."""
        assert self.chunks[0].content.split("\n")[1:] == ["META:{x}", "DICT:{y}"]
        assert self.chunks[1].content.split("\n")[1:] == ["---", "F:a.md"]
        assert self.chunks[2].content.split("\n")[1:] == ["|"]

    def test_no_markdown_footer(self):
        """VRD chunks have no CHUNK_END footer."""
        assert all("CHUNK_END" not in chunk.content for chunk in self.chunks)

    def test_chunks_stay_within_budget(self):
        """No chunk, header included, exceeds the line budget."""
        payload = "\n".join([self.HEADER] + [f"line {i}" for i in range(1699)])
        chunks = ChunkSplitter(800).split(payload, OutputFormat.VRD, vrd_name_for)

        assert [len(chunk.content.split("\n")) for chunk in chunks] == [800, 800, 102]
        assert [chunk.line_count for chunk in chunks] == [800, 799, 101]
        assert sum(chunk.line_count for chunk in chunks) == 1700

    def test_single_line_budget(self):
        """A one-line budget still makes progress, one payload line per chunk."""
        payload = "\n".join([self.HEADER, "META:{x}", "---"])
        chunks = ChunkSplitter(1).split(payload, OutputFormat.VRD, vrd_name_for)
        assert [chunk.line_count for chunk in chunks] == [1, 1, 1]
        assert chunks[1].content == (
            "VRD1.0|TARGET:CLAUDE|MODE:MEDIUM|CHUNKS:2/3|NEXT:out_chunk_3.vrd\nMETA:{x}"
        )

    def test_rewrite_vrd_header(self):
        """Only the chunk field changes."""
        assert ChunkSplitter.rewrite_vrd_header(self.HEADER, 2, 2, None) == (
            "VRD1.0|TARGET:CLAUDE|MODE:MEDIUM|CHUNKS:2/2"
        )
