"""
Unit tests for the compression pipeline.
"""

from datetime import datetime, timezone

from verdant.core.pipeline import CompressionPipeline
from verdant.core.utils import TextUtils
from verdant.core.vrd import META_PLACEHOLDER
from verdant.models.config import CompressionConfig
from verdant.models.domain import Document

PARAGRAPH = "This paragraph is repeated across several files verbatim."

CLAUDE_HEADER = "TARGET:CLAUDE\nNOTE:Structured data with technical notation\n---\n"


def doc(name, content, month=1, index=0):
    return Document(
        name=name,
        raw_content=content,
        modified_at=datetime(2024, month, 1, tzinfo=timezone.utc),
        discovery_index=index,
    )


def pipeline(**config):
    return CompressionPipeline(CompressionConfig(**config))


class TestMarkdownOutput:
    """Test the annotated markdown output path."""

    def test_basic_document(self):
        """Whitespace, headers and lists are compressed under a model header."""
        result = pipeline().run([doc("a.md", "# Title\n\n\nSome   text here\n* item")])
        assert result.payload == CLAUDE_HEADER + "F:a.md\nH1:Title\nSome text here\n•item\n|\n"

    def test_header_example(self):
        """Headers become H-notation, deep headers stay."""
        compressor = pipeline()
        assert compressor.compress_document("## Setup Guide") == "H2:Setup Guide"
        assert compressor.compress_document("##### Too Deep") == "##### Too Deep"

    def test_code_block_example(self):
        """A fenced block collapses to one CODE line."""
        content = "```js\nconst x = 1;\nreturn x;\n```"
        assert pipeline().compress_document(content) == "CODE(js):const x = 1;|return x;"

    def test_low_keeps_code_and_lists(self):
        """Code blocks and lists are only rewritten from medium up."""
        content = "* item\n```js\nx\n```"
        assert pipeline(level="low").compress_document(content) == content

    def test_gpt_sections(self):
        """GPT output uses explicit section markers."""
        result = pipeline(target_model="gpt").run([doc("a.md", "# Title\ntext")])
        assert result.payload == (
            "TARGET:GPT\nNOTE:Consistent formatting with explicit context\n---\n"
            "F:a.md\nSECTION_L1:Title\ntext\n|\n"
        )

    def test_other_model_has_no_note(self):
        """Unknown models get no NOTE line."""
        result = pipeline(target_model="llama").run([])
        assert result.payload == "TARGET:OTHER\n---\n"

    def test_ai_mode_header(self):
        """ai_mode adds the mode marker and the abbreviation dictionary."""
        header = pipeline(ai_mode=True).markdown_header()
        assert header.startswith("TARGET:CLAUDE\nMODE:AI_OPTIMIZED\nDICT:{FN=function,")
        assert "MW=middleware,COMP=component}\n" in header
        assert header.endswith("NOTE:Structured data with technical notation\n---\n")

    def test_extreme_document(self):
        """The extreme tier drops articles and abbreviates."""
        result = pipeline(level="extreme").compress_document(
            "Please note that the function returns a value"
        )
        assert result == " FN → value"

    def test_emojis_kept_when_disabled(self):
        """Emoji removal can be switched off."""
        compressor = pipeline(remove_emojis=False)
        assert compressor.compress_document("Ship it 🚀") == "Ship it 🚀"
        assert pipeline().compress_document("Ship it 🚀") == "Ship it "

    def test_stage_names_low(self):
        """The lowest tier runs only the structural basics."""
        names = [name for name, _ in pipeline(level="low").markdown_stages()]
        assert names == [
            "remove_emojis",
            "collapse_whitespace",
            "remove_empty_lines",
            "compress_headers",
            "compress_formatting",
            "model_adapter",
        ]

    def test_stage_names_extreme(self):
        """Higher tiers add code, list and semantic stages before the adapter."""
        names = [name for name, _ in pipeline(level="extreme", remove_emojis=False).markdown_stages()]
        assert names == [
            "collapse_whitespace",
            "remove_empty_lines",
            "compress_headers",
            "compress_formatting",
            "compress_code_blocks",
            "compress_lists",
            "remove_fluff",
            "strip_connectors",
            "strip_intensifiers",
            "ai_notation",
            "model_adapter",
        ]


class TestOrdering:
    """Test document ordering."""

    def setup_method(self):
        self.documents = [
            doc("new.md", "new", month=3, index=0),
            doc("old.md", "old", month=1, index=1),
            doc("tie.md", "tie", month=1, index=2),
        ]

    def test_chronological(self):
        """Oldest first, ties in discovery order."""
        result = pipeline().run(self.documents)
        assert [d.name for d in result.documents] == ["old.md", "tie.md", "new.md"]
        assert result.payload.index("F:old.md") < result.payload.index("F:new.md")

    def test_naive_and_aware_timestamps(self):
        """Naive times are read as UTC and sort alongside aware ones."""
        documents = [
            Document(name="now.md", raw_content="now", discovery_index=0),
            Document(
                name="naive.md",
                raw_content="naive",
                modified_at=datetime(2024, 1, 1),
                discovery_index=1,
            ),
            doc("aware.md", "aware", month=2, index=2),
        ]
        result = pipeline().run(documents)
        assert [d.name for d in result.documents] == ["naive.md", "aware.md", "now.md"]

    def test_discovery_order(self):
        """Without chronological sorting the discovery order is kept."""
        result = pipeline(chronological=False).run(list(reversed(self.documents)))
        assert [d.name for d in result.documents] == ["new.md", "old.md", "tie.md"]


class TestDeduplication:
    """Test the cross-document pre-pass."""

    def test_duplicates_removed(self):
        """The second copy of a long paragraph is dropped."""
        documents = [
            doc("a.md", f"intro\n{PARAGRAPH}", index=0),
            doc("b.md", f"{PARAGRAPH}\noutro", index=1),
        ]
        result = pipeline().run(documents)

        assert result.stats.duplicates_removed == 1
        assert result.payload.count(PARAGRAPH) == 1
        assert "F:b.md\noutro\n|\n" in result.payload

    def test_low_skips_dedup(self):
        """The lowest tier keeps every paragraph."""
        documents = [doc("a.md", PARAGRAPH, index=0), doc("b.md", PARAGRAPH, index=1)]
        result = pipeline(level="low").run(documents)

        assert result.stats.duplicates_removed == 0
        assert result.payload.count(PARAGRAPH) == 2

    def test_inputs_not_mutated(self):
        """Documents passed in keep their content."""
        documents = [doc("a.md", PARAGRAPH, index=0), doc("b.md", PARAGRAPH, index=1)]
        pipeline().run(documents)
        assert documents[1].raw_content == PARAGRAPH


class TestStatistics:
    """Test run statistics."""

    def test_sizes(self):
        """Original sizes are raw input, compressed sizes the payload."""
        documents = [doc("a.md", "# Title\n\n\nbody 😀\n", index=0), doc("b.md", "x", index=1)]
        result = pipeline().run(documents)
        stats = result.stats

        assert stats.original_bytes == sum(d.size_bytes for d in documents)
        assert stats.original_lines == 5
        assert stats.compressed_bytes == TextUtils.byte_length(result.payload)
        assert stats.compressed_lines == TextUtils.count_lines(result.payload)
        assert stats.files_processed == 2
        assert stats.emojis_removed == 1

    def test_emojis_not_counted_when_kept(self):
        """No emoji count without emoji removal."""
        result = pipeline(remove_emojis=False).run([doc("a.md", "🚀")])
        assert result.stats.emojis_removed == 0

    def test_empty_run(self):
        """No documents gives only the header."""
        result = pipeline().run([])
        assert result.payload == CLAUDE_HEADER
        assert result.stats.original_bytes == 0
        assert result.stats.byte_reduction_percent == 0.0


class TestVrdOutput:
    """Test the VRD output path."""

    def test_vrd_payload(self):
        """One record per document with real metadata."""
        documents = [
            doc("a.md", "# Intro\nThe python application", index=0),
            doc("b.md", "## Usage\n- run it", index=1),
        ]
        generated = datetime(2026, 1, 1, tzinfo=timezone.utc)
        result = pipeline(output_format="vrd").run(documents, generated_at=generated)

        assert result.payload.startswith(
            "VRD1.0|TARGET:CLAUDE|MODE:MEDIUM|CHUNKS:1/1\nMETA:{files:2,"
        )
        assert META_PLACEHOLDER not in result.payload
        assert "generated:2026-01-01T00:00:00Z" in result.payload
        assert [record.name for record in result.records] == ["a.md", "b.md"]
        assert "H:Intro\nC:The python app\n|\n" in result.payload
        assert "H:Usage\nC:•run it\n|\n" in result.payload
        assert result.stats.compressed_bytes == TextUtils.byte_length(result.payload)

    def test_quoted_placeholder_replaced(self):
        """A document body quoting the metadata placeholder does not leak it."""
        documents = [doc("meta.md", f"Example:\n{META_PLACEHOLDER}")]
        result = pipeline(output_format="vrd").run(documents)
        assert META_PLACEHOLDER not in result.payload
        assert result.payload.count("META:{files:1,") == 2

    def test_single_document_vrd(self):
        """A single document still encodes."""
        result = pipeline(output_format="vrd").run([doc("only.md", "text")])
        assert "F:only.md|" in result.payload
        assert "META:{files:1," in result.payload


class TestSplit:
    """Test chunking through the pipeline."""

    def test_split_updates_stats(self):
        """Chunk count and compressed sizes come from the chunks."""
        compressor = pipeline(chunk=True, max_lines=3)
        documents = [doc(f"{i}.md", f"line {i}\nmore {i}", index=i) for i in range(4)]
        result = compressor.run(documents)

        chunks = compressor.split(result, lambda index: f"out_chunk_{index}.md")

        total_lines = TextUtils.count_lines(result.payload)
        assert len(chunks) == (total_lines + 2) // 3
        assert result.stats.chunk_count == len(chunks)
        assert result.stats.compressed_bytes == sum(
            TextUtils.byte_length(chunk.content) for chunk in chunks
        )
        assert chunks[0].content.startswith("CHUNK:1/")
