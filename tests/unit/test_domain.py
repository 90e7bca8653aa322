"""
Unit tests for domain models.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from verdant.models.domain import (
    Chunk,
    CompressionStats,
    CorpusMetadata,
    Document,
    VrdRecord,
    format_vrd_time,
)

MODIFIED = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)


class TestDocument:
    """Test Document."""

    def test_measurements(self):
        """Size is UTF-8 bytes, lines follow the shared line rules."""
        doc = Document(name="a.md", raw_content="héllo\nworld\n")
        assert doc.size_bytes == 13
        assert doc.line_count == 2

    def test_default_timestamp_is_utc(self):
        """Missing modification times default to now in UTC."""
        doc = Document(name="a.md", raw_content="")
        assert doc.modified_at.tzinfo is not None

    def test_naive_timestamp_read_as_utc(self):
        """Naive modification times get the UTC zone."""
        doc = Document(name="a.md", raw_content="", modified_at=datetime(2024, 1, 1, 8, 30))
        assert doc.modified_at == datetime(2024, 1, 1, 8, 30, tzinfo=timezone.utc)

    def test_with_content(self):
        """A new document is returned, the original is unchanged."""
        doc = Document(name="a.md", raw_content="old", modified_at=MODIFIED, discovery_index=3)
        updated = doc.with_content("new")

        assert updated.raw_content == "new"
        assert updated.name == "a.md"
        assert updated.modified_at == MODIFIED
        assert updated.discovery_index == 3
        assert doc.raw_content == "old"

    def test_frozen(self):
        """Documents are immutable."""
        doc = Document(name="a.md", raw_content="x")
        with pytest.raises(ValidationError):
            doc.raw_content = "y"


class TestVrdRecord:
    """Test VrdRecord validation."""

    def test_valid_tags(self):
        """Sorted unique tags are accepted."""
        record = VrdRecord(name="a.md", modified_at=MODIFIED, size=1, lines=1, tags=["a", "b"])
        assert record.tags == ["a", "b"]

    def test_too_many_tags(self):
        """More than five tags is rejected."""
        with pytest.raises(ValidationError):
            VrdRecord(
                name="a.md",
                modified_at=MODIFIED,
                size=1,
                lines=1,
                tags=["a", "b", "c", "d", "e", "f"],
            )

    def test_unsorted_tags(self):
        """Tags must be sorted."""
        with pytest.raises(ValidationError):
            VrdRecord(name="a.md", modified_at=MODIFIED, size=1, lines=1, tags=["b", "a"])


class TestCorpusMetadata:
    """Test metadata rendering."""

    def test_render(self):
        """Ratio has one decimal, time is UTC with Z."""
        metadata = CorpusMetadata(
            file_count=2,
            estimated_tokens=311,
            compression_ratio_percent=61.44,
            generated_at=MODIFIED,
        )
        assert metadata.render() == (
            "META:{files:2,tokens:311,compressed:61.4%,generated:2024-05-06T07:08:09Z}"
        )

    def test_format_naive_time(self):
        """Naive timestamps are rendered as given."""
        assert format_vrd_time(datetime(2024, 1, 1, 0, 0, 0)) == "2024-01-01T00:00:00Z"


class TestCompressionStats:
    """Test statistics helpers."""

    def test_reductions(self):
        """Reductions and token estimates."""
        stats = CompressionStats(
            original_bytes=1000,
            compressed_bytes=250,
            original_lines=40,
            compressed_lines=30,
        )
        assert stats.byte_reduction_percent == 75.0
        assert stats.line_reduction_percent == 25.0
        assert stats.original_tokens == 250
        assert stats.compressed_tokens == 62

    def test_empty_run(self):
        """Nothing in, zero reduction."""
        stats = CompressionStats()
        assert stats.byte_reduction_percent == 0.0
        assert stats.line_reduction_percent == 0.0


class TestChunk:
    """Test Chunk."""

    def test_is_last(self):
        """Only the final chunk is last."""
        first = Chunk(index=1, total=2, filename="a_chunk_1.md", content="abcd", line_count=1)
        last = Chunk(index=2, total=2, filename="a_chunk_2.md", content="", line_count=0)
        assert not first.is_last
        assert last.is_last
        assert first.estimated_tokens == 1
