"""
Compression pipeline.

One configurable sequence of named stages, selected and parameterized by a
CompressionConfig:

    order -> dedup pre-pass -> per document:
        markdown: normalize -> structure -> semantic -> model adapter
        vrd:      tags + headers + code blocks + VRD body chain
    -> markdown header and F: blocks | VRD encoding
    -> optional chunk split

Everything runs sequentially in document order. The dedup seen set and the
statistics counters are the only state shared across documents.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from verdant.models.config import CompressionConfig, CompressionLevel, OutputFormat
from verdant.models.domain import Chunk, CompressionStats, Document, VrdRecord

from .chunking import ChunkSplitter
from .dedup import Deduplicator
from .logging import get_logger
from .text.adapters import ModelAdapter
from .text.normalize import TextNormalizer
from .text.semantic import NamedTransform, SemanticReducer
from .text.structure import StructuralCompressor
from .utils import TextUtils
from .vrd import VrdEncoder, VrdRecordBuilder, render_dictionary

logger = get_logger(__name__)

AI_DICTIONARY = [
    ("FN", "function"),
    ("PARAM", "parameter"),
    ("DOC", "documentation"),
    ("EX", "example"),
    ("INST", "installation"),
    ("CFG", "configuration"),
    ("AUTH", "authentication"),
    ("DB", "database"),
    ("MW", "middleware"),
    ("COMP", "component"),
]


@dataclass
class PipelineResult:
    """Output of one run."""

    payload: str
    stats: CompressionStats
    documents: list[Document] = field(default_factory=list)
    records: list[VrdRecord] = field(default_factory=list)


class CompressionPipeline:
    """Compress a document set according to one CompressionConfig."""

    def __init__(self, config: CompressionConfig):
        self.config = config
        self.normalizer = TextNormalizer(remove_emojis=config.remove_emojis)
        self.structure = StructuralCompressor(config.target_model)
        self.reducer = SemanticReducer(config)
        self.adapter = ModelAdapter(config.target_model)

    def run(self, documents: list[Document], generated_at: datetime | None = None) -> PipelineResult:
        """
        Compress ``documents`` into a single payload.

        Args:
            documents: Documents in discovery order
            generated_at: Timestamp for VRD metadata, now when omitted

        Returns:
            PipelineResult with payload and statistics
        """
        stats = CompressionStats(
            original_bytes=sum(doc.size_bytes for doc in documents),
            original_lines=sum(doc.line_count for doc in documents),
            files_processed=len(documents),
        )

        ordered = self.order(documents)
        deduplicated = self.deduplicate(ordered, stats)

        if self.config.remove_emojis:
            stats.emojis_removed = sum(
                TextNormalizer.count_emojis(doc.raw_content) for doc in deduplicated
            )
            if stats.emojis_removed:
                logger.info(
                    "Removed emojis",
                    count=stats.emojis_removed,
                    tokens_saved=stats.emojis_removed * 2,
                )

        records: list[VrdRecord] = []
        if self.config.output_format is OutputFormat.VRD:
            payload, records = self.encode_vrd(deduplicated, stats.original_bytes, generated_at)
        else:
            payload = self.encode_markdown(deduplicated)

        stats.compressed_bytes = TextUtils.byte_length(payload)
        stats.compressed_lines = TextUtils.count_lines(payload)

        return PipelineResult(
            payload=payload, stats=stats, documents=deduplicated, records=records
        )

    def order(self, documents: list[Document]) -> list[Document]:
        """Oldest first when chronological, ties keep discovery order."""
        ordered = sorted(documents, key=lambda doc: doc.discovery_index)
        if self.config.chronological:
            ordered = sorted(ordered, key=lambda doc: doc.modified_at)
            logger.debug("Files sorted chronologically (oldest → newest)")
        return ordered

    def deduplicate(self, documents: list[Document], stats: CompressionStats) -> list[Document]:
        """Cross-document paragraph dedup; skipped at the lowest tier."""
        if self.config.level is CompressionLevel.LOW:
            return list(documents)

        logger.info("Removing duplicate content across files")
        deduplicator = Deduplicator()
        pairs = deduplicator.deduplicate([(doc.name, doc.raw_content) for doc in documents])
        stats.duplicates_removed = deduplicator.duplicates_removed
        if deduplicator.duplicates_removed:
            logger.info("Removed duplicate paragraphs", count=deduplicator.duplicates_removed)
        return [doc.with_content(content) for doc, (_, content) in zip(documents, pairs)]

    # Markdown output

    def markdown_stages(self) -> list[NamedTransform]:
        """Named per-document transforms for the configured tier, in order."""
        stages: list[NamedTransform] = []
        if self.config.remove_emojis:
            stages.append(("remove_emojis", self.normalizer.remove_emojis))
        stages += [
            ("collapse_whitespace", self.normalizer.collapse_whitespace),
            ("remove_empty_lines", self.normalizer.remove_empty_lines),
            ("compress_headers", self.structure.compress_headers),
            ("compress_formatting", self.structure.compress_formatting),
        ]
        if self.config.level.at_least(CompressionLevel.MEDIUM):
            stages += [
                ("compress_code_blocks", self.structure.compress_code_blocks),
                ("compress_lists", self.structure.compress_lists),
            ]
        stages += self.reducer.markdown_stages()
        stages.append(("model_adapter", self.adapter.adapt))
        return stages

    def compress_document(self, content: str) -> str:
        for _, transform in self.markdown_stages():
            content = transform(content)
        return content

    def markdown_header(self) -> str:
        header = f"TARGET:{self.config.target_model.value.upper()}\n"
        if self.config.ai_mode:
            header += "MODE:AI_OPTIMIZED\n"
            header += render_dictionary(AI_DICTIONARY) + "\n"
        if self.adapter.note:
            header += f"NOTE:{self.adapter.note}\n"
        return header + "---\n"

    def encode_markdown(self, documents: list[Document]) -> str:
        parts = [self.markdown_header()]
        for doc in documents:
            logger.debug("Compressing document", name=doc.name)
            parts.append(f"F:{doc.name}\n{self.compress_document(doc.raw_content)}\n|\n")
        return "".join(parts)

    # VRD output

    def encode_vrd(
        self,
        documents: list[Document],
        original_bytes: int,
        generated_at: datetime | None = None,
    ) -> tuple[str, list[VrdRecord]]:
        if len(documents) == 1:
            logger.warning(
                "VRD format with a single file may be less efficient due to format overhead; "
                "VRD is optimized for multi-file documentation sets"
            )

        builder = VrdRecordBuilder(self.config)
        records = []
        for doc in documents:
            logger.debug("Building VRD record", name=doc.name)
            records.append(builder.build(doc))

        payload = VrdEncoder(self.config).encode(records, original_bytes, generated_at)
        return payload, records

    # Chunking

    def split(self, result: PipelineResult, name_for: Callable[[int], str]) -> list[Chunk]:
        """Split the payload by the configured line budget and update statistics."""
        splitter = ChunkSplitter(self.config.max_lines)
        chunks = splitter.split(result.payload, self.config.output_format, name_for)
        logger.info(
            "Creating chunks", count=len(chunks), max_lines=self.config.max_lines
        )

        result.stats.chunk_count = len(chunks)
        result.stats.compressed_bytes = sum(
            TextUtils.byte_length(chunk.content) for chunk in chunks
        )
        result.stats.compressed_lines = sum(
            TextUtils.count_lines(chunk.content) for chunk in chunks
        )
        return chunks


__all__ = ["CompressionPipeline", "PipelineResult", "AI_DICTIONARY"]
