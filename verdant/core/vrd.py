"""VRD encoding: a compact, self-describing multi-document text format.

Layout::

    VRD1.0|TARGET:CLAUDE|MODE:MEDIUM|CHUNKS:1/1
    META:{files:2,tokens:311,compressed:61.4%,generated:2026-10-17T09:12:44Z}
    DICT:{FN=function,PARAM=parameter,...}
    ---
    F:<name>|D:<modified>|S:<bytes>|L:<lines>|T:<tag,tag>
    H:<header,header>
    C:<compressed body>
    X:<code block>
    |

    F:<next record>
    ...

``H:`` and ``C:`` lines are omitted when empty; there is one ``X:`` line per
fenced code block. Records are separated by one blank line.
"""

import logging
from datetime import datetime

from verdant.models.config import CompressionConfig
from verdant.models.domain import CorpusMetadata, Document, VrdRecord, format_vrd_time

from .code_blocks import CodeBlockExtractor
from .tagging import TagExtractor
from .text.normalize import TextNormalizer
from .text.semantic import SemanticReducer
from .utils import TextUtils

logger = logging.getLogger(__name__)

VERSION = "VRD1.0"

# Zero-valued metadata emitted first and swapped for real numbers once the
# payload size is known. Every occurrence is substituted, so the placeholder
# never survives into a payload even when a document quotes it.
META_PLACEHOLDER = "META:{files:0,tokens:0,compressed:0.0%,generated:2025-01-01T00:00:00Z}"

DICTIONARY = [
    ("FN", "function"),
    ("PARAM", "parameter"),
    ("AUTH", "authentication"),
    ("DB", "database"),
    ("API", "application programming interface"),
    ("CFG", "configuration"),
    ("DOC", "documentation"),
    ("IMPL", "implementation"),
    ("ENV", "environment"),
    ("REPO", "repository"),
]

SEPARATOR = "---"
RECORD_END = "|"

# Rendering the real metadata can change the payload length, which feeds back
# into the metadata. A couple of rounds always settles it.
MAX_METADATA_ROUNDS = 5


def render_dictionary(entries: list[tuple[str, str]]) -> str:
    """``DICT:{K1=v1,K2=v2}``. Only called with a non-empty table."""
    return "DICT:{" + ",".join(f"{key}={value}" for key, value in entries) + "}"


def render_header(config: CompressionConfig, chunk: int = 1, total: int = 1) -> str:
    return (
        f"{VERSION}|TARGET:{config.target_model.value.upper()}"
        f"|MODE:{config.level.value.upper()}|CHUNKS:{chunk}/{total}"
    )


class VrdRecordBuilder:
    """Turn one document into a VrdRecord."""

    def __init__(self, config: CompressionConfig):
        self.config = config
        self.tagger = TagExtractor()
        self.code_extractor = CodeBlockExtractor()
        self.reducer = SemanticReducer(config)

    def build(self, document: Document) -> VrdRecord:
        content = document.raw_content
        processed = content
        if self.config.remove_emojis:
            processed = TextNormalizer.remove_emojis(processed)

        return VrdRecord(
            name=document.name,
            modified_at=document.modified_at,
            size=document.size_bytes,
            lines=document.line_count,
            tags=self.tagger.extract(content),
            headers=self.extract_headers(content),
            code_blocks=self.code_extractor.extract_compacted(processed),
            body=self.compress_body(processed),
        )

    def extract_headers(self, content: str) -> list[str]:
        """Every line starting with ``#``, markers stripped, in document order."""
        headers = []
        for line in TextUtils.split_lines(content):
            trimmed = line.strip()
            if not trimmed.startswith("#"):
                continue
            header = trimmed.lstrip("#").strip()
            if self.config.remove_emojis:
                header = TextNormalizer.remove_emojis(header).strip()
            headers.append(header)
        return headers

    def compress_body(self, content: str) -> str:
        """Remove code blocks and header lines, then run the VRD reduction chain."""
        body = self.code_extractor.strip_code_blocks(content)
        body = "\n".join(
            line
            for line in TextUtils.split_lines(body)
            if not line.lstrip().startswith("#")
        )
        return self.reducer.reduce_vrd(body)


class VrdEncoder:
    """Assemble records and corpus metadata into a VRD payload."""

    def __init__(self, config: CompressionConfig):
        self.config = config

    def encode(
        self,
        records: list[VrdRecord],
        original_bytes: int,
        generated_at: datetime | None = None,
    ) -> str:
        """
        Build the complete payload.

        Args:
            records: Records in processing order
            original_bytes: Size of the uncompressed corpus
            generated_at: Generation timestamp, now when omitted

        Returns:
            The payload with real metadata in place of the placeholder
        """
        draft = self.render(records)
        return self.substitute_metadata(draft, len(records), original_bytes, generated_at)

    def render(self, records: list[VrdRecord]) -> str:
        """Payload with the placeholder metadata line."""
        parts = [
            render_header(self.config) + "\n",
            META_PLACEHOLDER + "\n",
            render_dictionary(DICTIONARY) + "\n",
            SEPARATOR + "\n",
        ]
        for i, record in enumerate(records):
            if i > 0:
                parts.append("\n")
            parts.append(self.render_record(record))
        return "".join(parts)

    @staticmethod
    def render_record(record: VrdRecord) -> str:
        lines = [
            f"F:{record.name}|D:{format_vrd_time(record.modified_at)}"
            f"|S:{record.size}|L:{record.lines}|T:{','.join(record.tags)}"
        ]
        if record.headers:
            lines.append(f"H:{','.join(record.headers)}")
        body = record.body.strip()
        if body:
            lines.append(f"C:{body}")
        lines.extend(f"X:{block}" for block in record.code_blocks)
        lines.append(RECORD_END)
        return "\n".join(lines) + "\n"

    def substitute_metadata(
        self,
        draft: str,
        file_count: int,
        original_bytes: int,
        generated_at: datetime | None = None,
    ) -> str:
        """Replace the placeholder so the numbers describe the emitted payload."""
        metadata = CorpusMetadata(
            file_count=file_count,
            estimated_tokens=0,
            compression_ratio_percent=0.0,
        )
        if generated_at is not None:
            metadata.generated_at = generated_at

        size = TextUtils.byte_length(draft)
        payload = draft
        for _ in range(MAX_METADATA_ROUNDS):
            metadata.estimated_tokens = size // 4
            metadata.compression_ratio_percent = TextUtils.reduction_percent(
                original_bytes, size
            )
            payload = draft.replace(META_PLACEHOLDER, metadata.render())
            final_size = TextUtils.byte_length(payload)
            if final_size == size:
                break
            size = final_size
        else:
            logger.warning(f"VRD metadata did not settle after {MAX_METADATA_ROUNDS} rounds")

        return payload


__all__ = [
    "VrdEncoder",
    "VrdRecordBuilder",
    "META_PLACEHOLDER",
    "DICTIONARY",
    "render_header",
    "render_dictionary",
]
