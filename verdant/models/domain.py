"""Document and output domain models."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from verdant.core.utils import TextUtils

MAX_TAGS = 5
VRD_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_vrd_time(value: datetime) -> str:
    """Render a timestamp as UTC ISO 8601 with a ``Z`` suffix, second precision."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(VRD_TIME_FORMAT)


class Document(BaseModel):
    """One input text unit. Never mutated; transforms build new values."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Display name, not necessarily unique")
    raw_content: str
    modified_at: datetime = Field(default_factory=_utcnow)
    discovery_index: int = Field(default=0, ge=0, description="Position at discovery, breaks sort ties")

    @field_validator("modified_at")
    @classmethod
    def validate_modified_at(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC so documents always sort together."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def size_bytes(self) -> int:
        return TextUtils.byte_length(self.raw_content)

    @property
    def line_count(self) -> int:
        return TextUtils.count_lines(self.raw_content)

    def with_content(self, content: str) -> "Document":
        """Return a copy of this document holding ``content``."""
        return self.model_copy(update={"raw_content": content})


class VrdRecord(BaseModel):
    """One document packaged for a VRD payload."""

    name: str
    modified_at: datetime
    size: int = Field(ge=0)
    lines: int = Field(ge=0)
    tags: list[str] = Field(default_factory=list)
    headers: list[str] = Field(default_factory=list)
    body: str = ""
    code_blocks: list[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        """Tags form a sorted set of at most five entries."""
        if len(v) > MAX_TAGS:
            raise ValueError(f"at most {MAX_TAGS} tags allowed")
        if v != sorted(set(v)):
            raise ValueError("tags must be unique and sorted")
        return v


class CorpusMetadata(BaseModel):
    """Corpus-level numbers written into the VRD ``META`` line."""

    file_count: int = Field(ge=0)
    estimated_tokens: int = Field(ge=0)
    compression_ratio_percent: float
    generated_at: datetime = Field(default_factory=_utcnow)

    def render(self) -> str:
        return (
            f"META:{{files:{self.file_count},"
            f"tokens:{self.estimated_tokens},"
            f"compressed:{self.compression_ratio_percent:.1f}%,"
            f"generated:{format_vrd_time(self.generated_at)}}}"
        )


class CompressionStats(BaseModel):
    """Statistics of one run, reported by the caller."""

    original_bytes: int = Field(default=0, ge=0)
    compressed_bytes: int = Field(default=0, ge=0)
    original_lines: int = Field(default=0, ge=0)
    compressed_lines: int = Field(default=0, ge=0)
    chunk_count: int = Field(default=0, ge=0)
    duplicates_removed: int = Field(default=0, ge=0)
    emojis_removed: int = Field(default=0, ge=0)
    files_processed: int = Field(default=0, ge=0)
    files_skipped: int = Field(default=0, ge=0)

    @property
    def byte_reduction_percent(self) -> float:
        return TextUtils.reduction_percent(self.original_bytes, self.compressed_bytes)

    @property
    def line_reduction_percent(self) -> float:
        return TextUtils.reduction_percent(self.original_lines, self.compressed_lines)

    @property
    def original_tokens(self) -> int:
        return self.original_bytes // 4

    @property
    def compressed_tokens(self) -> int:
        return self.compressed_bytes // 4


class Chunk(BaseModel):
    """One slice of a line-budgeted split, ready to be written."""

    index: int = Field(ge=1)
    total: int = Field(ge=1)
    filename: str
    content: str
    line_count: int = Field(ge=0, description="Payload lines carried by this chunk")

    @property
    def is_last(self) -> bool:
        return self.index == self.total

    @property
    def estimated_tokens(self) -> int:
        return TextUtils.estimate_tokens(self.content)


__all__ = [
    "Document",
    "VrdRecord",
    "CorpusMetadata",
    "CompressionStats",
    "Chunk",
    "format_vrd_time",
]
