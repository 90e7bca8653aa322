"""
Pydantic models for Verdant.

- config: compression tiers, target models, output formats, CLI defaults
- domain: documents, VRD records, corpus metadata, statistics, chunks
"""

from verdant.models.config import (
    CLIConfig,
    CompressionConfig,
    CompressionLevel,
    OutputFormat,
    TargetModel,
)
from verdant.models.domain import (
    Chunk,
    CompressionStats,
    CorpusMetadata,
    Document,
    VrdRecord,
    format_vrd_time,
)

__all__ = [
    "CLIConfig",
    "CompressionConfig",
    "CompressionLevel",
    "OutputFormat",
    "TargetModel",
    "Chunk",
    "CompressionStats",
    "CorpusMetadata",
    "Document",
    "VrdRecord",
    "format_vrd_time",
]
