"""Pattern-based text transforms applied to each document."""

from .adapters import ModelAdapter
from .normalize import TextNormalizer
from .semantic import SemanticReducer
from .structure import StructuralCompressor

__all__ = ["ModelAdapter", "TextNormalizer", "SemanticReducer", "StructuralCompressor"]
