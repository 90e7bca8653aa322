"""Filesystem edges of the CLI: discovery, reading, output naming and writing."""

from datetime import datetime, timezone
from pathlib import Path

from verdant.core.errors import DocumentReadError, OutputWriteError
from verdant.core.logging import get_logger
from verdant.core.utils import FileUtils
from verdant.models.config import OutputFormat
from verdant.models.domain import Chunk, Document

logger = get_logger(__name__)

MARKDOWN_SUFFIX = ".md"


def discover_markdown_files(input_dir: Path) -> list[Path]:
    """All ``*.md`` files below ``input_dir`` in a stable order."""
    return sorted(
        path for path in input_dir.rglob(f"*{MARKDOWN_SUFFIX}") if path.is_file()
    )


def read_document(path: Path, index: int = 0) -> Document:
    """
    Read one file into a Document.

    Raises:
        DocumentReadError: If the file cannot be read or decoded
    """
    try:
        content = path.read_text(encoding="utf-8")
        modified_at = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(str(path), str(e)) from e

    return Document(
        name=path.name,
        raw_content=content,
        modified_at=modified_at,
        discovery_index=index,
    )


def read_documents(paths: list[Path]) -> tuple[list[Document], list[DocumentReadError]]:
    """Read every path, skipping unreadable files instead of aborting."""
    documents: list[Document] = []
    errors: list[DocumentReadError] = []
    for path in paths:
        try:
            documents.append(read_document(path, len(documents)))
            logger.debug("Read document", path=str(path))
        except DocumentReadError as e:
            logger.error("Skipping unreadable document", path=e.path, error=e.reason)
            errors.append(e)
    return documents, errors


def output_path(output: str, output_format: OutputFormat) -> Path:
    """Single-file output: ``<output>.<ext>``."""
    return Path(f"{output}.{output_format.extension}")


def chunk_filename(output: str, index: int, output_format: OutputFormat) -> str:
    """``<stem>_chunk_<i>.<ext>``, or ``<stem>_<i>.<ext>`` when the stem already says chunk."""
    stem = Path(output).name
    if "chunk" in stem:
        return f"{stem}_{index}.{output_format.extension}"
    return f"{stem}_chunk_{index}.{output_format.extension}"


def write_text(path: Path, content: str) -> None:
    """
    Write one output file.

    Raises:
        OutputWriteError: If the file cannot be written
    """
    try:
        FileUtils.ensure_directory(path.parent)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(str(path), str(e)) from e


def write_chunks(chunks: list[Chunk], directory: Path) -> list[OutputWriteError]:
    """Write every chunk; a failed chunk does not stop the remaining ones."""
    errors: list[OutputWriteError] = []
    for chunk in chunks:
        try:
            write_text(directory / chunk.filename, chunk.content)
            logger.info("Created chunk", file=chunk.filename, lines=chunk.line_count)
        except OutputWriteError as e:
            logger.error("Failed to write chunk", file=e.path, error=e.reason)
            errors.append(e)
    return errors


__all__ = [
    "discover_markdown_files",
    "read_document",
    "read_documents",
    "output_path",
    "chunk_filename",
    "write_text",
    "write_chunks",
]
