"""
Common utility functions and patterns.

Size, line and token measurements are shared by the pipeline, the VRD
encoder and the chunk splitter, so they must agree on what a "line" and a
"byte" are.
"""

from pathlib import Path

# One token is roughly four bytes of English text
BYTES_PER_TOKEN = 4


class TextUtils:
    """
    Text measurement utility functions.
    """

    @staticmethod
    def byte_length(text: str) -> int:
        """
        UTF-8 encoded size of text.

        Args:
            text: Text to measure

        Returns:
            Number of bytes
        """
        return len(text.encode("utf-8"))

    @staticmethod
    def split_lines(text: str) -> list[str]:
        """
        Split text into lines on ``\\n`` only.

        A trailing newline does not open an empty final line and a ``\\r``
        before the newline is dropped. Unlike ``str.splitlines`` no other
        separators (form feed, unicode line separators) are honoured.

        Args:
            text: Text to split

        Returns:
            List of lines
        """
        if not text:
            return []
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]

    @staticmethod
    def count_lines(text: str) -> int:
        """Count lines using ``split_lines`` semantics."""
        if not text:
            return 0
        return text.count("\n") + (0 if text.endswith("\n") else 1)

    @staticmethod
    def estimate_tokens(text: str) -> int:
        """Estimate the token count of text (bytes / 4, integer division)."""
        return TextUtils.byte_length(text) // BYTES_PER_TOKEN

    @staticmethod
    def reduction_percent(original: int, compressed: int) -> float:
        """
        Percentage saved going from ``original`` to ``compressed``.

        Returns 0.0 when there was nothing to compress.
        """
        if original <= 0:
            return 0.0
        return (original - compressed) / original * 100.0

    @staticmethod
    def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
        """
        Truncate text to maximum length with suffix.

        Args:
            text: Text to truncate
            max_length: Maximum length
            suffix: Suffix to add if truncated

        Returns:
            Truncated text
        """
        if len(text) <= max_length:
            return text

        return text[:max_length] + suffix


class FileUtils:
    """
    File and path utility functions.
    """

    @staticmethod
    def ensure_directory(path: str | Path) -> Path:
        """
        Ensure directory exists, creating it if necessary.

        Args:
            path: Directory path

        Returns:
            Path object for the directory
        """
        dir_path = Path(path)
        dir_path.mkdir(parents=True, exist_ok=True)
        return dir_path
