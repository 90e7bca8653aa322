"""Exception types raised by Verdant.

Only the I/O edges and configuration can fail. Text transforms are total
functions and never raise on malformed markdown.
"""


class VerdantError(Exception):
    """Base class for all Verdant errors."""


class UnsupportedFormatError(VerdantError):
    """Requested output format is not one Verdant can produce. Fatal."""

    def __init__(self, output_format: str):
        self.output_format = output_format
        super().__init__(f"Unsupported format: {output_format}")


class DocumentReadError(VerdantError):
    """A single input document could not be read. The run continues."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error reading {path}: {reason}")


class OutputWriteError(VerdantError):
    """An output file (whole payload or one chunk) could not be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error writing {path}: {reason}")
