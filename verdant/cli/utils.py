"""Console helpers for the Verdant CLI."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from verdant.models.config import CompressionConfig
from verdant.models.domain import CompressionStats

console = Console()


def echo_success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓ {message}[/green]")


def echo_error(message: str) -> None:
    """Print error message."""
    console.print(f"[red]✗ {message}[/red]")


def echo_warning(message: str) -> None:
    """Print warning message."""
    console.print(f"[yellow]⚠ {message}[/yellow]")


def echo_info(message: str) -> None:
    """Print info message."""
    console.print(f"[blue]ℹ {message}[/blue]")


def describe_features(config: CompressionConfig) -> list[str]:
    features = [
        f"Target: {config.target_model.value}",
        f"Level: {config.level.value}",
        f"Format: {config.output_format.extension.upper()}",
        f"Chunking: {'enabled' if config.chunk else 'disabled'}",
    ]
    if config.chronological:
        features.append("Chronological: enabled")
    if config.remove_emojis:
        features.append("Emoji removal: enabled")
    if config.ai_mode:
        features.append("AI mode: enabled")
    return features


def print_run_header(config: CompressionConfig, input_dir: str, output: str) -> None:
    """Print the banner with the enabled features."""
    from verdant import __version__

    body = (
        "Compressing markdown for AI consumption\n"
        f"{' | '.join(describe_features(config))}\n\n"
        f"Input:  {input_dir}\n"
        f"Output: {output}"
    )
    console.print(Panel(body, title=f"🌱 verdant v{__version__}", border_style="green"))


def print_stats(stats: CompressionStats, detailed: bool = False) -> None:
    """Print the final compression results as a table."""
    table = Table(title="📊 Compression Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Original", justify="right")
    table.add_column("Compressed", justify="right")
    table.add_column("Reduction", justify="right", style="green")

    table.add_row(
        "Chars",
        str(stats.original_bytes),
        str(stats.compressed_bytes),
        f"{stats.byte_reduction_percent:.1f}%",
    )
    table.add_row(
        "Lines",
        str(stats.original_lines),
        str(stats.compressed_lines),
        f"{stats.line_reduction_percent:.1f}%",
    )
    if detailed:
        saved = max(stats.original_tokens - stats.compressed_tokens, 0)
        table.add_row(
            "Est. tokens",
            str(stats.original_tokens),
            str(stats.compressed_tokens),
            f"~{saved} saved",
        )
    console.print(table)

    if stats.chunk_count:
        echo_info(f"Created {stats.chunk_count} chunks")
    if detailed:
        echo_info(f"Duplicate paragraphs removed: {stats.duplicates_removed}")
        echo_info(f"Emojis removed: {stats.emojis_removed}")
        if stats.files_skipped:
            echo_warning(f"Files skipped: {stats.files_skipped}")
