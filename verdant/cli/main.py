"""Main CLI entry point for Verdant."""

from pathlib import Path

import click
from rich.table import Table

from verdant.core.errors import OutputWriteError, UnsupportedFormatError
from verdant.core.logging import get_logger, setup_logging
from verdant.core.pipeline import CompressionPipeline
from verdant.models.config import (
    CLIConfig,
    CompressionConfig,
    CompressionLevel,
    OutputFormat,
    TargetModel,
)

from .io import (
    chunk_filename,
    discover_markdown_files,
    output_path,
    read_documents,
    write_chunks,
    write_text,
)
from .utils import (
    console,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    print_run_header,
    print_stats,
)

logger = get_logger(__name__)


@click.group(invoke_without_command=True)
@click.option("-v", "--version", is_flag=True, help="Show version information")
@click.help_option("-h", "--help")
@click.pass_context
def cli(ctx, version):
    """Verdant - compress markdown documentation for AI consumption.

    Packs a directory of markdown files into one token-reduced annotated
    markdown file or a VRD payload, optionally split into linked chunks.

    Examples:
        verdant -v                                   # Show version
        verdant compress -i docs                     # Compress docs/ to compressed.md
        verdant compress -i docs -l high --model gpt # Heavier compression for GPT
        verdant compress -i docs --format vrd --chunk --max-lines 400
        verdant info                                 # Levels, models and formats
    """
    if version:
        from verdant import __version__

        console.print(f"verdant v{__version__}")
        ctx.exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit()

    ctx.ensure_object(dict)
    config = CLIConfig.load_from_file()
    ctx.obj["config"] = config

    if not config.color:
        console.no_color = True


@cli.command()
@click.option(
    "--input",
    "-i",
    "input_dir",
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Input directory containing .md files",
)
@click.option("--output", "-o", help="Output path without extension (default: compressed)")
@click.option(
    "--level",
    "-l",
    type=click.Choice([level.value for level in CompressionLevel]),
    help="Compression level (default: medium)",
)
@click.option("--stats", "-s", "show_stats", is_flag=True, help="Show detailed statistics")
@click.option("--chunk", is_flag=True, help="Split large outputs into linked chunk files")
@click.option("--max-lines", type=click.IntRange(min=1), help="Maximum lines per chunk (default: 800)")
@click.option("--model", help="Target AI model: claude, gpt, copilot")
@click.option("--ai-mode/--no-ai-mode", default=None, help="Force AI-optimized extreme substitutions")
@click.option(
    "--chronological/--no-chronological",
    default=None,
    help="Sort files by modification time, oldest first (default: on)",
)
@click.option(
    "--remove-emojis/--keep-emojis",
    default=None,
    help="Strip emoji to save tokens (default: on)",
)
@click.option("--format", "output_format", help="Output format: md or vrd (default: md)")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.option("--log-file", type=click.Path(path_type=Path), help="Also write logs to this file")
@click.help_option("-h", "--help")
@click.pass_context
def compress(
    ctx,
    input_dir,
    output,
    level,
    show_stats,
    chunk,
    max_lines,
    model,
    ai_mode,
    chronological,
    remove_emojis,
    output_format,
    verbose,
    log_file,
):
    """Compress a directory of markdown files.

    Options left unset fall back to VERDANT_* environment variables, then
    ~/.verdant/config.yaml, then the built-in defaults.

    Examples:
        verdant compress -i docs -o build/context
        verdant compress -i docs --format vrd -l extreme
        verdant compress -i docs --chunk --max-lines 500 --no-chronological
    """
    defaults: CLIConfig = (ctx.obj or {}).get("config") or CLIConfig.load_from_file()
    setup_logging("DEBUG" if verbose else "INFO", log_file or defaults.log_file)

    output = output or defaults.output
    try:
        config = CompressionConfig(
            level=level or defaults.level,
            target_model=model or defaults.model,
            ai_mode=defaults.ai_mode if ai_mode is None else ai_mode,
            remove_emojis=defaults.remove_emojis if remove_emojis is None else remove_emojis,
            chronological=defaults.chronological if chronological is None else chronological,
            output_format=output_format or defaults.format,
            chunk=chunk,
            max_lines=max_lines or defaults.max_lines,
        )
    except UnsupportedFormatError as e:
        echo_error(str(e))
        ctx.exit(1)

    fmt = config.output_format
    target = (
        f"{output}_*.{fmt.extension}" if config.chunk else str(output_path(output, fmt))
    )
    print_run_header(config, str(input_dir), target)

    paths = discover_markdown_files(input_dir)
    echo_info(f"Found {len(paths)} markdown files")
    if not paths:
        echo_warning("No markdown files found; output will only contain headers")

    documents, read_errors = read_documents(paths)
    for error in read_errors:
        echo_error(str(error))

    pipeline = CompressionPipeline(config)
    result = pipeline.run(documents)
    result.stats.files_skipped = len(read_errors)

    failed = False
    if config.chunk:
        chunks = pipeline.split(result, lambda index: chunk_filename(output, index, fmt))
        write_errors = write_chunks(chunks, Path(output).parent)
        for error in write_errors:
            echo_error(str(error))
        failed = bool(write_errors)
        failed_paths = {error.path for error in write_errors}
        for written in chunks:
            if str(Path(output).parent / written.filename) not in failed_paths:
                echo_success(f"Created {written.filename}")
    else:
        destination = output_path(output, fmt)
        try:
            write_text(destination, result.payload)
            echo_success(f"Successfully compressed and wrote to {destination}")
        except OutputWriteError as e:
            logger.error("Failed to write output", path=str(destination), error=str(e))
            echo_error(str(e))
            failed = True

    print_stats(result.stats, detailed=show_stats)

    if failed:
        ctx.exit(1)


@cli.command()
@click.help_option("-h", "--help")
def info():
    """Show supported compression levels, target models and formats."""
    table = Table(title="Verdant capabilities")
    table.add_column("Setting", style="cyan")
    table.add_column("Values")
    table.add_row("Levels", ", ".join(level.value for level in CompressionLevel))
    table.add_row(
        "Models",
        ", ".join(model.value for model in TargetModel if model is not TargetModel.OTHER),
    )
    table.add_row("Formats", ", ".join(fmt.extension for fmt in OutputFormat))
    console.print(table)


if __name__ == "__main__":
    cli()
