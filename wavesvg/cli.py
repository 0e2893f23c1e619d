"""
wavesvg.cli - Typer CLI entry point.

Provides the info, chunks, render and init subcommands.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from wavesvg import __version__
from wavesvg.chunks import list_chunks
from wavesvg.config import CONFIG_FILENAME, create_default_config, load_config, write_config
from wavesvg.exceptions import WaveSvgError
from wavesvg.io import write_json
from wavesvg.logging import configure_logging
from wavesvg.source import open_source
from wavesvg.utils import channel_label, format_duration, format_size
from wavesvg.wave import Wave

app = typer.Typer(
    name="wavesvg",
    help="Waveform previews for PCM WAV files.\n\n"
    "Reads the WAV header, samples the audio payload and renders the "
    "envelope as a filled SVG path.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"wavesvg {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """wavesvg - Waveform previews for PCM WAV files."""
    configure_logging(verbose)


@app.command("init")
def init_config(
    profile: str = typer.Option(
        "preview",
        "--profile",
        "-p",
        help="Profile: preview, overview, detailed, or full",
    ),
    path: str = typer.Option(".", "--path", "-d", help="Directory to write wavesvg.yaml in"),
) -> None:
    """Write a wavesvg.yaml with the defaults of a profile."""
    config_path = Path(path) / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[red]Error: '{config_path}' already exists[/red]")
        raise typer.Exit(1)

    try:
        config = create_default_config(profile)
    except WaveSvgError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    write_config(config, config_path)
    console.print(f"[green]✓[/green] Created {config_path} with profile '{profile}'")


@app.command("info")
def show_info(
    file: str = typer.Argument(..., help="WAV file to inspect"),
    as_json: bool = typer.Option(False, "--json", help="Print as JSON"),
    output: str | None = typer.Option(None, "--output", "-o", help="Write JSON to file"),
) -> None:
    """Show header fields and derived metrics of a WAV file."""
    try:
        wave = Wave(file)
    except WaveSvgError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    data = wave.info.as_dict()

    if output:
        try:
            write_json(Path(output), data)
        except WaveSvgError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)
        console.print(f"[green]✓[/green] Wrote {output}")
        return

    if as_json:
        typer.echo(json.dumps(data, indent=2))
        return

    table = Table(title=Path(file).name)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Channels", f"{wave.channels} ({channel_label(wave.channels)})")
    table.add_row("Sample rate", f"{wave.sample_rate} Hz")
    table.add_row("Bits per sample", str(wave.bits_per_sample))
    table.add_row("Byte rate", f"{wave.byte_rate} B/s")
    table.add_row("Block align", str(wave.block_align))
    table.add_row("Bitrate", f"{wave.kilobits_per_second:g} kbit/s")
    table.add_row("Total samples", str(wave.total_samples))
    table.add_row("Total seconds", str(wave.total_seconds))
    table.add_row("Duration", format_duration(wave.duration))
    table.add_row("Data size", format_size(wave.info.payload.size_bytes))

    console.print(table)


@app.command("chunks")
def show_chunks(
    file: str = typer.Argument(..., help="WAV file to inspect"),
) -> None:
    """List the chunks of a WAV file."""
    try:
        with open_source(file) as source:
            chunks = list_chunks(source)
    except WaveSvgError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=Path(file).name)
    table.add_column("Chunk", style="cyan")
    table.add_column("Size", style="green", justify="right")
    table.add_column("Offset", style="yellow", justify="right")

    for chunk in chunks:
        table.add_row(repr(chunk.tag), str(chunk.size), str(chunk.offset))

    console.print(table)


@app.command("render")
def render_files(
    files: list[str] = typer.Argument(..., help="WAV file(s) to render"),
    resolution: float | None = typer.Option(
        None, "--resolution", "-r", help="Buckets per sample, 0.000001 to 1.0"
    ),
    profile: str | None = typer.Option(
        None, "--profile", "-p", help="Profile: preview, overview, detailed, or full"
    ),
    output_dir: str | None = typer.Option(
        None, "--output-dir", "-d", help="Directory for SVG files (default: beside input)"
    ),
    config: str | None = typer.Option(None, "--config", "-c", help="Path to wavesvg.yaml"),
    stdout: bool = typer.Option(False, "--stdout", help="Print SVG to stdout instead of a file"),
) -> None:
    """Render WAV files as SVG waveforms."""
    try:
        settings = load_config(
            Path(config) if config else None,
            overrides={
                "resolution": resolution,
                "profile": profile,
                "output_dir": Path(output_dir) if output_dir else None,
            },
        )
    except WaveSvgError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if stdout:
        if len(files) != 1:
            console.print("[red]Error: --stdout takes exactly one file[/red]")
            raise typer.Exit(1)
        try:
            svg = Wave(files[0]).render(settings.resolution)
        except WaveSvgError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)
        typer.echo(svg)
        return

    table = Table(title="Rendering Waveforms")
    table.add_column("File", style="cyan")
    table.add_column("Duration", style="green")
    table.add_column("Output", style="yellow")

    failed = 0
    for file in files:
        source_path = Path(file)
        target_dir = settings.output_dir or source_path.parent
        target = target_dir / f"{source_path.stem}{settings.output_suffix}"
        try:
            wave = Wave(source_path)
            wave.render(settings.resolution, output=target)
        except WaveSvgError as e:
            table.add_row(source_path.name, "-", f"[red]Error: {e}[/red]")
            failed += 1
            continue
        table.add_row(source_path.name, format_duration(wave.duration), str(target))

    console.print(table)
    console.print(
        f"[dim]Resolution {settings.resolution:g} ({settings.profile}), "
        f"{len(files) - failed} rendered, {failed} failed[/dim]"
    )
    if failed:
        raise typer.Exit(1)
