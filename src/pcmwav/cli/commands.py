import json
import logging
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pcmwav.cli.validators import validate_wav_output
from pcmwav.format import InvalidBufferError, RiffError, load_wav, save_wav
from pcmwav.importers import DecodeError, decode_media, describe_media

DEFAULT_OUTPUT = Path("extracted_audio.wav")

app = App(name="pcmwav", help="Extract the audio track of a media file as a PCM WAV file")
console = Console()
log_handler = RichHandler(console=console, show_path=False)


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(message, style="bold red")


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(message, style="bold green")


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(message, style="bold yellow")


def configure_logging(verbose: bool) -> None:
    """Route pcmwav log records through the rich console."""
    package_logger = logging.getLogger("pcmwav")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if log_handler not in package_logger.handlers:
        package_logger.addHandler(log_handler)


def format_size(num_bytes: int) -> str:
    size = float(num_bytes)
    for unit in ("B", "KiB", "MiB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GiB"


@app.command
def extract(
    source: Path,
    output: Annotated[Path, Parameter(validator=validate_wav_output)] = DEFAULT_OUTPUT,
    verbose: bool = False,
) -> int:
    """
    Extract the audio of a media file as a 16-bit PCM WAV file.

    Parameters
    ----------
    source: Path
        The media file to extract audio from
    output: Path
        Output path for the .wav file (default: extracted_audio.wav)
    verbose: bool
        Log decoding and encoding details
    """
    configure_logging(verbose)

    # Decode
    try:
        source_info = describe_media(source)
        console.print(
            f"Decoding {source} ({source_info['format']}, {source_info['subtype']})..."
        )
        buffer = decode_media(source)
    except DecodeError as e:
        print_error(f"Could not decode source: {e}")
        console.print(
            "  Suggestion: The file might be corrupted or in an unsupported format."
        )
        return 1

    # Encode and write
    try:
        num_bytes = save_wav(output, buffer)
    except InvalidBufferError as e:
        print_error(f"Could not encode output: {e}")
        return 2
    except OSError as e:
        print_error(f"Error writing output: {e}")
        return 1

    print_success(f"Extracted {source} -> {output}")
    console.print(f"  Channels: {buffer.channel_count}")
    console.print(f"  Sample rate: {buffer.sample_rate} Hz")
    console.print(f"  Duration: {buffer.duration_seconds:.3f}s")
    console.print(f"  Size: {format_size(num_bytes)}")

    return 0


@app.command
def info(
    file: Path,
    output_json: Annotated[bool, Parameter(name=["--json"])] = False,
) -> int:
    """
    Display the header of a PCM WAV file.

    Parameters
    ----------
    file: Path
        The path to the .wav file
    output_json: bool
        Output results as JSON (default: False)
    """
    try:
        wav = load_wav(file)
    except RiffError as e:
        print_error(f"[FAIL] {file}: {e}")
        return 1

    fields = {
        "file": str(file),
        "audio_format": wav.audio_format,
        "channels": wav.num_channels,
        "sample_rate": wav.sample_rate,
        "byte_rate": wav.byte_rate,
        "block_align": wav.block_align,
        "bits_per_sample": wav.bits_per_sample,
        "frames": wav.frame_count,
        "data_size": wav.data_size,
        "duration_seconds": round(wav.duration_seconds, 6),
    }

    if output_json:
        console.print(json.dumps(fields, indent=2), soft_wrap=True)
        return 0

    console.print(f"[bold]WAV file: {file}[/bold]")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Field", justify="left")
    table.add_column("Value", justify="right")
    for key, value in fields.items():
        if key == "file":
            continue
        table.add_row(key, str(value))
    console.print(table)

    if wav.frame_count == 0:
        print_warning("  [WARN] data chunk is empty")

    return 0


if __name__ == "__main__":
    sys.exit(app())
