from pathlib import Path


def validate_wav_output(type_: object, path: Path) -> None:
    """Validate that the output path names a .wav file."""
    if path.suffix.lower() != ".wav":
        raise ValueError("Output file must have a .wav extension")

    if path.is_dir():
        raise ValueError("Output path is a directory")
