"""Media decoding via libsndfile.

This module is the upstream side of the encoder: it turns an audio file on
disk into a :class:`~pcmwav.types.PcmBuffer`. Which containers and codecs
are readable depends on the libsndfile build bundled with soundfile
(WAV, FLAC, OGG/Vorbis, AIFF, and MP3 on recent builds).
"""

import logging
from pathlib import Path
from typing import Any

import numpy as np
import soundfile as sf

from pcmwav.types import PcmBuffer

logger = logging.getLogger(__name__)


class DecodeError(Exception):
    """The source media could not be decoded into PCM."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


def decode_media(path: Path | str) -> PcmBuffer:
    """Decode an audio file into float PCM planes.

    Args:
        path: Path to the source media file.

    Returns:
        A buffer with one float64 plane per channel, samples in [-1, 1].

    Raises:
        DecodeError: If the file is missing or libsndfile cannot decode it.
    """
    path = Path(path)
    if not path.is_file():
        raise DecodeError(f"File not found: {path}", path=path)

    try:
        data, sample_rate = sf.read(path, dtype="float64", always_2d=True)
    except sf.LibsndfileError as e:
        raise DecodeError(f"Cannot decode {path}: {e}", path=path) from e

    buffer = PcmBuffer.from_frames(int(sample_rate), np.asarray(data))
    logger.debug(
        "Decoded %s: %d frames x %d channels at %d Hz",
        path,
        buffer.frame_count,
        buffer.channel_count,
        buffer.sample_rate,
    )
    return buffer


def describe_media(path: Path | str) -> dict[str, Any]:
    """Read the container header of an audio file without decoding it.

    Raises:
        DecodeError: If the file is missing or unreadable.
    """
    path = Path(path)
    if not path.is_file():
        raise DecodeError(f"File not found: {path}", path=path)

    try:
        info = sf.info(path)
    except sf.LibsndfileError as e:
        raise DecodeError(f"Cannot read {path}: {e}", path=path) from e

    return {
        "path": str(path),
        "format": info.format,
        "subtype": info.subtype,
        "channels": info.channels,
        "sample_rate": info.samplerate,
        "frames": info.frames,
        "duration_seconds": info.duration,
    }
