"""PCM WAV file reader.

This module parses 16-bit integer PCM WAV files back into their header
fields and sample data. It is used to inspect encoded files and to verify
that encoding round-trips.
"""

import io
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from pcmwav.format.encoder import NEGATIVE_SCALE, PCM16_DTYPE, POSITIVE_SCALE
from pcmwav.format.riff import (
    BITS_PER_SAMPLE,
    WAVE_FORMAT_PCM,
    RiffError,
    read_data_chunk,
    read_fmt_chunk,
)
from pcmwav.types import PcmBuffer


@dataclass
class WavFile:
    """A parsed PCM WAV file."""

    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int

    samples: NDArray[np.int16]
    """Sample data with shape (frame_count, num_channels)."""

    @property
    def frame_count(self) -> int:
        """Number of samples per channel."""
        return self.samples.shape[0]

    @property
    def data_size(self) -> int:
        """Size of the data chunk payload in bytes."""
        return self.samples.size * (self.bits_per_sample // 8)

    @property
    def duration_seconds(self) -> float:
        return self.frame_count / self.sample_rate if self.sample_rate else 0.0

    def channel(self, index: int) -> NDArray[np.int16]:
        """Get the samples of a single channel."""
        return self.samples[:, index]

    def to_pcm_buffer(self) -> PcmBuffer:
        """Map the integer samples back to floats in [-1, 1].

        Negative samples are divided by 32768 and the rest by 32767, the
        inverse of the encoder's scaling.
        """
        ints = self.samples.astype(np.float64)
        floats = np.where(ints < 0, ints / NEGATIVE_SCALE, ints / POSITIVE_SCALE)
        return PcmBuffer.from_frames(self.sample_rate, floats.reshape(-1, self.num_channels))


def parse_wav(data: bytes) -> WavFile:
    """Parse an in-memory PCM WAV file.

    Args:
        data: The complete WAV file contents.

    Returns:
        The parsed file.

    Raises:
        RiffError: If the data is not a 16-bit PCM WAV file.
    """
    audio_format, num_channels, sample_rate, byte_rate, block_align, bits_per_sample = (
        read_fmt_chunk(io.BytesIO(data))
    )

    if audio_format != WAVE_FORMAT_PCM:
        raise RiffError(f"Unsupported audio format {audio_format}, only PCM (1) is supported")
    if bits_per_sample != BITS_PER_SAMPLE:
        raise RiffError(f"Unsupported bit depth {bits_per_sample}, only 16-bit is supported")
    if num_channels < 1:
        raise RiffError("fmt chunk declares zero channels")
    if block_align != num_channels * 2:
        raise RiffError(f"block_align {block_align} does not match {num_channels} channels")

    raw = read_data_chunk(io.BytesIO(data))
    if len(raw) % block_align:
        raise RiffError(
            f"data chunk size {len(raw)} is not a multiple of block_align {block_align}"
        )

    samples = np.frombuffer(raw, dtype=PCM16_DTYPE).reshape(-1, num_channels)

    return WavFile(
        audio_format=audio_format,
        num_channels=num_channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
        samples=samples,
    )


def load_wav(path: Path | str) -> WavFile:
    """Load a PCM WAV file from disk.

    Raises:
        RiffError: If the file cannot be opened or is not a 16-bit PCM WAV.
    """
    path = Path(path)

    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise RiffError(f"File not found: {path}") from e
    except OSError as e:
        raise RiffError(f"Cannot open file: {path}") from e

    return parse_wav(data)
