"""PCM WAV encoder.

This module turns a decoded :class:`~pcmwav.types.PcmBuffer` into the bytes
of a canonical 16-bit PCM WAV file. Encoding is a pure function of its input:
no I/O, no shared state, safe to call from several threads at once.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pcmwav.format.riff import PCM_HEADER_SIZE, RiffWriter, pcm_data_size, write_pcm_header
from pcmwav.format.validation import InvalidBufferError, validate_buffer
from pcmwav.types import PcmBuffer, WavBytes

logger = logging.getLogger(__name__)

# Asymmetric scale: -1.0 reaches -32768 and +1.0 stops at 32767
NEGATIVE_SCALE = 32768.0
POSITIVE_SCALE = 32767.0

PCM16_DTYPE = np.dtype("<i2")


def quantize_samples(samples: ArrayLike) -> NDArray[np.int16]:
    """Quantize float samples to signed 16-bit integers.

    Each sample is clamped to [-1, 1], scaled by 32768 when negative and by
    32767 otherwise, then truncated toward zero. No dithering is applied.

    The negative scale applies to every sample below zero. Encoders that
    switch scales at -0.5 instead produce values one step closer to zero for
    samples in [-0.5, 0); this one deliberately does not.

    Args:
        samples: Float samples of any shape.

    Returns:
        Little-endian int16 array with the same shape as the input.
    """
    clamped = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)
    scaled = np.where(clamped < 0, clamped * NEGATIVE_SCALE, clamped * POSITIVE_SCALE)
    return np.trunc(scaled).astype(PCM16_DTYPE)


def interleave_channels(channels: Sequence[ArrayLike]) -> NDArray[np.int16]:
    """Quantize and interleave channel planes frame-major, channel-minor.

    The result is laid out as [f0c0, f0c1, ..., f1c0, f1c1, ...].

    Args:
        channels: One 1-D float plane per channel, all the same length.

    Returns:
        Flat little-endian int16 array of frame_count * channel_count samples.
    """
    if not channels:
        return np.empty(0, dtype=PCM16_DTYPE)

    # (frame_count, channel_count) in C order is exactly the interleaved layout
    frames = np.stack([np.asarray(plane, dtype=np.float64) for plane in channels], axis=1)
    return quantize_samples(frames).ravel()


def encode_wav(buffer: PcmBuffer) -> WavBytes:
    """Encode a PCM buffer as a 16-bit PCM WAV file.

    Args:
        buffer: Decoded audio to encode. It is not modified.

    Returns:
        The complete WAV file, 44 + frame_count * channel_count * 2 bytes.

    Raises:
        InvalidBufferError: If the buffer is structurally invalid.
    """
    result = validate_buffer(buffer)
    if not result.valid:
        raise InvalidBufferError(
            f"PCM buffer validation failed: {result.errors}",
            errors=result.errors,
            field=result.field,
        )
    for warning in result.warnings:
        logger.warning(warning)

    data_size = pcm_data_size(buffer.channel_count, buffer.frame_count)
    writer = RiffWriter(PCM_HEADER_SIZE + data_size)

    write_pcm_header(
        writer,
        sample_rate=buffer.sample_rate,
        num_channels=buffer.channel_count,
        num_frames=buffer.frame_count,
    )
    writer.write_bytes(interleave_channels(buffer.channels).tobytes())

    logger.debug(
        "Encoded %d frames x %d channels at %d Hz into %d bytes",
        buffer.frame_count,
        buffer.channel_count,
        buffer.sample_rate,
        writer.position,
    )
    return writer.getvalue()


def save_wav(path: Path | str, buffer: PcmBuffer) -> int:
    """Encode a PCM buffer and write it to a WAV file.

    Args:
        path: Output file path. Parent directories are created as needed.
        buffer: Decoded audio to encode.

    Returns:
        Number of bytes written.

    Raises:
        InvalidBufferError: If the buffer is structurally invalid.
        OSError: If the file cannot be written.
    """
    path = Path(path)
    wav_bytes = encode_wav(buffer)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(wav_bytes)

    logger.debug("Wrote %s (%d bytes)", path, len(wav_bytes))
    return len(wav_bytes)
