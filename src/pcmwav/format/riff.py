"""RIFF/WAV chunk utilities for PCM WAV files.

This module provides the primitives used to lay out and read back the
canonical 44-byte PCM WAV header: FourCC identifiers, a sequential field
writer, and chunk readers that work on any binary stream.
"""

import struct
from typing import BinaryIO

# FourCC identifiers
RIFF_ID = b"RIFF"
WAVE_ID = b"WAVE"
FMT_ID = b"fmt "
DATA_ID = b"data"

# Audio format codes
WAVE_FORMAT_PCM = 1

# Canonical PCM layout
FMT_CHUNK_SIZE = 16
PCM_HEADER_SIZE = 44
BITS_PER_SAMPLE = 16

# Largest values the header's size fields can hold
MAX_U16 = 0xFFFF
MAX_U32 = 0xFFFFFFFF


class RiffError(Exception):
    """Error reading or writing RIFF files."""


class RiffWriter:
    """Sequential little-endian writer over a fixed-size buffer.

    The cursor is local to each writer, so independent encodes never share
    position state.
    """

    def __init__(self, size: int) -> None:
        self._buffer = bytearray(size)
        self._view = memoryview(self._buffer)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def _reserve(self, size: int) -> int:
        start = self._pos
        if start + size > len(self._buffer):
            raise RiffError(
                f"Write of {size} bytes at offset {start} overruns buffer of {len(self._buffer)}"
            )
        self._pos = start + size
        return start

    def write_fourcc(self, fourcc: bytes) -> None:
        if len(fourcc) != 4:
            raise RiffError(f"FourCC must be 4 bytes, got {fourcc!r}")
        self.write_bytes(fourcc)

    def write_u16(self, value: int) -> None:
        struct.pack_into("<H", self._buffer, self._reserve(2), value)

    def write_u32(self, value: int) -> None:
        struct.pack_into("<I", self._buffer, self._reserve(4), value)

    def write_bytes(self, data: bytes | memoryview) -> None:
        start = self._reserve(len(data))
        self._view[start : self._pos] = data

    def getvalue(self) -> bytes:
        """Return the written bytes. The buffer must be completely filled."""
        if self._pos != len(self._buffer):
            raise RiffError(f"Buffer incomplete: wrote {self._pos} of {len(self._buffer)} bytes")
        return bytes(self._buffer)


def pcm_data_size(num_channels: int, num_frames: int, bits_per_sample: int = BITS_PER_SAMPLE) -> int:
    """Size in bytes of the data chunk payload."""
    return num_frames * num_channels * (bits_per_sample // 8)


def write_pcm_header(
    writer: RiffWriter,
    sample_rate: int,
    num_channels: int,
    num_frames: int,
    bits_per_sample: int = BITS_PER_SAMPLE,
) -> None:
    """Write the RIFF, fmt and data chunk headers for integer PCM audio.

    Args:
        writer: Writer positioned at the start of the file.
        sample_rate: The sample rate in Hz.
        num_channels: Number of interleaved channels.
        num_frames: Number of samples per channel.
        bits_per_sample: Bits per sample (default: 16).
    """
    bytes_per_sample = bits_per_sample // 8
    data_size = pcm_data_size(num_channels, num_frames, bits_per_sample)
    byte_rate = sample_rate * num_channels * bytes_per_sample
    block_align = num_channels * bytes_per_sample

    # RIFF header; size excludes the 8-byte RIFF id + size fields
    writer.write_fourcc(RIFF_ID)
    writer.write_u32(PCM_HEADER_SIZE - 8 + data_size)
    writer.write_fourcc(WAVE_ID)

    # fmt chunk
    writer.write_fourcc(FMT_ID)
    writer.write_u32(FMT_CHUNK_SIZE)
    writer.write_u16(WAVE_FORMAT_PCM)
    writer.write_u16(num_channels)
    writer.write_u32(sample_rate)
    writer.write_u32(byte_rate)
    writer.write_u16(block_align)
    writer.write_u16(bits_per_sample)

    # data chunk header, payload follows
    writer.write_fourcc(DATA_ID)
    writer.write_u32(data_size)


def build_pcm_header(
    sample_rate: int,
    num_channels: int,
    num_frames: int,
    bits_per_sample: int = BITS_PER_SAMPLE,
) -> bytes:
    """Build a standalone 44-byte PCM WAV header."""
    writer = RiffWriter(PCM_HEADER_SIZE)
    write_pcm_header(writer, sample_rate, num_channels, num_frames, bits_per_sample)
    return writer.getvalue()


def read_chunk_header(f: BinaryIO) -> tuple[bytes, int]:
    """Read a RIFF chunk header (FourCC + size).

    Args:
        f: Stream positioned at the start of a chunk.

    Returns:
        Tuple of (chunk_id, chunk_size).

    Raises:
        RiffError: If the header cannot be read.
    """
    header = f.read(8)
    if len(header) < 8:
        raise RiffError("Unexpected end of file reading chunk header")

    chunk_id = header[:4]
    chunk_size = struct.unpack("<I", header[4:8])[0]
    return chunk_id, chunk_size


def read_riff_header(f: BinaryIO) -> int:
    """Validate the 12-byte RIFF/WAVE header.

    Returns:
        The total file size declared by the header.

    Raises:
        RiffError: If the stream is not a RIFF/WAVE stream.
    """
    riff_header = f.read(12)
    if len(riff_header) < 12:
        raise RiffError("File too small to be a valid WAV file")

    if riff_header[:4] != RIFF_ID:
        raise RiffError("Not a RIFF file")

    if riff_header[8:12] != WAVE_ID:
        raise RiffError("Not a WAVE file")

    return struct.unpack("<I", riff_header[4:8])[0] + 8


def find_chunk(f: BinaryIO, target_id: bytes, file_size: int) -> bytes | None:
    """Find a chunk by its FourCC identifier.

    Args:
        f: Stream positioned after the RIFF header (at first chunk).
        target_id: The FourCC identifier to search for.
        file_size: Total file size for bounds checking.

    Returns:
        The chunk data if found, None otherwise.
    """
    while f.tell() < file_size:
        try:
            chunk_id, chunk_size = read_chunk_header(f)
        except RiffError:
            return None

        if chunk_id == target_id:
            data = f.read(chunk_size)
            if len(data) < chunk_size:
                raise RiffError(
                    f"{target_id.decode('ascii')!r} chunk truncated: "
                    f"expected {chunk_size} bytes, got {len(data)}"
                )
            return data

        # Skip to next chunk (with word alignment padding)
        skip_size = chunk_size + (chunk_size % 2)
        f.seek(skip_size, 1)

    return None


def read_fmt_chunk(f: BinaryIO) -> tuple[int, int, int, int, int, int]:
    """Read the fmt chunk to extract audio format information.

    Args:
        f: Stream positioned at the start of a WAV file.

    Returns:
        Tuple of (audio_format, num_channels, sample_rate, byte_rate,
        block_align, bits_per_sample).

    Raises:
        RiffError: If the stream is not a valid WAV or fmt chunk is missing.
    """
    file_size = read_riff_header(f)

    fmt_data = find_chunk(f, FMT_ID, file_size)
    if fmt_data is None:
        raise RiffError("fmt chunk not found in WAV file")

    if len(fmt_data) < FMT_CHUNK_SIZE:
        raise RiffError("fmt chunk too small")

    return struct.unpack("<HHIIHH", fmt_data[:FMT_CHUNK_SIZE])


def read_data_chunk(f: BinaryIO) -> bytes:
    """Read the data chunk to extract raw audio data.

    Args:
        f: Stream positioned at the start of a WAV file.

    Returns:
        The raw bytes of the audio data.

    Raises:
        RiffError: If the stream is not a valid WAV or data chunk is missing.
    """
    file_size = read_riff_header(f)

    data = find_chunk(f, DATA_ID, file_size)
    if data is None:
        raise RiffError("data chunk not found in WAV file")

    return data
