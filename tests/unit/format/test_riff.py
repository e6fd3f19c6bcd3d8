"""Unit tests for the RIFF chunk utilities."""

import io
import struct

import pytest

from pcmwav.format.riff import (
    DATA_ID,
    FMT_ID,
    PCM_HEADER_SIZE,
    RiffError,
    RiffWriter,
    build_pcm_header,
    find_chunk,
    read_chunk_header,
    read_data_chunk,
    read_fmt_chunk,
    read_riff_header,
)


def make_wav(*chunks: tuple[bytes, bytes]) -> bytes:
    """Assemble a RIFF/WAVE stream from (fourcc, payload) chunks."""
    body = bytearray(b"WAVE")
    for chunk_id, payload in chunks:
        body.extend(chunk_id)
        body.extend(struct.pack("<I", len(payload)))
        body.extend(payload)
        if len(payload) % 2:
            body.extend(b"\x00")
    return b"RIFF" + struct.pack("<I", len(body)) + bytes(body)


FMT_PAYLOAD = struct.pack("<HHIIHH", 1, 2, 44100, 176400, 4, 16)


class TestRiffWriter:
    """Tests for the sequential RiffWriter."""

    def test_little_endian_fields(self) -> None:
        writer = RiffWriter(10)
        writer.write_fourcc(b"RIFF")
        writer.write_u16(0x0102)
        writer.write_u32(0x03040506)

        assert writer.getvalue() == b"RIFF\x02\x01\x06\x05\x04\x03"

    def test_position_advances(self) -> None:
        writer = RiffWriter(8)

        writer.write_u16(1)
        assert writer.position == 2
        writer.write_u32(1)
        assert writer.position == 6
        writer.write_bytes(b"ab")
        assert writer.position == 8

    def test_overrun_raises(self) -> None:
        writer = RiffWriter(3)

        with pytest.raises(RiffError, match="overruns"):
            writer.write_u32(0)

    def test_incomplete_buffer_raises(self) -> None:
        writer = RiffWriter(4)
        writer.write_u16(0)

        with pytest.raises(RiffError, match="incomplete"):
            writer.getvalue()

    def test_fourcc_length_checked(self) -> None:
        writer = RiffWriter(8)

        with pytest.raises(RiffError, match="FourCC"):
            writer.write_fourcc(b"fmt")

    def test_u16_range_checked(self) -> None:
        writer = RiffWriter(2)

        with pytest.raises(struct.error):
            writer.write_u16(0x10000)

    def test_writers_are_independent(self) -> None:
        """Test that two writers keep separate cursors."""
        first = RiffWriter(4)
        second = RiffWriter(4)

        first.write_u32(1)
        second.write_u16(2)

        assert first.position == 4
        assert second.position == 2


class TestBuildPcmHeader:
    """Tests for build_pcm_header function."""

    def test_stereo_header(self) -> None:
        header = build_pcm_header(sample_rate=44100, num_channels=2, num_frames=100)

        assert len(header) == PCM_HEADER_SIZE
        assert header[0:4] == b"RIFF"
        assert struct.unpack("<I", header[4:8])[0] == 36 + 400
        assert header[8:12] == b"WAVE"
        assert header[12:16] == b"fmt "
        assert struct.unpack("<IHHIIHH", header[16:36]) == (16, 1, 2, 44100, 176400, 4, 16)
        assert header[36:40] == b"data"
        assert struct.unpack("<I", header[40:44])[0] == 400

    def test_mono_8khz_header(self) -> None:
        header = build_pcm_header(sample_rate=8000, num_channels=1, num_frames=1)

        assert struct.unpack("<I", header[4:8])[0] == 38
        assert struct.unpack("<I", header[28:32])[0] == 16000
        assert struct.unpack("<H", header[32:34])[0] == 2
        assert struct.unpack("<I", header[40:44])[0] == 2

    def test_empty_data(self) -> None:
        header = build_pcm_header(sample_rate=48000, num_channels=6, num_frames=0)

        assert struct.unpack("<I", header[4:8])[0] == 36
        assert struct.unpack("<H", header[22:24])[0] == 6
        assert struct.unpack("<H", header[32:34])[0] == 12
        assert struct.unpack("<I", header[40:44])[0] == 0


class TestChunkReaders:
    """Tests for the chunk reading helpers."""

    def test_read_chunk_header(self) -> None:
        header = read_chunk_header(io.BytesIO(b"data\x10\x00\x00\x00"))

        assert header == (b"data", 16)

    def test_read_chunk_header_truncated(self) -> None:
        with pytest.raises(RiffError, match="Unexpected end"):
            read_chunk_header(io.BytesIO(b"dat"))

    def test_read_riff_header(self) -> None:
        wav = make_wav((FMT_ID, FMT_PAYLOAD))

        assert read_riff_header(io.BytesIO(wav)) == len(wav)

    @pytest.mark.parametrize(
        ("data", "message"),
        [
            (b"RIFF", "too small"),
            (b"RIFX\x04\x00\x00\x00WAVE", "Not a RIFF file"),
            (b"RIFF\x04\x00\x00\x00AVI ", "Not a WAVE file"),
        ],
    )
    def test_read_riff_header_invalid(self, data: bytes, message: str) -> None:
        with pytest.raises(RiffError, match=message):
            read_riff_header(io.BytesIO(data))

    def test_find_chunk_skips_odd_sized_chunks(self) -> None:
        """Test that unknown chunks are skipped with word alignment."""
        wav = make_wav((b"LIST", b"abc"), (FMT_ID, FMT_PAYLOAD), (DATA_ID, b"\x01\x02"))
        f = io.BytesIO(wav)
        file_size = read_riff_header(f)

        assert find_chunk(f, DATA_ID, file_size) == b"\x01\x02"

    def test_find_chunk_missing(self) -> None:
        wav = make_wav((FMT_ID, FMT_PAYLOAD))
        f = io.BytesIO(wav)
        file_size = read_riff_header(f)

        assert find_chunk(f, DATA_ID, file_size) is None

    def test_find_chunk_truncated(self) -> None:
        wav = make_wav((FMT_ID, FMT_PAYLOAD), (DATA_ID, b"\x00" * 8))[:-4]
        f = io.BytesIO(wav)

        with pytest.raises(RiffError, match="truncated"):
            find_chunk(f, DATA_ID, read_riff_header(f))

    def test_read_fmt_chunk(self) -> None:
        wav = make_wav((FMT_ID, FMT_PAYLOAD), (DATA_ID, b""))

        assert read_fmt_chunk(io.BytesIO(wav)) == (1, 2, 44100, 176400, 4, 16)

    def test_read_fmt_chunk_extensible_size(self) -> None:
        """Test that a fmt chunk longer than 16 bytes is accepted."""
        wav = make_wav((FMT_ID, FMT_PAYLOAD + b"\x00\x00"), (DATA_ID, b""))

        assert read_fmt_chunk(io.BytesIO(wav))[0] == 1

    def test_read_fmt_chunk_missing(self) -> None:
        wav = make_wav((DATA_ID, b""))

        with pytest.raises(RiffError, match="fmt chunk not found"):
            read_fmt_chunk(io.BytesIO(wav))

    def test_read_fmt_chunk_too_small(self) -> None:
        wav = make_wav((FMT_ID, FMT_PAYLOAD[:14]))

        with pytest.raises(RiffError, match="too small"):
            read_fmt_chunk(io.BytesIO(wav))

    def test_read_data_chunk(self) -> None:
        wav = make_wav((FMT_ID, FMT_PAYLOAD), (DATA_ID, b"\x01\x00\x02\x00"))

        assert read_data_chunk(io.BytesIO(wav)) == b"\x01\x00\x02\x00"

    def test_read_data_chunk_missing(self) -> None:
        wav = make_wav((FMT_ID, FMT_PAYLOAD))

        with pytest.raises(RiffError, match="data chunk not found"):
            read_data_chunk(io.BytesIO(wav))
