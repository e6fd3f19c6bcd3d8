"""PCM WAV format module.

This module provides functionality for encoding decoded PCM audio into
canonical uncompressed WAV files and reading them back.

Format Overview
---------------
Every file written by this package has the same 44-byte header followed
by interleaved 16-bit samples:

    +----------------------------------------+
    | RIFF Header ("WAVE")          12 bytes |
    +----------------------------------------+
    | fmt  chunk (audio format)     24 bytes |
    |   - PCM, 16 bits per sample            |
    +----------------------------------------+
    | data chunk                             |
    |   - 16-bit signed little-endian        |
    |   - Frame-major, channel-minor         |
    +----------------------------------------+

Example Usage
-------------
>>> from pcmwav.format import PcmBuffer, encode_wav, parse_wav
>>> buffer = PcmBuffer.from_channels(8000, [[0.0, 0.5], [0.0, -0.5]])
>>> wav_bytes = encode_wav(buffer)
>>> len(wav_bytes)
52
>>> parse_wav(wav_bytes).num_channels
2
"""

from pcmwav.format.encoder import encode_wav, interleave_channels, quantize_samples, save_wav
from pcmwav.format.reader import WavFile, load_wav, parse_wav
from pcmwav.format.riff import RiffError, build_pcm_header
from pcmwav.format.validation import InvalidBufferError, ValidationResult, validate_buffer
from pcmwav.types import PcmBuffer

__all__ = [
    # Types
    "PcmBuffer",
    # Encoder
    "encode_wav",
    "save_wav",
    "quantize_samples",
    "interleave_channels",
    "build_pcm_header",
    # Reader
    "parse_wav",
    "load_wav",
    "WavFile",
    # Validation
    "validate_buffer",
    "ValidationResult",
    "InvalidBufferError",
    "RiffError",
]
