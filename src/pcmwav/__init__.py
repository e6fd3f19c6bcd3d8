"""pcmwav - Decoded audio to PCM WAV encoder.

This package converts decoded PCM audio (one float plane per channel) into
byte-exact, canonical 16-bit PCM WAV files.

WAV Format
----------
The format submodule holds the encoder, the RIFF header primitives, buffer
validation and a reader for inspecting encoded files. The importers
submodule decodes media files into PCM buffers with libsndfile.

Example Usage
-------------
>>> from pcmwav import PcmBuffer, encode_wav, save_wav
>>> import numpy as np
>>>
>>> # One second of a 440 Hz tone, stereo
>>> t = np.arange(44100) / 44100
>>> tone = 0.5 * np.sin(2 * np.pi * 440 * t)
>>> buffer = PcmBuffer.from_channels(44100, [tone, tone])
>>>
>>> wav_bytes = encode_wav(buffer)
>>> len(wav_bytes) == 44 + 44100 * 2 * 2
True
>>> save_wav("tone.wav", buffer)
176444
"""

# Re-export format module for convenience
from pcmwav.format import (
    InvalidBufferError,
    PcmBuffer,
    RiffError,
    ValidationResult,
    WavFile,
    encode_wav,
    load_wav,
    parse_wav,
    save_wav,
    validate_buffer,
)
from pcmwav.importers import DecodeError, decode_media

__all__ = [
    # Types
    "PcmBuffer",
    "WavFile",
    # Encoder
    "encode_wav",
    "save_wav",
    # Reader
    "parse_wav",
    "load_wav",
    # Decoder
    "decode_media",
    # Validation
    "validate_buffer",
    "ValidationResult",
    "InvalidBufferError",
    "DecodeError",
    "RiffError",
]
