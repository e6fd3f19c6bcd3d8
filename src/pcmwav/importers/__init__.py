"""Source media importers.

This subpackage decodes audio files into PCM buffers ready for encoding.

Example usage:
    >>> from pcmwav.importers import decode_media
    >>> from pcmwav.format import save_wav
    >>>
    >>> buffer = decode_media("recording.flac")
    >>> save_wav("recording.wav", buffer)
"""

from pcmwav.importers.media import DecodeError, decode_media, describe_media

__all__ = [
    "DecodeError",
    "decode_media",
    "describe_media",
]
