from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np
from numpy.typing import ArrayLike, NDArray

SamplePlane: TypeAlias = NDArray[np.float64]
ChannelPlanes: TypeAlias = tuple[SamplePlane, ...]
WavBytes: TypeAlias = bytes


@dataclass(frozen=True)
class PcmBuffer:
    """Decoded multi-channel PCM audio, one float plane per channel.

    Samples are nominally in [-1.0, 1.0]. Decoders may overshoot slightly;
    the encoder clamps on the way out.
    """

    sample_rate: int
    channel_count: int
    frame_count: int
    channels: ChannelPlanes

    @classmethod
    def from_channels(cls, sample_rate: int, channels: Sequence[ArrayLike]) -> "PcmBuffer":
        """Build a buffer from per-channel sample planes.

        The channel and frame counts are taken from the planes themselves.
        """
        planes = tuple(np.asarray(plane, dtype=np.float64) for plane in channels)
        frame_count = len(planes[0]) if planes and planes[0].ndim == 1 else 0
        return cls(
            sample_rate=sample_rate,
            channel_count=len(planes),
            frame_count=frame_count,
            channels=planes,
        )

    @classmethod
    def from_frames(cls, sample_rate: int, frames: ArrayLike) -> "PcmBuffer":
        """Build a buffer from frame-major data.

        Args:
            sample_rate: Sample rate in Hz.
            frames: Array of shape (frame_count, channel_count), as returned by
                soundfile, or a 1-D array for mono audio.

        Raises:
            ValueError: If frames has more than two dimensions.
        """
        data = np.asarray(frames, dtype=np.float64)
        if data.ndim == 1:
            data = data.reshape(-1, 1)
        elif data.ndim != 2:
            raise ValueError(f"frames should be 1D or 2D, got shape {data.shape}")

        planes = tuple(np.ascontiguousarray(data[:, ch]) for ch in range(data.shape[1]))
        return cls(
            sample_rate=sample_rate,
            channel_count=data.shape[1],
            frame_count=data.shape[0],
            channels=planes,
        )

    @property
    def duration_seconds(self) -> float:
        """Playback length in seconds."""
        if self.sample_rate <= 0:
            return 0.0
        return self.frame_count / self.sample_rate
