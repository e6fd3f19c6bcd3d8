"""Validation functions for PCM buffers.

The encoder runs these checks before writing a single byte, so a
structurally invalid buffer fails fast instead of producing a truncated
or malformed WAV file.
"""

from dataclasses import dataclass

import numpy as np

from pcmwav.format.riff import MAX_U16, MAX_U32, PCM_HEADER_SIZE, pcm_data_size
from pcmwav.types import PcmBuffer


class InvalidBufferError(ValueError):
    """A PCM buffer violates the encoder's preconditions."""

    def __init__(self, message: str, errors: list[str] | None = None, field: str | None = None) -> None:
        self.errors = errors or []
        self.field = field
        super().__init__(message)


@dataclass
class ValidationResult:
    """Result of validation with optional warnings."""

    valid: bool
    errors: list[str]
    warnings: list[str]
    field: str | None = None

    @classmethod
    def success(cls, warnings: list[str] | None = None) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(valid=True, errors=[], warnings=warnings or [])

    @classmethod
    def failure(
        cls,
        errors: list[str],
        warnings: list[str] | None = None,
        field: str | None = None,
    ) -> "ValidationResult":
        """Create a failed validation result."""
        return cls(valid=False, errors=errors, warnings=warnings or [], field=field)


def is_integer(value: object) -> bool:
    """Return True for Python and numpy integers, excluding bools."""
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def validate_buffer(buffer: PcmBuffer) -> ValidationResult:
    """Validate a PCM buffer for encoding.

    This checks:
    - sample_rate, channel_count and frame_count are integers
    - sample_rate >= 1 and fits the 32-bit header field
    - channel_count >= 1, matches len(channels) and fits the 16-bit field
    - frame_count >= 0 and every channel plane is 1-D with frame_count samples
    - samples are finite (no NaN/Inf)
    - the encoded size and byte rate fit their 32-bit header fields

    Samples outside [-1, 1] produce a warning; they are clamped on encode.

    Args:
        buffer: The buffer to validate.

    Returns:
        ValidationResult with errors and warnings. ``field`` names the first
        offending attribute on failure.
    """
    errors: list[str] = []
    warnings: list[str] = []
    first_field: str | None = None

    def fail(field: str, message: str) -> None:
        nonlocal first_field
        if first_field is None:
            first_field = field
        errors.append(message)

    # Header fields must be integers before any range check
    integral = True
    for name in ("sample_rate", "channel_count", "frame_count"):
        value = getattr(buffer, name)
        if not is_integer(value):
            fail(name, f"{name} must be an integer, got {type(value).__name__} {value!r}")
            integral = False

    if not integral:
        return ValidationResult.failure(errors, warnings, field=first_field)

    # Sample rate
    if buffer.sample_rate < 1:
        fail("sample_rate", f"sample_rate must be >= 1, got {buffer.sample_rate}")
    elif buffer.sample_rate > MAX_U32:
        fail("sample_rate", f"sample_rate {buffer.sample_rate} does not fit a 32-bit header field")

    # Channel structure
    if buffer.channel_count < 1:
        fail("channel_count", f"channel_count must be >= 1, got {buffer.channel_count}")
    elif buffer.channel_count > MAX_U16 // 2:
        fail("channel_count", f"channel_count {buffer.channel_count} is too large for block_align")

    if buffer.channel_count != len(buffer.channels):
        fail(
            "channels",
            f"channel_count is {buffer.channel_count}, but {len(buffer.channels)} "
            "channel planes were given",
        )

    if buffer.frame_count < 0:
        fail("frame_count", f"frame_count must be >= 0, got {buffer.frame_count}")

    for i, plane in enumerate(buffer.channels):
        samples = np.asarray(plane)
        if samples.ndim != 1:
            fail("channels", f"Channel {i}: expected a 1D plane, got shape {samples.shape}")
            continue

        if len(samples) != buffer.frame_count:
            fail(
                "channels",
                f"Channel {i}: expected {buffer.frame_count} samples, got {len(samples)}",
            )

        if samples.size == 0:
            continue

        if not np.issubdtype(samples.dtype, np.number) or np.iscomplexobj(samples):
            fail("channels", f"Channel {i}: expected real numeric samples, got {samples.dtype}")
            continue

        # Check for NaN/Inf
        if not np.all(np.isfinite(samples)):
            nan_count = int(np.sum(np.isnan(samples)))
            inf_count = int(np.sum(np.isinf(samples)))
            fail(
                "channels",
                f"Channel {i}: contains non-finite values ({nan_count} NaN, {inf_count} Inf)",
            )
            continue

        # Check sample range (warning only)
        max_abs = float(np.max(np.abs(samples)))
        if max_abs > 1.0:
            warnings.append(
                f"Channel {i}: samples exceed [-1, 1] range and will be clamped, "
                f"max |sample| = {max_abs:.4f}"
            )

    # Header field capacity
    if buffer.channel_count >= 1 and buffer.frame_count >= 0:
        data_size = pcm_data_size(buffer.channel_count, buffer.frame_count)
        if PCM_HEADER_SIZE - 8 + data_size > MAX_U32:
            fail(
                "frame_count",
                f"Encoded size of {data_size} data bytes exceeds the 4 GiB RIFF limit",
            )
        if buffer.sample_rate >= 1 and buffer.sample_rate * buffer.channel_count * 2 > MAX_U32:
            fail("sample_rate", "byte_rate does not fit a 32-bit header field")

    if errors:
        return ValidationResult.failure(errors, warnings, field=first_field)
    return ValidationResult.success(warnings)
