"""
Quantization

Float to fixed-point conversions required by the RFA format. Both
conversions truncate toward zero in 32-bit float arithmetic so output
matches existing assets bit for bit.
"""

import numpy as np

from ..config.settings import FRAMES_PER_SECOND, TICKS_PER_FRAME, QUAT_SCALE

_FPS = np.float32(FRAMES_PER_SECOND)
_TICKS_PER_FRAME = np.float32(TICKS_PER_FRAME)
_QUAT_SCALE = np.float32(QUAT_SCALE)


def quantize_times(seconds) -> np.ndarray:
    """Convert an array of timestamps in seconds to int32 ticks."""
    scaled = np.asarray(seconds, dtype=np.float32) * _FPS * _TICKS_PER_FRAME
    return np.trunc(scaled).astype(np.int32)


def quantize_time(seconds: float) -> int:
    """
    Convert a timestamp in seconds to RF ticks (4800 per second).

    Args:
        seconds: Time in seconds

    Returns:
        Tick count, truncated toward zero
    """
    return int(quantize_times(seconds))


def quantize_quats(quats) -> np.ndarray:
    """Convert an N x 4 array of unit quaternions to int16 fixed point."""
    scaled = np.asarray(quats, dtype=np.float32) * _QUAT_SCALE
    return np.trunc(scaled).astype(np.int16)


def quantize_quat(quat) -> tuple:
    """
    Convert a unit quaternion to four signed 16-bit components.

    No clamping is done; components must lie in [-1, 1].
    """
    return tuple(int(c) for c in quantize_quats(quat).reshape(4))
