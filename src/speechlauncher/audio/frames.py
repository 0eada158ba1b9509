"""Convert sounddevice frames into the 16-bit mono PCM Vosk expects."""

import numpy as np


def to_pcm16(frame: np.ndarray) -> bytes:
    """Return *frame* as little-endian int16 mono PCM bytes.

    Float frames are assumed to be in [-1.0, 1.0] and are clipped.
    Multi-channel frames are mixed down by averaging.
    """
    if frame.size == 0:
        return b""
    is_float = np.issubdtype(frame.dtype, np.floating)
    data = frame.astype(np.float32)
    if data.ndim > 1:
        data = data.mean(axis=1)
    if is_float:
        data = np.clip(data, -1.0, 1.0) * 32767.0
    return np.round(data).astype("<i2").tobytes()
