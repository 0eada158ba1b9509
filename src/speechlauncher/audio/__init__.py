"""Audio subpackage: microphone frame conversion for the recognizer."""

from speechlauncher.audio.frames import to_pcm16

__all__ = ["to_pcm16"]
