"""
Cart Runner audio: sound cues out, microphone loudness in.
"""

from .engine import AudioEngine
from .loudness import LoudnessSensor, peak_level

__all__ = ["AudioEngine", "LoudnessSensor", "peak_level"]
