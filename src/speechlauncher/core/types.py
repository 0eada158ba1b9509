"""Core data types shared across speechlauncher modules."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RecognitionEvent:
    """Raw event from the recognition engine, one per utterance.

    ``confidence`` is on the engine's native scale (0.0-1.0 for Vosk).
    """

    text: str = ""
    semantics: Mapping[str, str] = field(default_factory=dict)
    confidence: float = 0.0


@dataclass(frozen=True, slots=True)
class RecognitionResult:
    """Immutable (object, action, confidence) triple for one utterance."""

    topic_label: str
    action_label: str
    confidence_percent: int
