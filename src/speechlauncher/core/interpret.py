"""Recognition result interpretation and confidence gating."""

import math
from numbers import Real

from speechlauncher.core.constants import ACTION_SLOT, OBJECT_SLOT
from speechlauncher.core.errors import MalformedEvent
from speechlauncher.core.types import RecognitionEvent, RecognitionResult


def normalize_confidence(value: float, scale: float = 1.0) -> int:
    """Map an engine-native score onto 0-100, rounding half up."""
    percent = value / scale * 100
    return max(0, min(100, math.floor(percent + 0.5)))


def interpret(event: RecognitionEvent, scale: float = 1.0) -> RecognitionResult:
    """Extract the object label, action label and confidence from *event*.

    Raises MalformedEvent when a semantic slot is missing or empty, which
    means the engine and the compiled grammar disagree.
    """
    semantics = event.semantics or {}
    topic_label = semantics.get(OBJECT_SLOT)
    action_label = semantics.get(ACTION_SLOT)
    if not topic_label:
        raise MalformedEvent(f"no {OBJECT_SLOT!r} slot in {event.text!r}")
    if not action_label:
        raise MalformedEvent(f"no {ACTION_SLOT!r} slot in {event.text!r}")

    confidence = event.confidence
    if (
        isinstance(confidence, bool)
        or not isinstance(confidence, Real)
        or not math.isfinite(confidence)
    ):
        raise MalformedEvent(f"invalid confidence {confidence!r}")

    return RecognitionResult(
        topic_label=str(topic_label),
        action_label=str(action_label),
        confidence_percent=normalize_confidence(float(confidence), scale),
    )


def accept(result: RecognitionResult, threshold: int) -> bool:
    """Confidence gate: at or above *threshold* passes."""
    return result.confidence_percent >= threshold
