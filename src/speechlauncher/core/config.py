"""Frozen configuration model: wake word, objects (topics) and their actions.

The model is built once at startup from the raw settings mapping and is
read-only afterwards. Objects are called "topics" in code; the settings
file uses the ``objects`` key.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from speechlauncher.core.constants import (
    DEFAULT_CONFIDENCE,
    DEFAULT_LOCALE,
    DEFAULT_WAKE_WORD,
)
from speechlauncher.core.errors import ConfigurationError
from speechlauncher.core.text import normalize_phrase


@dataclass(frozen=True, slots=True)
class Action:
    """A named command with its launch parameters and trigger words.

    ``command``, ``arguments`` and ``working_directory`` may hold
    environment-variable placeholders; they are expanded by the launcher.
    """

    name: str
    words: tuple[str, ...] = ()
    command: str = ""
    arguments: str = ""
    working_directory: str = ""
    visible: bool = False


@dataclass(frozen=True, slots=True)
class Topic:
    """A named group of actions, reached by any of its trigger words."""

    name: str
    words: tuple[str, ...] = ()
    actions: tuple[Action, ...] = ()


@dataclass(frozen=True, slots=True)
class LauncherConfig:
    """Top-level configuration loaded from the settings file."""

    wake_word: str = DEFAULT_WAKE_WORD
    confidence: int = DEFAULT_CONFIDENCE
    locale: str = DEFAULT_LOCALE
    topics: tuple[Topic, ...] = field(default_factory=tuple)


# Sample settings written on first run.
DEFAULT_SETTINGS: dict[str, Any] = {
    "locale": DEFAULT_LOCALE,
    "confidence": DEFAULT_CONFIDENCE,
    "wake_word": DEFAULT_WAKE_WORD,
    "objects": [
        {
            "name": "Test",
            "words": ["test"],
            "actions": [
                {
                    "name": "Echo",
                    "words": ["echo", "message"],
                    "cmd": "cmd",
                    "arguments": '/C "echo Hello World && pause"',
                    "visible": True,
                },
            ],
        },
        {
            "name": "Question",
            "words": ["what"],
            "actions": [
                {
                    "name": "Current Time",
                    "words": ["time is it", "is the time"],
                    "cmd": "https://time.is/",
                },
            ],
        },
    ],
}


def _first(raw: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the value of the first key present in *raw*."""
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _words(raw: dict[str, Any]) -> tuple[str, ...]:
    words = raw.get("words") or ()
    if isinstance(words, str):
        words = [words]
    return tuple(str(w).strip() for w in words if str(w).strip())


def _parse_visible(raw: dict[str, Any]) -> bool:
    value = raw.get("visible")
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigurationError(
            f"action {raw.get('name')!r}: visible must be true or false, got {value!r}"
        )
    return value


def _make_action(raw: dict[str, Any]) -> Action:
    return Action(
        name=str(raw.get("name") or "").strip(),
        words=_words(raw),
        command=str(_first(raw, "cmd", "command", default="")),
        arguments=str(_first(raw, "arguments", "args", default="")),
        working_directory=str(
            _first(raw, "dir", "working_directory", default="")
        ),
        visible=_parse_visible(raw),
    )


def _make_topic(raw: dict[str, Any]) -> Topic:
    return Topic(
        name=str(raw.get("name") or "").strip(),
        words=_words(raw),
        actions=tuple(
            _make_action(a) for a in raw.get("actions") or () if isinstance(a, dict)
        ),
    )


def _parse_confidence(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ConfigurationError(f"confidence must be an integer, got {value!r}")
    try:
        number = float(value)
    except ValueError as exc:
        raise ConfigurationError(
            f"confidence must be an integer, got {value!r}"
        ) from exc
    if not number.is_integer() or not 0 <= number <= 100:
        raise ConfigurationError(
            f"confidence must be an integer between 0 and 100, got {value!r}"
        )
    return int(number)


def validate_config(config: LauncherConfig) -> LauncherConfig:
    """Check structural invariants, raising ConfigurationError on failure.

    Unreachable objects and actions are not errors; see find_unreachable().
    """
    if not config.wake_word.strip():
        raise ConfigurationError("wake word must not be empty")
    if not 0 <= config.confidence <= 100:
        raise ConfigurationError(
            f"confidence must be between 0 and 100, got {config.confidence}"
        )
    if not config.topics:
        raise ConfigurationError("no objects configured, nothing to listen for")

    seen_topics: set[str] = set()
    for topic in config.topics:
        if not topic.name:
            raise ConfigurationError("object with an empty name")
        if topic.name in seen_topics:
            raise ConfigurationError(f"duplicate object name {topic.name!r}")
        seen_topics.add(topic.name)

        seen_actions: set[str] = set()
        for action in topic.actions:
            if not action.name:
                raise ConfigurationError(
                    f"object {topic.name!r} has an action with an empty name"
                )
            if action.name in seen_actions:
                raise ConfigurationError(
                    f"object {topic.name!r} has duplicate action {action.name!r}"
                )
            seen_actions.add(action.name)
    return config


def make_launcher_config(raw: dict[str, Any]) -> LauncherConfig:
    """Factory: resolve the raw settings mapping into a frozen config.

    Accepts the settings-file keys (``wake_word``, ``objects``,
    ``cmd``, ``dir``) as well as the long names used in code.
    """
    topics_raw = _first(raw, "objects", "topics", default=[])
    if not isinstance(topics_raw, list):
        raise ConfigurationError("'objects' must be a list")

    config = LauncherConfig(
        wake_word=str(_first(raw, "wake_word", default=DEFAULT_WAKE_WORD)).strip(),
        confidence=_parse_confidence(
            _first(raw, "confidence", default=DEFAULT_CONFIDENCE)
        ),
        locale=str(_first(raw, "locale", default=DEFAULT_LOCALE)),
        topics=tuple(_make_topic(t) for t in topics_raw if isinstance(t, dict)),
    )
    return validate_config(config)


def config_to_dict(config: LauncherConfig) -> dict[str, Any]:
    """Inverse of make_launcher_config, using the settings-file key names."""
    return {
        "locale": config.locale,
        "confidence": config.confidence,
        "wake_word": config.wake_word,
        "objects": [
            {
                "name": topic.name,
                "words": list(topic.words),
                "actions": [
                    {
                        "name": action.name,
                        "words": list(action.words),
                        "cmd": action.command,
                        "arguments": action.arguments,
                        "dir": action.working_directory,
                        "visible": action.visible,
                    }
                    for action in topic.actions
                ],
            }
            for topic in config.topics
        ],
    }


def find_unreachable(config: LauncherConfig) -> list[str]:
    """List objects and actions that can never be recognized.

    An object without trigger words hides all of its actions; an action
    without trigger words is dead on its own. Objects without actions can
    be heard but never lead anywhere.
    """
    dead: list[str] = []
    for topic in config.topics:
        if not topic.words:
            dead.append(f"object {topic.name!r} (no trigger words)")
        if not topic.actions:
            dead.append(f"object {topic.name!r} (no actions)")
        for action in topic.actions:
            if not action.words:
                dead.append(
                    f"action {topic.name + '/' + action.name!r} (no trigger words)"
                )
    return dead


def find_duplicate_words(config: LauncherConfig) -> dict[str, list[str]]:
    """Trigger words claimed by more than one label in the same slot.

    Keys are ``"object:<word>"`` or ``"action:<word>"``; values are the
    competing labels in declaration order. Which one the engine picks is
    engine-defined.
    """
    owners: dict[str, list[str]] = {}
    for topic in config.topics:
        for word in topic.words:
            labels = owners.setdefault(f"object:{normalize_phrase(word)}", [])
            if topic.name not in labels:
                labels.append(topic.name)
        for action in topic.actions:
            for word in action.words:
                labels = owners.setdefault(f"action:{normalize_phrase(word)}", [])
                if action.name not in labels:
                    labels.append(action.name)
    return {key: labels for key, labels in owners.items() if len(labels) > 1}


def count_trigger_words(config: LauncherConfig) -> Counter[str]:
    """Total object and action trigger words, before any deduplication."""
    counts: Counter[str] = Counter()
    for topic in config.topics:
        counts["object"] += len(topic.words)
        counts["action"] += sum(len(a.words) for a in topic.actions)
    return counts
