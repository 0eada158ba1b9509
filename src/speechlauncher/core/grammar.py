"""Grammar compilation: configuration -> matchable three-part grammar.

Accepted utterances have the fixed shape::

    <wake word> <object trigger word> <action trigger word>

The object slot is the union of every object's trigger words, each
labelled with the object's name. The action slot is one global union of
every action's trigger words across all objects, labelled with the action
name. Actions are not scoped per object here, so an action heard under
the wrong object is caught later by the resolver.
"""

from dataclasses import dataclass

from speechlauncher.core.config import LauncherConfig
from speechlauncher.core.constants import ACTION_SLOT, OBJECT_SLOT
from speechlauncher.core.env import LOGGER
from speechlauncher.core.errors import ConfigurationError
from speechlauncher.core.text import normalize_phrase


@dataclass(frozen=True, slots=True)
class SemanticChoice:
    """One alternative in a semantic slot: spoken phrase -> label."""

    phrase: str
    value: str


@dataclass(frozen=True, slots=True)
class GrammarSpec:
    """Compiled grammar handed to the recognition engine."""

    wake_word: str
    objects: tuple[SemanticChoice, ...]
    actions: tuple[SemanticChoice, ...]

    @property
    def object_vocabulary(self) -> frozenset[str]:
        return frozenset(c.phrase for c in self.objects)

    @property
    def action_vocabulary(self) -> frozenset[str]:
        return frozenset(c.phrase for c in self.actions)

    def phrases(self) -> list[str]:
        """Expand into every complete utterance the grammar accepts.

        Engines that only take a flat phrase list (Vosk) are loaded with
        this. Order follows declaration order; duplicates are dropped.
        """
        seen: set[str] = set()
        out: list[str] = []
        for obj in self.objects:
            for act in self.actions:
                phrase = f"{self.wake_word} {obj.phrase} {act.phrase}"
                if phrase not in seen:
                    seen.add(phrase)
                    out.append(phrase)
        return out

    def match(self, text: str) -> dict[str, str] | None:
        """Assign semantic values to a recognized utterance.

        Returns ``{"object": label, "action": label}`` when *text* is the
        wake word followed by exactly one object phrase and one action
        phrase, else None. When phrases are duplicated across labels the
        first declared alternative wins and the ambiguity is logged.
        """
        words = normalize_phrase(text)
        prefix = self.wake_word + " "
        if not words.startswith(prefix):
            return None
        rest = words[len(prefix):]

        splits = [
            (obj.value, act.value)
            for obj in self.objects
            if rest.startswith(obj.phrase + " ")
            for act in self.actions
            if rest[len(obj.phrase) + 1:] == act.phrase
        ]
        if not splits:
            return None
        if len(set(splits)) > 1:
            LOGGER.debug(
                "Ambiguous utterance %r fits %s, using the first", words, splits
            )
        topic_label, action_label = splits[0]
        return {OBJECT_SLOT: topic_label, ACTION_SLOT: action_label}


def _union(pairs: list[tuple[str, str]]) -> tuple[SemanticChoice, ...]:
    """Build a slot, dropping only exact (phrase, label) repeats."""
    seen: set[tuple[str, str]] = set()
    choices: list[SemanticChoice] = []
    for word, label in pairs:
        phrase = normalize_phrase(word)
        if not phrase or (phrase, label) in seen:
            continue
        seen.add((phrase, label))
        choices.append(SemanticChoice(phrase=phrase, value=label))
    return tuple(choices)


def compile_grammar(config: LauncherConfig) -> GrammarSpec:
    """Compile *config* into a GrammarSpec.

    Pure and deterministic. Objects or actions without trigger words add
    no alternatives and are simply unreachable. Only a configuration with
    no objects at all is rejected.
    """
    if not config.topics:
        raise ConfigurationError("no objects configured, nothing to listen for")
    wake_word = normalize_phrase(config.wake_word)
    if not wake_word:
        raise ConfigurationError("wake word must not be empty")

    objects = _union(
        [(word, topic.name) for topic in config.topics for word in topic.words]
    )
    actions = _union(
        [
            (word, action.name)
            for topic in config.topics
            for action in topic.actions
            for word in action.words
        ]
    )
    return GrammarSpec(wake_word=wake_word, objects=objects, actions=actions)
