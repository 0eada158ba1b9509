"""Exception hierarchy for speechlauncher.

Startup errors (``ConfigurationError``) are fatal. Everything raised while
handling a single utterance is contained by the dispatcher and dropped.
"""


class LauncherError(Exception):
    """Base class for all speechlauncher errors."""


class ConfigurationError(LauncherError):
    """The configuration is structurally invalid; no grammar can be built."""


class RecognitionError(LauncherError):
    """A recognition event could not be turned into a result."""


class MalformedEvent(RecognitionError):
    """The engine emitted an event missing a semantic slot or confidence."""


class ResolutionError(LauncherError):
    """Recognized labels do not match the configuration."""

    def __init__(self, topic_label: str, action_label: str) -> None:
        super().__init__(topic_label, action_label)
        self.topic_label = topic_label
        self.action_label = action_label


class UnknownTopic(ResolutionError):
    def __str__(self) -> str:
        return f"no object named {self.topic_label!r}"


class UnknownAction(ResolutionError):
    def __str__(self) -> str:
        return (
            f"object {self.topic_label!r} has no action named "
            f"{self.action_label!r}"
        )
