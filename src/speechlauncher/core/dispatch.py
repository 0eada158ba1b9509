"""Per-utterance pipeline: interpret -> gate -> resolve -> dispatch.

Dispatcher.handle() runs synchronously on whichever thread delivers the
recognition event. Every recognition or resolution failure is logged and
the utterance dropped; the listening loop never sees them. Launch errors
from the process launcher are not caught here.
"""

from speechlauncher.core.config import Action, LauncherConfig
from speechlauncher.core.env import LOGGER
from speechlauncher.core.errors import MalformedEvent, ResolutionError
from speechlauncher.core.interpret import accept, interpret
from speechlauncher.core.protocols import Notifier, ProcessLauncher
from speechlauncher.core.resolve import resolve
from speechlauncher.core.types import RecognitionEvent, RecognitionResult


def format_notification(result: RecognitionResult) -> tuple[str, str]:
    """Title and body shown to the user for a dispatched action."""
    body = (
        f"Action: {result.action_label}\n"
        f"Confidence: {result.confidence_percent}%"
    )
    return result.topic_label, body


class Dispatcher:
    """Turns recognition events into launched actions."""

    __slots__ = ("config", "launcher", "notifier", "scale")

    def __init__(
        self,
        config: LauncherConfig,
        launcher: ProcessLauncher,
        notifier: Notifier,
        scale: float = 1.0,
    ) -> None:
        self.config = config
        self.launcher = launcher
        self.notifier = notifier
        self.scale = scale

    def dispatch(self, action: Action, result: RecognitionResult) -> None:
        """Notify the user, then hand *action* to the process launcher.

        Calling twice launches twice.
        """
        title, body = format_notification(result)
        self.notifier.notify(title, body)
        self.launcher.launch(
            action.command,
            action.arguments,
            action.working_directory,
            action.visible,
        )

    def handle(self, event: RecognitionEvent) -> Action | None:
        """Process one recognition event; return the dispatched action."""
        try:
            result = interpret(event, self.scale)
        except MalformedEvent as exc:
            LOGGER.warning("Dropping malformed event: %s", exc)
            return None

        LOGGER.info(
            '"%s" => "%s" (%d%%)',
            result.topic_label,
            result.action_label,
            result.confidence_percent,
        )

        if not accept(result, self.config.confidence):
            LOGGER.info(
                "Confidence low (%d%% < %d%%), ignoring",
                result.confidence_percent,
                self.config.confidence,
            )
            return None

        try:
            action = resolve(self.config, result.topic_label, result.action_label)
        except ResolutionError as exc:
            LOGGER.warning(
                "Grammar and configuration out of sync, dropping: %s", exc
            )
            return None

        self.dispatch(action, result)
        return action
