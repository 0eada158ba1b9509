"""Structural type protocols for the dispatcher's external collaborators."""

from typing import Protocol


class Notifier(Protocol):
    """User-facing notification surface (console, tray balloon, ...).

    Implementations may be called from the engine's thread.
    """

    def notify(self, title: str, body: str) -> None: ...


class ProcessLauncher(Protocol):
    """Starts an external process; expands environment variables itself."""

    def launch(
        self,
        command: str,
        arguments: str,
        working_directory: str,
        visible: bool,
    ) -> None: ...
