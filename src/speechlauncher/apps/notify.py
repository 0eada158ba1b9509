"""Console notification surface rendered with Rich."""

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


def render_notification(title: str, body: str) -> Panel:
    """Render one notification as a panel."""
    text = Text()
    for i, line in enumerate(body.splitlines()):
        if i:
            text.append("\n")
        label, sep, value = line.partition(": ")
        if sep:
            text.append(f"{label}: ", style="cyan")
            text.append(value)
        else:
            text.append(line)
    return Panel(text, title=title, title_align="left", padding=(0, 1))


class ConsoleNotifier:
    """Notifier that prints a panel; safe to call from the engine thread."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def notify(self, title: str, body: str) -> None:
        self.console.print(render_notification(title, body))
