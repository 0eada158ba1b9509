"""Environment setup, output suppression, and logging for speechlauncher.

setup_environment() should be called before importing vosk or
sounddevice so that their import-time warnings stay out of the console.
"""

import contextlib
import io
import logging
import os
import warnings
from collections.abc import Generator

LOGGER = logging.getLogger("speech")


def setup_environment() -> None:
    """Configure warning filters before engine imports."""
    warnings.filterwarnings("ignore", category=UserWarning)
    warnings.filterwarnings("ignore", category=DeprecationWarning)
    warnings.filterwarnings("ignore", category=FutureWarning)

    os.environ["PYTHONWARNINGS"] = "ignore"


def configure_logging(level: str | None = None) -> None:
    """Route the ``speech`` logger through Rich on stderr.

    *level* defaults to the ``LOG_LEVEL`` environment variable, then INFO.
    """
    from rich.console import Console
    from rich.logging import RichHandler

    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=True,
                show_path=False,
                rich_tracebacks=False,
            )
        ],
        force=True,
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)


@contextlib.contextmanager
def suppress_output() -> Generator[None, None, None]:
    """Hide Kaldi's native log spam while the recognition model loads.

    Redirects fd-level stderr and Python-level stdout/stderr to devnull
    so that library code writing directly to file descriptors is silenced.
    """
    devnull = os.open(os.devnull, os.O_WRONLY)
    stderr_fd = os.dup(2)
    try:
        os.dup2(devnull, 2)
        with (
            contextlib.redirect_stdout(io.StringIO()),
            contextlib.redirect_stderr(io.StringIO()),
        ):
            yield
    finally:
        os.dup2(stderr_fd, 2)
        os.close(stderr_fd)
        os.close(devnull)
