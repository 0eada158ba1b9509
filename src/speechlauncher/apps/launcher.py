"""Process launcher: expands environment variables and starts the command.

URLs (``https://...``) open in the default browser, mirroring a shell
"open". Everything else is spawned with subprocess. Launch failures are
raised to the caller.
"""

from __future__ import annotations

import os
import re
import shlex
import subprocess
import sys
import webbrowser
from typing import Any

from speechlauncher.core.env import LOGGER

_URL_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_WIN_VAR_RE = re.compile(r"%([^%]+)%")


def expand_env(value: str) -> str:
    """Expand ``$VAR``, ``${VAR}`` and ``%VAR%`` placeholders.

    Unknown variables are left as written.
    """
    value = os.path.expandvars(value or "")
    return _WIN_VAR_RE.sub(
        lambda m: os.environ.get(m.group(1), m.group(0)), value
    )


def is_url(command: str) -> bool:
    return bool(_URL_RE.match(command))


def build_popen_kwargs(working_directory: str, visible: bool) -> dict[str, Any]:
    """Popen keyword arguments for the working directory and window style."""
    kwargs: dict[str, Any] = {"cwd": working_directory or None}
    if sys.platform == "win32":
        kwargs["creationflags"] = (
            subprocess.CREATE_NEW_CONSOLE if visible else subprocess.CREATE_NO_WINDOW
        )
    if not visible:
        kwargs["stdin"] = subprocess.DEVNULL
        kwargs["stdout"] = subprocess.DEVNULL
        kwargs["stderr"] = subprocess.DEVNULL
    return kwargs


def build_argv(command: str, arguments: str) -> list[str] | str:
    """Command line for Popen.

    On Windows the argument string is passed through untouched, as a
    command line; elsewhere it is split with POSIX shell rules.
    """
    if sys.platform == "win32":
        line = subprocess.list2cmdline([command])
        return f"{line} {arguments}".rstrip()
    return [command, *shlex.split(arguments or "")]


class SubprocessLauncher:
    """ProcessLauncher backed by subprocess and webbrowser."""

    def launch(
        self,
        command: str,
        arguments: str,
        working_directory: str,
        visible: bool,
    ) -> None:
        command = expand_env(command).strip()
        arguments = expand_env(arguments)
        working_directory = expand_env(working_directory)

        if not command:
            raise ValueError("action has no command to run")

        if is_url(command):
            LOGGER.debug("Opening %s", command)
            webbrowser.open(command)
            return

        argv = build_argv(command, arguments)
        LOGGER.debug("Starting %s (cwd=%s)", argv, working_directory or ".")
        subprocess.Popen(argv, **build_popen_kwargs(working_directory, visible))
