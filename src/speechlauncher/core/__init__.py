"""Core command grammar and dispatch package — no audio or UI dependencies.

Re-exports key symbols for convenience.
"""

from speechlauncher.core.config import (
    Action,
    LauncherConfig,
    Topic,
    find_unreachable,
    make_launcher_config,
)
from speechlauncher.core.dispatch import Dispatcher
from speechlauncher.core.errors import (
    ConfigurationError,
    LauncherError,
    MalformedEvent,
    UnknownAction,
    UnknownTopic,
)
from speechlauncher.core.grammar import GrammarSpec, SemanticChoice, compile_grammar
from speechlauncher.core.interpret import accept, interpret
from speechlauncher.core.protocols import Notifier, ProcessLauncher
from speechlauncher.core.resolve import resolve
from speechlauncher.core.types import RecognitionEvent, RecognitionResult

__all__ = [
    "Action",
    "ConfigurationError",
    "Dispatcher",
    "GrammarSpec",
    "LauncherConfig",
    "LauncherError",
    "MalformedEvent",
    "Notifier",
    "ProcessLauncher",
    "RecognitionEvent",
    "RecognitionResult",
    "SemanticChoice",
    "Topic",
    "UnknownAction",
    "UnknownTopic",
    "accept",
    "compile_grammar",
    "find_unreachable",
    "interpret",
    "make_launcher_config",
    "resolve",
]
