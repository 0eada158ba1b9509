"""CLI entry point for speechlauncher.

Loads the settings, compiles the command grammar, and starts listening.
setup_environment() is called before the engine is imported.

Modes:
    (default)  listen for "<wake word> <object> <action>" and run actions
    --check    validate the settings and print the compiled grammar
    --init     write the sample settings file
"""

import argparse
import copy
import dataclasses
import sys

from speechlauncher.core.config import LauncherConfig
from speechlauncher.core.errors import ConfigurationError
from speechlauncher.core.grammar import GrammarSpec

EXIT_CONFIG_ERROR = 2


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="speechlauncher",
        description="Launch programs by voice: <wake word> <object> <action>",
    )
    parser.add_argument(
        "--config-file",
        default=None,
        help="YAML settings file (default: ~/.config/speechlauncher/settings.yml)",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Path to a Vosk model directory (default: download by locale)",
    )
    parser.add_argument(
        "--device", type=int, default=None, help="Audio input device"
    )
    parser.add_argument(
        "--list-devices", action="store_true", help="List audio devices"
    )
    parser.add_argument(
        "--confidence",
        type=int,
        default=None,
        help="Override the confidence threshold (0-100)",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--check",
        action="store_true",
        help="Validate settings, report unreachable commands, and exit",
    )
    mode.add_argument(
        "--init",
        action="store_true",
        help="Write the sample settings file and exit",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="With --init, overwrite an existing settings file",
    )
    return parser


def list_audio_devices() -> None:
    """Display available audio input devices."""
    import sounddevice as sd
    from rich.console import Console
    from rich.table import Table

    console = Console()
    table = Table(title="Audio Input Devices")
    table.add_column("ID", style="cyan")
    table.add_column("Device", style="white")
    table.add_column("Default", style="green")
    for i, d in enumerate(sd.query_devices()):
        if d["max_input_channels"] > 0:
            is_default = "Yes" if i == sd.default.device[0] else ""
            table.add_row(str(i), d["name"], is_default)
    console.print(table)


def _report_warnings(config: LauncherConfig) -> list[str]:
    """Log unreachable commands and ambiguous trigger words."""
    from speechlauncher.core.config import find_duplicate_words, find_unreachable
    from speechlauncher.core.env import LOGGER

    unreachable = find_unreachable(config)
    for entry in unreachable:
        LOGGER.warning("Unreachable: %s", entry)
    for key, labels in find_duplicate_words(config).items():
        slot, _, word = key.partition(":")
        LOGGER.warning(
            "Ambiguous %s trigger %r shared by %s", slot, word, ", ".join(labels)
        )
    return unreachable


def _print_grammar(config: LauncherConfig, grammar: GrammarSpec) -> None:
    """Show the compiled grammar as a table."""
    from rich.console import Console
    from rich.table import Table

    from speechlauncher.core.config import count_trigger_words

    console = Console()
    table = Table(title=f"Wake word: {grammar.wake_word!r}")
    table.add_column("Object", style="cyan")
    table.add_column("Triggers")
    table.add_column("Actions", style="green")
    for topic in config.topics:
        actions = "\n".join(
            f"{a.name}: {', '.join(a.words) or '-'}" for a in topic.actions
        )
        table.add_row(topic.name, ", ".join(topic.words) or "-", actions or "-")
    console.print(table)

    counts = count_trigger_words(config)
    console.print(
        f"object slot: {len(grammar.object_vocabulary)} phrases "
        f"({counts['object']} declared), "
        f"action slot: {len(grammar.action_vocabulary)} phrases "
        f"({counts['action']} declared), "
        f"{len(grammar.phrases())} utterances, "
        f"confidence >= {config.confidence}%"
    )


def _run_init(args: argparse.Namespace) -> int:
    """Write the sample settings, refusing to clobber without --force."""
    from speechlauncher.apps.settings import resolve_settings_path, write_settings
    from speechlauncher.core.config import DEFAULT_SETTINGS
    from speechlauncher.core.env import LOGGER

    path = resolve_settings_path(args.config_file)
    if path.exists() and not args.force:
        LOGGER.error("%s already exists (use --force to overwrite)", path)
        return 1
    write_settings(copy.deepcopy(DEFAULT_SETTINGS), path)
    LOGGER.info("Wrote %s", path)
    return 0


def _load(args: argparse.Namespace) -> tuple[LauncherConfig, GrammarSpec]:
    """Load settings and compile the grammar; raises ConfigurationError."""
    from speechlauncher.apps.settings import load_settings
    from speechlauncher.core.config import validate_config
    from speechlauncher.core.grammar import compile_grammar

    config = load_settings(args.config_file)
    if args.confidence is not None:
        config = validate_config(
            dataclasses.replace(config, confidence=args.confidence)
        )
    return config, compile_grammar(config)


def _run_listen(args: argparse.Namespace) -> int:
    """Listen until interrupted."""
    import asyncio

    from speechlauncher.apps.launcher import SubprocessLauncher
    from speechlauncher.apps.listener import CommandListener
    from speechlauncher.apps.notify import ConsoleNotifier
    from speechlauncher.core.dispatch import Dispatcher

    config, grammar = _load(args)
    _report_warnings(config)

    dispatcher = Dispatcher(config, SubprocessLauncher(), ConsoleNotifier())
    listener = CommandListener(
        config,
        grammar,
        dispatcher,
        model_path=args.model,
        device=args.device,
    )
    try:
        asyncio.run(listener.run())
    except KeyboardInterrupt:
        pass
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code."""
    from speechlauncher.core.env import LOGGER, configure_logging, setup_environment

    setup_environment()
    configure_logging()

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.list_devices:
        list_audio_devices()
        return 0

    if args.init:
        return _run_init(args)

    try:
        if args.check:
            config, grammar = _load(args)
            _print_grammar(config, grammar)
            return 1 if _report_warnings(config) else 0
        return _run_listen(args)
    except ConfigurationError as exc:
        LOGGER.error("Invalid settings: %s", exc)
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
