__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy re-exports from speechlauncher.core for convenience."""
    _core_names = {
        "Action",
        "Dispatcher",
        "GrammarSpec",
        "LauncherConfig",
        "RecognitionEvent",
        "RecognitionResult",
        "Topic",
        "accept",
        "compile_grammar",
        "interpret",
        "make_launcher_config",
        "resolve",
    }
    if name in _core_names:
        from speechlauncher import core

        return getattr(core, name)
    raise AttributeError(f"module 'speechlauncher' has no attribute {name!r}")
