"""Default configuration values for speechlauncher."""

from typing import Final

DEFAULT_WAKE_WORD: Final = "okay computer"
DEFAULT_CONFIDENCE: Final = 40
DEFAULT_LOCALE: Final = "en-GB"

# Semantic slot keys shared by the grammar and the interpreter
OBJECT_SLOT: Final = "object"
ACTION_SLOT: Final = "action"

# Audio capture
DEFAULT_SAMPLE_RATE: Final = 16_000
DEFAULT_BLOCK_SIZE: Final = 8_000
DEFAULT_AUDIO_QUEUE_MAXSIZE: Final = 200

# Settings file
DEFAULT_CONFIG_DIR: Final = "~/.config/speechlauncher"
DEFAULT_CONFIG_DIR_ENV: Final = "SPEECHLAUNCHER_CONFIG_DIR"
DEFAULT_CONFIG_FILE: Final = "settings.yml"
