"""Live listening loop: microphone -> Vosk -> Dispatcher.

The sounddevice callback runs on the audio thread and only copies frames
into a bounded asyncio queue; a single consumer task feeds the recognizer
and hands each final result to the dispatcher in arrival order. Frames
are dropped when the queue is full.

Vosk and sounddevice imports are deferred so that importing this module
does not require either to be installed.
"""

from __future__ import annotations

import asyncio
import json
import signal
from typing import Any

import numpy as np

from speechlauncher.audio.frames import to_pcm16
from speechlauncher.core.config import LauncherConfig
from speechlauncher.core.constants import (
    DEFAULT_AUDIO_QUEUE_MAXSIZE,
    DEFAULT_BLOCK_SIZE,
    DEFAULT_SAMPLE_RATE,
)
from speechlauncher.core.dispatch import Dispatcher
from speechlauncher.core.env import LOGGER, suppress_output
from speechlauncher.core.grammar import GrammarSpec
from speechlauncher.core.text import normalize_phrase
from speechlauncher.core.types import RecognitionEvent

UNKNOWN_TOKEN = "[unk]"

# Vosk publishes models by language; map locales without an exact model.
_VOSK_LANGS = {
    "en-gb": "en-us",
    "en-au": "en-us",
    "en-ca": "en-us",
    "en-in": "en-in",
    "en-us": "en-us",
}


def vosk_lang(locale: str) -> str:
    """Vosk model language for a config locale such as ``en-GB``."""
    key = locale.strip().lower().replace("_", "-")
    if key in _VOSK_LANGS:
        return _VOSK_LANGS[key]
    return key.split("-")[0] or "en-us"


def grammar_json(grammar: GrammarSpec) -> str:
    """Phrase list passed to KaldiRecognizer; ``[unk]`` absorbs other speech."""
    return json.dumps([*grammar.phrases(), UNKNOWN_TOKEN])


def parse_vosk_result(payload: str, grammar: GrammarSpec) -> RecognitionEvent | None:
    """Turn a Vosk JSON result into a RecognitionEvent.

    Returns None for silence or out-of-grammar noise. Confidence is the
    mean per-word ``conf`` (0.0-1.0), or 1.0 when word info is missing.
    An utterance the grammar cannot split yields an event with empty
    semantics, which the interpreter rejects as malformed.
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        LOGGER.debug("Unparseable recognizer output: %r", payload)
        return None
    if not isinstance(data, dict):
        return None

    raw_text = str(data.get("text", ""))
    if UNKNOWN_TOKEN in raw_text:
        return None
    text = normalize_phrase(raw_text)
    if not text:
        return None

    words = data.get("result") or []
    confs = [
        float(w["conf"]) for w in words if isinstance(w, dict) and "conf" in w
    ]
    confidence = sum(confs) / len(confs) if confs else 1.0

    return RecognitionEvent(
        text=text,
        semantics=grammar.match(text) or {},
        confidence=confidence,
    )


def load_vosk_model(model_path: str | None, locale: str) -> Any:
    """Load a Vosk model from *model_path* or by language."""
    import vosk

    vosk.SetLogLevel(-1)
    with suppress_output():
        if model_path:
            return vosk.Model(model_path)
        return vosk.Model(lang=vosk_lang(locale))


class CommandListener:
    """Async pipeline that listens for commands until interrupted."""

    def __init__(
        self,
        config: LauncherConfig,
        grammar: GrammarSpec,
        dispatcher: Dispatcher,
        model_path: str | None = None,
        device: int | None = None,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
    ) -> None:
        self.config = config
        self.grammar = grammar
        self.dispatcher = dispatcher
        self.model_path = model_path
        self.device = device
        self.sample_rate = sample_rate

        self.audio_queue: asyncio.Queue[np.ndarray] = asyncio.Queue(
            maxsize=DEFAULT_AUDIO_QUEUE_MAXSIZE
        )
        self.loop: asyncio.AbstractEventLoop | None = None
        self.recognizer: Any = None
        self.dropped_frames = 0

    def _enqueue(self, data: np.ndarray) -> None:
        if self.audio_queue.full():
            self.dropped_frames += 1
            return
        self.audio_queue.put_nowait(data)

    def _audio_callback(
        self,
        indata: np.ndarray,
        frames: int,
        time_info: Any,
        status: Any,
    ) -> None:
        """Keep callback lightweight by deferring work to the async loop."""
        if status:
            LOGGER.debug("Audio status: %s", status)
        data = indata.copy()
        self.loop.call_soon_threadsafe(self._enqueue, data)

    def feed(self, pcm: bytes) -> RecognitionEvent | None:
        """Push PCM into the recognizer; return an event on a final result."""
        if self.recognizer.AcceptWaveform(pcm):
            return parse_vosk_result(self.recognizer.Result(), self.grammar)
        partial = json.loads(self.recognizer.PartialResult()).get("partial", "")
        if partial:
            LOGGER.debug("... %s", partial)
        return None

    def process_event(self, event: RecognitionEvent) -> None:
        """Top-level handler for one utterance; never lets it kill the loop."""
        try:
            self.dispatcher.handle(event)
        except Exception:
            LOGGER.exception("Failed to run action for %r", event.text)

    async def _consumer(self) -> None:
        """Single consumer: recognize frames and dispatch in order."""
        while True:
            frame = await self.audio_queue.get()
            event = self.feed(to_pcm16(frame))
            if event is not None:
                self.process_event(event)

    async def run(self) -> None:
        """Wire model, stream, and consumer, then manage their lifecycle."""
        import sounddevice as sd
        import vosk

        self.loop = asyncio.get_running_loop()

        LOGGER.info("Loading recognition model...")
        model = await asyncio.to_thread(
            load_vosk_model, self.model_path, self.config.locale
        )
        self.recognizer = vosk.KaldiRecognizer(
            model, self.sample_rate, grammar_json(self.grammar)
        )
        self.recognizer.SetWords(True)

        stream_kwargs: dict[str, Any] = {}
        if self.device is not None:
            stream_kwargs["device"] = self.device
        stream = sd.InputStream(
            samplerate=self.sample_rate,
            blocksize=DEFAULT_BLOCK_SIZE,
            channels=1,
            dtype="int16",
            callback=self._audio_callback,
            **stream_kwargs,
        )

        LOGGER.info(
            "Ready - %d phrases, confidence >= %d%%",
            len(self.grammar.phrases()),
            self.config.confidence,
        )
        LOGGER.info(
            "Listening for %r... (Ctrl+C to stop)", self.config.wake_word
        )
        stream.start()

        consumer = asyncio.create_task(self._consumer())
        stop_event = asyncio.Event()

        def signal_handler() -> None:
            if not stop_event.is_set():
                LOGGER.info("Stopping...")
                stop_event.set()

        signal_handler_installed = False
        try:
            self.loop.add_signal_handler(signal.SIGINT, signal_handler)
            signal_handler_installed = True
        except NotImplementedError:
            signal_handler_installed = False

        try:
            await stop_event.wait()
        finally:
            if signal_handler_installed:
                self.loop.remove_signal_handler(signal.SIGINT)

            # Stop producing before the consumer goes away.
            stream.stop()
            stream.close()

            consumer.cancel()
            try:
                await asyncio.wait_for(
                    asyncio.gather(consumer, return_exceptions=True),
                    timeout=2.0,
                )
            except asyncio.TimeoutError:
                LOGGER.debug("Consumer did not stop within 2s")

            if self.dropped_frames:
                LOGGER.debug("Dropped %d audio frames", self.dropped_frames)
