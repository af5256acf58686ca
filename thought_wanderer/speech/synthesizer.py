"""
Speech synthesizers

Two implementations of the same async contract, `await speak(text)`:

- Pyttsx3Synthesizer: the operating system's voices through pyttsx3.
  pyttsx3 blocks until the sentence has been played, so every engine call
  runs on ONE dedicated worker thread (the engine is not thread-safe and
  must stay on the thread that created it). The event loop only awaits,
  except for stop(), which close() calls directly to cut a sentence short.
- SilentSynthesizer: says nothing and waits for a reading time instead,
  so speech bubbles stay on screen long enough to be read.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

import pyttsx3

from .. import config
from ..errors import SpeechError

logger = logging.getLogger(__name__)


class SpeechSynthesizer(ABC):
    """Speaks one sentence; resolves when it has been said (or failed)."""

    async def start(self):
        """Prepare the engine. Called once before the first sentence."""

    @abstractmethod
    async def speak(self, text: str):
        """Say `text`. May raise; callers treat failure as completion."""

    async def close(self):
        """Release engine resources."""


def _language_codes(voice) -> list:
    """
    Normalized language tags of a pyttsx3 voice.

    Drivers disagree here: SAPI5 and NSSpeechSynthesizer give strings,
    eSpeak gives bytes with a leading priority byte (b'\\x05fr').
    """
    codes = []
    for lang in getattr(voice, 'languages', None) or []:
        if isinstance(lang, bytes):
            lang = lang.decode('utf-8', errors='ignore')
        lang = ''.join(ch for ch in str(lang) if ch.isprintable()).strip()
        if lang:
            codes.append(lang.replace('_', '-').lower())
    return codes


def select_voice(voices: Iterable, preferred_name: str, language: str):
    """
    Pick the voice to speak with.

    Order of preference:
    1. name == preferred_name AND a language tag starting with `language`
    2. any voice with a language tag starting with `language`
    3. the first voice available
    Returns None when there are no voices at all.
    """
    voices = list(voices)
    language = language.lower()

    def speaks_language(voice) -> bool:
        return any(code.startswith(language) for code in _language_codes(voice))

    for voice in voices:
        if getattr(voice, 'name', None) == preferred_name and speaks_language(voice):
            return voice
    for voice in voices:
        if speaks_language(voice):
            return voice
    return voices[0] if voices else None


class Pyttsx3Synthesizer(SpeechSynthesizer):
    """Local text-to-speech through pyttsx3."""

    def __init__(self, voice_name: str = config.DEFAULT_VOICE,
                 language: str = config.DEFAULT_LANGUAGE,
                 rate_factor: float = config.SPEECH_RATE):
        self.voice_name = voice_name
        self.language = language
        self.rate_factor = rate_factor
        self._engine = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tts")

    async def start(self):
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self._executor, self._init_engine)

    def _init_engine(self):
        try:
            engine = pyttsx3.init()

            voice = select_voice(engine.getProperty('voices'), self.voice_name, self.language)
            if voice is not None:
                engine.setProperty('voice', voice.id)
                logger.info("Selected voice: %s", voice.name)
            else:
                logger.warning("No voice installed, using the engine default")

            rate = engine.getProperty('rate')
            engine.setProperty('rate', int(rate * self.rate_factor))
        except Exception as e:
            raise SpeechError(f"Speech engine unavailable: {e}") from e
        self._engine = engine

    async def speak(self, text: str):
        if not text:
            return
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self._executor, self._say, text)

    def _say(self, text: str):
        if self._engine is None:
            self._init_engine()
        try:
            self._engine.say(text)
            self._engine.runAndWait()
        except Exception as e:
            raise SpeechError(f"Could not say {text!r}: {e}") from e

    async def close(self):
        # Not on the executor: the worker may be blocked in runAndWait()
        if self._engine is not None:
            self._engine.stop()
        self._executor.shutdown(wait=False)


class SilentSynthesizer(SpeechSynthesizer):
    """
    Mute "speech": wait as long as it takes to read the sentence.

    reading time = max(min_duration, len(text) * per_char) seconds
    """

    def __init__(self, min_duration: float = 1.5, per_char: float = 0.06,
                 sleep=asyncio.sleep):
        self.min_duration = min_duration
        self.per_char = per_char
        self._sleep = sleep

    def reading_time(self, text: Optional[str]) -> float:
        return max(self.min_duration, len(text or "") * self.per_char)

    async def speak(self, text: str):
        await self._sleep(self.reading_time(text))
