"""
Thinking and talking: thought fetching, sentence queue, speech engines
"""

from .queue import SpeechQueue, split_sentences
from .throttle import ThoughtThrottle
from .synthesizer import (
    SpeechSynthesizer, Pyttsx3Synthesizer, SilentSynthesizer, select_voice
)
from .thought_source import HttpThoughtSource, ServiceStatus

__all__ = [
    "SpeechQueue",
    "split_sentences",
    "ThoughtThrottle",
    "SpeechSynthesizer",
    "Pyttsx3Synthesizer",
    "SilentSynthesizer",
    "select_voice",
    "HttpThoughtSource",
    "ServiceStatus",
]
