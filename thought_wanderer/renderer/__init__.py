"""pygame drawing of the character and its speech bubble"""

from .character_renderer import CharacterRenderer
from .bubble import SpeechBubbleRenderer, layout_bubble, wrap_text

__all__ = ["CharacterRenderer", "SpeechBubbleRenderer", "layout_bubble", "wrap_text"]
