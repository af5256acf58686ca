"""Exception types raised by the wanderer."""


class WandererError(Exception):
    """Base class for all wanderer errors."""


class ThoughtFetchError(WandererError):
    """The thought service failed or answered with an unusable payload."""


class SpeechError(WandererError):
    """The speech engine failed to say a sentence."""


class SpriteSheetError(WandererError):
    """The walk spritesheet could not be loaded."""
