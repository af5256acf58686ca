"""
Speech bubble layout and drawing (pygame)

The layout half is pure (text in, rectangles and lines out) and takes the
text measuring function as a parameter; only draw() touches pygame.

    +----------------------------+  <- bubble_y
    |  padding                   |
    |  line 1                    |
    |  line 2                    |
    |                   padding  |
    +-----------\  /-------------+
                 \/                  <- tail, points at the character
                                     ~ vertical_offset
                 @@                  <- character center (x, y)
"""

from dataclasses import dataclass
from typing import Callable, List, Tuple

import pygame

BLACK = (0, 0, 0)
BUBBLE_FILL = (255, 255, 255, 230)   # white, 90% opaque

MAX_WIDTH = 300
PADDING = 15
BORDER_RADIUS = 10
VERTICAL_OFFSET = 50
LINE_HEIGHT = 20
TAIL_SIZE = 10


def wrap_text(text: str, max_width: float,
              measure: Callable[[str], float]) -> List[str]:
    """
    Greedy word wrap.

    Words are added to the current line while the line stays narrower than
    `max_width`; a single word wider than that still gets its own line.
    """
    words = text.split()
    if not words:
        return []

    lines = []
    current = words[0]
    for word in words[1:]:
        candidate = f"{current} {word}"
        if measure(candidate) < max_width:
            current = candidate
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return lines


@dataclass(frozen=True)
class BubbleLayout:
    x: float
    y: float
    width: float
    height: float
    lines: Tuple[str, ...]


def layout_bubble(text: str, x: float, y: float,
                  measure: Callable[[str], float]) -> BubbleLayout:
    """Size and place a bubble for `text` above a character at (x, y)."""
    lines = wrap_text(text, MAX_WIDTH - PADDING * 2, measure)
    widest = max((measure(line) for line in lines), default=0)
    width = min(MAX_WIDTH, widest + PADDING * 2)
    height = len(lines) * LINE_HEIGHT + PADDING * 2
    return BubbleLayout(
        x=x - width / 2,
        y=y - height - VERTICAL_OFFSET,
        width=width,
        height=height,
        lines=tuple(lines),
    )


class SpeechBubbleRenderer:
    """Draws the sentence currently being spoken above the character."""

    def __init__(self, font: pygame.font.Font):
        self.font = font

    def measure(self, text: str) -> float:
        return self.font.size(text)[0]

    def draw(self, surface: pygame.Surface, text: str, x: float, y: float):
        if not text:
            return

        layout = layout_bubble(text, x, y, self.measure)
        rect = pygame.Rect(int(layout.x), int(layout.y),
                           int(layout.width), int(layout.height))
        tail = [
            (x - TAIL_SIZE, rect.bottom),
            (x, rect.bottom + TAIL_SIZE),
            (x + TAIL_SIZE, rect.bottom),
        ]

        # Translucent fill needs its own SRCALPHA layer
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        pygame.draw.rect(overlay, BUBBLE_FILL, rect, border_radius=BORDER_RADIUS)
        pygame.draw.polygon(overlay, BUBBLE_FILL, tail)
        surface.blit(overlay, (0, 0))

        pygame.draw.rect(surface, BLACK, rect, width=2, border_radius=BORDER_RADIUS)
        pygame.draw.lines(surface, BLACK, False, tail, 2)

        for index, line in enumerate(layout.lines):
            rendered = self.font.render(line, True, BLACK)
            surface.blit(rendered, (rect.x + PADDING,
                                    rect.y + PADDING + index * LINE_HEIGHT))
