"""
Thought Wanderer - Main Application (pygame version)
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import Optional

import pygame

from .config import WandererConfig
from .entities.sprite import SpriteSheet
from .errors import SpeechError, SpriteSheetError
from .movement.manual import Controls
from .renderer import CharacterRenderer, SpeechBubbleRenderer
from .scheduler import TickScheduler, WandererContext
from .speech import HttpThoughtSource, Pyttsx3Synthesizer, ServiceStatus, SilentSynthesizer

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GRAY = (128, 128, 128)
GREEN = (0, 160, 0)
ORANGE = (255, 165, 0)
RED = (200, 0, 0)

STATUS_COLORS = {
    "connected": GREEN,
    "initializing": ORANGE,
    "offline": RED,
}


class WandererApp:
    """Window, input and render loop around one TickScheduler"""

    def __init__(self, config: WandererConfig, synthesizer=None, thought_source=None):
        self.config = config

        pygame.init()
        self.screen_width = config.canvas_width
        self.screen_height = config.canvas_height
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height),
                                              pygame.RESIZABLE)
        pygame.display.set_caption("Thought Wanderer")

        self.font = pygame.font.Font(None, 22)
        self.small_font = pygame.font.Font(None, 18)

        # External services
        if synthesizer is None:
            if config.mute:
                synthesizer = SilentSynthesizer()
            else:
                synthesizer = Pyttsx3Synthesizer(config.voice, config.language,
                                                 config.speech_rate)
        if thought_source is None:
            thought_source = HttpThoughtSource(config.server_url, config.request_timeout)
        self.synthesizer = synthesizer
        self.thought_source = thought_source

        # Simulation core
        self.context = WandererContext.create(config, self.synthesizer, self.thought_source)
        self.scheduler = TickScheduler(self.context, on_frame_start=self._clear_frame)

        # Drawing
        self.character_renderer = CharacterRenderer(
            self._load_spritesheet(), config.sprite_width, config.sprite_height
        )
        self.bubble_renderer = SpeechBubbleRenderer(self.font)

        # UI state
        self.show_info = True
        self.status = ServiceStatus(online=False)
        self._toggle_requested = False
        self.running = True

    def _load_spritesheet(self) -> Optional[SpriteSheet]:
        path = self.config.spritesheet
        if not path or not Path(path).exists():
            print(f"Spritesheet not found ({path}), drawing a placeholder")
            return None
        try:
            sheet = SpriteSheet(path, self.config.sprite_width, self.config.sprite_height,
                                self.config.frame_count)
        except SpriteSheetError as e:
            print(f"Warning: {e}")
            return None
        print(f"Loaded spritesheet: {Path(path).name} "
              f"({sheet.frame_width}x{sheet.frame_height} per frame)")
        return sheet

    # === Input ===

    def handle_events(self) -> Controls:
        """Drain pygame events and resolve this frame's controls"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width = event.w
                self.screen_height = event.h
                self.screen = pygame.display.set_mode((self.screen_width, self.screen_height),
                                                      pygame.RESIZABLE)
                self.context.resize(self.screen_width, self.screen_height)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self._toggle_requested = True
                elif event.key == pygame.K_i:
                    self.show_info = not self.show_info

        keys = pygame.key.get_pressed()
        controls = Controls(
            up=bool(keys[pygame.K_UP]),
            down=bool(keys[pygame.K_DOWN]),
            left=bool(keys[pygame.K_LEFT]),
            right=bool(keys[pygame.K_RIGHT]),
            toggle_mode=self._toggle_requested,
        )
        self._toggle_requested = False
        return controls

    # === Drawing ===

    def _clear_frame(self):
        self.screen.fill(WHITE)

    def draw_ui(self):
        """Draw status line and help"""
        if not self.show_info:
            return

        character = self.context.character
        label = self.status.label
        lines = [
            (f"API: {label}", STATUS_COLORS[label]),
            (f"Mode: {character.movement_mode.value} | Queue: {len(self.context.speech)}", GRAY),
        ]
        y = 10
        for text, color in lines:
            self.screen.blit(self.small_font.render(text, True, color), (10, y))
            y += 20

        help_line = "Arrows: Move (manual) | Space: Toggle mode | I: Info | ESC: Quit"
        self.screen.blit(self.small_font.render(help_line, True, GRAY),
                         (10, self.screen_height - 25))

    def draw(self):
        state = self.context.character.render_state()
        self.character_renderer.draw(self.screen, state)
        if state.current_utterance:
            self.bubble_renderer.draw(self.screen, state.current_utterance, state.x, state.y)
        self.draw_ui()
        pygame.display.flip()

    # === Service status ===

    async def _poll_status(self):
        interval = self.config.status_check_interval / 1000.0
        previous = None
        while self.running:
            status = await self.thought_source.check_status()
            if status != previous:
                logger.info("Thought service: %s", status.label)
            self.status = previous = status
            await asyncio.sleep(interval)

    async def _start_synthesizer(self):
        try:
            await self.synthesizer.start()
        except SpeechError as e:
            logger.warning("%s - continuing without sound", e)
            self.synthesizer = SilentSynthesizer()
            self.context.speech.synthesizer = self.synthesizer

    # === Main loop ===

    async def run(self):
        """Main application loop"""
        await self._start_synthesizer()
        status_task = asyncio.create_task(self._poll_status())

        frame_time = 1.0 / self.config.fps
        last_time = time.perf_counter()

        print("\n=== Ready! ===")
        print("Space: Toggle wander/manual | Arrows: Move | I: Info | ESC: Quit")

        try:
            while self.running:
                frame_start = time.perf_counter()
                dt = (frame_start - last_time) * 1000.0
                last_time = frame_start

                controls = self.handle_events()
                self.scheduler.tick(dt, controls)
                self.draw()

                # Yield to the event loop: speech and fetch tasks run here
                elapsed = time.perf_counter() - frame_start
                await asyncio.sleep(max(0.0, frame_time - elapsed))
        finally:
            status_task.cancel()
            await asyncio.gather(status_task, return_exceptions=True)
            await self.scheduler.shutdown()
            await self.synthesizer.close()
            await self.thought_source.aclose()
            pygame.quit()
