"""pygame desktop front-end: drawing surface, input capture and overlays."""

from __future__ import annotations

import asyncio
import logging

import pygame

from wyrm.config import GameConfig
from wyrm.controls import ButtonPad, classify_swipe
from wyrm.render import Frame, rasterize
from wyrm.session import SessionController, SessionState

logger = logging.getLogger(__name__)

FPS = 60
PAD_BUTTON_SIZE = 48
PAD_MARGIN = 12

BG = (8, 20, 8)
PAD_FILL = (45, 90, 39)
PAD_BORDER = (212, 175, 55)
TEXT = (240, 230, 200)

_ARROWS = {"up": "^", "down": "v", "left": "<", "right": ">"}


class WyrmWindow:
    """Window wiring keyboard, mouse/touch swipes and the d-pad to a session."""

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.session = SessionController(
            self.config,
            on_frame=self._on_frame,
            on_game_over=self._on_game_over,
        )
        field_w, field_h = self.session.geometry.pixel_size
        self.field_size = (field_w, field_h)
        pad_extent = PAD_BUTTON_SIZE * 3
        window_w = max(field_w, pad_extent)
        self.window_size = (window_w, field_h + pad_extent + 2 * PAD_MARGIN)
        self.pad = ButtonPad(
            origin=((window_w - pad_extent) // 2, field_h + PAD_MARGIN),
            button_size=PAD_BUTTON_SIZE,
        )
        self.running = True
        self.field_surface: pygame.Surface | None = None
        self._swipe_start: tuple[float, float] | None = None

    # --- session callbacks ---

    def _on_frame(self, frame: Frame) -> None:
        img = rasterize(frame)
        self.field_surface = pygame.image.frombytes(img.tobytes(), img.size, "RGB")

    def _on_game_over(self, score: int) -> None:
        logger.info("Final score: %d", score)

    # --- input ---

    def _in_field(self, pos: tuple[float, float]) -> bool:
        return 0 <= pos[0] < self.field_size[0] and 0 <= pos[1] < self.field_size[1]

    def start_or_restart(self) -> None:
        if self.session.state is SessionState.IDLE:
            self.session.start()
        elif self.session.state is SessionState.OVER:
            self.session.restart()

    def press(self, pos: tuple[float, float]) -> None:
        """Pointer down: d-pad button, start command, or swipe start."""
        direction = self.pad.direction_at(pos)
        if direction is not None:
            self.session.post_direction(direction)
        elif self._in_field(pos):
            if self.session.state is not SessionState.RUNNING:
                self.start_or_restart()
            else:
                self._swipe_start = pos

    def release(self, pos: tuple[float, float]) -> None:
        """Pointer up: finish a swipe gesture."""
        start, self._swipe_start = self._swipe_start, None
        if start is None:
            return
        direction = classify_swipe(start, pos, self.config.swipe_threshold)
        if direction is not None:
            self.session.post_direction(direction)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_RETURN, pygame.K_SPACE):
                self.start_or_restart()
            elif event.key == pygame.K_ESCAPE:
                self.running = False
            else:
                self.session.post_direction(pygame.key.name(event.key))
        # Touches also arrive as emulated mouse events; handle them once.
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if not getattr(event, "touch", False):
                self.press(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if not getattr(event, "touch", False):
                self.release(event.pos)
        elif event.type == pygame.FINGERDOWN:
            self.press(self._finger_pos(event))
        elif event.type == pygame.FINGERUP:
            self.release(self._finger_pos(event))

    def _finger_pos(self, event: pygame.event.Event) -> tuple[float, float]:
        # Finger coordinates are normalized to [0, 1].
        w, h = self.window_size
        return event.x * w, event.y * h

    # --- drawing ---

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        screen.fill(BG)
        if self.field_surface is not None:
            screen.blit(self.field_surface, (0, 0))
        for name, (left, top, right, bottom) in self.pad.button_rects().items():
            rect = pygame.Rect(left + 2, top + 2, right - left - 4, bottom - top - 4)
            pygame.draw.rect(screen, PAD_FILL, rect, border_radius=8)
            pygame.draw.rect(screen, PAD_BORDER, rect, width=2, border_radius=8)
            label = font.render(_ARROWS[name], True, TEXT)
            screen.blit(label, label.get_rect(center=rect.center))

        if self.session.state is SessionState.IDLE:
            self._draw_overlay(screen, font, ["WYRM", "Press Enter to begin"])
        elif self.session.state is SessionState.OVER:
            self._draw_overlay(
                screen, font,
                ["GAME OVER", f"Score: {self.session.final_score}",
                 "Press Enter to play again"],
            )

    def _draw_overlay(
        self, screen: pygame.Surface, font: pygame.font.Font, lines: list[str],
    ) -> None:
        w, h = self.field_size
        overlay = pygame.Surface((w, h), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))
        screen.blit(overlay, (0, 0))
        top = h // 2 - 16 * (len(lines) - 1)
        for i, line in enumerate(lines):
            text = font.render(line, True, TEXT)
            screen.blit(text, text.get_rect(center=(w // 2, top + 32 * i)))

    # --- main loop ---

    async def run_async(self) -> None:
        pygame.init()
        screen = pygame.display.set_mode(self.window_size)
        pygame.display.set_caption("Wyrm")
        font = pygame.font.SysFont(None, 28)
        self.session.render()
        try:
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.draw(screen, font)
                pygame.display.flip()
                await asyncio.sleep(1 / FPS)
        finally:
            await self.session.aclose()
            pygame.quit()


def run(config: GameConfig | None = None) -> None:
    """Open the game window and block until it is closed."""
    asyncio.run(WyrmWindow(config).run_async())
