"""Session lifecycle and the async tick loop."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Callable

import numpy as np

from wyrm.config import GameConfig
from wyrm.engine import SimulationEngine, TickResult
from wyrm.render import DEFAULT_THEME, Frame, Theme, compose_frame

logger = logging.getLogger(__name__)


class SessionState(str, enum.Enum):
    """Lifecycle states for a game session."""

    IDLE = "idle"
    RUNNING = "running"
    OVER = "over"


class SessionController:
    """Owns the session state machine and the periodic tick task.

    Input channels call :meth:`post_direction`; the tick task advances the
    engine every ``config.tick_interval_ms`` and publishes a frame through
    ``on_frame``. A collision ends the session and reports the final score
    through ``on_game_over``.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        on_frame: Callable[[Frame], None] | None = None,
        on_game_over: Callable[[int], None] | None = None,
        rng: np.random.Generator | None = None,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.geometry = self.config.geometry()
        self.theme = theme
        self.on_frame = on_frame
        self.on_game_over = on_game_over
        self.engine = SimulationEngine(
            self.geometry,
            rng=rng if rng is not None else np.random.default_rng(self.config.seed),
            max_spawn_attempts=self.config.max_spawn_attempts,
            initial_length=self.config.initial_length,
        )
        self.state = SessionState.IDLE
        self.final_score: int | None = None
        self.last_result: TickResult | None = None
        self.frame: Frame | None = None
        self._task: asyncio.Task | None = None

    @property
    def score(self) -> int:
        return self.engine.score

    @property
    def timer_active(self) -> bool:
        """Whether a tick task is currently scheduled."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the first session. Must run inside an event loop."""
        if self.state is not SessionState.IDLE:
            raise RuntimeError("Session has already been started.")
        self._begin()
        logger.info("Session started.")

    def restart(self) -> None:
        """Reinitialize the engine and resume ticking with a single timer."""
        if self.state is SessionState.IDLE:
            raise RuntimeError("Session has not been started yet.")
        self.stop()
        self._begin()
        logger.info("Session restarted.")

    def post_direction(self, token: object) -> bool:
        """Queue a direction request from any input channel.

        Returns False when the request was dropped, either because no
        session is running or because the token was not recognized.
        """
        if self.state is not SessionState.RUNNING:
            return False
        return self.engine.queue.post(token)

    def tick(self) -> TickResult | None:
        """Run one timer fire: advance, render, and handle game over.

        Once the session is over the last result is returned unchanged; it is
        ``None`` only when the tick loop failed before any tick completed.
        """
        if self.state is SessionState.IDLE:
            raise RuntimeError("Session has not been started yet.")
        if self.state is SessionState.OVER:
            return self.last_result
        result = self.engine.advance_tick()
        self.last_result = result
        self.render()
        if result.collided:
            self._finish()
        return result

    def render(self) -> Frame:
        """Compose the current frame and hand it to ``on_frame``."""
        self.frame = compose_frame(
            self.engine.snapshot(),
            self.geometry,
            theme=self.theme,
            show_grid=self.config.show_grid,
        )
        if self.on_frame is not None:
            self.on_frame(self.frame)
        return self.frame

    def stop(self) -> None:
        """Cancel the tick task if one is scheduled."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    async def aclose(self) -> None:
        """Cancel the tick task and wait for it to finish."""
        task = self._task
        self.stop()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    def _begin(self) -> None:
        loop = asyncio.get_running_loop()
        self.engine.reset()
        self.final_score = None
        self.last_result = None
        self.state = SessionState.RUNNING
        self.render()
        self._task = loop.create_task(self._tick_loop())

    async def _tick_loop(self) -> None:
        """Tick at a fixed interval until the session leaves RUNNING."""
        interval = self.config.tick_interval
        try:
            while self.state is SessionState.RUNNING:
                await asyncio.sleep(interval)
                if self.state is not SessionState.RUNNING:
                    break
                self.tick()
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled.")
        except Exception:
            logger.exception("Tick loop error; ending session.")
            self._finish()

    def _finish(self) -> None:
        """Transition to OVER exactly once."""
        if self.state is SessionState.OVER:
            return
        self.state = SessionState.OVER
        self.final_score = self.engine.score
        logger.info(
            "Game over after %d ticks with score %d.",
            self.engine.tick, self.final_score,
        )
        if self.on_game_over is not None:
            self.on_game_over(self.final_score)
