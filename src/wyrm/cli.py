"""Command-line launcher for Wyrm."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from wyrm.config import GameConfig

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wyrm",
        description="Wyrm, a Celtic serpent game.",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- play ---
    play_p = sub.add_parser("play", help="Open the game window.")
    play_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    play_p.add_argument("--tick-ms", type=int, default=None)
    play_p.add_argument("--seed", type=int, default=None)

    # --- render ---
    render_p = sub.add_parser(
        "render", help="Play scripted moves headlessly and save the last frame.",
    )
    render_p.add_argument("output", help="Path for the PNG image.")
    render_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    render_p.add_argument(
        "--moves", type=str, default="",
        help="Comma-separated moves, one per tick (e.g. 'up,up,left').",
    )
    render_p.add_argument(
        "--ticks", type=int, default=None,
        help="Ticks to run (defaults to the number of moves).",
    )
    render_p.add_argument("--seed", type=int, default=None)
    render_p.add_argument("--no-grid", action="store_true")

    return parser


def _load_config(args: argparse.Namespace, **overrides: object) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()
    return config.with_overrides(**overrides)


def _run_play(args: argparse.Namespace) -> int:
    from wyrm.app import run

    config = _load_config(args, tick_interval_ms=args.tick_ms, seed=args.seed)
    run(config)
    return 0


def _run_render(args: argparse.Namespace) -> int:
    import numpy as np

    from wyrm.engine import SimulationEngine, TickResult
    from wyrm.render import compose_frame, rasterize

    config = _load_config(
        args, seed=args.seed, show_grid=False if args.no_grid else None,
    )
    moves = [m for m in args.moves.split(",") if m.strip()]
    ticks = args.ticks if args.ticks is not None else len(moves)

    geometry = config.geometry()
    engine = SimulationEngine(
        geometry,
        rng=np.random.default_rng(config.seed),
        max_spawn_attempts=config.max_spawn_attempts,
        initial_length=config.initial_length,
    )
    result = TickResult.CONTINUE
    for i in range(ticks):
        if i < len(moves) and not engine.queue.post(moves[i]):
            logger.warning("Ignoring unrecognized move %r.", moves[i])
        result = engine.advance_tick()
        if result.collided:
            break

    frame = compose_frame(engine.snapshot(), geometry, show_grid=config.show_grid)
    rasterize(frame).save(args.output)
    logger.info("Frame written to %s", args.output)

    summary = {
        "result": result.value,
        "ticks": engine.tick,
        "score": engine.score,
        "length": len(engine.creature),
    }
    print(json.dumps(summary))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``wyrm`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "play": _run_play,
        "render": _run_render,
    }
    try:
        return handlers[args.command](args)
    except (OSError, ValidationError, ValueError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
