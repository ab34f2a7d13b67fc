"""Wyrm: a Celtic serpent game."""

from wyrm.config import GameConfig
from wyrm.controls import DirectionQueue, classify_swipe, request_direction
from wyrm.creature import Creature, Direction
from wyrm.engine import EngineSnapshot, SimulationEngine, TickResult
from wyrm.food import FoodItem, FoodKind, FoodSpawner
from wyrm.geometry import GridGeometry, grid_dimensions
from wyrm.render import Frame, compose_frame, rasterize
from wyrm.session import SessionController, SessionState

__all__ = [
    "Creature",
    "Direction",
    "DirectionQueue",
    "EngineSnapshot",
    "FoodItem",
    "FoodKind",
    "FoodSpawner",
    "Frame",
    "GameConfig",
    "GridGeometry",
    "SessionController",
    "SessionState",
    "SimulationEngine",
    "TickResult",
    "classify_swipe",
    "compose_frame",
    "grid_dimensions",
    "rasterize",
    "request_direction",
]
