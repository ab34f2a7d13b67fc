"""Frame composition and Pillow rasterization.

:func:`compose_frame` projects an :class:`~wyrm.engine.EngineSnapshot` onto a
list of drawing primitives without touching engine state. :func:`rasterize`
turns a :class:`Frame` into a Pillow image.
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFont

from wyrm.creature import Direction
from wyrm.engine import EngineSnapshot
from wyrm.food import FoodItem, FoodKind
from wyrm.geometry import GridGeometry

Color = tuple[int, int, int, int]
Point = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    box: tuple[float, float, float, float]
    fill: Color
    outline: Color | None = None
    radius: float = 0


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point
    color: Color
    width: int = 1


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float
    fill: Color


@dataclass(frozen=True)
class Text:
    position: Point
    text: str
    color: Color


Shape = Rect | Line | Circle | Text


@dataclass(frozen=True)
class Frame:
    """One visual state: pixel size, shapes in paint order, and the score."""

    size: tuple[int, int]
    shapes: tuple[Shape, ...]
    score: int

    def shapes_of(self, kind: type) -> list:
        return [s for s in self.shapes if isinstance(s, kind)]


@dataclass(frozen=True)
class Theme:
    """Celtic palette. Food colours are ``(kind, colour)`` pairs."""

    background: Color = (13, 31, 13, 255)
    grid_line: Color = (45, 90, 39, 51)
    head_fill: Color = (212, 175, 55, 255)
    head_outline: Color = (255, 215, 0, 128)
    body_fill: tuple[int, int, int] = (45, 90, 39)
    body_outline: Color = (212, 175, 55, 77)
    eye: Color = (139, 0, 0, 255)
    eye_shine: Color = (255, 255, 255, 128)
    glow: Color = (212, 175, 55, 40)
    score_text: Color = (212, 175, 55, 255)
    food: tuple[tuple[FoodKind, Color], ...] = (
        (FoodKind.APPLE, (200, 40, 40, 255)),
        (FoodKind.SHAMROCK, (60, 179, 113, 255)),
        (FoodKind.MISTLETOE, (230, 230, 210, 255)),
    )

    def food_color(self, kind: FoodKind) -> Color:
        return dict(self.food)[kind]


DEFAULT_THEME = Theme()


def eye_positions(
    origin: tuple[int, int], heading: Direction, cell_size: int,
) -> tuple[Point, Point]:
    """Place two eyes on the leading edge of the head cell."""
    x, y = origin
    along = cell_size / 4
    across = cell_size * 0.3
    if heading is Direction.RIGHT:
        return (x + cell_size - along, y + across), (x + cell_size - along, y + cell_size - across)
    if heading is Direction.LEFT:
        return (x + along, y + across), (x + along, y + cell_size - across)
    if heading is Direction.UP:
        return (x + across, y + along), (x + cell_size - across, y + along)
    return (x + across, y + cell_size - along), (x + cell_size - across, y + cell_size - along)


def _grid_lines(geometry: GridGeometry, theme: Theme) -> list[Shape]:
    width_px, height_px = geometry.pixel_size
    s = geometry.cell_size
    lines: list[Shape] = [
        Line((x * s, 0), (x * s, height_px), theme.grid_line)
        for x in range(geometry.width + 1)
    ]
    lines.extend(
        Line((0, y * s), (width_px, y * s), theme.grid_line)
        for y in range(geometry.height + 1)
    )
    return lines


def _food_shapes(food: FoodItem, geometry: GridGeometry, theme: Theme) -> list[Shape]:
    """A translucent glow square two cells wide, then the marker disc."""
    s = geometry.cell_size
    x, y = geometry.cell_origin(food.cell)
    return [
        Rect((x - s / 2, y - s / 2, x + s * 1.5, y + s * 1.5), theme.glow),
        Circle((x + s / 2, y + s / 2), s / 2 - 2, theme.food_color(food.kind)),
    ]


def _segment_box(origin: tuple[int, int], cell_size: int) -> tuple[float, float, float, float]:
    x, y = origin
    return x + 1, y + 1, x + cell_size - 2, y + cell_size - 2


def _creature_shapes(snapshot: EngineSnapshot, geometry: GridGeometry, theme: Theme) -> list[Shape]:
    """Body segments tail first, then the head and its eyes on top."""
    s = geometry.cell_size
    length = len(snapshot.creature)
    shapes: list[Shape] = []
    for index in range(length - 1, 0, -1):
        box = _segment_box(geometry.cell_origin(snapshot.creature[index]), s)
        # Segments fade towards the tail.
        intensity = 1 - (index / length) * 0.4
        fill = (*theme.body_fill, round(255 * intensity))
        shapes.append(Rect(box, fill, theme.body_outline, radius=4))

    head_origin = geometry.cell_origin(snapshot.head)
    shapes.append(
        Rect(_segment_box(head_origin, s), theme.head_fill, theme.head_outline, radius=4),
    )
    eye_radius = s * 0.15
    for ex, ey in eye_positions(head_origin, snapshot.heading, s):
        shapes.append(Circle((ex, ey), eye_radius, theme.eye))
        shapes.append(Circle((ex - 1, ey - 1), 1, theme.eye_shine))
    return shapes


def compose_frame(
    snapshot: EngineSnapshot,
    geometry: GridGeometry,
    theme: Theme = DEFAULT_THEME,
    show_grid: bool = True,
) -> Frame:
    """Project a snapshot onto drawing primitives."""
    width_px, height_px = geometry.pixel_size
    shapes: list[Shape] = [Rect((0, 0, width_px, height_px), theme.background)]
    if show_grid:
        shapes.extend(_grid_lines(geometry, theme))
    if snapshot.food is not None:
        shapes.extend(_food_shapes(snapshot.food, geometry, theme))
    shapes.extend(_creature_shapes(snapshot, geometry, theme))
    shapes.append(Text((8, 6), f"Score: {snapshot.score}", theme.score_text))
    return Frame(size=(width_px, height_px), shapes=tuple(shapes), score=snapshot.score)


def rasterize(frame: Frame) -> Image.Image:
    """Paint a frame onto a new RGB Pillow image."""
    img = Image.new("RGB", frame.size)
    draw = ImageDraw.Draw(img, "RGBA")
    font = ImageFont.load_default()
    for shape in frame.shapes:
        if isinstance(shape, Rect):
            if shape.radius:
                draw.rounded_rectangle(
                    shape.box, radius=shape.radius,
                    fill=shape.fill, outline=shape.outline, width=1,
                )
            else:
                draw.rectangle(shape.box, fill=shape.fill, outline=shape.outline)
        elif isinstance(shape, Line):
            draw.line([shape.start, shape.end], fill=shape.color, width=shape.width)
        elif isinstance(shape, Circle):
            cx, cy = shape.center
            r = shape.radius
            draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=shape.fill)
        elif isinstance(shape, Text):
            draw.text(shape.position, shape.text, fill=shape.color, font=font)
    return img
