"""Colour handling for fretboard dots.

When several shapes land on one cell in the all-shapes view, the cell is
styled from their colours: one shape is a flat fill, two are a hard 50/50
split and three or more become equal vertical bands. Bands always follow
CAGED order, never the order the shapes were found in.
"""

import colorsys
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from PIL import ImageColor

from .catalog import CAGED_SEQUENCE, Quality, Shape, get_shape, parse_shape
from .errors import InvalidConfiguration

RGB = Tuple[int, int, int]

SOLID = 'solid'
SPLIT = 'split'
BANDS = 'bands'


def parse_color(c, default=None) -> Optional[RGB]:
    if c is None:
        return default
    if isinstance(c, tuple):
        return c[:3]
    try:
        return ImageColor.getrgb(c)[:3]
    except ValueError:
        return default


def _unit(x: float) -> float:
    return min(1.0, max(0.0, x))


def adjust_hsl(rgb: RGB, sat_mult=1.0, light_add=0.0) -> RGB:
    """Scale saturation and shift lightness, used to mute overlay cells."""
    hue, light, sat = colorsys.rgb_to_hls(*(v / 255.0 for v in rgb))
    muted = colorsys.hls_to_rgb(hue, _unit(light + light_add), _unit(sat * sat_mult))
    return tuple(int(round(v * 255)) for v in muted)


@dataclass(frozen=True)
class StyleDescriptor:
    kind: str
    shapes: Tuple[Shape, ...]
    colors: Tuple[str, ...]
    stops: Tuple[Tuple[str, float, float], ...]

    @property
    def rgb(self) -> List[RGB]:
        return [parse_color(c) for c in self.colors]

    def css(self) -> str:
        if self.kind == SOLID:
            return f"background-color: {self.colors[0]}"
        parts = ', '.join(f"{c} {start:g}%, {c} {end:g}%" for c, start, end in self.stops)
        return f"background: linear-gradient(90deg, {parts})"


def caged_order(shapes: Iterable[Union[Shape, str]]) -> Tuple[Shape, ...]:
    """Deduplicate and sort shapes into C-A-G-E-D order."""
    present = {parse_shape(s) for s in shapes}
    return tuple(s for s in CAGED_SEQUENCE if s in present)


def resolve_style(shapes: Iterable[Union[Shape, str]], quality=Quality.MAJOR) -> StyleDescriptor:
    ordered = caged_order(shapes)
    if not ordered:
        raise InvalidConfiguration("Cannot style a cell with no shapes")

    colors = tuple(get_shape(s, quality).color for s in ordered)
    n = len(colors)
    stops = tuple((c, i * 100 / n, (i + 1) * 100 / n) for i, c in enumerate(colors))

    if n == 1:
        kind = SOLID
    elif n == 2:
        kind = SPLIT
    else:
        kind = BANDS
    return StyleDescriptor(kind=kind, shapes=ordered, colors=colors, stops=stops)
