"""
Timeline Palette
================

Theme-derived axis colors and per-event color resolution.

Colors are plain CSS color strings (HSL for generated palettes, hex for
event-type registries). The engine only hands them through as color
tokens; painting is the rendering surface's job.
"""

from __future__ import annotations
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..contracts.events import (
    DEFAULT_THEME_COLOR, EventTypeConfig, TimelineEvent, TimelineTheme
)


# (base hue, saturation %, lightness %)
THEME_COLORS: Dict[TimelineTheme, Tuple[int, int, int]] = {
    TimelineTheme.TEAL: (170, 60, 45),
    TimelineTheme.BLUE: (210, 70, 50),
    TimelineTheme.PURPLE: (270, 60, 50),
    TimelineTheme.ORANGE: (25, 80, 50),
    TimelineTheme.GREEN: (140, 60, 45),
    TimelineTheme.RAINBOW: (0, 70, 50),
    TimelineTheme.MONOCHROME: (0, 0, 50),
}


def _fmt(value: float) -> str:
    # 12.0 -> "12", 12.5 -> "12.5"
    return f"{value:g}"


def generate_timeline_colors(
    count: int,
    theme: TimelineTheme = TimelineTheme.TEAL
) -> List[str]:
    """
    Generate count HSL colors for a theme.

    rainbow spreads hues around the wheel, monochrome ramps lightness,
    every other theme wobbles hue/saturation/lightness around its base so
    neighbouring years stay distinguishable.
    """
    base, saturation, lightness = THEME_COLORS.get(theme, THEME_COLORS[TimelineTheme.TEAL])
    colors = []

    for i in range(max(0, count)):
        if theme == TimelineTheme.RAINBOW:
            hue = (i * 360 / count) % 360
            colors.append(f"hsl({_fmt(hue)}, {saturation}%, {lightness}%)")
        elif theme == TimelineTheme.MONOCHROME:
            ramp = 30 + (i * 40 / count)
            colors.append(f"hsl(0, 0%, {_fmt(ramp)}%)")
        else:
            hue = (base + (i % 3) * 10 - 10) % 360
            sat = saturation + (i % 2) * 10
            light = lightness + (i % 2) * 8
            colors.append(f"hsl({hue}, {sat}%, {light}%)")

    return colors


def timeline_gradient(colors: Sequence[str]) -> str:
    """CSS gradient spanning the given colors left to right."""
    if not colors:
        return ""
    if len(colors) == 1:
        return colors[0]

    stops = []
    last = len(colors) - 1
    for index, color in enumerate(colors):
        stops.append(f"{color} {_fmt(round(index / last * 100, 4))}%")
    return f"linear-gradient(to right, {', '.join(stops)})"


def resolve_event_color(
    event: TimelineEvent,
    year_index: int,
    palette: Sequence[str],
    event_types: Optional[Mapping[str, EventTypeConfig]] = None,
    fallback: str = DEFAULT_THEME_COLOR
) -> str:
    """
    Color token of an event.

    Explicit type styling wins. Otherwise the palette is indexed by the
    event's distinct-year index, so same-year events share a hue.
    """
    if event_types and event.type in event_types:
        return event_types[event.type].color
    if palette:
        return palette[year_index % len(palette)]
    return fallback
