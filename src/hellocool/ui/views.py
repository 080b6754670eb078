"""The two Hello World views."""

from __future__ import annotations

import logging
import time

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from hellocool.utils.formatting import RGB, gradient_text, interpolate, rgb_style

logger = logging.getLogger(__name__)

BLACK: RGB = (0, 0, 0)
WHITE: RGB = (255, 255, 255)
BLUE: RGB = (0, 122, 255)
CYAN: RGB = (50, 173, 230)
INDIGO: RGB = (88, 86, 214)
PURPLE: RGB = (175, 82, 222)
PINK: RGB = (255, 45, 85)

COOL_TITLE = "Hello World Cool"
COOL_SUBTITLE = "Built without Xcode GUI"
FULL_SCREEN_TITLE = "Hello World"

TITLE_COLORS = [BLUE, PURPLE, PINK]
BACKDROP_COLORS = [BLACK, INDIGO, PURPLE]
FULL_SCREEN_TITLE_COLORS = [WHITE, CYAN]


def hello_world_cool() -> Panel:
    """Gradient title and a muted subtitle in a padded box."""
    title = gradient_text(COOL_TITLE, TITLE_COLORS)
    subtitle = Text(COOL_SUBTITLE, style="dim")
    body = Group(Align.center(title), Text(""), Align.center(subtitle))
    return Panel(body, padding=(2, 6), expand=False)


def hello_full_screen(width: int, height: int) -> Group:
    """Title over a diagonal black-indigo-purple backdrop filling width x height."""
    width = max(width, len(FULL_SCREEN_TITLE) + 2)
    height = max(height, 3)
    title_row = height // 2
    title_start = (width - len(FULL_SCREEN_TITLE)) // 2
    title = gradient_text(FULL_SCREEN_TITLE, FULL_SCREEN_TITLE_COLORS)

    rows: list[Text] = []
    for y in range(height):
        row = Text(no_wrap=True, overflow="crop")
        for x in range(width):
            bg = rgb_style(interpolate(BACKDROP_COLORS, (x / (width - 1) + y / (height - 1)) / 2))
            offset = x - title_start
            if y == title_row and 0 <= offset < len(FULL_SCREEN_TITLE):
                span_style = title.spans[offset].style
                row.append(FULL_SCREEN_TITLE[offset], style=f"{span_style} on {bg}")
            else:
                row.append(" ", style=f"on {bg}")
        rows.append(row)
    return Group(*rows)


def show_full_screen(console: Console, delay: float, hold: float | None = None) -> None:
    """Show the view, then switch to the alternate screen after ``delay`` seconds."""
    console.print(hello_full_screen(console.width, 9))
    time.sleep(max(delay, 0.0))

    logger.debug("Entering full screen (%dx%d)", console.width, console.height)
    try:
        with console.screen(hide_cursor=True):
            console.print(hello_full_screen(console.width, console.height - 1), end="")
            if hold is None:
                while True:
                    time.sleep(1)
            else:
                time.sleep(max(hold, 0.0))
    except KeyboardInterrupt:
        pass
