"""Result formatting and colour helpers for the terminal views."""

from __future__ import annotations

from collections.abc import Sequence

from rich.panel import Panel
from rich.text import Text

from hellocool.models import CommandResult, CommandStatus

RGB = tuple[int, int, int]

STATUS_STYLES: dict[CommandStatus, str] = {
    CommandStatus.IDLE: "dim",
    CommandStatus.RUNNING: "yellow",
    CommandStatus.SUCCEEDED: "green",
    CommandStatus.FAILED: "red",
}


def format_duration(ms: int) -> str:
    """Format milliseconds to human-readable duration."""
    if ms < 1000:
        return f"{ms}ms"
    elif ms < 60000:
        return f"{ms / 1000:.1f}s"
    else:
        minutes = ms // 60000
        seconds = (ms % 60000) // 1000
        return f"{minutes}m {seconds}s"


def status_label(result: CommandResult) -> str:
    if result.status is CommandStatus.SUCCEEDED:
        return "OK"
    if result.status is CommandStatus.FAILED:
        if result.exit_code is not None:
            return f"ERR({result.exit_code})"
        return f"ERR({result.failure.value if result.failure else 'failed'})"
    return result.status.value.upper()


def result_panel(result: CommandResult) -> Panel:
    """Rich panel for the command panel's result slot."""
    style = STATUS_STYLES[result.status]
    title = f"[{style}]{status_label(result)}[/{style}]"
    if result.is_terminal:
        title += f" [dim]{format_duration(result.elapsed_ms)}[/dim]"
    body = Text(result.text or "No command run yet.")
    return Panel(body, title=title, subtitle=Text(result.command) if result.command else None, border_style=style)


def interpolate(colors: Sequence[RGB], t: float) -> RGB:
    """Colour at position ``t`` (0..1) along evenly spaced gradient stops."""
    if len(colors) == 1:
        return colors[0]
    t = min(max(t, 0.0), 1.0)
    span = t * (len(colors) - 1)
    index = min(int(span), len(colors) - 2)
    local = span - index
    start, end = colors[index], colors[index + 1]
    return (
        round(start[0] + (end[0] - start[0]) * local),
        round(start[1] + (end[1] - start[1]) * local),
        round(start[2] + (end[2] - start[2]) * local),
    )


def rgb_style(color: RGB) -> str:
    return f"rgb({color[0]},{color[1]},{color[2]})"


def gradient_text(text: str, colors: Sequence[RGB], bold: bool = True) -> Text:
    """Colour each character along a left-to-right gradient."""
    result = Text()
    last = max(len(text) - 1, 1)
    for i, char in enumerate(text):
        style = rgb_style(interpolate(colors, i / last))
        result.append(char, style=f"bold {style}" if bold else style)
    return result
