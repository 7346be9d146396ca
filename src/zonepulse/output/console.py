"""Rich Console factory and theme for zonepulse output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PULSE_THEME = Theme(
    {
        "pulse.ok": "bold green",
        "pulse.error": "bold red",
        "pulse.warning": "bold yellow",
        "pulse.op": "bold cyan",
        "pulse.key": "dim",
        "pulse.id": "bold blue",
        "pulse.zone": "bold",
        "pulse.value": "magenta",
        "pulse.up": "green",
        "pulse.down": "red",
        "pulse.source.external-index": "cyan",
        "pulse.source.external-survey": "blue",
        "pulse.source.external-sale-record": "yellow",
        "pulse.source.derived": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=PULSE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_source(source_kind: str) -> str:
    """Rich style name for a layer source kind."""
    style = f"pulse.source.{source_kind}"
    return style if style in PULSE_THEME.styles else ""


def score_style(score: float) -> str:
    """Green for strong, red for weak, plain in between."""
    if score >= 70:
        return "pulse.up"
    if score < 40:
        return "pulse.down"
    return ""
