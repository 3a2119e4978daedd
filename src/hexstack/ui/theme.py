"""Terminal theme for hexstack output."""

from dataclasses import dataclass
from rich.style import Style
from rich.theme import Theme


@dataclass
class HexTheme:
    """Color palette."""

    PRIMARY = "#00BFFF"      # Deep sky blue - headings, names
    ACCENT = "#FF7F50"       # Coral - template names

    SUCCESS = "#00D75F"
    WARNING = "#FFB000"
    ERROR = "#FF0040"

    TEXT_DIM = "#808080"


THEME = Theme({
    "title": Style(color=HexTheme.PRIMARY, bold=True),
    "primary": Style(color=HexTheme.PRIMARY),
    "accent": Style(color=HexTheme.ACCENT, bold=True),

    "success": Style(color=HexTheme.SUCCESS, bold=True),
    "warning": Style(color=HexTheme.WARNING),
    "error": Style(color=HexTheme.ERROR, bold=True),

    "text.dim": Style(color=HexTheme.TEXT_DIM),
})


class Symbols:
    """Terminal symbols for status display."""

    COMPLETE = "✓"
    FAILED = "✗"
    BULLET = "•"
    PACKAGE = "📦"
    PARTY = "🎉"
