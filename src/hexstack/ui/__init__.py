"""hexstack UI components."""

from hexstack.ui.theme import HexTheme, THEME, Symbols

__all__ = [
    "HexTheme",
    "THEME",
    "Symbols",
]
