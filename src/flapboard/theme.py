"""Textual theme for flapboard."""

from __future__ import annotations

from textual.theme import Theme

# Departure hall at night: matte black flaps, warm white glyphs, amber accents
FLAPBOARD_THEME = Theme(
    name="flapboard",
    primary="#f2b233",  # Signal Amber - gate change highlights
    secondary="#e8e4d8",  # Flap White - printed glyphs
    accent="#ffcf5c",
    foreground="#d9d6cc",
    background="#0b0b0c",  # Hall Black
    surface="#16171a",  # Flap Face
    panel="#202226",
    warning="#f2b233",
    error="#e0533d",  # Cancelled Red
    success="#5fb36b",  # Boarding Green
    dark=True,
    variables={
        "border": "#2c2e33",
        "border-blurred": "#2c2e3380",
        "text-muted": "#6b6e75",
        "text-disabled": "#6b6e7580",
        "input-cursor-foreground": "#0b0b0c",
        "input-cursor-background": "#f2b233",
        "footer-key-foreground": "#6b6e75",
        "footer-key-background": "transparent",
        "button-color-foreground": "#0b0b0c",
    },
)
