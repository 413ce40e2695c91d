"""
theme.py - Centralized theme with dark/light mode support.

All colors and styling constants for the checker and generator windows live
here so both screens stay visually consistent. toggle_mode() swaps the
palette; widgets pick it up the next time they're built.
"""

from passval.entropy import strength_label

# Current mode: "dark" or "light"
_current_mode = "dark"

DARK = {
    # Backgrounds
    "bg_primary": "#0f1117",
    "bg_card": "#1c2333",
    "bg_input": "#232b3e",

    # Accent
    "accent": "#4f8ff7",
    "accent_hover": "#3a7ae0",

    # Status
    "success": "#3fb950",
    "error": "#f85149",
    "warning": "#d29922",

    # Text
    "text_primary": "#e6edf3",
    "text_secondary": "#8b949e",
    "text_muted": "#484f58",

    # Borders
    "border": "#30363d",

    # Strength meter
    "strength_very_weak": "#f85149",
    "strength_weak": "#f0883e",
    "strength_moderate": "#d29922",
    "strength_strong": "#3fb950",
    "strength_very_strong": "#56d364",
}

LIGHT = {
    # Backgrounds
    "bg_primary": "#ffffff",
    "bg_card": "#f6f8fa",
    "bg_input": "#eaeef2",

    # Accent
    "accent": "#0969da",
    "accent_hover": "#0550ae",

    # Status
    "success": "#1a7f37",
    "error": "#cf222e",
    "warning": "#9a6700",

    # Text
    "text_primary": "#1f2328",
    "text_secondary": "#656d76",
    "text_muted": "#8c959f",

    # Borders
    "border": "#d0d7de",

    # Strength meter
    "strength_very_weak": "#cf222e",
    "strength_weak": "#bc4c00",
    "strength_moderate": "#9a6700",
    "strength_strong": "#1a7f37",
    "strength_very_strong": "#116329",
}


def get_colors() -> dict:
    """Get the current theme's color palette."""
    return DARK if _current_mode == "dark" else LIGHT


def get_mode() -> str:
    return _current_mode


def toggle_mode() -> str:
    """Toggle between dark and light mode. Returns the new mode."""
    global _current_mode
    _current_mode = "light" if _current_mode == "dark" else "dark"
    return _current_mode


def get_score_color(score: int) -> str:
    """Get the strength meter color for a 0-100 score."""
    colors = get_colors()
    mapping = {
        "Very Weak": colors["strength_very_weak"],
        "Weak": colors["strength_weak"],
        "Moderate": colors["strength_moderate"],
        "Strong": colors["strength_strong"],
        "Very Strong": colors["strength_very_strong"],
    }
    return mapping.get(strength_label(score), colors["text_muted"])
