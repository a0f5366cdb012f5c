from __future__ import annotations

from typing import Dict

THEMES: Dict[str, Dict[str, str]] = {
    "light": {
        "--theme-app-bg": "white",
        "--theme-app-fg": "#111",
        "--theme-app-border": "#cbcbcb",
        "--theme-primary-bg": "#f6f6f6",
        "--theme-primary-fg": "rgba(0, 0, 0, 0.87)",
        "--theme-cell-bg": "white",
        "--theme-cell-prompt-bg": "#fafafa",
        "--theme-cell-prompt-fg": "hsl(0, 0%, 47%)",
        "--theme-cell-input-bg": "#fafafa",
        "--theme-cell-output-bg": "white",
        "--theme-raw-stripe-a": "#efefef",
        "--theme-raw-stripe-b": "#f1f1f1",
    },
    "dark": {
        "--theme-app-bg": "#2b2b2b",
        "--theme-app-fg": "#eee",
        "--theme-app-border": "#111",
        "--theme-primary-bg": "#111",
        "--theme-primary-fg": "rgba(255, 255, 255, 0.87)",
        "--theme-cell-bg": "#2b2b2b",
        "--theme-cell-prompt-bg": "#111",
        "--theme-cell-prompt-fg": "rgba(255, 255, 255, 0.54)",
        "--theme-cell-input-bg": "#222",
        "--theme-cell-output-bg": "#2b2b2b",
        "--theme-raw-stripe-a": "#333",
        "--theme-raw-stripe-b": "#363636",
    },
}

DEFAULT_THEME = "light"


def check_theme(theme: str) -> str:
    if theme not in THEMES:
        raise ValueError(f"Unknown theme {theme!r}; expected one of {sorted(THEMES)}")
    return theme


def global_style(theme: str = DEFAULT_THEME) -> str:
    """Return the :root block that selects the theme's CSS variables."""
    variables = THEMES[check_theme(theme)]
    body = "\n".join(f"  {k}: {v};" for k, v in variables.items())
    return ":root {\n" + body + "\n}\n"
