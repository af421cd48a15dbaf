"""Locate and read the CSS theme files that hold layout and colour defaults."""
import re
from pathlib import Path
from typing import List

THEMES_DIR = Path(__file__).parent / "themes"

# Bare names only, so a theme can never resolve outside THEMES_DIR
_THEME_NAME = re.compile(r"^[A-Za-z0-9_-]+$")


def theme_path(theme: str) -> Path:
    if not _THEME_NAME.match(theme):
        raise ValueError(f"Invalid theme name: {theme!r}")
    return THEMES_DIR / f"{theme}.css"


def get_css(theme: str = "default") -> str:
    """
    Read the stylesheet for *theme*.

    Raises:
        ValueError: the name contains anything besides letters, digits, ``-`` and ``_``
        FileNotFoundError: no ``themes/<theme>.css`` ships with the package
    """
    path = theme_path(theme)
    if not path.is_file():
        raise FileNotFoundError(
            f"Theme '{theme}' not found. Available themes: {', '.join(list_available_themes())}"
        )
    return path.read_text(encoding="utf-8")


def list_available_themes() -> List[str]:
    return sorted(p.stem for p in THEMES_DIR.glob("*.css") if p.is_file())


def validate_theme(theme: str) -> bool:
    """True when *theme* names a stylesheet that ships with the package."""
    try:
        return theme_path(theme).is_file()
    except ValueError:
        return False
