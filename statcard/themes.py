"""
Theme registry.

Every ``assets/themes/<kebab-name>.css`` file is a theme; its public
identifier is the file stem lowercased with hyphens turned into
underscores (``transparent-blue.css`` -> ``transparent_blue``). The
directory is read once per process.
"""

from __future__ import annotations
import functools
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping

from . import config
from .errors import UnknownTheme

DEFAULT_THEME = "transparent_blue"
ERROR_THEME = "light"


def theme_id(stem: str) -> str:
    return stem.lower().replace("-", "_")


def theme_title(name: str) -> str:
    return " ".join(part.capitalize() for part in name.split("_"))


@functools.lru_cache(maxsize=None)
def load_themes(themes_dir: Path = config.THEMES_DIR) -> Mapping[str, str]:
    themes = {}
    for path in sorted(themes_dir.glob("*.css")):
        themes[theme_id(path.stem)] = path.read_text(encoding="utf-8")
    if not themes:
        raise RuntimeError(f"No .css themes found in {themes_dir}")
    return MappingProxyType(themes)


@functools.lru_cache(maxsize=None)
def base_css() -> str:
    return config.BASE_CSS_PATH.read_text(encoding="utf-8")


def theme_names() -> List[str]:
    return list(load_themes())


def get_theme_css(name: str) -> str:
    themes = load_themes()
    try:
        return themes[name]
    except KeyError:
        raise UnknownTheme(name, themes) from None
