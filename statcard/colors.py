"""Language name -> hex color, as published by GitHub linguist."""

from __future__ import annotations
import functools
import json
from typing import Dict

from . import config

DEFAULT_COLOR = "#000000"


@functools.lru_cache(maxsize=None)
def load_language_colors() -> Dict[str, str]:
    with open(config.LANGUAGE_COLORS_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def language_color(language: str) -> str:
    return load_language_colors().get(language) or DEFAULT_COLOR
