"""GitHub stat cards: SVG summaries of a user's public activity."""

__version__ = "0.1.0"
