"""Tile-based collect-and-escape puzzle game with a map editor and XPM reader."""

__version__ = "0.1.0"
__all__ = ["colors", "text", "xpm", "mapcheck", "game", "editor", "app"]