"""Donkey (Old Maid) game engine and WebSocket server."""

__version__ = "1.0.0"
