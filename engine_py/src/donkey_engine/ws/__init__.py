"""
WebSocket server and event handling for the Donkey game.
"""

from .server import app

__all__ = ["app"]
