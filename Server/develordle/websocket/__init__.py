"""
WebSocket Package

Socket.IO event handlers for real-time play.
"""

from .handlers import play_feedback, register_websocket_handlers

__all__ = ['play_feedback', 'register_websocket_handlers']
