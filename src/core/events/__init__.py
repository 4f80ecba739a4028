"""
Event System - synchronous observer signals.

Usage:
    from src.core.events import Signal

    drag_started = Signal("DragStarted")
    drag_started.connect(on_drag_started)
    drag_started.emit(link)
"""
from .observer import Signal


__all__ = ["Signal"]
