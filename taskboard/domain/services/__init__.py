"""
Domain services for the task board.
"""

from .position_service import PositionService

__all__ = [
    "PositionService",
]
