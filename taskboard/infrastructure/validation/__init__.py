"""
Input validation package.
"""

from .validators import SecurityValidator, DataValidator, BoardValidator

__all__ = [
    'SecurityValidator',
    'DataValidator',
    'BoardValidator',
]
