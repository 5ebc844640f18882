"""
Taskboard - a Kanban board backend.

Boards hold ordered columns, columns hold ordered tasks. Ordering is kept
dense and unique per parent by the position logic in the domain services.
"""

__version__ = "1.0.0"
