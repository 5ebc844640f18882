"""
Infrastructure layer for the task board.

Implementation details for external systems:
- Database (SQLAlchemy, SQLite or PostgreSQL)
- Repository implementations and entity mappers
- Field validation helpers
- HTTP API (FastAPI)

The infrastructure layer implements the interfaces defined in the domain
layer.
"""
