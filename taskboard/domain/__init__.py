"""
Domain layer for the task board.

Entities, repository interfaces and pure domain services. Nothing in this
package knows about the database or the web framework.
"""
