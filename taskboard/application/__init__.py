"""
Application layer: DTOs and use cases that orchestrate the domain.
"""
