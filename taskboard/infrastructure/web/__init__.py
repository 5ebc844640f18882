"""
HTTP layer: FastAPI routers, dependencies and error handling.
"""
